"""Temporary workspace lifetime and interrupt handling."""

import atexit
import logging
import shutil
import signal
import tempfile
from contextlib import contextmanager
from pathlib import Path

from medhelp.errors import InterruptedRunError

logger = logging.getLogger(__name__)


class Workspace:
    """Scratch directory for one run, removed on every exit path.

    Lives inside the output directory so the final move stays on one
    filesystem. cleanup() may be called any number of times.
    """

    def __init__(self, parent: Path):
        self.parent = parent
        self.path: Path | None = None

    def __enter__(self) -> Path:
        self.parent.mkdir(parents=True, exist_ok=True)
        self.path = Path(tempfile.mkdtemp(prefix="temp-", dir=self.parent))
        atexit.register(self.cleanup)
        logger.debug(f"Workspace: {self.path}")
        return self.path

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
        atexit.unregister(self.cleanup)

    def cleanup(self) -> None:
        if self.path is not None and self.path.exists():
            logger.info("Cleaning up temporary files")
            try:
                shutil.rmtree(self.path)
            except OSError as e:
                logger.warning(f"Could not remove temporary files in {self.path}: {e}")


def _raise_interrupted(signum, frame):
    raise InterruptedRunError(f"Received {signal.Signals(signum).name}")


@contextmanager
def interrupt_guard():
    """Turn SIGTERM into InterruptedRunError for the duration of the block.

    SIGINT already surfaces as KeyboardInterrupt. Either way the exception
    unwinds through the workspace and any running ffmpeg child is killed
    by subprocess.run.
    """
    previous = signal.signal(signal.SIGTERM, _raise_interrupted)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)
