"""Background music: loop/trim to length, then mix under the base track."""

import logging
import shutil
from decimal import Decimal
from pathlib import Path

from medhelp.errors import (
    BackgroundPreparationFailedError,
    EngineError,
    MixingFailedError,
)

logger = logging.getLogger(__name__)

PREPARED_NAME = "background_prepared.mp3"
MIXED_NAME = "mixed_track.mp3"


def loop_count(total: Decimal, background_duration: Decimal) -> int:
    """Number of extra loops needed to cover total; 0 means trim only."""
    if background_duration <= 0:
        raise ValueError(f"Background duration must be positive: {background_duration}")
    if background_duration >= total:
        return 0
    return int(total // background_duration) + 1


def prepare_background(
    background_file: Path,
    workspace_dir: Path,
    total: Decimal,
    volume: Decimal,
    engine,
) -> Path:
    """Write a volume-scaled background of exactly `total` seconds."""
    output_path = workspace_dir / PREPARED_NAME
    try:
        bg_duration = engine.probe_duration(background_file)
        loops = loop_count(total, bg_duration)
        if loops:
            logger.info(f"Looping background ({bg_duration}s) {loops} times")
        else:
            logger.info(f"Trimming background ({bg_duration}s) to {total}s")
        engine.prepare_background(background_file, output_path, total, volume, loops)
    except (EngineError, FileNotFoundError, ValueError) as e:
        raise BackgroundPreparationFailedError("Failed to prepare background music") from e
    return output_path


def mix_background(
    base_track: Path, background: Path, output_path: Path, volume: Decimal, engine,
) -> Path:
    try:
        engine.mix(base_track, background, output_path, volume)
    except EngineError as e:
        raise MixingFailedError("Failed to mix final audio") from e
    return output_path


def remove_stale_output(output_path: Path) -> None:
    if output_path.exists():
        logger.debug(f"Removing previous output {output_path}")
        output_path.unlink()


def emit_final(track: Path, output_path: Path) -> Path:
    """Move the finished track into place, replacing any earlier run's output.

    The track is moved, not copied; a failed mix never reaches output_path.
    """
    remove_stale_output(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(track), str(output_path))
    return output_path
