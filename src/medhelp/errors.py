"""Error kinds raised by medhelp."""

from pathlib import Path


class MedhelpError(Exception):
    """Base error for medhelp."""


class PrerequisiteMissingError(MedhelpError):
    """A required external executable is not installed."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is required but not installed. "
                         f"Please install {name} and try again.")


class InputDirectoryNotFoundError(MedhelpError, FileNotFoundError):
    """The input directory does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Input directory '{path}' not found.")


class NoInputFilesError(MedhelpError):
    """The input directory holds no audio files."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"No MP3 files found in '{path}'")


class MissingBackgroundFileError(MedhelpError, FileNotFoundError):
    """Background music was requested but the file is absent."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Background music file '{path}' not found.")


class InvalidUserInputError(MedhelpError, ValueError):
    """A prompt answer failed validation. Carries the hint to show."""


class EngineError(MedhelpError):
    """An ffmpeg/ffprobe invocation failed."""

    def __init__(self, cmd: list[str], returncode: int | None, stderr: str = ""):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            detail = "did not complete"
        else:
            detail = f"exited with status {returncode}"
        super().__init__(f"{cmd[0]} {detail}")


class StageError(MedhelpError):
    """A pipeline stage failed. The engine error is chained as __cause__."""


class NormalizationFailedError(StageError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Failed to process {path.name}")


class DurationProbeFailedError(StageError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Failed to read duration of {path.name}")


class ConcatenationFailedError(StageError):
    pass


class BackgroundPreparationFailedError(StageError):
    pass


class MixingFailedError(StageError):
    pass


class InterruptedRunError(MedhelpError):
    """The run received a termination signal."""


class RenameConflictError(MedhelpError):
    """Two renames target the same name, or a target already exists."""
