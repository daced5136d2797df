"""Discover input clips in natural (numeric-aware) order."""

import re
from pathlib import Path

from medhelp.errors import InputDirectoryNotFoundError, NoInputFilesError
from medhelp.types import InputFile

AUDIO_SUFFIX = ".mp3"


def natural_sort_key(name: str) -> list:
    """Key that compares digit runs by value: clip2 sorts before clip10."""
    return [int(part) if part.isdecimal() else part.lower()
            for part in re.split(r"(\d+)", name)]


def collect_input_files(input_dir: Path) -> list[InputFile]:
    """List the .mp3 files directly inside input_dir, naturally ordered."""
    if not input_dir.is_dir():
        raise InputDirectoryNotFoundError(input_dir)
    paths = [
        p for p in input_dir.iterdir()
        if p.is_file() and p.suffix.lower() == AUDIO_SUFFIX
    ]
    if not paths:
        raise NoInputFilesError(input_dir)
    paths.sort(key=lambda p: (natural_sort_key(p.name), p.name))
    return [InputFile(path=p) for p in paths]
