"""Batch filename transformations.

Each file's new name is built as::

    [prefix] + (base | stem with replacements, case-converted) + [suffix] + [sequence] + .ext

where the sequence is either a counter (``--number START``) or an
alphabetic run a, b, ..., z, aa, ab, ... (``--alpha``). The whole plan is
checked for conflicts before any file is touched.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from medhelp.errors import InputDirectoryNotFoundError, RenameConflictError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenameOptions:
    base: str | None = None
    prefix: str = ""
    suffix: str = ""
    replace: tuple[str, str] | None = None
    start_number: int | None = None
    alpha: bool = False
    lowercase: bool = False
    uppercase: bool = False

    def __post_init__(self):
        if self.lowercase and self.uppercase:
            raise ValueError("lowercase and uppercase are mutually exclusive")


@dataclass(frozen=True)
class RenameOp:
    source: Path
    target: Path

    @property
    def changed(self) -> bool:
        return self.source.name != self.target.name


def next_letter_sequence(current: str) -> str:
    """Successor in a, b, ..., z, aa, ab, ..., az, ba, ..., zz, aaa."""
    if not current:
        return "a"
    head, last = current[:-1], current[-1]
    if last == "z":
        return next_letter_sequence(head) + "a" if head else "aa"
    return head + chr(ord(last) + 1)


def letter_sequence() -> Iterator[str]:
    current = ""
    while True:
        current = next_letter_sequence(current)
        yield current


def split_extension(filename: str) -> tuple[str, str]:
    """Split at the last dot. Names without one, or dotfiles, have no extension."""
    stem, dot, ext = filename.rpartition(".")
    if not dot or not stem:
        return filename, ""
    return stem, ext


def new_stem(stem: str, options: RenameOptions) -> str:
    """Apply base/replace, case, prefix and suffix (sequence excluded)."""
    if options.base:
        name = options.base
    else:
        name = stem
        if options.replace and options.replace[0]:
            old, new = options.replace
            name = name.replace(old, new)

    if options.lowercase:
        name = name.lower()
    elif options.uppercase:
        name = name.upper()

    return f"{options.prefix}{name}{options.suffix}"


def plan_renames(directory: Path, options: RenameOptions) -> list[RenameOp]:
    """Compute the rename of every regular file in directory, in name order."""
    if not directory.is_dir():
        raise InputDirectoryNotFoundError(directory)

    files = sorted((p for p in directory.iterdir() if p.is_file()), key=lambda p: p.name)
    counter = options.start_number
    letters = letter_sequence()

    plan = []
    for path in files:
        stem, ext = split_extension(path.name)
        name = new_stem(stem, options)
        if counter is not None:
            name = f"{name}{counter}"
            counter += 1
        elif options.alpha:
            name = f"{name}{next(letters)}"
        if ext:
            name = f"{name}.{ext}"
        plan.append(RenameOp(source=path, target=path.with_name(name)))
    return plan


def check_conflicts(plan: list[RenameOp]) -> None:
    """Raise RenameConflictError if applying plan would clobber any file."""
    seen: dict[str, Path] = {}
    for op in plan:
        other = seen.get(op.target.name)
        if other is not None:
            raise RenameConflictError(
                f"Both '{other.name}' and '{op.source.name}' would be renamed "
                f"to '{op.target.name}'"
            )
        seen[op.target.name] = op.source

    # A target may only replace a file that is itself moving out of the way,
    # and only after that file has moved.
    moved_out = set()
    for op in plan:
        if (op.changed and op.target.exists() and op.target.name not in moved_out
                and not op.target.samefile(op.source)):
            raise RenameConflictError(
                f"Cannot rename '{op.source.name}' to '{op.target.name}': "
                "target already exists"
            )
        if op.changed:
            moved_out.add(op.source.name)


def apply_renames(plan: list[RenameOp], dry_run: bool = False) -> list[RenameOp]:
    """Rename (or with dry_run, only report) every operation in plan.

    Returns the operations that were carried out.
    """
    if dry_run:
        for op in plan:
            print(f"Would rename: {op.source.name} -> {op.target.name}")
        return []

    check_conflicts(plan)
    done = []
    for op in plan:
        if not op.changed:
            continue
        os.rename(op.source, op.target)
        logger.debug(f"{op.source} -> {op.target}")
        print(f"Renamed: {op.source.name} -> {op.target.name}")
        done.append(op)
    return done
