"""Interactive configuration: background toggle, volume and per-gap delays."""

import re
from decimal import Decimal
from pathlib import Path
from typing import Callable

from medhelp.errors import InvalidUserInputError, MissingBackgroundFileError
from medhelp.types import Delay, InputFile, RunConfiguration

DEFAULT_VOLUME_PERCENT = "30"
DEFAULT_DELAY = "2.0"

_VOLUME_RE = re.compile(r"^[0-9]+$")
_DELAY_RE = re.compile(r"^[0-9]+\.?[0-9]*$")


def parse_yes_no(answer: str) -> bool:
    """'y'/'n' in any case; empty means no."""
    answer = answer.strip().lower() or "n"
    if answer not in ("y", "n"):
        raise InvalidUserInputError("Please enter 'y' or 'n'")
    return answer == "y"


def parse_volume(answer: str) -> Decimal:
    """Integer percent in [1, 100] to a fraction with two decimals (30 -> 0.30)."""
    answer = answer.strip() or DEFAULT_VOLUME_PERCENT
    if not _VOLUME_RE.match(answer) or not 1 <= int(answer) <= 100:
        raise InvalidUserInputError("Please enter a number between 1 and 100")
    return (Decimal(int(answer)) / 100).quantize(Decimal("0.01"))


def parse_delay(answer: str) -> Decimal:
    """Non-negative decimal seconds; empty means 2.0."""
    answer = answer.strip() or DEFAULT_DELAY
    if not _DELAY_RE.match(answer):
        raise InvalidUserInputError("Please enter a valid number")
    return Decimal(answer)


def _ask(prompt: str, parse: Callable, input_fn: Callable[[str], str] | None = None):
    """Re-prompt until parse accepts the answer. End of input takes the default."""
    input_fn = input_fn or input
    while True:
        try:
            answer = input_fn(prompt)
        except EOFError:
            print()
            answer = ""
        try:
            return parse(answer)
        except InvalidUserInputError as e:
            print(e)


def ask_background(input_fn: Callable[[str], str] | None = None) -> bool:
    return _ask("Do you want to include background music? (y/n) [n]: ",
                parse_yes_no, input_fn)


def ask_volume(input_fn: Callable[[str], str] | None = None) -> Decimal:
    return _ask(
        "Enter the desired volume level for background music (1-100) "
        f"[{DEFAULT_VOLUME_PERCENT}]: ",
        parse_volume, input_fn,
    )


def ask_delays(
    input_files: list[InputFile], input_fn: Callable[[str], str] | None = None,
) -> tuple[Delay, ...]:
    """Prompt once per adjacent pair of clips."""
    delays = []
    for i, (current, following) in enumerate(zip(input_files, input_files[1:])):
        seconds = _ask(
            f"Delay between '{current.name}' and '{following.name}' [{DEFAULT_DELAY}]: ",
            parse_delay, input_fn,
        )
        delays.append(Delay(index=i, seconds=seconds))
    return tuple(delays)


def ask_background_settings(
    background_file: Path, input_fn: Callable[[str], str] | None = None,
) -> tuple[bool, Decimal | None]:
    """Background toggle and, if enabled, its volume fraction.

    Fails before asking for the volume when the background file is missing.
    """
    if not ask_background(input_fn):
        return False, None
    if not background_file.is_file():
        raise MissingBackgroundFileError(background_file)
    return True, ask_volume(input_fn)


def gather_configuration(
    input_files: list[InputFile],
    input_dir: Path,
    output_dir: Path,
    background_file: Path,
    output_name: str,
    background: tuple[bool, Decimal | None],
    input_fn: Callable[[str], str] | None = None,
) -> RunConfiguration:
    """Ask for the delays and freeze everything into a RunConfiguration."""
    enabled, volume = background
    delays = ask_delays(input_files, input_fn)
    return RunConfiguration(
        background_enabled=enabled,
        background_volume=volume,
        delays=delays,
        input_dir=input_dir,
        output_dir=output_dir,
        background_file=background_file,
        output_name=output_name,
    )
