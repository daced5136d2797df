"""Duration probing, totals and M:SS formatting."""

import logging
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal

from medhelp.errors import DurationProbeFailedError, EngineError
from medhelp.types import Delay, InputFile

logger = logging.getLogger(__name__)


def format_duration(seconds: Decimal | float) -> str:
    """Format seconds as M:SS, rounding to the nearest second (half up).

    Rounding happens before the minute split, so 59.7 gives "1:00"
    rather than "0:60".
    """
    whole = int(Decimal(str(seconds)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    minutes, secs = divmod(whole, 60)
    return f"{minutes}:{secs:02d}"


def measure_inputs(input_files: list[InputFile], engine) -> list[InputFile]:
    """Return copies of input_files carrying their probed durations."""
    measured = []
    for input_file in input_files:
        try:
            duration = engine.probe_duration(input_file.path)
        except EngineError as e:
            raise DurationProbeFailedError(input_file.path) from e
        logger.info(f"{input_file.name}: {duration}s")
        measured.append(replace(input_file, duration=duration))
    return measured


def total_duration(input_files: list[InputFile], delays: tuple[Delay, ...]) -> Decimal:
    """Sum all clip durations and all delays, exactly."""
    if len(delays) != max(len(input_files) - 1, 0):
        raise ValueError(
            f"Expected {len(input_files) - 1} delays for {len(input_files)} files, "
            f"got {len(delays)}"
        )
    total = Decimal(0)
    for input_file in input_files:
        if input_file.duration is None:
            raise ValueError(f"Duration of {input_file.name} has not been measured")
        total += input_file.duration
    for delay in delays:
        total += delay.seconds
    return total
