"""Assemble a guided meditation: normalized voice clips, pauses, background music."""

import logging

from medhelp.assemble.background import (
    MIXED_NAME,
    emit_final,
    mix_background,
    prepare_background,
)
from medhelp.assemble.concat import build_base_track
from medhelp.assemble.durations import measure_inputs, total_duration
from medhelp.assemble.normalize import normalize_inputs
from medhelp.assemble.workspace import Workspace, interrupt_guard
from medhelp.audio import FFmpegEngine
from medhelp.errors import EngineError
from medhelp.types import InputFile, Result, RunConfiguration

logger = logging.getLogger(__name__)


def process(
    config: RunConfiguration,
    input_files: list[InputFile],
    engine: FFmpegEngine | None = None,
) -> Result:
    """Run the assemble pipeline and return where the result landed.

    Stages run strictly in order; the first failure propagates after the
    workspace has been removed.
    """
    engine = engine or FFmpegEngine()
    if len(config.delays) != len(input_files) - 1:
        raise ValueError(
            f"{len(input_files)} clips need {len(input_files) - 1} delays, "
            f"got {len(config.delays)}"
        )

    with interrupt_guard(), Workspace(config.output_dir) as workspace_dir:
        logger.info("--- Normalising Voice Files ---")
        artifacts = normalize_inputs(input_files, workspace_dir, engine)

        logger.info("--- Calculating Durations ---")
        measured = measure_inputs(input_files, engine)
        total = total_duration(measured, config.delays)
        logger.info(f"Total duration with delays: {total}s")

        logger.info("--- Creating Base Audio Track ---")
        base_track, manifest = build_base_track(
            artifacts, config.delays, workspace_dir, engine,
        )

        final_track = base_track
        if config.background_enabled:
            logger.info("--- Preparing Background Music ---")
            background = prepare_background(
                config.background_file, workspace_dir, total,
                config.background_volume, engine,
            )
            logger.info("--- Mixing Final Audio ---")
            final_track = mix_background(
                base_track, background, workspace_dir / MIXED_NAME,
                config.background_volume, engine,
            )

        output_path = emit_final(final_track, config.output_path)

    # The track is already in place; fall back to the planned total.
    try:
        final_duration = engine.probe_duration(output_path)
    except (EngineError, FileNotFoundError) as e:
        logger.warning(f"Could not probe {output_path.name} ({e}); reporting planned duration")
        final_duration = total
    return Result(
        output_path=output_path,
        total_duration=total,
        final_duration=final_duration,
        input_files=measured,
        manifest=manifest,
    )
