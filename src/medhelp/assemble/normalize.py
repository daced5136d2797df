"""Per-clip loudness normalization."""

import logging
from pathlib import Path

from medhelp.errors import EngineError, NormalizationFailedError
from medhelp.types import InputFile, NormalizedArtifact

logger = logging.getLogger(__name__)

PREFIX = "normalised_"


def normalize_inputs(
    input_files: list[InputFile], workspace_dir: Path, engine,
) -> list[NormalizedArtifact]:
    """Normalize every clip into the workspace, stopping at the first failure."""
    artifacts = []
    for input_file in input_files:
        logger.info(f"Processing: {input_file.name}")
        output_path = workspace_dir / f"{PREFIX}{input_file.name}"
        try:
            engine.normalize(input_file.path, output_path)
        except EngineError as e:
            raise NormalizationFailedError(input_file.path) from e
        artifacts.append(NormalizedArtifact(source=input_file, path=output_path))
    return artifacts
