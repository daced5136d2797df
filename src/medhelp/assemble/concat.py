"""Interleave clips with silences and concatenate them into the base track."""

import logging
from pathlib import Path

from medhelp.errors import ConcatenationFailedError, EngineError
from medhelp.types import ConcatManifest, Delay, NormalizedArtifact, Segment

logger = logging.getLogger(__name__)

LIST_NAME = "concat_list.txt"
BASE_TRACK_NAME = "base_track.mp3"


def generate_silences(delays: tuple[Delay, ...], workspace_dir: Path, engine) -> list[Path]:
    """One silent clip per delay, named delay_1.mp3 .. delay_<N-1>.mp3."""
    silences = []
    for delay in delays:
        path = workspace_dir / f"delay_{delay.index + 1}.mp3"
        try:
            engine.synthesize_silence(path, delay.seconds)
        except EngineError as e:
            raise ConcatenationFailedError(
                f"Failed to create delay file {path.name}"
            ) from e
        silences.append(path)
    return silences


def build_manifest(
    artifacts: list[NormalizedArtifact], silences: list[Path],
) -> ConcatManifest:
    """file, delay, file, ..., file."""
    if len(silences) != len(artifacts) - 1:
        raise ValueError(
            f"Need {len(artifacts) - 1} silences for {len(artifacts)} clips, "
            f"got {len(silences)}"
        )
    segments = [Segment("file", artifacts[0].path)]
    for silence, artifact in zip(silences, artifacts[1:]):
        segments.append(Segment("delay", silence))
        segments.append(Segment("file", artifact.path))
    return ConcatManifest(tuple(segments))


def write_manifest(manifest: ConcatManifest, workspace_dir: Path) -> Path:
    list_path = workspace_dir / LIST_NAME
    list_path.write_text(manifest.render())
    return list_path


def build_base_track(
    artifacts: list[NormalizedArtifact],
    delays: tuple[Delay, ...],
    workspace_dir: Path,
    engine,
) -> tuple[Path, ConcatManifest]:
    """Generate silences, write the concat list and render base_track.mp3."""
    silences = generate_silences(delays, workspace_dir, engine)
    manifest = build_manifest(artifacts, silences)
    list_path = write_manifest(manifest, workspace_dir)
    logger.info(f"Concatenating {len(manifest)} segments")

    base_track = workspace_dir / BASE_TRACK_NAME
    try:
        engine.concatenate(list_path, base_track)
    except EngineError as e:
        raise ConcatenationFailedError("Failed to concatenate audio files") from e
    return base_track, manifest
