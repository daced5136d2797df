"""Core data types for medhelp."""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path


@dataclass(frozen=True)
class InputFile:
    """A source voice clip. Duration is filled in once probed."""
    path: Path
    duration: Decimal | None = None    # seconds

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class Delay:
    """Silence inserted between clip `index` and clip `index + 1`."""
    index: int
    seconds: Decimal

    def __post_init__(self):
        if self.seconds < 0:
            raise ValueError(f"Delay cannot be negative: {self.seconds}")


@dataclass(frozen=True)
class RunConfiguration:
    """Everything gathered before processing starts."""
    background_enabled: bool
    background_volume: Decimal | None   # fraction, 0.01-1.00
    delays: tuple[Delay, ...]
    input_dir: Path
    output_dir: Path
    background_file: Path = Path("background.mp3")
    output_name: str = "final_output.mp3"

    def __post_init__(self):
        if self.background_enabled != (self.background_volume is not None):
            raise ValueError(
                "background_volume must be set if and only if background is enabled"
            )
        for i, delay in enumerate(self.delays):
            if delay.index != i:
                raise ValueError(f"Delay at position {i} has index {delay.index}")

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_name


@dataclass(frozen=True)
class NormalizedArtifact:
    """Normalized copy of an input file inside the workspace."""
    source: InputFile
    path: Path


@dataclass(frozen=True)
class Segment:
    """One entry of the concat list: a clip or a generated silence."""
    kind: str       # "file" or "delay"
    path: Path


@dataclass(frozen=True)
class ConcatManifest:
    """Ordered clip/silence segments, always file, delay, file, ..., file."""
    segments: tuple[Segment, ...]

    def __post_init__(self):
        if not self.segments:
            raise ValueError("Manifest needs at least one file segment")
        if len(self.segments) % 2 == 0:
            raise ValueError(f"Manifest length must be odd, got {len(self.segments)}")
        for i, seg in enumerate(self.segments):
            expected = "file" if i % 2 == 0 else "delay"
            if seg.kind != expected:
                raise ValueError(f"Segment {i} is {seg.kind!r}, expected {expected!r}")

    def __len__(self) -> int:
        return len(self.segments)

    def render(self) -> str:
        """Concat demuxer list, one `file '<name>'` line per segment."""
        lines = []
        for seg in self.segments:
            name = seg.path.name.replace("'", "'\\''")
            lines.append(f"file '{name}'")
        return "\n".join(lines) + "\n"


@dataclass
class Result:
    """Output of the assemble pipeline."""
    output_path: Path
    total_duration: Decimal
    final_duration: Decimal
    input_files: list[InputFile] = field(default_factory=list)
    manifest: ConcatManifest | None = None
