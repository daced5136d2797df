"""Audio processing via ffmpeg/ffprobe."""

import json
import logging
import os
import shutil
import subprocess
from decimal import Decimal, InvalidOperation
from pathlib import Path

from medhelp.errors import EngineError, PrerequisiteMissingError

logger = logging.getLogger(__name__)

FFMPEG = os.environ.get("MEDHELP_FFMPEG", "ffmpeg")
FFPROBE = os.environ.get("MEDHELP_FFPROBE", "ffprobe")

PROBE_TIMEOUT = 30
SILENCE_TIMEOUT = 60
PROCESS_TIMEOUT = 3600

SAMPLE_RATE = 44100

# Dynamic range compression, EBU R128 loudness target, then a brick-wall limiter.
NORMALIZE_FILTER = ",".join([
    "compand=attacks=0.05:decays=0.1"
    ":points=-60/-80|-40/-40|-30/-30|-20/-20|0/-8|20/-6",
    "loudnorm=I=-16:TP=-1:LRA=7:print_format=json",
    "alimiter=level_in=1:level_out=1:limit=1:attack=5:release=50",
])


def build_normalize_command(ffmpeg: str, input_path: Path, output_path: Path) -> list[str]:
    """Apply NORMALIZE_FILTER, resampling to the stereo rate the silences use.

    loudnorm upsamples internally; matching rates keep the concat demuxer happy.
    """
    return [
        ffmpeg, "-y", "-i", str(input_path),
        "-filter:a", NORMALIZE_FILTER,
        "-ar", str(SAMPLE_RATE), "-ac", "2",
        str(output_path),
    ]


def build_silence_command(
    ffmpeg: str, output_path: Path, seconds: Decimal, sample_rate: int = SAMPLE_RATE,
) -> list[str]:
    return [
        ffmpeg, "-y",
        "-f", "lavfi", "-i", f"anullsrc=r={sample_rate}:cl=stereo",
        "-t", str(seconds),
        str(output_path),
    ]


def build_concat_command(ffmpeg: str, list_path: Path, output_path: Path) -> list[str]:
    """Concat demuxer at the highest VBR quality.

    Paths inside the list resolve relative to the list file itself.
    """
    return [
        ffmpeg, "-y",
        "-f", "concat", "-safe", "0", "-i", str(list_path),
        "-c:a", "libmp3lame", "-q:a", "0",
        str(output_path),
    ]


def build_background_command(
    ffmpeg: str,
    input_path: Path,
    output_path: Path,
    seconds: Decimal,
    volume: Decimal,
    loops: int = 0,
) -> list[str]:
    """Loop (if loops > 0) and trim the background, scaling its volume."""
    cmd = [ffmpeg, "-y"]
    if loops > 0:
        cmd.extend(["-stream_loop", str(loops)])
    cmd.extend([
        "-i", str(input_path),
        "-t", str(seconds),
        "-filter:a", f"volume={volume}",
        str(output_path),
    ])
    return cmd


def build_mix_command(
    ffmpeg: str,
    base_path: Path,
    background_path: Path,
    output_path: Path,
    weight: Decimal,
) -> list[str]:
    """Weighted sum of base and background, bounded to the base's length."""
    return [
        ffmpeg, "-y",
        "-i", str(base_path),
        "-i", str(background_path),
        "-filter_complex",
        f"amix=inputs=2:duration=first:weights=1.0 {weight}",
        str(output_path),
    ]


class FFmpegEngine:
    """Blocking ffmpeg/ffprobe operations used by the assemble pipeline.

    Every method waits for its process and raises EngineError on a non-zero
    exit, a timeout, or a missing executable.
    """

    def __init__(self, ffmpeg: str = FFMPEG, ffprobe: str = FFPROBE):
        self.ffmpeg = ffmpeg
        self.ffprobe = ffprobe

    def check_prerequisites(self) -> None:
        """Raise PrerequisiteMissingError if ffmpeg or ffprobe is not on PATH."""
        for name in (self.ffmpeg, self.ffprobe):
            if shutil.which(name) is None:
                raise PrerequisiteMissingError(name)

    def _run(self, cmd: list[str], timeout: float) -> str:
        logger.debug(" ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        except subprocess.TimeoutExpired as e:
            raise EngineError(cmd, None, f"timed out after {timeout}s") from e
        except FileNotFoundError as e:
            raise EngineError(cmd, None, str(e)) from e
        if result.returncode != 0:
            raise EngineError(cmd, result.returncode, result.stderr)
        return result.stdout

    def probe_duration(self, path: Path) -> Decimal:
        """Get file duration in seconds, exactly as ffprobe prints it."""
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        cmd = [
            self.ffprobe, "-v", "quiet", "-print_format", "json",
            "-show_format", str(path),
        ]
        output = self._run(cmd, PROBE_TIMEOUT)
        try:
            dur = json.loads(output).get("format", {}).get("duration")
        except json.JSONDecodeError as e:
            raise EngineError(cmd, 0, f"unparseable ffprobe output: {e}") from e
        if dur is None:
            raise EngineError(cmd, 0, "no duration reported")
        try:
            return Decimal(str(dur))
        except InvalidOperation as e:
            raise EngineError(cmd, 0, f"invalid duration {dur!r}") from e

    def normalize(self, input_path: Path, output_path: Path) -> Path:
        self._run(build_normalize_command(self.ffmpeg, input_path, output_path),
                  PROCESS_TIMEOUT)
        return output_path

    def synthesize_silence(
        self, output_path: Path, seconds: Decimal, sample_rate: int = SAMPLE_RATE,
    ) -> Path:
        self._run(build_silence_command(self.ffmpeg, output_path, seconds, sample_rate),
                  SILENCE_TIMEOUT)
        return output_path

    def concatenate(self, list_path: Path, output_path: Path) -> Path:
        self._run(build_concat_command(self.ffmpeg, list_path, output_path),
                  PROCESS_TIMEOUT)
        return output_path

    def prepare_background(
        self,
        input_path: Path,
        output_path: Path,
        seconds: Decimal,
        volume: Decimal,
        loops: int = 0,
    ) -> Path:
        cmd = build_background_command(
            self.ffmpeg, input_path, output_path, seconds, volume, loops,
        )
        self._run(cmd, PROCESS_TIMEOUT)
        return output_path

    def mix(
        self, base_path: Path, background_path: Path, output_path: Path, weight: Decimal,
    ) -> Path:
        cmd = build_mix_command(self.ffmpeg, base_path, background_path, output_path, weight)
        self._run(cmd, PROCESS_TIMEOUT)
        return output_path
