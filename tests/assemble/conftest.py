"""Shared fixtures for assemble tests."""

from decimal import Decimal
from pathlib import Path

import pytest

from medhelp.errors import EngineError


class FakeEngine:
    """Stands in for FFmpegEngine: writes placeholder files, records calls.

    Durations are looked up by file name. `fail` maps a method name to the
    file name whose call should fail (or "*" for every call).
    """

    def __init__(self, durations=None, fail=None):
        self.durations = {k: Decimal(str(v)) for k, v in (durations or {}).items()}
        self.fail = fail or {}
        self.calls = []

    def _record(self, method, path, *args):
        self.calls.append((method, Path(path).name, *args))
        target = self.fail.get(method)
        if target == "*" or target == Path(path).name:
            raise EngineError(["ffmpeg", method], 1, "simulated failure")

    def called(self, method):
        return [c for c in self.calls if c[0] == method]

    def check_prerequisites(self):
        pass

    def probe_duration(self, path):
        self._record("probe_duration", path)
        return self.durations[Path(path).name]

    def normalize(self, input_path, output_path):
        self._record("normalize", input_path)
        output_path.write_bytes(b"norm")
        return output_path

    def synthesize_silence(self, output_path, seconds, sample_rate=44100):
        self._record("synthesize_silence", output_path, seconds)
        output_path.write_bytes(b"silence")
        return output_path

    def concatenate(self, list_path, output_path):
        self._record("concatenate", list_path)
        output_path.write_bytes(b"base")
        return output_path

    def prepare_background(self, input_path, output_path, seconds, volume, loops=0):
        self._record("prepare_background", input_path, seconds, volume, loops)
        output_path.write_bytes(b"bg")
        return output_path

    def mix(self, base_path, background_path, output_path, weight):
        self._record("mix", base_path, weight)
        output_path.write_bytes(b"mixed")
        return output_path


@pytest.fixture
def fake_engine_factory():
    return FakeEngine


@pytest.fixture
def clip_dir(tmp_path):
    """Input directory holding three placeholder clips."""
    input_dir = tmp_path / "input"
    input_dir.mkdir()
    for name in ("clip1.mp3", "clip2.mp3", "clip10.mp3"):
        (input_dir / name).write_bytes(b"mp3")
    return input_dir
