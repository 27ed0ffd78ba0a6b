"""Shared pytest fixtures for vta pipeline tests."""

from __future__ import annotations

import threading
import time
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from vta.core.contracts import PipelineConfig
from vta.core.errors import DecoderError, ErrorCode


class FakeDecoder:
    """In-process FrameDecoder that writes real JPEGs and records every call.

    Later timestamps finish first (``invert_order``) so tests can check that
    output order never depends on completion order.
    """

    def __init__(
        self,
        duration: float | Exception = 90.0,
        available: bool = True,
        fail_at: set[int] | None = None,
        size: tuple[int, int] = (320, 180),
        invert_order: bool = True,
    ):
        self._duration = duration
        self.available = available
        self.fail_at = fail_at or set()
        self.size = size
        self.invert_order = invert_order
        self.calls: list[tuple[float, Path]] = []
        self.completed: list[Path] = []
        self._lock = threading.Lock()

    def probe(self) -> bool:
        return self.available

    def duration(self, path: Path) -> float:
        if isinstance(self._duration, Exception):
            raise self._duration
        return self._duration

    def extract_frame(self, path: Path, timestamp: float, out_path: Path) -> None:
        with self._lock:
            call_index = len(self.calls)
            self.calls.append((timestamp, out_path))
        if call_index in self.fail_at:
            raise DecoderError(f"fake failure at {timestamp:.3f}s", ErrorCode.FRAME_EXTRACTION_ERROR)
        if self.invert_order:
            time.sleep(max(0.0, 0.05 - timestamp * 0.0005))
        shade = int(timestamp * 7) % 256
        Image.new("RGB", self.size, (shade, 255 - shade, 128)).save(out_path, "JPEG")
        with self._lock:
            self.completed.append(out_path)

    @property
    def timestamps(self) -> list[float]:
        return [t for t, _ in self.calls]


@pytest.fixture
def fake_decoder() -> FakeDecoder:
    return FakeDecoder()


@pytest.fixture
def make_decoder():
    """The FakeDecoder class, for tests that need non-default behaviour."""
    return FakeDecoder


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Temporary content root with the standard folders."""
    root = tmp_path / "content"
    for subdir in ["automate", "frames", "grid"]:
        (root / subdir).mkdir(parents=True, exist_ok=True)
    return root


@pytest.fixture
def source_video(data_root: Path) -> Path:
    """A non-empty placeholder video; the fake decoder never reads it."""
    video = data_root / "automate" / "recording.mp4"
    video.write_bytes(b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 64)
    return video


@pytest.fixture
def pipeline_config(data_root: Path) -> PipelineConfig:
    return PipelineConfig(project_name="test", data_root=data_root)


@pytest.fixture
def sample_frames(data_root: Path) -> list[Path]:
    """Ten 640x360 frames with distinct noise, named like real extraction output."""
    frames_dir = data_root / "frames"
    paths = []
    rng = np.random.default_rng(0)
    for i in range(10):
        arr = rng.integers(0, 255, (360, 640, 3), dtype=np.uint8)
        path = frames_dir / f"frame_{i:03d}.jpg"
        Image.fromarray(arr).save(path, "JPEG", quality=95)
        paths.append(path)
    return paths


def write_solid(path: Path, color: tuple[int, int, int], size: tuple[int, int] = (1920, 1080)) -> Path:
    Image.new("RGB", size, color).save(path, "JPEG", quality=100, subsampling=0)
    return path


@pytest.fixture
def solid_frame_factory(data_root: Path):
    """Build solid-colour frames: factory(index, colour, size=...) -> path."""

    def factory(index: int, color: tuple[int, int, int], size: tuple[int, int] = (1920, 1080)) -> Path:
        return write_solid(data_root / "frames" / f"frame_{index:03d}.jpg", color, size)

    return factory
