"""Fixtures for E2E pipeline tests."""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np
import pytest

from vta.utils.subprocess_utils import binary_available


def create_synthetic_video(
    output_dir: Path,
    seconds: float = 12.0,
    resolution: tuple[int, int] = (320, 180),
    fps: float = 10.0,
) -> Path:
    """
    Create a synthetic screen-recording-like video.

    Each frame carries its frame number so extracted stills can be told apart.

    Args:
        output_dir: Directory to save the video
        seconds: Length of the clip
        resolution: Video resolution as (width, height)
        fps: Frames per second

    Returns:
        Path to the created video file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    video_path = output_dir / "screen_recording.mp4"

    width, height = resolution
    fourcc = cv2.VideoWriter_fourcc(*"mp4v")
    writer = cv2.VideoWriter(str(video_path), fourcc, fps, (width, height))

    rng = np.random.default_rng(7)
    for i in range(int(seconds * fps)):
        frame = np.full((height, width, 3), 230, dtype=np.uint8)
        # A moving "cursor" block plus light noise
        x = int((i / (seconds * fps)) * (width - 20))
        frame[80:100, x:x + 20] = (40, 40, 200)
        frame = cv2.add(frame, rng.integers(0, 20, (height, width, 3), dtype=np.uint8))
        cv2.putText(frame, f"F:{i:03d}", (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 0, 0), 1)
        writer.write(frame)

    writer.release()
    return video_path


@pytest.fixture
def require_ffmpeg():
    if not (binary_available("ffmpeg") and binary_available("ffprobe")):
        pytest.skip("ffmpeg/ffprobe not installed")


@pytest.fixture
def e2e_root(tmp_path: Path, require_ffmpeg) -> Path:
    """Content root with a single synthetic video in the source folder."""
    root = tmp_path / "content"
    create_synthetic_video(root / "automate")
    return root
