"""FrameDecoder capability and its ffmpeg/ffprobe implementation.

The pipeline only talks to :class:`FrameDecoder`; tests swap in a fake.
"""

from __future__ import annotations

import logging
import math
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from vta.utils.subprocess_utils import run_command

from .contracts import DecoderConfig
from .errors import DecoderError, ErrorCode

logger = logging.getLogger(__name__)


@runtime_checkable
class FrameDecoder(Protocol):
    """Probe, duration query and single-frame extraction."""

    def probe(self) -> bool:
        """True if the decoder can be invoked."""
        ...

    def duration(self, path: Path) -> float:
        """Duration of ``path`` in seconds. Raises DecoderError."""
        ...

    def extract_frame(self, path: Path, timestamp: float, out_path: Path) -> None:
        """Write exactly one still at ``timestamp`` to ``out_path``, overwriting it.

        Raises DecoderError on non-zero exit or missing output. Not retried.
        """
        ...


class FFmpegDecoder:
    """FrameDecoder backed by the ffmpeg and ffprobe command-line tools."""

    def __init__(self, ffmpeg_bin: str = "ffmpeg", ffprobe_bin: str = "ffprobe", qscale: int = 1):
        self.ffmpeg_bin = ffmpeg_bin
        self.ffprobe_bin = ffprobe_bin
        self.qscale = qscale

    @classmethod
    def from_config(cls, config: DecoderConfig) -> FFmpegDecoder:
        return cls(ffmpeg_bin=config.ffmpeg_bin, ffprobe_bin=config.ffprobe_bin, qscale=config.qscale)

    def probe(self) -> bool:
        try:
            result = run_command([self.ffmpeg_bin, "-version"], check=False)
        except OSError as exc:
            logger.debug(f"{self.ffmpeg_bin} not invocable: {exc}")
            return False
        return result.returncode == 0

    def duration(self, path: Path) -> float:
        cmd = [
            self.ffprobe_bin,
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            str(path),
        ]
        try:
            result = run_command(cmd)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise DecoderError(
                f"Error reading video duration: {exc}", ErrorCode.DURATION_READ_ERROR
            ) from exc

        raw = result.stdout.strip().splitlines()
        try:
            value = float(raw[0])
        except (IndexError, ValueError) as exc:
            raise DecoderError(
                f"Error reading video duration: unparseable output {result.stdout!r}",
                ErrorCode.DURATION_READ_ERROR,
            ) from exc
        if math.isnan(value):
            raise DecoderError("Invalid video duration detected", ErrorCode.INVALID_DURATION)
        return value

    def extract_frame(self, path: Path, timestamp: float, out_path: Path) -> None:
        # A stale file must not pass for fresh output
        out_path.unlink(missing_ok=True)
        cmd = [
            self.ffmpeg_bin,
            "-hide_banner",
            "-loglevel", "error",
            "-y",
            "-ss", f"{timestamp:.3f}",
            "-i", str(path),
            "-frames:v", "1",
            "-q:v", str(self.qscale),
            str(out_path),
        ]
        try:
            run_command(cmd)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise DecoderError(
                f"Frame extraction at {timestamp:.3f}s failed: {exc}",
                ErrorCode.FRAME_EXTRACTION_ERROR,
            ) from exc

        if not out_path.exists() or out_path.stat().st_size == 0:
            raise DecoderError(
                f"Decoder produced no frame at {timestamp:.3f}s ({out_path.name})",
                ErrorCode.FRAME_EXTRACTION_ERROR,
            )
