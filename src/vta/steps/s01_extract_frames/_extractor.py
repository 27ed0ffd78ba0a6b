"""Single-frame extraction and the per-run frame plan."""

from __future__ import annotations

import logging
from pathlib import Path

from vta.core.contracts import Frame, SamplingPlan
from vta.core.decoder import FrameDecoder
from vta.core.errors import DecoderError, ErrorCode
from vta.core.sampling import frame_timestamps
from vta.utils.fs import indexed_name

logger = logging.getLogger(__name__)


class FrameExtractor:
    """Materialize one still per call through the decoder."""

    def __init__(self, decoder: FrameDecoder, video_path: Path, duration: float):
        self.decoder = decoder
        self.video_path = video_path
        self.duration = duration

    def extract(self, frame: Frame) -> None:
        if not 0 <= frame.timestamp < self.duration:
            raise DecoderError(
                f"Timestamp {frame.timestamp:.3f}s outside [0, {self.duration:.3f})",
                ErrorCode.FRAME_EXTRACTION_ERROR,
            )
        logger.debug(f"Extracting frame {frame.index} at {frame.timestamp:.3f}s -> {frame.path.name}")
        self.decoder.extract_frame(self.video_path, frame.timestamp, frame.path)


def plan_frames(
    duration: float,
    plan: SamplingPlan,
    output_dir: Path,
    prefix: str = "frame",
    image_format: str = "jpg",
    tail_offset: float = 0.1,
) -> list[Frame]:
    """Frames for one run in index order, with their output paths."""
    return [
        Frame(index=i, timestamp=t, path=output_dir / indexed_name(prefix, i, image_format))
        for i, t in enumerate(frame_timestamps(duration, plan, tail_offset))
    ]
