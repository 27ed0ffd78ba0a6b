"""Step 01: Extract evenly spaced frames from the source video."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from vta.core.decoder import FFmpegDecoder, FrameDecoder
from vta.core.errors import ErrorCode, VideoProcessingError
from vta.core.sampling import classify_duration
from vta.core.step_base import BaseStep
from vta.utils.fs import purge_directory
from vta.utils.tasks import run_indexed
from ._extractor import FrameExtractor, plan_frames
from .config import ExtractFramesConfig
from .contracts import ExtractFramesInput, ExtractFramesOutput

logger = logging.getLogger(__name__)


class ExtractFramesStep(BaseStep[ExtractFramesInput, ExtractFramesOutput, ExtractFramesConfig]):
    """Purge the frames folder, then extract first, interior and last frames.

    Interior frames are extracted concurrently; the returned list is ordered
    by frame index, never by completion order.
    """

    name: ClassVar[str] = "extract_frames"
    input_type: ClassVar = ExtractFramesInput
    output_type: ClassVar = ExtractFramesOutput
    config_type: ClassVar = ExtractFramesConfig
    failure_code: ClassVar = ErrorCode.FRAME_EXTRACTION_ERROR

    def __init__(
        self,
        config: ExtractFramesConfig,
        data_root: Path,
        decoder: FrameDecoder | None = None,
    ):
        super().__init__(config=config, data_root=data_root)
        self.decoder = decoder or FFmpegDecoder()

    @property
    def output_dir(self) -> Path:
        return self.data_root / self.config.output_subdir

    def validate_inputs(self, inputs: ExtractFramesInput) -> bool:
        if not inputs.video_path.is_file():
            logger.error(f"Video not found: {inputs.video_path}")
            return False
        return True

    def run(self, inputs: ExtractFramesInput) -> ExtractFramesOutput:
        duration = inputs.duration_seconds or self.decoder.duration(inputs.video_path)
        plan = inputs.sampling_plan or classify_duration(duration)
        frames = plan_frames(
            duration,
            plan,
            self.output_dir,
            prefix=self.config.frame_prefix,
            image_format=self.config.image_format,
            tail_offset=self.config.tail_offset_seconds,
        )

        purge_directory(self.output_dir)
        extractor = FrameExtractor(self.decoder, inputs.video_path, duration)

        extractor.extract(frames[0])
        run_indexed(lambda _, frame: extractor.extract(frame), frames[1:-1], self.config.max_workers)
        if len(frames) > 1:
            extractor.extract(frames[-1])

        frame_list = sorted(str(f.path) for f in frames)
        missing = [p for p in frame_list if not Path(p).is_file()]
        if missing or len(set(frame_list)) != len(frames):
            raise VideoProcessingError(
                f"Expected {len(frames)} frames, {len(missing)} missing from {self.output_dir}",
                ErrorCode.FRAME_EXTRACTION_ERROR,
            )

        logger.info(f"Extracted {len(frames)} frames (interval={plan.interval_seconds}s, max={plan.max_frames})")
        return ExtractFramesOutput(
            frames_dir=self.output_dir,
            frame_count=len(frames),
            sampling_plan=plan,
            frames=frames,
            frame_list=frame_list,
        )
