"""Top-level run: validate, locate the video, read its duration, then frames -> grids.

The run is a linear state machine::

    Idle -> ValidatingEnvironment -> LocatingVideo -> ReadingDuration
         -> ExtractingFrames -> ComposingGrids [-> AnalyzingGrids] -> Done

Any failure moves to Failed and surfaces the first error as a VTAError.
Nothing is retried; the next run's purge-then-regenerate cleans up after it.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel

from vta.steps.s01_extract_frames.contracts import ExtractFramesInput, ExtractFramesOutput
from vta.steps.s02_compose_grids.contracts import ComposeGridsInput, ComposeGridsOutput
from vta.steps.s03_analyze_grids.contracts import AnalyzeGridsInput, AnalyzeGridsOutput
from vta.utils.fs import ensure_dir, is_readable_dir, is_writable_dir

from .contracts import PipelineConfig, SamplingPlan, VideoAsset
from .decoder import FrameDecoder
from .errors import DecoderError, ErrorCode, VideoProcessingError, wrap_error
from .sampling import classify_duration, duration_category

if TYPE_CHECKING:
    from vta.steps.s01_extract_frames.step import ExtractFramesStep
    from vta.steps.s02_compose_grids.step import ComposeGridsStep
    from vta.steps.s03_analyze_grids.step import AnalyzeGridsStep

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    IDLE = "Idle"
    VALIDATING_ENVIRONMENT = "ValidatingEnvironment"
    LOCATING_VIDEO = "LocatingVideo"
    READING_DURATION = "ReadingDuration"
    EXTRACTING_FRAMES = "ExtractingFrames"
    COMPOSING_GRIDS = "ComposingGrids"
    ANALYZING_GRIDS = "AnalyzingGrids"
    DONE = "Done"
    FAILED = "Failed"


class PipelineResult(BaseModel):
    video: VideoAsset
    sampling_plan: SamplingPlan
    frames: ExtractFramesOutput
    grids: ComposeGridsOutput
    analysis: AnalyzeGridsOutput | None = None
    duration_category: str


class VideoPipeline:
    """One exclusive run against a content root.

    Steps and the decoder are injected; concurrent runs against the same
    content root are not supported.
    """

    def __init__(
        self,
        config: PipelineConfig,
        decoder: FrameDecoder,
        extract_step: ExtractFramesStep,
        grids_step: ComposeGridsStep,
        analyze_step: AnalyzeGridsStep | None = None,
    ):
        self.config = config
        self.decoder = decoder
        self.extract_step = extract_step
        self.grids_step = grids_step
        self.analyze_step = analyze_step
        self.state = PipelineState.IDLE
        self.history: list[PipelineState] = [self.state]

    def _enter(self, state: PipelineState) -> None:
        logger.debug(f"Pipeline state: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    # ── Stages ───────────────────────────────────────────────────────

    def validate_environment(self) -> None:
        if not self.decoder.probe():
            raise VideoProcessingError(
                "FFmpeg is not installed or not in PATH. Please install FFmpeg first.",
                ErrorCode.DECODER_MISSING,
            )

        source = self.config.source_dir
        if not is_readable_dir(source):
            raise VideoProcessingError(
                f"Insufficient permissions to read {source}. Check folder permissions.",
                ErrorCode.PERMISSION_ERROR,
            )

        for out_dir in (self.extract_step.output_dir, self.grids_step.output_dir):
            try:
                ensure_dir(out_dir)
            except OSError as exc:
                raise VideoProcessingError(
                    f"Cannot create output folder {out_dir}: {exc}", ErrorCode.PERMISSION_ERROR
                ) from exc
            if not is_writable_dir(out_dir):
                raise VideoProcessingError(
                    f"Insufficient permissions to write {out_dir}. Check folder permissions.",
                    ErrorCode.PERMISSION_ERROR,
                )

    def locate_video(self) -> Path:
        formats = {f.lower() for f in self.config.supported_formats}
        try:
            candidates = sorted(
                p for p in self.config.source_dir.iterdir()
                if p.is_file() and p.suffix.lower() in formats
            )
            if not candidates:
                raise VideoProcessingError(
                    f"No video file found. Supported formats: {', '.join(sorted(formats))}",
                    ErrorCode.NO_VIDEO_FOUND,
                )
            if len(candidates) > 1:
                raise VideoProcessingError(
                    f"Multiple video files found ({len(candidates)}). Please keep only one video file",
                    ErrorCode.MULTIPLE_VIDEOS_FOUND,
                )
            video_path = candidates[0]
            if video_path.stat().st_size == 0:
                raise VideoProcessingError(f"Video file is empty: {video_path.name}", ErrorCode.EMPTY_FILE)
        except OSError as exc:
            raise VideoProcessingError(
                f"Error accessing video file: {exc}", ErrorCode.FILE_ACCESS_ERROR
            ) from exc
        logger.info(f"Found video: {video_path.name}")
        return video_path

    def read_duration(self, video_path: Path) -> float:
        try:
            duration = float(self.decoder.duration(video_path))
        except DecoderError as exc:
            code = exc.code if exc.code == ErrorCode.INVALID_DURATION else ErrorCode.DURATION_READ_ERROR
            raise VideoProcessingError(exc.message, code) from exc
        except Exception as exc:
            raise VideoProcessingError(
                f"Error reading video duration: {exc}", ErrorCode.DURATION_READ_ERROR
            ) from exc

        if not math.isfinite(duration) or duration <= 0:
            raise VideoProcessingError("Invalid video duration detected", ErrorCode.INVALID_DURATION)
        if duration > self.config.max_duration_seconds:
            raise VideoProcessingError(
                f"Video length {duration:.1f}s exceeds the {self.config.max_duration_seconds / 60:g} minute limit",
                ErrorCode.DURATION_TOO_LONG,
            )
        logger.info(f"Video duration: {duration:.2f}s")
        return duration

    # ── Run ──────────────────────────────────────────────────────────

    def run(self) -> PipelineResult:
        try:
            self._enter(PipelineState.VALIDATING_ENVIRONMENT)
            self.validate_environment()

            self._enter(PipelineState.LOCATING_VIDEO)
            video_path = self.locate_video()

            self._enter(PipelineState.READING_DURATION)
            duration = self.read_duration(video_path)
            video = VideoAsset(path=video_path, duration=duration, format=video_path.suffix.lower())
            plan = classify_duration(duration)

            self._enter(PipelineState.EXTRACTING_FRAMES)
            frames = self.extract_step.execute(
                ExtractFramesInput(video_path=video.path, duration_seconds=duration, sampling_plan=plan)
            )

            self._enter(PipelineState.COMPOSING_GRIDS)
            grids = self.grids_step.execute(ComposeGridsInput(frame_list=frames.frame_list))

            analysis = None
            if self.analyze_step is not None:
                self._enter(PipelineState.ANALYZING_GRIDS)
                analysis = self.analyze_step.execute(AnalyzeGridsInput(grid_list=grids.grid_list))

            category = duration_category(duration)
            logger.info(category)
            self._enter(PipelineState.DONE)
        except Exception as exc:
            failed_in = self.state
            self._enter(PipelineState.FAILED)
            err = wrap_error(exc)
            logger.error(f"Pipeline failed in {failed_in.value}: {err}")
            if err is exc:
                raise
            raise err from exc

        return PipelineResult(
            video=video,
            sampling_plan=plan,
            frames=frames,
            grids=grids,
            analysis=analysis,
            duration_category=category,
        )
