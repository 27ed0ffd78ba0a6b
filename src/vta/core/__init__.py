"""vta core: contracts, errors, sampling, decoder, base step.

The pipeline runner and VideoPipeline import the step packages, so they are
imported from their own modules rather than re-exported here.
"""

from .step_base import BaseStep
from .contracts import (
    DecoderConfig,
    Frame,
    GridBatch,
    PipelineConfig,
    SamplingPlan,
    StepEntry,
    VideoAsset,
)
from .errors import DecoderError, ErrorCode, GridAnalysisError, VideoProcessingError, VTAError
from .sampling import classify_duration, frame_count, frame_timestamps
from .decoder import FFmpegDecoder, FrameDecoder
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "DecoderConfig",
    "Frame",
    "GridBatch",
    "PipelineConfig",
    "SamplingPlan",
    "StepEntry",
    "VideoAsset",
    "DecoderError",
    "ErrorCode",
    "GridAnalysisError",
    "VideoProcessingError",
    "VTAError",
    "classify_duration",
    "frame_count",
    "frame_timestamps",
    "FFmpegDecoder",
    "FrameDecoder",
    "setup_logging",
]
