"""I/O contracts for Step 01: Video to Frames extraction."""

from pathlib import Path
from pydantic import BaseModel, Field

from vta.core.contracts import Frame, SamplingPlan


class ExtractFramesInput(BaseModel):
    video_path: Path = Field(..., description="Path to the input video file")
    duration_seconds: float | None = Field(
        None, gt=0, description="Video duration; probed with the decoder when omitted"
    )
    sampling_plan: SamplingPlan | None = Field(
        None, description="Sampling plan; derived from the duration when omitted"
    )


class ExtractFramesOutput(BaseModel):
    frames_dir: Path = Field(..., description="Directory containing extracted frames")
    frame_count: int = Field(..., description="Number of frames extracted")
    sampling_plan: SamplingPlan = Field(..., description="Plan the frames were sampled with")
    frames: list[Frame] = Field(default_factory=list, description="Frames in index order")
    frame_list: list[str] = Field(default_factory=list, description="Sorted frame file paths")
