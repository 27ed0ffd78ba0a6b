"""Configuration for Step 01: Video to Frames."""

from pydantic import BaseModel, Field


class ExtractFramesConfig(BaseModel):
    output_subdir: str = Field("frames", description="Frames folder under the content root")
    frame_prefix: str = Field("frame", description="Frame file name prefix")
    image_format: str = Field("jpg", description="Frame image format (extension)")
    tail_offset_seconds: float = Field(
        0.1, gt=0, description="Distance of the last frame from the end of the video"
    )
    max_workers: int = Field(8, ge=1, description="Concurrent decoder invocations for interior frames")
