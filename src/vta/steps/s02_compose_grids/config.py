"""Configuration for Step 02: Frames to 2x2 grid composites."""

from pydantic import BaseModel, Field, model_validator


class ComposeGridsConfig(BaseModel):
    output_subdir: str = Field("grid", description="Grid folder under the content root")
    grid_prefix: str = Field("grid", description="Grid file name prefix")
    canvas_width: int = Field(1920, gt=0, description="Composite width in pixels")
    canvas_height: int = Field(1080, gt=0, description="Composite height in pixels")
    gap: int = Field(2, ge=0, description="Gap between quadrants in pixels")
    background: tuple[int, int, int] = Field((0, 0, 0), description="Canvas RGB fill")
    jpeg_quality: int = Field(100, ge=1, le=100, description="Composite JPEG quality")
    max_workers: int = Field(4, ge=1, description="Concurrent grid composites")

    @model_validator(mode="after")
    def _gap_fits_quadrant(self) -> "ComposeGridsConfig":
        if self.gap >= min(self.canvas_width // 2, self.canvas_height // 2):
            raise ValueError("gap must be smaller than a quadrant")
        return self
