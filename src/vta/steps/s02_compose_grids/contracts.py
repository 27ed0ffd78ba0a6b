"""I/O contracts for Step 02: grid composition."""

from pathlib import Path
from pydantic import BaseModel, Field

from vta.core.contracts import GridBatch


class ComposeGridsInput(BaseModel):
    frame_list: list[str] = Field(..., min_length=1, description="Ordered frame file paths")


class ComposeGridsOutput(BaseModel):
    grid_dir: Path = Field(..., description="Directory containing grid composites")
    grid_count: int = Field(..., description="Number of composites written")
    batches: list[GridBatch] = Field(default_factory=list, description="Frame batches in grid order")
    grid_list: list[str] = Field(default_factory=list, description="Sorted grid file paths")
