"""Common Pydantic models shared across pipeline steps."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class SamplingPlan(BaseModel):
    """Frame-sampling cadence chosen from the video duration bucket."""

    model_config = ConfigDict(frozen=True)

    interval_seconds: float = Field(..., gt=0)
    max_frames: int = Field(..., gt=0)


class VideoAsset(BaseModel):
    """The single source video discovered for a run. Never mutated."""

    model_config = ConfigDict(frozen=True)

    path: Path
    duration: float = Field(..., gt=0, description="Duration in seconds")
    format: str = Field(..., description="Lower-case extension, e.g. '.mp4'")


class Frame(BaseModel):
    """One extracted still: ordered index, source timestamp and output path."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    timestamp: float = Field(..., ge=0)
    path: Path


class GridBatch(BaseModel):
    """Up to four consecutive frames packed into one composite."""

    index: int = Field(..., ge=0)
    frames: list[Path] = Field(..., min_length=1, max_length=4)
    output_path: Path


class DecoderConfig(BaseModel):
    """External decoder binaries."""

    ffmpeg_bin: str = "ffmpeg"
    ffprobe_bin: str = "ffprobe"
    qscale: int = Field(1, ge=1, le=31, description="JPEG quality scale for extracted frames (1 = best)")


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "vta_project"
    data_root: Path = Path("./content")
    source_subdir: str = Field("automate", description="Folder holding the single input video")
    decoder: DecoderConfig = Field(default_factory=DecoderConfig)
    max_duration_seconds: float = Field(300.0, gt=0)
    supported_formats: list[str] = Field(
        default_factory=lambda: [".mp4", ".mov", ".avi", ".mkv", ".wmv"]
    )
    steps: list[StepEntry] = Field(default_factory=list)

    @property
    def source_dir(self) -> Path:
        return self.data_root / self.source_subdir

    def step(self, name: str) -> StepEntry | None:
        return next((s for s in self.steps if s.name == name), None)


class StepEntry(BaseModel):
    """One entry in the pipeline step list."""

    name: str
    module: str
    config_file: str
    depends_on: list[str] = Field(default_factory=list)
    enabled: bool = True


# Fix forward reference
PipelineConfig.model_rebuild()
