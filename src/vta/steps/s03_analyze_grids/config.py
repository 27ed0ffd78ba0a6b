"""Configuration for Step 03: Grid analysis with a vision model."""

from typing import Literal

from pydantic import BaseModel, Field


class AnalyzeGridsConfig(BaseModel):
    model: str = Field("gpt-4o", description="Vision-capable chat model")
    max_tokens: int = Field(2000, gt=0)
    temperature: float = Field(0.0, ge=0, le=2)
    output_format: Literal["json", "markdown"] = Field("json", description="Saved report format")
    output_name: str = Field("grid_analysis", description="Report file stem under the content root")
    custom_prompt: str = Field("", description="Replaces the built-in prompt when set")
    api_key_env: str = Field("OPENAI_API_KEY", description="Environment variable holding the API key")
    grid_subdir: str = Field("grid", description="Grid folder read when no grid list is given")
