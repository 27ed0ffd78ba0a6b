"""Step 03: Describe the recorded user actions from the grid composites."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import ClassVar

from vta.core.errors import ErrorCode, GridAnalysisError
from vta.core.step_base import BaseStep
from vta.utils.fs import is_readable_dir
from ._client import OpenAIVisionClient, VisionClient
from ._prompt import ANALYSIS_PROMPT, build_analysis_request
from ._report import parse_analysis, to_markdown
from .config import AnalyzeGridsConfig
from .contracts import AnalysisMetadata, AnalyzeGridsInput, AnalyzeGridsOutput

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png"}


def _numeric_key(path: Path) -> tuple[int, str]:
    match = re.search(r"\d+", path.name)
    return (int(match.group()) if match else 0, path.name)


class AnalyzeGridsStep(BaseStep[AnalyzeGridsInput, AnalyzeGridsOutput, AnalyzeGridsConfig]):
    name: ClassVar[str] = "analyze_grids"
    input_type: ClassVar = AnalyzeGridsInput
    output_type: ClassVar = AnalyzeGridsOutput
    config_type: ClassVar = AnalyzeGridsConfig
    failure_code: ClassVar = ErrorCode.ANALYSIS_ERROR
    failure_error: ClassVar = GridAnalysisError

    def __init__(
        self,
        config: AnalyzeGridsConfig,
        data_root: Path,
        client: VisionClient | None = None,
    ):
        super().__init__(config=config, data_root=data_root)
        self._client = client

    @property
    def client(self) -> VisionClient:
        # Built lazily so a missing key only fails when the step actually runs
        if self._client is None:
            self._client = OpenAIVisionClient.from_env(self.config.api_key_env)
        return self._client

    @property
    def grid_dir(self) -> Path:
        return self.data_root / self.config.grid_subdir

    @property
    def report_path(self) -> Path:
        suffix = ".json" if self.config.output_format == "json" else ".md"
        return self.data_root / f"{self.config.output_name}{suffix}"

    def validate_inputs(self, inputs: AnalyzeGridsInput) -> bool:
        if inputs.grid_list:
            return True
        if not is_readable_dir(self.grid_dir):
            raise GridAnalysisError(
                f"Cannot access grid folder {self.grid_dir}. Check it exists and is readable.",
                ErrorCode.FOLDER_ACCESS_ERROR,
            )
        return True

    def collect_grids(self, inputs: AnalyzeGridsInput) -> list[Path]:
        if inputs.grid_list:
            paths = [Path(p) for p in inputs.grid_list]
        else:
            paths = sorted(
                (p for p in self.grid_dir.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES),
                key=_numeric_key,
            )
        if not paths:
            raise GridAnalysisError("No image files found in the grid folder.", ErrorCode.NO_IMAGES_FOUND)
        return paths

    def run(self, inputs: AnalyzeGridsInput) -> AnalyzeGridsOutput:
        grids = self.collect_grids(inputs)
        logger.info(f"Found {len(grids)} grid images to analyze")

        request = build_analysis_request(
            grids,
            prompt=self.config.custom_prompt or ANALYSIS_PROMPT,
            model=self.config.model,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )
        analysis = parse_analysis(self.client.complete(request))
        analysis.metadata = AnalysisMetadata(
            analyzed_at=datetime.now(timezone.utc).isoformat(),
            total_frames=len(grids),
        )

        report = self.report_path
        report.parent.mkdir(parents=True, exist_ok=True)
        if self.config.output_format == "json":
            report.write_text(analysis.to_json(), encoding="utf-8")
        else:
            report.write_text(to_markdown(analysis), encoding="utf-8")
        logger.info(f"Analysis complete, saved to {report}")

        return AnalyzeGridsOutput(report_path=report, grid_count=len(grids), analysis=analysis)
