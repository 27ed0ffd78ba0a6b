"""Step 02: Pack the ordered frames into 2x2 grid composites."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import ClassVar

from vta.core.contracts import GridBatch
from vta.core.errors import ErrorCode, VideoProcessingError
from vta.core.step_base import BaseStep
from vta.utils.fs import indexed_name, purge_directory
from vta.utils.tasks import run_indexed
from ._composer import QUADRANTS, GridComposer
from .config import ComposeGridsConfig
from .contracts import ComposeGridsInput, ComposeGridsOutput

logger = logging.getLogger(__name__)


def batch_frames(frame_list: list[str], output_dir: Path, prefix: str = "grid") -> list[GridBatch]:
    """Consecutive chunks of at most four frames, in frame order."""
    return [
        GridBatch(
            index=i,
            frames=[Path(p) for p in frame_list[start:start + QUADRANTS]],
            output_path=output_dir / indexed_name(prefix, i, "jpg"),
        )
        for i, start in enumerate(range(0, len(frame_list), QUADRANTS))
    ]


class ComposeGridsStep(BaseStep[ComposeGridsInput, ComposeGridsOutput, ComposeGridsConfig]):
    name: ClassVar[str] = "compose_grids"
    input_type: ClassVar = ComposeGridsInput
    output_type: ClassVar = ComposeGridsOutput
    config_type: ClassVar = ComposeGridsConfig
    failure_code: ClassVar = ErrorCode.GRID_COMPOSITION_ERROR

    def __init__(self, config: ComposeGridsConfig, data_root: Path):
        super().__init__(config=config, data_root=data_root)
        self.composer = GridComposer(
            width=config.canvas_width,
            height=config.canvas_height,
            gap=config.gap,
            background=config.background,
            quality=config.jpeg_quality,
        )

    @property
    def output_dir(self) -> Path:
        return self.data_root / self.config.output_subdir

    def validate_inputs(self, inputs: ComposeGridsInput) -> bool:
        missing = [p for p in inputs.frame_list if not Path(p).is_file()]
        if missing:
            logger.error(f"{len(missing)} frame(s) not found, first: {missing[0]}")
            return False
        return True

    def run(self, inputs: ComposeGridsInput) -> ComposeGridsOutput:
        purge_directory(self.output_dir)
        batches = batch_frames(inputs.frame_list, self.output_dir, self.config.grid_prefix)

        written = run_indexed(
            lambda _, batch: self.composer.compose(batch.frames, batch.output_path),
            batches,
            self.config.max_workers,
        )

        expected = math.ceil(len(inputs.frame_list) / QUADRANTS)
        if len(written) != expected:
            raise VideoProcessingError(
                f"Expected {expected} grids, wrote {len(written)}", ErrorCode.GRID_COMPOSITION_ERROR
            )

        logger.info(f"Created {len(written)} grid{'' if len(written) == 1 else 's'}")
        return ComposeGridsOutput(
            grid_dir=self.output_dir,
            grid_count=len(written),
            batches=batches,
            grid_list=[str(p) for p in written],
        )
