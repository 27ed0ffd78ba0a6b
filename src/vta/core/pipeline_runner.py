"""Pipeline orchestrator: reads pipeline.yaml, builds the steps and runs them."""

from __future__ import annotations

import importlib
import inspect
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from .contracts import PipelineConfig
from .decoder import FFmpegDecoder, FrameDecoder
from .errors import ErrorCode, VideoProcessingError
from .step_base import BaseStep
from .video_pipeline import PipelineResult, VideoPipeline

logger = logging.getLogger(__name__)


def load_pipeline_config(config_path: Path) -> PipelineConfig:
    """Load and validate pipeline.yaml."""
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return PipelineConfig(**raw)


def load_step_config(config_path: Path, config_class: type[BaseModel]) -> BaseModel:
    """Load a step-specific YAML config into its Pydantic model.

    A missing or empty file gives the model defaults.
    """
    if not config_path.exists():
        logger.warning(f"Step config {config_path} not found, using defaults")
        return config_class()
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return config_class(**raw)


def import_step_class(module_path: str):
    """Dynamically import a step class from its module path.

    Expects module_path like 'vta.steps.s01_extract_frames'
    and looks for a class ending in 'Step' in that module's step.py.
    """
    step_module = importlib.import_module(f"{module_path}.step")
    for attr_name in dir(step_module):
        attr = getattr(step_module, attr_name)
        if (
            isinstance(attr, type)
            and hasattr(attr, "run")
            and attr_name.endswith("Step")
            and attr_name != "BaseStep"
        ):
            return attr
    raise ImportError(f"No Step class found in {module_path}.step")


def instantiate_step(
    step_cls: type[BaseStep],
    step_config: BaseModel,
    data_root: Path,
    services: dict[str, Any] | None = None,
) -> BaseStep:
    """Build a step, passing only the services its constructor accepts."""
    accepted = inspect.signature(step_cls.__init__).parameters
    kwargs = {k: v for k, v in (services or {}).items() if k in accepted and v is not None}
    return step_cls(config=step_config, data_root=data_root, **kwargs)


def build_pipeline(
    pipeline_cfg: PipelineConfig,
    decoder: FrameDecoder | None = None,
    client: Any = None,
) -> VideoPipeline:
    """Construct a VideoPipeline from the enabled step entries."""
    decoder = decoder or FFmpegDecoder.from_config(pipeline_cfg.decoder)
    services = {"decoder": decoder, "client": client}

    steps: dict[str, BaseStep] = {}
    for entry in (s for s in pipeline_cfg.steps if s.enabled):
        step_cls = import_step_class(entry.module)
        step_config = load_step_config(Path(entry.config_file), step_cls.config_type)
        steps[step_cls.name] = instantiate_step(step_cls, step_config, pipeline_cfg.data_root, services)
        logger.debug(f"Configured step {entry.name} ({step_cls.__name__})")

    for required in ("extract_frames", "compose_grids"):
        if required not in steps:
            raise VideoProcessingError(
                f"Pipeline config must enable the '{required}' step", ErrorCode.UNKNOWN_ERROR
            )

    return VideoPipeline(
        pipeline_cfg,
        decoder,
        extract_step=steps["extract_frames"],
        grids_step=steps["compose_grids"],
        analyze_step=steps.get("analyze_grids"),
    )


def run_pipeline(
    config_path: Path,
    decoder: FrameDecoder | None = None,
    client: Any = None,
) -> PipelineResult:
    """Execute the full pipeline from a config file."""
    pipeline_cfg = load_pipeline_config(config_path)
    enabled = [s.name for s in pipeline_cfg.steps if s.enabled]
    logger.info(f"Pipeline '{pipeline_cfg.project_name}' with {len(enabled)} steps: {', '.join(enabled)}")

    result = build_pipeline(pipeline_cfg, decoder=decoder, client=client).run()
    logger.info("Pipeline complete.")
    return result
