"""Base class for all pipeline steps.

Every step declares typed Input, Output, Config via Pydantic models so the
runner can build a step from YAML, feed it the previous step's output and
print its JSON schema from the CLI.
"""

from __future__ import annotations

import time
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar, ClassVar

from pydantic import BaseModel

from .errors import ErrorCode, VideoProcessingError, VTAError, wrap_error

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """Abstract base for pipeline steps.

    Subclasses must:
    1. Define concrete Pydantic models for InputT, OutputT, ConfigT
    2. Set class variables: input_type, output_type, config_type
    3. Implement run() and validate_inputs()
    4. Optionally set failure_code/failure_error so untyped failures from
       run() are wrapped into the right taxonomy value

    Example:
        class ComposeGridsStep(BaseStep[GridsInput, GridsOutput, GridsConfig]):
            input_type = GridsInput
            output_type = GridsOutput
            config_type = GridsConfig

            def run(self, inputs: GridsInput) -> GridsOutput: ...
            def validate_inputs(self, inputs: GridsInput) -> bool: ...
    """

    name: ClassVar[str] = ""
    input_type: ClassVar[type[BaseModel]]
    output_type: ClassVar[type[BaseModel]]
    config_type: ClassVar[type[BaseModel]]
    failure_code: ClassVar[ErrorCode] = ErrorCode.UNKNOWN_ERROR
    failure_error: ClassVar[type[VTAError]] = VideoProcessingError

    def __init__(self, config: ConfigT, data_root: Path):
        self.config = config
        self.data_root = Path(data_root)

    @abstractmethod
    def run(self, inputs: InputT) -> OutputT:
        """Execute this pipeline step. Returns output model."""
        ...

    @abstractmethod
    def validate_inputs(self, inputs: InputT) -> bool:
        """Check that all required input artifacts exist and are valid."""
        ...

    def execute(self, inputs: InputT) -> OutputT:
        """Run with logging, timing, validation and error wrapping."""
        step_name = self.name or self.__class__.__name__
        logger.info(f"[{step_name}] Validating inputs...")

        if not self.validate_inputs(inputs):
            raise self.failure_error(f"[{step_name}] Input validation failed", self.failure_code)

        logger.info(f"[{step_name}] Starting...")
        t0 = time.time()
        try:
            result = self.run(inputs)
        except Exception as exc:
            err = wrap_error(exc, self.failure_code, f"[{step_name}] failed", self.failure_error)
            if err is exc:
                raise
            raise err from exc
        elapsed = time.time() - t0
        logger.info(f"[{step_name}] Done in {elapsed:.1f}s")
        return result

    @classmethod
    def get_input_schema(cls) -> dict:
        """Return JSON schema for inputs."""
        return cls.input_type.model_json_schema()

    @classmethod
    def get_output_schema(cls) -> dict:
        """Return JSON schema for outputs."""
        return cls.output_type.model_json_schema()

    @classmethod
    def get_config_schema(cls) -> dict:
        """Return JSON schema for config."""
        return cls.config_type.model_json_schema()
