"""Vision model client seam."""

from __future__ import annotations

import logging
import os
from typing import Any, Protocol

from vta.core.errors import ErrorCode, GridAnalysisError

logger = logging.getLogger(__name__)


class VisionClient(Protocol):
    def complete(self, request: dict[str, Any]) -> str:
        """Send a chat-completions request and return the reply text."""
        ...


class OpenAIVisionClient:
    """VisionClient backed by the OpenAI SDK."""

    def __init__(self, api_key: str):
        from openai import OpenAI

        self.client = OpenAI(api_key=api_key)

    @classmethod
    def from_env(cls, api_key_env: str = "OPENAI_API_KEY") -> OpenAIVisionClient:
        from dotenv import load_dotenv

        load_dotenv()
        api_key = os.environ.get(api_key_env)
        if not api_key:
            raise GridAnalysisError(
                f"OpenAI API key is required. Set {api_key_env} in the environment or .env file.",
                ErrorCode.API_KEY_MISSING,
            )
        return cls(api_key=api_key)

    def complete(self, request: dict[str, Any]) -> str:
        logger.info(f"Requesting analysis from {request.get('model')}")
        response = self.client.chat.completions.create(**request)
        return response.choices[0].message.content or "{}"
