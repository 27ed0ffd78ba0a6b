"""Prompt and request payload for the grid analysis call."""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Any, Sequence

ANALYSIS_PROMPT = """You are a browser automation expert. Analyze these sequential frames and provide a structured analysis for automation.

Each image is a 2x2 grid of consecutive frames, ordered top-left, top-right, bottom-left, bottom-right. Images are in chronological order.

Provide:

1. User-friendly summary:
   - Simple description of the observed action
   - Main goal identified
   - Type of task (e.g. "Download Operation", "Data Entry", "Navigation")

2. Technical details (for automation):
   - Page URL patterns
   - Exact button texts/selectors used
   - User inputs detected
   - Wait conditions needed
   - Download/upload operations
   - State changes

Return ONLY JSON in this format:
{
  "userView": {
    "taskType": "Type of operation",
    "summary": "What the user did in simple terms",
    "actionSequence": ["Step 1", "Step 2"],
    "possibleAutomations": ["Option 1", "Option 2"]
  },
  "technicalDetails": {
    "frames": [{
      "url": "URL pattern",
      "mainAction": "Primary action in frame",
      "selectors": ["Exact selectors found"],
      "waitConditions": ["Any waits needed"],
      "stateChanges": ["State changes to verify"]
    }],
    "automationNotes": {
      "criticalElements": ["Key elements to verify"],
      "errorScenarios": ["Possible failure points"],
      "dynamicContent": ["Elements that might change"]
    }
  }
}"""


def encode_image(path: Path) -> str:
    """JPEG file as a base64 data URL."""
    data = base64.b64encode(Path(path).read_bytes()).decode("ascii")
    return f"data:image/jpeg;base64,{data}"


def build_analysis_request(
    grid_paths: Sequence[Path],
    prompt: str = ANALYSIS_PROMPT,
    model: str = "gpt-4o",
    max_tokens: int = 2000,
    temperature: float = 0.0,
) -> dict[str, Any]:
    """Chat-completions request: the prompt followed by every grid, in order."""
    content: list[dict[str, Any]] = [{"type": "text", "text": prompt}]
    content.extend(
        {"type": "image_url", "image_url": {"url": encode_image(p)}} for p in grid_paths
    )
    return {
        "model": model,
        "messages": [{"role": "user", "content": content}],
        "max_tokens": max_tokens,
        "temperature": temperature,
    }
