"""Parsing the model reply and rendering the saved report."""

from __future__ import annotations

import json
import re

from pydantic import ValidationError

from vta.core.errors import ErrorCode, GridAnalysisError
from .contracts import GridAnalysis

_FENCE = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$")


def parse_analysis(text: str) -> GridAnalysis:
    """Strip code fences, parse JSON and check the gross shape."""
    cleaned = _FENCE.sub("", text).strip()
    try:
        return GridAnalysis.model_validate(json.loads(cleaned))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise GridAnalysisError(
            f"Invalid API response format: {exc}", ErrorCode.INVALID_RESPONSE_FORMAT
        ) from exc


def _bullets(items: list[str], indent: str = "", code: bool = False) -> str:
    return "\n".join(f"{indent}- `{i}`" if code else f"{indent}- {i}" for i in items)


def to_markdown(analysis: GridAnalysis) -> str:
    uv = analysis.user_view
    td = analysis.technical_details
    notes = td.automation_notes

    lines = [
        "# UI Automation Analysis",
        "",
        "## User View",
        f"- Task Type: {uv.task_type}",
        f"- Summary: {uv.summary}",
        "",
        "### Action Sequence",
        "\n".join(f"{i}. {step}" for i, step in enumerate(uv.action_sequence, 1)),
        "",
        "### Possible Automations",
        _bullets(uv.possible_automations),
        "",
        "## Technical Details",
        "",
        "### Frame Analysis",
    ]
    for frame in td.frames:
        lines += [
            "",
            f"#### {frame.main_action}",
            f"- URL: {frame.url}",
            "- Selectors:",
            _bullets(frame.selectors, "  ", code=True),
            "- Wait Conditions:",
            _bullets(frame.wait_conditions, "  "),
            "- State Changes:",
            _bullets(frame.state_changes, "  "),
        ]
    lines += [
        "",
        "### Automation Notes",
        "- Critical Elements:",
        _bullets(notes.critical_elements, "  "),
        "- Error Scenarios:",
        _bullets(notes.error_scenarios, "  "),
        "- Dynamic Content:",
        _bullets(notes.dynamic_content, "  "),
    ]
    if analysis.metadata is not None:
        lines += [
            "",
            "## Metadata",
            f"- Analyzed At: {analysis.metadata.analyzed_at}",
            f"- Total Frames: {analysis.metadata.total_frames}",
        ]
    return "\n".join(lines) + "\n"
