"""I/O contracts for Step 03 and the shape of the vision model's reply.

Field names follow the camelCase keys the model is asked to return.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class _Reply(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class UserView(_Reply):
    task_type: str = Field("", alias="taskType")
    summary: str = ""
    action_sequence: list[str] = Field(..., alias="actionSequence")
    possible_automations: list[str] = Field(..., alias="possibleAutomations")


class FrameNote(_Reply):
    url: str = ""
    main_action: str = Field("", alias="mainAction")
    selectors: list[str] = Field(default_factory=list)
    wait_conditions: list[str] = Field(default_factory=list, alias="waitConditions")
    state_changes: list[str] = Field(default_factory=list, alias="stateChanges")


class AutomationNotes(_Reply):
    critical_elements: list[str] = Field(..., alias="criticalElements")
    error_scenarios: list[str] = Field(default_factory=list, alias="errorScenarios")
    dynamic_content: list[str] = Field(default_factory=list, alias="dynamicContent")


class TechnicalDetails(_Reply):
    frames: list[FrameNote]
    automation_notes: AutomationNotes = Field(..., alias="automationNotes")


class AnalysisMetadata(_Reply):
    analyzed_at: str = Field(..., alias="analyzedAt")
    total_frames: int = Field(..., alias="totalFrames")


class GridAnalysis(_Reply):
    user_view: UserView = Field(..., alias="userView")
    technical_details: TechnicalDetails = Field(..., alias="technicalDetails")
    metadata: AnalysisMetadata | None = None

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class AnalyzeGridsInput(BaseModel):
    grid_list: list[str] = Field(
        default_factory=list, description="Ordered grid paths; the grid folder is scanned when empty"
    )


class AnalyzeGridsOutput(BaseModel):
    report_path: Path = Field(..., description="Saved analysis report")
    grid_count: int = Field(..., description="Number of grids sent to the model")
    analysis: GridAnalysis
