from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class Event(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    event_type: str


class BaseBranchesResolved(Event):
    event_type: str = "BaseBranchesResolved"
    base_branches: list[str] = Field(default_factory=list)


class BaseBranchSkipped(Event):
    event_type: str = "BaseBranchSkipped"
    base_branch: str
    reason: str = ""


class ExtractCompleted(Event):
    event_type: str = "ExtractCompleted"
    base_branch: str = ""
    package_file_count: int = 0
    duration_ms: int = 0


class LookupCompleted(Event):
    event_type: str = "LookupCompleted"
    base_branch: str = ""
    branch_count: int = 0
    duration_ms: int = 0


class PhaseCompleted(Event):
    event_type: str = "PhaseCompleted"
    phase: str
    duration_ms: int = 0


class BranchesSorted(Event):
    event_type: str = "BranchesSorted"
    branch_names: list[str] = Field(default_factory=list)


EVENT_TYPE_MAP: dict[str, type[Event]] = {
    "BaseBranchesResolved": BaseBranchesResolved,
    "BaseBranchSkipped": BaseBranchSkipped,
    "ExtractCompleted": ExtractCompleted,
    "LookupCompleted": LookupCompleted,
    "PhaseCompleted": PhaseCompleted,
    "BranchesSorted": BranchesSorted,
}
