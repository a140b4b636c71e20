from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UpdateType(str, Enum):
    PIN = "pin"
    DIGEST = "digest"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"
    LOCK_FILE_MAINTENANCE = "lockFileMaintenance"


class CandidateBranch(BaseModel):
    """A proposed update branch produced by the lookup phase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    branch_name: str | None = None
    # unrecognised update types are kept as plain strings
    update_type: UpdateType | str | None = Field(default=None, union_mode="left_to_right")
    pr_title: str | None = None
    pr_priority: int = 0
    is_vulnerability_alert: bool = False


class PrState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


class PullRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    number: int = 0
    source_branch: str
    state: PrState
    title: str = ""
