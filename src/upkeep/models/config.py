from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DryRun(str, Enum):
    EXTRACT = "extract"
    LOOKUP = "lookup"
    FULL = "full"


class UseBaseBranchConfig(str, Enum):
    NONE = "none"
    MERGE = "merge"


class RepositoryConfig(BaseModel):
    """Resolved configuration for one repository run.

    Field names are snake_case in Python and camelCase in config documents.
    Keys this engine does not know about are kept so that collaborators
    (extractors, lookups) still see them after merging.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    repository: str = ""
    default_branch: str = ""
    base_branches: list[str] = Field(default_factory=list)
    use_base_branch_config: UseBaseBranchConfig = UseBaseBranchConfig.NONE
    branch_prefix: str = "upkeep/"
    branch_prefix_old: str = "upkeep/"
    dry_run: DryRun | None = None
    has_base_branches: bool = False
    base_branch: str | None = None
    print_config: bool = False
    extends: list[str] = Field(default_factory=list)
    ignore_presets: list[str] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
