from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from upkeep.models.branch import CandidateBranch


class PackageFile(BaseModel):
    """Parsed manifest as produced by an extractor; carried through untouched."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    package_file: str = ""
    deps: list[dict[str, Any]] = Field(default_factory=list)


PackageFiles = dict[str, list[PackageFile]]


class ExtractResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    branches: list[CandidateBranch] = Field(default_factory=list)
    branch_list: list[str] = Field(default_factory=list)
    package_files: PackageFiles = Field(default_factory=dict)
