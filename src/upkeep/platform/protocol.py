from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from upkeep.models.branch import PullRequest


@runtime_checkable
class Platform(Protocol):
    async def get_branch_pr(self, branch_name: str) -> PullRequest | None: ...

    async def get_json_file(self, file_name: str, repository: str, ref: str | None = None) -> dict[str, Any]:
        """Read and parse a JSON file; raises NotFoundError when it is absent."""
        ...
