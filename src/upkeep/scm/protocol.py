from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Scm(Protocol):
    async def branch_exists(self, name: str) -> bool: ...

    async def get_branch_list(self) -> list[str]: ...
