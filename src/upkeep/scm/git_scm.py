from __future__ import annotations

import asyncio
from pathlib import Path

from upkeep.scm import git_ops


class GitScm:
    """Async view of a local clone's branches.

    Every call lists branches afresh; nothing is cached between calls.
    """

    def __init__(self, repo_path: Path, remote: str | None = None) -> None:
        self._repo_path = repo_path
        self._remote = remote

    async def get_branch_list(self) -> list[str]:
        return await asyncio.to_thread(git_ops.list_branches, remote=self._remote, cwd=self._repo_path)

    async def branch_exists(self, name: str) -> bool:
        return name in await self.get_branch_list()

    async def list_files(self, ref: str) -> list[str]:
        return await asyncio.to_thread(git_ops.ls_tree, ref, cwd=self._repo_path)
