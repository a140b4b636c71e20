from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from upkeep.models.branch import PullRequest
from upkeep.platform.errors import NotFoundError, PlatformError
from upkeep.scm import git_ops


class LocalPlatform:
    """Platform backed by a local clone. It has no pull requests."""

    def __init__(self, repo_path: Path) -> None:
        self._repo_path = repo_path

    async def get_branch_pr(self, branch_name: str) -> PullRequest | None:
        return None

    async def get_json_file(self, file_name: str, repository: str, ref: str | None = None) -> dict[str, Any]:
        try:
            raw = await asyncio.to_thread(git_ops.show_file, ref or "HEAD", file_name, cwd=self._repo_path)
        except git_ops.GitError as e:
            raise NotFoundError(f"{file_name} not found at {ref or 'HEAD'}: {e.stderr}") from e
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PlatformError(f"Invalid JSON in {file_name} at {ref or 'HEAD'}: {e}") from e
        if not isinstance(document, dict):
            raise PlatformError(f"{file_name} at {ref or 'HEAD'} is not a JSON object")
        return document
