from __future__ import annotations

import json
from typing import Any

import httpx

from upkeep.models.branch import PrState, PullRequest
from upkeep.platform.errors import NotFoundError, PlatformConnectionError, PlatformError


class GitHubPlatform:
    """GitHub REST v3 client covering the calls the engine needs."""

    def __init__(
        self,
        repository: str,
        base_url: str = "https://api.github.com",
        token: str = "",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._repository = repository
        self._base_url = base_url.rstrip("/")
        headers = {"Accept": "application/vnd.github+json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = http_client or httpx.AsyncClient(
            base_url=self._base_url, headers=headers, timeout=30.0
        )

    @property
    def owner(self) -> str:
        return self._repository.partition("/")[0]

    async def _get(self, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.get(path, **kwargs)
        except httpx.TransportError as e:
            raise PlatformConnectionError(
                f"Cannot connect to {self._base_url}: {e}"
            ) from e
        if response.status_code == 404:
            raise NotFoundError(f"GET {path} returned 404")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PlatformError(f"GET {path} failed: {e}") from e
        return response

    async def get_json_file(self, file_name: str, repository: str, ref: str | None = None) -> dict[str, Any]:
        params = {"ref": ref} if ref else {}
        response = await self._get(
            f"/repos/{repository}/contents/{file_name}",
            params=params,
            headers={"Accept": "application/vnd.github.raw+json"},
        )
        try:
            document = json.loads(response.text)
        except json.JSONDecodeError as e:
            raise PlatformError(f"Invalid JSON in {file_name} at {ref}: {e}") from e
        if not isinstance(document, dict):
            raise PlatformError(f"{file_name} at {ref} is not a JSON object")
        return document

    async def get_branch_pr(self, branch_name: str) -> PullRequest | None:
        response = await self._get(
            f"/repos/{self._repository}/pulls",
            params={"head": f"{self.owner}:{branch_name}", "state": "all", "per_page": 1},
        )
        body = response.json()
        if not isinstance(body, list) or not body:
            return None
        raw = body[0]
        if raw.get("state") == "open":
            state = PrState.OPEN
        elif raw.get("merged_at"):
            state = PrState.MERGED
        else:
            state = PrState.CLOSED
        return PullRequest(
            number=raw.get("number", 0),
            source_branch=branch_name,
            state=state,
            title=raw.get("title", ""),
        )

    async def close(self) -> None:
        await self._client.aclose()
