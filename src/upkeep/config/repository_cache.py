from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RepositoryCache:
    """Per-run facts discovered about the repository, passed to whoever needs them."""

    config_file_name: str | None = None
