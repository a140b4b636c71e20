from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from upkeep.models.package_file import PackageFiles

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("/tmp/upkeep-output")


class PackageFileSnapshotWriter:
    """Writes extracted package files to disk for debugging.

    Only active when ``root`` already exists. Never raises.
    """

    def __init__(self, root: Path = DEFAULT_OUTPUT_DIR) -> None:
        self._root = root

    def snapshot_path(self, repository: str, base_branch: str) -> Path | None:
        org, _, repo = repository.partition("/")
        if not org or not repo:
            return None
        escaped_branch = base_branch.replace("/", "#slash#")
        return self._root / org / f"{repo},{escaped_branch},package-files.json"

    def write(self, repository: str, base_branch: str, package_files: PackageFiles | None) -> None:
        if not self._root.exists():
            return

        path = self.snapshot_path(repository, base_branch)
        if path is None:
            return

        try:
            payload = {
                manager: [pf.model_dump(by_alias=True, mode="json") for pf in files]
                for manager, files in (package_files or {}).items()
            }
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload))
        except Exception:
            logger.error("Failed to save the output packageFiles file %s", path, exc_info=True)
