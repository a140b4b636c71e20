from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from upkeep.models.config import RepositoryConfig
    from upkeep.models.package_file import ExtractResult, PackageFiles


@runtime_checkable
class ManifestExtractor(Protocol):
    async def extract(self, config: RepositoryConfig) -> PackageFiles: ...


@runtime_checkable
class UpdateLookup(Protocol):
    """Turns extracted package files into candidate update branches.

    Returning ``None`` means "nothing to update" and is treated as an empty
    result.
    """

    async def lookup(self, config: RepositoryConfig, package_files: PackageFiles) -> ExtractResult | None: ...


def count_package_files(package_files: PackageFiles | None) -> int:
    return sum(len(files) for files in (package_files or {}).values())
