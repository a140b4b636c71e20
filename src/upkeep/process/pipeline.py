from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from upkeep.logging_context import add_meta, remove_meta
from upkeep.models.config import DryRun, RepositoryConfig
from upkeep.models.package_file import ExtractResult, PackageFiles
from upkeep.process.base_branches import expand_base_branches
from upkeep.process.extract_update import count_package_files

if TYPE_CHECKING:
    from upkeep.process.base_branch_config import BaseBranchConfigResolver
    from upkeep.process.extract_update import ManifestExtractor, UpdateLookup
    from upkeep.process.snapshot import PackageFileSnapshotWriter
    from upkeep.scm.protocol import Scm

logger = logging.getLogger(__name__)

# Platforms that can only ever see the checked-out branch.
SINGLE_BRANCH_PLATFORMS = frozenset({"local"})


class EventEmitter(Protocol):
    def emit(self, event_type: str, **data: Any) -> None: ...


@dataclass
class BaseBranchResult:
    base_branch: str
    config: RepositoryConfig
    package_files: PackageFiles
    lookup: ExtractResult | None = None


class ExtractionLookupPipeline:
    """Extracts package files and looks up updates for every base branch.

    With several base branches, every branch is extracted before any lookup
    starts, so all lookups work from manifests read at (nearly) the same
    moment. Branches are processed one at a time, in configured order.
    """

    def __init__(
        self,
        scm: Scm,
        extractor: ManifestExtractor,
        lookup: UpdateLookup,
        config_resolver: BaseBranchConfigResolver,
        *,
        platform_name: str = "github",
        event_emitter: EventEmitter | None = None,
        snapshot_writer: PackageFileSnapshotWriter | None = None,
    ) -> None:
        self._scm = scm
        self._extractor = extractor
        self._lookup = lookup
        self._resolver = config_resolver
        self._platform_name = platform_name
        self._emitter = event_emitter
        self._snapshot_writer = snapshot_writer
        self.splits: dict[str, int] = {}
        self.base_branch_results: dict[str, BaseBranchResult] = {}
        self._last_split = 0.0

    async def run(self, config: RepositoryConfig) -> ExtractResult:
        self.splits = {}
        self.base_branch_results = {}
        self._last_split = time.monotonic()

        if self._platform_name not in SINGLE_BRANCH_PLATFORMS and config.base_branches:
            return await self._run_base_branches(config)
        return await self._run_single(config)

    async def _run_single(self, config: RepositoryConfig) -> ExtractResult:
        logger.debug("No baseBranches")
        label = config.base_branch or ""

        started = time.monotonic()
        package_files = await self._extractor.extract(config) or {}
        self._emit(
            "ExtractCompleted",
            base_branch=label,
            package_file_count=count_package_files(package_files),
            duration_ms=_elapsed_ms(started),
        )
        self._add_split("extract")

        if config.dry_run == DryRun.EXTRACT:
            logger.info("Extracted dependencies: %s", _describe(package_files))
            return ExtractResult(package_files=package_files)

        started = time.monotonic()
        result = await self._lookup.lookup(config, package_files) or ExtractResult()
        self._emit(
            "LookupCompleted",
            base_branch=label,
            branch_count=len(result.branches),
            duration_ms=_elapsed_ms(started),
        )

        self._save_snapshot(config.repository, label, package_files)
        self._add_split("lookup")
        return result

    async def _run_base_branches(self, config: RepositoryConfig) -> ExtractResult:
        live_branches = await self._scm.get_branch_list()
        run_config = config.model_copy(deep=True)
        run_config.base_branches = expand_base_branches(
            config.default_branch, config.base_branches, live_branches
        )
        logger.debug("baseBranches: %s", run_config.base_branches)
        self._emit("BaseBranchesResolved", base_branches=list(run_config.base_branches))

        try:
            extracted = await self._extract_all(run_config)
            self.base_branch_results = extracted
            self._add_split("extract")
            result = await self._lookup_all(run_config, extracted)
        finally:
            remove_meta("baseBranch")

        self._add_split("lookup")
        return result

    async def _extract_all(self, run_config: RepositoryConfig) -> dict[str, BaseBranchResult]:
        extracted: dict[str, BaseBranchResult] = {}
        for base_branch in run_config.base_branches:
            add_meta(baseBranch=base_branch)
            if not await self._scm.branch_exists(base_branch):
                logger.warning("Base branch does not exist - skipping: %s", base_branch)
                self._emit("BaseBranchSkipped", base_branch=base_branch, reason="branch does not exist")
                continue

            branch_config = await self._resolver.resolve(base_branch, run_config)
            started = time.monotonic()
            package_files = await self._extractor.extract(branch_config) or {}
            self._emit(
                "ExtractCompleted",
                base_branch=base_branch,
                package_file_count=count_package_files(package_files),
                duration_ms=_elapsed_ms(started),
            )
            extracted[base_branch] = BaseBranchResult(
                base_branch=base_branch,
                config=branch_config,
                package_files=package_files,
            )
        return extracted

    async def _lookup_all(
        self, run_config: RepositoryConfig, extracted: dict[str, BaseBranchResult]
    ) -> ExtractResult:
        result = ExtractResult()
        for base_branch in run_config.base_branches:
            if not await self._scm.branch_exists(base_branch):
                continue
            branch_result = extracted.get(base_branch)
            if branch_result is None:
                logger.warning("Base branch %s appeared after extraction - skipping", base_branch)
                continue

            add_meta(baseBranch=base_branch)
            branch_config = await self._resolver.resolve(base_branch, run_config)
            started = time.monotonic()
            lookup = await self._lookup.lookup(branch_config, branch_result.package_files) or ExtractResult()
            branch_result.lookup = lookup
            self._emit(
                "LookupCompleted",
                base_branch=base_branch,
                branch_count=len(lookup.branches),
                duration_ms=_elapsed_ms(started),
            )

            result.branches.extend(lookup.branches)
            result.branch_list.extend(lookup.branch_list)
            if not result.package_files:
                # the first base branch with package files wins
                result.package_files = lookup.package_files

            self._save_snapshot(run_config.repository, base_branch, branch_result.package_files)
        return result

    def _save_snapshot(self, repository: str, base_branch: str, package_files: PackageFiles) -> None:
        if self._snapshot_writer is not None:
            self._snapshot_writer.write(repository, base_branch, package_files)

    def _add_split(self, name: str) -> None:
        now = time.monotonic()
        duration_ms = int((now - self._last_split) * 1000)
        self._last_split = now
        self.splits[name] = duration_ms
        self._emit("PhaseCompleted", phase=name, duration_ms=duration_ms)

    def _emit(self, event_type: str, **data: Any) -> None:
        if self._emitter is not None:
            self._emitter.emit(event_type, **data)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def _describe(package_files: PackageFiles) -> dict[str, list[str]]:
    return {
        manager: [pf.package_file for pf in files]
        for manager, files in (package_files or {}).items()
    }
