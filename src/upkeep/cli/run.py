from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer

from upkeep.cli.service_factory import build_platform, close_platform, load_collaborator
from upkeep.config.errors import ConfigValidationError
from upkeep.config.file_discovery import detect_config_file_name
from upkeep.config.presets import RegistryPresetResolver
from upkeep.config.repository_cache import RepositoryCache
from upkeep.config.settings import UpkeepSettings, load_settings
from upkeep.events.dispatcher import EventDispatcher
from upkeep.events.observer import StdoutObserver
from upkeep.logging_context import configure_logging
from upkeep.models.branch import CandidateBranch, UpdateType
from upkeep.models.config import DryRun
from upkeep.models.package_file import ExtractResult
from upkeep.platform.errors import PlatformError
from upkeep.platform.protocol import Platform
from upkeep.process.base_branch_config import BaseBranchConfigResolver
from upkeep.process.extract_update import ManifestExtractor, UpdateLookup
from upkeep.process.pipeline import ExtractionLookupPipeline
from upkeep.process.snapshot import PackageFileSnapshotWriter
from upkeep.process.sort import sort_branches
from upkeep.scm import git_ops
from upkeep.scm.git_scm import GitScm


def format_branch(position: int, branch: CandidateBranch) -> str:
    name = branch.branch_name or "(unnamed)"
    parts = [f"{position:>3}. {name}"]
    if branch.pr_title:
        parts.append(f"- {branch.pr_title}")
    tags = []
    update_type = branch.update_type
    if update_type is not None:
        tags.append(update_type.value if isinstance(update_type, UpdateType) else update_type)
    if branch.pr_priority:
        tags.append(f"priority {branch.pr_priority}")
    if branch.is_vulnerability_alert:
        tags.append("vulnerability")
    if tags:
        parts.append(f"[{', '.join(tags)}]")
    return " ".join(parts)


async def _process_repo(
    settings: UpkeepSettings,
    scm: GitScm,
    platform: Platform,
    extractor: ManifestExtractor,
    lookup: UpdateLookup,
    dispatcher: EventDispatcher,
) -> ExtractResult:
    config = settings.repository
    try:
        file_list = await scm.list_files(config.default_branch or "HEAD")
        cache = RepositoryCache(config_file_name=detect_config_file_name(file_list))

        resolver = BaseBranchConfigResolver(
            platform,
            RegistryPresetResolver(settings.presets),
            cache,
        )
        pipeline = ExtractionLookupPipeline(
            scm,
            extractor,
            lookup,
            resolver,
            platform_name=settings.platform,
            event_emitter=dispatcher,
            snapshot_writer=PackageFileSnapshotWriter(settings.output_dir),
        )
        result = await pipeline.run(config)

        if config.dry_run != DryRun.EXTRACT:
            await sort_branches(result.branches, await scm.get_branch_list(), platform.get_branch_pr)
            dispatcher.emit(
                "BranchesSorted",
                branch_names=[b.branch_name or "" for b in result.branches],
            )
        return result
    finally:
        await close_platform(platform)


def run(
    repo_path: Path = typer.Option(Path("."), "--repo-path", help="Local clone of the repository"),
    dry_run: Optional[DryRun] = typer.Option(None, "--dry-run", help="Stop after this phase (extract, lookup, full)"),
) -> None:
    """Extract dependencies, look up updates and print the processing order."""
    repo_path = repo_path.resolve()
    if not git_ops.is_git_repo(repo_path):
        typer.echo(f"Error: not a git repository: {repo_path}")
        raise typer.Exit(code=1)

    try:
        settings = load_settings(start=repo_path)
    except ConfigValidationError as e:
        typer.echo(f"Config error: {e.validation_message}")
        raise typer.Exit(code=1)
    configure_logging(settings.log_level)

    config = settings.repository
    if dry_run is not None:
        config.dry_run = dry_run
    if not config.default_branch:
        try:
            config.default_branch = git_ops.current_branch(cwd=repo_path)
        except git_ops.GitError as e:
            typer.echo(f"Git error: {e}")
            raise typer.Exit(code=1)

    extractor = load_collaborator(settings.extractor, "extractor", "extract")
    lookup = load_collaborator(settings.lookup, "lookup", "lookup")
    scm = GitScm(repo_path, remote=settings.remote or None)
    platform = build_platform(settings, repo_path)

    dispatcher = EventDispatcher([StdoutObserver()])

    try:
        result = asyncio.run(_process_repo(settings, scm, platform, extractor, lookup, dispatcher))
    except ConfigValidationError as e:
        typer.echo(f"Config error: {e.validation_error}: {e.validation_message}")
        raise typer.Exit(code=1)
    except PlatformError as e:
        typer.echo(f"Platform error: {e}")
        raise typer.Exit(code=1)
    except git_ops.GitError as e:
        typer.echo(f"Git error: {e}")
        raise typer.Exit(code=1)

    if config.dry_run == DryRun.EXTRACT:
        for manager, files in result.package_files.items():
            typer.echo(f"{manager}: {', '.join(pf.package_file for pf in files)}")
        return

    if not result.branches:
        typer.echo("No updates found.")
        return

    typer.echo("\nProcessing order:")
    for position, branch in enumerate(result.branches, start=1):
        typer.echo(format_branch(position, branch))
