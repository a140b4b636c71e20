from __future__ import annotations

import asyncio
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from upkeep.cli.run import format_branch
from upkeep.cli.service_factory import build_platform, close_platform
from upkeep.config.errors import ConfigValidationError
from upkeep.config.settings import load_settings
from upkeep.models.branch import CandidateBranch, PullRequest
from upkeep.platform.errors import PlatformError
from upkeep.process.sort import sort_branches
from upkeep.scm import git_ops
from upkeep.scm.git_scm import GitScm


def _load_candidates(path: Path) -> list[CandidateBranch]:
    with open(path) as f:
        raw = yaml.safe_load(f) or []
    if isinstance(raw, dict):
        raw = raw.get("branches", [])
    if not isinstance(raw, list):
        raise typer.BadParameter(f"Expected a list of branches in {path}")
    try:
        return [CandidateBranch.model_validate(item) for item in raw]
    except ValidationError as e:
        raise typer.BadParameter(f"Invalid branch in {path}: {e}") from e


async def _no_pr(branch_name: str) -> PullRequest | None:
    return None


def sort(
    candidates: Path = typer.Argument(..., help="YAML or JSON list of candidate branches"),
    repo_path: Path = typer.Option(Path("."), "--repo-path", help="Local clone of the repository"),
    no_platform: bool = typer.Option(False, "--no-platform", help="Do not query pull request state"),
) -> None:
    """Print candidate branches in processing order."""
    if not candidates.exists():
        typer.echo(f"Error: file not found: {candidates}")
        raise typer.Exit(code=1)

    branches = _load_candidates(candidates)
    repo_path = repo_path.resolve()
    try:
        settings = load_settings(start=repo_path)
    except ConfigValidationError as e:
        typer.echo(f"Config error: {e.validation_message}")
        raise typer.Exit(code=1)

    scm = GitScm(repo_path, remote=settings.remote or None)
    platform = None if no_platform else build_platform(settings, repo_path)

    async def _sort() -> None:
        try:
            live = await scm.get_branch_list()
            await sort_branches(branches, live, platform.get_branch_pr if platform else _no_pr)
        finally:
            if platform is not None:
                await close_platform(platform)

    try:
        asyncio.run(_sort())
    except (git_ops.GitError, PlatformError) as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    for position, branch in enumerate(branches, start=1):
        typer.echo(format_branch(position, branch))
