from __future__ import annotations

from pathlib import Path

import typer

from upkeep.config.errors import ConfigValidationError
from upkeep.config.settings import load_settings
from upkeep.process.base_branches import expand_base_branches
from upkeep.scm import git_ops


def base_branches(
    repo_path: Path = typer.Option(Path("."), "--repo-path", help="Local clone of the repository"),
) -> None:
    """Print the base branches the configured specifiers expand to."""
    repo_path = repo_path.resolve()
    try:
        settings = load_settings(start=repo_path)
    except ConfigValidationError as e:
        typer.echo(f"Config error: {e.validation_message}")
        raise typer.Exit(code=1)

    config = settings.repository
    try:
        live = git_ops.list_branches(remote=settings.remote or None, cwd=repo_path)
        default_branch = config.default_branch or git_ops.current_branch(cwd=repo_path)
    except git_ops.GitError as e:
        typer.echo(f"Git error: {e}")
        raise typer.Exit(code=1)

    if not config.base_branches:
        typer.echo(f"{default_branch} (default)")
        return

    for name in expand_base_branches(default_branch, config.base_branches, live):
        marker = "" if name in live else " (missing)"
        typer.echo(f"{name}{marker}")
