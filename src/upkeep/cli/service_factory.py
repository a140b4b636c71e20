from __future__ import annotations

import importlib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import typer

if TYPE_CHECKING:
    from upkeep.config.settings import UpkeepSettings
    from upkeep.platform.protocol import Platform


def load_collaborator(spec: str, role: str, method: str) -> Any:
    """Import ``module:attribute`` and return the collaborator it names.

    An object that already has ``method`` is returned as is; a class or
    factory function is called with no arguments.
    """
    if not spec:
        typer.echo(f"Error: No {role} configured. Set '{role}: package.module:attribute' in upkeep.yaml.")
        raise typer.Exit(code=1)

    module_name, _, attr_name = spec.partition(":")
    if not module_name or not attr_name:
        typer.echo(f"Error: Invalid {role} '{spec}'. Expected 'package.module:attribute'.")
        raise typer.Exit(code=1)

    try:
        module = importlib.import_module(module_name)
        target = getattr(module, attr_name)
    except (ImportError, AttributeError) as e:
        typer.echo(f"Error: Cannot load {role} '{spec}': {e}")
        raise typer.Exit(code=1)

    if isinstance(target, type) or (callable(target) and not hasattr(target, method)):
        target = target()
    if not hasattr(target, method):
        typer.echo(f"Error: {role} '{spec}' has no '{method}' method.")
        raise typer.Exit(code=1)
    return target


def build_platform(settings: UpkeepSettings, repo_path: Path) -> Platform:
    """Construct the platform client named in settings."""
    platform_name = settings.platform

    if platform_name == "local":
        from upkeep.platform.local import LocalPlatform

        return LocalPlatform(repo_path)

    if platform_name == "github":
        from upkeep.platform.github import GitHubPlatform

        if not settings.repository.repository:
            typer.echo("Error: 'repository.repository' (owner/name) is required for the github platform.")
            raise typer.Exit(code=1)
        return GitHubPlatform(
            settings.repository.repository,
            base_url=settings.endpoint,
            token=settings.token,
        )

    typer.echo(f"Error: Unknown platform '{platform_name}'. Use: github, local")
    raise typer.Exit(code=1)


async def close_platform(platform: Platform) -> None:
    close = getattr(platform, "close", None)
    if close is not None:
        await close()
