from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from upkeep.config.errors import ConfigValidationError
from upkeep.models.config import DryRun, RepositoryConfig

SETTINGS_FILE_NAME = "upkeep.yaml"


class UpkeepSettings(BaseModel):
    platform: str = "github"
    endpoint: str = "https://api.github.com"
    token: str = ""
    remote: str = ""
    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    presets: dict[str, dict[str, Any]] = Field(default_factory=dict)
    extractor: str = ""
    lookup: str = ""
    output_dir: Path = Path("/tmp/upkeep-output")
    log_level: str = "INFO"
    config_dir: Path | None = None


def _find_settings_file(start: Path | None = None) -> Path | None:
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / SETTINGS_FILE_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_settings(start: Path | None = None) -> UpkeepSettings:
    settings_path = _find_settings_file(start)

    if settings_path is not None:
        with open(settings_path) as f:
            raw = yaml.safe_load(f) or {}
        try:
            settings = UpkeepSettings.model_validate(raw)
        except ValidationError as e:
            raise ConfigValidationError(
                f"Invalid settings in {settings_path}: {e}",
                validation_source=str(settings_path),
            ) from e
        settings.config_dir = settings_path.parent
    else:
        settings = UpkeepSettings()

    platform_env = os.environ.get("UPKEEP_PLATFORM")
    if platform_env is not None:
        settings.platform = platform_env

    endpoint_env = os.environ.get("UPKEEP_ENDPOINT")
    if endpoint_env is not None:
        settings.endpoint = endpoint_env

    token_env = os.environ.get("UPKEEP_TOKEN") or os.environ.get("GITHUB_TOKEN")
    if token_env:
        settings.token = token_env

    dry_run_env = os.environ.get("UPKEEP_DRY_RUN")
    if dry_run_env is not None:
        try:
            settings.repository.dry_run = DryRun(dry_run_env) if dry_run_env else None
        except ValueError as e:
            raise ConfigValidationError(
                f"Invalid UPKEEP_DRY_RUN value {dry_run_env!r}; use one of: "
                + ", ".join(mode.value for mode in DryRun)
            ) from e

    log_level_env = os.environ.get("UPKEEP_LOG_LEVEL")
    if log_level_env is not None:
        settings.log_level = log_level_env.upper()

    output_dir_env = os.environ.get("UPKEEP_OUTPUT_DIR")
    if output_dir_env is not None:
        settings.output_dir = Path(output_dir_env)

    return settings
