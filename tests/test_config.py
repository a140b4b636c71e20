from pathlib import Path

import pytest

from upkeep.config.errors import ConfigValidationError
from upkeep.config.file_discovery import detect_config_file_name
from upkeep.config.settings import UpkeepSettings, load_settings
from upkeep.models.config import DryRun, RepositoryConfig, UseBaseBranchConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "UPKEEP_PLATFORM",
        "UPKEEP_ENDPOINT",
        "UPKEEP_TOKEN",
        "GITHUB_TOKEN",
        "UPKEEP_DRY_RUN",
        "UPKEEP_LOG_LEVEL",
        "UPKEEP_OUTPUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


def test_loads_from_cwd(tmp_path: Path) -> None:
    (tmp_path / "upkeep.yaml").write_text("platform: local\n")
    settings = load_settings(start=tmp_path)
    assert settings.platform == "local"
    assert settings.config_dir == tmp_path


def test_walks_parent_directories(tmp_path: Path) -> None:
    (tmp_path / "upkeep.yaml").write_text("endpoint: https://git.example.com/api/v3\n")
    child = tmp_path / "a" / "b" / "c"
    child.mkdir(parents=True)
    settings = load_settings(start=child)
    assert settings.endpoint == "https://git.example.com/api/v3"


def test_falls_back_to_defaults(tmp_path: Path) -> None:
    child = tmp_path / "no_config_here"
    child.mkdir()
    settings = load_settings(start=child)
    assert settings.platform == "github"
    assert settings.repository == RepositoryConfig()
    assert settings.output_dir == Path("/tmp/upkeep-output")


def test_repository_section_uses_camel_case(tmp_path: Path) -> None:
    (tmp_path / "upkeep.yaml").write_text(
        "repository:\n"
        "  repository: acme/widgets\n"
        "  defaultBranch: main\n"
        "  baseBranches: ['$default', '/^release\\//']\n"
        "  useBaseBranchConfig: merge\n"
        "  branchPrefix: deps/\n"
        "  labels: [dependencies]\n"
    )
    config = load_settings(start=tmp_path).repository
    assert config.repository == "acme/widgets"
    assert config.base_branches == ["$default", "/^release\\//"]
    assert config.use_base_branch_config == UseBaseBranchConfig.MERGE
    assert config.branch_prefix == "deps/"
    assert config.model_extra["labels"] == ["dependencies"]


def test_presets_and_collaborators(tmp_path: Path) -> None:
    (tmp_path / "upkeep.yaml").write_text(
        "extractor: my_managers:Extractor\n"
        "lookup: my_lookup:build\n"
        "presets:\n"
        "  team:\n"
        "    branchPrefix: team/\n"
    )
    settings = load_settings(start=tmp_path)
    assert settings.extractor == "my_managers:Extractor"
    assert settings.lookup == "my_lookup:build"
    assert settings.presets == {"team": {"branchPrefix": "team/"}}


def test_env_vars_override_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "upkeep.yaml").write_text("platform: github\ntoken: from-yaml\n")
    monkeypatch.setenv("UPKEEP_PLATFORM", "local")
    monkeypatch.setenv("UPKEEP_TOKEN", "from-env")
    monkeypatch.setenv("UPKEEP_DRY_RUN", "extract")
    monkeypatch.setenv("UPKEEP_LOG_LEVEL", "debug")
    monkeypatch.setenv("UPKEEP_OUTPUT_DIR", str(tmp_path / "out"))
    settings = load_settings(start=tmp_path)
    assert settings.platform == "local"
    assert settings.token == "from-env"
    assert settings.repository.dry_run == DryRun.EXTRACT
    assert settings.log_level == "DEBUG"
    assert settings.output_dir == tmp_path / "out"


def test_github_token_fallback(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    assert load_settings(start=tmp_path).token == "gh-token"


def test_invalid_dry_run_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UPKEEP_DRY_RUN", "everything")
    with pytest.raises(ConfigValidationError) as exc_info:
        load_settings(start=tmp_path)
    assert "UPKEEP_DRY_RUN" in exc_info.value.validation_message


def test_invalid_settings_file_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / "upkeep.yaml").write_text("repository:\n  baseBranches: 3\n")
    with pytest.raises(ConfigValidationError) as exc_info:
        load_settings(start=tmp_path)
    assert exc_info.value.validation_source == str((tmp_path / "upkeep.yaml").resolve())
    assert "baseBranches" in exc_info.value.validation_message


def test_validates_pydantic_model() -> None:
    settings = UpkeepSettings(platform="local", repository=RepositoryConfig(default_branch="trunk"))
    assert settings.repository.default_branch == "trunk"


class TestConfigFileDetection:
    def test_first_candidate_wins(self) -> None:
        files = ["README.md", ".github/upkeep.json", "upkeep.json"]
        assert detect_config_file_name(files) == "upkeep.json"

    def test_nested_candidate(self) -> None:
        assert detect_config_file_name(["src/app.py", ".github/upkeep.json"]) == ".github/upkeep.json"

    def test_none_found(self) -> None:
        assert detect_config_file_name(["README.md"]) is None

    def test_custom_candidates(self) -> None:
        assert detect_config_file_name(["deps.json"], candidates=["deps.json"]) == "deps.json"
