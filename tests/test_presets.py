from __future__ import annotations

import asyncio

import pytest

from upkeep.config.errors import ConfigValidationError
from upkeep.config.presets import RegistryPresetResolver
from upkeep.models.config import RepositoryConfig

PRESETS = {
    "base": {"branchPrefix": "deps/", "labels": ["deps"]},
    "strict": {"extends": ["base"], "labels": ["strict"], "prPriority": 1},
    "loop-a": {"extends": ["loop-b"]},
    "loop-b": {"extends": ["loop-a"]},
}


def _resolve(document: dict, parent: RepositoryConfig | None = None) -> dict:
    resolver = RegistryPresetResolver(PRESETS)
    return asyncio.run(resolver.resolve(document, parent or RepositoryConfig()))


def test_document_without_extends_is_unchanged() -> None:
    assert _resolve({"branchPrefix": "x/"}) == {"branchPrefix": "x/"}


def test_presets_expand_recursively_and_document_wins() -> None:
    resolved = _resolve({"extends": ["strict"], "labels": ["mine"]})
    assert resolved == {"branchPrefix": "deps/", "labels": ["mine"], "prPriority": 1}


def test_ignored_presets_are_skipped() -> None:
    parent = RepositoryConfig(ignore_presets=["base"])
    resolved = _resolve({"extends": ["strict"]}, parent)
    assert "branchPrefix" not in resolved
    assert resolved["labels"] == ["strict"]


def test_unknown_preset_raises() -> None:
    with pytest.raises(ConfigValidationError) as exc_info:
        _resolve({"extends": ["missing"]})
    assert "missing" in exc_info.value.validation_message


def test_cycle_raises() -> None:
    with pytest.raises(ConfigValidationError) as exc_info:
        _resolve({"extends": ["loop-a"]})
    assert exc_info.value.validation_error == "Preset dependency cycle"
