from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

from upkeep.config.errors import ConfigValidationError
from upkeep.config.merge import merge_documents
from upkeep.models.config import RepositoryConfig

logger = logging.getLogger(__name__)


class PresetResolver(Protocol):
    async def resolve(
        self, document: Mapping[str, Any], parent_config: RepositoryConfig
    ) -> dict[str, Any]: ...


class RegistryPresetResolver:
    """Expands ``extends`` entries from an in-memory registry of named presets.

    Presets are applied in the order listed, each one recursively expanded
    first, and the document itself is merged over the result.
    """

    def __init__(self, presets: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._presets = dict(presets or {})

    async def resolve(
        self, document: Mapping[str, Any], parent_config: RepositoryConfig
    ) -> dict[str, Any]:
        ignored = set(parent_config.ignore_presets) | set(document.get("ignorePresets", []))
        return self._expand(document, ignored, chain=())

    def _expand(
        self, document: Mapping[str, Any], ignored: set[str], chain: tuple[str, ...]
    ) -> dict[str, Any]:
        resolved: dict[str, Any] = {}
        for name in document.get("extends", []):
            if name in ignored:
                logger.debug("Ignoring preset %s", name)
                continue
            if name in chain:
                raise ConfigValidationError(
                    f"Preset `{name}` extends itself: {' -> '.join((*chain, name))}",
                    validation_source="config",
                    validation_error="Preset dependency cycle",
                )
            preset = self._presets.get(name)
            if preset is None:
                raise ConfigValidationError(
                    f"Cannot find preset `{name}`",
                    validation_source="config",
                    validation_error="Preset not found",
                )
            resolved = merge_documents(resolved, self._expand(preset, ignored, (*chain, name)))

        body = {key: value for key, value in document.items() if key != "extends"}
        return merge_documents(resolved, body)
