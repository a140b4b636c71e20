from __future__ import annotations

import copy
from typing import Any, Mapping

from upkeep.models.config import RepositoryConfig

# List-valued options that accumulate across parent and child instead of being replaced.
CONCATENATED_OPTIONS = frozenset({"packageRules"})


def merge_documents(parent: Mapping[str, Any], child: Mapping[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = copy.deepcopy(dict(parent))
    for key, value in child.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_documents(existing, value)
        elif key in CONCATENATED_OPTIONS and isinstance(existing, list) and isinstance(value, list):
            merged[key] = existing + copy.deepcopy(value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def merge_child_config(
    parent: RepositoryConfig, child: RepositoryConfig | Mapping[str, Any]
) -> RepositoryConfig:
    """Merge ``child`` over ``parent`` and return a new config.

    Child keys win. Nested mappings merge recursively; lists are replaced,
    except for :data:`CONCATENATED_OPTIONS` where the child's entries are
    appended to the parent's. Neither argument is modified.
    """
    if isinstance(child, RepositoryConfig):
        child_doc = child.model_dump(by_alias=True, mode="json", exclude_unset=True)
    else:
        child_doc = _normalize_keys(child)
    merged = merge_documents(parent.to_document(), child_doc)
    return RepositoryConfig.model_validate(merged)


def _normalize_keys(document: Mapping[str, Any]) -> dict[str, Any]:
    # Accept python field names as well as document aliases.
    aliases = {
        name: field.alias
        for name, field in RepositoryConfig.model_fields.items()
        if field.alias is not None
    }
    return {aliases.get(key, key): value for key, value in document.items()}
