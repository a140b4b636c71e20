from __future__ import annotations

from typing import Iterable

CONFIG_FILE_NAMES: tuple[str, ...] = (
    "upkeep.json",
    "upkeep.json5",
    ".github/upkeep.json",
    ".gitlab/upkeep.json",
    ".upkeeprc",
    ".upkeeprc.json",
)


def detect_config_file_name(
    file_list: Iterable[str],
    candidates: Iterable[str] = CONFIG_FILE_NAMES,
) -> str | None:
    """Return the first candidate config file present in the repository, if any."""
    present = set(file_list)
    for candidate in candidates:
        if candidate in present:
            return candidate
    return None
