from __future__ import annotations

import logging
from typing import Iterable, Sequence

from upkeep.matching.string_match import get_regex_predicate

logger = logging.getLogger(__name__)

DEFAULT_BRANCH_TOKEN = "$default"


def expand_base_branches(
    default_branch: str,
    specifiers: Iterable[str],
    live_branches: Sequence[str],
) -> list[str]:
    """Turn configured base-branch specifiers into concrete branch names.

    Pattern specifiers expand to every matching live branch (in live order),
    ``$default`` becomes ``default_branch`` and anything else is kept as is.
    The result holds each name once, in first-seen order.
    """
    expanded: list[str] = []

    for specifier in specifiers:
        predicate = get_regex_predicate(specifier)
        if predicate is not None:
            matching = [name for name in live_branches if predicate(name)]
            logger.debug('baseBranches regex "%s" matches [%s]', specifier, ",".join(matching))
            expanded.extend(matching)
        elif specifier == DEFAULT_BRANCH_TOKEN:
            logger.debug('baseBranches "%s" matches "%s"', specifier, default_branch)
            expanded.append(default_branch)
        else:
            expanded.append(specifier)

    return list(dict.fromkeys(expanded))
