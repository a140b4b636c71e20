from __future__ import annotations

import logging
import re
from typing import Callable

logger = logging.getLogger(__name__)

StringMatchPredicate = Callable[[str], bool]

_PATTERN_RE = re.compile(r"^(?P<negated>!?)/(?P<pattern>.*)/(?P<flags>i?)$", re.DOTALL)


def get_regex_predicate(value: str) -> StringMatchPredicate | None:
    """Build a predicate from a ``/pattern/`` or ``!/pattern/i`` specifier.

    Returns ``None`` for plain names and for patterns that do not compile,
    so callers can fall back to treating the value literally.
    """
    match = _PATTERN_RE.match(value)
    if match is None:
        return None

    flags = re.IGNORECASE if match.group("flags") == "i" else 0
    try:
        regex = re.compile(match.group("pattern"), flags)
    except re.error:
        logger.warning("Invalid regex pattern %r", value)
        return None

    if match.group("negated"):
        return lambda candidate: regex.search(candidate) is None
    return lambda candidate: regex.search(candidate) is not None
