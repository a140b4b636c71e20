from __future__ import annotations

from upkeep.matching.string_match import get_regex_predicate


def test_plain_name_has_no_predicate() -> None:
    assert get_regex_predicate("main") is None
    assert get_regex_predicate("release/1.x") is None


def test_pattern_searches_unanchored() -> None:
    predicate = get_regex_predicate("/release/")
    assert predicate is not None
    assert predicate("release/1.0")
    assert predicate("old-release")
    assert not predicate("main")


def test_anchored_pattern() -> None:
    predicate = get_regex_predicate("/^release\\/.+$/")
    assert predicate is not None
    assert predicate("release/2.0")
    assert not predicate("prerelease/2.0")


def test_case_insensitive_flag() -> None:
    predicate = get_regex_predicate("/^MAIN$/i")
    assert predicate is not None
    assert predicate("main")


def test_negated_pattern() -> None:
    predicate = get_regex_predicate("!/^dependabot/")
    assert predicate is not None
    assert predicate("main")
    assert not predicate("dependabot/npm")


def test_invalid_pattern_falls_back_to_literal(caplog) -> None:
    assert get_regex_predicate("/(unclosed/") is None
    assert "Invalid regex" in caplog.text


def test_unsupported_flag_is_literal() -> None:
    assert get_regex_predicate("/main/g") is None
