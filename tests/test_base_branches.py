from __future__ import annotations

from upkeep.process.base_branches import DEFAULT_BRANCH_TOKEN, expand_base_branches

LIVE = ["main", "release/1.0", "release/2.0", "develop", "feature/x"]


def test_literal_names_are_kept_without_existence_check() -> None:
    assert expand_base_branches("main", ["develop", "gone"], LIVE) == ["develop", "gone"]


def test_default_token_becomes_default_branch() -> None:
    assert expand_base_branches("main", [DEFAULT_BRANCH_TOKEN, "develop"], LIVE) == ["main", "develop"]


def test_pattern_expands_in_live_order() -> None:
    assert expand_base_branches("main", ["/^release\\//"], LIVE) == ["release/1.0", "release/2.0"]


def test_duplicates_removed_first_occurrence_wins() -> None:
    result = expand_base_branches(
        "main",
        ["release/2.0", "/^release\\//", "$default", "main", "release/2.0"],
        LIVE,
    )
    assert result == ["release/2.0", "release/1.0", "main"]


def test_negated_pattern_matches_everything_else() -> None:
    assert expand_base_branches("main", ["!/\\//"], LIVE) == ["main", "develop"]


def test_non_matching_pattern_contributes_nothing() -> None:
    assert expand_base_branches("main", ["/^hotfix/"], LIVE) == []


def test_empty_specifiers() -> None:
    assert expand_base_branches("main", [], LIVE) == []


def test_every_name_is_literal_default_or_live_match() -> None:
    specifiers = ["/^rel/", "$default", "literal-only", "/^feature/", "develop"]
    result = expand_base_branches("main", specifiers, LIVE)
    assert len(result) == len(set(result))
    for name in result:
        assert name in LIVE or name in specifiers or name == "main"
