from __future__ import annotations

import functools
import logging
from typing import Awaitable, Callable, Iterable

from upkeep.models.branch import CandidateBranch, PrState, PullRequest, UpdateType

logger = logging.getLogger(__name__)

BranchPrLookup = Callable[[str], Awaitable["PullRequest | None"]]

UPDATE_TYPE_ORDER: list[UpdateType] = [
    UpdateType.PIN,
    UpdateType.DIGEST,
    UpdateType.PATCH,
    UpdateType.MINOR,
    UpdateType.MAJOR,
    UpdateType.LOCK_FILE_MAINTENANCE,
]


def _update_type_rank(update_type: UpdateType | str | None) -> int:
    if update_type is None or update_type not in UPDATE_TYPE_ORDER:
        return -1
    return UPDATE_TYPE_ORDER.index(update_type)


def _flag_first(a: bool, b: bool) -> int:
    if a and not b:
        return -1
    if not a and b:
        return 1
    return 0


def build_comparator(
    exists: set[str], open_prs: set[str], closed_prs: set[str]
) -> Callable[[CandidateBranch, CandidateBranch], int]:
    def compare(a: CandidateBranch, b: CandidateBranch) -> int:
        result = _flag_first(a.is_vulnerability_alert, b.is_vulnerability_alert)
        if result:
            return result

        if a.pr_priority != b.pr_priority:
            return b.pr_priority - a.pr_priority

        if a.branch_name and b.branch_name:
            # closed PRs last
            result = -_flag_first(a.branch_name in closed_prs, b.branch_name in closed_prs)
            if result:
                return result
            result = _flag_first(a.branch_name in exists, b.branch_name in exists)
            if result:
                return result
            result = _flag_first(a.branch_name in open_prs, b.branch_name in open_prs)
            if result:
                return result

        rank_diff = _update_type_rank(a.update_type) - _update_type_rank(b.update_type)
        if rank_diff:
            return rank_diff

        # Never reports equality. list.sort only asks "less than", so equal
        # titles keep their input order.
        return -1 if (a.pr_title or "") < (b.pr_title or "") else 1

    return compare


async def sort_branches(
    branches: list[CandidateBranch],
    live_branch_names: Iterable[str],
    get_branch_pr: BranchPrLookup,
) -> None:
    """Order ``branches`` in place by processing priority.

    Vulnerability fixes first, then explicit priority, then branches already
    known to the platform (closed PRs go to the back), then update type, then
    title. Nothing is removed and no branch is modified.
    """
    logger.debug("branches: %s", [b.branch_name for b in branches])

    live = set(live_branch_names)
    exists = {b.branch_name for b in branches if b.branch_name and b.branch_name in live}

    open_prs: set[str] = set()
    closed_prs: set[str] = set()
    for name in sorted(exists):
        try:
            pr = await get_branch_pr(name)
        except Exception:
            logger.warning("Could not fetch PR for branch %s; treating as no PR", name, exc_info=True)
            continue
        if pr is None:
            continue
        if pr.state == PrState.OPEN:
            open_prs.add(name)
        elif pr.state == PrState.CLOSED:
            closed_prs.add(name)

    branches.sort(key=functools.cmp_to_key(build_comparator(exists, open_prs, closed_prs)))
