"""Integrity checks: orphaned memos and broken links."""

from __future__ import annotations

import logging
from typing import Iterable, TypeVar

from .config import (
    BROKEN_LINK_PENALTY,
    BROKEN_LINK_PENALTY_MAX,
    ORPHAN_PENALTY,
    ORPHAN_PENALTY_MAX,
)
from .graph import build_link_graph
from .models import HealthReport, HealthSummary, MemoEntry, MemoLike, MemoLink
from .parser.links import extract_links

log = logging.getLogger(__name__)

M = TypeVar("M", bound=MemoLike)


def _referenced_ids(graph: dict[str, list[str]]) -> set[str]:
    return {target for targets in graph.values() for target in targets}


def find_orphaned_memos(memos: Iterable[M]) -> list[M]:
    """Memos with no outgoing links that no other memo links to.

    Both conditions must hold: a memo that only links out, or is only
    linked to, is not an orphan.

    Args:
        memos: Memo collection.

    Returns:
        The orphaned memos themselves, in collection order.
    """
    memo_list = list(memos)
    graph = build_link_graph(memo_list)
    referenced = _referenced_ids(graph)

    return [
        memo
        for memo in memo_list
        if not graph.get(memo.id) and memo.id not in referenced
    ]


def find_broken_links(memos: Iterable[MemoLike]) -> list[MemoLink]:
    """Links whose target id is not the id of any memo in the collection.

    Returns:
        Broken links in collection order, then text order.
    """
    memo_list = list(memos)
    memo_ids = {memo.id for memo in memo_list}

    return [
        link
        for memo in memo_list
        for link in extract_links(memo)
        if link.target_id not in memo_ids
    ]


def _as_entry(memo: MemoLike) -> MemoEntry:
    if isinstance(memo, MemoEntry):
        return memo
    return MemoEntry.model_validate(memo, from_attributes=True)


def health_score(total_memos: int, orphans: int, broken_links: int) -> int:
    """Score a collection from 0 to 100; an empty collection scores 100."""
    if total_memos == 0:
        return 100
    broken_penalty = min(BROKEN_LINK_PENALTY_MAX, broken_links * BROKEN_LINK_PENALTY)
    orphan_penalty = min(ORPHAN_PENALTY_MAX, orphans * ORPHAN_PENALTY)
    return max(0, 100 - broken_penalty - orphan_penalty)


def check_health(memos: Iterable[MemoLike]) -> HealthReport:
    """Run both integrity checks with one extraction pass per memo.

    The orphan and broken-link lists are identical to what
    ``find_orphaned_memos`` and ``find_broken_links`` return.

    Args:
        memos: Memo collection.

    Returns:
        HealthReport with findings and a summary score.
    """
    memo_list = list(memos)
    links_by_memo = [(memo, extract_links(memo)) for memo in memo_list]

    graph: dict[str, list[str]] = {}
    for memo, links in links_by_memo:
        graph[memo.id] = [link.target_id for link in links]

    referenced = _referenced_ids(graph)
    memo_ids = set(graph)

    orphans = [
        _as_entry(memo)
        for memo in memo_list
        if not graph.get(memo.id) and memo.id not in referenced
    ]
    broken_links = [
        link
        for _, links in links_by_memo
        for link in links
        if link.target_id not in memo_ids
    ]

    summary = HealthSummary(
        total_memos=len(memo_list),
        total_links=sum(len(links) for _, links in links_by_memo),
        orphans_count=len(orphans),
        broken_links_count=len(broken_links),
        health_score=health_score(len(memo_list), len(orphans), len(broken_links)),
    )
    log.debug(
        "Health check: %d memos, %d orphans, %d broken links",
        summary.total_memos,
        summary.orphans_count,
        summary.broken_links_count,
    )

    return HealthReport(orphans=orphans, broken_links=broken_links, summary=summary)
