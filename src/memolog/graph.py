"""Link graph over a memo collection."""

from __future__ import annotations

import logging
from typing import Iterable

from .models import MemoLike
from .parser.links import extract_links

log = logging.getLogger(__name__)


def build_link_graph(memos: Iterable[MemoLike]) -> dict[str, list[str]]:
    """Map each memo id to the ids it links to.

    Every memo appears as a key, with an empty list when it has no links.
    Target order follows the text and duplicates are kept. Targets are not
    checked against the collection; see ``integrity.find_broken_links``.

    Args:
        memos: Memo collection, iterated once.

    Returns:
        Dict of memo id to list of target ids, in collection order.
    """
    graph: dict[str, list[str]] = {}

    for memo in memos:
        graph[memo.id] = [link.target_id for link in extract_links(memo)]

    log.debug("Built link graph with %d nodes", len(graph))
    return graph
