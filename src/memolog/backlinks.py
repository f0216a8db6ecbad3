"""Backlink lookup with text previews.

A backlink is shown in a "referenced by" panel as the referencing memo's id
plus a short snippet of text around the link.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .config import PREVIEW_CONTEXT_LENGTH, PREVIEW_ELLIPSIS
from .models import Backlink, MemoLike
from .parser.links import extract_links

log = logging.getLogger(__name__)


def preview_window(
    content: str,
    match_index: int,
    match_length: int,
    context_length: int = PREVIEW_CONTEXT_LENGTH,
) -> str:
    """Cut a snippet of ``content`` around a match.

    Keeps ``context_length`` characters on each side of
    ``content[match_index:match_index + match_length]``, clamped to the
    content bounds. An ellipsis marks each side that was cut.
    """
    start = max(0, match_index - context_length)
    end = min(len(content), match_index + match_length + context_length)

    preview = content[start:end]

    if start > 0:
        preview = PREVIEW_ELLIPSIS + preview

    if end < len(content):
        preview = preview + PREVIEW_ELLIPSIS

    return preview


def get_preview_text(
    content: str, link_text: str, context_length: int = PREVIEW_CONTEXT_LENGTH
) -> str:
    """Preview of the text surrounding the first occurrence of ``link_text``.

    When ``link_text`` does not occur in ``content``, the first
    ``context_length`` characters are returned followed by an ellipsis.
    """
    index = content.find(link_text)

    if index == -1:
        return content[:context_length] + PREVIEW_ELLIPSIS

    return preview_window(content, index, len(link_text), context_length)


def get_backlinks(
    target_id: str,
    memos: Iterable[MemoLike],
    context_length: int = PREVIEW_CONTEXT_LENGTH,
) -> list[Backlink]:
    """Find every link to ``target_id`` across the collection.

    One Backlink is returned per link occurrence, so a memo linking twice
    yields two entries. Order follows the collection, then the text.

    Args:
        target_id: Id of the memo being referenced.
        memos: Memo collection, iterated once.
        context_length: Characters of context on each side of the link.

    Returns:
        List of Backlink.
    """
    backlinks: list[Backlink] = []

    for memo in memos:
        for link in extract_links(memo):
            if link.target_id != target_id:
                continue
            backlinks.append(
                Backlink(
                    memo_id=memo.id,
                    preview=get_preview_text(memo.content, link.text, context_length),
                    text=link.text,
                )
            )

    log.debug("Found %d backlinks to %s", len(backlinks), target_id)
    return backlinks
