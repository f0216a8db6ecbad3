"""Memo link extraction and serialization.

Two link forms are recognized anywhere in memo text:

    [[memo-id]]              bare link, display text is the id
    [[memo-id|display text]] piped link

Ids are restricted to ASCII letters, digits and hyphens. Anything that does
not match is ordinary text, so malformed links are never an error.
"""

import logging
import re

from ..config import MEMO_ID_CHARS
from ..models import MemoLike, MemoLink

log = logging.getLogger(__name__)

# Both forms in one pattern; group 1 is the id, group 2 the optional display text
LINK_PATTERN = re.compile(rf"\[\[({MEMO_ID_CHARS}+)(?:\|([^\]]+))?\]\]")

MEMO_ID_PATTERN = re.compile(rf"{MEMO_ID_CHARS}+")


def extract_links(memo: MemoLike) -> list[MemoLink]:
    """Extract links from a memo in the order they appear.

    Matches never overlap; duplicates are kept.

    Args:
        memo: Any object with ``id`` and ``content`` attributes.

    Returns:
        List of MemoLink, empty when the content has no links.
    """
    links = [
        MemoLink(
            source_id=memo.id,
            target_id=match.group(1),
            text=match.group(2) or match.group(1),
        )
        for match in LINK_PATTERN.finditer(memo.content)
    ]
    if links:
        log.debug("Extracted %d links from %s", len(links), memo.id)
    return links


def extract_memo_id(link_text: str) -> str | None:
    """Return the target id of the first link in ``link_text``.

    Examples:
        "[[memo-1]]" -> "memo-1"
        "[[memo-2|Memo two]]" -> "memo-2"
        "memo-1" -> None
    """
    match = LINK_PATTERN.search(link_text)
    return match.group(1) if match else None


def is_valid_memo_id(memo_id: str) -> bool:
    """Check that an id only contains letters, digits and hyphens.

    Advisory only: extraction does not call this.
    """
    return MEMO_ID_PATTERN.fullmatch(memo_id) is not None


def create_link(target_id: str, display_text: str | None = None) -> str:
    """Serialize a link back into memo syntax.

    Args:
        target_id: Id of the memo to link to.
        display_text: Optional text to show instead of the id.

    Returns:
        ``[[target_id]]`` or ``[[target_id|display_text]]``.
    """
    if display_text:
        return f"[[{target_id}|{display_text}]]"
    return f"[[{target_id}]]"
