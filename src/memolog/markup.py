"""Rewrite memo links as clickable anchors for display."""

import re

from .config import LINK_CSS_CLASS, MEMO_ID_CHARS

_PIPED_LINK = re.compile(rf"\[\[({MEMO_ID_CHARS}+)\|([^\]]+)\]\]")
_BARE_LINK = re.compile(rf"\[\[({MEMO_ID_CHARS}+)\]\]")

_ANCHOR = '<a href="#" data-memo-id="{memo_id}" class="' + LINK_CSS_CLASS + '">{text}</a>'


def highlight_links(content: str) -> str:
    """Replace ``[[id|text]]`` and ``[[id]]`` with anchor elements.

    Piped links are rewritten first, then bare links. Text outside links,
    and brackets that do not form a link, are left untouched. Display text
    is not escaped.

    Not idempotent: running it again on its own output is undefined.
    """
    result = _PIPED_LINK.sub(
        lambda m: _ANCHOR.format(memo_id=m.group(1), text=m.group(2)), content
    )
    return _BARE_LINK.sub(
        lambda m: _ANCHOR.format(memo_id=m.group(1), text=m.group(1)), result
    )
