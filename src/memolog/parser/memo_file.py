"""Reading memos from files on disk.

Two layouts are supported:

1. memolog files, holding many memos, each introduced by a header comment::

       <!-- memo-id: 0192-abcd, timestamp: 2025-01-20T10:00:00Z, category: "work" -->
       ## 2025-01-20 10:00
       Memo text with a [[link]].

2. Any other markdown file is one memo. The id comes from the ``id``
   frontmatter field, falling back to the file stem.
"""

import json
import logging
import re
from pathlib import Path

import frontmatter

from ..config import MEMO_FILE_GLOB
from ..models import MemoEntry

log = logging.getLogger(__name__)

HEADER_MARKER = "<!-- memo-id:"

# Lookahead split keeps each header with the memo it introduces
_MEMO_SPLIT_PATTERN = re.compile(r"(?=<!-- memo-id:)")
_HEADER_PATTERN = re.compile(r"<!-- (.+?) -->")
_HEADER_LINE_PATTERN = re.compile(r"^<!-- .+? -->\n?", re.MULTILINE)
_ATTACHMENTS_PATTERN = re.compile(r"\n\n添付: .+$", re.MULTILINE)

_ID_FIELD = re.compile(r"memo-id: ([^,]+)")
_TIMESTAMP_FIELD = re.compile(r"timestamp: ([^,]+?)(?:,|$)")
_CATEGORY_FIELD = re.compile(r"category: ([^,]+?)(?:,|$)")
_DELETED_FIELD = re.compile(r'deleted: "([^"]+)"')


class ParseError(Exception):
    """Raised when a memo file cannot be read."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


def _decode_category(raw: str) -> str:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return raw
    return value if isinstance(value, str) else raw


def _parse_memo_block(block: str, source: str | None) -> MemoEntry | None:
    """Parse one header-plus-body block. Returns None for trashed or headerless blocks."""
    header = _HEADER_PATTERN.search(block)
    if header is None:
        return None

    fields = header.group(1)
    id_match = _ID_FIELD.search(fields)
    if id_match is None or not id_match.group(1).strip():
        return None

    deleted = _DELETED_FIELD.search(fields)
    if deleted and deleted.group(1) == "true":
        return None

    timestamp = _TIMESTAMP_FIELD.search(fields)
    category = _CATEGORY_FIELD.search(fields)

    content = _HEADER_LINE_PATTERN.sub("", block, count=1)
    content = _ATTACHMENTS_PATTERN.sub("", content).strip()

    return MemoEntry(
        id=id_match.group(1).strip(),
        content=content,
        timestamp=timestamp.group(1).strip() if timestamp else None,
        category=_decode_category(category.group(1).strip()) if category else None,
        source=source,
    )


def parse_memo_text(text: str, source: str | None = None) -> list[MemoEntry]:
    """Split memolog-format text into memos, in file order.

    Text before the first header and memos flagged ``deleted: "true"`` are
    skipped.

    Args:
        text: Raw file content.
        source: Optional file label recorded on each memo.

    Returns:
        List of MemoEntry.
    """
    memos: list[MemoEntry] = []
    for block in _MEMO_SPLIT_PATTERN.split(text):
        if not block.strip():
            continue
        memo = _parse_memo_block(block, source)
        if memo is not None:
            memos.append(memo)
    return memos


def _parse_single_note(path: Path, text: str) -> MemoEntry:
    try:
        post = frontmatter.loads(text)
    except Exception as e:
        raise ParseError(path, f"Failed to parse frontmatter: {e}") from e

    metadata = post.metadata or {}
    memo_id = metadata.get("id")
    category = metadata.get("category")
    timestamp = metadata.get("timestamp") or metadata.get("created")

    return MemoEntry(
        id=str(memo_id) if memo_id is not None else path.stem,
        content=post.content.strip(),
        category=str(category) if category is not None else None,
        timestamp=str(timestamp) if timestamp is not None else None,
        source=str(path),
    )


def parse_memo_file(path: Path) -> list[MemoEntry]:
    """Read all memos stored in one file.

    Args:
        path: Path to a markdown file.

    Returns:
        Memos in file order (one for single-note files).

    Raises:
        ParseError: If the file is missing, not a file, or unreadable.
    """
    if not path.exists():
        raise ParseError(path, "File does not exist")

    if not path.is_file():
        raise ParseError(path, "Path is not a file")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(path, f"Failed to read file: {e}") from e

    if HEADER_MARKER in text:
        return parse_memo_text(text, source=str(path))
    return [_parse_single_note(path, text)]


def load_memos(root: Path) -> list[MemoEntry]:
    """Load every memo under ``root``.

    Files are visited in sorted path order so that the resulting collection
    is stable between runs. Files whose name starts with ``_`` are skipped,
    as are files that fail to parse (logged as warnings).

    Args:
        root: Directory to scan recursively.

    Returns:
        Ordered list of MemoEntry; empty when root does not exist.
    """
    if not root.exists() or not root.is_dir():
        log.warning("Memo directory %s does not exist", root)
        return []

    memos: list[MemoEntry] = []
    for md_file in sorted(root.rglob(MEMO_FILE_GLOB)):
        if md_file.name.startswith("_"):
            continue
        try:
            memos.extend(parse_memo_file(md_file))
        except ParseError as e:
            log.warning("Skipping %s", e)
            continue

    log.debug("Loaded %d memos from %s", len(memos), root)
    return memos
