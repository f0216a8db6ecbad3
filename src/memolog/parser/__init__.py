"""Link extraction and memo file parsing."""

from .links import create_link, extract_links, extract_memo_id, is_valid_memo_id
from .memo_file import ParseError, load_memos, parse_memo_file, parse_memo_text

__all__ = [
    "extract_links",
    "extract_memo_id",
    "is_valid_memo_id",
    "create_link",
    "ParseError",
    "load_memos",
    "parse_memo_file",
    "parse_memo_text",
]
