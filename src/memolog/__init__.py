"""memolog: links, backlinks and integrity checks for short memos."""

from .backlinks import get_backlinks, get_preview_text, preview_window
from .graph import build_link_graph
from .integrity import check_health, find_broken_links, find_orphaned_memos
from .markup import highlight_links
from .models import Backlink, HealthReport, MemoEntry, MemoLink
from .parser.links import create_link, extract_links, extract_memo_id, is_valid_memo_id

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "MemoEntry",
    "MemoLink",
    "Backlink",
    "HealthReport",
    "extract_links",
    "extract_memo_id",
    "is_valid_memo_id",
    "create_link",
    "build_link_graph",
    "get_backlinks",
    "get_preview_text",
    "preview_window",
    "find_orphaned_memos",
    "find_broken_links",
    "check_health",
    "highlight_links",
]
