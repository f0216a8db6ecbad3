"""Configuration management for memolog.

This module contains all configurable constants for the link engine.
Magic numbers are documented here rather than scattered throughout the codebase.
"""

import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when required configuration is missing."""

    pass


# Name of the project config file discovered by walking up from cwd.
# Expected content (YAML):
#     memo_path: memos
CONFIG_FILENAME = ".memologconfig"

# Maximum directories to traverse up when looking for CONFIG_FILENAME
MAX_CONFIG_SEARCH_DEPTH = 10


def _discover_project_config(
    start_dir: Path | None = None, max_depth: int = MAX_CONFIG_SEARCH_DEPTH
) -> tuple[Path, Path] | None:
    """Walk up from start_dir looking for .memologconfig with memo_path.

    Args:
        start_dir: Directory to start from (defaults to cwd)
        max_depth: Maximum directories to traverse up

    Returns:
        Tuple of (config_path, memo_path) if found, None otherwise.
    """
    import yaml

    current = Path(start_dir or os.getcwd()).resolve()

    for _ in range(max_depth):
        config_file = current / CONFIG_FILENAME
        if config_file.exists():
            try:
                data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
            except (OSError, yaml.YAMLError) as e:
                log.warning("Ignoring unreadable %s: %s", config_file, e)
                data = {}
            if isinstance(data, dict) and "memo_path" in data:
                memo_path = (current / str(data["memo_path"])).resolve()
                if memo_path.is_dir():
                    return (config_file, memo_path)

        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    return None


def get_memo_root() -> Path:
    """Get the directory holding memo files.

    Discovery order:
    1. MEMOLOG_ROOT environment variable (explicit override)
    2. Walk up from cwd looking for .memologconfig with a memo_path field
    3. Error with helpful message

    Raises:
        ConfigurationError: If no memo directory can be found.
    """
    root = os.environ.get("MEMOLOG_ROOT")
    if root:
        return Path(root)

    project_config = _discover_project_config()
    if project_config:
        _, memo_path = project_config
        return memo_path

    raise ConfigurationError(
        "No memo directory found. Options:\n"
        "  1. Pass --root path/to/memos\n"
        "  2. Set MEMOLOG_ROOT to an existing directory\n"
        f"  3. Add a {CONFIG_FILENAME} file with 'memo_path: <dir>' to your project"
    )


def get_context_length() -> int:
    """Get the preview context length, honouring MEMOLOG_CONTEXT_LENGTH."""
    raw = os.environ.get("MEMOLOG_CONTEXT_LENGTH")
    if raw:
        try:
            value = int(raw)
        except ValueError:
            value = 0
        if value > 0:
            return value
        log.warning("Ignoring invalid MEMOLOG_CONTEXT_LENGTH=%r", raw)
    return PREVIEW_CONTEXT_LENGTH


# =============================================================================
# Link Syntax
# =============================================================================

# Characters allowed in a memo id: ASCII letters, digits and hyphens.
MEMO_ID_CHARS = r"[a-zA-Z0-9-]"

# CSS class attached to every rendered link anchor.
LINK_CSS_CLASS = "memolog-link"


# =============================================================================
# Backlink Previews
# =============================================================================

# Characters of context kept on each side of a link occurrence.
# 50 + 50 keeps a preview to roughly one line in a "referenced by" panel.
PREVIEW_CONTEXT_LENGTH = 50

# Marker added where a preview was cut short.
PREVIEW_ELLIPSIS = "..."


# =============================================================================
# Memo Files
# =============================================================================

# Files scanned under the memo root (files starting with "_" are skipped).
MEMO_FILE_GLOB = "*.md"


# =============================================================================
# Health Score
# =============================================================================

# Broken links are serious: 5 points each, at most 30 points deducted.
BROKEN_LINK_PENALTY = 5
BROKEN_LINK_PENALTY_MAX = 30

# Orphans are moderate: 2 points each, at most 25 points deducted.
ORPHAN_PENALTY = 2
ORPHAN_PENALTY_MAX = 25
