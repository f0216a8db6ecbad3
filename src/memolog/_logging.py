"""Logging configuration for memolog.

Usage in other modules:
    import logging
    log = logging.getLogger(__name__)

The log level can be configured via the MEMOLOG_LOG_LEVEL environment variable
(DEBUG, INFO, WARNING, ERROR). The CLI defaults to WARNING so that command
output stays clean; `memolog -v` switches to DEBUG.
"""

import logging
import os
import sys

DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(verbose: bool = False) -> None:
    """Configure logging for the memolog package.

    Call this once at application startup (e.g., in cli.py).
    Subsequent calls only adjust the level.

    Args:
        verbose: Force DEBUG level regardless of MEMOLOG_LOG_LEVEL.
    """
    root_logger = logging.getLogger("memolog")

    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.environ.get("MEMOLOG_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        level = getattr(logging, level_name, logging.WARNING)

    root_logger.setLevel(level)

    # Skip handler setup if already configured
    if root_logger.handlers:
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt="[%(levelname)s] %(name)s: %(message)s"))

    root_logger.addHandler(handler)

    # Prevent propagation to root logger (avoids duplicate messages)
    root_logger.propagate = False
