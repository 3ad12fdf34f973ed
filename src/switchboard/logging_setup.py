"""Logging configuration for the switchboard CLI.

Diagnostics go to stderr through the root logger. Noisy HTTP client loggers
are held at WARNING unless DEBUG is requested.
"""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root = logging.getLogger()

    # Remove existing handlers to avoid duplicate logs on repeated setup
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))

    root.addHandler(handler)
    root.setLevel(numeric_level)

    if numeric_level > logging.DEBUG:
        for name in ("httpx", "httpcore"):
            logging.getLogger(name).setLevel(logging.WARNING)
