# subject_memory/logging/logger.py
"""
Unified logging setup for subject_memory.

All modules use:
    from subject_memory.logging.logger import get_logger
    logger = get_logger(__name__)

Configuration happens once, in the host application, through
configure_logging(). Log namespaces follow module paths automatically.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO, Union

DEFAULT_FORMAT = "[%(levelname)s] %(name)s - %(message)s"


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: TextIO = sys.stdout,
) -> None:
    """
    Configure the root logging handler.

    Safe to call multiple times; a second handler is never attached.

    Args:
        level: Log level as an int or a level name ("DEBUG", "INFO", ...)
        fmt: Format string for the handler
        stream: Stream the handler writes to
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Example:
        logger = get_logger(__name__)

    Do NOT configure logging here; that happens in configure_logging().
    """
    return logging.getLogger(name)
