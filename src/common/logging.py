"""Logging configuration for the blog content renderer.

Renderer modules log through named loggers under the ``content_renderer``
prefix. Each gets its own stdout handler and does not propagate, so a
root handler installed by the CLI never prints the same record twice.
"""

from __future__ import annotations

import logging
import sys

LOGGER_PREFIX = "content_renderer"


def setup_logging(
    level: int = logging.INFO,
    module_name: str = LOGGER_PREFIX,
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Args:
        level: Logging level (default INFO).
        module_name: Name for the logger instance.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    logger.setLevel(level)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def set_log_level(level: int, prefix: str = LOGGER_PREFIX) -> None:
    """Change the level of every configured logger under ``prefix``."""
    for name in list(logging.root.manager.loggerDict):
        if name != prefix and not name.startswith(prefix + "."):
            continue
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
