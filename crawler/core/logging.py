"""
Logging module for the crawler.

Engine diagnostics go to the ``crawler`` logger and are rendered by rich.
They are separate from the in-game message log the player reads.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("crawler")


def setup_logging(level: int = logging.WARNING) -> None:
    """
    Routes diagnostics through a rich handler on stderr.

    Args:
        level (int): Lowest level shown. Debug also shows locals in tracebacks.

    """
    handler = RichHandler(
        console=Console(stderr=True, width=120),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=level <= logging.DEBUG,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler])


def _with_context(message: str, context: dict[str, Any] | None) -> str:
    if not context:
        return message
    pairs = " ".join(f"{key}={value}" for key, value in context.items())
    return f"{message} [{pairs}]"


def log_info(message: str, context: dict[str, Any] | None = None) -> None:
    """Logs a game milestone (new run, new floor) with optional context."""
    logger.info(_with_context(message, context))


def log_debug(message: str, context: dict[str, Any] | None = None) -> None:
    """Logs a rules-level detail (rolls, spawns, purchases) with optional context."""
    logger.debug(_with_context(message, context))
