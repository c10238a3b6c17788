"""Logging configuration for the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from ...config import config

console = Console(stderr=True)


def setup_logging(verbosity: int = 0) -> None:
    """Setup logging configuration.

    Args:
        verbosity: Verbosity level (0-3), 0 meaning the configured LOG_LEVEL
    """
    # Map verbosity to log level; without -v the configured level applies
    if verbosity == 0:
        log_level = logging.DEBUG if config.debug else logging.getLevelName(config.log_level)
    else:
        log_level = {
            1: logging.INFO,
            2: logging.DEBUG,
            3: logging.DEBUG,
        }.get(verbosity, logging.DEBUG)

    # Remove all existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Configure root logger
    root_logger.setLevel(log_level)

    # Create console handler with rich formatting
    console_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbosity > 2,
    )
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root_logger.addHandler(console_handler)

    logging.getLogger("wiki_search").setLevel(log_level)

    # Suppress some noisy loggers
    noisy_level = logging.DEBUG if verbosity > 2 else logging.WARNING
    logging.getLogger("httpx").setLevel(noisy_level)
    logging.getLogger("httpcore").setLevel(noisy_level)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured (level: {logging.getLevelName(log_level)})")
