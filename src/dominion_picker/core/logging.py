"""
Logging configuration for the Dominion card catalog.

Uses loguru for structured logging with optional file rotation and retention.
"""

import sys
import time
from typing import Optional

from loguru import logger

from dominion_picker.config.settings import CatalogSettings


def setup_logging(config: Optional[CatalogSettings] = None) -> None:
    """Configure logging from settings.

    Sets up:
    - Console output with color and formatting
    - File output with rotation and retention (when log_to_file is set)

    Should be called once at application startup. Library code only logs
    through get_logger() and never installs sinks itself.
    """
    if config is None:
        from dominion_picker.config import settings as settings_module

        config = settings_module.settings

    logger.remove()

    logger.add(
        sys.stderr,
        level=config.log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        colorize=True,
    )

    if config.log_to_file:
        log_dir = config.logs_dir
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "dominion-picker_{time:YYYY-MM-DD}.log",
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation=config.log_rotation,
            retention=config.log_retention,
            compression="gz",
            enqueue=True,
        )

    logger.info("Logging initialized (level={})", config.log_level)


def get_logger(name: str):
    """Get a logger bound to a module name.

    Example:
        >>> from dominion_picker.core.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Loaded {} cards", count)
    """
    return logger.bind(module=name)


class log_operation:
    """Context manager that logs an operation's start, end and duration.

    Outcome values known only at the end (row counts, versions) can be
    attached with ``add_context`` and appear in the completion line.

    Example:
        >>> with log_operation("Loading card records", version=7) as op:
        ...     op.add_context(rows=load_all(conn, resources))
        # Logs: "Loading card records [version=7 rows=206] completed in 0.04s"
    """

    def __init__(self, operation: str, **context):
        self.operation = operation
        self.context = context
        self.start_time: Optional[float] = None

    def add_context(self, **context) -> None:
        self.context.update(context)

    def _context_str(self) -> str:
        return " ".join(f"{k}={v}" for k, v in self.context.items())

    def __enter__(self):
        self.start_time = time.perf_counter()
        logger.debug("{} [{}] starting...", self.operation, self._context_str())
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.perf_counter() - (self.start_time or 0.0)

        if exc_type is None:
            logger.info(
                "{} [{}] completed in {:.2f}s",
                self.operation,
                self._context_str(),
                duration,
            )
        else:
            logger.error(
                "{} [{}] failed after {:.2f}s: {}",
                self.operation,
                self._context_str(),
                duration,
                exc_val,
            )

        return False
