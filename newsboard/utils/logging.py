"""
Newsboard Logging Configuration
===============================

All Newsboard loggers live under the ``newsboard`` namespace. Console output
goes through rich; the log file gets one JSON object per line so repository
context (component, article_id, username, operation) stays machine-readable.
"""

import logging
import logging.handlers
import json
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Any, Optional, Union

from rich.logging import RichHandler

ROOT_LOGGER = "newsboard"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """Formatter emitting one JSON object per record.

    ``component`` is lifted to the top level; the remaining ``extra`` values
    are grouped under ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:
        context = {
            k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS
        }

        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "component": context.pop("component", None),
            "message": record.getMessage(),
        }
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logger(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console: bool = True,
    structured: bool = False,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    name: str = ROOT_LOGGER,
) -> logging.Logger:
    """Attach console and file handlers to a Newsboard logger.

    Existing handlers are replaced, so calling this again reconfigures
    instead of duplicating output.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())
    logger.handlers.clear()

    if console:
        if structured:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(StructuredFormatter())
        else:
            console_handler = RichHandler(show_path=False, rich_tracebacks=True)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that merges fixed context into every record."""

    def process(self, msg: Any, kwargs: Dict[str, Any]) -> tuple:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger_for_component(
    component_name: str,
    article_id: Optional[Union[int, str]] = None,
    username: Optional[str] = None,
) -> LoggerAdapter:
    """Get a logger adapter with component-specific context.

    Args:
        component_name: Name of the component (e.g., 'article_repository')
        article_id: Associated article ID (optional)
        username: Associated username (optional)

    Returns:
        Logger adapter with context
    """
    extra: Dict[str, Any] = {"component": component_name}
    if article_id is not None:
        extra["article_id"] = article_id
    if username:
        extra["username"] = username

    return LoggerAdapter(logging.getLogger(f"{ROOT_LOGGER}.{component_name}"), extra)


def configure_application_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = "logs/newsboard.log",
    enable_console: bool = True,
    structured_logging: bool = False,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
) -> None:
    """Configure the ``newsboard`` logger tree from logging settings."""
    setup_logger(
        level=log_level,
        log_file=log_file,
        console=enable_console,
        structured=structured_logging,
        max_file_size_mb=max_file_size_mb,
        backup_count=backup_count,
    )


class PerformanceLogger:
    """Context manager that logs how long an operation took.

    Success is logged at info level, failure at error level; both carry
    ``duration_seconds`` and ``success`` in the record context.
    """

    def __init__(self, logger: Union[logging.Logger, logging.LoggerAdapter], operation: str, **context):
        self.logger = logger
        self.operation = operation
        self.context = context
        self._started: Optional[float] = None

    def __enter__(self) -> "PerformanceLogger":
        self._started = time.perf_counter()
        self.logger.debug(f"Starting {self.operation}", extra=self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        duration = time.perf_counter() - self._started
        extra = {**self.context, "duration_seconds": round(duration, 6), "success": exc_type is None}

        if exc_type is None:
            self.logger.info(f"Completed {self.operation} in {duration:.3f}s", extra=extra)
        else:
            self.logger.error(f"Failed {self.operation} in {duration:.3f}s: {exc_val}", extra=extra)
