"""
Structured logging configuration.

Library modules only create loggers and attach their context (matrix size,
operation, method) as ``extra_data``; handlers are installed by
``setup_logging``, which the demo CLI calls once at startup.
"""

import sys
import logging
from typing import Any, Dict, Optional, TextIO
from datetime import datetime, timezone
import json
from pathlib import Path

from .config import Settings, get_settings

PACKAGE_LOGGER = "matrix_ops"


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter"""

    def __init__(self, app_name: Optional[str] = None):
        super().__init__()
        self.app_name = app_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as one JSON object per line"""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if self.app_name:
            log_data["app"] = self.app_name

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        # values json cannot encode fall back to str()
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter that appends extra_data as key=value pairs"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            pairs = " ".join(f"{key}={value}" for key, value in extra_data.items())
            line = f"{line} [{pairs}]"
        return line


def setup_logging(settings: Optional[Settings] = None, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the root logger from settings.

    Args:
        settings: Settings to read LOG_LEVEL/LOG_FORMAT/LOG_FILE from
            (the cached settings when omitted)
        stream: Console stream (stdout when omitted)

    Returns:
        The package logger
    """
    settings = settings or get_settings()

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)

    if settings.LOG_FORMAT == "json":
        formatter: logging.Formatter = StructuredFormatter(settings.APP_NAME)
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    handlers = [console_handler]

    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True
    )
    return logging.getLogger(PACKAGE_LOGGER)


def get_logger(name: str) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger that merges permanent context into extra_data"""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra_data = kwargs.pop("extra_data", {})

        if "extra" not in kwargs:
            kwargs["extra"] = {}

        kwargs["extra"]["extra_data"] = {
            **self.extra,
            **extra_data
        }

        return msg, kwargs


def get_context_logger(name: str, **context) -> LoggerAdapter:
    """
    Get logger with permanent context.

    Example:
        >>> logger = get_context_logger(__name__, component="algorithms")
        >>> logger.warning("Cofactor expansion on a large matrix", extra_data={"size": 9})
    """
    logger = get_logger(name)
    return LoggerAdapter(logger, context)
