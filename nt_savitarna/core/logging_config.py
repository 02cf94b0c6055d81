"""
Logging configuration for the NT Savitarna portal.

``setup_logging`` installs one console handler on the root logger and,
when a log directory is given, a rotating file handler that always records
DEBUG. Noisy libraries (SQLAlchemy, httpx, WeasyPrint) are turned down
through ``MODULE_LOG_LEVELS``.

Formats:
- simple: level, logger and message
- detailed: timestamp and call site as well
- json: one JSON object per line, including the ``extra`` fields passed by
  the request middleware and the error handlers (``error_id``, ``path`` ...)
"""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, Union

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

LOG_FILE_NAME = "nt_savitarna.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Module-specific log levels
MODULE_LOG_LEVELS = {
    "nt_savitarna.core": "INFO",
    "nt_savitarna.core.database": "INFO",
    "nt_savitarna.core.reporting": "INFO",
    "nt_savitarna.core.export": "INFO",
    "nt_savitarna.core.geo": "DEBUG",
    "nt_savitarna.server": "INFO",
    "nt_savitarna.server.api": "DEBUG",
    "nt_savitarna.server.services": "DEBUG",
    # Third-party libraries
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "asyncio": "WARNING",
    "weasyprint": "ERROR",
    "fontTools": "WARNING",
}

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRIBUTES = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "module": record.filename,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_"):
                payload[key] = value
        if record.exc_info and "traceback" not in payload:
            payload["traceback"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def build_formatter(log_format: str) -> logging.Formatter:
    """Formatter for ``simple``, ``detailed`` or ``json``; unknown names fall back to detailed."""
    if log_format == "json":
        return JsonFormatter(datefmt=DATE_FORMAT)
    if log_format == "simple":
        return logging.Formatter(SIMPLE_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "detailed",
    log_dir: Optional[Union[str, Path]] = None,
) -> None:
    """
    Configure logging for the application.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        log_level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: simple, detailed or json
        log_dir: Directory for ``nt_savitarna.log``; no file logging when None
    """
    level = log_level.upper()
    formatter = build_formatter(log_format)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # handlers filter

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            directory / LOG_FILE_NAME,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={log_format}, log_dir={log_dir}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The module name (typically __name__)
    """
    return logging.getLogger(name)
