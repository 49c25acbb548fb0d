"""
Structured JSON logging configuration.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Optional
from uuid import uuid4

from siwe_auth.config.settings import Settings, get_settings

# Context variable for verification ID tracking
verification_id_ctx: ContextVar[Optional[str]] = ContextVar(
    "verification_id", default=None
)

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in JSON format with consistent schema.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        verification_id = verification_id_ctx.get()
        if verification_id:
            log_data["verification_id"] = verification_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Fields passed with `extra=`
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        log_data["file"] = record.pathname
        log_data["line"] = record.lineno
        log_data["function"] = record.funcName

        return json.dumps(log_data, default=str)


def setup_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure application logging.

    The library never calls this itself; applications embedding siwe-auth
    decide how their root logger is set up.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Use JSON format (True) or plain text (False)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if json_logs:
        formatter = JSONFormatter(datefmt="%Y-%m-%dT%H:%M:%S")
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Silence noisy loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("web3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure logging from LOG_LEVEL and JSON_LOGS settings.

    Args:
        settings: Settings to use (defaults to the global settings)
    """
    if settings is None:
        settings = get_settings()

    setup_logging(level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)


def get_logger(name: str) -> logging.Logger:
    """
    Get logger with given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def set_verification_id(verification_id: Optional[str] = None) -> str:
    """
    Set verification ID for current context.

    Args:
        verification_id: Verification ID (generates UUID if None)

    Returns:
        Verification ID that was set
    """
    if verification_id is None:
        verification_id = str(uuid4())
    verification_id_ctx.set(verification_id)
    return verification_id


def get_verification_id() -> Optional[str]:
    """
    Get verification ID from current context.

    Returns:
        Verification ID or None
    """
    return verification_id_ctx.get()
