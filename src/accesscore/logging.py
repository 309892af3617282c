"""Centralized logging utilities for accesscore.

This module provides:
- Logging configuration from AccessConfig
- Safe preview utilities for definition file content
- Structured logging with identity / source path context
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from .config import AccessConfig, LogLevel

# Context fields the formatter lifts out of the record
CONTEXT_FIELDS = ("identity", "source_path")

_STANDARD_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName",
        *CONTEXT_FIELDS,
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a safe, length-bounded, single-line preview of a value for logging.

    Args:
        value: The value to preview (any type, bytes are decoded leniently)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, bytes):
        s = value.decode("utf-8", errors="replace")
    elif isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class AccessLogFormatter(logging.Formatter):
    """Formatter that includes identity/source_path context.

    Outputs either one JSON object per line or a plain text line.
    """

    def __init__(
        self,
        json_format: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value:
                log_data[key] = str(value)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        for key in CONTEXT_FIELDS:
            if key in log_data:
                parts.append(f"{key}={log_data[key]}")
        parts.append(f": {log_data['message']}")
        text = " ".join(parts)
        if "exception" in log_data:
            text = f"{text}\n{log_data['exception']}"
        return text


class AccessLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds identity and source_path to log records.

    Usage:
        logger = get_access_logger(__name__, source_path=path)
        logger.info("Parsed record", identity=record.identity)
    """

    def __init__(
        self,
        logger: logging.Logger,
        identity: Optional[str] = None,
        source_path: Optional[str | Path] = None,
    ):
        super().__init__(logger, {})
        self.identity = identity
        self.source_path = source_path

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        identity = kwargs.pop("identity", self.identity)
        source_path = kwargs.pop("source_path", self.source_path)

        extra = kwargs.get("extra", {})
        if identity:
            extra["identity"] = identity
        if source_path:
            extra["source_path"] = str(source_path)
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[AccessConfig] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure the root logger.

    Args:
        config: AccessConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
    """
    if config is None:
        from .config import load_access_config_from_env

        config = load_access_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)
    if json_format is None:
        json_format = config.log_json

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(AccessLogFormatter(json_format=json_format))
    root_logger.addHandler(console_handler)


def get_access_logger(
    name: str,
    identity: Optional[str] = None,
    source_path: Optional[str | Path] = None,
) -> AccessLoggerAdapter:
    """Get a logger adapter carrying identity/source_path context.

    Example:
        logger = get_access_logger(__name__, source_path="users/john_doe.yml")
        logger.error("failed to resolve user")
    """
    return AccessLoggerAdapter(logging.getLogger(name), identity=identity, source_path=source_path)


__all__ = [
    "AccessLogFormatter",
    "AccessLoggerAdapter",
    "get_access_logger",
    "safe_preview",
    "setup_logging",
]
