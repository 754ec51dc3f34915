"""Logging utilities for the Berlin Clock service.

This module configures structured logging using structlog. Console logs are
rendered in aligned, colored columns, while logs written when JSON mode is
active are rendered as JSON lines.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog
from structlog.dev import Column
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

# Prevent logging output before setup_logging configures handlers
logging.getLogger().addHandler(logging.NullHandler())

SERVER_LOGGERS = ["uvicorn", "uvicorn.error", "uvicorn.access"]


class ClockLogger:
    """Simple logger adapter that supports structured extras."""

    def __init__(self, base_logger: logging.Logger) -> None:
        """Initialize the adapter.

        Args:
            base_logger: The underlying logger instance.
        """
        self._base_logger = base_logger

    def log(
        self,
        level: int,
        msg: str,
        *args: Any,
        subsystem: str = "CLOCK",
        **kwargs: Any,
    ) -> None:
        """Log a message with optional subsystem context."""
        extra = kwargs.pop("extra", {})
        extra["subsystem"] = subsystem
        stacklevel = kwargs.pop("stacklevel", 1)
        self._base_logger.log(
            level,
            msg,
            *args,
            extra=extra,
            stacklevel=stacklevel + 1,
            **kwargs,
        )

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, stacklevel=2, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, stacklevel=2, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, stacklevel=2, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, stacklevel=2, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Delegate ``ERROR`` messages with exception info."""
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, msg, *args, stacklevel=2, **kwargs)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._base_logger, name)


_base_logger: logging.Logger = logging.getLogger("berlin_clock")

logger: ClockLogger = ClockLogger(_base_logger)


def uppercase_level(
    _logger: logging.Logger, _name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Ensure the ``level`` field is uppercase."""
    level = event_dict.get("level")
    if level is not None:
        event_dict["level"] = str(level).upper()
    return event_dict


LEVEL_STYLES: dict[str, str] = {
    "CRITICAL": "\033[1;31m",  # bold red
    "ERROR": "\033[31m",  # red
    "WARNING": "\033[33m",  # yellow
    "INFO": "\033[36m",  # cyan
    "DEBUG": "\033[32m",  # green
}


def insert_logger_name(
    _logger: logging.Logger, _name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Prefer the subsystem over the logger name for rendering."""
    subsystem = event_dict.pop("subsystem", None)
    logger_name = event_dict.pop("logger", None)
    if subsystem or logger_name:
        event_dict["logger_name"] = subsystem or logger_name
    return event_dict


def format_location(
    _logger: logging.Logger, _name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Format filename and line number as (file.py:123)."""
    filename = event_dict.pop("filename", None)
    lineno = event_dict.pop("lineno", None)

    if filename and lineno:
        event_dict["location"] = f"({filename}:{lineno})"

    return event_dict


def strip_internal_fields(
    _logger: logging.Logger, _name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Remove noisy internal fields from logs."""
    event_dict.pop("stacklevel", None)
    event_dict.pop("extra", None)
    event_dict.pop("color_message", None)  # set by uvicorn
    return event_dict


def _console_columns() -> list[Column]:
    """Column layout: timestamp [level] [logger] message (location) extras."""

    def plain_formatter(key: str, value: Any) -> str:
        return str(value) if value is not None else ""

    def dim_formatter(key: str, value: Any) -> str:
        if not value:
            return ""
        return f"\033[90m{value}\033[0m"

    def level_formatter(key: str, value: Any) -> str:
        if not value:
            return ""
        level_str = str(value)
        color_code = LEVEL_STYLES.get(level_str, "")
        reset_code = "\033[0m" if color_code else ""
        return f"[{color_code}{level_str}{reset_code}]"

    def logger_formatter(key: str, value: Any) -> str:
        if not value:
            return ""
        return f"[\033[94m{value}\033[0m]"

    return [
        Column("timestamp", dim_formatter),
        Column("level", level_formatter),
        Column("logger_name", logger_formatter),
        Column("event", plain_formatter),
        Column("location", dim_formatter),
        Column(
            "",
            structlog.dev.KeyValueColumnFormatter(
                key_style=None, value_style="", reset_style="", value_repr=str
            ),
        ),
    ]


def setup_logging(
    log_file: str | None = None,
    log_level: int = logging.INFO,
    json_logs: bool = False,
) -> None:
    """Render standard logging records through structlog processors.

    Args:
        log_file: Optional path to the log file. If ``None`` logs are written
            to ``stderr`` only.
        log_level: Logging level.
        json_logs: Emit JSON logs instead of the column layout.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    timestamper = structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S")
    callsite = CallsiteParameterAdder(
        [CallsiteParameter.FILENAME, CallsiteParameter.LINENO],
        additional_ignores=["berlin_clock.utils.logging_utils"],
    )

    pre_chain = [
        structlog.stdlib.add_log_level,
        uppercase_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        timestamper,
        callsite,
        strip_internal_fields,
        insert_logger_name,
        format_location,
    ]

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(
            colors=True, sort_keys=False, columns=_console_columns()
        )
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=renderer,
                foreign_pre_chain=pre_chain,
            ),
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=pre_chain,
        ),
    )
    root_logger.addHandler(console_handler)

    # uvicorn installs its own handlers; send its records through ours instead
    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = []
        server_logger.propagate = True
        server_logger.setLevel(log_level)


def get_logger() -> ClockLogger:
    """Get the configured Berlin Clock logger."""
    return logger
