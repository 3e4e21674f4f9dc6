"""Structured logging for radio-accuracy.

Provides configurable logging with:
- Multiple verbosity levels
- Text or JSON log output
- File and console handlers
- Context-aware logging
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "radio_accuracy"

# LogRecord attributes that are not user supplied context
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "message",
        "taskName",
    }
)


class LogLevel(IntEnum):
    """Log verbosity levels."""

    QUIET = 0  # Only errors
    NORMAL = 1  # Errors + warnings
    VERBOSE = 2  # Errors + warnings + info
    DEBUG = 3  # Everything including per-call scoring records


@dataclass
class LogConfig:
    """Configuration for logging.

    Attributes:
        level: Verbosity level
        log_file: Optional path to log file
        json_format: Use JSON format for logs
        include_timestamp: Include timestamp in logs
        include_context: Include extra context in logs
        color: Use colored output (console only)
    """

    level: LogLevel = LogLevel.NORMAL
    log_file: Path | None = None
    json_format: bool = False
    include_timestamp: bool = True
    include_context: bool = True
    color: bool = True


class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Collect the non-standard attributes attached to a record."""
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs structured log records.

    Supports both text and JSON formats with optional coloring.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.GRAY,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.RED,
    }

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_context: bool = True,
        color: bool = True,
    ):
        super().__init__()
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_context = include_context
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record."""
        if self.json_format:
            return self._format_json(record)
        return self._format_text(record)

    def _paint(self, text: str, color: str) -> str:
        if not self.color:
            return text
        return f"{color}{text}{Colors.RESET}"

    def _format_json(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }

        if self.include_timestamp:
            data["timestamp"] = datetime.now().isoformat()

        if self.include_context:
            context = {}
            for key, value in _extra_fields(record).items():
                try:
                    json.dumps(value)
                    context[key] = value
                except (TypeError, ValueError):
                    context[key] = str(value)
            if context:
                data["context"] = context

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data)

    def _format_text(self, record: logging.LogRecord) -> str:
        parts = []

        if self.include_timestamp:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            parts.append(self._paint(timestamp, Colors.GRAY))

        level = record.levelname.upper()[:5].ljust(5)
        parts.append(self._paint(level, self.LEVEL_COLORS.get(record.levelno, Colors.RESET)))

        # Logger name, shortened from the left
        name = record.name
        if len(name) > 24:
            name = "..." + name[-21:]
        parts.append(self._paint(f"{name:>24}", Colors.CYAN))

        parts.append(record.getMessage())
        result = " | ".join(parts)

        if self.include_context:
            extra = _extra_fields(record)
            if extra:
                context_str = " ".join(f"{k}={v}" for k, v in extra.items())
                result += " " + self._paint(f"[{context_str}]", Colors.GRAY)

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result


class RadioAccuracyLogger(logging.Logger):
    """Logger that carries bound context into every record."""

    def __init__(self, name: str, level: int = logging.NOTSET):
        super().__init__(name, level)
        self._context: dict[str, Any] = {}

    def with_context(self, **context: Any) -> "RadioAccuracyLogger":
        """Create a new logger with additional context.

        Args:
            **context: Context key-value pairs

        Returns:
            Logger with context bound
        """
        new_logger = RadioAccuracyLogger(self.name, self.level)
        new_logger.parent = self.parent
        new_logger.handlers = self.handlers
        new_logger._context = {**self._context, **context}
        return new_logger

    def _log(
        self,
        level: int,
        msg: object,
        args: tuple,
        exc_info: Any = None,
        extra: dict | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
    ) -> None:
        merged_extra = {**self._context, **(extra or {})}
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=merged_extra,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )


_config: LogConfig = LogConfig()
_initialized: bool = False

_LEVEL_MAP = {
    LogLevel.QUIET: logging.ERROR,
    LogLevel.NORMAL: logging.WARNING,
    LogLevel.VERBOSE: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def configure_logging(config: LogConfig | None = None) -> None:
    """Configure logging for the radio_accuracy logger hierarchy.

    Args:
        config: Logging configuration
    """
    global _config, _initialized

    if config:
        _config = config

    logging.setLoggerClass(RadioAccuracyLogger)

    log_level = _LEVEL_MAP[_config.level]

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        StructuredFormatter(
            json_format=_config.json_format,
            include_timestamp=_config.include_timestamp,
            include_context=_config.include_context,
            color=_config.color and sys.stderr.isatty(),
        )
    )
    root_logger.addHandler(console_handler)

    if _config.log_file:
        _config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(_config.log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(
            StructuredFormatter(
                json_format=_config.json_format,
                include_timestamp=True,
                include_context=True,
                color=False,
            )
        )
        root_logger.addHandler(file_handler)

    _initialized = True


def get_logger(name: str) -> RadioAccuracyLogger:
    """Get a logger for the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger
    """
    if not _initialized:
        configure_logging()

    logger = logging.getLogger(name)
    if not isinstance(logger, RadioAccuracyLogger):
        # Created before our logger class was installed
        custom_logger = RadioAccuracyLogger(name)
        custom_logger.parent = logger.parent
        custom_logger.handlers = logger.handlers
        custom_logger.level = logger.level
        return custom_logger

    return logger  # type: ignore


def set_verbosity(level: LogLevel) -> None:
    """Set global verbosity level."""
    _config.level = level
    configure_logging(_config)


def enable_file_logging(log_file: Path) -> None:
    """Enable logging to a file."""
    _config.log_file = log_file
    configure_logging(_config)


class LogContext:
    """Context manager for temporary logging context.

    Example:
        with LogContext(scenario_id="basic-abc"):
            logger.info("Scoring attempt")
    """

    def __init__(self, **context: Any):
        self.context = context
        self._old_factory = None

    def __enter__(self) -> "LogContext":
        self._old_factory = logging.getLogRecordFactory()
        old_factory = self._old_factory
        context = self.context

        def factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = old_factory(*args, **kwargs)
            for key, value in context.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(factory)
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: Any) -> None:
        if self._old_factory:
            logging.setLogRecordFactory(self._old_factory)


def log_operation_start(logger: logging.Logger, operation: str, **context: Any) -> None:
    """Log the start of an operation."""
    logger.info(f"Starting: {operation}", extra=context)


def log_operation_complete(
    logger: logging.Logger,
    operation: str,
    duration: float | None = None,
    **context: Any,
) -> None:
    """Log the completion of an operation.

    Args:
        logger: Logger to use
        operation: Operation name
        duration: Optional duration in seconds
        **context: Additional context
    """
    if duration is not None:
        context["duration_seconds"] = round(duration, 2)
    logger.info(f"Completed: {operation}", extra=context)


def log_operation_failed(
    logger: logging.Logger,
    operation: str,
    error: Exception,
    **context: Any,
) -> None:
    """Log a failed operation."""
    context["error_type"] = type(error).__name__
    context["error_message"] = str(error)
    logger.error(f"Failed: {operation}", extra=context)
