"""
Structured Logging for auditcov.

This module provides the logging infrastructure used by every layer of the
verifier: context binding, consistent formatting and a Rich console handler.

Architecture Context
--------------------
All modules should import get_logger() from here rather than using Python's
logging directly:

    # Good - uses auditcov's structured logging
    from auditcov.core.logging import get_logger
    logger = get_logger(__name__)

    # Avoid - bypasses our structure
    import logging
    logger = logging.getLogger(__name__)

Logger Types
------------
**StructuredLogger**
    Base logger with context binding support. Key-value pairs attached with
    bind() appear in all subsequent log messages:

        logger = get_logger(__name__)
        logger.bind(model="snapshot.json")
        logger.warning("REST endpoint not included in audit trail")

Module-Level Factory
--------------------
get_logger() returns cached instances, so multiple calls with the same name
return the same logger. configure_logging() changes the defaults and
re-applies them to every logger created so far.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from rich.logging import RichHandler


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_path: Optional[Path] = None
    console: bool = True


# One file handler per log file, shared by every logger writing to it
_file_handlers: dict[Path, logging.FileHandler] = {}


def _shared_file_handler(
    file_path: Path, config: LogConfig, level: int
) -> logging.FileHandler:
    """Return the file handler for file_path, creating it once."""
    key = file_path.resolve()
    handler = _file_handlers.get(key)
    if handler is None:
        key.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(key, encoding="utf-8")
        _file_handlers[key] = handler
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(config.format, datefmt=config.date_format)
    )
    return handler


def _close_file_handlers(keep: Optional[Path] = None) -> None:
    """Close shared file handlers other than the one for keep."""
    keep_key = keep.resolve() if keep is not None else None
    for key in list(_file_handlers):
        if key != keep_key:
            _file_handlers.pop(key).close()


class StructuredLogger:
    """
    Structured logger with context support.

    Wraps a stdlib logger and renders extra keyword fields as
    ``message | key=value | key=value``.
    """

    def __init__(self, name: str, config: Optional[LogConfig] = None) -> None:
        self.logger = logging.getLogger(name)
        self.config = config or LogConfig()
        self._context: dict[str, Any] = {}
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Configure the logger."""
        level = getattr(logging, self.config.level.upper(), logging.INFO)
        self.logger.setLevel(level)

        # Remove existing handlers; shared file handlers stay open
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            if handler not in _file_handlers.values():
                handler.close()

        if self.config.console:
            console_handler = RichHandler(
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            console_handler.setLevel(level)
            self.logger.addHandler(console_handler)

        if self.config.file_path:
            self.logger.addHandler(
                _shared_file_handler(self.config.file_path, self.config, level)
            )

    def reconfigure(self, config: LogConfig) -> None:
        """Replace the configuration and rebuild handlers."""
        self.config = config
        self._setup_logger()

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """Attach context fields to every subsequent message."""
        self._context.update(kwargs)
        return self

    def unbind(self, *keys: str) -> "StructuredLogger":
        """Remove previously bound context fields."""
        for key in keys:
            self._context.pop(key, None)
        return self

    def _format_message(self, message: str, **kwargs: Any) -> str:
        """Format message with context and extra fields."""
        fields = {**self._context, **kwargs}
        if fields:
            field_str = " | ".join(f"{k}={v}" for k, v in fields.items())
            return f"{message} | {field_str}"
        return message

    def is_enabled_for(self, level: int) -> bool:
        """Check whether a stdlib level would be emitted."""
        return self.logger.isEnabledFor(level)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, **kwargs))

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self.logger.exception(self._format_message(message, **kwargs))


class _ConfigHolder:
    """Holds default logging configuration."""

    _config: LogConfig = LogConfig()

    @classmethod
    def get_config(cls) -> LogConfig:
        """Get the default config."""
        return cls._config

    @classmethod
    def set_config(cls, config: LogConfig) -> None:
        """Set the default config."""
        cls._config = config


# Module-level logger cache
_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str, config: Optional[LogConfig] = None) -> StructuredLogger:
    """
    Get or create a structured logger.

    Args:
        name: Logger name (typically __name__).
        config: Optional logging configuration. Defaults to the config set
            by configure_logging().

    Returns:
        Configured StructuredLogger instance.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, config or _ConfigHolder.get_config())
    return _loggers[name]


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> LogConfig:
    """
    Configure global logging settings.

    Loggers already handed out by get_logger() are reconfigured in place,
    so module-level loggers pick up the new level.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path for log output.
        console: Whether to log to console.

    Returns:
        The LogConfig now in effect.
    """
    config = LogConfig(
        level=level,
        file_path=log_file,
        console=console,
    )
    _ConfigHolder.set_config(config)

    for structured in _loggers.values():
        structured.reconfigure(config)
    _close_file_handlers(keep=log_file)

    return config
