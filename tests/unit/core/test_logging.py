"""
Tests for Structured Logging.

Test Strategy
-------------
- Focus on logger behavior, not stdlib logging internals
- Test context binding, message formatting and reconfiguration
- Don't test Rich library integration (external dependency)
"""

import logging
from pathlib import Path

from auditcov.core.logging import (
    LogConfig,
    StructuredLogger,
    configure_logging,
    get_logger,
)


class TestLogConfig:
    """Tests for LogConfig dataclass."""

    def test_default_values(self):
        """Test LogConfig with default values."""
        config = LogConfig()

        assert config.level == "INFO"
        assert config.console is True
        assert config.file_path is None


class TestStructuredLogger:
    """Tests for StructuredLogger class."""

    def test_create_logger(self):
        """Test creating a StructuredLogger."""
        logger = StructuredLogger("test_logger")

        assert logger.logger.name == "test_logger"
        assert logger._context == {}

    def test_warning_method(self, caplog):
        """Test warning logging method."""
        logger = StructuredLogger("test.warning")

        with caplog.at_level(logging.WARNING):
            logger.warning("Warning message")

        assert "Warning message" in caplog.text

    def test_extra_fields(self, caplog):
        """Test keyword fields are rendered after the message."""
        logger = StructuredLogger("test.fields")

        with caplog.at_level(logging.INFO):
            logger.info("Loaded", path="model.json", resources=3)

        assert "Loaded | path=model.json | resources=3" in caplog.text

    def test_bind_and_unbind(self, caplog):
        """Test bound context appears until removed."""
        logger = StructuredLogger("test.bind")
        logger.bind(model="snapshot.json")

        with caplog.at_level(logging.INFO):
            logger.info("first")
            logger.unbind("model")
            logger.info("second")

        messages = [r.getMessage() for r in caplog.records]
        assert messages == ["first | model=snapshot.json", "second"]

    def test_debug_suppressed_at_info(self, caplog):
        """Test debug messages are dropped at the default level."""
        logger = StructuredLogger("test.level")

        with caplog.at_level(logging.DEBUG):
            logger.debug("hidden")

        assert "hidden" not in caplog.text

    def test_file_handler(self, tmp_path: Path):
        """Test messages are written to the configured file."""
        log_file = tmp_path / "logs" / "auditcov.log"
        logger = StructuredLogger(
            "test.file", LogConfig(file_path=log_file, console=False)
        )

        logger.warning("to file")
        for handler in logger.logger.handlers:
            handler.flush()

        assert "to file" in log_file.read_text(encoding="utf-8")


class TestGetLogger:
    """Tests for get_logger and configure_logging."""

    def test_caches_loggers(self):
        """Test that get_logger caches logger instances."""
        assert get_logger("test.cached") is get_logger("test.cached")

    def test_configure_updates_existing(self):
        """Test configure_logging re-applies the level to cached loggers."""
        logger = get_logger("test.reconfigure")
        try:
            configure_logging(level="DEBUG")
            assert logger.is_enabled_for(logging.DEBUG)

            configure_logging(level="ERROR")
            assert not logger.is_enabled_for(logging.WARNING)
        finally:
            configure_logging(level="INFO")

    def test_configure_shares_one_file_handler(self, tmp_path: Path):
        """Test cached loggers write through a single handler per log file."""
        log_file = tmp_path / "auditcov.log"
        first = get_logger("test.shared.first")
        second = get_logger("test.shared.second")
        try:
            configure_logging(level="INFO", log_file=log_file, console=False)

            first_files = [
                h for h in first.logger.handlers if isinstance(h, logging.FileHandler)
            ]
            second_files = [
                h for h in second.logger.handlers if isinstance(h, logging.FileHandler)
            ]
            assert len(first_files) == 1
            assert first_files[0] is second_files[0]

            first.warning("from first")
            second.warning("from second")
            first_files[0].flush()

            text = log_file.read_text(encoding="utf-8")
            assert "from first" in text
            assert "from second" in text
        finally:
            configure_logging(level="INFO")

        assert not any(
            isinstance(h, logging.FileHandler) for h in first.logger.handlers
        )
