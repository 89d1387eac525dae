"""Tests for logging setup."""

import json
import logging
import logging.handlers

from buildconf.common import LogContext, setup_logging
from buildconf.common.logging import DetailedFormatter, SimpleFormatter, StructuredFormatter


def make_record(logger, message="Loaded configuration"):
    return logger.makeRecord(logger.name, logging.INFO, __file__, 10, message, (), None)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_formatters(self, restore_root_logger):
        for fmt, formatter_class in [
            ("simple", SimpleFormatter),
            ("detailed", DetailedFormatter),
            ("json", StructuredFormatter),
        ]:
            setup_logging(level="DEBUG", format=fmt)
            assert restore_root_logger.level == logging.DEBUG
            assert len(restore_root_logger.handlers) == 1
            assert isinstance(restore_root_logger.handlers[0].formatter, formatter_class)

    def test_file_handler_uses_json(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "buildconf.log"
        setup_logging(level="INFO", format="simple", log_file=log_file)

        file_handlers = [
            h for h in restore_root_logger.handlers
            if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert log_file.parent.is_dir()
        assert len(file_handlers) == 1
        assert isinstance(file_handlers[0].formatter, StructuredFormatter)


class TestStructuredLogging:
    """Tests for StructuredFormatter and LogContext."""

    def test_structured_formatter(self):
        logger = logging.getLogger("buildconf.test")
        data = json.loads(StructuredFormatter().format(make_record(logger)))

        assert data["level"] == "INFO"
        assert data["logger"] == "buildconf.test"
        assert data["message"] == "Loaded configuration"

    def test_log_context_adds_fields(self):
        logger = logging.getLogger("buildconf.test")

        with LogContext(logger, command="show"):
            record = make_record(logger)
        outside = make_record(logger)

        assert record.extra_fields == {"command": "show"}
        assert not hasattr(outside, "extra_fields")
        assert json.loads(StructuredFormatter().format(record))["command"] == "show"
