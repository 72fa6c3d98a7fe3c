"""
Tests — Logging configuration
=============================
"""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from app.config.logging import CustomJsonFormatter, build_logging_config, setup_logging
from app.config.settings import settings
from app.core.logging import SensitiveDataProcessor, configure_structured_logging, get_logger


class TestLoggingConfig:
    def test_text_console_only_by_default(self, monkeypatch):
        monkeypatch.setattr(settings, "LOG_FORMAT", "text")
        monkeypatch.setattr(settings, "LOG_DIR", None)
        config = build_logging_config()
        assert list(config["handlers"]) == ["console"]
        assert config["handlers"]["console"]["formatter"] in ("colored", "standard")

    def test_json_format_and_log_dir(self, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "LOG_FORMAT", "json")
        monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "logs"))
        config = build_logging_config()
        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["loggers"]["app"]["handlers"] == ["console", "file", "json_file"]
        assert (tmp_path / "logs").is_dir()

    def test_json_formatter_carries_booking_context(self):
        formatter = CustomJsonFormatter("%(message)s")
        record = logging.LogRecord("app.booking", logging.INFO, __file__, 1, "Booking created", None, None)
        record.booking_id = "b-1"
        record.hotel_id = "h-1"
        payload = json.loads(formatter.format(record))
        assert payload["booking_id"] == "b-1"
        assert payload["hotel_id"] == "h-1"
        assert payload["level"] == "INFO"


@pytest.fixture
def app_logger_state():
    logger = logging.getLogger("app")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
    structlog.reset_defaults()


class TestSetupLogging:
    def test_text_setup_returns_app_logger(self, monkeypatch, app_logger_state):
        monkeypatch.setattr(settings, "LOG_FORMAT", "text")
        monkeypatch.setattr(settings, "LOG_DIR", None)

        logger = setup_logging()

        assert logger is app_logger_state
        assert logger.propagate is False
        assert len(logger.handlers) == 1

    def test_json_setup_configures_structlog(self, monkeypatch, tmp_path, app_logger_state):
        monkeypatch.setattr(settings, "LOG_FORMAT", "json")
        monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path))

        logger = setup_logging()
        logger.info("Booking created", extra={"booking_id": "b-1"})
        for handler in logger.handlers:
            handler.flush()
            handler.close()

        assert structlog.is_configured()
        line = (tmp_path / "booking.json.log").read_text().splitlines()[-1]
        assert json.loads(line)["booking_id"] == "b-1"


class TestStructuredLogging:
    def test_guest_contact_is_redacted(self):
        event = SensitiveDataProcessor()(None, "info", {"guest_email": "a@b.in", "nested": {"guest_phone": "123"}})
        assert event["guest_email"] == "[REDACTED]"
        assert event["nested"]["guest_phone"] == "[REDACTED]"

    def test_configure_structured_logging(self):
        try:
            configure_structured_logging()
            assert structlog.is_configured()
        finally:
            structlog.reset_defaults()


class TestLoggerAdapter:
    def test_context_is_attached(self, caplog):
        logger = get_logger("booking_tests").add_context(hotel_id="h-1")
        with caplog.at_level(logging.INFO, logger="booking_tests"):
            logger.info("Inventory reserved", extra={"rooms": 2})
        record = caplog.records[-1]
        assert record.hotel_id == "h-1"
        assert record.rooms == 2
