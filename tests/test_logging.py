"""Tests for logging configuration and helpers."""

import logging

import pytest
import structlog

from tunas import bind_context, clear_context, configure_logging, get_logger
from tunas.config import LogFormat, Settings


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.mark.usefixtures("restore_logging")
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_from_settings(self):
        configure_logging(Settings(log_level="debug"))
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_level_override(self):
        configure_logging(Settings(log_level="DEBUG"), level="WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(Settings(log_level="chatty"))
        assert logging.getLogger().level == logging.INFO

    def test_json_renderer(self):
        configure_logging(Settings(log_format=LogFormat.JSON))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)


class TestLogFormat:
    """Tests for Settings.resolved_log_format."""

    def test_production_defaults_to_json(self):
        assert Settings(environment="production").resolved_log_format == LogFormat.JSON

    def test_development_defaults_to_console(self):
        assert Settings(environment="development").resolved_log_format == LogFormat.CONSOLE

    def test_explicit_format_wins(self):
        settings = Settings(environment="production", log_format="console")
        assert settings.resolved_log_format == LogFormat.CONSOLE


class TestLogContext:
    """Tests for bind_context and clear_context."""

    def test_bind_and_clear(self):
        clear_context()
        bind_context(club_code="SCSC")
        assert structlog.contextvars.get_contextvars() == {"club_code": "SCSC"}

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_get_logger(self):
        logger = get_logger("tunas.test")
        logger.info("club_swimmers_loaded", club_code="SCSC", swimmers=2)
