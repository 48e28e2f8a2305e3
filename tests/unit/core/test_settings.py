"""
Tests for settings and diagnostics logging configuration.
"""

import logging

import pytest
from pydantic import ValidationError

from logtree.core.config.settings import Settings, get_settings
from logtree.core.logging.logger import DIAGNOSTICS_LOGGER, get_logger, setup_logging


class TestSettings:
    """Test cases for Settings."""

    def test_defaults(self, monkeypatch):
        for name in ("LOG_LEVEL", "LOG_FORMAT", "LOG_FILE_PATH", "FORCE_COLOR"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FORMAT == "human"
        assert settings.LOG_FILE_PATH is None
        assert settings.FORCE_COLOR is False

    @pytest.mark.parametrize(
        "value,expected",
        [("debug", "DEBUG"), ("Warning", "WARN"), ("fatal", "FATAL")],
    )
    def test_log_level_normalized(self, value, expected):
        assert Settings(LOG_LEVEL=value).LOG_LEVEL == expected

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="LOUD")

    def test_log_format(self):
        assert Settings(LOG_FORMAT="JSON").LOG_FORMAT == "json"
        with pytest.raises(ValidationError):
            Settings(LOG_FORMAT="xml")

    def test_diagnostics(self):
        settings = Settings(DIAGNOSTICS_LEVEL="debug", DIAGNOSTICS_FORMAT="JSON")
        assert settings.DIAGNOSTICS_LEVEL == "DEBUG"
        assert settings.DIAGNOSTICS_FORMAT == "json"
        with pytest.raises(ValidationError):
            Settings(DIAGNOSTICS_LEVEL="WARN")

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("LOG_LEVEL", "error")

        settings = get_settings()

        assert settings.LOG_FORMAT == "json"
        assert settings.LOG_LEVEL == "ERROR"


class TestDiagnosticsLogging:
    """Test cases for the diagnostics logger setup."""

    def test_setup_installs_single_handler(self):
        diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)

        setup_logging(Settings(DIAGNOSTICS_FORMAT="json", DIAGNOSTICS_LEVEL="ERROR"))
        setup_logging(Settings(DIAGNOSTICS_FORMAT="text", DIAGNOSTICS_LEVEL="INFO"))

        assert len(diagnostics.handlers) == 1
        assert diagnostics.level == logging.INFO
        assert diagnostics.propagate is False

    def test_get_logger(self):
        logger = get_logger("logtree.tests")
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")
