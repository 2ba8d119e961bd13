# ABOUTME: Tests for logging configuration module
# ABOUTME: Validates dual-mode logging setup, structlog routing and third-party library suppression

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from crewbase.utils.logging.config import (
    QUIET_LOGGERS,
    LoggingMode,
    configure_logging,
    detect_logging_mode,
    get_logging_status,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    for logger_name in ["", *QUIET_LOGGERS, "py.warnings"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.NOTSET)
    logging.getLogger().setLevel(logging.WARNING)
    logging.captureWarnings(False)


class TestLoggingMode:
    """Test the LoggingMode constants."""

    def test_logging_mode_constants(self):
        assert LoggingMode.INTERACTIVE == "interactive"
        assert LoggingMode.PRODUCTION == "production"


class TestDetectLoggingMode:
    """Test logging mode detection logic."""

    def test_detect_mode_from_env_interactive(self):
        with patch.dict(os.environ, {"CREWBASE_LOG_MODE": "interactive"}):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_env_production(self):
        with patch.dict(os.environ, {"CREWBASE_LOG_MODE": "PRODUCTION"}):
            assert detect_logging_mode() == LoggingMode.PRODUCTION

    def test_detect_mode_from_env_invalid(self):
        """Test fallback when environment variable has invalid value."""
        with (
            patch.dict(os.environ, {"CREWBASE_LOG_MODE": "invalid"}),
            patch("sys.stdout.isatty", return_value=True),
        ):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_tty_production(self):
        with patch.dict(os.environ, {}, clear=True), patch("sys.stdout.isatty", return_value=False):
            assert detect_logging_mode() == LoggingMode.PRODUCTION


class TestConfigureLogging:
    """Test logging configuration functionality."""

    def test_configure_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")

        assert Path("logs").exists()

    def test_configure_production_mode(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_configure_custom_log_level(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_custom_log_file_receives_structlog_events(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        custom_log_file = tmp_path / "custom.log"

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO", log_file=str(custom_log_file))
        structlog.get_logger("crewbase.test").info("Cache updated", key="videos")
        structlog.get_logger("crewbase.test").debug("Below threshold")

        content = custom_log_file.read_text()
        assert "event='Cache updated'" in content
        assert "key='videos'" in content
        assert "crewbase.test" in content
        assert "Below threshold" not in content


class TestGetLoggingStatus:
    """Test logging status reporting."""

    def test_get_status_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Path("logs").mkdir()

        with patch("crewbase.utils.logging.config.detect_logging_mode", return_value=LoggingMode.INTERACTIVE):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.INTERACTIVE
        assert status["log_directory"] is not None
        assert status["log_files"]["main"].endswith("crewbase.log")
        assert status["log_files"]["errors"].endswith("errors.log")
        assert "httpx" in status["third_party_suppressed"]
        assert "py.warnings" in status["third_party_suppressed"]

    def test_get_status_production_mode(self):
        with patch("crewbase.utils.logging.config.detect_logging_mode", return_value=LoggingMode.PRODUCTION):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.PRODUCTION
        assert status["log_files"] == {"main": None, "json": None, "errors": None}


class TestThirdPartyLogging:
    """Test third-party library logging configuration."""

    def test_third_party_loggers_suppressed(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        configure_logging(mode=LoggingMode.INTERACTIVE)

        for logger_name in QUIET_LOGGERS:
            logger = logging.getLogger(logger_name)
            assert logger.level == logging.WARNING, (
                f"Logger {logger_name} level was {logger.level}, expected {logging.WARNING}"
            )

    def test_warnings_captured(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        logging.captureWarnings(False)

        configure_logging(mode=LoggingMode.INTERACTIVE)

        assert logging.getLogger("py.warnings").level == logging.ERROR
