"""Tests for logging configuration."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog
from structlog.testing import capture_logs

from voxprep.logging import _renderer, configure_logging, get_logger


@pytest.fixture
def _restore_logging() -> Iterator[None]:
    yield
    configure_logging(log_format="console", level="INFO", force=True)


class TestRenderer:
    def test_json(self) -> None:
        assert isinstance(_renderer("json"), structlog.processors.JSONRenderer)

    def test_console_is_default(self) -> None:
        assert isinstance(_renderer("console"), structlog.dev.ConsoleRenderer)
        assert isinstance(_renderer("anything"), structlog.dev.ConsoleRenderer)


@pytest.mark.usefixtures("_restore_logging")
class TestConfigureLogging:
    def test_force_applies_level(self) -> None:
        configure_logging(level="debug", force=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_without_force_keeps_existing_configuration(self) -> None:
        configure_logging(level="WARNING", force=True)
        configure_logging(level="DEBUG")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_means_info(self) -> None:
        configure_logging(level="LOUD", force=True)
        assert logging.getLogger().level == logging.INFO

    def test_environment_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VOXPREP_LOG_LEVEL", "ERROR")
        configure_logging(force=True)
        assert logging.getLogger().level == logging.ERROR

    def test_single_handler_on_stderr(self) -> None:
        configure_logging(log_format="json", force=True)
        configure_logging(log_format="json", force=True)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)


class TestGetLogger:
    def test_binds_component(self) -> None:
        with capture_logs() as logs:
            get_logger("capture.session").info("capture_started", channels=1)

        assert logs == [
            {
                "component": "capture.session",
                "channels": 1,
                "event": "capture_started",
                "log_level": "info",
            }
        ]
