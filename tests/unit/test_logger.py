"""Tests for logging setup."""

import json

import pytest
import structlog

from steam_outline.config import get_settings
from steam_outline.logger import get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_json_events_go_to_stderr(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test stdout stays free for command output."""
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("LOG_INCLUDE_TIMESTAMP", "false")
        get_settings.cache_clear()
        try:
            setup_logging()
            logger = get_logger("test", component="fetcher")
            logger.info("Fetching catalog", username="rabscuttle")
        finally:
            structlog.reset_defaults()
            get_settings.cache_clear()

        captured = capsys.readouterr()
        assert captured.out == ""
        event = json.loads(captured.err.strip().splitlines()[-1])
        assert event == {
            "event": "Fetching catalog",
            "username": "rabscuttle",
            "component": "fetcher",
            "level": "info",
        }
