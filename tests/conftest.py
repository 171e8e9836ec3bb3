"""Shared test configuration."""

from collections.abc import Iterator
from typing import Any

import pytest
from structlog.testing import capture_logs
from steam_outline import cli


@pytest.fixture(autouse=True)
def captured_logs(monkeypatch: pytest.MonkeyPatch) -> Iterator[list[dict[str, Any]]]:
    """Keep log output out of stdout and expose it to tests that want it."""
    monkeypatch.setattr(cli, "setup_logging", lambda: None)
    with capture_logs() as logs:
        yield logs
