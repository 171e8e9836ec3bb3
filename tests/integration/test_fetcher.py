"""Integration tests for the catalog fetcher with mocked HTTP responses."""

from pathlib import Path

import httpx
import pytest
import respx
from steam_outline.catalog import CatalogFetcher, CatalogHandle
from steam_outline.config import SteamConfig
from steam_outline.errors import (
    FetchError,
    MalformedResponseError,
    ProfilePrivacyError,
    TransportError,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
GAMES_URL = "http://steamcommunity.com/id/rabscuttle/games"


def load_fixture(name: str) -> bytes:
    """Load a raw XML fixture file."""
    return (FIXTURES_DIR / name).read_bytes()


@pytest.fixture
def fetcher() -> CatalogFetcher:
    """Fetcher with default Steam settings and no configured username."""
    return CatalogFetcher(config=SteamConfig(username=None))


class TestCatalogFetcher:
    """Integration tests for CatalogFetcher."""

    @respx.mock
    def test_fetch_success(self, fetcher: CatalogFetcher) -> None:
        """Test every game node becomes a record, in document order."""
        route = respx.get(GAMES_URL, params={"tab": "all", "xml": "1"}).mock(
            return_value=httpx.Response(200, content=load_fixture("profile_games.xml"))
        )

        snapshot = fetcher.fetch("rabscuttle")

        assert route.call_count == 1
        assert snapshot.username == "rabscuttle"
        assert [game.id for game in snapshot.games] == ["10", "20", "100"]
        assert snapshot.games[0].name == "Half-Life"
        assert snapshot.games[0].logo_url.endswith("/10/capsule_184x69.jpg")
        # Missing logo defaults to empty
        assert snapshot.games[2].logo_url == ""

    def test_build_url_escapes_username(self, fetcher: CatalogFetcher) -> None:
        """Test username is URL-escaped into the path."""
        url = fetcher.build_url("a b/c")

        assert url == "http://steamcommunity.com/id/a%20b%2Fc/games?tab=all&xml=1"

    @respx.mock
    def test_fetch_private_profile(self, fetcher: CatalogFetcher) -> None:
        """Test error node raises ProfilePrivacyError with the provider text."""
        respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, content=load_fixture("profile_private.xml"))
        )

        with pytest.raises(ProfilePrivacyError, match="This profile is private."):
            fetcher.fetch("rabscuttle")

    @respx.mock
    def test_fetch_missing_games(self, fetcher: CatalogFetcher) -> None:
        """Test payload without games container raises MalformedResponseError."""
        respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, content=load_fixture("profile_no_games.xml"))
        )

        with pytest.raises(MalformedResponseError):
            fetcher.fetch("rabscuttle")

    @respx.mock
    def test_fetch_not_xml(self, fetcher: CatalogFetcher) -> None:
        """Test HTML error pages are rejected as malformed."""
        respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, text="<html><body>Sorry!")
        )

        with pytest.raises(MalformedResponseError):
            fetcher.fetch("rabscuttle")

    @respx.mock
    def test_fetch_empty_games(self, fetcher: CatalogFetcher) -> None:
        """Test an empty games container gives an empty snapshot."""
        respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, text="<gamesList><games></games></gamesList>")
        )

        snapshot = fetcher.fetch("rabscuttle")

        assert len(snapshot) == 0

    @respx.mock
    def test_fetch_http_error(self, fetcher: CatalogFetcher) -> None:
        """Test non-2xx status raises TransportError."""
        respx.get(GAMES_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(TransportError) as exc_info:
            fetcher.fetch("rabscuttle")

        assert exc_info.value.status_code == 503

    @respx.mock
    def test_fetch_connection_error(self, fetcher: CatalogFetcher) -> None:
        """Test connection failures raise TransportError without retrying."""
        route = respx.get(GAMES_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(TransportError):
            fetcher.fetch("rabscuttle")

        assert route.call_count == 1

    def test_fetch_requires_username(self, fetcher: CatalogFetcher) -> None:
        """Test empty username is rejected before any request."""
        with pytest.raises(ValueError):
            fetcher.fetch("  ")


class TestCatalogHandle:
    """Tests for snapshot ownership and refresh."""

    @respx.mock
    def test_ensure_fetches_once(self, fetcher: CatalogFetcher) -> None:
        """Test ensure() reuses the snapshot after the first fetch."""
        route = respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, content=load_fixture("profile_games.xml"))
        )
        handle = CatalogHandle(fetcher, "rabscuttle")

        assert handle.snapshot is None
        first = handle.ensure()
        second = handle.ensure()

        assert first is second
        assert route.call_count == 1

    @respx.mock
    def test_refresh_replaces_snapshot(self, fetcher: CatalogFetcher) -> None:
        """Test refresh() always fetches and swaps the snapshot."""
        route = respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, content=load_fixture("profile_games.xml"))
        )
        handle = CatalogHandle(fetcher, "rabscuttle")

        first = handle.ensure()
        second = handle.refresh()

        assert second is not first
        assert handle.snapshot is second
        assert route.call_count == 2

    @respx.mock
    def test_failed_refresh_keeps_previous_snapshot(self, fetcher: CatalogFetcher) -> None:
        """Test a private-profile answer leaves the existing snapshot alone."""
        respx.get(GAMES_URL).mock(
            side_effect=[
                httpx.Response(200, content=load_fixture("profile_games.xml")),
                httpx.Response(200, content=load_fixture("profile_private.xml")),
            ]
        )
        handle = CatalogHandle(fetcher, "rabscuttle")
        original = handle.ensure()

        with pytest.raises(ProfilePrivacyError):
            handle.refresh()

        assert handle.snapshot is original
        assert len(handle.snapshot) == 3

    @respx.mock
    def test_ensure_propagates_fetch_error(self, fetcher: CatalogFetcher) -> None:
        """Test a failing first fetch raises instead of returning an empty catalog."""
        respx.get(GAMES_URL).mock(return_value=httpx.Response(500))
        handle = CatalogHandle(fetcher, "rabscuttle")

        with pytest.raises(FetchError):
            handle.ensure()

        assert handle.snapshot is None
