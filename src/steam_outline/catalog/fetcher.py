"""
Steam community profile catalog fetcher.

Retrieves the "all games" XML document of a public profile and
turns it into a CatalogSnapshot. The request is synchronous and
single-shot: failures are classified and raised, never retried.
"""

import time
import xml.etree.ElementTree as ET
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from steam_outline.catalog.models import CatalogSnapshot, GameRecord
from steam_outline.config import SteamConfig, get_settings
from steam_outline.errors import MalformedResponseError, ProfilePrivacyError, TransportError
from steam_outline.logger import get_logger


def _child_text(node: ET.Element, tag: str) -> str:
    """Text of a direct child, or empty string when missing."""
    child = node.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def parse_games_payload(body: bytes | str, *, username: str) -> CatalogSnapshot:
    """
    Parse a profile games document.

    Args:
        body: Raw XML response body
        username: Profile the document belongs to

    Returns:
        CatalogSnapshot: Every ``game`` node, in document order

    Raises:
        ProfilePrivacyError: If the document carries an ``error`` node
        MalformedResponseError: If the body is not XML or has no ``games`` node
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise MalformedResponseError(
            f"Response is not valid XML: {e}",
            username=username,
            original_error=e,
        ) from e

    error_node = root.find("error")
    if error_node is not None:
        message = (error_node.text or "").strip() or "Profile returned an error"
        raise ProfilePrivacyError(message, username=username)

    games_node = root.find("games")
    if games_node is None:
        raise MalformedResponseError(
            "Response has no games element",
            username=username,
        )

    try:
        games = tuple(
            GameRecord(
                id=_child_text(game, "appID"),
                name=_child_text(game, "name"),
                logo_url=_child_text(game, "logo"),
            )
            for game in games_node.findall("game")
        )
    except PydanticValidationError as e:
        raise MalformedResponseError(
            f"Game entry validation failed: {e}",
            username=username,
            original_error=e,
        ) from e
    return CatalogSnapshot(username=username, games=games)


class CatalogFetcher:
    """
    Fetches a profile's game catalog.

    Example:
        >>> with CatalogFetcher() as fetcher:
        ...     snapshot = fetcher.fetch("gabelogannewell")
        ...     print(len(snapshot))
    """

    def __init__(
        self,
        *,
        config: SteamConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            config: Steam configuration (uses application settings if None)
            client: Pre-built HTTP client, mostly for tests
        """
        self._config = config or get_settings().steam
        self._client = client
        self._logger = get_logger(__name__, component="fetcher")

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=httpx.Timeout(self._config.timeout_seconds),
                follow_redirects=True,
                headers={
                    "User-Agent": "SteamOutline/0.1",
                    "Accept": "application/xml, text/xml",
                },
            )
        return self._client

    def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> "CatalogFetcher":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def build_url(self, username: str) -> str:
        """Build the games XML URL for a profile."""
        return (
            f"{self._config.profile_base_url}/id/{quote(username, safe='')}"
            "/games?tab=all&xml=1"
        )

    def fetch(self, username: str) -> CatalogSnapshot:
        """
        Fetch and validate a profile's catalog.

        Args:
            username: Steam community profile name

        Returns:
            CatalogSnapshot: The parsed catalog

        Raises:
            ValueError: If username is empty
            TransportError: On connection failure or non-2xx status
            ProfilePrivacyError: If the provider reports an error (private profile)
            MalformedResponseError: If the payload has no games element
        """
        if not username or not username.strip():
            raise ValueError("A Steam username is required to fetch the catalog")

        url = self.build_url(username)
        start_time = time.perf_counter()
        self._logger.info("Fetching catalog", username=username, url=url)

        try:
            response = self.client.get(url)
        except httpx.HTTPError as e:
            self._logger.error("Catalog request failed", username=username, error=str(e))
            raise TransportError(
                f"Request failed: {e}",
                username=username,
                url=url,
                original_error=e,
            ) from e

        if not response.is_success:
            self._logger.error(
                "Catalog request returned error status",
                username=username,
                status_code=response.status_code,
            )
            raise TransportError(
                f"HTTP error: {response.status_code}",
                username=username,
                url=url,
                status_code=response.status_code,
            )

        try:
            snapshot = parse_games_payload(response.content, username=username)
        except (ProfilePrivacyError, MalformedResponseError) as e:
            e.url = url
            self._logger.warning(
                "Catalog payload rejected",
                username=username,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        self._logger.info(
            "Catalog fetched",
            username=username,
            games=len(snapshot),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
        )
        return snapshot
