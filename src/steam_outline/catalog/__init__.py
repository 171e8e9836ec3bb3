"""
Steam game catalog.

Models for a profile's games, the fetcher that retrieves them and
the handle that owns the current snapshot.
"""

from steam_outline.catalog.fetcher import CatalogFetcher, parse_games_payload
from steam_outline.catalog.handle import CatalogHandle
from steam_outline.catalog.models import (
    LAUNCH_TOKEN_PREFIX,
    CatalogSnapshot,
    GameRecord,
    launch_token,
)

__all__ = [
    "LAUNCH_TOKEN_PREFIX",
    "CatalogFetcher",
    "CatalogHandle",
    "CatalogSnapshot",
    "GameRecord",
    "launch_token",
    "parse_games_payload",
]
