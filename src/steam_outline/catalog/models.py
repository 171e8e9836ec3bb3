"""
Data contracts for the Steam game catalog.

GameRecord and CatalogSnapshot are frozen Pydantic models: once
parsed from a profile payload they are shared read-only between
the outline synchronizer and the launcher.
"""

from datetime import datetime, timezone
from functools import cached_property
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

LAUNCH_SCHEME = "steam"
LAUNCH_TOKEN_PREFIX = f"{LAUNCH_SCHEME}://run/"

# Steam app ids are numeric but are kept as text, exactly as the payload has them
GameId = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^\d+$")]


def launch_token(game_id: str) -> str:
    """Return the launch URI for a game, e.g. ``steam://run/10``."""
    return f"{LAUNCH_TOKEN_PREFIX}{game_id}"


class GameRecord(BaseModel):
    """A single game owned by the profile."""

    model_config = ConfigDict(frozen=True)

    id: GameId = Field(..., description="Steam app id")
    name: str = Field(default="", description="Display name")
    logo_url: str = Field(default="", description="Logo image URL, empty when unknown")

    @property
    def launch_token(self) -> str:
        """Launch URI, used both as link target and de-duplication key."""
        return launch_token(self.id)


class CatalogSnapshot(BaseModel):
    """
    An ordered, immutable view of a profile's games.

    A snapshot is never updated in place; a refresh produces a new one.
    """

    model_config = ConfigDict(frozen=True)

    username: str
    games: tuple[GameRecord, ...] = ()
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def __len__(self) -> int:
        return len(self.games)

    @cached_property
    def by_id(self) -> dict[str, GameRecord]:
        return {game.id: game for game in self.games}

    def get(self, game_id: str) -> GameRecord | None:
        """Look up a game by its app id."""
        return self.by_id.get(game_id)

    def find_by_name(self, name: str) -> GameRecord | None:
        """Return the first game whose name matches exactly (case-insensitive)."""
        wanted = name.casefold()
        for game in self.games:
            if game.name.casefold() == wanted:
                return game
        return None
