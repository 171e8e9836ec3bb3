"""
Game launcher.

Starts a game by handing ``steam://run/<id>`` to the operating
system's Steam entry point. The process is not waited on.
"""

import subprocess
import sys
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from steam_outline.catalog.models import CatalogSnapshot, launch_token
from steam_outline.errors import NotFoundError, UnsupportedPlatformError
from steam_outline.logger import get_logger

logger = get_logger(__name__, component="launcher")

# Takes an argv list and starts the process without waiting for it
Spawner = Callable[[list[str]], Any]
# Takes (label, value) choices and returns the chosen value
Prompt = Callable[[Sequence[tuple[str, str]]], str]


class Platform(str, Enum):
    """Operating systems with a known way to open a steam:// URI."""

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"

    @property
    def command(self) -> str:
        """Program that receives the launch URI."""
        return {
            Platform.LINUX: "steam",
            Platform.MACOS: "open",
            Platform.WINDOWS: "explorer",
        }[self]

    @classmethod
    def detect(cls, sys_platform: str | None = None) -> "Platform | None":
        """
        Map a ``sys.platform`` value to a Platform.

        Returns:
            The platform, or None when it is not one of the known ones
        """
        value = sys.platform if sys_platform is None else sys_platform
        if value.startswith("linux"):
            return cls.LINUX
        if value == "darwin":
            return cls.MACOS
        if value in ("win32", "cygwin"):
            return cls.WINDOWS
        return None


class Launcher:
    """
    Launches Steam games on the current platform.

    Example:
        >>> Launcher().launch("10")  # runs: steam steam://run/10
    """

    def __init__(
        self,
        platform: Platform | None = None,
        *,
        spawn: Spawner = subprocess.Popen,
        sys_platform: str | None = None,
    ) -> None:
        """
        Initialize the launcher.

        Args:
            platform: Platform to launch on (detected once if None)
            spawn: Process starter, receives the argv list
            sys_platform: ``sys.platform`` value used for detection
        """
        self.sys_platform = sys.platform if sys_platform is None else sys_platform
        self.platform = platform if platform is not None else Platform.detect(self.sys_platform)
        self._spawn = spawn

    def argv(self, game_id: str) -> list[str]:
        """
        Command line that launches a game.

        Raises:
            UnsupportedPlatformError: If the platform is not recognized
        """
        if self.platform is None:
            raise UnsupportedPlatformError(
                f"Don't know how to launch Steam games on '{self.sys_platform}'"
            )
        return [self.platform.command, launch_token(game_id)]

    def launch(self, game_id: str) -> None:
        """
        Start a game and return immediately.

        Raises:
            ValueError: If game_id is not a numeric app id
            UnsupportedPlatformError: If the platform is not recognized
        """
        if not game_id.isdigit():
            raise ValueError(f"Invalid Steam app id: {game_id!r}")

        argv = self.argv(game_id)
        logger.info("Launching game", game_id=game_id, argv=argv)
        self._spawn(argv)


def choose_game(catalog: CatalogSnapshot, prompt: Prompt) -> str:
    """
    Let the user pick a game from the catalog.

    Args:
        catalog: Games offered, in catalog order
        prompt: Receives (name, id) choices and returns the chosen id

    Returns:
        str: The chosen game id

    Raises:
        NotFoundError: If the catalog is empty
    """
    if not catalog.games:
        raise NotFoundError("The catalog has no games to choose from", username=catalog.username)
    return prompt([(game.name, game.id) for game in catalog.games])
