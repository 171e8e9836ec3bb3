"""
Command-line interface for steam-outline.

Provides commands to fetch a profile's catalog, sync it into an
outline file and launch games.
"""

import asyncio
import json
import sys
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from steam_outline.assets.cache import AssetCache
from steam_outline.catalog.fetcher import CatalogFetcher
from steam_outline.catalog.handle import CatalogHandle
from steam_outline.catalog.models import CatalogSnapshot
from steam_outline.config import get_settings
from steam_outline.errors import NotFoundError, SteamOutlineError
from steam_outline.launcher import Launcher, choose_game
from steam_outline.logger import get_logger, setup_logging
from steam_outline.outline.document import OutlineDocument, resolve_id_at_cursor
from steam_outline.outline.sync import ImageEntryRenderer, sync, text_entry

logger = get_logger(__name__, component="cli")


class CLIOutput(BaseModel):
    """Structured output for CLI commands."""

    success: bool
    command: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: dict[str, Any] | list[Any] | None = None
    error: str | None = None


def print_json(output: CLIOutput) -> None:
    """Print output as formatted JSON."""
    print(json.dumps(output.model_dump(), indent=2, default=str))


def _pop_option(args: list[str], name: str) -> str | None:
    """Remove ``name <value>`` from args and return the value."""
    if name not in args:
        return None
    idx = args.index(name)
    if idx + 1 >= len(args):
        raise ValueError(f"{name} requires a value")
    value = args[idx + 1]
    del args[idx : idx + 2]
    return value


def _pop_flag(args: list[str], name: str) -> bool:
    if name in args:
        args.remove(name)
        return True
    return False


def _load_catalog(username: str | None) -> CatalogSnapshot:
    """Fetch the catalog once, closing the HTTP client afterwards."""
    username = username or get_settings().steam.username
    if not username:
        raise ValueError("No Steam username: pass --username or set STEAM_USERNAME")
    with CatalogFetcher() as fetcher:
        return CatalogHandle(fetcher, username).ensure()


def stdin_prompt(choices: Sequence[tuple[str, str]]) -> str:
    """Numbered selection prompt on stdin/stderr."""
    for number, (label, _) in enumerate(choices, start=1):
        print(f"{number:4d}. {label}", file=sys.stderr)
    while True:
        print("Game number: ", end="", file=sys.stderr, flush=True)
        answer = input().strip()
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1][1]
        print(f"Enter a number between 1 and {len(choices)}", file=sys.stderr)


def cmd_test_config() -> None:
    """Test configuration loading."""
    settings = get_settings()

    output = CLIOutput(
        success=True,
        command="test-config",
        data={
            "environment": settings.environment,
            "username": settings.steam.username,
            "profile_base_url": settings.steam.profile_base_url,
            "image_dir": str(settings.assets.image_dir),
            "max_concurrent_downloads": settings.assets.max_concurrent_downloads,
            "log_format": settings.logging.format,
        },
    )
    print_json(output)


def cmd_games(username: str | None) -> None:
    """Fetch and list a profile's games."""
    snapshot = _load_catalog(username)

    output = CLIOutput(
        success=True,
        command="games",
        data=[game.model_dump() for game in snapshot.games],
    )
    print_json(output)


async def cmd_sync(path: str, *, images: bool, username: str | None, cursor: int | None) -> None:
    """Sync the catalog into an outline file."""
    snapshot = _load_catalog(username)
    document = OutlineDocument.load(path)
    document.cursor = cursor

    logger.info("Syncing outline", path=path, images=images, games=len(snapshot))

    if images:
        async with AssetCache() as cache:
            appended = sync(document, snapshot, ImageEntryRenderer(cache))
            document.save(path)
            pending = cache.pending
        # leaving the context waits for the downloads
    else:
        appended = sync(document, snapshot, text_entry)
        document.save(path)
        pending = 0

    output = CLIOutput(
        success=True,
        command="sync",
        data={
            "path": path,
            "catalog_games": len(snapshot),
            "appended": appended,
            "downloads_started": pending,
        },
    )
    print_json(output)


def cmd_launch(target: str, username: str | None) -> None:
    """Launch a game by app id or exact name."""
    if target.isdigit():
        game_id = target
    else:
        snapshot = _load_catalog(username)
        game = snapshot.find_by_name(target)
        if game is None:
            raise NotFoundError(f"No game named '{target}'", username=snapshot.username)
        game_id = game.id

    Launcher().launch(game_id)
    print_json(CLIOutput(success=True, command="launch", data={"game_id": game_id}))


def cmd_launch_at(path: str, position: int) -> None:
    """Launch the game linked at a character offset of an outline file."""
    document = OutlineDocument.load(path)
    game_id = resolve_id_at_cursor(document, position)

    Launcher().launch(game_id)
    print_json(CLIOutput(success=True, command="launch-at", data={"game_id": game_id}))


def cmd_choose(username: str | None) -> None:
    """Pick a game interactively and launch it."""
    snapshot = _load_catalog(username)
    game_id = choose_game(snapshot, stdin_prompt)

    Launcher().launch(game_id)
    print_json(CLIOutput(success=True, command="choose", data={"game_id": game_id}))


def print_usage() -> None:
    """Print CLI usage information."""
    usage = """
steam-outline
=============

Usage: steam-outline <command> [arguments]

Commands:
  test-config                 Show the resolved configuration
  games                       Fetch and list the profile's games
  sync <file>                 Append missing games to an outline file
  launch <id-or-name>         Launch a game by app id or exact name
  launch-at <file> <offset>   Launch the game linked at a character offset
  choose                      Pick a game from a numbered list and launch it

Options:
  --username <name>           Steam profile name (default: STEAM_USERNAME)
  --images                    sync: put a cached logo in front of each entry
  --cursor <offset>           sync: nest new entries under the heading at offset

Examples:
  steam-outline sync games.org --images --username gabelogannewell
"""
    print(usage)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print_usage()
        sys.exit(1)

    setup_logging()
    command = args.pop(0)

    try:
        username = _pop_option(args, "--username")

        if command == "test-config":
            cmd_test_config()

        elif command == "games":
            cmd_games(username or (args[0] if args else None))

        elif command == "sync":
            images = _pop_flag(args, "--images")
            cursor = _pop_option(args, "--cursor")
            if not args:
                print("Error: outline file required")
                sys.exit(1)
            asyncio.run(
                cmd_sync(
                    args[0],
                    images=images,
                    username=username,
                    cursor=int(cursor) if cursor is not None else None,
                )
            )

        elif command == "launch":
            if not args:
                print("Error: app id or game name required")
                sys.exit(1)
            cmd_launch(" ".join(args), username)

        elif command == "launch-at":
            if len(args) < 2:
                print("Error: outline file and offset required")
                sys.exit(1)
            cmd_launch_at(args[0], int(args[1]))

        elif command == "choose":
            cmd_choose(username)

        elif command in ("help", "--help", "-h"):
            print_usage()

        else:
            print(f"Unknown command: {command}")
            print_usage()
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except (SteamOutlineError, ValueError) as e:
        logger.error("Command failed", command=command, error_type=type(e).__name__, error=str(e))
        print_json(CLIOutput(success=False, command=command, error=str(e)))
        sys.exit(1)


if __name__ == "__main__":
    main()
