"""
Catalog to outline synchronization.

Appends one heading per game that the document does not mention yet.
A game counts as present when its launch token appears anywhere in
the text, so running the sync twice never duplicates entries.
"""

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import NamedTuple, Protocol

from steam_outline.assets.cache import AssetCache
from steam_outline.catalog.models import CatalogSnapshot, GameRecord
from steam_outline.logger import get_logger
from steam_outline.outline.document import OutlineDocument

logger = get_logger(__name__, component="sync")

# Brackets would end the link early
LABEL_BRACKETS = str.maketrans("[]", "{}")


class EntryParts(NamedTuple):
    """Text placed before and after an entry's link."""

    prefix: str = ""
    suffix: str = ""


class EntryRenderer(Protocol):
    def __call__(self, game: GameRecord) -> EntryParts: ...


def text_entry(game: GameRecord) -> EntryParts:
    """Plain entry: just the link."""
    return EntryParts()


class ImageEntryRenderer:
    """
    Entry with an inline logo in front of the link.

    The logo path is known up front, so the entry is written right away
    while the download (if any) runs in the background. ``on_ready`` is
    called with the game and its local path once the logo is on disk.
    """

    def __init__(
        self,
        cache: AssetCache,
        *,
        on_ready: Callable[[GameRecord, Path], None] | None = None,
    ) -> None:
        self._cache = cache
        self._on_ready = on_ready

    def __call__(self, game: GameRecord) -> EntryParts:
        future = self._cache.ensure_cached(game.id, game.logo_url)
        if self._on_ready is not None:
            on_ready = self._on_ready

            def _notify(done: "asyncio.Future[Path | None]") -> None:
                if done.cancelled():
                    return
                path = done.result()
                if path is not None:
                    on_ready(game, path)

            future.add_done_callback(_notify)

        return EntryParts(prefix=f"[[file:{self._cache.path_for(game.id).as_posix()}]] ")


def link_label(name: str) -> str:
    """Game name made safe for a [[target][label]] link on a single line."""
    return " ".join(name.split()).translate(LABEL_BRACKETS)


def render_entry(game: GameRecord, depth: int, parts: EntryParts) -> str:
    """Format one outline entry line."""
    stars = "*" * (depth + 1)
    label = link_label(game.name)
    return f"{stars} {parts.prefix}[[{game.launch_token}][{label}]]{parts.suffix}\n"


def sync(
    document: OutlineDocument,
    catalog: CatalogSnapshot,
    render: EntryRenderer = text_entry,
) -> int:
    """
    Append entries for games missing from the document.

    Args:
        document: Outline to append to (modified in place)
        catalog: Games to synchronize, in catalog order
        render: Produces the prefix/suffix around each entry's link

    Returns:
        int: Number of entries appended
    """
    seen = document.launch_ids()
    depth = document.heading_depth()
    appended = 0

    for game in catalog.games:
        if game.id in seen:
            continue
        document.append(render_entry(game, depth, render(game)))
        seen.add(game.id)
        appended += 1

    logger.info(
        "Outline synchronized",
        username=catalog.username,
        catalog_games=len(catalog),
        appended=appended,
        skipped=len(catalog) - appended,
    )
    return appended
