"""
Logo image cache.

Downloads each game's logo once into ``<image_dir>/img<id>.jpg``.
The file on disk is the cache: if it exists, nothing is fetched.
Downloads run as asyncio tasks on the caller's loop and are never
awaited by the code that requests them; callers that care about
completion subscribe to the returned future.
"""

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Any

import httpx

from steam_outline.config import AssetConfig, get_settings
from steam_outline.logger import get_logger


class AssetCache:
    """
    Idempotent, non-blocking logo downloader keyed by game id.

    Example:
        >>> async with AssetCache() as cache:
        ...     future = cache.ensure_cached("10", "https://.../logo.jpg")
        ...     path = await future  # None if the download failed
    """

    def __init__(
        self,
        dest_dir: Path | str | None = None,
        *,
        config: AssetConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the cache.

        Args:
            dest_dir: Directory holding cached logos (defaults to config.image_dir)
            config: Asset configuration (uses application settings if None)
            client: Pre-built HTTP client, mostly for tests
        """
        self._config = config or get_settings().assets
        self.dest_dir = Path(dest_dir) if dest_dir is not None else self._config.image_dir
        self._client = client
        self._semaphore = asyncio.Semaphore(self._config.max_concurrent_downloads)
        self._in_flight: dict[str, asyncio.Task[Path | None]] = {}
        self._logger = get_logger(__name__, component="asset_cache")

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout_seconds),
                follow_redirects=True,
                headers={"User-Agent": "SteamOutline/0.1"},
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AssetCache":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.wait_pending()
        await self.close()

    def path_for(self, game_id: str) -> Path:
        """Canonical local path of a game's logo."""
        return self.dest_dir / f"img{game_id}.jpg"

    def is_cached(self, game_id: str) -> bool:
        return self.path_for(game_id).is_file()

    @property
    def pending(self) -> int:
        """Number of downloads still running."""
        return len(self._in_flight)

    def ensure_cached(self, game_id: str, logo_url: str) -> "asyncio.Future[Path | None]":
        """
        Make sure a game's logo is (or will be) on disk.

        Returns without waiting for any network I/O. The returned future
        resolves to the local path, or to None if the download failed.
        Must be called while an event loop is running.

        Args:
            game_id: Steam app id
            logo_url: URL to download from when the file is missing

        Returns:
            Future of the local path
        """
        loop = asyncio.get_running_loop()
        path = self.path_for(game_id)

        if path.is_file():
            self._logger.debug("Logo already cached", game_id=game_id, path=str(path))
            done: asyncio.Future[Path | None] = loop.create_future()
            done.set_result(path)
            return done

        if not logo_url:
            self._logger.warning("No logo URL for game", game_id=game_id)
            missing: asyncio.Future[Path | None] = loop.create_future()
            missing.set_result(None)
            return missing

        running = self._in_flight.get(game_id)
        if running is not None:
            return running

        task = loop.create_task(self._download(game_id, logo_url, path))
        self._in_flight[game_id] = task
        task.add_done_callback(lambda _: self._in_flight.pop(game_id, None))
        return task

    async def wait_pending(self) -> None:
        """Wait until every scheduled download has finished."""
        while self._in_flight:
            await asyncio.gather(*self._in_flight.values(), return_exceptions=True)

    async def _download(self, game_id: str, logo_url: str, path: Path) -> Path | None:
        """Fetch one logo and write it atomically. Failures are logged, not raised."""
        async with self._semaphore:
            self._logger.info("Downloading logo", game_id=game_id, url=logo_url)
            try:
                response = await self.client.get(logo_url)
            except httpx.HTTPError as e:
                self._logger.error(
                    "Logo download failed",
                    game_id=game_id,
                    url=logo_url,
                    error=str(e),
                )
                return None

        if not response.is_success:
            self._logger.error(
                "Logo download returned error status",
                game_id=game_id,
                url=logo_url,
                status_code=response.status_code,
            )
            return None

        try:
            self._write_atomic(path, response.content)
        except OSError as e:
            self._logger.error(
                "Could not write logo",
                game_id=game_id,
                path=str(path),
                error=str(e),
            )
            return None

        self._logger.info(
            "Logo cached",
            game_id=game_id,
            path=str(path),
            size_bytes=len(response.content),
        )
        return path

    def _write_atomic(self, path: Path, content: bytes) -> None:
        """Write bytes to a temp file beside ``path`` and rename it into place."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".part")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
