"""
Owned catalog handle.

Holds the current CatalogSnapshot for one profile and is passed
explicitly to whatever needs the catalog. The snapshot is swapped
by a single reference assignment, so readers see either the old
or the new catalog, never a partial one.
"""

from steam_outline.catalog.fetcher import CatalogFetcher
from steam_outline.catalog.models import CatalogSnapshot
from steam_outline.logger import get_logger

logger = get_logger(__name__, component="catalog")


class CatalogHandle:
    """
    Lazily populated catalog for a single profile.

    Example:
        >>> handle = CatalogHandle(CatalogFetcher(), "gabelogannewell")
        >>> snapshot = handle.ensure()   # fetches on first use
        >>> snapshot = handle.ensure()   # reuses the cached snapshot
        >>> snapshot = handle.refresh()  # always fetches
    """

    def __init__(self, fetcher: CatalogFetcher, username: str) -> None:
        self._fetcher = fetcher
        self._username = username
        self._snapshot: CatalogSnapshot | None = None

    @property
    def username(self) -> str:
        return self._username

    @property
    def snapshot(self) -> CatalogSnapshot | None:
        """Current snapshot, None until the first successful fetch."""
        return self._snapshot

    def ensure(self) -> CatalogSnapshot:
        """
        Return the cached snapshot, fetching it first if there is none.

        Raises:
            FetchError: If the catalog has to be fetched and the fetch fails
        """
        if self._snapshot is None:
            return self.refresh()
        return self._snapshot

    def refresh(self) -> CatalogSnapshot:
        """
        Fetch the catalog again and replace the snapshot.

        On failure the previous snapshot is kept and the error re-raised.
        """
        snapshot = self._fetcher.fetch(self._username)
        previous = self._snapshot
        self._snapshot = snapshot
        logger.info(
            "Catalog snapshot replaced",
            username=self._username,
            games=len(snapshot),
            previous_games=None if previous is None else len(previous),
        )
        return snapshot
