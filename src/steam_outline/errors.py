"""
Exception hierarchy for catalog fetching, launching and outline lookups.

Every error carries the context that produced it so callers can
log or report it without re-deriving anything.
"""

from datetime import datetime, timezone


class SteamOutlineError(Exception):
    """Base exception for all steam-outline errors."""

    def __init__(
        self,
        message: str,
        *,
        username: str | None = None,
        url: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.username = username
        self.url = url
        self.status_code = status_code
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)


class FetchError(SteamOutlineError):
    """Raised when the catalog could not be fetched."""

    pass


class ProfilePrivacyError(FetchError):
    """Raised when the provider answers with an error node (usually a private profile)."""

    pass


class MalformedResponseError(FetchError):
    """Raised when the payload is not the expected games document."""

    pass


class TransportError(FetchError):
    """Raised on connection failures, timeouts and non-2xx responses."""

    pass


class LaunchError(SteamOutlineError):
    """Raised when a game could not be launched."""

    pass


class UnsupportedPlatformError(LaunchError):
    """Raised when launching on an operating system without a known Steam command."""

    pass


class NotFoundError(SteamOutlineError):
    """Raised when a lookup (cursor link, game name) finds nothing."""

    pass
