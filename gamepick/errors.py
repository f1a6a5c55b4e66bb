"""Error types raised by gamepick."""

from __future__ import annotations

from typing import Optional


class GamePickError(Exception):
    """Base class for all gamepick errors."""


class ConfigError(GamePickError):
    """Raised when a required setting (API key, Steam ID) is missing."""


class FetchError(GamePickError):
    """Raised when the owned-games request fails upstream or in transit.

    ``status`` is the upstream HTTP status when one was received, otherwise
    ``None``.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class ProfileNotFoundError(FetchError):
    """Raised when the profile check returns no player for the Steam ID."""


class EmptyLibraryError(GamePickError):
    """Raised when a library has no games or the profile is not public."""


class RelayError(GamePickError):
    """Raised by ``RelayClient`` on a non-2xx response or transport failure."""

    def __init__(
        self,
        status_code: Optional[int] = None,
        body: str = "",
        network_failure: bool = False,
    ) -> None:
        if network_failure:
            message = "Network failure while contacting relay"
        else:
            message = f"Relay returned HTTP {status_code}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.network_failure = network_failure
