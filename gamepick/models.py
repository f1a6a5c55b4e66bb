"""Data models for gamepick."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from gamepick.errors import ConfigError

_STORE_BASE = "https://store.steampowered.com/app"
_MEDIA_BASE = "https://media.steampowered.com/steamcommunity/public/images/apps"


@dataclass(frozen=True)
class GameRecord:
    """A single owned game as returned by the owned-games endpoint."""

    app_id: int
    name: str
    playtime_minutes: int = 0
    icon_ref: Optional[str] = None
    logo_ref: Optional[str] = None

    def __post_init__(self) -> None:
        if self.app_id <= 0:
            raise ValueError(f"Invalid app_id: {self.app_id}")
        if self.playtime_minutes < 0:
            raise ValueError("playtime_minutes cannot be negative")

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> GameRecord:
        """Build a record from one entry of ``response.games``."""
        app_id = int(raw["appid"])
        return cls(
            app_id=app_id,
            name=raw.get("name") or f"App {app_id}",
            playtime_minutes=int(raw.get("playtime_forever") or 0),
            icon_ref=raw.get("img_icon_url") or None,
            logo_ref=raw.get("img_logo_url") or None,
        )

    @property
    def playtime_hours(self) -> float:
        """Return playtime expressed in hours, to one decimal place.

        Halves round up, so 9 minutes is 0.2 hours.
        """
        return ((self.playtime_minutes + 3) // 6) / 10

    @property
    def store_url(self) -> str:
        return f"{_STORE_BASE}/{self.app_id}"

    @property
    def logo_url(self) -> Optional[str]:
        return self._media_url(self.logo_ref)

    @property
    def icon_url(self) -> Optional[str]:
        return self._media_url(self.icon_ref)

    def _media_url(self, ref: Optional[str]) -> Optional[str]:
        if not ref:
            return None
        return f"{_MEDIA_BASE}/{self.app_id}/{ref}.jpg"


Library = tuple[GameRecord, ...]


@dataclass(frozen=True)
class AchievementSummary:
    """Unlocked/total achievement counts for one game."""

    unlocked_count: int
    total_count: int

    def __post_init__(self) -> None:
        if self.unlocked_count < 0 or self.total_count < 0:
            raise ValueError("achievement counts cannot be negative")
        if self.unlocked_count > self.total_count:
            raise ValueError(
                f"unlocked_count ({self.unlocked_count}) exceeds "
                f"total_count ({self.total_count})"
            )

    @property
    def percentage(self) -> Optional[int]:
        """Return the completion percentage, or ``None`` with no achievements."""
        if self.total_count == 0:
            return None
        # halves round up: 1/8 is 13
        return (self.unlocked_count * 200 + self.total_count) // (2 * self.total_count)


class _Unavailable:
    """Sentinel type for an achievement lookup that produced nothing."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "UNAVAILABLE"

    def __bool__(self) -> bool:
        return False


UNAVAILABLE = _Unavailable()

AchievementResult = Union[AchievementSummary, _Unavailable]


@dataclass(frozen=True)
class Session:
    """Credentials for one load: the Steam ID being browsed and the API key."""

    account_id: str
    api_key: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.account_id or not self.account_id.strip():
            raise ConfigError("Please enter your Steam ID")
        if not self.api_key or not self.api_key.strip():
            raise ConfigError(
                "Steam API key not configured. Set STEAM_API_KEY or use --api-key."
            )


@dataclass(frozen=True)
class PickerState:
    """Everything the orchestrator knows between user actions.

    A new value is returned by every load; the old one is never mutated.
    """

    session: Optional[Session] = None
    library: Library = ()
    generation: int = 0

    @property
    def loaded(self) -> bool:
        return bool(self.library)
