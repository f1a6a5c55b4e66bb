"""Steam Web API client: owned games, achievements and profile lookups."""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urlencode

from gamepick.errors import (
    ConfigError,
    EmptyLibraryError,
    FetchError,
    ProfileNotFoundError,
    RelayError,
)
from gamepick.models import (
    UNAVAILABLE,
    AchievementResult,
    AchievementSummary,
    GameRecord,
    Library,
    Session,
)
from gamepick.relay import RelayClient

logger = logging.getLogger(__name__)

_BASE = "https://api.steampowered.com"
_OWNED_GAMES = "IPlayerService/GetOwnedGames/v0001/"
_ACHIEVEMENTS = "ISteamUserStats/GetPlayerAchievements/v0001/"
_PLAYER_SUMMARIES = "ISteamUser/GetPlayerSummaries/v0002/"

EMPTY_LIBRARY_MESSAGE = (
    "No games found. Make sure your Steam ID is correct and your game "
    "details are public."
)


def build_api_url(path: str, **params: Any) -> str:
    """Return an absolute Steam Web API URL for *path* with *params*."""
    return f"{_BASE}/{path}?{urlencode(params)}"


class SteamClient:
    """Steam Web API calls made through a ``RelayClient``.

    The API key is passed per call rather than held by the client, so one
    client can serve several sessions.
    """

    def __init__(self, relay: Optional[RelayClient] = None) -> None:
        self._relay = relay or RelayClient()

    # ------------------------------------------------------------------
    # Owned games
    # ------------------------------------------------------------------

    def fetch_library(self, account_id: str, api_key: str) -> Library:
        """Return the games owned by *account_id*.

        Raises ``ConfigError`` before any request if either argument is
        empty, ``EmptyLibraryError`` if no games come back (private profile
        or empty library, which the API does not distinguish) and
        ``FetchError`` if the relay or upstream fails.
        """
        session = Session(account_id=account_id.strip(), api_key=api_key.strip())
        url = build_api_url(
            _OWNED_GAMES,
            key=session.api_key,
            steamid=session.account_id,
            format="json",
            include_appinfo="true",
            include_played_free_games="true",
        )
        try:
            data = self._relay.relay(url)
        except RelayError as exc:
            logger.warning(
                "Owned games request failed for %s: %s", session.account_id, exc
            )
            raise FetchError(str(exc), status=exc.status_code) from exc

        games = self._parse_games(data)
        if not games:
            raise EmptyLibraryError(EMPTY_LIBRARY_MESSAGE)
        logger.info("Loaded %d games for %s", len(games), session.account_id)
        return games

    @staticmethod
    def _parse_games(data: Any) -> Library:
        response = data.get("response") if isinstance(data, dict) else None
        raw_games = response.get("games") if isinstance(response, dict) else None
        if not raw_games or not isinstance(raw_games, list):
            return ()
        games: list[GameRecord] = []
        for raw in raw_games:
            if not isinstance(raw, dict) or not raw.get("appid"):
                continue
            try:
                games.append(GameRecord.from_api(raw))
            except (TypeError, ValueError) as exc:
                logger.warning("Skipping appid=%r: %s", raw.get("appid"), exc)
        return tuple(games)

    # ------------------------------------------------------------------
    # Achievements
    # ------------------------------------------------------------------

    def fetch_achievements(self, app_id: int, session: Session) -> AchievementResult:
        """Return achievement counts for *app_id*, or ``UNAVAILABLE``.

        This endpoint is often private or missing for a game, so every
        failure degrades to ``UNAVAILABLE`` instead of raising.
        """
        url = build_api_url(
            _ACHIEVEMENTS,
            appid=app_id,
            key=session.api_key,
            steamid=session.account_id,
        )
        try:
            data = self._relay.relay(url)
        except RelayError as exc:
            logger.debug("Achievements unavailable for app_id=%d: %s", app_id, exc)
            return UNAVAILABLE

        playerstats = data.get("playerstats") if isinstance(data, dict) else None
        if not isinstance(playerstats, dict) or not playerstats.get("success"):
            return UNAVAILABLE
        achievements = playerstats.get("achievements")
        if not isinstance(achievements, list) or not achievements:
            return UNAVAILABLE

        unlocked = sum(
            1 for a in achievements if isinstance(a, dict) and a.get("achieved")
        )
        return AchievementSummary(
            unlocked_count=unlocked, total_count=len(achievements)
        )

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def fetch_player_summary(self, session: Session) -> dict[str, Any]:
        """Return raw player summary data for the session's Steam ID.

        Raises ``ProfileNotFoundError`` if the player is not found and
        ``FetchError`` if the request fails.
        """
        url = build_api_url(
            _PLAYER_SUMMARIES, key=session.api_key, steamids=session.account_id
        )
        try:
            data = self._relay.relay(url)
        except RelayError as exc:
            raise FetchError(str(exc), status=exc.status_code) from exc
        response = data.get("response", {}) if isinstance(data, dict) else {}
        players = response.get("players", [])
        if not players:
            raise ProfileNotFoundError(
                f"Player not found for steam_id={session.account_id!r}"
            )
        return players[0]
