"""Randomizer: load a library, pick a game and fill in its achievements."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional

from gamepick.errors import (
    ConfigError,
    EmptyLibraryError,
    FetchError,
    ProfileNotFoundError,
)
from gamepick.models import UNAVAILABLE, GameRecord, PickerState, Session
from gamepick.presenter import Presenter
from gamepick.selector import pick_random
from gamepick.steam import SteamClient

logger = logging.getLogger(__name__)

NO_GAMES_LOADED_MESSAGE = "No games loaded. Please load your games first."
LOAD_FAILED_MESSAGE = (
    "Failed to load games. Make sure your Steam ID is correct and your game "
    "details are public."
)


def error_message(exc: Exception) -> str:
    """Return the user-facing message for a failed load."""
    if isinstance(exc, ProfileNotFoundError):
        return "Steam profile not found. Make sure your Steam ID is correct."
    if isinstance(exc, FetchError):
        if exc.status is not None:
            return f"API Error: {exc.status}"
        return LOAD_FAILED_MESSAGE
    return str(exc)


class GameRandomizer:
    """Drives a ``Presenter`` through load / pick / achievement updates.

    State between calls lives in the ``PickerState`` the caller passes in
    and gets back; the randomizer itself only tracks the newest generation
    and its in-flight achievement lookups, keyed by app id.

    Parameters
    ----------
    client:
        ``SteamClient`` used for all requests.
    presenter:
        Where games, errors and the loading indicator go.
    api_key:
        Steam Web API key; an empty key makes every load fail with a
        configuration error.
    rng:
        Optional ``random.Random`` for reproducible picks.
    check_profile:
        Run the player-summary check before fetching the library.
    """

    def __init__(
        self,
        client: SteamClient,
        presenter: Presenter,
        api_key: str,
        rng: Optional[random.Random] = None,
        check_profile: bool = False,
    ) -> None:
        self._client = client
        self._presenter = presenter
        self._api_key = api_key or ""
        self._rng = rng
        self._check_profile = check_profile
        self._generation = 0
        self._tasks: dict[int, asyncio.Task[None]] = {}

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending_app_ids(self) -> list[int]:
        return [app_id for app_id, task in self._tasks.items() if not task.done()]

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def load(self, state: PickerState, account_id: str) -> PickerState:
        """Fetch the library for *account_id*, then display a random game.

        Returns the new state. On a configuration error the previous state
        is returned untouched; on a fetch error the returned state carries
        the session but an empty library.
        """
        try:
            session = Session(account_id=(account_id or "").strip(), api_key=self._api_key)
        except ConfigError as exc:
            self._presenter.show_error(str(exc))
            return state

        generation = max(state.generation, self._generation) + 1
        self._generation = generation
        self._cancel_pending()

        self._presenter.clear_error()
        self._presenter.show_loading(True)
        try:
            if self._check_profile:
                await asyncio.to_thread(self._client.fetch_player_summary, session)
            library = await asyncio.to_thread(
                self._client.fetch_library, session.account_id, session.api_key
            )
        except (ConfigError, EmptyLibraryError, FetchError) as exc:
            logger.info("Load failed for %s: %s", session.account_id, exc)
            if generation == self._generation:
                self._presenter.show_error(error_message(exc))
            return PickerState(session=session, generation=generation)
        finally:
            # a newer load owns the indicator once this one is superseded
            if generation == self._generation:
                self._presenter.show_loading(False)

        new_state = PickerState(session=session, library=library, generation=generation)
        if generation != self._generation:
            logger.debug("Load for %s superseded, not displaying", session.account_id)
            return new_state
        self._show(new_state)
        return new_state

    async def pick_another(self, state: PickerState) -> Optional[GameRecord]:
        """Display another random game from the already loaded library."""
        if not state.loaded or state.session is None:
            self._presenter.show_error(NO_GAMES_LOADED_MESSAGE)
            return None
        return self._show(state)

    async def drain(self) -> None:
        """Wait for every in-flight achievement lookup to finish."""
        tasks = list(self._tasks.values())
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _show(self, state: PickerState) -> GameRecord:
        game = pick_random(state.library, self._rng)
        self._presenter.display_game(game)
        self._schedule_achievements(game.app_id, state.session, state.generation)  # type: ignore[arg-type]
        return game

    def _schedule_achievements(
        self, app_id: int, session: Session, generation: int
    ) -> None:
        previous = self._tasks.get(app_id)
        if previous is not None and not previous.done():
            previous.cancel()
        task = asyncio.get_running_loop().create_task(
            self._lookup_achievements(app_id, session, generation)
        )
        self._tasks[app_id] = task
        task.add_done_callback(lambda t, a=app_id: self._forget(a, t))

    def _forget(self, app_id: int, task: asyncio.Task[None]) -> None:
        if self._tasks.get(app_id) is task:
            del self._tasks[app_id]

    def _cancel_pending(self) -> None:
        for task in self._tasks.values():
            task.cancel()
        self._tasks.clear()

    async def _lookup_achievements(
        self, app_id: int, session: Session, generation: int
    ) -> None:
        try:
            result = await asyncio.to_thread(
                self._client.fetch_achievements, app_id, session
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning("Achievement lookup for app_id=%d failed: %s", app_id, exc)
            result = UNAVAILABLE

        if generation != self._generation:
            logger.debug("Discarding stale achievements for app_id=%d", app_id)
            return
        try:
            self._presenter.update_achievement_slot(app_id, result)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not update achievements for app_id=%d: %s", app_id, exc)
