"""Presentation adapters for the randomizer."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO

from gamepick.models import AchievementResult, AchievementSummary, GameRecord


class Presenter(Protocol):
    """What the randomizer needs from a user interface."""

    def show_loading(self, show: bool) -> None: ...

    def show_error(self, message: str) -> None: ...

    def clear_error(self) -> None: ...

    def display_game(self, game: GameRecord) -> None: ...

    def update_achievement_slot(self, app_id: int, result: AchievementResult) -> None: ...


def format_achievements(result: AchievementResult) -> str:
    """Return "5/20 (25%)" for a summary, or "unavailable"."""
    if isinstance(result, AchievementSummary) and result.percentage is not None:
        return (
            f"{result.unlocked_count}/{result.total_count} ({result.percentage}%)"
        )
    return "unavailable"


class ConsolePresenter:
    """Writes game cards and status lines to a text stream."""

    def __init__(self, stream: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = stream or sys.stdout
        self._err = err or sys.stderr

    def show_loading(self, show: bool) -> None:
        if show:
            print("Loading games...", file=self._out)

    def show_error(self, message: str) -> None:
        print(f"Error: {message}", file=self._err)

    def clear_error(self) -> None:
        pass

    def display_game(self, game: GameRecord) -> None:
        print(f"\n=== {game.name} ===", file=self._out)
        print(f"  Hours played : {game.playtime_hours:.1f}", file=self._out)
        print(f"  Steam store  : {game.store_url}", file=self._out)
        if game.logo_url:
            print(f"  Logo         : {game.logo_url}", file=self._out)

    def update_achievement_slot(self, app_id: int, result: AchievementResult) -> None:
        print(
            f"  Achievements : {format_achievements(result)}  (app {app_id})",
            file=self._out,
        )
