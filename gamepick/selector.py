"""Random game selection."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from gamepick.errors import EmptyLibraryError
from gamepick.models import GameRecord


def pick_random(
    library: Sequence[GameRecord], rng: Optional[random.Random] = None
) -> GameRecord:
    """Return one game chosen uniformly at random from *library*.

    Each call is independent; earlier picks are not excluded. Raises
    ``EmptyLibraryError`` when *library* is empty.
    """
    if not library:
        raise EmptyLibraryError("No games loaded. Please load your games first.")
    index = (rng or random).randrange(len(library))
    return library[index]
