"""Player-side interaction: pick up, flip, drop."""

import logging
from typing import Iterable

from cellar_solitaire.models.card import is_vacant
from cellar_solitaire.models.place import Location, Range

from .engine import GameEngine

logger = logging.getLogger(__name__)


class PlayerController:
    """Drives a GameEngine the way a pointer-based front end does.

    A run is picked up, optionally flipped, and dropped on a target
    location. A failed drop snaps the run back, undoing the flip.
    """

    def __init__(self, engine: GameEngine):
        self.engine = engine
        self.held: Range | None = None
        self.reversed = False

    @property
    def is_holding(self) -> bool:
        return self.held is not None

    def can_pick(self, rng: Range) -> bool:
        """Check whether a resolved range may be picked up.

        Foundations and sentinels stay put, and the cellar card can only
        be lifted while an extra pile is free.
        """
        if rng.place.is_foundation or is_vacant(rng.first):
            return False
        if rng.place.is_cellar and self.engine.num_vacant_extra() == 0:
            return False
        return True

    def pick(self, location: Location | Iterable[Location]) -> Range | None:
        """Pick up the run at a location, replacing any held run.

        Returns:
            The held range, or None if nothing could be picked up
        """
        self.cancel()
        hits = [location] if isinstance(location, Location) else list(location)
        rng = self.engine.select_among(hits)
        if rng is None or not self.can_pick(rng):
            return None
        self.held = rng
        logger.debug(f"Picked {rng.size} card(s) from {rng.place}")
        return rng

    def flip(self) -> bool:
        """Reverse the held run in its pile.

        Only runs of two or more cards can be flipped, and only while a
        row is vacant. Flipping twice restores the original order.
        """
        if self.held is None or self.held.size < 2 or self.engine.num_vacant_rows() == 0:
            return False
        self.engine.board.reverse(self.held)
        self.reversed = not self.reversed
        return True

    def drop(self, location: Location | Iterable[Location]) -> bool:
        """Drop the held run on the pile at a location.

        Returns:
            True if the move was executed
        """
        if self.held is None:
            return False
        hits = [location] if isinstance(location, Location) else list(location)
        target = self.engine.select_among(hits, active=self.held)
        if target is not None and target.place != self.held.place:
            if self.engine.try_move(self.held, target, self.reversed):
                self._release()
                return True
        self.cancel()
        return False

    def cancel(self) -> None:
        """Put the held run back where it came from."""
        if self.held is not None and self.reversed:
            self.engine.board.reverse(self.held)
        self._release()

    def undo(self) -> bool:
        """Undo the last move (not while holding cards)."""
        if self.is_holding:
            return False
        return self.engine.undo()

    def _release(self) -> None:
        self.held = None
        self.reversed = False
