"""Resolution of pointer locations into selectable ranges."""

import logging
from typing import Iterable

from cellar_solitaire.models.card import is_vacant
from cellar_solitaire.models.place import Location, PlaceKind, Range

from .board import Board

logger = logging.getLogger(__name__)


def _priority(location: Location) -> tuple[int, int, int]:
    """Sort key: rows (highest first), extra piles, cellar, foundations.

    Within a pile the topmost card wins, mirroring how the cards overlap
    on the table.
    """
    place = location.place
    if place.kind == PlaceKind.ROW:
        return (0, -place.index, -location.index)
    if place.kind == PlaceKind.EXTRA:
        return (1, -place.index, -location.index)
    if place.kind == PlaceKind.CELLAR:
        return (2, 0, -location.index)
    if place.kind == PlaceKind.FOUNDATION:
        return (3, place.index, 0)
    raise ValueError(f"Unknown place kind: {place.kind}")


class SelectionResolver:
    """Turns pointer locations into the range the player would pick up."""

    def __init__(self, board: Board):
        self.board = board

    def select_at(self, location: Location, active: Range | None = None) -> Range | None:
        """Resolve a single location.

        Args:
            location: Pile and card index under the pointer
            active: Range currently selected (its cards are looked through)

        Returns:
            The selectable range, or None
        """
        return self.resolve([location], active)

    def resolve(self, hits: Iterable[Location], active: Range | None = None) -> Range | None:
        """Resolve every card slot under the pointer.

        The hits are examined in priority order; the first one that is not
        part of the active selection decides the outcome, even when that
        outcome is "nothing selectable".

        Args:
            hits: All locations under the pointer
            active: Range currently selected

        Returns:
            The selectable range, or None
        """
        for hit in sorted(hits, key=_priority):
            pile = self.board.get_place(hit.place)
            if not 0 <= hit.index < len(pile):
                continue
            if active is not None and hit.place == active.place and active.begin <= hit.index < active.end:
                continue
            if hit.place.is_extra and is_vacant(pile[hit.index]):
                continue
            return self._select(hit)
        return None

    def _select(self, hit: Location) -> Range | None:
        place = hit.place
        pile = self.board.get_place(place)

        if place.kind == PlaceKind.ROW:
            rng = self.board.range_at(place, hit.index)
            if rng.size == 1 or (self.board.num_vacant_rows() > 0 and rng.is_run()):
                return rng
            logger.debug(f"{place}[{hit.index}:] is not a movable run")
            return None

        if place.kind == PlaceKind.EXTRA:
            if hit.index == len(pile) - 1:
                return self.board.top(place)
            return None

        if place.kind in (PlaceKind.CELLAR, PlaceKind.FOUNDATION):
            return self.board.top(place)

        raise ValueError(f"Unknown place kind: {place.kind}")
