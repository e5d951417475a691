"""Pile addresses and contiguous card ranges."""

from dataclasses import dataclass, field
from enum import IntEnum

from pydantic import BaseModel, model_validator

from .card import fits

NUM_ROWS = 8
NUM_EXTRA = 2
NUM_FOUNDATIONS = 4


class PlaceKind(IntEnum):
    """Kind of pile a place refers to."""

    ROW = 0
    EXTRA = 1
    CELLAR = 2
    FOUNDATION = 3


# Number of piles per kind
PLACE_COUNTS: dict[PlaceKind, int] = {
    PlaceKind.ROW: NUM_ROWS,
    PlaceKind.EXTRA: NUM_EXTRA,
    PlaceKind.CELLAR: 1,
    PlaceKind.FOUNDATION: NUM_FOUNDATIONS,
}


class Place(BaseModel, frozen=True):
    """Tagged pile address.

    Equality compares kind, then index. The cellar always has index 0,
    so any two cellar places are equal.
    """

    kind: PlaceKind
    index: int = 0

    @model_validator(mode="after")
    def _check_index(self) -> "Place":
        if not 0 <= self.index < PLACE_COUNTS[self.kind]:
            raise ValueError(f"{self.kind.name} index out of range: {self.index}")
        return self

    @classmethod
    def row(cls, index: int) -> "Place":
        return cls(kind=PlaceKind.ROW, index=index)

    @classmethod
    def extra(cls, index: int) -> "Place":
        return cls(kind=PlaceKind.EXTRA, index=index)

    @classmethod
    def cellar(cls) -> "Place":
        return cls(kind=PlaceKind.CELLAR)

    @classmethod
    def foundation(cls, index: int) -> "Place":
        return cls(kind=PlaceKind.FOUNDATION, index=index)

    @property
    def is_row(self) -> bool:
        return self.kind == PlaceKind.ROW

    @property
    def is_extra(self) -> bool:
        return self.kind == PlaceKind.EXTRA

    @property
    def is_cellar(self) -> bool:
        return self.kind == PlaceKind.CELLAR

    @property
    def is_foundation(self) -> bool:
        return self.kind == PlaceKind.FOUNDATION

    def __str__(self) -> str:
        if self.kind == PlaceKind.ROW:
            return f"Row {self.index}"
        if self.kind == PlaceKind.EXTRA:
            return f"Extra {self.index}"
        if self.kind == PlaceKind.CELLAR:
            return "Cellar"
        if self.kind == PlaceKind.FOUNDATION:
            return f"Foundation {self.index}"
        raise ValueError(f"Unknown place kind: {self.kind}")


def all_places() -> list[Place]:
    """Get every place on the board in a stable order."""
    return [
        Place(kind=kind, index=i)
        for kind in PlaceKind
        for i in range(PLACE_COUNTS[kind])
    ]


class Location(BaseModel, frozen=True):
    """Abstract pointer at one card slot: a place and an index into its pile."""

    place: Place
    index: int


@dataclass(frozen=True)
class Range:
    """Contiguous slice ``[begin, end)`` of one pile.

    The range keeps a reference to the live pile list, so ``cards``
    always reflects the current order (including a flip done by the
    caller before a reversed move).
    """

    place: Place
    begin: int
    end: int
    pile: list[int] = field(compare=False, repr=False)

    def __post_init__(self):
        if not 0 <= self.begin <= self.end <= len(self.pile):
            raise IndexError(
                f"Range [{self.begin}, {self.end}) outside {self.place} of size {len(self.pile)}"
            )

    @property
    def size(self) -> int:
        return self.end - self.begin

    @property
    def cards(self) -> list[int]:
        """Card ids currently in the range, bottom to top."""
        return self.pile[self.begin:self.end]

    @property
    def first(self) -> int:
        return self.pile[self.begin]

    @property
    def last(self) -> int:
        return self.pile[self.end - 1]

    def is_run(self) -> bool:
        """Check whether all adjacent cards in the range fit each other."""
        if self.size <= 1:
            return True
        cards = self.cards
        return all(fits(a, b) for a, b in zip(cards, cards[1:]))

    @property
    def is_left_to_right(self) -> bool:
        """Layout direction used by renderers (right half of the table)."""
        return (self.place.is_row and self.place.index >= 4) or (
            self.place.is_extra and self.place.index == 1
        )
