"""Card identities and the fixed card table."""

from enum import IntEnum
from typing import Iterator

from pydantic import BaseModel

CARDS_PER_SUIT = 13
NUM_SUITS = 4
NUM_CARDS = NUM_SUITS * CARDS_PER_SUIT  # 52
NUM_VACANT = 11  # 8 rows + 2 extra piles + cellar
TABLE_SIZE = NUM_CARDS + NUM_VACANT  # 63


class Suit(IntEnum):
    """Card suit (id // 13)."""

    CLUBS = 0
    HEARTS = 1
    SPADES = 2
    DIAMONDS = 3


class Rank(IntEnum):
    """Card rank (id % 13).

    King sits at 0 so that ``(rank + 1) % 13`` walks K, A, 2, ..., Q
    and the ranks wrap around cyclically.
    """

    KING = 0
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12


RANK_NAMES = {
    Rank.KING: "K",
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
}

SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
    Suit.DIAMONDS: "♦",
}


def is_vacant(card_id: int) -> bool:
    """Check if the id belongs to a sentinel ("empty slot") marker."""
    return card_id >= NUM_CARDS


def fits(a: int, b: int) -> bool:
    """Check whether two cards may lie next to each other in a run.

    Same suit and ranks one apart, wrapping around so that King and
    Ace are neighbours. The relation is symmetric; sentinels never fit.
    """
    if is_vacant(a) or is_vacant(b):
        return False
    return a // CARDS_PER_SUIT == b // CARDS_PER_SUIT and (
        (a + 1) % CARDS_PER_SUIT == b % CARDS_PER_SUIT
        or (b + 1) % CARDS_PER_SUIT == a % CARDS_PER_SUIT
    )


class Card(BaseModel, frozen=True):
    """Single entry of the card table."""

    id: int

    @property
    def is_vacant(self) -> bool:
        """Check if this is a sentinel marker."""
        return is_vacant(self.id)

    @property
    def suit(self) -> Suit | None:
        """Suit of the card (None for sentinels)."""
        if self.is_vacant:
            return None
        return Suit(self.id // CARDS_PER_SUIT)

    @property
    def rank(self) -> Rank | None:
        """Rank of the card (None for sentinels)."""
        if self.is_vacant:
            return None
        return Rank(self.id % CARDS_PER_SUIT)

    def fits(self, other: "Card") -> bool:
        """Check if ``other`` may be placed next to this card."""
        return fits(self.id, other.id)

    @classmethod
    def of(cls, suit: Suit, rank: Rank) -> "Card":
        """Create the card for a suit and rank."""
        return cls(id=suit * CARDS_PER_SUIT + rank)

    def __str__(self) -> str:
        if self.is_vacant:
            return "[ ]"
        return f"{SUIT_SYMBOLS[self.suit]}{RANK_NAMES[self.rank]}"

    def __repr__(self) -> str:
        return str(self)


class CardTable:
    """Fixed lookup table of all 63 card identities.

    Piles store plain integer ids; this table turns them back into
    ``Card`` objects when a caller needs suit/rank information.
    """

    def __init__(self):
        self._cards: tuple[Card, ...] = tuple(Card(id=i) for i in range(TABLE_SIZE))

    def __getitem__(self, card_id: int) -> Card:
        return self._cards[card_id]

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def real_cards(self) -> list[Card]:
        """Get the 52 standard cards."""
        return list(self._cards[:NUM_CARDS])

    def sentinels(self) -> list[Card]:
        """Get the 11 sentinel markers."""
        return list(self._cards[NUM_CARDS:])
