"""Board model: dealing and pile access."""

import logging
import random
from collections import Counter

from cellar_solitaire.models.card import CARDS_PER_SUIT, NUM_CARDS, NUM_SUITS, NUM_VACANT, TABLE_SIZE, is_vacant
from cellar_solitaire.models.game_state import GameState
from cellar_solitaire.models.place import Place, Range

logger = logging.getLogger(__name__)

ROW_DEAL = 5
EXTRA_DEAL = 4
MAX_CELLAR = 2  # sentinel + one card

# Deal order of the piles around the table
DEAL_ORDER: list[Place] = [
    *(Place.row(i) for i in range(4)),
    Place.extra(0),
    *(Place.row(i) for i in range(4, 8)),
    Place.extra(1),
]


def new_seed() -> int:
    """Draw a random 32-bit deal seed."""
    return random.randrange(2**32)


def deal(seed: int | None = None, game_number: int = 1) -> GameState:
    """Shuffle and deal a new game.

    The same seed always yields the same deal.

    Args:
        seed: Shuffle seed (a random one is drawn if not given)
        game_number: Sequence number of the game in this session

    Returns:
        Freshly dealt GameState
    """
    if seed is None:
        seed = new_seed()
    deck = list(range(NUM_CARDS))
    random.Random(seed).shuffle(deck)

    state = GameState(seed=seed, game_number=game_number)

    # One card of the same rank per suit seeds the foundations
    rank = deck[-1] % CARDS_PER_SUIT
    for suit in range(NUM_SUITS):
        card = suit * CARDS_PER_SUIT + rank
        deck.remove(card)
        state.foundations[suit].append(card)

    next_vacant = NUM_CARDS
    for place in DEAL_ORDER:
        pile = state.pile(place)
        pile.append(next_vacant)
        next_vacant += 1
        for _ in range(ROW_DEAL if place.is_row else EXTRA_DEAL):
            pile.append(deck.pop())

    state.cellar.append(next_vacant)
    assert not deck and next_vacant == TABLE_SIZE - 1

    logger.info(f"Dealt game {game_number} with seed {seed}")
    return state


class Board:
    """Pile access and population queries over one GameState."""

    def __init__(self, state: GameState):
        self.state = state

    def get_place(self, place: Place) -> list[int]:
        """Get the live pile for a place."""
        return self.state.pile(place)

    def range_at(self, place: Place, begin: int, end: int | None = None) -> Range:
        """Build a Range over ``[begin, end)`` of a pile (``end`` defaults to the top)."""
        pile = self.get_place(place)
        return Range(place=place, begin=begin, end=len(pile) if end is None else end, pile=pile)

    def top(self, place: Place) -> Range:
        """Range holding only the top card of a pile."""
        pile = self.get_place(place)
        return self.range_at(place, len(pile) - 1)

    def num_vacant_rows(self) -> int:
        """Count rows holding nothing but their sentinel."""
        return sum(1 for row in self.state.rows if len(row) == 1)

    def num_vacant_extra(self) -> int:
        """Count extra piles holding nothing but their sentinel."""
        return sum(1 for pile in self.state.extra if len(pile) == 1)

    def total_cards(self) -> int:
        """Count every id on the board (cards and sentinels)."""
        return sum(len(pile) for pile in self.state.all_piles())

    def reverse(self, rng: Range) -> None:
        """Flip the order of the cards inside a range, in place."""
        rng.pile[rng.begin:rng.end] = rng.pile[rng.begin:rng.end][::-1]

    def check_invariants(self) -> None:
        """Assert card conservation and the sentinel layout.

        Raises:
            AssertionError: If the board is corrupt.
        """
        ids = Counter(c for pile in self.state.all_piles() for c in pile)
        assert sum(ids.values()) == TABLE_SIZE, f"{sum(ids.values())} ids on the board"
        assert all(n == 1 for n in ids.values()), "duplicate card id"
        assert set(ids) == set(range(TABLE_SIZE)), "card id missing"
        assert len(self.state.cellar) <= MAX_CELLAR, "cellar overflow"
        for pile in [*self.state.rows, *self.state.extra, self.state.cellar]:
            assert pile and is_vacant(pile[0]), "pile lost its sentinel"
        assert sum(1 for c in ids if is_vacant(c)) == NUM_VACANT
