"""Formatters for game log output."""

from cellar_solitaire.models.card import CARDS_PER_SUIT, Rank, Suit, is_vacant
from cellar_solitaire.models.place import Place, PlaceKind

# Suit codes for log output
SUIT_CODES: dict[Suit, str] = {
    Suit.CLUBS: "C",
    Suit.HEARTS: "H",
    Suit.SPADES: "S",
    Suit.DIAMONDS: "D",
}

# Rank codes for log output
RANK_CODES: dict[Rank, str] = {
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

PLACE_CODES: dict[PlaceKind, str] = {
    PlaceKind.ROW: "R",
    PlaceKind.EXTRA: "E",
    PlaceKind.CELLAR: "C",
    PlaceKind.FOUNDATION: "F",
}

VACANT_CODE = "--"


def format_card(card_id: int) -> str:
    """Format a single card id to string.

    Args:
        card_id: Card id to format.

    Returns:
        Formatted string (e.g., "HA" for Ace of Hearts, "--" for a sentinel).
    """
    if is_vacant(card_id):
        return VACANT_CODE
    suit = Suit(card_id // CARDS_PER_SUIT)
    rank = Rank(card_id % CARDS_PER_SUIT)
    return f"{SUIT_CODES[suit]}{RANK_CODES[rank]}"


def format_pile(pile: list[int]) -> str:
    """Format a pile to a comma-separated string, bottom card first.

    Args:
        pile: Card ids to format.

    Returns:
        Comma-separated card strings (e.g., "--,S8,H9").
        Empty string if the pile is empty.
    """
    return ",".join(format_card(c) for c in pile)


def format_place(place: Place) -> str:
    """Format a place to its short code (R3, E1, C, F2)."""
    if place.kind == PlaceKind.CELLAR:
        return PLACE_CODES[place.kind]
    return f"{PLACE_CODES[place.kind]}{place.index}"


def parse_place(code: str) -> Place:
    """Parse a short place code back into a Place.

    Raises:
        ValueError: If the code is not a valid place.
    """
    code = code.strip().upper()
    if not code:
        raise ValueError("Empty place code")
    kinds = {v: k for k, v in PLACE_CODES.items()}
    kind = kinds.get(code[0])
    if kind is None:
        raise ValueError(f"Unknown place code: {code!r}")
    if kind == PlaceKind.CELLAR:
        if len(code) > 1:
            raise ValueError(f"Cellar takes no index: {code!r}")
        return Place.cellar()
    if not code[1:].isdigit():
        raise ValueError(f"Missing pile index: {code!r}")
    return Place(kind=kind, index=int(code[1:]))
