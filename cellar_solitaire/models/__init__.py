"""Game models."""

from .card import Card, CardTable, Rank, Suit, fits, is_vacant
from .game_state import GameState, Move, SessionCounters
from .place import Location, Place, PlaceKind, Range

__all__ = [
    "Card",
    "CardTable",
    "Rank",
    "Suit",
    "fits",
    "is_vacant",
    "GameState",
    "Move",
    "SessionCounters",
    "Location",
    "Place",
    "PlaceKind",
    "Range",
]
