"""Game logging module."""

from .formatters import format_card, format_pile, format_place, parse_place
from .game_logger import GameLogConfig, GameLogger

__all__ = [
    "GameLogConfig",
    "GameLogger",
    "format_card",
    "format_pile",
    "format_place",
    "parse_place",
]
