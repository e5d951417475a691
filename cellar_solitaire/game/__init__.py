"""Game logic."""

from .board import Board, deal
from .controller import PlayerController
from .engine import GameContext, GameEngine, new_engine
from .history import UndoManager
from .selection import SelectionResolver
from .validator import MoveValidator, ValidationResult
from .win import WinDetector, WinResult

__all__ = [
    "Board",
    "deal",
    "PlayerController",
    "GameContext",
    "GameEngine",
    "new_engine",
    "UndoManager",
    "SelectionResolver",
    "MoveValidator",
    "ValidationResult",
    "WinDetector",
    "WinResult",
]
