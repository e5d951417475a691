"""Terminal-state detection."""

from dataclasses import dataclass

from cellar_solitaire.models.place import NUM_EXTRA, NUM_ROWS

from .board import Board


@dataclass
class WinResult:
    """Summary of a game that was just won."""

    moves: int
    elapsed_sec: int
    used_undo: bool
    credited: bool


class WinDetector:
    """Checks for a cleared board after each successful move."""

    def __init__(self, board: Board):
        self.board = board

    def is_cleared(self) -> bool:
        """All rows and extra piles empty and nothing parked in the cellar."""
        return (
            self.board.num_vacant_rows() == NUM_ROWS
            and self.board.num_vacant_extra() == NUM_EXTRA
            and len(self.board.state.cellar) == 1
        )

    def check(self) -> bool:
        """Check for a first-time win; marks the game won.

        Returns:
            True only for the move that completes the game
        """
        counters = self.board.state.counters
        if counters.won or not self.is_cleared():
            return False
        counters.won = True
        return True
