"""Move history, undo and move accounting."""

import logging

from cellar_solitaire.models.game_state import GameState, Move

from .board import Board

logger = logging.getLogger(__name__)


class UndoManager:
    """Keeps the move stack and the move/undo counters of one game.

    Args:
        state: Game whose history and counters are managed
        undo_allowance: Consecutive undos tolerated before the game
            counts as "undo used"
    """

    def __init__(self, state: GameState, undo_allowance: int):
        self.state = state
        self.undo_allowance = undo_allowance

    @property
    def history(self) -> list[Move]:
        return self.state.history

    def register_move(self, move: Move) -> None:
        """Push a move and charge it to the counters."""
        counters = self.state.counters
        self.history.append(move)
        counters.moves += 1
        counters.real_moves += move.weight
        counters.consecutive_undos = 0

    def register_undo(self, move: Move) -> None:
        """Refund an undone move; flags the game once the streak is too long."""
        counters = self.state.counters
        counters.moves -= 1
        counters.real_moves -= move.weight
        counters.consecutive_undos += 1
        if counters.consecutive_undos > self.undo_allowance and not counters.used_undo:
            counters.used_undo = True
            logger.info(f"Undo used ({counters.consecutive_undos} consecutive undos)")

    def undo(self, board: Board) -> Move | None:
        """Reverse the most recent move.

        Returns:
            The undone move, or None if there is no history
        """
        if not self.history:
            return None
        move = self.history.pop()
        self.register_undo(move)

        source = board.get_place(move.source)
        target = board.get_place(move.target)
        moved = target[len(target) - move.size:]
        if move.reversed:
            moved.reverse()
        source.extend(moved)
        del target[len(target) - move.size:]

        logger.debug(f"Undid {move}")
        return move
