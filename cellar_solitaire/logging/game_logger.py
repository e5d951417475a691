"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel

from cellar_solitaire.models.game_state import GameState, Move

from .formatters import format_pile, format_place


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    Together with the dealt piles this allows step-by-step replay.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_session_start(self, wins: int, losses: int, moving_average: float) -> None:
        """Log session start with the loaded statistics."""
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "wins": wins,
            "losses": losses,
            "moving_average": moving_average,
        })

    def log_game_start(self, state: GameState) -> None:
        """Log a fresh deal.

        Args:
            state: Newly dealt game state.
        """
        self._write({
            "type": "game_start",
            "game": state.game_number,
            "seed": state.seed,
            "foundations": [format_pile(p) for p in state.foundations],
            "rows": [format_pile(p) for p in state.rows],
            "extra": [format_pile(p) for p in state.extra],
            "cellar": format_pile(state.cellar),
        })

    def _move_record(self, kind: str, state: GameState, move: Move) -> dict[str, Any]:
        return {
            "type": kind,
            "game": state.game_number,
            "move_number": len(state.history),
            "from": format_place(move.source),
            "to": format_place(move.target),
            "size": move.size,
            "reversed": move.reversed,
            "moves": state.counters.moves,
            "real_moves": state.counters.real_moves,
        }

    def log_move(self, state: GameState, move: Move) -> None:
        """Log an executed move (state after the move)."""
        self._write(self._move_record("move", state, move))

    def log_undo(self, state: GameState, move: Move) -> None:
        """Log an undone move (state after the undo)."""
        self._write(self._move_record("undo", state, move))

    def log_win(self, state: GameState, moves: int, elapsed_sec: int, credited: bool) -> None:
        """Log the win of a game.

        Args:
            state: Game state at the time of the win.
            moves: Move count used for statistics.
            elapsed_sec: Seconds since the deal.
            credited: Whether the win was recorded in the statistics.
        """
        self._write({
            "type": "win",
            "game": state.game_number,
            "moves": moves,
            "elapsed_sec": elapsed_sec,
            "used_undo": state.counters.used_undo,
            "credited": credited,
        })

    def log_loss(self, state: GameState, reason: str) -> None:
        """Log a game counted as lost ("reshuffle" or "close")."""
        self._write({
            "type": "loss",
            "game": state.game_number,
            "reason": reason,
        })

    def log_session_end(self, wins: int, losses: int, moving_average: float) -> None:
        """Log session end with the statistics about to be saved."""
        self._write({
            "type": "session_end",
            "timestamp": datetime.now().isoformat(),
            "wins": wins,
            "losses": losses,
            "moving_average": moving_average,
        })
