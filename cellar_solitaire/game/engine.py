"""Game engine: the command entry points of one session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from cellar_solitaire.config import Config
from cellar_solitaire.logging import GameLogger
from cellar_solitaire.models.card import CardTable
from cellar_solitaire.models.game_state import GameState, Move
from cellar_solitaire.models.place import Location, Range
from cellar_solitaire.storage import StatisticsStore, StatsSnapshot

from .board import Board, deal
from .history import UndoManager
from .selection import SelectionResolver
from .validator import MoveValidator, ValidationResult
from .win import WinDetector, WinResult

logger = logging.getLogger(__name__)


@dataclass
class GameContext:
    """Everything an engine needs besides the board itself.

    Built once per session and handed to the engine, instead of living
    in module-level globals.
    """

    config: Config = field(default_factory=Config)
    stats: StatisticsStore = field(default_factory=StatisticsStore)
    stats_path: Path | None = None
    cards: CardTable = field(default_factory=CardTable)
    game_logger: GameLogger = field(default_factory=GameLogger)

    @classmethod
    def load(
        cls,
        config: Config,
        stats_path: Path | str | None = None,
        game_logger: GameLogger | None = None,
    ) -> GameContext:
        """Create a context and load the statistics for ``config``.

        Args:
            config: Active configuration
            stats_path: Statistics file (None keeps statistics in memory only)
            game_logger: JSONL event logger (disabled if not provided)
        """
        context = cls(
            config=config,
            stats_path=Path(stats_path) if stats_path is not None else None,
            game_logger=game_logger or GameLogger(),
        )
        if context.stats_path is not None:
            context.stats.load(context.stats_path, config)
        snapshot = context.stats.snapshot()
        context.game_logger.log_session_start(snapshot.wins, snapshot.losses, snapshot.moving_average)
        return context

    def save_statistics(self) -> None:
        """Persist the statistics (no-op without a statistics file).

        Raises:
            StatisticsWriteError: If the file cannot be written.
        """
        if self.stats_path is None:
            return
        self.stats.save(self.stats_path, self.config)


class GameEngine:
    """Rules engine for one session of games.

    All board changes go through ``try_move``, ``undo`` and
    ``reshuffle``; every call either applies completely or leaves the
    piles untouched.
    """

    def __init__(self, context: GameContext | None = None, seed: int | None = None):
        """Initialize the engine and deal the first game.

        Args:
            context: Session context (defaults: in-memory statistics)
            seed: Seed of the first deal (random if not provided)
        """
        self.context = context or GameContext()
        self.config = self.context.config
        self.stats = self.context.stats
        self.game_logger = self.context.game_logger
        self.last_win: WinResult | None = None
        self._games_dealt = 0
        self.init_game(seed)

    @property
    def state(self) -> GameState:
        return self.board.state

    @property
    def won(self) -> bool:
        return self.state.won

    def init_game(self, seed: int | None = None) -> GameState:
        """Deal a new game, replacing the current one wholesale.

        Args:
            seed: Shuffle seed (random if not provided)

        Returns:
            The new GameState
        """
        self._games_dealt += 1
        state = deal(seed, game_number=self._games_dealt)
        self.load_state(state)
        self.game_logger.log_game_start(state)
        return state

    def load_state(self, state: GameState) -> None:
        """Continue play from an existing GameState.

        Args:
            state: State to take over (its piles are used in place)
        """
        self.board = Board(state)
        self.selector = SelectionResolver(self.board)
        self.validator = MoveValidator(self.board)
        self.undo_manager = UndoManager(state, self.config.undo_allowance)
        self.win_detector = WinDetector(self.board)
        self.last_win = None

    # Queries

    def num_vacant_rows(self) -> int:
        return self.board.num_vacant_rows()

    def num_vacant_extra(self) -> int:
        return self.board.num_vacant_extra()

    def move_count(self) -> int:
        """Move count as configured ("real" weighted moves or plain moves)."""
        counters = self.state.counters
        return counters.real_moves if self.config.count_real_moves else counters.moves

    def elapsed(self) -> tuple[int, int]:
        """Get (minutes, seconds) since the deal."""
        return self.state.counters.elapsed()

    def stats_snapshot(self) -> StatsSnapshot:
        """Get the statistics of the active profile."""
        return self.stats.snapshot()

    def check_invariants(self) -> None:
        """Assert card conservation and pile layout."""
        self.board.check_invariants()

    # Commands

    def select_at(self, location: Location, active: Range | None = None) -> Range | None:
        """Resolve the range picked at a location (None if not selectable)."""
        return self.selector.select_at(location, active)

    def select_among(self, hits: Iterable[Location], active: Range | None = None) -> Range | None:
        """Resolve the range picked among overlapping locations."""
        return self.selector.resolve(hits, active)

    def validate(self, source: Range, target: Range, reversed: bool = False) -> ValidationResult:
        """Check a move without executing it."""
        return self.validator.validate(source, target, reversed)

    def try_move(self, source: Range, target: Range, reversed: bool = False) -> bool:
        """Move ``source`` onto the pile of ``target`` if the rules allow it.

        The caller flips a run in its pile before passing ``reversed=True``;
        the cards are appended in their current order either way.

        Args:
            source: Cards to move (a suffix of their pile)
            target: Any range of the destination pile
            reversed: Whether the run was flipped by the player

        Returns:
            True if the move was executed
        """
        result = self.validator.validate(source, target, reversed)
        if not result.is_valid:
            logger.debug(f"Rejected {source.place} -> {target.place}: {result.error_message}")
            return False

        source_pile = self.board.get_place(source.place)
        target_pile = self.board.get_place(target.place)
        move = Move(source=source.place, size=source.size, target=target.place, reversed=reversed)

        target_pile.extend(source.cards)
        del source_pile[len(source_pile) - move.size:]
        self.undo_manager.register_move(move)
        assert len(self.state.cellar) <= 2, "cellar overflow"

        logger.debug(f"Moved {move} [{result.rule}]")
        self.game_logger.log_move(self.state, move)

        if self.win_detector.check():
            self._register_win()
        return True

    def undo(self) -> bool:
        """Take back the last move.

        Returns:
            False if undo is disabled or there is nothing to undo
        """
        if not self.config.allow_undo:
            return False
        move = self.undo_manager.undo(self.board)
        if move is None:
            return False
        self.game_logger.log_undo(self.state, move)
        return True

    def reshuffle(self, confirmed: bool = True, seed: int | None = None) -> GameState:
        """Abandon the current game and deal a new one.

        An unfinished game is only abandoned when ``confirmed``; it then
        counts as a loss if the config says so.

        Args:
            confirmed: Whether the player confirmed giving up a running game
            seed: Seed of the new deal

        Returns:
            The (possibly unchanged) current GameState
        """
        if not self.won:
            if not confirmed:
                return self.state
            if self.config.close_is_loss:
                self._register_loss("reshuffle")
                self.context.save_statistics()
        logger.info(f"Reshuffling after game {self.state.game_number}")
        return self.init_game(seed)

    def close(self) -> None:
        """End the session: count an unfinished game if configured, then save.

        Raises:
            StatisticsWriteError: If the statistics cannot be written.
        """
        if not self.won and self.config.close_is_loss:
            self._register_loss("close")
        snapshot = self.stats.snapshot()
        self.game_logger.log_session_end(snapshot.wins, snapshot.losses, snapshot.moving_average)
        self.context.save_statistics()

    def _register_win(self) -> None:
        counters = self.state.counters
        minutes, seconds = self.elapsed()
        credited = not counters.used_undo or self.config.consider_undo_wins
        moves = self.move_count()
        if credited:
            self.stats.record_win(moves)
        self.last_win = WinResult(
            moves=moves,
            elapsed_sec=minutes * 60 + seconds,
            used_undo=counters.used_undo,
            credited=credited,
        )
        logger.info(
            f"Game {self.state.game_number} won in {moves} moves ({minutes}:{seconds:02d})"
            + ("" if credited else ", not counted (undo used)")
        )
        self.game_logger.log_win(self.state, moves, self.last_win.elapsed_sec, credited)

    def _register_loss(self, reason: str) -> None:
        self.stats.record_loss()
        logger.info(f"Game {self.state.game_number} counted as lost ({reason})")
        self.game_logger.log_loss(self.state, reason)


def new_engine(config: Config | None = None, seed: int | None = None) -> GameEngine:
    """Create an engine with in-memory statistics (handy for tools and tests)."""
    return GameEngine(GameContext(config=config or Config()), seed=seed)

