"""Game state models."""

import time

from pydantic import BaseModel, Field

from .place import NUM_EXTRA, NUM_FOUNDATIONS, NUM_ROWS, Place, PlaceKind


class Move(BaseModel, frozen=True):
    """Record of one executed transfer."""

    source: Place
    size: int = Field(gt=0)
    target: Place
    reversed: bool = False

    @property
    def weight(self) -> int:
        """Cost in "real" moves.

        A multi-card run moved without flipping it first takes two
        passes, so it is charged double.
        """
        if self.size > 1 and not self.reversed:
            return 2 * self.size
        return self.size

    def __str__(self) -> str:
        flip = " (reversed)" if self.reversed else ""
        return f"{self.source} -> {self.target}: {self.size} card(s){flip}"


class SessionCounters(BaseModel):
    """Per-game counters."""

    moves: int = 0
    real_moves: int = 0
    consecutive_undos: int = 0
    used_undo: bool = False  # sticky for the rest of the game
    won: bool = False
    started_at: float = Field(default_factory=time.monotonic)

    def elapsed(self) -> tuple[int, int]:
        """Get (minutes, seconds) since the deal."""
        secs = int(time.monotonic() - self.started_at)
        return secs // 60, secs % 60


class GameState(BaseModel):
    """Complete board state of one game.

    Piles are lists of card ids, bottom to top. Rows, extra piles and
    the cellar keep their sentinel at index 0.
    """

    seed: int | None = None
    game_number: int = 1

    foundations: list[list[int]] = Field(default_factory=lambda: [[] for _ in range(NUM_FOUNDATIONS)])
    rows: list[list[int]] = Field(default_factory=lambda: [[] for _ in range(NUM_ROWS)])
    extra: list[list[int]] = Field(default_factory=lambda: [[] for _ in range(NUM_EXTRA)])
    cellar: list[int] = Field(default_factory=list)

    history: list[Move] = Field(default_factory=list)
    counters: SessionCounters = Field(default_factory=SessionCounters)

    def pile(self, place: Place) -> list[int]:
        """Get the live pile list for a place."""
        if place.kind == PlaceKind.ROW:
            return self.rows[place.index]
        if place.kind == PlaceKind.EXTRA:
            return self.extra[place.index]
        if place.kind == PlaceKind.CELLAR:
            return self.cellar
        if place.kind == PlaceKind.FOUNDATION:
            return self.foundations[place.index]
        raise ValueError(f"Unknown place kind: {place.kind}")

    def all_piles(self) -> list[list[int]]:
        """Get every pile (foundations, rows, extra piles, cellar)."""
        return [*self.foundations, *self.rows, *self.extra, self.cellar]

    @property
    def won(self) -> bool:
        return self.counters.won

    def __str__(self) -> str:
        state = "won" if self.won else "running"
        return f"Game {self.game_number} ({state}), moves {self.counters.moves}"
