"""Logging utilities and board display."""

import logging
import sys
from typing import TYPE_CHECKING

from cellar_solitaire.logging.formatters import format_card, format_place
from cellar_solitaire.models.card import CardTable
from cellar_solitaire.models.place import Place, all_places

if TYPE_CHECKING:
    from cellar_solitaire.game.engine import GameEngine
    from cellar_solitaire.storage import StatsSnapshot


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class BoardDisplay:
    """Display game state to stdout."""

    def __init__(self, show_seed: bool = False):
        """Initialize display.

        Args:
            show_seed: Whether to show the deal seed in the board header
        """
        self.show_seed = show_seed

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def _pile_line(self, place: Place, pile: list[int], held: set[int], table: CardTable) -> str:
        cards = []
        for i, card_id in enumerate(pile):
            card = table[card_id]
            if card.is_vacant:
                continue
            text = format_card(card.id)
            cards.append(f"*{text}" if i in held else text)
        body = " ".join(cards) if cards else "(empty)"
        return f"{format_place(place):>3} | {body}"

    def print_board(self, engine: "GameEngine", held_place: Place | None = None, held: range = range(0)) -> None:
        """Print every pile, bottom card first.

        Args:
            engine: Engine whose board is shown
            held_place: Place of the picked-up run, if any
            held: Indices of the picked-up run inside that pile
        """
        state = engine.state
        table = engine.context.cards
        minutes, seconds = engine.elapsed()
        seed = f" (seed {state.seed})" if self.show_seed else ""
        self.print_separator()
        print(
            f"Game {state.game_number}{seed}  Time {minutes}:{seconds:02d}  "
            f"Moves {engine.move_count()}  Undo {'Yes' if state.counters.used_undo else 'No'}"
        )
        self.print_separator()
        for place in all_places():
            pile = engine.board.get_place(place)
            if place.is_foundation:
                print(f"{format_place(place):>3} | {format_card(pile[-1])}")
                continue
            marked = set(held) if place == held_place else set()
            print(self._pile_line(place, pile, marked, table))

    def print_win(self, engine: "GameEngine") -> None:
        """Print the summary of a won game."""
        win = engine.last_win
        if win is None:
            return
        self.print_separator()
        print("YOU WIN!")
        print(f"Time  {win.elapsed_sec // 60}:{win.elapsed_sec % 60:02d}")
        print(f"Moves {win.moves}")
        print(f"Undo  {'Yes' if win.used_undo else 'No'}")
        if not win.credited:
            print("(not counted in the statistics: undo used)")
        self.print_stats(engine.stats_snapshot())

    def print_stats(self, stats: "StatsSnapshot") -> None:
        """Print the statistics of the active profile."""
        self.print_separator()
        print(f"Games     {stats.games}")
        print(f"Wins      {stats.wins}")
        print(f"Winrate   {stats.win_rate}%")
        print(f"Avg.Moves {int(stats.moving_average)}")
        self.print_separator()
