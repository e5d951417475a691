"""Main entry point: play in the terminal."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from cellar_solitaire.config import DEFAULT_CONFIG_FILE, Config, load_config
from cellar_solitaire.game.controller import PlayerController
from cellar_solitaire.game.engine import GameContext, GameEngine
from cellar_solitaire.logging import GameLogConfig, GameLogger, parse_place
from cellar_solitaire.models.place import Location, Place
from cellar_solitaire.storage import StatisticsWriteError
from cellar_solitaire.utils.logger import BoardDisplay, setup_logging

logger = logging.getLogger(__name__)

HELP = """Commands:
  show                      print the board
  pick <place> [n]          pick up the top n cards (default 1)
  flip                      reverse the picked-up run
  drop <place>              drop the picked-up run on a pile
  cancel                    put the picked-up run back
  move <place> [n] <place> [flip]
                            pick, optionally flip, and drop in one go
  undo                      take back the last move
  new                       deal a new game
  stats                     show statistics
  quit                      save statistics and exit
Places: R0-R7 (rows), E0-E1 (extra piles), C (cellar), F0-F3 (foundations)"""


def generate_log_filename(log_dir: str, seed: int | None) -> str:
    """Generate log filename with timestamp and first seed.

    Format: {ISO timestamp}_{seed}.jsonl
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    filename = f"{timestamp}_{seed if seed is not None else 'random'}.jsonl"
    return str(Path(log_dir) / filename)


def top_location(engine: GameEngine, place: Place, count: int = 1) -> Location:
    """Location of the n-th card from the top of a pile."""
    pile = engine.board.get_place(place)
    return Location(place=place, index=len(pile) - count)


class CommandLoop:
    """Reads commands from stdin and applies them to the engine."""

    def __init__(self, engine: GameEngine, display: BoardDisplay):
        self.engine = engine
        self.controller = PlayerController(engine)
        self.display = display
        self.running = True

    def show(self) -> None:
        held = self.controller.held
        if held is None:
            self.display.print_board(self.engine)
        else:
            self.display.print_board(self.engine, held.place, range(held.begin, held.end))

    def _pick(self, args: list[str]) -> bool:
        place = parse_place(args[0])
        count = int(args[1]) if len(args) > 1 else 1
        if count < 1:
            raise ValueError("Count must be at least 1")
        if self.controller.pick(top_location(self.engine, place, count)) is None:
            print("Cannot pick that up!")
            return False
        return True

    def _drop(self, code: str) -> None:
        place = parse_place(code)
        was_won = self.engine.won
        if not self.controller.drop(top_location(self.engine, place)):
            print("Cannot move!")
            return
        if self.engine.won and not was_won:
            self.show()
            self.display.print_win(self.engine)
            print("Type 'new' to play again.")

    def _new(self) -> None:
        self.controller.cancel()
        if not self.engine.won:
            try:
                answer = input("Give up the running game? [y/N] ").strip().lower()
            except EOFError:
                print()
                return
            if answer != "y":
                return
        self.engine.reshuffle(confirmed=True)

    def execute(self, line: str) -> None:
        """Run one command line."""
        parts = line.split()
        if not parts:
            return
        command, args = parts[0].lower(), parts[1:]

        if command == "show":
            pass
        elif command == "pick" and args:
            self._pick(args)
        elif command == "flip":
            if not self.controller.flip():
                print("Cannot flip!")
        elif command == "drop" and args:
            self._drop(args[0])
        elif command == "cancel":
            self.controller.cancel()
        elif command == "move" and len(args) >= 2:
            flip = args[-1].lower() == "flip"
            if flip:
                args = args[:-1]
            if len(args) < 2:
                print("Usage: move <place> [n] <place> [flip]")
                return
            if not self._pick(args[:-1]):
                return
            if flip and not self.controller.flip():
                print("Cannot flip!")
                self.controller.cancel()
                return
            self._drop(args[-1])
        elif command == "undo":
            if not self.controller.undo():
                print("Cannot undo!")
        elif command == "new":
            self._new()
        elif command == "stats":
            self.display.print_stats(self.engine.stats_snapshot())
            return
        elif command in ("quit", "exit"):
            self.running = False
            return
        elif command == "help":
            print(HELP)
            return
        else:
            print("Invalid command! (type 'help')")
            return
        self.show()

    def run(self) -> None:
        """Read commands until quit or end of input."""
        self.show()
        while self.running:
            try:
                line = input("> ")
            except EOFError:
                break
            try:
                self.execute(line)
            except ValueError as e:
                print(f"Invalid input: {e}")


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(description="Cellar solitaire in the terminal")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path(DEFAULT_CONFIG_FILE),
        help=f"Path to config file (key=value or YAML, default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "-s",
        "--stats",
        type=Path,
        help="Path to statistics file (overrides config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed of the first deal",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-seed",
        action="store_true",
        help="Show the deal seed on the board",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )

    args = parser.parse_args()

    # Load config
    result = load_config(args.config)
    config: Config = result.config
    for error in result.errors:
        print(f"Error parsing config: {error}")

    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_seed:
        config.logging.show_seed = True
    setup_logging(config.logging.level)

    stats_path = args.stats or Path(config.stats_path)

    # Determine game log path (CLI argument overrides config file)
    if args.game_log is not None:
        game_log_config = GameLogConfig(
            enabled=True,
            output_path=generate_log_filename(str(args.game_log), args.seed),
        )
    else:
        game_log_config = config.game_log

    display = BoardDisplay(show_seed=config.logging.show_seed)
    try:
        with GameLogger(game_log_config) as game_logger:
            context = GameContext.load(config, stats_path, game_logger)
            engine = GameEngine(context, seed=args.seed)
            print(HELP)
            CommandLoop(engine, display).run()
            engine.close()
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted; statistics were not saved")
        return 1
    except StatisticsWriteError as e:
        logger.critical(f"{e}: {e.__cause__}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
