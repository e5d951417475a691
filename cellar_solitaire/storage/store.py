"""Persistent aggregate statistics keyed by configuration profile."""

import logging
from pathlib import Path

from pydantic import BaseModel

from cellar_solitaire.config import Config

from .records import (
    MoveRecord,
    StatisticsFormatError,
    WinLossRecord,
    decode_record,
    split_records,
)

logger = logging.getLogger(__name__)


class StatisticsWriteError(OSError):
    """The statistics file could not be written."""


class StatsSnapshot(BaseModel):
    """Read-only view of the active profile's statistics."""

    wins: int
    losses: int
    moving_average: float

    @property
    def games(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> int:
        """Win rate in whole percent (0 when no games were played)."""
        if self.games == 0:
            return 0
        return int(self.wins / self.games * 100)


class StatisticsStore:
    """Statistics for the active profile plus the raw records of all others.

    The file holds records for every configuration profile that was ever
    used. Only the two records matching the active config are decoded
    into ``wins``, ``losses`` and ``moving_average``; every other record
    is carried along byte for byte and written back unchanged.
    """

    def __init__(self):
        self._reset()

    def _reset(self) -> None:
        self._slots: list[bytes] = []
        self._move_idx: int | None = None
        self._winloss_idx: int | None = None

        self.wins = 0
        self.losses = 0
        self.moving_average = 0.0

    @property
    def num_records(self) -> int:
        return len(self._slots)

    def load(self, path: Path | str, config: Config) -> None:
        """Read all records and pick out the ones matching ``config``.

        A missing file is an empty store.

        Args:
            path: Statistics file.
            config: Active configuration (selects the profile).
        """
        self._reset()
        stats_path = Path(path)
        if not stats_path.exists():
            logger.info(f"No statistics file at {stats_path}, starting empty")
            return

        data = stats_path.read_bytes()
        try:
            slots = split_records(data)
        except StatisticsFormatError as e:
            logger.warning(f"{stats_path}: {e}; keeping {len(e.slots)} whole records")
            slots = e.slots

        for i, slot in enumerate(slots):
            self._slots.append(slot)
            record = decode_record(slot)
            if isinstance(record, MoveRecord) and record.fingerprint == config.move_fingerprint():
                assert self._move_idx is None, "duplicate move record for profile"
                self.moving_average = record.moving_average
                self._move_idx = i
            elif isinstance(record, WinLossRecord) and record.fingerprint == config.winloss_fingerprint():
                assert self._winloss_idx is None, "duplicate win/loss record for profile"
                self.wins = record.wins
                self.losses = record.losses
                self._winloss_idx = i

        logger.info(
            f"Loaded {len(self._slots)} statistics records from {stats_path}: "
            f"wins={self.wins} losses={self.losses} avg={self.moving_average:.2f}"
        )

    def save(self, path: Path | str, config: Config) -> None:
        """Write every record back, with the active profile's slots updated.

        Profiles seen for the first time get new records appended.

        Raises:
            StatisticsWriteError: If the file cannot be written.
        """
        move_record = MoveRecord(
            real_moves=config.count_real_moves,
            moving_average=self.moving_average,
        ).to_bytes()
        if self._move_idx is None:
            self._move_idx = len(self._slots)
            self._slots.append(move_record)
        else:
            self._slots[self._move_idx] = move_record

        allow_undo, allowance, consider, close_loss = config.winloss_fingerprint()
        winloss_record = WinLossRecord(
            allow_undo=allow_undo,
            undo_allowance=allowance,
            consider_undo_wins=consider,
            close_is_loss=close_loss,
            wins=self.wins,
            losses=self.losses,
        ).to_bytes()
        if self._winloss_idx is None:
            self._winloss_idx = len(self._slots)
            self._slots.append(winloss_record)
        else:
            self._slots[self._winloss_idx] = winloss_record

        stats_path = Path(path)
        try:
            stats_path.write_bytes(b"".join(self._slots))
        except OSError as e:
            logger.critical(f"Failed to write statistics to {stats_path}: {e}")
            raise StatisticsWriteError(f"Failed to write statistics to {stats_path}") from e
        logger.info(f"Saved {len(self._slots)} statistics records to {stats_path}")

    def record_win(self, moves: int) -> None:
        """Add a credited win with its move count to the moving average."""
        assert moves > 0, "a win takes at least one move"
        self.moving_average = (self.moving_average * self.wins + moves) / (self.wins + 1)
        self.wins += 1

    def record_loss(self) -> None:
        """Count a lost game."""
        self.losses += 1

    def snapshot(self) -> StatsSnapshot:
        """Get the active profile's counters."""
        return StatsSnapshot(
            wins=self.wins,
            losses=self.losses,
            moving_average=self.moving_average,
        )
