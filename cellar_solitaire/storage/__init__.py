"""Statistics persistence."""

from .records import (
    RECORD_BYTES,
    MoveRecord,
    RecordTag,
    StatisticsFormatError,
    WinLossRecord,
    decode_record,
    split_records,
)
from .store import StatisticsStore, StatisticsWriteError, StatsSnapshot

__all__ = [
    "RECORD_BYTES",
    "MoveRecord",
    "RecordTag",
    "StatisticsFormatError",
    "WinLossRecord",
    "decode_record",
    "split_records",
    "StatisticsStore",
    "StatisticsWriteError",
    "StatsSnapshot",
]
