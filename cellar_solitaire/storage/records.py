"""Binary statistics record format.

The statistics file has no header; it is a flat sequence of fixed-size
16-byte records in little-endian byte order:

- [0:4]   Record tag (uint32): 0 = moving average, 1 = wins/losses

Move record (tag 0):
- [4]     count_real_moves flag (bool)
- [5:8]   Padding
- [8:12]  Moving average of moves per credited win (float32)
- [12:16] Padding

WinLoss record (tag 1):
- [4]     allow_undo flag (bool)
- [5]     Consecutive-undo allowance (uint8)
- [6]     consider_undo_wins flag (bool)
- [7]     close_is_loss flag (bool)
- [8:12]  Wins (uint32)
- [12:16] Losses (uint32)

A record belongs to the configuration profile described by its flag
fields, so several profiles can share one file.
"""

import struct
from enum import IntEnum

from pydantic import BaseModel, Field

RECORD_BYTES = 16

TAG_FORMAT = "<I"
MOVE_PAYLOAD_FORMAT = "<?3xf4x"
WINLOSS_PAYLOAD_FORMAT = "<?B??II"

TAG_BYTES = struct.calcsize(TAG_FORMAT)  # 4


class RecordTag(IntEnum):
    """Discriminator stored in the first four bytes of a record."""

    MOVE = 0
    WIN_LOSS = 1


class StatisticsFormatError(ValueError):
    """Statistics data that cannot be split into whole records."""

    def __init__(self, message: str, slots: list[bytes]):
        super().__init__(message)
        self.slots = slots  # whole records preceding the damage


class MoveRecord(BaseModel):
    """Moving average of moves for one "count real moves" setting."""

    real_moves: bool
    moving_average: float = 0.0

    @property
    def fingerprint(self) -> tuple[bool]:
        return (self.real_moves,)

    def to_bytes(self) -> bytes:
        """Serialize to a 16-byte record."""
        return struct.pack(TAG_FORMAT, RecordTag.MOVE) + struct.pack(
            MOVE_PAYLOAD_FORMAT, self.real_moves, self.moving_average
        )


class WinLossRecord(BaseModel):
    """Win/loss counters for one undo/loss configuration profile."""

    allow_undo: bool
    undo_allowance: int = Field(ge=0, le=255)
    consider_undo_wins: bool
    close_is_loss: bool
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)

    @property
    def fingerprint(self) -> tuple[bool, int, bool, bool]:
        return (
            self.allow_undo,
            self.undo_allowance,
            self.consider_undo_wins,
            self.close_is_loss,
        )

    def to_bytes(self) -> bytes:
        """Serialize to a 16-byte record."""
        return struct.pack(TAG_FORMAT, RecordTag.WIN_LOSS) + struct.pack(
            WINLOSS_PAYLOAD_FORMAT,
            self.allow_undo,
            self.undo_allowance,
            self.consider_undo_wins,
            self.close_is_loss,
            self.wins,
            self.losses,
        )


StatRecord = MoveRecord | WinLossRecord


def decode_record(data: bytes) -> StatRecord | None:
    """Deserialize one record.

    Args:
        data: 16 bytes

    Returns:
        The decoded record, or None for an unknown tag.
    """
    if len(data) != RECORD_BYTES:
        raise ValueError(f"Expected {RECORD_BYTES} bytes, got {len(data)}")

    tag = struct.unpack_from(TAG_FORMAT, data, 0)[0]
    if tag == RecordTag.MOVE:
        real_moves, moving_average = struct.unpack_from(MOVE_PAYLOAD_FORMAT, data, TAG_BYTES)
        return MoveRecord(real_moves=real_moves, moving_average=moving_average)
    if tag == RecordTag.WIN_LOSS:
        allow_undo, allowance, consider, close_loss, wins, losses = struct.unpack_from(
            WINLOSS_PAYLOAD_FORMAT, data, TAG_BYTES
        )
        return WinLossRecord(
            allow_undo=allow_undo,
            undo_allowance=allowance,
            consider_undo_wins=consider,
            close_is_loss=close_loss,
            wins=wins,
            losses=losses,
        )
    return None


def split_records(data: bytes) -> list[bytes]:
    """Split file contents into 16-byte record slots.

    Raises:
        StatisticsFormatError: If a trailing partial record is present.
            Its ``slots`` hold the whole records read before it.
    """
    whole = len(data) - len(data) % RECORD_BYTES
    slots = [data[i:i + RECORD_BYTES] for i in range(0, whole, RECORD_BYTES)]
    if whole != len(data):
        raise StatisticsFormatError(
            f"Trailing {len(data) - whole} bytes do not form a whole record", slots
        )
    return slots
