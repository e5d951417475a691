"""Move validation for requested transfers."""

from dataclasses import dataclass

from cellar_solitaire.models.card import fits, is_vacant
from cellar_solitaire.models.place import PlaceKind, Range

from .board import Board


@dataclass
class ValidationResult:
    """Result of move validation."""

    is_valid: bool
    error_message: str = ""
    rule: str = ""  # which rule admitted the move


class MoveValidator:
    """Decides whether a range may be moved onto a target pile."""

    def __init__(self, board: Board):
        """Initialize validator.

        Args:
            board: Board the moves are checked against
        """
        self.board = board

    def validate(self, source: Range, target: Range, reversed: bool = False) -> ValidationResult:
        """Validate a requested move.

        Args:
            source: Cards to move (already flipped by the caller if reversed)
            target: Any range of the destination pile; its top card is used
            reversed: Whether the source run was flipped before the move

        Returns:
            ValidationResult
        """
        source_check = self._check_source(source, target)
        if not source_check.is_valid:
            return source_check

        last = self.board.get_place(target.place)[-1]
        first = source.first
        kind = target.place.kind

        if kind == PlaceKind.CELLAR:
            if is_vacant(last) and source.size == 1 and not source.place.is_extra:
                return ValidationResult(is_valid=True, rule="cellar")
            return ValidationResult(
                is_valid=False,
                error_message="Cellar takes one card from a row while empty",
            )

        if kind in (PlaceKind.ROW, PlaceKind.FOUNDATION) and fits(last, first):
            return ValidationResult(is_valid=True, rule="fits")

        if kind == PlaceKind.ROW and is_vacant(last):
            if source.size == 1 or self.board.num_vacant_rows() >= 2 or reversed:
                return ValidationResult(is_valid=True, rule="vacant_row")
            return ValidationResult(
                is_valid=False,
                error_message="Moving a run onto an empty row needs another empty row or a flip",
            )

        if kind == PlaceKind.EXTRA:
            return ValidationResult(is_valid=False, error_message="Nothing can be put on an extra pile")

        return ValidationResult(is_valid=False, error_message="Card does not fit")

    def _check_source(self, source: Range, target: Range) -> ValidationResult:
        """Check the source range itself.

        Foundations never give cards back, sentinels never move, and a
        pile cannot receive its own cards. Ranges taken before the board
        was replaced (new deal or loaded position) are refused.
        """
        live = self.board.get_place
        if source.pile is not live(source.place) or target.pile is not live(target.place):
            return ValidationResult(is_valid=False, error_message="Selection is out of date")
        if source.size == 0:
            return ValidationResult(is_valid=False, error_message="Nothing selected")
        if source.end != len(self.board.get_place(source.place)):
            return ValidationResult(is_valid=False, error_message="Only the top of a pile can move")
        if source.place.is_foundation:
            return ValidationResult(is_valid=False, error_message="Foundation cards cannot move")
        if any(is_vacant(c) for c in source.cards):
            return ValidationResult(is_valid=False, error_message="Empty slot markers cannot move")
        if source.place == target.place:
            return ValidationResult(is_valid=False, error_message="Source and target are the same pile")
        return ValidationResult(is_valid=True)
