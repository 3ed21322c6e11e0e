"""Chess moves and their coordinate notation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .primitives import SQUARE_NONE, PieceType
from .square import square_to_string, string_to_square


class MoveType(IntEnum):
    NORMAL = 0
    CAPTURE = 1
    EN_PASSANT = 2
    CASTLING = 3
    PROMOTION = 4
    PROMOTION_CAPTURE = 5


_PROMOTION_LETTERS = {
    PieceType.QUEEN: "q",
    PieceType.ROOK: "r",
    PieceType.BISHOP: "b",
    PieceType.KNIGHT: "n",
}
_PROMOTION_TYPES = {letter: pt for pt, letter in _PROMOTION_LETTERS.items()}


@dataclass(frozen=True)
class Move:
    """A move from one square to another; the default value is the null move."""

    from_sq: int = SQUARE_NONE
    to_sq: int = SQUARE_NONE
    move_type: MoveType = MoveType.NORMAL
    promotion: PieceType = PieceType.NONE

    @classmethod
    def null(cls) -> Move:
        return cls()

    @classmethod
    def make_promotion(cls, from_sq: int, to_sq: int, promotion: PieceType) -> Move:
        return cls(from_sq, to_sq, MoveType.PROMOTION, promotion)

    @classmethod
    def make_promotion_capture(cls, from_sq: int, to_sq: int, promotion: PieceType) -> Move:
        return cls(from_sq, to_sq, MoveType.PROMOTION_CAPTURE, promotion)

    @classmethod
    def make_castling(cls, from_sq: int, to_sq: int) -> Move:
        return cls(from_sq, to_sq, MoveType.CASTLING)

    @classmethod
    def make_en_passant(cls, from_sq: int, to_sq: int) -> Move:
        return cls(from_sq, to_sq, MoveType.EN_PASSANT)

    def is_capture(self) -> bool:
        return self.move_type in (MoveType.CAPTURE, MoveType.PROMOTION_CAPTURE, MoveType.EN_PASSANT)

    def is_promotion(self) -> bool:
        return self.move_type in (MoveType.PROMOTION, MoveType.PROMOTION_CAPTURE)

    def is_castling(self) -> bool:
        return self.move_type is MoveType.CASTLING

    def is_en_passant(self) -> bool:
        return self.move_type is MoveType.EN_PASSANT

    def is_null(self) -> bool:
        return self.from_sq == SQUARE_NONE or self.to_sq == SQUARE_NONE

    def to_algebraic(self) -> str:
        """Coordinate notation such as 'e2e4' or 'e7e8q'; '0000' for the null move."""
        if self.is_null():
            return "0000"
        text = square_to_string(self.from_sq) + square_to_string(self.to_sq)
        if self.is_promotion():
            text += _PROMOTION_LETTERS.get(self.promotion, "q")
        return text

    @classmethod
    def from_algebraic(cls, text: str) -> Move | None:
        """Parse coordinate notation; returns None if the text is not a move.

        The move type is only NORMAL or PROMOTION; captures are resolved
        against a position elsewhere.
        """
        if not 4 <= len(text) <= 5:
            return None
        from_sq = string_to_square(text[0:2])
        to_sq = string_to_square(text[2:4])
        if from_sq is None or to_sq is None:
            return None
        if len(text) == 5:
            promotion = _PROMOTION_TYPES.get(text[4].lower())
            if promotion is None:
                return None
            return cls(from_sq, to_sq, MoveType.PROMOTION, promotion)
        return cls(from_sq, to_sq, MoveType.NORMAL)