"""Basic chess enumerations, square helpers and the package's base error."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class ChessError(Exception):
    """Base class for errors raised by the chess package."""


class Color(IntEnum):
    """Side of a piece or of the player to move."""

    WHITE = 0
    BLACK = 1
    NONE = 2

    def opponent(self) -> Color:
        """Return the other side; ``Color.NONE`` has no opponent."""
        if self is Color.NONE:
            raise ValueError("Color.NONE has no opponent")
        return Color(self.value ^ 1)


class PieceType(IntEnum):
    """Kind of piece; ``NONE`` marks an empty square."""

    PAWN = 0
    KNIGHT = 1
    BISHOP = 2
    ROOK = 3
    QUEEN = 4
    KING = 5
    NONE = 6

    @property
    def is_valid(self) -> bool:
        return self is not PieceType.NONE


class CastlingRights(IntFlag):
    """Castling availability as a four-bit set."""

    NONE = 0
    WHITE_KINGSIDE = 1
    WHITE_QUEENSIDE = 2
    BLACK_KINGSIDE = 4
    BLACK_QUEENSIDE = 8
    WHITE = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE | BLACK


# Squares are integers 0..63: a1 = 0, h1 = 7, a8 = 56, h8 = 63.
SQUARE_NONE = 64
SQUARE_A1 = 0
SQUARE_H1 = 7
SQUARE_A8 = 56
SQUARE_H8 = 63

FILE_A, FILE_B, FILE_C, FILE_D, FILE_E, FILE_F, FILE_G, FILE_H = range(8)
RANK_1, RANK_2, RANK_3, RANK_4, RANK_5, RANK_6, RANK_7, RANK_8 = range(8)


def square_is_valid(sq: int) -> bool:
    """True if ``sq`` names one of the 64 board squares."""
    return 0 <= sq <= SQUARE_H8


def file_of(sq: int) -> int:
    """File index (0 = a) of a square."""
    return sq & 7


def rank_of(sq: int) -> int:
    """Rank index (0 = rank 1) of a square."""
    return sq >> 3


def make_square(file: int, rank: int) -> int:
    """Square index for a file and rank."""
    return (rank << 3) | file