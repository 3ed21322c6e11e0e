"""Logical consistency checks for positions read from FEN."""

from __future__ import annotations

from .bitboard import pop_count
from .position import Position
from .primitives import (
    RANK_1,
    RANK_3,
    RANK_6,
    RANK_8,
    SQUARE_NONE,
    ChessError,
    Color,
    PieceType,
    rank_of,
)
from .bitboard import rank_bb


class FenValidationError(ChessError):
    """A parsed position is not a sensible chess position."""


def validate(position: Position) -> None:
    """Run every check in turn; raise FenValidationError on the first failure."""
    validate_kings(position)
    validate_pawns(position)
    validate_en_passant(position)


def validate_kings(position: Position) -> None:
    """Each side must have exactly one king."""
    for color, name in ((Color.WHITE, "white"), (Color.BLACK, "black")):
        count = pop_count(position.pieces(PieceType.KING, color))
        if count != 1:
            raise FenValidationError(
                f"Position must have exactly 1 {name} king, found {count}"
            )


def validate_pawns(position: Position) -> None:
    """No pawn may stand on the first or eighth rank."""
    pawns = position.pieces(PieceType.PAWN)
    if pawns & rank_bb(RANK_1):
        raise FenValidationError("Pawns cannot be on rank 1")
    if pawns & rank_bb(RANK_8):
        raise FenValidationError("Pawns cannot be on rank 8")


def validate_en_passant(position: Position) -> None:
    """The en passant square must be on the rank the side to move can capture onto."""
    ep = position.en_passant_square
    if ep == SQUARE_NONE:
        return
    rank = rank_of(ep)
    if position.side_to_move is Color.WHITE and rank != RANK_6:
        raise FenValidationError("When white is to move, en passant square must be on rank 6")
    if position.side_to_move is Color.BLACK and rank != RANK_3:
        raise FenValidationError("When black is to move, en passant square must be on rank 3")