"""Reading and writing positions in Forsyth-Edwards Notation."""

from __future__ import annotations

import re

from .piece import Piece
from .position import Position
from .primitives import (
    RANK_3,
    RANK_6,
    SQUARE_NONE,
    CastlingRights,
    ChessError,
    Color,
    make_square,
    rank_of,
)
from .square import square_to_string, string_to_square


class FenParseError(ChessError):
    """A FEN string is malformed."""


_INTEGER = re.compile(r"-?[0-9]+")

_CASTLING_LETTERS = (
    (CastlingRights.WHITE_KINGSIDE, "K"),
    (CastlingRights.WHITE_QUEENSIDE, "Q"),
    (CastlingRights.BLACK_KINGSIDE, "k"),
    (CastlingRights.BLACK_QUEENSIDE, "q"),
)
_RIGHTS_BY_LETTER = {letter: right for right, letter in _CASTLING_LETTERS}


def parse_fen(fen: str) -> Position:
    """Parse a six-field FEN string into a Position with its hash computed."""
    fields = fen.split(" ")
    if len(fields) != 6:
        raise FenParseError(f"FEN must have exactly 6 space-separated fields, got {len(fields)}")

    position = Position()
    try:
        _parse_piece_placement(fields[0], position)
        position.side_to_move = _parse_active_color(fields[1])
        position.castling_rights = _parse_castling_rights(fields[2])
        position.en_passant_square = _parse_en_passant_square(fields[3])
        position.halfmove_clock = _parse_halfmove_clock(fields[4])
        position.fullmove_number = _parse_fullmove_number(fields[5])
    except FenParseError:
        raise
    except (ValueError, IndexError) as exc:
        raise FenParseError(f"Unexpected error: {exc}") from exc

    position.compute_hash()
    return position


def serialize_fen(position: Position) -> str:
    """Render a Position as a FEN string."""
    return " ".join(
        (
            _serialize_piece_placement(position),
            "w" if position.side_to_move is Color.WHITE else "b",
            _serialize_castling_rights(position.castling_rights),
            "-"
            if position.en_passant_square == SQUARE_NONE
            else square_to_string(position.en_passant_square),
            str(position.halfmove_clock),
            str(position.fullmove_number),
        )
    )


def _parse_piece_placement(field: str, position: Position) -> None:
    ranks = field.split("/")
    if len(ranks) != 8:
        raise FenParseError(f"Piece placement must have exactly 8 ranks, got {len(ranks)}")

    for rank, rank_text in zip(range(7, -1, -1), ranks):
        file = 0
        for c in rank_text:
            if "1" <= c <= "8":
                file += int(c)
                continue
            if file >= 8:
                raise FenParseError(f"Rank {rank + 1} has too many squares")
            piece = Piece.from_fen_char(c)
            if piece.is_empty():
                raise FenParseError(f"Invalid piece character: {c}")
            position.set_piece(make_square(file, rank), piece)
            file += 1
        if file != 8:
            raise FenParseError(f"Rank {rank + 1} has {file} squares, expected 8")


def _parse_active_color(field: str) -> Color:
    if field == "w":
        return Color.WHITE
    if field == "b":
        return Color.BLACK
    raise FenParseError(f"Active color must be 'w' or 'b', got '{field}'")


def _parse_castling_rights(field: str) -> CastlingRights:
    rights = CastlingRights.NONE
    if field == "-":
        return rights
    for c in field:
        right = _RIGHTS_BY_LETTER.get(c)
        if right is None:
            raise FenParseError(f"Invalid castling rights character: {c}")
        rights |= right
    return rights


def _parse_en_passant_square(field: str) -> int:
    if field == "-":
        return SQUARE_NONE
    sq = string_to_square(field)
    if sq is None:
        raise FenParseError(f"Invalid en passant square: {field}")
    if rank_of(sq) not in (RANK_3, RANK_6):
        raise FenParseError(f"En passant square must be on rank 3 or 6, got {field}")
    return sq


def _parse_halfmove_clock(field: str) -> int:
    if not _INTEGER.fullmatch(field):
        raise FenParseError(f"Halfmove clock must be an integer, got '{field}'")
    clock = int(field)
    if clock < 0:
        raise FenParseError(f"Halfmove clock must be non-negative, got {clock}")
    return clock


def _parse_fullmove_number(field: str) -> int:
    if not _INTEGER.fullmatch(field):
        raise FenParseError(f"Fullmove number must be an integer, got '{field}'")
    number = int(field)
    if number < 1:
        raise FenParseError(f"Fullmove number must be at least 1, got {number}")
    return number


def _serialize_piece_placement(position: Position) -> str:
    rows = []
    for rank in range(7, -1, -1):
        row = ""
        empty = 0
        for file in range(8):
            piece = position.piece_at(make_square(file, rank))
            if piece.is_empty():
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += piece.to_fen_char()
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def _serialize_castling_rights(rights: CastlingRights) -> str:
    if rights == CastlingRights.NONE:
        return "-"
    return "".join(letter for right, letter in _CASTLING_LETTERS if rights & right)