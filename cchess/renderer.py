"""Plain-text rendering of a board and its game state."""

from __future__ import annotations

from .board import Board
from .primitives import SQUARE_NONE, CastlingRights, Color, make_square
from .square import square_to_string

_COORDINATES = "  a b c d e f g h"

_CASTLING_LETTERS = (
    (CastlingRights.WHITE_KINGSIDE, "K"),
    (CastlingRights.WHITE_QUEENSIDE, "Q"),
    (CastlingRights.BLACK_KINGSIDE, "k"),
    (CastlingRights.BLACK_QUEENSIDE, "q"),
)


def _render_rank(board: Board, rank: int) -> str:
    return " ".join(
        board.position.piece_at(make_square(file, rank)).to_ascii() for file in range(8)
    )


def render(board: Board) -> str:
    """ASCII diagram with rank 8 at the top and coordinates on all sides."""
    lines = [_COORDINATES]
    for rank in range(7, -1, -1):
        lines.append(f"{rank + 1} {_render_rank(board, rank)} {rank + 1}")
    lines.append(_COORDINATES)
    return "\n".join(lines)


def render_position_info(board: Board) -> str:
    """Summary of FEN, side to move, castling, en passant and move counters."""
    rights = board.castling_rights
    if rights == CastlingRights.NONE:
        castling = "None"
    else:
        castling = "".join(letter for right, letter in _CASTLING_LETTERS if rights & right)
    ep = board.en_passant_square
    en_passant = "None" if ep == SQUARE_NONE else square_to_string(ep)
    side = "White" if board.side_to_move is Color.WHITE else "Black"
    return (
        "\nPosition Information:\n"
        f"  FEN: {board.to_fen()}\n"
        f"  Side to move: {side}\n"
        f"  Castling rights: {castling}\n"
        f"  En passant: {en_passant}\n"
        f"  Halfmove clock: {board.halfmove_clock}\n"
        f"  Fullmove number: {board.fullmove_number}\n"
    )