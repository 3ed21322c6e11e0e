"""Standard Algebraic Notation for moves."""

from __future__ import annotations

from .board import Board
from .move import Move
from .primitives import PieceType, file_of, rank_of
from .square import file_to_char, rank_to_char, square_to_string

_PIECE_LETTERS = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def _check_suffix(board: Board, move: Move) -> str:
    after = board.copy()
    after.make_move_unchecked(move)
    if not after.is_in_check():
        return ""
    return "#" if after.is_checkmate() else "+"


def move_to_san(board: Board, move: Move) -> str:
    """SAN text for ``move`` such as 'Nf3', 'exd5', 'O-O' or 'e8=Q+'.

    ``board`` must hold the position before the move is played.
    """
    if move.is_null():
        return "--"

    if move.is_castling():
        san = "O-O" if file_of(move.to_sq) > file_of(move.from_sq) else "O-O-O"
        return san + _check_suffix(board, move)

    pos = board.position
    piece_type = pos.piece_at(move.from_sq).piece_type
    from_sq, to_sq = move.from_sq, move.to_sq

    if piece_type is PieceType.PAWN:
        san = ""
        if move.is_capture():
            san += file_to_char(file_of(from_sq)) + "x"
        san += square_to_string(to_sq)
        if move.is_promotion():
            san += "=" + _PIECE_LETTERS.get(move.promotion, "Q")
    else:
        san = _PIECE_LETTERS.get(piece_type, "?")
        need_file = need_rank = ambiguous = False
        for other in board.legal_moves():
            if other.from_sq == from_sq or other.to_sq != to_sq:
                continue
            if pos.piece_at(other.from_sq).piece_type is not piece_type:
                continue
            ambiguous = True
            if file_of(other.from_sq) == file_of(from_sq):
                need_rank = True
            if rank_of(other.from_sq) == rank_of(from_sq):
                need_file = True
        if ambiguous and not need_file and not need_rank:
            need_file = True
        if need_file:
            san += file_to_char(file_of(from_sq))
        if need_rank:
            san += rank_to_char(rank_of(from_sq))
        if move.is_capture():
            san += "x"
        san += square_to_string(to_sq)

    return san + _check_suffix(board, move)