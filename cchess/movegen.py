"""Pseudo-legal and legal move generation, attack detection and game-end checks."""

from __future__ import annotations

from collections.abc import Iterator

from .attacks import KING_ATTACKS, KNIGHT_ATTACKS, bishop_attacks, rook_attacks
from .bitboard import (
    iter_squares,
    shift_north_east,
    shift_north_west,
    shift_south_east,
    shift_south_west,
    square_bb,
    test_bit,
)
from .move import Move, MoveType
from .position import Position
from .primitives import (
    FILE_B,
    FILE_C,
    FILE_D,
    FILE_F,
    FILE_G,
    RANK_1,
    RANK_2,
    RANK_7,
    RANK_8,
    SQUARE_NONE,
    CastlingRights,
    Color,
    PieceType,
    file_of,
    make_square,
    rank_of,
)

_PROMOTION_ORDER = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)


# ----------------------------------------------------------------------
# Per-piece generators (pseudo-legal)
# ----------------------------------------------------------------------


def _pawn_diagonals(
    pos: Position, from_sq: int, us: Color, target_rank: int, promotion_rank: int
) -> Iterator[Move]:
    enemies = pos.pieces(color=us.opponent())
    for df in (-1, 1):
        f = file_of(from_sq) + df
        if not 0 <= f <= 7:
            continue
        to_sq = make_square(f, target_rank)
        if test_bit(enemies, to_sq):
            if target_rank == promotion_rank:
                for pt in _PROMOTION_ORDER:
                    yield Move.make_promotion_capture(from_sq, to_sq, pt)
            else:
                yield Move(from_sq, to_sq, MoveType.CAPTURE)
        if to_sq == pos.en_passant_square:
            yield Move.make_en_passant(from_sq, to_sq)


def _pawn_geometry(us: Color) -> tuple[int, int, int]:
    if us is Color.WHITE:
        return 1, RANK_2, RANK_8
    return -1, RANK_7, RANK_1


def _pawn_moves(pos: Position, from_sq: int) -> Iterator[Move]:
    us = pos.piece_at(from_sq).color
    direction, start_rank, promotion_rank = _pawn_geometry(us)
    from_file, from_rank = file_of(from_sq), rank_of(from_sq)
    target_rank = from_rank + direction
    if not 0 <= target_rank <= 7:
        return

    occupied = pos.occupied()
    to_sq = make_square(from_file, target_rank)
    if not test_bit(occupied, to_sq):
        if target_rank == promotion_rank:
            for pt in _PROMOTION_ORDER:
                yield Move.make_promotion(from_sq, to_sq, pt)
        else:
            yield Move(from_sq, to_sq, MoveType.NORMAL)
            if from_rank == start_rank:
                double_to = make_square(from_file, target_rank + direction)
                if not test_bit(occupied, double_to):
                    yield Move(from_sq, double_to, MoveType.NORMAL)

    yield from _pawn_diagonals(pos, from_sq, us, target_rank, promotion_rank)


def _pawn_captures(pos: Position, from_sq: int) -> Iterator[Move]:
    us = pos.piece_at(from_sq).color
    direction, _start, promotion_rank = _pawn_geometry(us)
    target_rank = rank_of(from_sq) + direction
    if not 0 <= target_rank <= 7:
        return

    # Non-capturing promotions count as tactical moves.
    if target_rank == promotion_rank:
        to_sq = make_square(file_of(from_sq), target_rank)
        if not test_bit(pos.occupied(), to_sq):
            for pt in _PROMOTION_ORDER:
                yield Move.make_promotion(from_sq, to_sq, pt)

    yield from _pawn_diagonals(pos, from_sq, us, target_rank, promotion_rank)


def _piece_attacks(piece_type: PieceType, sq: int, occupied: int) -> int:
    if piece_type is PieceType.KNIGHT:
        return KNIGHT_ATTACKS[sq]
    if piece_type is PieceType.BISHOP:
        return bishop_attacks(sq, occupied)
    if piece_type is PieceType.ROOK:
        return rook_attacks(sq, occupied)
    if piece_type is PieceType.QUEEN:
        return rook_attacks(sq, occupied) | bishop_attacks(sq, occupied)
    if piece_type is PieceType.KING:
        return KING_ATTACKS[sq]
    return 0


def _piece_moves(pos: Position, from_sq: int) -> Iterator[Move]:
    piece = pos.piece_at(from_sq)
    targets = _piece_attacks(piece.piece_type, from_sq, pos.occupied())
    targets &= ~pos.pieces(color=piece.color)
    captures = targets & pos.pieces(color=piece.color.opponent())
    quiets = targets ^ captures
    for to_sq in iter_squares(captures):
        yield Move(from_sq, to_sq, MoveType.CAPTURE)
    for to_sq in iter_squares(quiets):
        yield Move(from_sq, to_sq, MoveType.NORMAL)


def _castling_moves(pos: Position) -> Iterator[Move]:
    us = pos.side_to_move
    king_sq = pos.king_square(us)
    if king_sq == SQUARE_NONE or is_in_check(pos, us):
        return

    them = us.opponent()
    occupied = pos.occupied()
    rank = RANK_1 if us is Color.WHITE else RANK_8
    rights = pos.castling_rights

    kingside = CastlingRights.WHITE_KINGSIDE if us is Color.WHITE else CastlingRights.BLACK_KINGSIDE
    if rights & kingside:
        f_sq = make_square(FILE_F, rank)
        g_sq = make_square(FILE_G, rank)
        if not test_bit(occupied, f_sq) and not test_bit(occupied, g_sq):
            if not is_square_attacked(pos, f_sq, them) and not is_square_attacked(pos, g_sq, them):
                yield Move.make_castling(king_sq, g_sq)

    queenside = (
        CastlingRights.WHITE_QUEENSIDE if us is Color.WHITE else CastlingRights.BLACK_QUEENSIDE
    )
    if rights & queenside:
        d_sq = make_square(FILE_D, rank)
        c_sq = make_square(FILE_C, rank)
        b_sq = make_square(FILE_B, rank)
        if not any(test_bit(occupied, sq) for sq in (d_sq, c_sq, b_sq)):
            if not is_square_attacked(pos, d_sq, them) and not is_square_attacked(pos, c_sq, them):
                yield Move.make_castling(king_sq, c_sq)


# ----------------------------------------------------------------------
# Pseudo-legal generation
# ----------------------------------------------------------------------


def generate_pseudo_legal_moves(pos: Position) -> list[Move]:
    """All moves for the side to move, ignoring whether they leave the king in check."""
    moves: list[Move] = []
    for sq in iter_squares(pos.pieces(color=pos.side_to_move)):
        if pos.piece_at(sq).piece_type is PieceType.PAWN:
            moves.extend(_pawn_moves(pos, sq))
        else:
            moves.extend(_piece_moves(pos, sq))
    moves.extend(_castling_moves(pos))
    return moves


def generate_pseudo_legal_captures(pos: Position) -> list[Move]:
    """Captures and promotions only, ignoring king safety."""
    moves: list[Move] = []
    us = pos.side_to_move
    occupied = pos.occupied()
    enemies = pos.pieces(color=us.opponent())
    for sq in iter_squares(pos.pieces(color=us)):
        piece_type = pos.piece_at(sq).piece_type
        if piece_type is PieceType.PAWN:
            moves.extend(_pawn_captures(pos, sq))
        else:
            targets = _piece_attacks(piece_type, sq, occupied) & enemies
            moves.extend(Move(sq, to_sq, MoveType.CAPTURE) for to_sq in iter_squares(targets))
    return moves


# ----------------------------------------------------------------------
# Check detection
# ----------------------------------------------------------------------


def is_square_attacked(pos: Position, sq: int, by_color: Color) -> bool:
    """True if any piece of ``by_color`` attacks ``sq``."""
    if KNIGHT_ATTACKS[sq] & pos.pieces(PieceType.KNIGHT, by_color):
        return True
    if KING_ATTACKS[sq] & pos.pieces(PieceType.KING, by_color):
        return True

    pawns = pos.pieces(PieceType.PAWN, by_color)
    if pawns:
        if by_color is Color.WHITE:
            pawn_attacks = shift_north_east(pawns) | shift_north_west(pawns)
        else:
            pawn_attacks = shift_south_east(pawns) | shift_south_west(pawns)
        if pawn_attacks & square_bb(sq):
            return True

    occupied = pos.occupied()
    queens = pos.pieces(PieceType.QUEEN, by_color)
    if bishop_attacks(sq, occupied) & (pos.pieces(PieceType.BISHOP, by_color) | queens):
        return True
    if rook_attacks(sq, occupied) & (pos.pieces(PieceType.ROOK, by_color) | queens):
        return True
    return False


def is_in_check(pos: Position, side: Color) -> bool:
    """True if the king of ``side`` is attacked."""
    king_sq = pos.king_square(side)
    return king_sq != SQUARE_NONE and is_square_attacked(pos, king_sq, side.opponent())


def move_leaves_king_in_check(pos: Position, move: Move) -> bool:
    """Play ``move`` temporarily and report whether the mover's king is attacked."""
    us = pos.side_to_move
    undo = pos.make_move(move)
    try:
        return is_in_check(pos, us)
    finally:
        pos.unmake_move(move, undo)


# ----------------------------------------------------------------------
# Legal generation
# ----------------------------------------------------------------------


def generate_legal_moves(pos: Position) -> list[Move]:
    """All legal moves for the side to move."""
    return [m for m in generate_pseudo_legal_moves(pos) if not move_leaves_king_in_check(pos, m)]


def generate_legal_captures(pos: Position) -> list[Move]:
    """Legal captures and promotions for the side to move."""
    return [
        m for m in generate_pseudo_legal_captures(pos) if not move_leaves_king_in_check(pos, m)
    ]


def is_legal(pos: Position, move: Move) -> bool:
    """True if ``move`` is exactly one of the legal moves in ``pos``."""
    if move not in generate_pseudo_legal_moves(pos):
        return False
    return not move_leaves_king_in_check(pos, move)


# ----------------------------------------------------------------------
# Game state
# ----------------------------------------------------------------------


def is_checkmate(pos: Position) -> bool:
    return is_in_check(pos, pos.side_to_move) and not generate_legal_moves(pos)


def is_stalemate(pos: Position) -> bool:
    return not is_in_check(pos, pos.side_to_move) and not generate_legal_moves(pos)


def is_draw(pos: Position) -> bool:
    """Draw by the fifty-move rule (halfmove clock of 100 or more)."""
    return pos.halfmove_clock >= 100