"""Precomputed attack sets for leaping pieces and ray-based sliding attacks."""

from __future__ import annotations

from .bitboard import lsb, msb, square_bb
from .primitives import file_of, make_square, rank_of

_KNIGHT_OFFSETS = ((2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2))
_KING_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (1, -1), (-1, 1), (-1, -1))

_ROOK_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))
_BISHOP_DIRECTIONS = ((1, 1), (1, -1), (-1, 1), (-1, -1))


def _on_board(file: int, rank: int) -> bool:
    return 0 <= file <= 7 and 0 <= rank <= 7


def _leaper_table(offsets: tuple[tuple[int, int], ...]) -> tuple[int, ...]:
    table = []
    for sq in range(64):
        f, r = file_of(sq), rank_of(sq)
        bb = 0
        for df, dr in offsets:
            if _on_board(f + df, r + dr):
                bb |= square_bb(make_square(f + df, r + dr))
        table.append(bb)
    return tuple(table)


def _ray(sq: int, df: int, dr: int) -> int:
    bb = 0
    f, r = file_of(sq) + df, rank_of(sq) + dr
    while _on_board(f, r):
        bb |= square_bb(make_square(f, r))
        f += df
        r += dr
    return bb


def _ray_tables(directions: tuple[tuple[int, int], ...]) -> tuple[tuple[tuple[int, ...], bool], ...]:
    # Each entry: rays from every square in one direction, and whether the
    # direction runs toward higher square indices (nearest blocker = lowest bit).
    return tuple(
        (tuple(_ray(sq, df, dr) for sq in range(64)), dr * 8 + df > 0) for df, dr in directions
    )


KNIGHT_ATTACKS = _leaper_table(_KNIGHT_OFFSETS)
KING_ATTACKS = _leaper_table(_KING_OFFSETS)

_ROOK_RAYS = _ray_tables(_ROOK_DIRECTIONS)
_BISHOP_RAYS = _ray_tables(_BISHOP_DIRECTIONS)


def _slide(sq: int, occupied: int, rays: tuple[tuple[tuple[int, ...], bool], ...]) -> int:
    attacks = 0
    for table, increasing in rays:
        ray = table[sq]
        blockers = ray & occupied
        if blockers:
            blocker = lsb(blockers) if increasing else msb(blockers)
            ray ^= table[blocker]
        attacks |= ray
    return attacks


def rook_attacks(sq: int, occupied: int) -> int:
    """Squares a rook on ``sq`` attacks, stopping at (and including) blockers."""
    return _slide(sq, occupied, _ROOK_RAYS)


def bishop_attacks(sq: int, occupied: int) -> int:
    """Squares a bishop on ``sq`` attacks, stopping at (and including) blockers."""
    return _slide(sq, occupied, _BISHOP_RAYS)