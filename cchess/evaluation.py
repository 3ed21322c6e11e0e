"""Static evaluation: material, piece-square tables and positional terms, tapered by phase."""

from __future__ import annotations

from dataclasses import dataclass

from .attacks import KNIGHT_ATTACKS, bishop_attacks, rook_attacks
from .bitboard import (
    BB_ALL,
    FILE_A_BB,
    FILE_B_BB,
    FILE_BB,
    FILE_C_BB,
    FILE_D_BB,
    FILE_E_BB,
    FILE_F_BB,
    FILE_G_BB,
    FILE_H_BB,
    RANK_BB,
    iter_squares,
    pop_count,
    shift_north_east,
    shift_north_west,
    shift_south_east,
    shift_south_west,
)
from .position import Position
from .primitives import Color, PieceType, file_of, rank_of

SCORE_MATE = 100000
SCORE_INFINITY = 200000
SCORE_DRAW = 0


@dataclass(frozen=True)
class Score:
    """A middlegame/endgame score pair used for tapered evaluation."""

    mg: int = 0
    eg: int = 0

    def __add__(self, other: Score) -> Score:
        return Score(self.mg + other.mg, self.eg + other.eg)

    def __sub__(self, other: Score) -> Score:
        return Score(self.mg - other.mg, self.eg - other.eg)

    def __neg__(self) -> Score:
        return Score(-self.mg, -self.eg)

    def __mul__(self, n: int) -> Score:
        return Score(n * self.mg, n * self.eg)

    __rmul__ = __mul__


def _table(rows: list[tuple[int, int]]) -> tuple[Score, ...]:
    return tuple(Score(mg, eg) for mg, eg in rows)


MATERIAL_VALUE = _table([(82, 94), (337, 281), (365, 297), (477, 512), (1025, 936), (0, 0)])

# Piece-square tables from White's point of view (a1 = index 0).
# Black squares are mirrored with ``sq ^ 56``.
_PAWN_PST = _table([
    (0, 0), (0, 0), (0, 0), (0, 0), (0, 0), (0, 0), (0, 0), (0, 0),
    (-35, 13), (-1, 8), (-20, 8), (-23, -11), (-15, -1), (24, -2), (38, 6), (-22, -7),
    (-26, 4), (-4, 7), (-4, -6), (-10, 1), (3, 0), (3, -5), (33, -1), (-12, -8),
    (-27, 13), (-2, 9), (-5, -3), (12, -7), (17, -7), (6, -8), (10, 3), (-25, -1),
    (-14, 32), (13, 24), (6, 13), (21, 5), (23, -2), (12, 4), (17, 17), (-23, 17),
    (-6, 94), (7, 100), (26, 85), (31, 67), (65, 56), (56, 53), (25, 82), (-20, 84),
    (98, 178), (134, 173), (61, 158), (95, 134), (68, 147), (126, 132), (34, 165), (-11, 187),
    (0, 0), (0, 0), (0, 0), (0, 0), (0, 0), (0, 0), (0, 0), (0, 0),
])

_KNIGHT_PST = _table([
    (-105, -29), (-21, -51), (-58, -23), (-33, -15), (-17, -22), (-28, -18), (-19, -50), (-23, -64),
    (-29, -42), (-53, -20), (-12, -10), (-3, -5), (-1, -2), (18, -20), (-14, -23), (-19, -44),
    (-23, -23), (-9, -3), (12, -1), (10, 15), (19, 10), (17, -3), (25, -20), (-16, -22),
    (-13, -18), (4, -6), (16, 16), (13, 25), (28, 16), (19, 17), (21, 4), (-8, -18),
    (-9, -17), (17, 3), (19, 22), (53, 22), (37, 22), (69, 11), (18, 8), (22, -18),
    (-47, -24), (60, -20), (37, 10), (65, 9), (84, -1), (129, -9), (73, -19), (44, -41),
    (-73, -25), (-41, -8), (72, -25), (36, -2), (23, -9), (62, -25), (7, -24), (-17, -52),
    (-167, -58), (-89, -38), (-34, -13), (-49, -28), (61, -31), (-97, -27), (-15, -63), (-107, -99),
])

_BISHOP_PST = _table([
    (-33, -23), (-3, -9), (-14, -23), (-21, -5), (-13, -9), (-12, -16), (-39, -5), (-21, -17),
    (4, -14), (15, -18), (16, -7), (0, -1), (7, 4), (21, -9), (33, -15), (1, -27),
    (0, -12), (15, -3), (15, 8), (15, 10), (14, 13), (27, 3), (18, -7), (10, -15),
    (-6, -6), (13, 3), (13, 13), (26, 19), (34, 7), (12, 10), (10, -3), (4, -9),
    (-4, -3), (5, 9), (19, 12), (50, 9), (37, 14), (37, 10), (7, 3), (-2, 2),
    (-16, 2), (37, -8), (43, 0), (40, -1), (35, -2), (50, 6), (37, 0), (-2, 4),
    (-26, -8), (16, -4), (-18, 7), (-13, -12), (30, -3), (59, -13), (18, -4), (-47, -14),
    (-29, -14), (4, -21), (-82, -11), (-37, -8), (-25, -7), (-42, -9), (7, -17), (-8, -24),
])

_ROOK_PST = _table([
    (-19, -9), (-13, 2), (1, 3), (17, -1), (16, -5), (7, -13), (-37, 4), (-26, -20),
    (-44, -6), (-16, -6), (-20, 0), (-9, 2), (-1, -9), (11, -9), (-6, -11), (-71, -3),
    (-45, -4), (-25, 0), (-16, -5), (-17, -1), (3, -7), (0, -12), (-5, -8), (-33, -16),
    (-36, 3), (-26, 5), (-12, 8), (-1, 4), (9, -5), (-7, -6), (6, -8), (-23, -11),
    (-24, 4), (-11, 3), (7, 13), (26, 1), (24, 2), (35, 1), (-8, -1), (-20, 2),
    (-5, 7), (19, 7), (26, 7), (36, 5), (17, 4), (45, -3), (61, -5), (16, -3),
    (27, 11), (32, 13), (58, 13), (62, 11), (80, -3), (67, 3), (26, 8), (44, 3),
    (32, 13), (42, 10), (32, 18), (51, 15), (63, 12), (9, 12), (31, 8), (43, 5),
])

_QUEEN_PST = _table([
    (-1, -33), (-18, -28), (-9, -22), (10, -43), (-15, -5), (-25, -32), (-31, -20), (-50, -41),
    (-35, -22), (-8, -23), (11, -30), (2, -16), (8, -16), (15, -23), (-3, -36), (1, -32),
    (-14, -16), (2, -27), (-11, 15), (-2, 6), (-5, 9), (2, 17), (14, 10), (5, 5),
    (-9, -18), (-26, 28), (-9, 19), (-10, 47), (-2, 31), (-4, 34), (3, 39), (-3, 23),
    (-27, 3), (-27, 22), (-16, 24), (-16, 45), (-1, 57), (17, 40), (-2, 57), (1, 36),
    (-13, -20), (-17, 6), (7, 9), (8, 49), (29, 47), (56, 35), (47, 19), (57, 9),
    (-24, -17), (-39, 20), (-5, 32), (1, 41), (-16, 58), (57, 25), (28, 30), (54, 0),
    (-28, -9), (0, 22), (29, 22), (12, 27), (59, 27), (44, 19), (43, 10), (45, 20),
])

_KING_PST = _table([
    (-15, -53), (36, -34), (12, -21), (-54, -11), (8, -28), (-28, -14), (24, -24), (14, -43),
    (1, -27), (7, -11), (-8, 4), (-64, 13), (-43, 14), (-16, 4), (9, -5), (8, -17),
    (-14, -19), (-14, -3), (-22, 11), (-46, 21), (-44, 23), (-30, 16), (-15, 7), (-27, -9),
    (-49, -18), (-1, -4), (-27, 21), (-39, 24), (-46, 27), (-44, 23), (-33, 9), (-51, -11),
    (-17, -8), (-20, 22), (-12, 24), (-27, 27), (-30, 26), (-25, 33), (-14, 26), (-36, 3),
    (-9, 10), (24, 17), (2, 23), (-16, 15), (-20, 20), (6, 45), (22, 44), (-22, 13),
    (29, -12), (-1, 17), (-20, 14), (-7, 17), (-8, 17), (-4, 38), (-38, 23), (-29, 11),
    (-65, -74), (23, -35), (16, -18), (-15, -18), (-56, -11), (-34, 15), (2, 4), (13, -17),
])

PST = (_PAWN_PST, _KNIGHT_PST, _BISHOP_PST, _ROOK_PST, _QUEEN_PST, _KING_PST)

PHASE_WEIGHT = (0, 1, 1, 2, 4, 0)
TOTAL_PHASE = 24

ADJ_FILES = (
    FILE_B_BB,
    FILE_A_BB | FILE_C_BB,
    FILE_B_BB | FILE_D_BB,
    FILE_C_BB | FILE_E_BB,
    FILE_D_BB | FILE_F_BB,
    FILE_E_BB | FILE_G_BB,
    FILE_F_BB | FILE_H_BB,
    FILE_G_BB,
)

BISHOP_PAIR_BONUS = Score(30, 40)
DOUBLED_PAWN_PENALTY = Score(-10, -15)
ISOLATED_PAWN_PENALTY = Score(-15, -20)
PASSED_PAWN_BONUS = _table(
    [(0, 0), (5, 10), (10, 20), (20, 35), (35, 55), (60, 90), (100, 150), (0, 0)]
)
ROOK_OPEN_FILE_BONUS = Score(15, 10)
ROOK_SEMI_OPEN_FILE_BONUS = Score(8, 5)

# Mobility weight per move above or below a baseline count.
_MOBILITY = {
    PieceType.KNIGHT: (Score(4, 4), 4),
    PieceType.BISHOP: (Score(3, 3), 7),
    PieceType.ROOK: (Score(2, 2), 7),
    PieceType.QUEEN: (Score(1, 1), 14),
}

_PIECE_TYPES = tuple(pt for pt in PieceType if pt is not PieceType.NONE)


def material_and_pst(pos: Position) -> Score:
    """Material plus piece-square values, White minus Black."""
    score = Score()
    for pt in _PIECE_TYPES:
        material = MATERIAL_VALUE[pt]
        table = PST[pt]
        for sq in iter_squares(pos.pieces(pt, Color.WHITE)):
            score += material + table[sq]
        for sq in iter_squares(pos.pieces(pt, Color.BLACK)):
            score -= material + table[sq ^ 56]
    return score


def game_phase(pos: Position) -> int:
    """Phase from 0 (bare endgame) to 24 (all minor and major pieces present)."""
    phase = 0
    for pt in (PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN):
        phase += PHASE_WEIGHT[pt] * pop_count(pos.pieces(pt, Color.WHITE))
        phase += PHASE_WEIGHT[pt] * pop_count(pos.pieces(pt, Color.BLACK))
    return min(phase, TOTAL_PHASE)


def bishop_pair(pos: Position) -> Score:
    score = Score()
    if pop_count(pos.pieces(PieceType.BISHOP, Color.WHITE)) >= 2:
        score += BISHOP_PAIR_BONUS
    if pop_count(pos.pieces(PieceType.BISHOP, Color.BLACK)) >= 2:
        score -= BISHOP_PAIR_BONUS
    return score


def pawn_structure(wp: int, bp: int) -> Score:
    """Penalties for doubled and isolated pawns, White minus Black."""
    score = Score()
    for file_mask, adjacent in zip(FILE_BB, ADJ_FILES):
        w_count = pop_count(wp & file_mask)
        b_count = pop_count(bp & file_mask)
        if w_count > 1:
            score += (w_count - 1) * DOUBLED_PAWN_PENALTY
        if b_count > 1:
            score -= (b_count - 1) * DOUBLED_PAWN_PENALTY
        if w_count and not wp & adjacent:
            score += w_count * ISOLATED_PAWN_PENALTY
        if b_count and not bp & adjacent:
            score -= b_count * ISOLATED_PAWN_PENALTY
    return score


def passed_pawns(wp: int, bp: int) -> Score:
    """Bonus for pawns with no enemy pawn ahead on their own or adjacent files."""
    score = Score()
    for sq in iter_squares(wp):
        f, r = file_of(sq), rank_of(sq)
        mask = FILE_BB[f] | ADJ_FILES[f]
        for ahead_not in RANK_BB[: r + 1]:
            mask &= ~ahead_not
        if not bp & mask:
            score += PASSED_PAWN_BONUS[r]
    for sq in iter_squares(bp):
        f, r = file_of(sq), rank_of(sq)
        mask = FILE_BB[f] | ADJ_FILES[f]
        for ahead_not in RANK_BB[r:]:
            mask &= ~ahead_not
        if not wp & mask:
            score -= PASSED_PAWN_BONUS[7 - r]
    return score


def rook_open_files(pos: Position, wp: int, bp: int) -> Score:
    """Bonus for rooks on files free of own pawns (more if free of all pawns)."""
    score = Score()
    for sq in iter_squares(pos.pieces(PieceType.ROOK, Color.WHITE)):
        file_mask = FILE_BB[file_of(sq)]
        if not wp & file_mask:
            score += ROOK_SEMI_OPEN_FILE_BONUS if bp & file_mask else ROOK_OPEN_FILE_BONUS
    for sq in iter_squares(pos.pieces(PieceType.ROOK, Color.BLACK)):
        file_mask = FILE_BB[file_of(sq)]
        if not bp & file_mask:
            score -= ROOK_SEMI_OPEN_FILE_BONUS if wp & file_mask else ROOK_OPEN_FILE_BONUS
    return score


def _attacks(pt: PieceType, sq: int, occupied: int) -> int:
    if pt is PieceType.KNIGHT:
        return KNIGHT_ATTACKS[sq]
    if pt is PieceType.BISHOP:
        return bishop_attacks(sq, occupied)
    if pt is PieceType.ROOK:
        return rook_attacks(sq, occupied)
    return rook_attacks(sq, occupied) | bishop_attacks(sq, occupied)


def mobility(pos: Position) -> Score:
    """Piece mobility into squares not held by friends nor attacked by enemy pawns."""
    score = Score()
    occupied = pos.occupied()
    white_pawns = pos.pieces(PieceType.PAWN, Color.WHITE)
    black_pawns = pos.pieces(PieceType.PAWN, Color.BLACK)
    w_pawn_attacks = shift_north_east(white_pawns) | shift_north_west(white_pawns)
    b_pawn_attacks = shift_south_east(black_pawns) | shift_south_west(black_pawns)
    w_area = BB_ALL & ~(pos.pieces(color=Color.WHITE) | b_pawn_attacks)
    b_area = BB_ALL & ~(pos.pieces(color=Color.BLACK) | w_pawn_attacks)

    for pt, (weight, baseline) in _MOBILITY.items():
        for sq in iter_squares(pos.pieces(pt, Color.WHITE)):
            count = pop_count(_attacks(pt, sq, occupied) & w_area)
            score += (count - baseline) * weight
        for sq in iter_squares(pos.pieces(pt, Color.BLACK)):
            count = pop_count(_attacks(pt, sq, occupied) & b_area)
            score -= (count - baseline) * weight
    return score


def _divide_toward_zero(n: int, d: int) -> int:
    q = abs(n) // d
    return q if n >= 0 else -q


def evaluate(pos: Position) -> int:
    """Tapered evaluation in centipawns, relative to the side to move."""
    wp = pos.pieces(PieceType.PAWN, Color.WHITE)
    bp = pos.pieces(PieceType.PAWN, Color.BLACK)
    score = (
        material_and_pst(pos)
        + bishop_pair(pos)
        + pawn_structure(wp, bp)
        + passed_pawns(wp, bp)
        + rook_open_files(pos, wp, bp)
        + mobility(pos)
    )
    phase = game_phase(pos)
    tapered = _divide_toward_zero(score.mg * phase + score.eg * (TOTAL_PHASE - phase), TOTAL_PHASE)
    return tapered if pos.side_to_move is Color.WHITE else -tapered