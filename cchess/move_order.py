"""Move ordering by most-valuable-victim / least-valuable-attacker and promotions."""

from __future__ import annotations

from collections.abc import Iterable

from .move import Move
from .position import Position
from .primitives import PieceType

# Piece values for ordering, indexed by PieceType.
MVV_LVA_VALUE = (100, 300, 300, 500, 900, 0)


def score_move(move: Move, pos: Position) -> int:
    """Ordering score for a move; higher scores are tried first."""
    score = 0
    if move.is_capture():
        if move.is_en_passant():
            score = MVV_LVA_VALUE[PieceType.PAWN] * 10
        else:
            victim = pos.piece_at(move.to_sq)
            attacker = pos.piece_at(move.from_sq)
            if victim.is_empty() or attacker.is_empty():
                raise ValueError(f"capture {move.to_algebraic()} does not match the position")
            score = MVV_LVA_VALUE[victim.piece_type] * 10 - MVV_LVA_VALUE[attacker.piece_type]
    if move.is_promotion():
        score += MVV_LVA_VALUE[move.promotion] * 10
    return score


def _sorted_by_score(moves: Iterable[Move], pos: Position) -> list[Move]:
    return sorted(moves, key=lambda m: score_move(m, pos), reverse=True)


def _matches(move: Move, tt_move: Move) -> bool:
    return (
        not tt_move.is_null()
        and move.from_sq == tt_move.from_sq
        and move.to_sq == tt_move.to_sq
        and move.promotion == tt_move.promotion
    )


def order_moves(moves: list[Move], pos: Position, tt_move: Move | None = None) -> list[Move]:
    """Return ``moves`` best-first; a move matching ``tt_move`` goes to the front."""
    ordered = list(moves)
    if tt_move is not None:
        for i, move in enumerate(ordered):
            if _matches(move, tt_move):
                ordered[0], ordered[i] = ordered[i], ordered[0]
                return [ordered[0], *_sorted_by_score(ordered[1:], pos)]
    return _sorted_by_score(ordered, pos)


def extract_captures(moves: Iterable[Move], pos: Position, max_out: int = 256) -> list[Move]:
    """The first ``max_out`` captures and promotions in ``moves``, best-first."""
    tactical: list[Move] = []
    for move in moves:
        if len(tactical) >= max_out:
            break
        if move.is_capture() or move.is_promotion():
            tactical.append(move)
    return _sorted_by_score(tactical, pos)