"""Iterative-deepening alpha-beta search with PVS, null-move pruning and LMR."""

from __future__ import annotations

import math
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from .board import Board
from .evaluation import SCORE_DRAW, SCORE_INFINITY, SCORE_MATE, evaluate
from .move import Move
from .move_order import order_moves
from .transposition import TranspositionTable, TTBound, score_from_tt, score_to_tt

_MAX_LMR_DEPTH = 64
_MAX_LMR_MOVES = 64
_NMP_REDUCTION = 2


def _build_lmr_table() -> tuple[tuple[int, ...], ...]:
    return tuple(
        tuple(
            0 if d == 0 or m == 0 else int(math.log(d) * math.log(m) / 2.0)
            for m in range(_MAX_LMR_MOVES)
        )
        for d in range(_MAX_LMR_DEPTH)
    )


# Late move reductions indexed by [depth][move index].
_LMR_TABLE = _build_lmr_table()


@dataclass
class SearchConfig:
    """Limits for one search: time budget, depth cap and an optional external stop."""

    search_time_ms: int = 1000
    max_depth: int = 64
    stop_signal: threading.Event | None = None


@dataclass
class SearchInfo:
    """Progress report sent after each completed iteration."""

    depth: int = 0
    score: int = 0
    nodes: int = 0
    time_ms: int = 0
    pv: list[Move] = field(default_factory=list)


InfoCallback = Callable[[SearchInfo], None]


class Search:
    """Finds the best move for the side to move on a private copy of a board."""

    def __init__(
        self,
        board: Board,
        config: SearchConfig,
        tt: TranspositionTable,
        info_callback: InfoCallback | None = None,
        game_history: Iterable[int] = (),
    ) -> None:
        self._board = board.copy()
        self._config = config
        self._tt = tt
        self._info_callback = info_callback
        self._game_history = list(game_history)
        self._search_stack: list[int] = []
        self._start = 0.0
        self._stopped = False
        self._nodes = 0

    def total_nodes(self) -> int:
        return self._nodes

    # ------------------------------------------------------------------
    # Root
    # ------------------------------------------------------------------

    def find_best_move(self) -> Move:
        """Iteratively deepen until the depth cap, time limit or a forced mate."""
        self._start = time.monotonic()
        self._stopped = False
        self._nodes = 0
        self._tt.new_search()
        best_move = Move.null()
        board = self._board

        for depth in range(1, self._config.max_depth + 1):
            alpha, beta = -SCORE_INFINITY, SCORE_INFINITY
            depth_best = Move.null()
            best_score = -SCORE_INFINITY

            moves = board.legal_moves()
            if not moves:
                break

            root_hash = board.position.hash_key
            entry = self._tt.probe(root_hash)
            moves = order_moves(moves, board.position, entry.best_move if entry else None)

            for i, move in enumerate(moves):
                self._search_stack.append(root_hash)
                undo = board.make_move_unchecked(move)
                self._nodes += 1
                gives_check = board.is_in_check()

                if i == 0:
                    score = -self._negamax(depth - 1, -beta, -alpha, 1, gives_check)
                else:
                    score = -self._negamax(depth - 1, -alpha - 1, -alpha, 1, gives_check)
                    if alpha < score < beta:
                        score = -self._negamax(depth - 1, -beta, -alpha, 1, gives_check)

                board.unmake_move(move, undo)
                self._search_stack.pop()

                if self._stopped:
                    break
                if score > best_score:
                    best_score = score
                    depth_best = move
                alpha = max(alpha, score)

            if self._stopped:
                break

            best_move = depth_best
            self._tt.store(root_hash, score_to_tt(best_score, 0), depth, TTBound.EXACT, best_move)

            if self._info_callback is not None:
                self._info_callback(
                    SearchInfo(
                        depth=depth,
                        score=best_score,
                        nodes=self._nodes,
                        time_ms=int((time.monotonic() - self._start) * 1000),
                        pv=self._extract_pv(depth),
                    )
                )

            if best_score >= SCORE_MATE - self._config.max_depth:
                break

        return best_move

    # ------------------------------------------------------------------
    # Interior nodes
    # ------------------------------------------------------------------

    def _negamax(
        self, depth: int, alpha: int, beta: int, ply: int, in_check: bool, null_ok: bool = True
    ) -> int:
        if self._nodes & 1023 == 0:
            self._check_time()
        if self._stopped:
            return 0

        board = self._board
        if board.is_draw() or self._is_repetition():
            return SCORE_DRAW

        if depth == 0:
            return self._quiescence(alpha, beta, ply)

        is_pv_node = beta - alpha > 1
        pos_hash = board.position.hash_key
        tt_move: Move | None = None
        entry = self._tt.probe(pos_hash)
        if entry is not None:
            tt_move = entry.best_move
            if entry.depth >= depth and not is_pv_node:
                tt_score = score_from_tt(entry.score, ply)
                bound = entry.bound()
                if (
                    bound is TTBound.EXACT
                    or (bound is TTBound.LOWER and tt_score >= beta)
                    or (bound is TTBound.UPPER and tt_score <= alpha)
                ):
                    self._tt.stats.cutoffs += 1
                    return tt_score

        # Null move pruning: if passing still beats beta, this node is too good to need.
        if null_ok and not is_pv_node and not in_check and depth >= 3:
            prev_ep = board.en_passant_square
            prev_hash = board.position.hash_key
            board.make_null_move()
            null_score = -self._negamax(
                depth - 1 - _NMP_REDUCTION, -beta, -beta + 1, ply + 1, False, False
            )
            board.unmake_null_move(prev_ep, prev_hash)
            if self._stopped:
                return 0
            if null_score >= beta:
                return beta

        moves = board.legal_moves()
        if not moves:
            return -(SCORE_MATE - ply) if in_check else SCORE_DRAW

        moves = order_moves(moves, board.position, tt_move)

        best_score = -SCORE_INFINITY
        best_in_node = Move.null()
        orig_alpha = alpha

        for i, move in enumerate(moves):
            self._search_stack.append(pos_hash)
            undo = board.make_move_unchecked(move)
            self._nodes += 1
            gives_check = board.is_in_check()

            if i == 0:
                score = -self._negamax(depth - 1, -beta, -alpha, ply + 1, gives_check)
            else:
                reduction = 0
                if (
                    depth >= 3
                    and i >= 2
                    and not in_check
                    and not gives_check
                    and not move.is_capture()
                    and not move.is_promotion()
                ):
                    di = min(depth, _MAX_LMR_DEPTH - 1)
                    mi = min(i, _MAX_LMR_MOVES - 1)
                    reduction = _LMR_TABLE[di][mi]
                    if reduction >= depth - 1:
                        reduction = depth - 2

                score = -self._negamax(
                    depth - 1 - reduction, -alpha - 1, -alpha, ply + 1, gives_check
                )
                if reduction > 0 and score > alpha:
                    score = -self._negamax(depth - 1, -alpha - 1, -alpha, ply + 1, gives_check)
                if alpha < score < beta:
                    score = -self._negamax(depth - 1, -beta, -alpha, ply + 1, gives_check)

            board.unmake_move(move, undo)
            self._search_stack.pop()

            if self._stopped:
                return 0
            if score > best_score:
                best_score = score
                best_in_node = move
            alpha = max(alpha, score)
            if alpha >= beta:
                break

        if alpha >= beta:
            bound = TTBound.LOWER
        elif best_score > orig_alpha:
            bound = TTBound.EXACT
        else:
            bound = TTBound.UPPER
        self._tt.store(pos_hash, score_to_tt(best_score, ply), depth, bound, best_in_node)
        return best_score

    def _quiescence(self, alpha: int, beta: int, ply: int) -> int:
        """Search captures and promotions only, with stand-pat as a lower bound."""
        if self._nodes & 1023 == 0:
            self._check_time()
        if self._stopped:
            return 0

        board = self._board
        pos_hash = board.position.hash_key
        entry = self._tt.probe(pos_hash)
        if entry is not None:
            tt_score = score_from_tt(entry.score, ply)
            bound = entry.bound()
            if (
                bound is TTBound.EXACT
                or (bound is TTBound.LOWER and tt_score >= beta)
                or (bound is TTBound.UPPER and tt_score <= alpha)
            ):
                self._tt.stats.cutoffs += 1
                return tt_score

        stand_pat = evaluate(board.position)
        if stand_pat >= beta:
            return beta

        orig_alpha = alpha
        best_score = stand_pat
        alpha = max(alpha, stand_pat)
        best_in_node = Move.null()

        for move in order_moves(board.legal_captures(), board.position):
            undo = board.make_move_unchecked(move)
            self._nodes += 1
            score = -self._quiescence(-beta, -alpha, ply + 1)
            board.unmake_move(move, undo)

            if self._stopped:
                return 0
            if score > best_score:
                best_score = score
                best_in_node = move
            alpha = max(alpha, score)
            if alpha >= beta:
                break

        if best_score >= beta:
            bound = TTBound.LOWER
        elif best_score > orig_alpha:
            bound = TTBound.EXACT
        else:
            bound = TTBound.UPPER
        self._tt.store(pos_hash, score_to_tt(best_score, ply), 0, bound, best_in_node)
        return best_score

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _is_repetition(self) -> bool:
        """Any repeat on the search path, or two earlier occurrences in the game, is a draw."""
        position = self._board.position
        hash_key = position.hash_key
        halfmove = position.halfmove_clock

        search_size = len(self._search_stack)
        lookback = min(search_size, halfmove)
        if hash_key in self._search_stack[search_size - lookback :]:
            return True

        history_lookback = halfmove - search_size
        if history_lookback > 0:
            start = max(0, len(self._game_history) - history_lookback)
            if self._game_history[start:].count(hash_key) >= 2:
                return True
        return False

    def _extract_pv(self, max_length: int) -> list[Move]:
        """Follow best moves stored in the table from the current position."""
        board = self._board
        pv: list[Move] = []
        undos = []
        seen: set[int] = set()

        for _ in range(max_length):
            hash_key = board.position.hash_key
            if hash_key in seen:
                break
            seen.add(hash_key)
            entry = self._tt.probe(hash_key)
            if entry is None or entry.best_move.is_null():
                break
            if entry.best_move not in board.legal_moves():
                break
            pv.append(entry.best_move)
            undos.append(board.make_move_unchecked(entry.best_move))

        for move, undo in zip(reversed(pv), reversed(undos)):
            board.unmake_move(move, undo)
        return pv

    def _check_time(self) -> None:
        signal = self._config.stop_signal
        if signal is not None and signal.is_set():
            self._stopped = True
            return
        elapsed_ms = (time.monotonic() - self._start) * 1000
        if elapsed_ms >= self._config.search_time_ms:
            self._stopped = True