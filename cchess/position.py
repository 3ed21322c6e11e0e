"""Board state with bitboards, incremental Zobrist hashing and make/unmake."""

from __future__ import annotations

from dataclasses import dataclass

from .bitboard import square_bb
from .move import Move
from .piece import Piece
from .primitives import (
    FILE_A,
    FILE_D,
    FILE_F,
    FILE_G,
    FILE_H,
    RANK_1,
    RANK_8,
    SQUARE_NONE,
    CastlingRights,
    Color,
    PieceType,
    file_of,
    make_square,
    rank_of,
    square_is_valid,
)
from .zobrist import CASTLING_KEYS, EN_PASSANT_KEYS, PIECE_KEYS, SIDE_KEY

_EMPTY = Piece()

_A1 = make_square(FILE_A, RANK_1)
_H1 = make_square(FILE_H, RANK_1)
_A8 = make_square(FILE_A, RANK_8)
_H8 = make_square(FILE_H, RANK_8)


@dataclass(frozen=True)
class UndoInfo:
    """State that a move destroys and that unmaking it needs back."""

    captured_piece: Piece
    castling_rights: CastlingRights
    en_passant_square: int
    halfmove_clock: int
    hash_key: int


def _check_square(sq: int) -> None:
    if not square_is_valid(sq):
        raise ValueError(f"invalid square: {sq}")


def _castling_rook_squares(king_from: int, king_to: int) -> tuple[int, int]:
    rank = rank_of(king_from)
    if file_of(king_to) == FILE_G:
        return make_square(FILE_H, rank), make_square(FILE_F, rank)
    return make_square(FILE_A, rank), make_square(FILE_D, rank)


class Position:
    """A chess position: pieces, side to move, castling, en passant and clocks."""

    def __init__(self) -> None:
        self.side_to_move = Color.WHITE
        self.castling_rights = CastlingRights.NONE
        self.en_passant_square = SQUARE_NONE
        self.halfmove_clock = 0
        self.fullmove_number = 1
        self.clear()

    # ------------------------------------------------------------------
    # Piece access
    # ------------------------------------------------------------------

    def piece_at(self, sq: int) -> Piece:
        _check_square(sq)
        return self._board[sq]

    def set_piece(self, sq: int, piece: Piece) -> None:
        """Place ``piece`` on ``sq``, replacing whatever was there."""
        _check_square(sq)
        if not piece.is_valid():
            raise ValueError(f"invalid piece: {piece!r}")
        bit = square_bb(sq)
        old = self._board[sq]
        if not old.is_empty():
            self._piece_bb[old.piece_type] &= ~bit
            self._color_bb[old.color] &= ~bit
        self._board[sq] = piece
        if not piece.is_empty():
            self._piece_bb[piece.piece_type] |= bit
            self._color_bb[piece.color] |= bit
            if piece.piece_type is PieceType.KING:
                self._king_square[piece.color] = sq
        self._update_occupied()

    def clear_square(self, sq: int) -> None:
        _check_square(sq)
        bit = square_bb(sq)
        old = self._board[sq]
        if not old.is_empty():
            self._piece_bb[old.piece_type] &= ~bit
            self._color_bb[old.color] &= ~bit
            self._occupied &= ~bit
        self._board[sq] = _EMPTY

    def clear(self) -> None:
        """Remove every piece and reset the hash; game-state fields are kept."""
        self._board: list[Piece] = [_EMPTY] * 64
        self._piece_bb: list[int] = [0] * 6
        self._color_bb: list[int] = [0] * 2
        self._occupied = 0
        self._king_square: list[int] = [SQUARE_NONE, SQUARE_NONE]
        self.hash_key = 0

    def copy(self) -> Position:
        other = Position.__new__(Position)
        other.side_to_move = self.side_to_move
        other.castling_rights = self.castling_rights
        other.en_passant_square = self.en_passant_square
        other.halfmove_clock = self.halfmove_clock
        other.fullmove_number = self.fullmove_number
        other._board = list(self._board)
        other._piece_bb = list(self._piece_bb)
        other._color_bb = list(self._color_bb)
        other._occupied = self._occupied
        other._king_square = list(self._king_square)
        other.hash_key = self.hash_key
        return other

    # ------------------------------------------------------------------
    # Hashing and bitboard queries
    # ------------------------------------------------------------------

    def compute_hash(self) -> None:
        """Recompute the Zobrist hash from scratch."""
        h = 0
        for sq, piece in enumerate(self._board):
            if not piece.is_empty():
                h ^= PIECE_KEYS[piece.color][piece.piece_type][sq]
        if self.side_to_move is Color.BLACK:
            h ^= SIDE_KEY
        h ^= CASTLING_KEYS[int(self.castling_rights)]
        if self.en_passant_square != SQUARE_NONE:
            h ^= EN_PASSANT_KEYS[file_of(self.en_passant_square)]
        self.hash_key = h

    def pieces(self, piece_type: PieceType | None = None, color: Color | None = None) -> int:
        """Bitboard of pieces filtered by type and/or color; all pieces if neither."""
        if piece_type is None and color is None:
            return self._occupied
        if piece_type is None:
            return self._color_bb[color]
        if color is None:
            return self._piece_bb[piece_type]
        return self._piece_bb[piece_type] & self._color_bb[color]

    def occupied(self) -> int:
        return self._occupied

    def king_square(self, color: Color) -> int:
        return self._king_square[color]

    def remove_castling_rights(self, rights: CastlingRights) -> None:
        self.castling_rights = CastlingRights(int(self.castling_rights) & ~int(rights) & 15)

    # ------------------------------------------------------------------
    # Low-level bitboard updates used by make/unmake
    # ------------------------------------------------------------------

    def _move_piece(self, from_sq: int, to_sq: int, piece_type: PieceType, color: Color) -> None:
        from_to = square_bb(from_sq) | square_bb(to_sq)
        self._piece_bb[piece_type] ^= from_to
        self._color_bb[color] ^= from_to
        self._board[to_sq] = self._board[from_sq]
        self._board[from_sq] = _EMPTY

    def _remove_piece(self, sq: int, piece_type: PieceType, color: Color) -> None:
        self._piece_bb[piece_type] ^= square_bb(sq)
        self._color_bb[color] ^= square_bb(sq)
        self._board[sq] = _EMPTY

    def _put_piece(self, sq: int, piece_type: PieceType, color: Color) -> None:
        self._piece_bb[piece_type] ^= square_bb(sq)
        self._color_bb[color] ^= square_bb(sq)
        self._board[sq] = Piece(piece_type, color)

    def _update_occupied(self) -> None:
        self._occupied = self._color_bb[0] | self._color_bb[1]

    # ------------------------------------------------------------------
    # Move execution
    # ------------------------------------------------------------------

    def make_move(self, move: Move) -> UndoInfo:
        """Play ``move`` (assumed legal) and return what is needed to undo it."""
        from_sq, to_sq = move.from_sq, move.to_sq
        us = self.side_to_move
        them = us.opponent()
        moved = self._board[from_sq]
        pt = moved.piece_type
        captured = self._board[to_sq]
        saved_rights = self.castling_rights
        saved_ep = self.en_passant_square
        saved_clock = self.halfmove_clock
        saved_hash = self.hash_key

        h = self.hash_key ^ CASTLING_KEYS[int(self.castling_rights)]
        if self.en_passant_square != SQUARE_NONE:
            h ^= EN_PASSANT_KEYS[file_of(self.en_passant_square)]

        our_keys = PIECE_KEYS[us]
        their_keys = PIECE_KEYS[them]

        if move.is_castling():
            self._move_piece(from_sq, to_sq, PieceType.KING, us)
            self._king_square[us] = to_sq
            h ^= our_keys[PieceType.KING][from_sq] ^ our_keys[PieceType.KING][to_sq]
            rook_from, rook_to = _castling_rook_squares(from_sq, to_sq)
            self._move_piece(rook_from, rook_to, PieceType.ROOK, us)
            h ^= our_keys[PieceType.ROOK][rook_from] ^ our_keys[PieceType.ROOK][rook_to]
        elif move.is_en_passant():
            self._move_piece(from_sq, to_sq, PieceType.PAWN, us)
            h ^= our_keys[PieceType.PAWN][from_sq] ^ our_keys[PieceType.PAWN][to_sq]
            direction = -1 if us is Color.WHITE else 1
            captured_sq = make_square(file_of(to_sq), rank_of(to_sq) + direction)
            captured = self._board[captured_sq]
            self._remove_piece(captured_sq, PieceType.PAWN, them)
            h ^= their_keys[PieceType.PAWN][captured_sq]
        else:
            if move.is_capture():
                self._remove_piece(to_sq, captured.piece_type, them)
                h ^= their_keys[captured.piece_type][to_sq]
            if move.is_promotion():
                self._remove_piece(from_sq, PieceType.PAWN, us)
                self._put_piece(to_sq, move.promotion, us)
                h ^= our_keys[PieceType.PAWN][from_sq] ^ our_keys[move.promotion][to_sq]
            else:
                self._move_piece(from_sq, to_sq, pt, us)
                if pt is PieceType.KING:
                    self._king_square[us] = to_sq
                h ^= our_keys[pt][from_sq] ^ our_keys[pt][to_sq]

        self._update_occupied()

        if pt is PieceType.PAWN or move.is_capture():
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if us is Color.BLACK:
            self.fullmove_number += 1

        self._update_castling_rights(move, moved)

        if pt is PieceType.PAWN and abs(rank_of(to_sq) - rank_of(from_sq)) == 2:
            direction = 1 if us is Color.WHITE else -1
            self.en_passant_square = make_square(file_of(from_sq), rank_of(from_sq) + direction)
        else:
            self.en_passant_square = SQUARE_NONE

        h ^= CASTLING_KEYS[int(self.castling_rights)]
        if self.en_passant_square != SQUARE_NONE:
            h ^= EN_PASSANT_KEYS[file_of(self.en_passant_square)]
        self.hash_key = h ^ SIDE_KEY
        self.side_to_move = them

        return UndoInfo(captured, saved_rights, saved_ep, saved_clock, saved_hash)

    def unmake_move(self, move: Move, undo: UndoInfo) -> None:
        """Take back ``move``, which must be the last move made."""
        self.side_to_move = self.side_to_move.opponent()
        from_sq, to_sq = move.from_sq, move.to_sq
        us = self.side_to_move
        them = us.opponent()

        if move.is_castling():
            self._move_piece(to_sq, from_sq, PieceType.KING, us)
            self._king_square[us] = from_sq
            rook_from, rook_to = _castling_rook_squares(from_sq, to_sq)
            self._move_piece(rook_to, rook_from, PieceType.ROOK, us)
        elif move.is_en_passant():
            self._move_piece(to_sq, from_sq, PieceType.PAWN, us)
            direction = -1 if us is Color.WHITE else 1
            captured_sq = make_square(file_of(to_sq), rank_of(to_sq) + direction)
            self._put_piece(captured_sq, PieceType.PAWN, them)
        else:
            if move.is_promotion():
                self._remove_piece(to_sq, move.promotion, us)
                self._put_piece(from_sq, PieceType.PAWN, us)
            else:
                pt = self._board[to_sq].piece_type
                self._move_piece(to_sq, from_sq, pt, us)
                if pt is PieceType.KING:
                    self._king_square[us] = from_sq
            if undo.captured_piece.piece_type is not PieceType.NONE:
                self._put_piece(to_sq, undo.captured_piece.piece_type, them)

        self._update_occupied()

        self.castling_rights = undo.castling_rights
        self.en_passant_square = undo.en_passant_square
        self.halfmove_clock = undo.halfmove_clock
        self.hash_key = undo.hash_key

        if self.side_to_move is Color.BLACK:
            self.fullmove_number -= 1

    def make_null_move(self) -> None:
        """Pass the turn: flip the side to move and clear en passant."""
        self.hash_key ^= SIDE_KEY
        if self.en_passant_square != SQUARE_NONE:
            self.hash_key ^= EN_PASSANT_KEYS[file_of(self.en_passant_square)]
            self.en_passant_square = SQUARE_NONE
        self.side_to_move = self.side_to_move.opponent()

    def unmake_null_move(self, prev_ep: int, prev_hash: int) -> None:
        self.side_to_move = self.side_to_move.opponent()
        self.en_passant_square = prev_ep
        self.hash_key = prev_hash

    def _update_castling_rights(self, move: Move, moved: Piece) -> None:
        us = self.side_to_move
        if moved.piece_type is PieceType.KING:
            self.remove_castling_rights(
                CastlingRights.WHITE if us is Color.WHITE else CastlingRights.BLACK
            )

        if moved.piece_type is PieceType.ROOK:
            if us is Color.WHITE:
                if move.from_sq == _A1:
                    self.remove_castling_rights(CastlingRights.WHITE_QUEENSIDE)
                elif move.from_sq == _H1:
                    self.remove_castling_rights(CastlingRights.WHITE_KINGSIDE)
            else:
                if move.from_sq == _A8:
                    self.remove_castling_rights(CastlingRights.BLACK_QUEENSIDE)
                elif move.from_sq == _H8:
                    self.remove_castling_rights(CastlingRights.BLACK_KINGSIDE)

        if move.is_capture():
            if us.opponent() is Color.WHITE:
                if move.to_sq == _A1:
                    self.remove_castling_rights(CastlingRights.WHITE_QUEENSIDE)
                elif move.to_sq == _H1:
                    self.remove_castling_rights(CastlingRights.WHITE_KINGSIDE)
            else:
                if move.to_sq == _A8:
                    self.remove_castling_rights(CastlingRights.BLACK_QUEENSIDE)
                elif move.to_sq == _H8:
                    self.remove_castling_rights(CastlingRights.BLACK_KINGSIDE)