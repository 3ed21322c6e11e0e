"""A playable chess board built on a validated position."""

from __future__ import annotations

from . import movegen
from .fen import parse_fen, serialize_fen
from .fen_validator import validate
from .move import Move
from .piece import Piece
from .position import Position, UndoInfo
from .primitives import CastlingRights, ChessError, Color, PieceType, square_is_valid
from .square import string_to_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


class Board:
    """A chess game position with legality checks and game-state queries."""

    STARTING_FEN = STARTING_FEN

    def __init__(self, fen: str = STARTING_FEN) -> None:
        self.position = Position()
        self.set_from_fen(fen)

    def set_from_fen(self, fen: str) -> None:
        """Load a FEN string; raises FenParseError or FenValidationError."""
        self.position = parse_fen(fen)
        validate(self.position)

    def to_fen(self) -> str:
        return serialize_fen(self.position)

    def copy(self) -> Board:
        other = Board.__new__(Board)
        other.position = self.position.copy()
        return other

    def at(self, square: int | str) -> Piece:
        """Piece on a square given as an index or algebraic name."""
        if isinstance(square, str):
            sq = string_to_square(square)
            if sq is None:
                raise ChessError(f"Invalid algebraic notation: {square}")
            square = sq
        if not square_is_valid(square):
            raise ChessError(f"Invalid square: {square}")
        return self.position.piece_at(square)

    def clear(self) -> None:
        """Remove every piece; side to move, castling and clocks are kept."""
        self.position.clear()

    def add_piece(self, piece: Piece, algebraic: str) -> None:
        sq = string_to_square(algebraic)
        if sq is None:
            raise ChessError(f"Invalid algebraic notation: {algebraic}")
        self.position.set_piece(sq, piece)

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def castling_rights(self) -> CastlingRights:
        return self.position.castling_rights

    @property
    def en_passant_square(self) -> int:
        return self.position.en_passant_square

    @property
    def halfmove_clock(self) -> int:
        return self.position.halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self.position.fullmove_number

    def make_move(self, move: Move) -> bool:
        """Play ``move`` if it is legal; returns whether it was played."""
        if not movegen.is_legal(self.position, move):
            return False
        self.position.make_move(move)
        return True

    def make_move_unchecked(self, move: Move) -> UndoInfo:
        return self.position.make_move(move)

    def unmake_move(self, move: Move, undo: UndoInfo) -> None:
        self.position.unmake_move(move, undo)

    def make_null_move(self) -> None:
        self.position.make_null_move()

    def unmake_null_move(self, prev_ep: int, prev_hash: int) -> None:
        self.position.unmake_null_move(prev_ep, prev_hash)

    def legal_moves(self) -> list[Move]:
        return movegen.generate_legal_moves(self.position)

    def legal_captures(self) -> list[Move]:
        return movegen.generate_legal_captures(self.position)

    def is_move_legal(self, move: Move) -> bool:
        return movegen.is_legal(self.position, move)

    def find_legal_move(
        self, from_sq: int, to_sq: int, promotion: PieceType = PieceType.NONE
    ) -> Move | None:
        """The legal move between two squares, matching ``promotion`` for promotions."""
        for move in self.legal_moves():
            if move.from_sq == from_sq and move.to_sq == to_sq:
                if not move.is_promotion() or move.promotion == promotion:
                    return move
        return None

    def is_in_check(self) -> bool:
        return movegen.is_in_check(self.position, self.position.side_to_move)

    def is_checkmate(self) -> bool:
        return movegen.is_checkmate(self.position)

    def is_stalemate(self) -> bool:
        return movegen.is_stalemate(self.position)

    def is_draw(self) -> bool:
        return movegen.is_draw(self.position)