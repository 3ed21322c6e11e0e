"""Chess pieces and their text representations."""

from __future__ import annotations

from dataclasses import dataclass

from .primitives import Color, PieceType

_LETTERS = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_TYPES_BY_LETTER = {letter: pt for pt, letter in _LETTERS.items()}

_WHITE_SYMBOLS = ("\u2659", "\u2658", "\u2657", "\u2656", "\u2655", "\u2654")
_BLACK_SYMBOLS = ("\u265F", "\u265E", "\u265D", "\u265C", "\u265B", "\u265A")


@dataclass(frozen=True)
class Piece:
    """A piece of a given type and color; the default value is an empty square."""

    piece_type: PieceType = PieceType.NONE
    color: Color = Color.NONE

    def is_empty(self) -> bool:
        return self.piece_type is PieceType.NONE

    def is_valid(self) -> bool:
        """Either fully empty, or both type and color are real."""
        if self.piece_type is PieceType.NONE and self.color is Color.NONE:
            return True
        return self.piece_type is not PieceType.NONE and self.color in (Color.WHITE, Color.BLACK)

    def _letter(self, blank: str) -> str:
        letter = _LETTERS.get(self.piece_type)
        if letter is None:
            return blank
        return letter.lower() if self.color is Color.BLACK else letter

    def to_fen_char(self) -> str:
        """FEN letter: upper case for White, lower case for Black, space if empty."""
        return self._letter(" ")

    @classmethod
    def from_fen_char(cls, c: str) -> Piece:
        """Piece for a FEN letter; an unknown letter yields an empty piece."""
        piece_type = _TYPES_BY_LETTER.get(c.upper()) if len(c) == 1 else None
        if piece_type is None:
            return cls()
        color = Color.WHITE if "A" <= c <= "Z" else Color.BLACK
        return cls(piece_type, color)

    def to_unicode(self) -> str:
        """Unicode chess symbol, or a space if empty."""
        if self.is_empty():
            return " "
        symbols = _WHITE_SYMBOLS if self.color is Color.WHITE else _BLACK_SYMBOLS
        return symbols[int(self.piece_type)]

    def to_ascii(self) -> str:
        """ASCII letter like the FEN one, or '.' if empty."""
        return self._letter(".")