"""Conversion between square indices and algebraic coordinates."""

from __future__ import annotations

from .primitives import file_of, make_square, rank_of, square_is_valid


def file_to_char(file: int) -> str:
    """Letter 'a'..'h' for a file index."""
    return chr(ord("a") + file)


def rank_to_char(rank: int) -> str:
    """Digit '1'..'8' for a rank index."""
    return chr(ord("1") + rank)


def char_to_file(c: str) -> int | None:
    """File index for a letter a-h (either case), or None."""
    if "a" <= c <= "h" and len(c) == 1:
        return ord(c) - ord("a")
    if "A" <= c <= "H" and len(c) == 1:
        return ord(c) - ord("A")
    return None


def char_to_rank(c: str) -> int | None:
    """Rank index for a digit 1-8, or None."""
    if len(c) == 1 and "1" <= c <= "8":
        return ord(c) - ord("1")
    return None


def square_to_string(sq: int) -> str:
    """Algebraic name of a square such as 'e4'; '-' for an invalid square."""
    if not square_is_valid(sq):
        return "-"
    return file_to_char(file_of(sq)) + rank_to_char(rank_of(sq))


def string_to_square(text: str) -> int | None:
    """Square index for an algebraic name, or None if it is not one."""
    if len(text) != 2:
        return None
    file = char_to_file(text[0])
    rank = char_to_rank(text[1])
    if file is None or rank is None:
        return None
    return make_square(file, rank)