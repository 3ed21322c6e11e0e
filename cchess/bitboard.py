"""64-bit bitboard constants and bit operations on plain integers."""

from __future__ import annotations

from collections.abc import Iterator

BB_EMPTY = 0
BB_ALL = (1 << 64) - 1

FILE_A_BB = 0x0101010101010101
FILE_B_BB = FILE_A_BB << 1
FILE_C_BB = FILE_A_BB << 2
FILE_D_BB = FILE_A_BB << 3
FILE_E_BB = FILE_A_BB << 4
FILE_F_BB = FILE_A_BB << 5
FILE_G_BB = FILE_A_BB << 6
FILE_H_BB = FILE_A_BB << 7

RANK_1_BB = 0xFF
RANK_2_BB = RANK_1_BB << 8
RANK_3_BB = RANK_1_BB << 16
RANK_4_BB = RANK_1_BB << 24
RANK_5_BB = RANK_1_BB << 32
RANK_6_BB = RANK_1_BB << 40
RANK_7_BB = RANK_1_BB << 48
RANK_8_BB = RANK_1_BB << 56

FILE_BB = (FILE_A_BB, FILE_B_BB, FILE_C_BB, FILE_D_BB, FILE_E_BB, FILE_F_BB, FILE_G_BB, FILE_H_BB)
RANK_BB = (RANK_1_BB, RANK_2_BB, RANK_3_BB, RANK_4_BB, RANK_5_BB, RANK_6_BB, RANK_7_BB, RANK_8_BB)

_NOT_FILE_A = BB_ALL & ~FILE_A_BB
_NOT_FILE_H = BB_ALL & ~FILE_H_BB


def pop_count(b: int) -> int:
    """Number of set bits."""
    return bin(b).count("1")


def lsb(b: int) -> int:
    """Index of the lowest set bit."""
    if not b:
        raise ValueError("empty bitboard has no least significant bit")
    return (b & -b).bit_length() - 1


def msb(b: int) -> int:
    """Index of the highest set bit."""
    if not b:
        raise ValueError("empty bitboard has no most significant bit")
    return b.bit_length() - 1


def iter_squares(b: int) -> Iterator[int]:
    """Yield the indices of set bits from lowest to highest."""
    while b:
        low = b & -b
        yield low.bit_length() - 1
        b ^= low


def more_than_one(b: int) -> bool:
    """True if at least two bits are set."""
    return (b & (b - 1)) != 0


def square_bb(sq: int) -> int:
    """Bitboard with only ``sq`` set."""
    return 1 << sq


def test_bit(b: int, sq: int) -> bool:
    """True if ``sq`` is set in ``b``."""
    return (b >> sq) & 1 == 1


def set_bit(b: int, sq: int) -> int:
    """Return ``b`` with ``sq`` set."""
    return b | (1 << sq)


def clear_bit(b: int, sq: int) -> int:
    """Return ``b`` with ``sq`` cleared."""
    return b & ~(1 << sq)


def shift_north(b: int) -> int:
    return (b << 8) & BB_ALL


def shift_south(b: int) -> int:
    return b >> 8


def shift_east(b: int) -> int:
    return ((b & _NOT_FILE_H) << 1) & BB_ALL


def shift_west(b: int) -> int:
    return (b & _NOT_FILE_A) >> 1


def shift_north_east(b: int) -> int:
    return ((b & _NOT_FILE_H) << 9) & BB_ALL


def shift_north_west(b: int) -> int:
    return ((b & _NOT_FILE_A) << 7) & BB_ALL


def shift_south_east(b: int) -> int:
    return (b & _NOT_FILE_H) >> 7


def shift_south_west(b: int) -> int:
    return (b & _NOT_FILE_A) >> 9


def file_bb(file: int) -> int:
    """Bitboard of every square on a file."""
    return FILE_BB[file]


def rank_bb(rank: int) -> int:
    """Bitboard of every square on a rank."""
    return RANK_BB[rank]