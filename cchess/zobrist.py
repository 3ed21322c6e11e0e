"""Zobrist keys for incremental position hashing.

The keys come from a xorshift64 generator with a fixed seed, so every
run produces the same hashes for the same positions.
"""

from __future__ import annotations

from collections.abc import Iterator

_MASK64 = (1 << 64) - 1

DEFAULT_SEED = 0x3A9F1C7D5E8B4026


def key_stream(seed: int) -> Iterator[int]:
    """Yield an endless stream of 64-bit xorshift64 values from ``seed``."""
    state = seed & _MASK64
    while True:
        state ^= (state << 13) & _MASK64
        state ^= state >> 7
        state ^= (state << 17) & _MASK64
        yield state


def _build_tables(
    seed: int,
) -> tuple[tuple[tuple[tuple[int, ...], ...], ...], int, tuple[int, ...], tuple[int, ...]]:
    stream = key_stream(seed)
    piece_keys = tuple(
        tuple(tuple(next(stream) for _sq in range(64)) for _pt in range(6)) for _color in range(2)
    )
    side_key = next(stream)
    castling_keys = tuple(next(stream) for _ in range(16))
    en_passant_keys = tuple(next(stream) for _ in range(8))
    return piece_keys, side_key, castling_keys, en_passant_keys


# PIECE_KEYS[color][piece_type][square]; SIDE_KEY is mixed in when Black
# is to move; CASTLING_KEYS is indexed by the castling-rights bit set and
# EN_PASSANT_KEYS by the file of the en passant square.
PIECE_KEYS, SIDE_KEY, CASTLING_KEYS, EN_PASSANT_KEYS = _build_tables(DEFAULT_SEED)