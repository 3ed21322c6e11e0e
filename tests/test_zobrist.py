from itertools import islice

import pytest

from cchess.zobrist import (
    CASTLING_KEYS,
    DEFAULT_SEED,
    EN_PASSANT_KEYS,
    PIECE_KEYS,
    SIDE_KEY,
    key_stream,
)

_KEY_COUNT = 2 * 6 * 64 + 1 + 16 + 8


def _all_keys():
    keys = [k for color in PIECE_KEYS for pt in color for k in pt]
    keys.append(SIDE_KEY)
    keys.extend(CASTLING_KEYS)
    keys.extend(EN_PASSANT_KEYS)
    return keys


def test_tables_follow_the_default_stream_in_order():
    expected = list(islice(key_stream(DEFAULT_SEED), _KEY_COUNT))
    assert [len(color) for color in PIECE_KEYS] == [6, 6]
    assert {len(pt) for color in PIECE_KEYS for pt in color} == {64}
    assert len(CASTLING_KEYS) == 16
    assert len(EN_PASSANT_KEYS) == 8
    assert _all_keys() == expected


def test_default_stream_keys_are_distinct_nonzero_64_bit():
    keys = list(islice(key_stream(DEFAULT_SEED), _KEY_COUNT))
    assert len(set(keys)) == _KEY_COUNT
    assert min(keys) > 0
    assert max(keys) < (1 << 64)


def test_stream_is_deterministic():
    first = list(islice(key_stream(12345), 50))
    second = list(islice(key_stream(12345), 50))
    assert first == second


def test_different_seeds_give_different_streams():
    a = list(islice(key_stream(1), 10))
    b = list(islice(key_stream(2), 10))
    assert a != b
    assert not set(a) & set(b)


def test_zero_seed_stays_zero():
    assert list(islice(key_stream(0), 5)) == [0, 0, 0, 0, 0]


@pytest.mark.parametrize("seed", [1, DEFAULT_SEED, (1 << 64) - 1])
def test_stream_values_fit_in_64_bits(seed):
    assert all(0 <= v < (1 << 64) for v in islice(key_stream(seed), 200))