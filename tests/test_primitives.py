import pytest

from cchess.primitives import (
    SQUARE_A1,
    SQUARE_A8,
    SQUARE_H1,
    SQUARE_H8,
    SQUARE_NONE,
    Color,
    file_of,
    make_square,
    rank_of,
    square_is_valid,
)


def test_opponent_flips_color():
    assert Color.WHITE.opponent() is Color.BLACK
    assert Color.BLACK.opponent() is Color.WHITE


def test_opponent_of_none_raises():
    with pytest.raises(ValueError):
        Color.NONE.opponent()


def test_make_square_round_trip():
    for file in range(8):
        for rank in range(8):
            sq = make_square(file, rank)
            assert file_of(sq) == file
            assert rank_of(sq) == rank
            assert square_is_valid(sq)


def test_corner_squares():
    assert make_square(0, 0) == SQUARE_A1
    assert make_square(7, 0) == SQUARE_H1
    assert make_square(0, 7) == SQUARE_A8
    assert make_square(7, 7) == SQUARE_H8


def test_square_validity_bounds():
    assert square_is_valid(SQUARE_H8)
    assert not square_is_valid(SQUARE_NONE)
    assert not square_is_valid(-1)