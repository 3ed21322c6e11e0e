from cchess.board import Board
from cchess.move import Move
from cchess.renderer import render, render_position_info

COORDINATES = "  a b c d e f g h"


def test_render_layout():
    lines = render(Board()).split("\n")
    assert len(lines) == 10
    assert lines[0] == COORDINATES
    assert lines[-1] == COORDINATES
    for offset, line in enumerate(lines[1:9]):
        rank_label = str(8 - offset)
        assert line.startswith(rank_label + " ")
        assert line.endswith(" " + rank_label)


def test_render_starting_back_ranks():
    lines = render(Board()).split("\n")
    assert lines[1] == "8 r n b q k b n r 8"
    assert lines[8] == "1 R N B Q K B N R 1"


def test_render_empty_squares_are_dots():
    board = Board("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
    text = render(board)
    assert text.count(".") == 62
    assert "k" in text and "K" in text


def test_position_info_starting():
    board = Board()
    info = render_position_info(board)
    assert info.startswith("\nPosition Information:\n")
    assert f"  FEN: {board.to_fen()}\n" in info
    assert "  Side to move: White\n" in info
    assert "  Castling rights: KQkq\n" in info
    assert "  En passant: None\n" in info
    assert "  Halfmove clock: 0\n" in info
    assert "  Fullmove number: 1\n" in info


def test_position_info_after_double_push():
    board = Board()
    board.make_move(Move.from_algebraic("e2e4"))
    info = render_position_info(board)
    assert "  Side to move: Black\n" in info
    assert "  En passant: e3\n" in info


def test_position_info_no_castling():
    info = render_position_info(Board("4k3/8/8/8/8/8/8/4K3 b - - 5 9"))
    assert "  Castling rights: None\n" in info
    assert "  Halfmove clock: 5\n" in info
    assert "  Fullmove number: 9\n" in info