from cchess.board import Board
from cchess.move import Move
from cchess.notation import move_to_san
from cchess.primitives import PieceType
from cchess.square import file_to_char, square_to_string, string_to_square


def _find(board, text, promotion=PieceType.NONE):
    return board.find_legal_move(string_to_square(text[:2]), string_to_square(text[2:4]), promotion)


def test_knight_move():
    board = Board()
    assert move_to_san(board, _find(board, "g1f3")) == "Nf3"


def test_pawn_push_is_destination_square():
    board = Board()
    move = _find(board, "e2e4")
    assert move_to_san(board, move) == square_to_string(move.to_sq)


def test_pawn_capture_has_file_prefix():
    board = Board("rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2")
    move = _find(board, "e4d5")
    assert move.is_capture()
    assert move_to_san(board, move) == file_to_char(4) + "x" + square_to_string(move.to_sq)


def test_null_move():
    assert move_to_san(Board(), Move.null()) == "--"


def test_castling_both_sides():
    board = Board("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    assert move_to_san(board, _find(board, "e1g1")) == "O-O"
    assert move_to_san(board, _find(board, "e1c1")) == "O-O-O"


def test_file_disambiguation():
    board = Board("4k3/8/8/8/8/8/8/1N2KN2 w - - 0 1")
    assert move_to_san(board, _find(board, "b1d2")) == "Nbd2"


def test_rank_disambiguation():
    board = Board("4k3/8/8/R7/8/8/8/R3K3 w - - 0 1")
    assert move_to_san(board, _find(board, "a1a3")) == "R1a3"


def test_promotion_suffix():
    board = Board("8/P6k/8/8/8/8/8/4K3 w - - 0 1")
    san = move_to_san(board, _find(board, "a7a8", PieceType.QUEEN))
    assert san.startswith(square_to_string(string_to_square("a8")) + "=Q")


def test_check_suffix():
    board = Board("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
    san = move_to_san(board, _find(board, "a1a8"))
    assert san.endswith("+")
    assert not san.endswith("#")


def test_checkmate_suffix():
    board = Board("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
    san = move_to_san(board, _find(board, "a1a8"))
    assert san.endswith("#")


def test_san_does_not_change_board():
    board = Board("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
    fen = board.to_fen()
    move_to_san(board, _find(board, "a1a8"))
    assert board.to_fen() == fen