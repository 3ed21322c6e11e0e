import pytest

from cchess.fen import FenParseError, parse_fen, serialize_fen
from cchess.piece import Piece
from cchess.primitives import SQUARE_NONE, CastlingRights, Color, PieceType
from cchess.square import string_to_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_FEN,
        "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
        "8/8/8/8/8/8/8/8 w - - 12 40",
        "4k3/8/8/8/8/8/8/4K3 b Kq - 3 7",
    ],
)
def test_round_trip(fen):
    assert serialize_fen(parse_fen(fen)) == fen


def test_starting_position_fields():
    pos = parse_fen(STARTING_FEN)
    assert pos.side_to_move is Color.WHITE
    assert pos.castling_rights == CastlingRights.ALL
    assert pos.en_passant_square == SQUARE_NONE
    assert pos.halfmove_clock == 0
    assert pos.fullmove_number == 1
    assert pos.piece_at(string_to_square("a1")) == Piece(PieceType.ROOK, Color.WHITE)
    assert pos.piece_at(string_to_square("e8")) == Piece(PieceType.KING, Color.BLACK)
    assert pos.piece_at(string_to_square("e4")).is_empty()


def test_en_passant_square_parsed():
    pos = parse_fen("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1")
    assert pos.en_passant_square == string_to_square("e3")
    assert pos.side_to_move is Color.BLACK


def test_hash_matches_recomputation():
    pos = parse_fen(STARTING_FEN)
    parsed_hash = pos.hash_key
    pos.compute_hash()
    assert pos.hash_key == parsed_hash


def test_hash_matches_incremental_update():
    pos = parse_fen(STARTING_FEN)
    from cchess.move import Move

    pos.make_move(Move.from_algebraic("e2e4"))
    expected = parse_fen("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1")
    assert pos.hash_key == expected.hash_key


def test_different_side_gives_different_hash():
    white = parse_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
    black = parse_fen("4k3/8/8/8/8/8/8/4K3 b - - 0 1")
    assert white.hash_key != black.hash_key
    assert serialize_fen(white) != serialize_fen(black)


@pytest.mark.parametrize(
    "fen, message",
    [
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0", "6 space-separated"),
        ("rnbqkbnr/pppppppp/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "exactly 8 ranks"),
        ("rnbqkbnr/ppppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "too many squares"),
        ("rnbqkbnr/ppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "expected 8"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1", "Invalid piece character"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1", "Active color"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkz - 0 1", "castling"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e4 0 1", "rank 3 or 6"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq zz 0 1", "Invalid en passant"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - x 1", "Halfmove clock must be an integer"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1", "non-negative"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0", "at least 1"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 one", "Fullmove number must be an integer"),
    ],
)
def test_parse_errors(fen, message):
    with pytest.raises(FenParseError, match=message):
        parse_fen(fen)


def test_kingless_position_still_parses():
    pos = parse_fen("8/8/8/8/8/8/8/8 w - - 0 1")
    assert pos.occupied() == 0