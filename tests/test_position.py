import pytest

from cchess.bitboard import RANK_1_BB, RANK_2_BB, RANK_7_BB, RANK_8_BB, square_bb
from cchess.move import Move, MoveType
from cchess.piece import Piece
from cchess.position import Position, UndoInfo
from cchess.primitives import SQUARE_NONE, CastlingRights, Color, PieceType, make_square
from cchess.square import string_to_square

W, B = Color.WHITE, Color.BLACK
BACK_RANK = [
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
]


def sq(name):
    return string_to_square(name)


def start_position():
    pos = Position()
    for f, pt in enumerate(BACK_RANK):
        pos.set_piece(make_square(f, 0), Piece(pt, W))
        pos.set_piece(make_square(f, 1), Piece(PieceType.PAWN, W))
        pos.set_piece(make_square(f, 6), Piece(PieceType.PAWN, B))
        pos.set_piece(make_square(f, 7), Piece(pt, B))
    pos.castling_rights = CastlingRights.ALL
    pos.compute_hash()
    return pos


def position_with(pieces, side=W, rights=CastlingRights.NONE, ep=SQUARE_NONE):
    pos = Position()
    for name, (pt, color) in pieces.items():
        pos.set_piece(sq(name), Piece(pt, color))
    pos.side_to_move = side
    pos.castling_rights = rights
    pos.en_passant_square = ep
    pos.compute_hash()
    return pos


def snapshot(pos):
    return (
        tuple(pos.piece_at(s) for s in range(64)),
        tuple(pos.pieces(pt, c) for pt in list(PieceType)[:6] for c in (W, B)),
        pos.occupied(),
        pos.king_square(W),
        pos.king_square(B),
        pos.side_to_move,
        pos.castling_rights,
        pos.en_passant_square,
        pos.halfmove_clock,
        pos.fullmove_number,
        pos.hash_key,
    )


def recomputed_hash(pos):
    other = pos.copy()
    other.compute_hash()
    return other.hash_key


def test_new_position_is_empty():
    pos = Position()
    assert pos.occupied() == 0
    assert pos.king_square(W) == SQUARE_NONE
    assert pos.piece_at(sq("e4")).is_empty()
    assert pos.side_to_move is W
    assert pos.fullmove_number == 1
    assert pos.hash_key == 0


def test_set_piece_updates_bitboards_and_king_square():
    pos = Position()
    pos.set_piece(sq("e1"), Piece(PieceType.KING, W))
    pos.set_piece(sq("d4"), Piece(PieceType.KNIGHT, B))
    assert pos.king_square(W) == sq("e1")
    assert pos.pieces(PieceType.KNIGHT, B) == square_bb(sq("d4"))
    assert pos.pieces(color=W) == square_bb(sq("e1"))
    assert pos.occupied() == square_bb(sq("e1")) | square_bb(sq("d4"))


def test_set_piece_replaces_old_piece():
    pos = Position()
    pos.set_piece(sq("d4"), Piece(PieceType.KNIGHT, B))
    pos.set_piece(sq("d4"), Piece(PieceType.QUEEN, W))
    assert pos.pieces(PieceType.KNIGHT) == 0
    assert pos.pieces(color=B) == 0
    assert pos.piece_at(sq("d4")) == Piece(PieceType.QUEEN, W)


def test_clear_square():
    pos = Position()
    pos.set_piece(sq("a5"), Piece(PieceType.ROOK, W))
    pos.clear_square(sq("a5"))
    assert pos.occupied() == 0
    assert pos.piece_at(sq("a5")).is_empty()


def test_invalid_square_rejected():
    pos = Position()
    with pytest.raises(ValueError):
        pos.set_piece(SQUARE_NONE, Piece(PieceType.PAWN, W))
    with pytest.raises(ValueError):
        pos.piece_at(-1)


def test_invalid_piece_rejected():
    with pytest.raises(ValueError):
        Position().set_piece(sq("a1"), Piece(PieceType.PAWN, Color.NONE))


def test_start_position_bitboards():
    pos = start_position()
    assert pos.pieces(color=W) == RANK_1_BB | RANK_2_BB
    assert pos.pieces(color=B) == RANK_7_BB | RANK_8_BB
    assert pos.pieces(PieceType.PAWN, W) == RANK_2_BB
    assert pos.king_square(B) == sq("e8")


def test_hash_depends_on_side_to_move():
    pos = start_position()
    before = pos.hash_key
    pos.side_to_move = B
    pos.compute_hash()
    assert pos.hash_key != before


def test_double_pawn_push_sets_en_passant():
    pos = start_position()
    before = snapshot(pos)
    move = Move(sq("e2"), sq("e4"))
    undo = pos.make_move(move)
    assert pos.en_passant_square == sq("e3")
    assert pos.side_to_move is B
    assert pos.halfmove_clock == 0
    assert pos.piece_at(sq("e4")) == Piece(PieceType.PAWN, W)
    assert pos.hash_key == recomputed_hash(pos)
    pos.unmake_move(move, undo)
    assert snapshot(pos) == before


def test_clocks_over_a_sequence():
    pos = start_position()
    moves = [Move(sq("g1"), sq("f3")), Move(sq("g8"), sq("f6")), Move(sq("f3"), sq("g1"))]
    undos = []
    for move in moves:
        undos.append(pos.make_move(move))
        assert pos.hash_key == recomputed_hash(pos)
    assert pos.halfmove_clock == 3
    assert pos.fullmove_number == 2
    before = snapshot(start_position())
    for move, undo in reversed(list(zip(moves, undos))):
        pos.unmake_move(move, undo)
    assert snapshot(pos) == before


@pytest.mark.parametrize(
    "king_to, rook_from, rook_to",
    [("g1", "h1", "f1"), ("c1", "a1", "d1")],
)
def test_castling_moves_rook_and_clears_rights(king_to, rook_from, rook_to):
    pos = position_with(
        {
            "e1": (PieceType.KING, W),
            "a1": (PieceType.ROOK, W),
            "h1": (PieceType.ROOK, W),
            "e8": (PieceType.KING, B),
        },
        rights=CastlingRights.ALL,
    )
    before = snapshot(pos)
    move = Move.make_castling(sq("e1"), sq(king_to))
    undo = pos.make_move(move)
    assert pos.king_square(W) == sq(king_to)
    assert pos.piece_at(sq(rook_to)) == Piece(PieceType.ROOK, W)
    assert pos.piece_at(sq(rook_from)).is_empty()
    assert pos.castling_rights == CastlingRights.BLACK
    assert pos.hash_key == recomputed_hash(pos)
    pos.unmake_move(move, undo)
    assert snapshot(pos) == before


def test_en_passant_capture_removes_pawn():
    pos = position_with(
        {
            "e1": (PieceType.KING, W),
            "e8": (PieceType.KING, B),
            "e5": (PieceType.PAWN, W),
            "d5": (PieceType.PAWN, B),
        },
        ep=sq("d6"),
    )
    before = snapshot(pos)
    move = Move.make_en_passant(sq("e5"), sq("d6"))
    undo = pos.make_move(move)
    assert undo.captured_piece == Piece(PieceType.PAWN, B)
    assert pos.piece_at(sq("d5")).is_empty()
    assert pos.pieces(PieceType.PAWN, B) == 0
    assert pos.en_passant_square == SQUARE_NONE
    assert pos.hash_key == recomputed_hash(pos)
    pos.unmake_move(move, undo)
    assert snapshot(pos) == before


def test_promotion_capture_on_rook_corner():
    pos = position_with(
        {
            "e1": (PieceType.KING, W),
            "e8": (PieceType.KING, B),
            "g7": (PieceType.PAWN, W),
            "h8": (PieceType.ROOK, B),
        },
        rights=CastlingRights.BLACK,
    )
    before = snapshot(pos)
    move = Move.make_promotion_capture(sq("g7"), sq("h8"), PieceType.QUEEN)
    undo = pos.make_move(move)
    assert pos.piece_at(sq("h8")) == Piece(PieceType.QUEEN, W)
    assert pos.pieces(PieceType.PAWN) == 0
    assert pos.castling_rights == CastlingRights.BLACK_QUEENSIDE
    assert pos.hash_key == recomputed_hash(pos)
    pos.unmake_move(move, undo)
    assert snapshot(pos) == before


def test_rook_move_removes_one_side_right():
    pos = position_with(
        {"e1": (PieceType.KING, W), "a1": (PieceType.ROOK, W), "e8": (PieceType.KING, B)},
        rights=CastlingRights.WHITE,
    )
    pos.make_move(Move(sq("a1"), sq("a4")))
    assert pos.castling_rights == CastlingRights.WHITE_KINGSIDE


def test_undo_info_records_prior_state():
    pos = start_position()
    undo = pos.make_move(Move(sq("d2"), sq("d4")))
    assert undo == UndoInfo(Piece(), CastlingRights.ALL, SQUARE_NONE, 0, recomputed_hash(start_position()))


def test_null_move_round_trip():
    pos = start_position()
    pos.make_move(Move(sq("e2"), sq("e4")))
    before = snapshot(pos)
    prev_ep, prev_hash = pos.en_passant_square, pos.hash_key
    pos.make_null_move()
    assert pos.side_to_move is W
    assert pos.en_passant_square == SQUARE_NONE
    assert pos.hash_key == recomputed_hash(pos)
    pos.unmake_null_move(prev_ep, prev_hash)
    assert snapshot(pos) == before


def test_copy_is_independent():
    pos = start_position()
    other = pos.copy()
    other.make_move(Move(sq("e2"), sq("e4"), MoveType.NORMAL))
    assert pos.piece_at(sq("e2")) == Piece(PieceType.PAWN, W)
    assert other.piece_at(sq("e2")).is_empty()
    assert snapshot(pos) == snapshot(start_position())


def test_remove_castling_rights():
    pos = Position()
    pos.castling_rights = CastlingRights.ALL
    pos.remove_castling_rights(CastlingRights.WHITE)
    assert pos.castling_rights == CastlingRights.BLACK