# cchess

A self-contained chess library: bitboard-based legal move generation,
FEN parsing and writing, Standard Algebraic Notation, a plain-text board
renderer, a tapered static evaluation and an iterative-deepening
alpha-beta search backed by a transposition table.

It needs nothing beyond the Python standard library (3.10 or later).

## Modules

| Module                 | Purpose                                                                 |
|------------------------|-------------------------------------------------------------------------|
| `cchess.primitives`    | `Color`, `PieceType`, `CastlingRights`, square helpers, `ChessError`    |
| `cchess.bitboard`      | 64-bit masks as integers: `pop_count`, `lsb`, `msb`, `iter_squares`, shifts |
| `cchess.square`        | `square_to_string`, `string_to_square` and file/rank character helpers  |
| `cchess.piece`         | `Piece`, with FEN, ASCII and Unicode forms                              |
| `cchess.move`          | `Move` and `MoveType`, coordinate notation (`e2e4`, `e7e8q`)            |
| `cchess.zobrist`       | Fixed-seed Zobrist hash keys and the `key_stream` generator             |
| `cchess.attacks`       | Knight and king attack tables, `rook_attacks`, `bishop_attacks`         |
| `cchess.position`      | `Position` with `make_move` / `unmake_move` and incremental hashing     |
| `cchess.movegen`       | Pseudo-legal and legal move generation, check, mate and stalemate tests |
| `cchess.fen`           | `parse_fen`, `serialize_fen`, `FenParseError`                           |
| `cchess.fen_validator` | `validate` and `FenValidationError`                                     |
| `cchess.board`         | `Board`, the high-level game object                                     |
| `cchess.notation`      | `move_to_san`                                                           |
| `cchess.renderer`      | `render`, `render_position_info`                                        |
| `cchess.evaluation`    | `evaluate` and its individual terms, `Score`                            |
| `cchess.move_order`    | `score_move`, `order_moves`, `extract_captures` (MVV-LVA)               |
| `cchess.transposition` | `TranspositionTable`, `TTEntry`, `TTBound`, `TTStats`                   |
| `cchess.search`        | `Search`, `SearchConfig`, `SearchInfo`                                  |

Squares are integers from 0 (a1) to 63 (h8); 64 (`primitives.SQUARE_NONE`)
means "no square".

## Playing moves

```python
from cchess.board import Board
from cchess.notation import move_to_san
from cchess.renderer import render, render_position_info

board = Board()                          # the standard starting position
print(len(board.legal_moves()))          # 20

move = board.find_legal_move(12, 28)     # e2 -> e4
print(move_to_san(board, move))          # e4
board.make_move(move)

print(board.to_fen())
print(render(board))
print(render_position_info(board))
```

`Move.from_algebraic("e7e8q")` reads coordinate notation and returns
`None` for text that is not a move; `Move.to_algebraic()` writes it back.
A move read this way carries only its squares and promotion piece, so it
is typed `NORMAL` or `PROMOTION`. `Board.find_legal_move(from_sq, to_sq,
promotion)` returns the fully typed legal move (capture, castling, en
passant, promotion) for a pair of squares, or `None`.

`Board.make_move` checks legality and returns `False` for an illegal
move. `Board.make_move_unchecked` skips the check and returns an
`UndoInfo` to pass to `Board.unmake_move`. `Board.at` accepts either a
square index or a name such as `"e4"`, and raises `ChessError` for
anything else.

`Board.is_draw()` covers the fifty-move rule only.

## FEN

```python
from cchess.fen import parse_fen, serialize_fen

position = parse_fen("8/8/8/8/8/8/8/K6k w - - 0 1")
print(serialize_fen(position))
```

Malformed FEN raises `FenParseError`. `Board` additionally runs
`fen_validator.validate` on the parsed position and raises
`FenValidationError` when a side does not have exactly one king, a pawn
stands on the first or eighth rank, or the en passant square is on the
wrong rank for the side to move. Both errors derive from `ChessError`.

## Evaluation

```python
from cchess.board import Board
from cchess.evaluation import evaluate

print(evaluate(Board().position))
```

The score is in centipawns from the point of view of the side to move.
It blends middlegame and endgame values by game phase and includes
material, piece-square tables, the bishop pair, doubled, isolated and
passed pawns, rooks on open files and mobility.

## Searching

```python
from cchess.board import Board
from cchess.search import Search, SearchConfig
from cchess.transposition import TranspositionTable

board = Board("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
table = TranspositionTable(size_mb=16)
config = SearchConfig(search_time_ms=2000, max_depth=6)

search = Search(board, config, table, info_callback=print)
best = search.find_best_move()
print(best.to_algebraic(), search.total_nodes())
```

The search works on its own copy of the board. It uses principal
variation search, null-move pruning, late move reductions and a
quiescence search over captures and promotions. After each completed
depth the optional callback receives a `SearchInfo` with the depth,
score, node count, elapsed time and principal variation. A
`threading.Event` given as `SearchConfig.stop_signal` stops the search
early; the best move of the last completed depth is returned. Passing
earlier position hashes as `game_history` lets the search treat
threefold repetitions as draws.

## What it does not do

This is a library only. It has no command-line program, no interactive
game loop, no engine-communication protocol and no perft or benchmark
runner; those are left to the code that uses it.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.