"""Chess rules, FEN and SAN notation, text rendering, evaluation and alpha-beta search."""

__version__ = "0.1.0"

__all__ = [
    "attacks",
    "bitboard",
    "board",
    "evaluation",
    "fen",
    "fen_validator",
    "move",
    "move_order",
    "movegen",
    "notation",
    "piece",
    "position",
    "primitives",
    "renderer",
    "search",
    "square",
    "transposition",
    "zobrist",
]