"""Transposition table with depth- and age-aware replacement."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .move import Move

# Size in bytes of one packed entry; used to turn a megabyte budget into a slot count.
ENTRY_SIZE = 16

# Mate scores are kept relative to the root in the table. The threshold must
# match the mate score used by the evaluation.
TT_MATE_THRESHOLD = 100000 - 200

_GENERATION_MASK = 0x3F


class TTBound(IntEnum):
    """What a stored score says about the true value of the position."""

    NONE = 0
    EXACT = 1
    LOWER = 2
    UPPER = 3


@dataclass(frozen=True)
class TTEntry:
    """One table slot: score, verification key, depth, generation/bound and best move."""

    score: int = 0
    hash_verify: int = 0
    depth: int = 0
    gen_bound: int = 0
    best_move: Move = field(default_factory=Move.null)

    def bound(self) -> TTBound:
        return TTBound(self.gen_bound & 0x3)

    def generation(self) -> int:
        return self.gen_bound >> 2

    def is_empty(self) -> bool:
        return self.gen_bound & 0x3 == 0


@dataclass
class TTStats:
    """Counters describing how the table has been used."""

    probes: int = 0
    hits: int = 0
    cutoffs: int = 0
    stores: int = 0
    overwrites: int = 0

    def reset(self) -> None:
        self.probes = self.hits = self.cutoffs = self.stores = self.overwrites = 0

    def hit_rate(self) -> float:
        """Percentage of probes that found an entry."""
        return 100.0 * self.hits / self.probes if self.probes else 0.0

    def cutoff_rate(self) -> float:
        """Percentage of probes that ended a search node."""
        return 100.0 * self.cutoffs / self.probes if self.probes else 0.0


def score_to_tt(score: int, ply: int) -> int:
    """Convert a ply-relative mate score to a root-relative one for storage."""
    if score >= TT_MATE_THRESHOLD:
        return score + ply
    if score <= -TT_MATE_THRESHOLD:
        return score - ply
    return score


def score_from_tt(score: int, ply: int) -> int:
    """Convert a stored root-relative mate score back to one relative to ``ply``."""
    if score >= TT_MATE_THRESHOLD:
        return score - ply
    if score <= -TT_MATE_THRESHOLD:
        return score + ply
    return score


class TranspositionTable:
    """Hash table of search results indexed by the low bits of the Zobrist key."""

    def __init__(self, size_mb: int = 128) -> None:
        num_entries = size_mb * 1024 * 1024 // ENTRY_SIZE
        count = 1
        while count * 2 <= num_entries:
            count *= 2
        self._mask = count - 1
        # Empty slots are simply absent.
        self._entries: dict[int, TTEntry] = {}
        self._generation = 0
        self.stats = TTStats()

    @staticmethod
    def _verify_key(hash_key: int) -> int:
        return (hash_key >> 48) & 0xFFFF

    def _index(self, hash_key: int) -> int:
        return hash_key & self._mask

    def probe(self, hash_key: int) -> TTEntry | None:
        """The entry stored for ``hash_key``, or None."""
        self.stats.probes += 1
        slot = self._entries.get(self._index(hash_key))
        if slot is not None and slot.hash_verify == self._verify_key(hash_key):
            self.stats.hits += 1
            return slot
        return None

    def store(
        self, hash_key: int, score: int, depth: int, bound: TTBound, best_move: Move
    ) -> None:
        """Store a result, keeping deeper or fresher information where it matters."""
        if bound is TTBound.NONE:
            raise ValueError("cannot store an entry without a bound")
        if depth < 0:
            raise ValueError(f"depth must be non-negative, got {depth}")
        self.stats.stores += 1
        index = self._index(hash_key)
        slot = self._entries.get(index)
        key16 = self._verify_key(hash_key)

        occupied = slot is not None
        same_position = occupied and slot.hash_verify == key16
        stale = occupied and slot.generation() != self._generation

        if same_position and depth < slot.depth:
            return
        if occupied and not same_position and not stale:
            if depth < slot.depth and bound is not TTBound.EXACT:
                return

        if occupied:
            self.stats.overwrites += 1
        self._entries[index] = TTEntry(
            score=score,
            hash_verify=key16,
            depth=depth,
            gen_bound=(self._generation << 2) | int(bound),
            best_move=best_move,
        )

    def new_search(self) -> None:
        """Age the table; the six-bit generation wraps after 64 searches."""
        self._generation = (self._generation + 1) & _GENERATION_MASK

    def clear(self) -> None:
        self._entries.clear()
        self._generation = 0
        self.stats.reset()

    def entry_count(self) -> int:
        return self._mask + 1

    def used_entries(self) -> int:
        return len(self._entries)

    def occupancy(self) -> float:
        """Percentage of slots in use."""
        return 100.0 * self.used_entries() / self.entry_count()