# fourfront/engine/transposition.py
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

Shape = Tuple[int, int, int]  # (width, height, win_length)
CacheKey = Tuple[Shape, int, int, bool]  # (shape, board key, depth remaining, maximizing)


class Bound(Enum):
    EXACT = 0  # searched with the full window
    LOWER = 1  # beta cutoff, true value >= score
    UPPER = 2  # failed low, true value <= score


@dataclass(frozen=True)
class CacheEntry:
    score: int
    bound: Bound


class TranspositionCache:
    """
    Memo table for SearchEngine.best_score. Entries only grow; a new AIPlayer
    starts with an empty cache.
    """

    def __init__(self):
        self.table: Dict[CacheKey, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(shape: Shape, board_key: int, depth: int, maximizing: bool) -> CacheKey:
        return (shape, board_key, depth, maximizing)

    def get(self, key: CacheKey, alpha: int, beta: int) -> Optional[int]:
        """Returns the cached score if it is decisive for the (alpha, beta) window."""
        entry = self.table.get(key)
        if entry is None:
            self.misses += 1
            return None
        if (entry.bound is Bound.EXACT
                or (entry.bound is Bound.LOWER and entry.score >= beta)
                or (entry.bound is Bound.UPPER and entry.score <= alpha)):
            self.hits += 1
            return entry.score
        self.misses += 1
        return None

    def put(self, key: CacheKey, score: int, bound: Bound = Bound.EXACT):
        existing = self.table.get(key)
        # Never downgrade an exact value to a bound
        if existing is not None and existing.bound is Bound.EXACT and bound is not Bound.EXACT:
            return
        self.table[key] = CacheEntry(score, bound)

    def reset(self):
        self.table.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self.table
