import logging
import time
from typing import List, NamedTuple, Optional

from fourfront.engine.board import BoardState
from fourfront.engine.constants import SCORE_INF
from fourfront.engine.evaluator import evaluate
from fourfront.engine.moves import legal_moves
from fourfront.engine.transposition import Bound, TranspositionCache
from fourfront.models.enums import Piece

logger = logging.getLogger(__name__)


class MoveScore(NamedTuple):
    column: int
    score: int


class SearchTimeout(Exception):
    """Raised inside the recursion when the search deadline has passed."""


class SearchEngine:
    """
    Depth-bounded minimax with alpha-beta pruning, scored from ai_piece's side.
    Maximizing layers place ai_piece, minimizing layers place its opponent.
    """

    def __init__(self, ai_piece: Piece, cache: Optional[TranspositionCache] = None,
                 time_limit: Optional[float] = None):
        self.ai_piece = ai_piece
        self.opponent_piece = ai_piece.opponent
        self.cache = cache if cache is not None else TranspositionCache()
        self.time_limit = time_limit or None
        self.nodes = 0
        self._deadline: Optional[float] = None

    def score_moves(self, board: BoardState, depth: int) -> List[MoveScore]:
        """
        Root entry point.
        Scores EVERY legal column by the opponent's best reply to it, then ranks
        them best first (stable, so ties keep increasing column order).
        """
        self.nodes = 0
        start = time.monotonic()
        self._deadline = start + self.time_limit if self.time_limit else None

        scores: List[MoveScore] = []
        pending = legal_moves(board)
        while pending:
            col = pending[0]
            child = board.clone()
            child.drop(col, self.ai_piece)
            # Full window for every column: we want the exact value of each move,
            # not just enough to prove it worse than the best so far.
            try:
                score = self.best_score(child, depth - 1, False, -SCORE_INF, SCORE_INF)
            except SearchTimeout:
                logger.warning("Search deadline of %.2fs hit after %d nodes; %d column(s) scored statically",
                               self.time_limit, self.nodes, len(pending))
                break
            scores.append(MoveScore(col, score))
            pending.pop(0)

        # Columns left over after a timeout fall back to the static evaluation
        for col in pending:
            child = board.clone()
            child.drop(col, self.ai_piece)
            scores.append(MoveScore(col, evaluate(child, child.check_win(), 0, self.ai_piece)))
        scores.sort(key=lambda m: m.column)

        self._deadline = None
        logger.debug("Searched depth %d: %d nodes, cache size %d, hits %d, %.3fs",
                     depth, self.nodes, len(self.cache), self.cache.hits, time.monotonic() - start)
        return sorted(scores, key=lambda m: -m.score)

    def best_score(self, board: BoardState, depth: int, maximizing: bool, alpha: int, beta: int) -> int:
        self.nodes += 1
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SearchTimeout()

        # 1. Transposition cache
        key = TranspositionCache.make_key(board.shape, board.key, depth, maximizing)
        cached = self.cache.get(key, alpha, beta)
        if cached is not None:
            return cached

        # 2. Terminal: someone just won, search horizon, or no room left
        winner = board.check_win()
        if winner is not None or depth <= 0 or board.is_full():
            score = evaluate(board, winner, depth, self.ai_piece)
            self.cache.put(key, score, Bound.EXACT)
            return score

        # 3. Recursive search
        alpha_orig, beta_orig = alpha, beta
        piece = self.ai_piece if maximizing else self.opponent_piece
        best = -SCORE_INF if maximizing else SCORE_INF

        for col in legal_moves(board):
            child = board.clone()
            child.drop(col, piece)
            score = self.best_score(child, depth - 1, not maximizing, alpha, beta)

            if maximizing:
                best = max(best, score)
                alpha = max(alpha, best)
            else:
                best = min(best, score)
                beta = min(beta, best)

            if beta <= alpha:
                break  # Alpha-beta cutoff

        if best <= alpha_orig:
            bound = Bound.UPPER
        elif best >= beta_orig:
            bound = Bound.LOWER
        else:
            bound = Bound.EXACT
        self.cache.put(key, best, bound)
        return best
