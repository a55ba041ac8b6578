import logging
import random
from typing import List, Optional

from pydantic import BaseModel

from fourfront.engine.board import BoardState
from fourfront.engine.constants import NO_MOVE
from fourfront.engine.mistakes import MistakeModel, MoveRationale, format_rationale
from fourfront.engine.search import MoveScore, SearchEngine
from fourfront.engine.transposition import TranspositionCache
from fourfront.models.enums import MoveReason, Piece

logger = logging.getLogger(__name__)


class MoveDecision(BaseModel):
    reasoning: str
    column: int
    rationale: MoveRationale


class AIPlayer:
    """
    Computer opponent: alpha-beta search plus a configurable chance of mistakes.

    Each instance owns its own transposition cache. Do not share one instance
    between concurrent requests; build one per call instead.
    """

    def __init__(self, ai_piece: Piece = Piece.O, depth: int = 4, mistake_rate: float = 0.1,
                 name: str = "AI", rng: Optional[random.Random] = None,
                 time_limit: Optional[float] = None):
        ai_piece = Piece(ai_piece)
        if ai_piece is Piece.EMPTY:
            raise ValueError("AI piece must be X or O")
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        self.ai_piece = ai_piece
        self.opponent_piece = ai_piece.opponent
        self.depth = depth
        self.mistake_rate = mistake_rate
        self.name = name

        self.cache = TranspositionCache()
        self.engine = SearchEngine(ai_piece, cache=self.cache, time_limit=time_limit)
        self.mistakes = MistakeModel(mistake_rate, rng=rng)

        self.last_decision: Optional[MoveDecision] = None

    @property
    def last_explanation(self) -> Optional[str]:
        return self.last_decision.reasoning if self.last_decision else None

    def decide(self, board: BoardState) -> MoveDecision:
        """Searches the board and returns the move to play with its rationale."""
        ranked = self.engine.score_moves(board, self.depth)
        rationale = self.mistakes.choose(ranked)

        decision = MoveDecision(
            reasoning=format_rationale(rationale, self.name),
            column=rationale.move,
            rationale=rationale,
        )
        self.last_decision = decision

        if rationale.reason is MoveReason.NO_MOVES:
            logger.info("%s has no valid moves", self.name)
        else:
            logger.info("%s plays column %d (%s, rank %s)", self.name, rationale.move,
                        rationale.reason, rationale.chosen_rank)
        return decision

    def choose_move(self, board: BoardState) -> int:
        """Returns the column to play, or NO_MOVE (-1) if the board is full."""
        return self.decide(board).column

    def get_ranked_moves(self, board: BoardState, count: int) -> List[MoveScore]:
        """Top-N (column, score) pairs, independent of the mistake draw."""
        if count <= 0:
            return []
        return self.engine.score_moves(board, self.depth)[:count]

    def game_over(self, reason: MoveReason = MoveReason.GAME_OVER) -> MoveDecision:
        """Records a decision for a board that needs no search."""
        rationale = MoveRationale(reason=reason, move=NO_MOVE, accuracy=self.mistakes.accuracy)
        self.last_decision = MoveDecision(
            reasoning=format_rationale(rationale, self.name), column=NO_MOVE, rationale=rationale
        )
        return self.last_decision
