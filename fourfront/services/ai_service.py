"""
AI Service - request/response adapter around the search engine.

Turns an incoming move request into a BoardState, resolves the AI's settings
(explicit request values, then a named opponent preset, then server defaults),
runs a fresh AIPlayer and shapes the answer for the API layer.

A new AIPlayer (and so a new transposition cache) is built for every request,
which keeps concurrent requests from sharing mutable search state.
"""

import logging
import time
from typing import Optional

from fourfront.core.config import Settings, settings as default_settings
from fourfront.core.opponent_registry import OpponentConfig, OpponentRegistry, registry as default_registry
from fourfront.engine.ai import AIPlayer
from fourfront.engine.board import BoardState
from fourfront.schemas.ai_schema import AIMoveRequest, AIMoveResponse, RankedMove

logger = logging.getLogger(__name__)


class UnknownOpponent(LookupError):
    def __init__(self, key: str):
        super().__init__(f"Unknown opponent preset: {key}")
        self.key = key


class AIService:
    def __init__(self, settings: Settings = default_settings, registry: OpponentRegistry = default_registry):
        self.settings = settings
        self.registry = registry

    def build_player(self, request: AIMoveRequest) -> AIPlayer:
        """Resolves depth, mistake rate and name for this request."""
        preset: Optional[OpponentConfig] = None
        if request.opponent:
            preset = self.registry.get(request.opponent)
            if preset is None:
                raise UnknownOpponent(request.opponent)

        depth = request.ai_depth or (preset.depth if preset else self.settings.default_depth)
        depth = min(depth, self.settings.max_depth)

        if request.mistake_rate is not None:
            mistake_rate = request.mistake_rate
        elif preset:
            mistake_rate = preset.mistake_rate
        else:
            mistake_rate = self.settings.default_mistake_rate

        name = request.ai_name or (preset.label if preset else self.settings.default_ai_name)

        return AIPlayer(
            ai_piece=request.ai_piece,
            depth=depth,
            mistake_rate=mistake_rate,
            name=name,
            time_limit=self.settings.time_limit or None,
        )

    def get_move(self, request: AIMoveRequest) -> AIMoveResponse:
        """
        Picks the AI's move for the submitted board.
        Raises ValueError for boards that break the geometry or gravity rules.
        """
        start_time = time.time()
        board = BoardState.from_rows(request.board, win_length=request.win_length)
        ai = self.build_player(request)
        top_k = request.top_k if request.top_k is not None else self.settings.ranked_moves

        # A board that already holds a winning run gets no move
        winner = board.find_winner()
        if winner is not None:
            decision = ai.game_over()
            ranked = []
        else:
            # One search serves both the move and the ranking
            decision = ai.decide(board)
            ranked = decision.rationale.ranked[:top_k]

        duration = round(time.time() - start_time, 3)
        logger.info("AI move request: %s as %s depth=%d -> column %d in %.3fs",
                    ai.name, ai.ai_piece, ai.depth, decision.column, duration)

        return AIMoveResponse(
            move=decision.column,
            explanation=decision.reasoning,
            ranked_moves=[RankedMove(move=move, score=score) for move, score in ranked],
            ai_name=ai.name,
            winner=winner,
        )


# Singleton instance
ai_service = AIService()
