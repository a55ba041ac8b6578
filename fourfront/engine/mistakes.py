"""
Mistake Model

Turns the search's ranked move list into a fallible decision. Most of the time
the top move is played; on a "mistake" roll the move is sampled from a
softmax over the scores whose temperature grows with how badly the roll missed.
"""

import math
import random
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from fourfront.engine.constants import MAX_TEMPERATURE, NO_MOVE
from fourfront.engine.search import MoveScore
from fourfront.models.enums import MoveReason


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class MoveRationale(BaseModel):
    """Everything that went into one decision. Informational only."""
    reason: MoveReason
    move: int
    roll: Optional[float] = None
    accuracy: float
    severity: float = 0.0
    temperature: float = 1.0
    chosen_rank: Optional[int] = None  # 0 = top-ranked move
    ranked: List[Tuple[int, int]] = Field(default_factory=list)  # (move, score), best first


class MistakeModel:
    def __init__(self, mistake_rate: float, rng: Optional[random.Random] = None,
                 max_temperature: float = MAX_TEMPERATURE):
        self.mistake_rate = mistake_rate
        self.accuracy = 1.0 - clamp(mistake_rate)
        self.max_temperature = max_temperature
        self.rng = rng if rng is not None else random.Random()

    def choose(self, ranked: Sequence[MoveScore]) -> MoveRationale:
        """Picks a move from a best-first ranking and records why."""
        pairs = [(m.column, m.score) for m in ranked]
        if not ranked:
            return MoveRationale(reason=MoveReason.NO_MOVES, move=NO_MOVE, accuracy=self.accuracy)

        roll = self.rng.random()
        if roll < self.accuracy or len(ranked) == 1:
            return MoveRationale(
                reason=MoveReason.BEST, move=ranked[0].column, roll=roll,
                accuracy=self.accuracy, chosen_rank=0, ranked=pairs
            )

        severity = clamp((roll - self.accuracy) / (1.0 - self.accuracy))
        temperature = 1.0 + severity * (self.max_temperature - 1.0)
        rank = self._sample(ranked, temperature)

        return MoveRationale(
            reason=MoveReason.BEST if rank == 0 else MoveReason.MISTAKE,
            move=ranked[rank].column,
            roll=roll,
            accuracy=self.accuracy,
            severity=severity,
            temperature=temperature,
            chosen_rank=rank,
            ranked=pairs,
        )

    def _sample(self, ranked: Sequence[MoveScore], temperature: float) -> int:
        # Subtracting the max only keeps exp() in range
        max_score = max(m.score for m in ranked)
        weights = [math.exp((m.score - max_score) / temperature) for m in ranked]
        threshold = self.rng.random() * sum(weights)

        cumulative = 0.0
        for i, weight in enumerate(weights):
            cumulative += weight
            if cumulative > threshold:
                return i
        return len(weights) - 1


def format_rationale(rationale: MoveRationale, name: Optional[str] = None) -> str:
    """Human-readable explanation built from the rationale record."""
    if rationale.reason is MoveReason.NO_MOVES or rationale.reason is MoveReason.GAME_OVER:
        return f"{name}: {rationale.reason}" if name else str(rationale.reason)

    who = f"{name} " if name else ""

    ranking = ", ".join(f"{move}:{score:+d}" for move, score in rationale.ranked)
    parts = [f"{who}{rationale.reason}: column {rationale.move}"]
    if rationale.chosen_rank is not None:
        parts.append(f"(rank {rationale.chosen_rank + 1} of {len(rationale.ranked)})")
    if rationale.roll is not None:
        parts.append(f"roll={rationale.roll:.3f} accuracy={rationale.accuracy:.3f}")
    if rationale.roll is not None and rationale.roll >= rationale.accuracy:
        parts.append(f"severity={rationale.severity:.3f} temperature={rationale.temperature:.2f}")
    parts.append(f"ranked=[{ranking}]")
    return " ".join(parts)
