from fastapi import APIRouter, HTTPException
from typing import List

from fourfront.core.opponent_registry import registry
from fourfront.engine.board import BoardError
from fourfront.schemas.ai_schema import AIMoveRequest, AIMoveResponse, OpponentSummary
from fourfront.services.ai_service import UnknownOpponent, ai_service

router = APIRouter()

# Plain `def`: the search is CPU bound, FastAPI runs it in its threadpool
@router.post("/move", response_model=AIMoveResponse)
def get_ai_move(payload: AIMoveRequest):
    """
    Expecting: { "board": [["_", ...], ...], "aiPiece": "X", "aiDepth": 4,
                 "mistakeRate": 0.1, "aiName": "AI" }
    Returns the chosen column (-1 if none), an explanation and the top ranked moves.
    """
    try:
        return ai_service.get_move(payload)
    except UnknownOpponent as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (BoardError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/opponents", response_model=List[OpponentSummary])
def list_opponents():
    """Returns the configured AI presets."""
    return [
        OpponentSummary(
            id=key,
            label=cfg.label,
            depth=cfg.depth,
            mistake_rate=cfg.mistake_rate,
            description=cfg.description,
        )
        for key, cfg in registry.list_all().items()
    ]
