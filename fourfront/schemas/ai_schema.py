from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from fourfront.core.config import settings
from fourfront.models.enums import Piece

class AIMoveRequest(BaseModel):
    # Accept both the camelCase wire names and the python field names
    model_config = ConfigDict(populate_by_name=True)

    board: List[List[str]]
    ai_piece: Piece = Field(default=Piece.X, alias="aiPiece")
    ai_depth: Optional[int] = Field(default=None, alias="aiDepth", ge=1)
    mistake_rate: Optional[float] = Field(default=None, alias="mistakeRate", ge=0.0, le=1.0)
    ai_name: Optional[str] = Field(default=None, alias="aiName")
    win_length: int = Field(default=4, alias="winLength", ge=1)
    # Named preset from the opponent registry; explicit depth/rate still win
    opponent: Optional[str] = None
    top_k: Optional[int] = Field(default=None, alias="topK", ge=0)

    @field_validator("board")
    @classmethod
    def check_board(cls, board: List[List[str]]) -> List[List[str]]:
        if not board or not board[0]:
            raise ValueError("board must have at least one row and one column")
        width = len(board[0])
        for row in board:
            if len(row) != width:
                raise ValueError("board rows must all have the same length")
            for symbol in row:
                if symbol not in (Piece.EMPTY, Piece.X, Piece.O):
                    raise ValueError(f"unknown cell symbol {symbol!r}")
        return board

    @field_validator("ai_piece")
    @classmethod
    def check_piece(cls, piece: Piece) -> Piece:
        if piece is Piece.EMPTY:
            raise ValueError("aiPiece must be 'X' or 'O'")
        return piece

    @field_validator("ai_depth")
    @classmethod
    def check_depth(cls, depth: Optional[int]) -> Optional[int]:
        if depth is not None and depth > settings.max_depth:
            raise ValueError(f"aiDepth must be at most {settings.max_depth}")
        return depth

class RankedMove(BaseModel):
    move: int
    score: int


class AIMoveResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    move: int
    explanation: str
    ranked_moves: List[RankedMove] = Field(default_factory=list, alias="rankedMoves")
    ai_name: str = Field(alias="aiName")
    winner: Optional[Piece] = None

class OpponentSummary(BaseModel):
    id: str
    label: str
    depth: int
    mistake_rate: float = Field(alias="mistakeRate")
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)
