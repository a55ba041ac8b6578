from typing import Optional

from fourfront.engine.board import BoardState, DIRECTIONS
from fourfront.engine.constants import CENTER_WEIGHT, STREAK_COMPLETE, STREAK_WEIGHTS, WIN_SCORE
from fourfront.models.enums import Piece


def evaluate(board: BoardState, winner: Optional[Piece], depth_remaining: int, ai_piece: Piece) -> int:
    """
    Scores a board from ai_piece's perspective (positive favors ai_piece).

    Terminal positions score WIN_SCORE plus the remaining depth, so a win found
    earlier in the search beats a later one and a distant loss is preferred
    over an imminent one.

    Non-terminal positions sum two heuristics:
      - center control: +/-CENTER_WEIGHT for every piece in the middle column
      - streak potential: streak_weight() for every occupied cell in each of
        the four directions, signed by owner. A streak is counted once from
        each of its member cells; longer streaks are weighted up on purpose.
    """
    if winner is ai_piece:
        return WIN_SCORE + depth_remaining
    if winner is not None:
        return -WIN_SCORE - depth_remaining

    score = 0
    center = board.width // 2
    for r in range(board.height):
        piece = board.grid[r][center]
        if piece is ai_piece:
            score += CENTER_WEIGHT
        elif piece is not Piece.EMPTY:
            score -= CENTER_WEIGHT

    for r in range(board.height):
        for c in range(board.width):
            piece = board.grid[r][c]
            if piece is Piece.EMPTY:
                continue
            sign = 1 if piece is ai_piece else -1
            for dr, dc in DIRECTIONS:
                score += sign * streak_weight(board, r, c, dr, dc)
    return score


def streak_weight(board: BoardState, row: int, col: int, dr: int, dc: int) -> int:
    """Weight of the streak through (row, col) along (dr, dc), looking at most win_length-1 cells each way."""
    piece = board.grid[row][col]
    streak = 1
    open_ends = 0

    for sign in (1, -1):
        for step in range(1, board.win_length):
            r, c = row + sign * dr * step, col + sign * dc * step
            if not (0 <= r < board.height and 0 <= c < board.width):
                break
            cell = board.grid[r][c]
            if cell is piece:
                streak += 1
            elif cell is Piece.EMPTY:
                open_ends += 1
                break
            else:
                break

    if streak >= board.win_length:
        return STREAK_COMPLETE
    if open_ends > 0:
        return STREAK_WEIGHTS.get(streak, 0)
    return 0
