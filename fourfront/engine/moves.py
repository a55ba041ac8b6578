from typing import List

from fourfront.engine.board import BoardState


def legal_moves(board: BoardState) -> List[int]:
    """Returns the open column indices in increasing order."""
    return [c for c in range(board.width) if board.is_column_open(c)]
