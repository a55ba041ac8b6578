from enum import StrEnum

class Piece(StrEnum):
    EMPTY = "_"
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Piece":
        if self is Piece.X:
            return Piece.O
        if self is Piece.O:
            return Piece.X
        raise ValueError("Empty cell has no opponent")

class MoveReason(StrEnum):
    BEST = "chose best"
    MISTAKE = "sampled weaker move"
    NO_MOVES = "no valid moves available"
    GAME_OVER = "game already decided"
