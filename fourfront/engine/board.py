import logging
from typing import List, Optional, Sequence, Tuple

from fourfront.models.enums import Piece

# Logger setup
logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 6
DEFAULT_WIN_LENGTH = 4
MAX_WIDTH = 9
MAX_HEIGHT = 16

# Horizontal, Vertical, Diagonal \, Diagonal /
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (1, -1)]

# 2 bits per cell in the packed key
_CELL_CODES = {Piece.EMPTY: 0, Piece.X: 1, Piece.O: 2}


class BoardError(Exception):
    """Base class for illegal operations on a BoardState."""


class ColumnFull(BoardError):
    def __init__(self, column: int):
        super().__init__(f"Column {column} is full")
        self.column = column


class ColumnOutOfRange(BoardError, IndexError):
    def __init__(self, column: int, width: int):
        super().__init__(f"Column {column} is outside 0..{width - 1}")
        self.column = column


class BoardState:
    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 win_length: int = DEFAULT_WIN_LENGTH):
        """
        Board uses (row, col) indexing.
        Row 0 is the TOP of the board, row height-1 is the BOTTOM.
        last_move is stored as (column, row).
        """
        if not 1 <= width <= MAX_WIDTH:
            raise ValueError(f"Board width must be between 1 and {MAX_WIDTH}, got {width}")
        if not 1 <= height <= MAX_HEIGHT:
            raise ValueError(f"Board height must be between 1 and {MAX_HEIGHT}, got {height}")
        if not 1 <= win_length <= min(width, height):
            raise ValueError(
                f"Win length {win_length} must be between 1 and min(width, height) = {min(width, height)}"
            )

        self.width = width
        self.height = height
        self.win_length = win_length
        self.grid: List[List[Piece]] = [[Piece.EMPTY for _ in range(width)] for _ in range(height)]
        self.last_move: Optional[Tuple[int, int]] = None
        self.ply_count = 0
        # Number of pieces stacked in each column
        self._heights = [0] * width
        self._key = 0

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]], win_length: int = DEFAULT_WIN_LENGTH,
                  last_move: Optional[Tuple[int, int]] = None) -> "BoardState":
        """
        Builds a board from a top-down grid of cell symbols ("_", "X", "O").
        Rejects ragged grids, unknown symbols and pieces floating over empty cells.
        """
        if not rows or not rows[0]:
            raise ValueError("Board must have at least one row and one column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Board rows must all have the same length")

        board = cls(width=width, height=len(rows), win_length=win_length)
        for r, row in enumerate(rows):
            for c, symbol in enumerate(row):
                try:
                    piece = Piece(symbol)
                except ValueError:
                    raise ValueError(f"Unknown cell symbol {symbol!r} at row {r}, column {c}") from None
                if piece is Piece.EMPTY:
                    continue
                # Gravity: the cell below must be occupied (or be the floor)
                if r + 1 < board.height and Piece(rows[r + 1][c]) is Piece.EMPTY:
                    raise ValueError(f"Piece at row {r}, column {c} is floating above an empty cell")
                board._place(r, c, piece)

        if last_move is not None:
            col, row = last_move
            if not (0 <= col < board.width and 0 <= row < board.height) or board.grid[row][col] is Piece.EMPTY:
                raise ValueError(f"Last move {last_move} does not point at an occupied cell")
            board.last_move = (col, row)
        return board

    # --- Accessors ---

    @property
    def key(self) -> int:
        """Packed integer encoding of the grid (2 bits per cell)."""
        return self._key

    @property
    def shape(self) -> Tuple[int, int, int]:
        """(width, height, win_length); the packed key is only meaningful within one shape."""
        return (self.width, self.height, self.win_length)

    def cell(self, row: int, col: int) -> Piece:
        return self.grid[row][col]

    def rows(self) -> List[List[str]]:
        """Top-down grid of plain symbols, the inverse of from_rows."""
        return [[str(piece) for piece in row] for row in self.grid]

    # --- Moves ---

    def is_column_open(self, column: int) -> bool:
        """True iff the top cell of the column is empty."""
        if column < 0 or column >= self.width:
            return False
        return self.grid[0][column] is Piece.EMPTY

    def is_full(self) -> bool:
        return self.ply_count == self.width * self.height

    def drop(self, column: int, piece: Piece) -> int:
        """
        Drops a piece into the lowest empty cell of the column and returns its row.
        Raises ColumnOutOfRange or ColumnFull without touching the grid.
        """
        if column < 0 or column >= self.width:
            raise ColumnOutOfRange(column, self.width)
        if piece is Piece.EMPTY:
            raise ValueError("Cannot drop an empty piece")
        if self._heights[column] >= self.height:
            raise ColumnFull(column)

        row = self.height - 1 - self._heights[column]
        self._place(row, column, piece)
        self.last_move = (column, row)
        return row

    def _place(self, row: int, col: int, piece: Piece):
        self.grid[row][col] = piece
        self._heights[col] += 1
        self.ply_count += 1
        self._key |= _CELL_CODES[piece] << (2 * (row * self.width + col))

    # --- Win detection ---

    def check_win(self) -> Optional[Piece]:
        """Checks for a winning run through the last placed piece."""
        if self.last_move is None:
            return None
        col, row = self.last_move
        piece = self.grid[row][col]
        if piece is Piece.EMPTY:
            return None

        for dr, dc in DIRECTIONS:
            count = 1
            count += self._count_direction(row, col, dr, dc, piece)
            count += self._count_direction(row, col, -dr, -dc, piece)
            if count >= self.win_length:
                return piece
        return None

    def _count_direction(self, row: int, col: int, dr: int, dc: int, piece: Piece) -> int:
        matched = 0
        for step in range(1, self.win_length):
            r, c = row + dr * step, col + dc * step
            if 0 <= r < self.height and 0 <= c < self.width and self.grid[r][c] is piece:
                matched += 1
            else:
                break
        return matched

    def find_winner(self) -> Optional[Piece]:
        """
        Scans every window of win_length cells on the board.
        Unlike check_win this does not need last_move, so it works on boards
        loaded from an external grid.
        """
        n = self.win_length
        for r in range(self.height):
            for c in range(self.width):
                piece = self.grid[r][c]
                if piece is Piece.EMPTY:
                    continue
                for dr, dc in DIRECTIONS:
                    end_r, end_c = r + dr * (n - 1), c + dc * (n - 1)
                    if not (0 <= end_r < self.height and 0 <= end_c < self.width):
                        continue
                    if all(self.grid[r + dr * i][c + dc * i] is piece for i in range(1, n)):
                        return piece
        return None

    # --- Copying ---

    def clone(self) -> "BoardState":
        copy = BoardState.__new__(BoardState)
        copy.width = self.width
        copy.height = self.height
        copy.win_length = self.win_length
        copy.grid = [list(row) for row in self.grid]
        copy.last_move = self.last_move
        copy.ply_count = self.ply_count
        copy._heights = list(self._heights)
        copy._key = self._key
        return copy

    # --- Formatting ---

    def to_text(self, opponent_name: Optional[str] = None) -> str:
        """ASCII grid with 1-based column numbers underneath."""
        lines = []
        if opponent_name:
            lines.append(f"VS. {opponent_name}")
            lines.append("")
        for row in self.grid:
            lines.append("| " + " | ".join(str(piece) for piece in row) + " |")
        lines.append("  " + "   ".join(str(i + 1) for i in range(self.width)))
        return "\n".join(lines)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return (self.width, self.height, self.win_length, self.grid) == \
            (other.width, other.height, other.win_length, other.grid)

    def __repr__(self) -> str:
        return (f"BoardState(width={self.width}, height={self.height}, "
                f"win_length={self.win_length}, ply_count={self.ply_count})")
