import random
import unittest

from fourfront.engine.board import BoardState, ColumnFull, ColumnOutOfRange
from fourfront.engine.moves import legal_moves
from fourfront.models.enums import Piece

X, O, E = Piece.X, Piece.O, Piece.EMPTY


def snapshot(board):
    return [list(row) for row in board.grid], board.ply_count, board.last_move, board.key


class TestBoardMechanics(unittest.TestCase):
    def test_fresh_board(self):
        board = BoardState()
        self.assertEqual((board.width, board.height, board.win_length), (7, 6, 4))
        self.assertIsNone(board.last_move)
        self.assertEqual(board.ply_count, 0)
        self.assertFalse(board.is_full())
        self.assertIsNone(board.check_win())
        self.assertEqual(legal_moves(board), list(range(7)))

    def test_drop_stacks_from_bottom(self):
        board = BoardState()
        self.assertEqual(board.drop(2, X), 5)
        self.assertEqual(board.last_move, (2, 5))
        self.assertEqual(board.drop(2, O), 4)
        self.assertEqual(board.last_move, (2, 4))
        self.assertEqual(board.ply_count, 2)
        self.assertIs(board.cell(5, 2), X)
        self.assertIs(board.cell(4, 2), O)

    def test_full_column_rejects_drop_without_changes(self):
        """Scenario: a column fully occupied cannot be played and stays intact."""
        board = BoardState()
        for i in range(board.height):
            board.drop(0, X if i % 2 == 0 else O)
        self.assertFalse(board.is_column_open(0))
        self.assertNotIn(0, legal_moves(board))

        before = snapshot(board)
        with self.assertRaises(ColumnFull):
            board.drop(0, X)
        self.assertEqual(snapshot(board), before)

    def test_out_of_range_column(self):
        board = BoardState()
        with self.assertRaises(ColumnOutOfRange):
            board.drop(7, X)
        with self.assertRaises(IndexError):
            board.drop(-1, X)
        self.assertFalse(board.is_column_open(7))
        self.assertEqual(board.ply_count, 0)

    def test_is_full(self):
        board = BoardState(width=2, height=2, win_length=2)
        for col in (0, 1, 0, 1):
            self.assertFalse(board.is_full())
            board.drop(col, X)
        self.assertTrue(board.is_full())
        self.assertEqual(legal_moves(board), [])

    def test_geometry_limits(self):
        with self.assertRaises(ValueError):
            BoardState(width=10)
        with self.assertRaises(ValueError):
            BoardState(width=4, height=3, win_length=4)
        with self.assertRaises(ValueError):
            BoardState(win_length=0)


class TestWinDetection(unittest.TestCase):
    def test_horizontal(self):
        board = BoardState()
        for col in (0, 1, 2):
            board.drop(col, X)
            self.assertIsNone(board.check_win())
        board.drop(3, X)
        self.assertIs(board.check_win(), X)

    def test_vertical(self):
        board = BoardState()
        for _ in range(3):
            board.drop(4, O)
        self.assertIsNone(board.check_win())
        board.drop(4, O)
        self.assertIs(board.check_win(), O)

    def test_diagonal_rising(self):
        # X at (5,0) (4,1) (3,2) (2,3), completed in the middle of the run
        board = BoardState.from_rows([
            list("_______"),
            list("_______"),
            list("___X___"),
            list("___O___"),
            list("_XOX___"),
            list("XOXO___"),
        ])
        self.assertIsNone(board.find_winner())
        board.drop(2, X)  # lands on row 3
        self.assertEqual(board.last_move, (2, 3))
        self.assertIs(board.check_win(), X)

    def test_diagonal_falling(self):
        board = BoardState.from_rows([
            list("_______"),
            list("_______"),
            list("O______"),
            list("XO_____"),
            list("XXO____"),
            list("XXX____"),
        ])
        board.drop(3, O)  # (5,3) completes \ from (2,0)
        self.assertIs(board.check_win(), O)

    def test_no_last_move_means_no_winner(self):
        board = BoardState.from_rows([list("____"), list("____"), list("OOO_"), list("XXXX")], win_length=4)
        self.assertIsNone(board.check_win())
        self.assertIs(board.find_winner(), X)

    def test_local_and_full_scan_agree(self):
        """Random playouts: check_win after each drop matches a full-board window scan."""
        rng = random.Random(1234)
        shapes = [(7, 6, 4), (4, 4, 3), (5, 4, 3), (9, 7, 5), (3, 3, 3)]
        for width, height, win_length in shapes:
            for _ in range(60):
                board = BoardState(width, height, win_length)
                piece = X
                while True:
                    moves = legal_moves(board)
                    if not moves:
                        break
                    board.drop(rng.choice(moves), piece)
                    local = board.check_win()
                    self.assertEqual(local, board.find_winner(), board.rows())
                    if local is not None:
                        break
                    piece = piece.opponent


class TestCloneAndEncoding(unittest.TestCase):
    def test_clone_isolation(self):
        board = BoardState()
        board.drop(3, X)
        before = snapshot(board)

        copy = board.clone()
        copy.drop(3, O)
        copy.drop(0, X)
        copy.grid[0][6] = O

        self.assertEqual(snapshot(board), before)
        self.assertEqual(copy.ply_count, 3)
        self.assertTrue(board.is_column_open(6))

    def test_key_tracks_grid_not_move_order(self):
        a = BoardState()
        a.drop(0, X)
        a.drop(1, O)
        a.drop(2, X)
        b = BoardState()
        b.drop(2, X)
        b.drop(1, O)
        b.drop(0, X)
        self.assertEqual(a.key, b.key)
        self.assertEqual(a, b)

        c = BoardState()
        c.drop(0, O)
        c.drop(1, X)
        c.drop(2, O)
        self.assertNotEqual(a.key, c.key)
        self.assertNotEqual(BoardState().key, a.key)

    def test_from_rows_round_trip(self):
        rows = [
            list("_______"),
            list("_______"),
            list("_______"),
            list("___O___"),
            list("__XX___"),
            list("_OXOX__"),
        ]
        board = BoardState.from_rows(rows)
        self.assertEqual(board.rows(), rows)
        self.assertEqual(board.ply_count, 7)
        self.assertIsNone(board.last_move)
        self.assertEqual(board.key, BoardState.from_rows(board.rows()).key)

        # Dropping continues on top of the loaded stacks
        self.assertEqual(board.drop(3, X), 2)

    def test_from_rows_rejects_bad_grids(self):
        with self.assertRaises(ValueError):
            BoardState.from_rows([["_", "_"], ["_"]], win_length=1)
        with self.assertRaises(ValueError):
            BoardState.from_rows([["_", "Z"], ["_", "X"]], win_length=2)
        with self.assertRaises(ValueError):
            # X floating above an empty cell
            BoardState.from_rows([["X", "_"], ["_", "O"]], win_length=2)
        with self.assertRaises(ValueError):
            BoardState.from_rows([], win_length=1)

    def test_from_rows_last_move(self):
        rows = [list("____"), list("____"), list("_X__"), list("OX__")]
        board = BoardState.from_rows(rows, win_length=3, last_move=(1, 2))
        self.assertEqual(board.last_move, (1, 2))
        with self.assertRaises(ValueError):
            BoardState.from_rows(rows, win_length=3, last_move=(3, 3))

    def test_to_text_names_opponent(self):
        board = BoardState(width=4, height=4, win_length=3)
        board.drop(1, X)
        text = board.to_text("Phantom")
        self.assertTrue(text.startswith("VS. Phantom"))
        self.assertIn("| _ | X | _ | _ |", text)
        self.assertTrue(text.rstrip().endswith("1   2   3   4"))
        self.assertNotIn("VS.", board.to_text())


if __name__ == '__main__':
    unittest.main()
