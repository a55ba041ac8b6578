import unittest

from fourfront.engine.board import BoardState
from fourfront.engine.evaluator import evaluate, streak_weight
from fourfront.models.enums import Piece

X, O = Piece.X, Piece.O


class TestTerminalScores(unittest.TestCase):
    def test_faster_wins_score_higher(self):
        board = BoardState()
        self.assertEqual(evaluate(board, X, 3, X), 1003)
        self.assertEqual(evaluate(board, X, 0, X), 1000)
        self.assertEqual(evaluate(board, O, 3, X), -1003)
        self.assertEqual(evaluate(board, X, 2, O), -1002)


class TestHeuristicSnapshots(unittest.TestCase):
    """
    Fixed boards with hand-computed scores. Each streak is counted once from
    every member cell, so these numbers move if that weighting changes.
    """

    def test_empty_board(self):
        self.assertEqual(evaluate(BoardState(), None, 4, X), 0)

    def test_single_center_piece(self):
        board = BoardState()
        board.drop(3, X)
        # center +5, one open single in each of the four directions
        self.assertEqual(evaluate(board, None, 0, X), 9)
        self.assertEqual(evaluate(board, None, 0, O), -9)

    def test_edge_piece_scores_less_than_center(self):
        edge = BoardState()
        edge.drop(0, X)
        center = BoardState()
        center.drop(3, X)
        # The (1,1) diagonal from a corner has no open end
        self.assertEqual(evaluate(edge, None, 0, X), 3)
        self.assertGreater(evaluate(center, None, 0, X), evaluate(edge, None, 0, X))

    def test_pair_is_counted_from_both_cells(self):
        board = BoardState()
        board.drop(0, X)
        board.drop(1, X)
        # (5,0): pair 10 + vertical 1 + rising 1; (5,1): pair 10 + three singles
        self.assertEqual(evaluate(board, None, 0, X), 25)

    def test_open_three(self):
        board = BoardState()
        for col in (0, 1, 2):
            board.drop(col, X)
        self.assertEqual(evaluate(board, None, 0, X), 158)
        self.assertEqual(evaluate(board, None, 0, O), -158)

    def test_mixed_pieces(self):
        board = BoardState()
        board.drop(3, X)
        board.drop(2, O)
        self.assertEqual(evaluate(board, None, 0, X), 5)
        self.assertEqual(evaluate(board, None, 0, O), -5)

    def test_ranking_of_fixed_boards(self):
        three = BoardState()
        for col in (0, 1, 2):
            three.drop(col, X)
        pair = BoardState()
        pair.drop(0, X)
        pair.drop(1, X)
        single = BoardState()
        single.drop(3, X)
        scores = [evaluate(b, None, 0, X) for b in (three, pair, single)]
        self.assertEqual(scores, sorted(scores, reverse=True))


class TestStreakWeight(unittest.TestCase):
    def test_blocked_both_sides(self):
        board = BoardState()
        board.drop(0, O)
        board.drop(1, X)
        board.drop(2, O)
        self.assertEqual(streak_weight(board, 5, 1, 0, 1), 0)

    def test_complete_run(self):
        board = BoardState(width=4, height=4, win_length=3)
        for col in (0, 1, 2):
            board.drop(col, O)
        self.assertEqual(streak_weight(board, 3, 1, 0, 1), 100)

    def test_long_streak_without_weight(self):
        # Four in a row with win length 5 has no bucket of its own
        board = BoardState(width=7, height=6, win_length=5)
        for col in (0, 1, 2, 3):
            board.drop(col, X)
        self.assertEqual(streak_weight(board, 5, 0, 0, 1), 0)
        self.assertEqual(streak_weight(board, 5, 0, 1, 0), 1)


if __name__ == '__main__':
    unittest.main()
