"""
Tests for puzzle difficulty scoring.
"""

import pytest

from src.bfs_solver.difficulty import DifficultyLabel, DifficultyScorer
from src.bfs_solver.solver import BFSSolver
from src.game.board import CellKind, Orientation, Piece
from src.game.levels import parse_layout
from src.game.pieces import PieceRegistry

SEVEN_MOVES = """\
AAB..C
..B..C
ZZB..C
...EE.
F.....
F.GG..
"""


class TestDifficultyScorer:
    """Test difficulty scores and labels."""

    @pytest.mark.parametrize(
        "score, label",
        [
            (0, DifficultyLabel.EASY),
            (10, DifficultyLabel.EASY),
            (10.5, DifficultyLabel.MEDIUM),
            (20, DifficultyLabel.MEDIUM),
            (35, DifficultyLabel.HARD),
            (35.5, DifficultyLabel.BRUTAL),
        ],
    )
    def test_label_thresholds(self, score, label):
        assert DifficultyScorer.get_difficulty_label(score) == label

    def test_exit_blockers(self):
        assert DifficultyScorer.count_exit_blockers(parse_layout(SEVEN_MOVES)) == 2

    def test_blockers_left_of_prisoner_ignored(self):
        pieces = PieceRegistry(
            [
                Piece(0, CellKind.BLOCK, Orientation.VERTICAL, 2, 1, 0),
                Piece(1, CellKind.PRISONER, Orientation.HORIZONTAL, 2, 2, 2),
            ]
        )
        assert DifficultyScorer.count_exit_blockers(pieces) == 0

    def test_single_blocker_is_easy(self):
        pieces = PieceRegistry(
            [
                Piece(0, CellKind.PRISONER, Orientation.HORIZONTAL, 2, 2, 0),
                Piece(1, CellKind.BLOCK, Orientation.VERTICAL, 2, 2, 3),
            ]
        )
        result = BFSSolver().solve(pieces)
        score, label = DifficultyScorer.score_and_label(pieces, result)
        assert score == 4.0
        assert label == DifficultyLabel.EASY

    def test_seven_move_puzzle(self):
        pieces = parse_layout(SEVEN_MOVES)
        result = BFSSolver().solve(pieces)
        score, label = DifficultyScorer.score_and_label(pieces, result)
        assert score == 7 + 0.5 * 7 + 2 * 2
        assert label == DifficultyLabel.MEDIUM

    def test_unsolved_result_is_not_scored(self):
        pieces = PieceRegistry(
            [
                Piece(0, CellKind.PRISONER, Orientation.HORIZONTAL, 2, 2, 0),
                Piece(1, CellKind.BLOCK, Orientation.VERTICAL, 3, 0, 3),
                Piece(2, CellKind.BLOCK, Orientation.VERTICAL, 3, 3, 3),
            ]
        )
        result = BFSSolver().solve(pieces)
        with pytest.raises(ValueError, match="unsolvable"):
            DifficultyScorer.score_and_label(pieces, result)
