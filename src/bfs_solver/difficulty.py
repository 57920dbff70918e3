"""
Difficulty scoring for Unblock puzzles.
"""

from enum import Enum
from typing import Tuple

from ..game.board import SIZE
from ..game.pieces import PieceRegistry
from .solver import BFSResult


class DifficultyLabel(Enum):
    """Difficulty labels for puzzles."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    BRUTAL = "Brutal"


# Inclusive upper score bound for each label; anything higher is Brutal
LABEL_THRESHOLDS = (
    (10, DifficultyLabel.EASY),
    (20, DifficultyLabel.MEDIUM),
    (35, DifficultyLabel.HARD),
)


class DifficultyScorer:
    """Scores puzzle difficulty based on solution and board characteristics."""

    @staticmethod
    def count_exit_blockers(pieces: PieceRegistry) -> int:
        """Number of distinct pieces between the prisoner and the exit."""
        prisoner = pieces.prisoner
        blockers = set()
        for piece in pieces:
            if piece.is_prisoner:
                continue
            for y, x in piece.cells():
                if y == prisoner.y and prisoner.x + prisoner.length <= x < SIZE:
                    blockers.add(piece.piece_id)
        return len(blockers)

    @staticmethod
    def score_puzzle(pieces: PieceRegistry, result: BFSResult) -> float:
        """Calculate difficulty score for a solved puzzle.

        Args:
            pieces: Initial pieces of the puzzle
            result: Solver result for those pieces

        Returns:
            Difficulty score
        """
        blockers = DifficultyScorer.count_exit_blockers(pieces)
        return 1.0 * result.solution_length + 0.5 * len(pieces) + 2.0 * blockers

    @staticmethod
    def get_difficulty_label(score: float) -> DifficultyLabel:
        for upper, label in LABEL_THRESHOLDS:
            if score <= upper:
                return label
        return DifficultyLabel.BRUTAL

    @staticmethod
    def score_and_label(
        pieces: PieceRegistry, result: BFSResult
    ) -> Tuple[float, DifficultyLabel]:
        """Score a solved puzzle; unsolved results have no move count to score."""
        if not result.success:
            raise ValueError(f"Cannot score a {result.status.value} puzzle")
        score = DifficultyScorer.score_puzzle(pieces, result)
        return score, DifficultyScorer.get_difficulty_label(score)
