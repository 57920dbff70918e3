"""
BFS solver for the 6x6 Unblock sliding-block puzzle.

Finds minimum-move solutions that let the prisoner escape.
"""

from .difficulty import DifficultyLabel, DifficultyScorer
from .reconstruct import ROOT, ParentEntry, reconstruct_path
from .solver import BFSResult, BFSSolver, SolveStatus, is_solved

__all__ = [
    "BFSSolver",
    "BFSResult",
    "SolveStatus",
    "is_solved",
    "ROOT",
    "ParentEntry",
    "reconstruct_path",
    "DifficultyScorer",
    "DifficultyLabel",
]
