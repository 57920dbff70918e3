from typing import List, Optional


class PuzzleError(Exception):
    """Base exception class for Unblock puzzle errors."""

    pass


class InvalidPuzzleError(PuzzleError, ValueError):
    """Raised when a piece list does not describe a legal 6x6 puzzle."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class LayoutParseError(InvalidPuzzleError):
    """Raised when a text layout or level file cannot be turned into pieces."""

    pass


class IllegalMoveError(PuzzleError, ValueError):
    """Raised when a move is applied that the movement rules forbid."""

    pass


class SolverInvariantError(PuzzleError, RuntimeError):
    """Raised when the search bookkeeping is inconsistent (a bug, not bad input)."""

    pass
