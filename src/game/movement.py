from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import Board, Direction, Orientation, Piece
from .exceptions import IllegalMoveError
from .pieces import PieceRegistry

# Expansion order for every piece. Directions whose axis does not match the
# piece's orientation are skipped.
MOVE_RULES: Tuple[Tuple[Orientation, Direction], ...] = (
    (Orientation.HORIZONTAL, Direction.LEFT),
    (Orientation.HORIZONTAL, Direction.RIGHT),
    (Orientation.VERTICAL, Direction.UP),
    (Orientation.VERTICAL, Direction.DOWN),
)


@dataclass(frozen=True)
class Move:
    """One piece shifted a single cell."""

    piece_id: int
    direction: Direction

    def reversed(self) -> "Move":
        return Move(self.piece_id, self.direction.opposite())

    def __str__(self) -> str:
        return f"piece {self.piece_id} {self.direction.name.lower()}"


def piece_label(piece_id: int) -> str:
    """Letter used for an ordinary piece in text output (A-Y; Z is the prisoner)."""
    if 0 <= piece_id < 25:
        return chr(ord("A") + piece_id)
    if 25 <= piece_id < 51:
        return chr(ord("a") + piece_id - 25)
    return str(piece_id)


def target_cell(piece: Piece, direction: Direction) -> Optional[Tuple[int, int]]:
    """Cell the piece would enter when moved one step, or None if it can't slide that way."""
    if direction.orientation != piece.orientation:
        return None
    if direction == Direction.LEFT:
        return (piece.y, piece.x - 1)
    if direction == Direction.RIGHT:
        return (piece.y, piece.x + piece.length)
    if direction == Direction.UP:
        return (piece.y - 1, piece.x)
    return (piece.y + piece.length, piece.x)


def can_move(piece: Piece, board: Board, direction: Direction) -> bool:
    cell = target_cell(piece, direction)
    if cell is None:
        return False
    return board.is_empty(*cell)


def is_legal_move(pieces: PieceRegistry, board: Board, move: Move) -> bool:
    piece = pieces.get(move.piece_id)
    if piece is None:
        return False
    return can_move(piece, board, move.direction)


def generate_moves(
    pieces: PieceRegistry, board: Board
) -> List[Tuple[PieceRegistry, Move]]:
    """All one-step successors of a state, each a fresh copy of the pieces."""
    successors = []
    for piece in pieces:
        for orientation, direction in MOVE_RULES:
            if piece.orientation != orientation:
                continue
            if not can_move(piece, board, direction):
                continue
            copied = pieces.copy()
            copied.move_piece(piece.piece_id, direction)
            successors.append((copied, Move(piece.piece_id, direction)))
    return successors


def apply_move(
    pieces: PieceRegistry, move: Move, board: Optional[Board] = None
) -> PieceRegistry:
    """Return a copy of ``pieces`` with ``move`` applied."""
    if board is None:
        board = pieces.render()
    piece = pieces.get(move.piece_id)
    if piece is None:
        raise IllegalMoveError(f"No piece with id {move.piece_id}")
    if move.direction.orientation != piece.orientation:
        raise IllegalMoveError(
            f"Piece {move.piece_id} is {piece.orientation.value} "
            f"and cannot move {move.direction.name.lower()}"
        )
    if not can_move(piece, board, move.direction):
        raise IllegalMoveError(
            f"Piece {move.piece_id} cannot move {move.direction.name.lower()}: "
            f"{target_cell(piece, move.direction)} is blocked or off the board"
        )
    moved = pieces.copy()
    moved.move_piece(move.piece_id, move.direction)
    return moved
