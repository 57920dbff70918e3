import sys
from typing import Callable, List, Optional, TextIO

from .board import SIZE
from .movement import Move, piece_label
from .pieces import PieceRegistry


class Colors:
    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
    GRAY = (128, 128, 128)
    LIGHT_GRAY = (200, 200, 200)
    DARK_GRAY = (64, 64, 64)
    RED = (220, 40, 40)
    BROWN = (160, 110, 60)
    DARK_BROWN = (110, 70, 30)


def cell_labels(pieces: PieceRegistry) -> List[List[str]]:
    labels = [[" "] * SIZE for _ in range(SIZE)]
    for piece in pieces:
        label = "Z" if piece.is_prisoner else piece_label(piece.piece_id)
        for y, x in piece.cells():
            labels[y][x] = label
    return labels


def render_text(pieces: PieceRegistry) -> str:
    """Boxed text picture of a board; the right wall is open on the exit row."""
    exit_row = pieces.prisoner.y
    border = "+" + "-" * (SIZE * 3) + "+"
    lines = [border]
    for y, row in enumerate(cell_labels(pieces)):
        body = "".join(label * 2 + " " for label in row)
        right_wall = " " if y == exit_row else "|"
        lines.append("|" + body + right_wall)
    lines.append(border)
    return "\n".join(lines)


def describe_move(pieces: PieceRegistry, move: Move) -> str:
    piece = pieces.get(move.piece_id)
    if piece is not None and piece.is_prisoner:
        label = "Z"
    else:
        label = piece_label(move.piece_id)
    return f"{label} {move.direction.name.lower()}"


class HeadlessVisualizer:
    """Prints a solution state by state on a text stream."""

    def __init__(
        self,
        states: List[PieceRegistry],
        moves: List[Move],
        stream: Optional[TextIO] = None,
    ):
        if len(states) != len(moves) + 1:
            raise ValueError(
                f"Expected {len(moves) + 1} states for {len(moves)} moves, "
                f"got {len(states)}"
            )
        self.states = states
        self.moves = moves
        self.stream = stream if stream is not None else sys.stdout

    def print_state(self, index: int) -> None:
        if index == 0:
            header = f"Start ({len(self.moves)} moves to go)"
        else:
            move = self.moves[index - 1]
            header = (
                f"Move {index}/{len(self.moves)}: "
                f"{describe_move(self.states[index - 1], move)}"
            )
        print(header, file=self.stream)
        print(render_text(self.states[index]), file=self.stream)

    def run(
        self, step: bool = False, wait: Optional[Callable[[str], object]] = None
    ) -> None:
        """Print every state; with ``step`` wait for ENTER between them."""
        if wait is None:
            wait = input
        for index in range(len(self.states)):
            self.print_state(index)
            if step and index < len(self.moves):
                wait("Press ENTER for next move")
        print("Run free, prisoner, run! :-)", file=self.stream)
