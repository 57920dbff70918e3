"""
Board primitives for the 6x6 Unblock puzzle.

Coordinates are (y, x) pairs:
- y: row coordinate (0-5, top to bottom)
- x: column coordinate (0-5, left to right)

The prisoner escapes through the gap in the right-hand wall of its own row.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

SIZE = 6
PIECE_LENGTHS = (2, 3)

# Two bits per cell, 36 cells -> 72 bits -> 9 bytes
KEY_BYTES = SIZE * SIZE * 2 // 8

BoardKey = bytes


class CellKind(Enum):
    EMPTY = 0
    BLOCK = 1
    PRISONER = 2


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def orientation(self) -> Orientation:
        """The axis a piece must lie along to move this way."""
        if self.dx:
            return Orientation.HORIZONTAL
        return Orientation.VERTICAL

    def opposite(self) -> "Direction":
        opposites = {
            Direction.UP: Direction.DOWN,
            Direction.DOWN: Direction.UP,
            Direction.LEFT: Direction.RIGHT,
            Direction.RIGHT: Direction.LEFT,
        }
        return opposites[self]


@dataclass
class Piece:
    """A rigid 1xL or Lx1 block. Only (y, x) ever changes after parsing."""

    piece_id: int
    kind: CellKind
    orientation: Orientation
    length: int
    y: int
    x: int

    @property
    def is_prisoner(self) -> bool:
        return self.kind == CellKind.PRISONER

    @property
    def is_horizontal(self) -> bool:
        return self.orientation == Orientation.HORIZONTAL

    @property
    def position(self) -> Tuple[int, int]:
        return (self.y, self.x)

    def cells(self) -> Iterator[Tuple[int, int]]:
        for i in range(self.length):
            if self.is_horizontal:
                yield (self.y, self.x + i)
            else:
                yield (self.y + i, self.x)

    def copy(self) -> "Piece":
        return Piece(
            self.piece_id, self.kind, self.orientation, self.length, self.y, self.x
        )

    def __str__(self) -> str:
        name = "prisoner" if self.is_prisoner else f"piece {self.piece_id}"
        return (
            f"{name} ({self.orientation.value}, length {self.length}) "
            f"at ({self.y}, {self.x})"
        )


class Board:
    """Rendered 6x6 occupancy grid of a piece list.

    The grid is derived data: it is rebuilt from the pieces whenever they move
    and is never edited on its own.
    """

    def __init__(self, grid: Optional[np.ndarray] = None):
        if grid is None:
            grid = np.zeros((SIZE, SIZE), dtype=np.uint8)
        self.grid = grid

    @classmethod
    def render(cls, pieces: Iterable[Piece]) -> "Board":
        grid = np.zeros((SIZE, SIZE), dtype=np.uint8)
        for piece in pieces:
            if piece.is_horizontal:
                grid[piece.y, piece.x : piece.x + piece.length] = piece.kind.value
            else:
                grid[piece.y : piece.y + piece.length, piece.x] = piece.kind.value
        return cls(grid)

    def key(self) -> BoardKey:
        """Pack the cell kinds into a fixed-size 9 byte key.

        Piece identity is not part of the key; the prisoner label is.
        """
        low_bits = np.unpackbits(self.grid.reshape(-1, 1), axis=1)[:, -2:]
        return np.packbits(low_bits.reshape(-1)).tobytes()

    @classmethod
    def from_key(cls, key: BoardKey) -> "Board":
        if len(key) != KEY_BYTES:
            raise ValueError(f"Board key must be {KEY_BYTES} bytes, got {len(key)}")
        bits = np.unpackbits(np.frombuffer(key, dtype=np.uint8)).reshape(-1, 2)
        grid = (bits[:, 0] * 2 + bits[:, 1]).astype(np.uint8)
        return cls(grid.reshape(SIZE, SIZE))

    def is_valid_position(self, y: int, x: int) -> bool:
        return 0 <= y < SIZE and 0 <= x < SIZE

    def get_cell_kind(self, y: int, x: int) -> Optional[CellKind]:
        if not self.is_valid_position(y, x):
            return None
        return CellKind(int(self.grid[y, x]))

    def is_empty(self, y: int, x: int) -> bool:
        return self.get_cell_kind(y, x) == CellKind.EMPTY

    def find_cells_by_kind(self, kind: CellKind) -> List[Tuple[int, int]]:
        ys, xs = np.nonzero(self.grid == kind.value)
        return [(int(y), int(x)) for y, x in zip(ys, xs)]

    def copy(self) -> "Board":
        return Board(self.grid.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    def __hash__(self) -> int:
        return hash(self.key())

    def __str__(self) -> str:
        cell_symbols = {
            CellKind.EMPTY: ".",
            CellKind.BLOCK: "#",
            CellKind.PRISONER: "Z",
        }
        return "\n".join(
            "".join(cell_symbols[CellKind(int(v))] for v in row) for row in self.grid
        )
