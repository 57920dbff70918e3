"""
BoardBuilder for generating random Unblock puzzles.

Generates legal starting positions; solvability is left to the solver.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from .board import SIZE, CellKind, Orientation, Piece
from .levels import Level, LevelMetadata
from .pieces import PieceRegistry
from ..util.logger import logger


@dataclass
class BoardConfig:
    """Configuration for board generation."""

    num_pieces: int = 8  # ordinary pieces, prisoner not included
    long_piece_ratio: float = 0.3  # chance of a length-3 piece
    vertical_ratio: float = 0.6
    prisoner_row: int = 2
    prisoner_length: int = 2
    max_attempts: int = 200


class BoardBuilder:
    """Generates puzzle boards for Unblock."""

    def __init__(self, config: BoardConfig, seed: Optional[int] = None):
        """Initialize board builder with configuration.

        Args:
            config: Board generation configuration
            seed: Random seed for deterministic generation
        """
        self.config = config
        self.seed = seed
        self.rng = random.Random(seed)
        self.logger = logger.bind(component="board_builder")

    def generate_pieces(self) -> PieceRegistry:
        """Generate a complete starting position.

        Returns:
            PieceRegistry: prisoner plus up to ``num_pieces`` ordinary pieces,
            ids assigned in row-major order of their top-left cells
        """
        occupied: Set[Tuple[int, int]] = set()
        placed: List[Piece] = [self._place_prisoner(occupied)]
        placed.extend(self._place_blocks(occupied))

        placed.sort(key=lambda piece: (piece.y, piece.x))
        for piece_id, piece in enumerate(placed):
            piece.piece_id = piece_id

        pieces = PieceRegistry(placed)
        pieces.check()
        return pieces

    def generate_level(self, name: str = "Generated Puzzle") -> Level:
        """Generate a complete puzzle level.

        Args:
            name: Name for the generated level

        Returns:
            Level: Level holding the generated pieces
        """
        pieces = self.generate_pieces()
        metadata = LevelMetadata(
            name=name,
            description=(
                f"Generated puzzle with {len(pieces) - 1} pieces (seed {self.seed})"
            ),
            tags=["generated"],
        )
        return Level(metadata, pieces)

    def _place_prisoner(self, occupied: Set[Tuple[int, int]]) -> Piece:
        length = self.config.prisoner_length
        x = self.rng.randint(0, SIZE - length - 1)
        prisoner = Piece(
            0, CellKind.PRISONER, Orientation.HORIZONTAL, length,
            self.config.prisoner_row, x,
        )
        occupied.update(prisoner.cells())
        return prisoner

    def _place_blocks(self, occupied: Set[Tuple[int, int]]) -> List[Piece]:
        """Place ordinary pieces on empty cells."""
        blocks = []
        attempts = 0

        while (
            len(blocks) < self.config.num_pieces
            and attempts < self.config.max_attempts
        ):
            attempts += 1

            length = 3 if self.rng.random() < self.config.long_piece_ratio else 2
            if self.rng.random() < self.config.vertical_ratio:
                orientation = Orientation.VERTICAL
                y = self.rng.randint(0, SIZE - length)
                x = self.rng.randint(0, SIZE - 1)
            else:
                orientation = Orientation.HORIZONTAL
                y = self.rng.randint(0, SIZE - 1)
                x = self.rng.randint(0, SIZE - length)
                # A horizontal piece on the exit row could never get out of the way
                if y == self.config.prisoner_row:
                    continue

            piece = Piece(len(blocks) + 1, CellKind.BLOCK, orientation, length, y, x)
            cells = set(piece.cells())
            if cells & occupied:
                continue

            occupied.update(cells)
            blocks.append(piece)

        if len(blocks) < self.config.num_pieces:
            self.logger.debug(
                f"Placed {len(blocks)}/{self.config.num_pieces} pieces "
                f"after {attempts} attempts"
            )
        return blocks
