from typing import Any, Dict, Iterable, Iterator, List, Optional

from .board import (PIECE_LENGTHS, SIZE, Board, CellKind, Direction,
                    Orientation, Piece)
from .exceptions import InvalidPuzzleError


class PieceRegistry:
    """Ordered collection of the pieces of one board state.

    Pieces are addressable by index and by their stable ``piece_id``. Copies
    keep the identities so a move recorded against one state can be replayed
    on another.
    """

    def __init__(self, pieces: Iterable[Piece] = ()):
        self.pieces: List[Piece] = list(pieces)
        self._index: Dict[int, int] = {
            piece.piece_id: i for i, piece in enumerate(self.pieces)
        }

    def __len__(self) -> int:
        return len(self.pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.pieces)

    def __getitem__(self, index: int) -> Piece:
        return self.pieces[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PieceRegistry):
            return NotImplemented
        return self.pieces == other.pieces

    def get(self, piece_id: int) -> Optional[Piece]:
        index = self._index.get(piece_id)
        if index is None:
            return None
        return self.pieces[index]

    @property
    def prisoner(self) -> Piece:
        for piece in self.pieces:
            if piece.is_prisoner:
                return piece
        raise InvalidPuzzleError("Puzzle has no prisoner")

    def copy(self) -> "PieceRegistry":
        return PieceRegistry(piece.copy() for piece in self.pieces)

    def move_piece(self, piece_id: int, direction: Direction) -> None:
        """Shift one piece a single cell. No legality checks are made here."""
        piece = self.get(piece_id)
        if piece is None:
            raise KeyError(f"No piece with id {piece_id}")
        piece.x += direction.dx
        piece.y += direction.dy

    def render(self) -> Board:
        return Board.render(self.pieces)

    def validate(self) -> List[str]:
        errors = []

        seen_ids = set()
        for piece in self.pieces:
            if piece.piece_id in seen_ids:
                errors.append(f"Duplicate piece id {piece.piece_id}")
            seen_ids.add(piece.piece_id)

        occupied: Dict[tuple, Piece] = {}
        for piece in self.pieces:
            if piece.length not in PIECE_LENGTHS:
                errors.append(
                    f"Piece {piece.piece_id} has length {piece.length}, "
                    f"expected one of {PIECE_LENGTHS}"
                )
                continue
            if piece.kind not in (CellKind.BLOCK, CellKind.PRISONER):
                errors.append(f"Piece {piece.piece_id} has invalid kind {piece.kind}")
                continue
            if not isinstance(piece.orientation, Orientation):
                errors.append(
                    f"Piece {piece.piece_id} has invalid orientation "
                    f"{piece.orientation!r}"
                )
                continue

            for y, x in piece.cells():
                if not (0 <= y < SIZE and 0 <= x < SIZE):
                    errors.append(
                        f"Piece {piece.piece_id} covers ({y}, {x}) outside the board"
                    )
                    break
                other = occupied.get((y, x))
                if other is not None:
                    errors.append(
                        f"Pieces {other.piece_id} and {piece.piece_id} "
                        f"overlap at ({y}, {x})"
                    )
                    break
                occupied[(y, x)] = piece

        prisoners = [piece for piece in self.pieces if piece.is_prisoner]
        if not prisoners:
            errors.append("Puzzle must contain exactly one prisoner, found none")
        elif len(prisoners) > 1:
            ids = ", ".join(str(p.piece_id) for p in prisoners)
            errors.append(
                f"Puzzle must contain exactly one prisoner, found {len(prisoners)} "
                f"(ids {ids})"
            )
        for prisoner in prisoners:
            if prisoner.orientation != Orientation.HORIZONTAL:
                errors.append(f"Prisoner {prisoner.piece_id} must be horizontal")

        return errors

    def check(self) -> None:
        errors = self.validate()
        if errors:
            raise InvalidPuzzleError(
                "Invalid puzzle: " + "; ".join(errors), errors=errors
            )

    def to_dict(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": piece.piece_id,
                "kind": piece.kind.name.lower(),
                "orientation": piece.orientation.value,
                "length": piece.length,
                "y": piece.y,
                "x": piece.x,
            }
            for piece in self.pieces
        ]

    @classmethod
    def from_dict(cls, data: List[Dict[str, Any]]) -> "PieceRegistry":
        pieces = []
        for i, entry in enumerate(data):
            try:
                pieces.append(
                    Piece(
                        piece_id=int(entry.get("id", i)),
                        kind=CellKind[entry.get("kind", "block").upper()],
                        orientation=Orientation(entry["orientation"]),
                        length=int(entry["length"]),
                        y=int(entry["y"]),
                        x=int(entry["x"]),
                    )
                )
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise InvalidPuzzleError(f"Malformed piece entry {i}: {e!r}") from e
        return cls(pieces)

    def __repr__(self) -> str:
        return f"PieceRegistry({self.pieces!r})"
