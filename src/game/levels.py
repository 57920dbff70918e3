import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from .board import PIECE_LENGTHS, SIZE, CellKind, Orientation, Piece
from .exceptions import InvalidPuzzleError, LayoutParseError
from .movement import piece_label
from .pieces import PieceRegistry
from ..util.logger import logger

EMPTY_LABEL = "."
PRISONER_LABEL = "Z"

log = logger.bind(component="levels")


@dataclass
class LevelMetadata:
    name: str
    description: str = ""
    difficulty: str = "unknown"
    author: str = "Unknown"
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "difficulty": self.difficulty,
            "author": self.author,
            "tags": self.tags,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LevelMetadata":
        return cls(
            name=data.get("name", "Untitled"),
            description=data.get("description", ""),
            difficulty=data.get("difficulty", "unknown"),
            author=data.get("author", "Unknown"),
            tags=data.get("tags", []),
        )


class Level:
    def __init__(self, metadata: LevelMetadata, pieces: PieceRegistry):
        self.metadata = metadata
        self.pieces = pieces

    @property
    def name(self) -> str:
        return self.metadata.name

    def validate(self) -> List[str]:
        return self.pieces.validate()

    def to_layout(self) -> str:
        return pieces_to_layout(self.pieces)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "pieces": self.pieces.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Level":
        if not isinstance(data, dict):
            raise LayoutParseError(
                f"Level data must be an object, got {type(data).__name__}"
            )
        metadata = data.get("metadata", {})
        if not isinstance(metadata, dict):
            raise LayoutParseError("Level metadata must be an object")
        if "pieces" in data:
            pieces = PieceRegistry.from_dict(data["pieces"])
        elif "layout" in data:
            layout = data["layout"]
            if isinstance(layout, list) and all(isinstance(row, str) for row in layout):
                layout = "\n".join(layout)
            if not isinstance(layout, str):
                raise LayoutParseError("Level layout must be text or a list of rows")
            pieces = parse_layout(layout)
        else:
            raise LayoutParseError("Level data needs either 'pieces' or 'layout'")
        return cls(LevelMetadata.from_dict(metadata), pieces)

    def save_to_file(self, filename: Union[str, Path]) -> None:
        with open(filename, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filename: Union[str, Path]) -> "Level":
        with open(filename, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise LayoutParseError(f"{filename} is not valid JSON: {e}") from e
        return cls.from_dict(data)


def _split_run(
    label: str, cells: List[Tuple[int, int]]
) -> List[Tuple[Orientation, int, int, int]]:
    """Turn the cells sharing a label into (orientation, length, y, x) pieces."""
    rows = {y for y, _ in cells}
    cols = {x for _, x in cells}

    if len(cells) == 1:
        raise LayoutParseError(
            f"Piece '{label}' at {cells[0]} is a single cell; pieces are 2 or 3 long"
        )
    if len(rows) == 1:
        orientation = Orientation.HORIZONTAL
        along = sorted(x for _, x in cells)
    elif len(cols) == 1:
        orientation = Orientation.VERTICAL
        along = sorted(y for y, _ in cells)
    else:
        raise LayoutParseError(f"Piece '{label}' is not a straight line: {cells}")

    if along[-1] - along[0] + 1 != len(along):
        raise LayoutParseError(f"Piece '{label}' has a gap: {cells}")

    y0, x0 = min(cells)
    length = len(along)
    if length in (2, 3):
        return [(orientation, length, y0, x0)]
    if length == 4:
        # Two touching length-2 pieces drawn with the same letter
        if orientation == Orientation.HORIZONTAL:
            return [(orientation, 2, y0, x0), (orientation, 2, y0, x0 + 2)]
        return [(orientation, 2, y0, x0), (orientation, 2, y0 + 2, x0)]
    raise LayoutParseError(f"Piece '{label}' is {length} cells long")


def parse_layout(text: str, prisoner_label: str = PRISONER_LABEL) -> PieceRegistry:
    """Detect the pieces drawn in a 6x6 text layout.

    Each row is six characters: ``.`` for an empty cell, ``prisoner_label`` for
    the prisoner and any other non-space character for an ordinary piece.
    Blank lines and lines starting with ``;`` are ignored. Piece ids follow
    row-major order of each piece's top-left cell.
    """
    rows = [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.strip().startswith(";")
    ]
    if len(rows) != SIZE:
        raise LayoutParseError(f"Layout must have {SIZE} rows, got {len(rows)}")

    cells_by_label: Dict[str, List[Tuple[int, int]]] = {}
    for y, row in enumerate(rows):
        if len(row) != SIZE:
            raise LayoutParseError(
                f"Row {y} must have {SIZE} cells, got {len(row)}: {row!r}"
            )
        for x, label in enumerate(row):
            if label == EMPTY_LABEL:
                continue
            cells_by_label.setdefault(label, []).append((y, x))

    if prisoner_label not in cells_by_label:
        raise LayoutParseError(f"Layout has no prisoner '{prisoner_label}'")

    found = []
    for label, cells in cells_by_label.items():
        kind = CellKind.PRISONER if label == prisoner_label else CellKind.BLOCK
        # Only ordinary pieces may be drawn as two touching pieces
        if kind == CellKind.PRISONER and len(cells) > max(PIECE_LENGTHS):
            raise LayoutParseError(
                f"Prisoner must be 2 or 3 cells long, got {len(cells)} cells"
            )
        for orientation, length, y, x in _split_run(label, cells):
            found.append((y, x, kind, orientation, length))

    found.sort(key=lambda item: (item[0], item[1]))
    pieces = PieceRegistry(
        Piece(piece_id, kind, orientation, length, y, x)
        for piece_id, (y, x, kind, orientation, length) in enumerate(found)
    )

    errors = pieces.validate()
    if errors:
        raise LayoutParseError("Invalid layout: " + "; ".join(errors), errors=errors)

    for piece in pieces:
        log.debug(f"Detected {piece}")
    return pieces


def pieces_to_layout(pieces: PieceRegistry) -> str:
    rows = [[EMPTY_LABEL] * SIZE for _ in range(SIZE)]
    for piece in pieces:
        label = PRISONER_LABEL if piece.is_prisoner else piece_label(piece.piece_id)
        for y, x in piece.cells():
            rows[y][x] = label
    return "\n".join("".join(row) for row in rows)


def load_level(path: Union[str, Path]) -> Level:
    """Load a level from a ``.json`` file or a plain text layout."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        level = Level.load_from_file(path)
    else:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise LayoutParseError(f"{path} is not a text layout: {e}") from e
        level = Level(LevelMetadata(name=path.stem), parse_layout(text))

    errors = level.validate()
    if errors:
        raise InvalidPuzzleError(
            f"{path}: " + "; ".join(errors), errors=errors
        )
    log.info(f"Loaded level '{level.name}' with {len(level.pieces)} pieces")
    return level
