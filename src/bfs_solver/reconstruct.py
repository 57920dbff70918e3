"""
Parent-pointer bookkeeping and solution path reconstruction.
"""

from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from ..game.board import BoardKey
from ..game.exceptions import SolverInvariantError
from ..game.movement import Move
from ..game.pieces import PieceRegistry


class ParentEntry(NamedTuple):
    """How a state was first reached: the state before it and the move applied."""

    parent_key: BoardKey
    move: Move


class _Root:
    """Marker stored for the initial state, which no move produced."""

    _instance: Optional["_Root"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ROOT"


ROOT = _Root()

ParentMap = Dict[BoardKey, Union[ParentEntry, _Root]]


def reconstruct_path(
    goal: PieceRegistry, parents: ParentMap
) -> Tuple[List[PieceRegistry], List[Move]]:
    """Walk parent pointers back from ``goal`` to the initial state.

    Each predecessor is rebuilt by copying the current pieces and moving the
    recorded piece the opposite way. Returns the states from initial to goal
    and the moves between consecutive states.
    """
    states = [goal.copy()]
    moves: List[Move] = []

    current = states[0]
    key = current.render().key()
    while True:
        entry = parents.get(key)
        if entry is None:
            raise SolverInvariantError(f"No parent entry for state {key.hex()}")
        if entry is ROOT:
            break

        previous = current.copy()
        if previous.get(entry.move.piece_id) is None:
            raise SolverInvariantError(
                f"Parent move refers to unknown piece {entry.move.piece_id}"
            )
        previous.move_piece(entry.move.piece_id, entry.move.direction.opposite())
        previous_key = previous.render().key()
        if previous_key != entry.parent_key:
            raise SolverInvariantError(
                f"Undoing {entry.move} from {key.hex()} gave {previous_key.hex()}, "
                f"expected {entry.parent_key.hex()}"
            )

        states.append(previous)
        moves.append(entry.move)
        current, key = previous, previous_key

        if len(moves) > len(parents):
            raise SolverInvariantError("Parent pointers form a cycle")

    states.reverse()
    moves.reverse()
    return states, moves
