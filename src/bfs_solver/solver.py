"""
BFS solver for the 6x6 Unblock puzzle.

Finds a minimum-move sequence that clears the prisoner's path to the exit.
"""

import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Iterable, List, Optional, Set, Union

from ..game.board import SIZE, Board, BoardKey, Piece
from ..game.movement import Move, generate_moves
from ..game.pieces import PieceRegistry
from ..util.logger import logger
from .reconstruct import ROOT, ParentEntry, ParentMap, reconstruct_path


class SolveStatus(Enum):
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    ABORTED = "aborted"


@dataclass
class BFSResult:
    """Result of BFS solving."""

    status: SolveStatus
    states: List[PieceRegistry] = field(default_factory=list)
    moves: List[Move] = field(default_factory=list)
    nodes_explored: int = 0
    states_visited: int = 0
    time_taken_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.status == SolveStatus.SOLVED

    @property
    def solution_length(self) -> int:
        return len(self.moves)


def is_solved(board: Board, prisoner: Piece) -> bool:
    """True when every cell right of the prisoner on its row is empty."""
    for x in range(prisoner.x + prisoner.length, SIZE):
        if not board.is_empty(prisoner.y, x):
            return False
    return True


class BFSSolver:
    """Breadth-first search over board keys."""

    def __init__(self, max_states: Optional[int] = None):
        """Initialize BFS solver.

        Args:
            max_states: Stop with an ABORTED result once this many distinct
                states have been visited. None searches the whole space.
        """
        if max_states is not None and max_states < 1:
            raise ValueError(f"max_states must be positive, got {max_states}")
        self.max_states = max_states
        self.logger = logger.bind(component="bfs_solver")

    def solve(self, pieces: Union[PieceRegistry, Iterable[Piece]]) -> BFSResult:
        """Find the shortest solution for the given starting pieces.

        Args:
            pieces: Initial piece list; it is validated and never mutated

        Returns:
            BFSResult with the states and moves from start to goal if solved

        Raises:
            InvalidPuzzleError: if the piece list is not a legal puzzle
        """
        start_time = time.time()

        if not isinstance(pieces, PieceRegistry):
            pieces = PieceRegistry(pieces)
        pieces.check()
        initial = pieces.copy()

        parents: ParentMap = {initial.render().key(): ROOT}
        visited: Set[BoardKey] = set()
        frontier: Deque[PieceRegistry] = deque([initial])
        nodes_explored = 0

        self.logger.info(f"Searching for a solution ({len(initial)} pieces)")

        while frontier:
            current = frontier.popleft()
            board = current.render()
            key = board.key()

            # Duplicate enqueued before its first copy was expanded
            if key in visited:
                continue
            visited.add(key)

            if is_solved(board, current.prisoner):
                states, moves = reconstruct_path(current, parents)
                elapsed_ms = (time.time() - start_time) * 1000
                self.logger.info(
                    f"Solved in {len(moves)} moves "
                    f"({len(visited)} states, {elapsed_ms:.1f}ms)"
                )
                return BFSResult(
                    status=SolveStatus.SOLVED,
                    states=states,
                    moves=moves,
                    nodes_explored=nodes_explored,
                    states_visited=len(visited),
                    time_taken_ms=elapsed_ms,
                )

            if self.max_states is not None and len(visited) >= self.max_states:
                elapsed_ms = (time.time() - start_time) * 1000
                self.logger.warning(
                    f"Aborted after visiting {len(visited)} states "
                    f"(limit {self.max_states})"
                )
                return BFSResult(
                    status=SolveStatus.ABORTED,
                    nodes_explored=nodes_explored,
                    states_visited=len(visited),
                    time_taken_ms=elapsed_ms,
                )

            nodes_explored += 1
            self._expand(current, board, key, frontier, parents)

            if nodes_explored % 10000 == 0:
                self.logger.debug(
                    f"{nodes_explored} states expanded, frontier {len(frontier)}"
                )

        elapsed_ms = (time.time() - start_time) * 1000
        self.logger.info(
            f"No solution: exhausted {len(visited)} states in {elapsed_ms:.1f}ms"
        )
        return BFSResult(
            status=SolveStatus.UNSOLVABLE,
            nodes_explored=nodes_explored,
            states_visited=len(visited),
            time_taken_ms=elapsed_ms,
        )

    def _expand(
        self,
        pieces: PieceRegistry,
        board: Board,
        key: BoardKey,
        frontier: Deque[PieceRegistry],
        parents: ParentMap,
    ) -> None:
        """Queue successors and record their parent on first discovery.

        A successor whose key already has a parent entry was queued earlier
        (or is the initial state) and would be skipped on dequeue, so it is
        not queued again.
        """
        for next_pieces, move in generate_moves(pieces, board):
            next_key = next_pieces.render().key()
            if next_key in parents:
                continue
            parents[next_key] = ParentEntry(key, move)
            frontier.append(next_pieces)
