#!/usr/bin/env python3
"""
Unblock Puzzle Solver

Finds the shortest sequence of moves that lets the prisoner block slide out
of a 6x6 Unblock board, and replays it in the terminal or a pygame window.
"""

import argparse
import sys

from src.bfs_solver.difficulty import DifficultyScorer
from src.bfs_solver.solver import BFSSolver, SolveStatus
from src.game.board_builder import BoardBuilder, BoardConfig
from src.game.exceptions import InvalidPuzzleError
from src.game.levels import Level, load_level
from src.game.visualization import HeadlessVisualizer, render_text
from src.util.logger import logger, set_level

log = logger.bind(component="cli")


def generate_puzzle(seed, num_pieces: int) -> Level:
    """Generate a random puzzle level."""
    config = BoardConfig(num_pieces=num_pieces)
    board_builder = BoardBuilder(config, seed=seed)
    return board_builder.generate_level(f"Puzzle {seed}")


def run_solver(level: Level, args) -> int:
    print(f"Puzzle '{level.name}':")
    print(render_text(level.pieces))

    solver = BFSSolver(max_states=args.max_states)
    result = solver.solve(level.pieces)

    if result.status == SolveStatus.UNSOLVABLE:
        print(f"No solution exists ({result.states_visited} states explored)")
        return 1
    if result.status == SolveStatus.ABORTED:
        print(
            f"Search aborted after {result.states_visited} states "
            f"(--max-states {args.max_states})"
        )
        return 1

    score, label = DifficultyScorer.score_and_label(level.pieces, result)
    print(
        f"Solved in {result.solution_length} moves "
        f"({result.states_visited} states, {result.time_taken_ms:.1f}ms, "
        f"difficulty {label.value} / {score:.1f})"
    )

    if args.gui:
        from src.visualizer.interactive_visualizer import SolutionVisualizer

        SolutionVisualizer(result.states, result.moves).run()
    else:
        HeadlessVisualizer(result.states, result.moves).run(step=args.step)
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Unblock Puzzle Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py puzzles/level1.txt        # Solve a text layout
  python main.py level.json --step         # Press ENTER between moves
  python main.py level.json --gui          # Replay in a pygame window
  python main.py --generate --seed 42      # Solve a random puzzle
        """,
    )

    parser.add_argument(
        "puzzle", nargs="?", help="Text layout or .json level to solve"
    )
    parser.add_argument(
        "--generate", action="store_true", help="Solve a randomly generated puzzle"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for puzzle generation"
    )
    parser.add_argument(
        "--pieces", type=int, default=8, help="Ordinary pieces in generated puzzles"
    )
    parser.add_argument(
        "--save", type=str, default=None, help="Save the puzzle as a .json level"
    )
    parser.add_argument(
        "--max-states",
        type=int,
        default=None,
        help="Abort the search after this many distinct states",
    )
    parser.add_argument(
        "--step", action="store_true", help="Wait for ENTER between moves"
    )
    parser.add_argument(
        "--gui", action="store_true", help="Replay the solution with pygame"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.verbose:
        set_level("DEBUG")

    if args.generate == bool(args.puzzle):
        parser.error("give either a puzzle file or --generate")

    try:
        if args.generate:
            level = generate_puzzle(args.seed, args.pieces)
        else:
            level = load_level(args.puzzle)
    except InvalidPuzzleError as e:
        log.error(str(e))
        sys.exit(2)
    except OSError as e:
        log.error(f"Cannot read {args.puzzle}: {e}")
        sys.exit(2)

    if args.save:
        level.save_to_file(args.save)
        log.info(f"Saved puzzle to {args.save}")

    sys.exit(run_solver(level, args))


if __name__ == "__main__":
    main()
