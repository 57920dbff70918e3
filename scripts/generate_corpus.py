#!/usr/bin/env python3
"""
Generate a corpus of solved Unblock puzzles with randomized board configurations.

Each seed produces one random starting position; it is solved with BFS and
kept when it needs at least one move. Rows are written to a CSV file.
"""

import argparse
import csv
import random
import sys
from pathlib import Path
from typing import Dict, List, Optional

from tqdm import tqdm

# Add parent directory to path to import src modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.bfs_solver.difficulty import DifficultyScorer
from src.bfs_solver.solver import BFSSolver
from src.game.board_builder import BoardBuilder, BoardConfig
from src.game.levels import pieces_to_layout
from src.game.movement import Move
from src.game.pieces import PieceRegistry
from src.game.visualization import describe_move


def solution_to_string(pieces: PieceRegistry, moves: List[Move]) -> str:
    """Convert a solution to a compact string, e.g. "B down,Z right"."""
    return ",".join(describe_move(pieces, move) for move in moves)


def generate_random_config(rng: random.Random) -> BoardConfig:
    """Generate a random board configuration."""
    num_pieces = rng.choices(
        [4, 6, 8, 10, 12, 14], weights=[10, 20, 25, 20, 15, 10]
    )[0]
    long_piece_ratio = rng.uniform(0.1, 0.5)
    vertical_ratio = rng.uniform(0.4, 0.8)
    prisoner_length = rng.choices([2, 3], weights=[85, 15])[0]

    return BoardConfig(
        num_pieces=num_pieces,
        long_piece_ratio=long_piece_ratio,
        vertical_ratio=vertical_ratio,
        prisoner_length=prisoner_length,
    )


def generate_puzzle_row(
    seed: int,
    config: BoardConfig,
    solver: BFSSolver,
) -> Optional[Dict]:
    """Generate a single puzzle row, or None if it is unsolvable or trivial."""
    board_builder = BoardBuilder(config, seed=seed)
    pieces = board_builder.generate_pieces()

    result = solver.solve(pieces)

    # Discard unsolvable, aborted or zero length solution puzzles
    if not result.success or result.solution_length == 0:
        return None

    score, label = DifficultyScorer.score_and_label(pieces, result)

    return {
        "seed": seed,
        "num_pieces": len(pieces) - 1,
        "layout": pieces_to_layout(pieces).replace("\n", "/"),
        "solution_length": result.solution_length,
        "states_visited": result.states_visited,
        "bfs_solution": solution_to_string(pieces, result.moves),
        "difficulty_score": score,
        "difficulty_label": label.value,
    }


def main():
    parser = argparse.ArgumentParser(description="Generate a solved puzzle corpus")
    parser.add_argument(
        "--output", type=str, default="unblock_corpus.csv", help="Output CSV file"
    )
    parser.add_argument(
        "--count", type=int, default=1000, help="Number of puzzles to attempt"
    )
    parser.add_argument("--start-seed", type=int, default=1, help="Starting seed value")
    parser.add_argument(
        "--append", action="store_true", help="Append to existing CSV file"
    )
    parser.add_argument(
        "--max-states",
        type=int,
        default=200_000,
        help="Give up on a puzzle after this many BFS states",
    )
    parser.add_argument(
        "--flush-interval",
        type=int,
        default=100,
        help="Flush CSV every N successful generations",
    )
    parser.add_argument(
        "--config-seed", type=int, default=None, help="Seed for config randomization"
    )

    args = parser.parse_args()

    config_rng = random.Random(args.config_seed)
    solver = BFSSolver(max_states=args.max_states)

    fieldnames = [
        "seed",
        "num_pieces",
        "layout",
        "solution_length",
        "states_visited",
        "bfs_solution",
        "difficulty_score",
        "difficulty_label",
    ]

    mode = "a" if args.append else "w"
    file_exists = Path(args.output).exists()

    print(f"Output: {args.output} ({'append' if args.append else 'overwrite'})")
    print(f"BFS: max_states={args.max_states}")

    generated_count = 0
    difficulty_stats = {"Easy": 0, "Medium": 0, "Hard": 0, "Brutal": 0}

    with open(args.output, mode, newline="") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)

        if not args.append or not file_exists:
            writer.writeheader()

        with tqdm(range(args.count), desc="Generating", unit="puzzle") as progress:
            for offset in progress:
                seed = args.start_seed + offset
                config = generate_random_config(config_rng)
                row = generate_puzzle_row(seed, config, solver)

                if row is not None:
                    writer.writerow(row)
                    generated_count += 1
                    difficulty_stats[row["difficulty_label"]] += 1

                    if generated_count % args.flush_interval == 0:
                        csvfile.flush()

                progress.set_postfix(generated=generated_count)

    print(f"\n=== Generation Complete ===")
    print(f"Attempted: {args.count:,} puzzles")
    print(f"Generated: {generated_count:,} puzzles")
    print(f"Final difficulty distribution: {difficulty_stats}")


if __name__ == "__main__":
    main()
