#!/usr/bin/env python3
"""
Grindstone Chain Calculator

Finds the best chain move for Jorj on a Grindstone board snapshot.
"""

import argparse
import sys

from src.chain_solver import ChainResult, SolverConfig, best_move
from src.game.board import Board
from src.game.board_builder import RandomBoardConfig, RandomBoardGenerator
from src.game.levels import default_board, validate_board
from src.game.rules import ThreatPolicy
from src.util.logger import add_file_sink, logger, set_component_level

log = logger.bind(component="cli")


def render_result(board: Board, result: ChainResult) -> str:
    """Board text with the chain cells marked in order (1-9, then a-z, then +)."""
    marks = "123456789abcdefghijklmnopqrstuvwxyz"
    grid = board.to_glyph_grid()
    if board.avoid_enemies:
        for r, c in result.danger:
            if grid[r, c] == ".":
                grid[r, c] = "!"
    for i, (r, c) in enumerate(result.path):
        grid[r, c] = marks[i] if i < len(marks) else "+"
    return "\n".join("".join(row) for row in grid)


def print_result(board: Board, result: ChainResult) -> None:
    b = result.breakdown
    print(render_result(board, result))
    print(f"Color: {result.color.value if result.color else '-'}")
    print(f"Path: {' -> '.join(f'({r},{c})' for r, c in result.path)}")
    print(
        f"Score: {result.score:.1f} "
        f"(L={b.length}, gs={b.grindstone_thresholds}, risk={b.risk}, "
        f"obj={b.objectives}, destroyed={b.destroyed_obstacles})"
    )
    if board.avoid_enemies:
        print(f"Threatened cells: {len(result.danger)}")
        if result.ends_in_danger:
            print("Warning: chain ends on a threatened cell")
    print(f"Explored {result.nodes_explored} nodes in {result.time_taken_ms:.1f}ms")


def load_board(args) -> Board:
    if args.board:
        return Board.load_from_file(args.board)
    if args.random:
        config = RandomBoardConfig(rows=args.rows, cols=args.cols)
        return RandomBoardGenerator(config, seed=args.seed).generate_board()
    return default_board()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Grindstone Chain Calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                          # Solve the demo board
  python main.py --board board.json       # Solve a saved board
  python main.py --random --seed 42       # Solve a random board
        """,
    )

    parser.add_argument("--board", type=str, default=None, help="Board JSON file")
    parser.add_argument(
        "--random", action="store_true", help="Generate a random board"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for board generation"
    )
    parser.add_argument("--rows", type=int, default=7, help="Random board rows")
    parser.add_argument("--cols", type=int, default=7, help="Random board columns")
    parser.add_argument(
        "--max-length", type=int, default=50, help="Maximum chain length"
    )
    parser.add_argument(
        "--threat-policy",
        choices=[p.value for p in ThreatPolicy],
        default=ThreatPolicy.RANGED.value,
        help="How enemies project danger",
    )
    parser.add_argument(
        "--export", type=str, default=None, help="Write the board snapshot to FILE"
    )
    parser.add_argument("--verbose", action="store_true", help="Log every new best")
    parser.add_argument(
        "--log-file", type=str, default=None, help="Also write a full debug log to FILE"
    )

    args = parser.parse_args()

    if args.verbose:
        set_component_level("chain_solver", "DEBUG")
    if args.log_file:
        add_file_sink(args.log_file)

    try:
        config = SolverConfig(
            max_path_length=args.max_length,
            threat_policy=ThreatPolicy(args.threat_policy),
        )
    except ValueError as e:
        log.error(str(e))
        sys.exit(1)

    board = load_board(args)

    errors = validate_board(board)
    if errors:
        for error in errors:
            log.error(error)
        sys.exit(1)

    if args.export:
        board.save_to_file(args.export)
        log.info(f"Board written to {args.export}")

    print(board)
    print()

    result = best_move(board, config)
    if result is None:
        print("No legal move.")
        return

    print_result(board, result)


if __name__ == "__main__":
    main()
