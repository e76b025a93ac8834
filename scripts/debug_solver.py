#!/usr/bin/env python3
"""
Debug script for the chain solver - runs in verbose mode with detailed logging.
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path to import src modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.chain_solver.solver import ChainSolver, SolverConfig
from src.game.board import Board
from src.game.board_builder import RandomBoardConfig, RandomBoardGenerator
from src.game.rules import compute_danger_set, start_colors
from src.util.logger import set_component_level


class VerboseChainSolver(ChainSolver):
    """Chain solver that logs every visited node and pruned state."""

    def solve(self, board):
        print("=== Chain Solver Debug Session ===")
        print(board)
        print(f"Actor: {board.actor}")
        print(f"Start colors: {[c.value for c in start_colors(board)]}")
        danger = compute_danger_set(board, self.config.threat_policy)
        print(f"Threatened cells ({len(danger)}): {sorted(danger)}")
        for nb in board.get_neighbors(board.actor):
            tile = board.get_tile(nb)
            print(f"  neighbor {nb}: {tile.to_dict() if tile else 'empty'}")
        print()
        return super().solve(board)

    def _dfs(self, state, pos, chain_color, path):
        indent = "  " * len(path)
        key = (pos, chain_color, len(path))
        if key in state.seen:
            print(f"{indent}{pos} pruned (seen {chain_color.value if chain_color else None}, {len(path)})")
        else:
            print(f"{indent}{pos} color={chain_color.value if chain_color else None} len={len(path)}")
        super()._dfs(state, pos, chain_color, path)


def main():
    """Run the verbose chain solver."""
    parser = argparse.ArgumentParser(description="Debug the chain solver with verbose output")
    parser.add_argument("--board", type=str, default=None, help="Board JSON file")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--max-length", type=int, default=12, help="Maximum chain length")

    args = parser.parse_args()
    set_component_level("chain_solver", "DEBUG")

    if args.board:
        board = Board.load_from_file(args.board)
    else:
        config = RandomBoardConfig(rows=5, cols=5, num_colors=2)
        board = RandomBoardGenerator(config, seed=args.seed).generate_board()

    solver = VerboseChainSolver(SolverConfig(max_path_length=args.max_length))
    result = solver.solve(board)

    print("\n=== Final Result ===")
    if result is None:
        print("No legal move")
        return
    print(f"Path: {list(result.path)}")
    print(f"Color: {result.color.value if result.color else None}")
    print(f"Score: {result.score}")
    print(f"Breakdown: {result.breakdown.to_dict()}")
    print(f"Nodes: {result.nodes_explored}")
    print(f"Time: {result.time_taken_ms:.1f}ms")


if __name__ == "__main__":
    main()
