"""
Path scoring for Grindstone chain moves.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Set, Tuple

from ..game.board import Board, Coord, TileColor

GRINDSTONE_INTERVAL = 10
# Obstacle destruction is a flat bonus, not scaled by the board weights.
OBSTACLE_BONUS = 10.0
OBJECTIVE_FLAGS = ("chest", "key")


@dataclass(frozen=True)
class ScoreBreakdown:
    """Score of one chain path and the terms it was built from."""

    total: float
    length: int
    grindstone_thresholds: int
    risk: int
    objectives: int
    destroyed_obstacles: int

    def to_dict(self):
        return {
            "total": self.total,
            "L": self.length,
            "gs": self.grindstone_thresholds,
            "risk": self.risk,
            "obj": self.objectives,
            "destroyedObstacles": self.destroyed_obstacles,
        }


def grindstone_thresholds(length: int) -> int:
    return length // GRINDSTONE_INTERVAL


def angry_neighbors(board: Board, coord: Coord) -> int:
    count = 0
    for nb in board.get_neighbors(coord):
        tile = board.get_tile(nb)
        if tile is not None and tile.angry:
            count += 1
    return count


def objective_hits(board: Board, path: Sequence[Coord]) -> int:
    """Count distinct (cell, objective kind) pairs along the path."""
    seen: Set[Tuple[Coord, str]] = set()
    for pos in path:
        tile = board.get_tile(pos)
        if tile is None:
            continue
        for flag in OBJECTIVE_FLAGS:
            if getattr(tile, flag):
                seen.add((pos, flag))
    return len(seen)


def destroyed_obstacles(board: Board, path: Sequence[Coord]) -> int:
    # The i-th path cell is reached when the chain already holds i cells
    count = 0
    for arrival_length, pos in enumerate(path):
        tile = board.get_tile(pos)
        if tile is not None and tile.chain_gate and arrival_length >= tile.chain_gate:
            count += 1
    return count


def score_path(
    board: Board, path: Sequence[Coord], chain_color: Optional[TileColor] = None
) -> ScoreBreakdown:
    """Score a chain path on the board.

    Args:
        board: Board snapshot the path was found on
        path: Chain cells in stepping order (actor excluded)
        chain_color: Resolved chain color at the end of the path

    Returns:
        ScoreBreakdown with the weighted total
    """
    length = len(path)
    gs = grindstone_thresholds(length)
    risk = angry_neighbors(board, path[-1]) if path else 0
    obj = objective_hits(board, path)
    destroyed = destroyed_obstacles(board, path)

    w = board.weights
    total = (
        w.w_len * length
        + w.w_gs * gs
        - w.w_risk * risk
        + w.w_obj * obj
        + OBSTACLE_BONUS * destroyed
    )
    return ScoreBreakdown(
        total=float(total),
        length=length,
        grindstone_thresholds=gs,
        risk=risk,
        objectives=obj,
        destroyed_obstacles=destroyed,
    )
