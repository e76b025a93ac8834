"""
Chain legality and enemy threat rules for the Grindstone board.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

import numpy as np

from .board import Board, Coord, Direction, TileColor


class ThreatPolicy(Enum):
    """How enemy and angry tiles project danger onto the board.

    RANGED: jerk and super enemies threaten every cell within Chebyshev
        distance ``hit_range`` (default 1) including their own cell; angry
        tiles threaten their four orthogonal neighbours.
    FOOTPRINT: fixed shapes, ``hit_range`` ignored. Angry tiles threaten the
        four orthogonal neighbours, jerk and super enemies all eight
        neighbours. The threat's own cell is not included.
    """

    RANGED = "ranged"
    FOOTPRINT = "footprint"


DEFAULT_HIT_RANGE = 1


@dataclass
class StepResult:
    ok: bool
    next_color: Optional[TileColor]
    destroys_obstacle: bool = False


def _mark_footprint(mask: np.ndarray, origin: Coord, orthogonal_only: bool) -> None:
    rows, cols = mask.shape
    r, c = origin
    for direction in Direction:
        if orthogonal_only and not direction.is_orthogonal:
            continue
        nr, nc = r + direction.dr, c + direction.dc
        if 0 <= nr < rows and 0 <= nc < cols:
            mask[nr, nc] = True


def _mark_range(mask: np.ndarray, origin: Coord, hit_range: int) -> None:
    # A Chebyshev ball is an axis-aligned square, clipped to the board
    r, c = origin
    mask[max(0, r - hit_range) : r + hit_range + 1, max(0, c - hit_range) : c + hit_range + 1] = True


def compute_danger_set(
    board: Board, policy: ThreatPolicy = ThreatPolicy.RANGED
) -> FrozenSet[Coord]:
    """Collect every cell threatened by an enemy or angry tile.

    Args:
        board: Board snapshot
        policy: Threat shape per enemy kind

    Returns:
        Frozen set of threatened coordinates (overlapping threats union)
    """
    mask = np.zeros((max(board.rows, 0), max(board.cols, 0)), dtype=bool)

    for pos, tile in board.tiles.items():
        if not tile.is_threat or not board.is_valid_position(pos):
            continue

        if tile.angry:
            _mark_footprint(mask, pos, orthogonal_only=True)

        if tile.is_enemy:
            if policy == ThreatPolicy.RANGED:
                hit_range = tile.hit_range if tile.hit_range is not None else DEFAULT_HIT_RANGE
                _mark_range(mask, pos, max(0, hit_range))
            else:
                _mark_footprint(mask, pos, orthogonal_only=False)

    return frozenset((int(r), int(c)) for r, c in np.argwhere(mask))


def can_step(
    board: Board,
    from_: Coord,
    to: Coord,
    chain_color: Optional[TileColor],
    path_length: int = 0,
) -> StepResult:
    """Decide whether the chain may extend from ``from_`` onto ``to``.

    ``path_length`` is the number of cells already in the chain; a chain gate
    on ``to`` is destroyed when it is at least the gate threshold. Enemy tiles
    never block a step.
    """
    t_from = board.get_tile(from_)
    t_to = board.get_tile(to)
    if t_to is None:
        return StepResult(False, chain_color)

    if t_to.chain_gate and path_length >= t_to.chain_gate:
        return StepResult(True, chain_color, destroys_obstacle=True)

    if t_to.color is None:
        return StepResult(t_to.grindstone, chain_color)

    if chain_color is None:
        return StepResult(True, t_to.color)
    if t_to.color == chain_color:
        return StepResult(True, chain_color)
    if (t_from is not None and t_from.grindstone) or t_to.grindstone:
        return StepResult(True, t_to.color)
    return StepResult(False, chain_color)


def start_colors(board: Board) -> Tuple[TileColor, ...]:
    """Colors the chain may begin with, in discovery order.

    The actor's own tile and its neighbours are consulted first; when none of
    them carries a color every color on the board is allowed.
    """
    colors: Dict[TileColor, None] = {}
    actor_tile = board.get_tile(board.actor)
    if actor_tile is not None and actor_tile.color is not None:
        colors[actor_tile.color] = None
    for nb in board.get_neighbors(board.actor):
        tile = board.get_tile(nb)
        if tile is not None and tile.color is not None:
            colors.setdefault(tile.color, None)

    if not colors:
        return tuple(board.colors())
    return tuple(colors)
