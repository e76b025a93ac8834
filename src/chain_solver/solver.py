"""
Depth-first chain solver for the Grindstone board.

Explores every simple chain reachable from the actor and keeps the single
highest-scoring one.
"""

import time
from dataclasses import dataclass, field, replace
from typing import FrozenSet, List, Optional, Set, Tuple

from ..game.board import Board, Coord, TileColor
from ..game.rules import ThreatPolicy, can_step, compute_danger_set, start_colors
from ..util.logger import logger
from .scoring import ScoreBreakdown, score_path

StateKey = Tuple[Coord, Optional[TileColor], int]


@dataclass
class SolverConfig:
    """Configuration for the chain solver."""

    max_path_length: int = 50
    threat_policy: ThreatPolicy = ThreatPolicy.RANGED

    def __post_init__(self):
        if self.max_path_length <= 0:
            raise ValueError("max_path_length must be positive")

        if not isinstance(self.threat_policy, ThreatPolicy):
            raise ValueError("threat_policy must be a ThreatPolicy")


@dataclass(frozen=True)
class ChainResult:
    """Best chain found for one board."""

    score: float
    path: Tuple[Coord, ...]
    color: Optional[TileColor]
    breakdown: ScoreBreakdown
    nodes_explored: int = 0
    time_taken_ms: float = 0.0
    danger: FrozenSet[Coord] = field(default_factory=frozenset)

    @property
    def ends_in_danger(self) -> bool:
        return bool(self.path) and self.path[-1] in self.danger

    def to_dict(self):
        return {
            "score": self.score,
            "path": [{"row": r, "col": c} for r, c in self.path],
            "color": self.color.value if self.color else None,
            "breakdown": self.breakdown.to_dict(),
        }


@dataclass
class _SearchState:
    """Mutable state private to one solve() call."""

    board: Board
    seen: Set[StateKey] = field(default_factory=set)
    best: Optional[ChainResult] = None
    nodes_explored: int = 0


class ChainSolver:
    """Exhaustive depth-first solver with reduced-state pruning.

    The seen-set key is (cell, chain color, cells visited). Two different
    routes that agree on that key are treated as the same state, so the
    search can miss a better route that reaches an already seen key.
    """

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config if config is not None else SolverConfig()
        self.logger = logger.bind(component="chain_solver")

    def solve(self, board: Board) -> Optional[ChainResult]:
        """Find the best-scoring chain move on the board.

        Args:
            board: Board snapshot (not modified)

        Returns:
            ChainResult, or None when the actor has no legal first step
        """
        start_time = time.time()
        danger = compute_danger_set(board, self.config.threat_policy)
        state = _SearchState(board)

        starters = start_colors(board)
        self.logger.debug(
            f"Searching from {board.actor} with start colors "
            f"{[c.value for c in starters]}, {len(danger)} threatened cells"
        )

        for color in starters:
            for nb in board.get_neighbors(board.actor):
                step = can_step(board, board.actor, nb, color, 0)
                if not step.ok:
                    continue
                self._dfs(state, nb, step.next_color, [nb])

        elapsed_ms = (time.time() - start_time) * 1000

        if state.best is None:
            self.logger.info(f"No legal move from {board.actor} ({elapsed_ms:.1f}ms)")
            return None

        self.logger.info(
            f"Best chain: {len(state.best.path)} cells, score {state.best.score:.1f}, "
            f"{state.nodes_explored} nodes in {elapsed_ms:.1f}ms"
        )
        return replace(
            state.best,
            nodes_explored=state.nodes_explored,
            time_taken_ms=elapsed_ms,
            danger=danger,
        )

    def _dfs(
        self,
        state: _SearchState,
        pos: Coord,
        chain_color: Optional[TileColor],
        path: List[Coord],
    ) -> None:
        # Path cells are distinct, so the visited count is the path length
        state_key = (pos, chain_color, len(path))
        if state_key in state.seen:
            return
        state.seen.add(state_key)
        state.nodes_explored += 1

        if len(path) >= self.config.max_path_length:
            return

        self._consider(state, path, chain_color)

        board = state.board
        for nb in board.get_neighbors(pos):
            # The actor's own cell never joins the chain
            if nb == board.actor or nb in path:
                continue
            step = can_step(board, pos, nb, chain_color, len(path))
            if not step.ok:
                continue
            path.append(nb)
            self._dfs(state, nb, step.next_color, path)
            path.pop()

    def _consider(
        self, state: _SearchState, path: List[Coord], chain_color: Optional[TileColor]
    ) -> None:
        s = score_path(state.board, path, chain_color)
        if state.best is not None and s.total <= state.best.score:
            return
        state.best = ChainResult(
            score=s.total,
            path=tuple(path),
            color=chain_color,
            breakdown=s,
        )
        self.logger.debug(f"New best {s.total:.1f} over {len(path)} cells")


def best_move(board: Board, config: Optional[SolverConfig] = None) -> Optional[ChainResult]:
    """Best chain move for the actor on ``board``, or None if it cannot move."""
    return ChainSolver(config).solve(board)
