"""
Chain solver for the Grindstone puzzle board.

Finds the highest-scoring chain move the actor can make this turn.
"""

from .scoring import ScoreBreakdown, score_path
from .solver import ChainResult, ChainSolver, SolverConfig, best_move

__all__ = [
    "ChainSolver",
    "ChainResult",
    "SolverConfig",
    "ScoreBreakdown",
    "best_move",
    "score_path",
]
