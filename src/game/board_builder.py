"""
Random board generation for the Grindstone chain solver.

Produces seeded, reproducible boards for exercising and benchmarking the
solver.
"""

import random
from dataclasses import dataclass
from typing import List, Optional

from ..util.logger import logger
from .board import Board, Coord, TileColor
from .levels import BoardBuilder


@dataclass
class RandomBoardConfig:
    """Configuration for random board generation."""

    rows: int = 7
    cols: int = 7
    num_colors: int = 3
    fill_ratio: float = 0.7  # Fraction of cells that receive a colored tile
    num_grindstones: int = 2
    num_angry: int = 1
    num_chests: int = 1
    num_keys: int = 1
    num_enemies: int = 1
    enemy_hit_range: int = 1
    num_obstacles: int = 1
    obstacle_gate: int = 3

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError("rows and cols must be positive")

        if not (1 <= self.num_colors <= len(TileColor)):
            raise ValueError(f"num_colors must be between 1 and {len(TileColor)}")

        if not (0.0 <= self.fill_ratio <= 1.0):
            raise ValueError("fill_ratio must be between 0.0 and 1.0")

        if self.enemy_hit_range < 0 or self.obstacle_gate < 0:
            raise ValueError("enemy_hit_range and obstacle_gate must be non-negative")


class RandomBoardGenerator:
    """Generates random Grindstone boards."""

    def __init__(self, config: RandomBoardConfig, seed: Optional[int] = None):
        """Initialize generator with configuration.

        Args:
            config: Board generation configuration
            seed: Random seed for deterministic generation
        """
        self.config = config
        self.rng = random.Random(seed)
        self.logger = logger.bind(component="board_builder")

    def generate_board(self) -> Board:
        """Generate a complete board with the actor, tiles and threats placed."""
        cfg = self.config
        cells = [(r, c) for r in range(cfg.rows) for c in range(cfg.cols)]
        actor = self.rng.choice(cells)
        builder = BoardBuilder(cfg.rows, cfg.cols, actor)

        palette = list(TileColor)[: cfg.num_colors]
        for pos in cells:
            if self.rng.random() < cfg.fill_ratio:
                builder.paint(pos, self.rng.choice(palette))

        free = [pos for pos in cells if pos != actor]
        self._place_flags(builder, free, "grindstone", cfg.num_grindstones)
        self._place_flags(builder, free, "angry", cfg.num_angry)
        self._place_flags(builder, free, "chest", cfg.num_chests)
        self._place_flags(builder, free, "key", cfg.num_keys)

        for pos in self._sample(free, cfg.num_enemies):
            builder.add_enemy(pos, self.rng.choice(BoardBuilder.ENEMY_KINDS), cfg.enemy_hit_range)

        for pos in self._sample(free, cfg.num_obstacles):
            builder.add_obstacle(pos, cfg.obstacle_gate)

        board = builder.build()
        self.logger.debug(f"Generated {cfg.rows}x{cfg.cols} board with {len(board.tiles)} tiles")
        return board

    def _sample(self, cells: List[Coord], count: int) -> List[Coord]:
        return self.rng.sample(cells, min(count, len(cells)))

    def _place_flags(self, builder: BoardBuilder, cells: List[Coord], flag: str, count: int) -> None:
        for pos in self._sample(cells, count):
            tile = builder.board.get_tile(pos)
            if tile is None or not getattr(tile, flag):
                builder.toggle(pos, flag)
