import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

Coord = Tuple[int, int]  # (row, col)


class TileColor(Enum):
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"
    GREEN = "green"
    PURPLE = "purple"
    ORANGE = "orange"

    @property
    def glyph(self) -> str:
        return self.value[0].upper()


class Direction(Enum):
    # Enumeration order is the search tie-break order.
    UP_LEFT = (-1, -1)
    UP = (-1, 0)
    UP_RIGHT = (-1, 1)
    LEFT = (0, -1)
    RIGHT = (0, 1)
    DOWN_LEFT = (1, -1)
    DOWN = (1, 0)
    DOWN_RIGHT = (1, 1)

    @property
    def dr(self) -> int:
        return self.value[0]

    @property
    def dc(self) -> int:
        return self.value[1]

    @property
    def is_orthogonal(self) -> bool:
        return self.dr == 0 or self.dc == 0


def chebyshev(a: Coord, b: Coord) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def key_of(coord: Coord) -> str:
    return f"{coord[0]},{coord[1]}"


def parse_key(key: str) -> Coord:
    r, c = map(int, key.split(","))
    return (r, c)


@dataclass
class Tile:
    color: Optional[TileColor] = None
    grindstone: bool = False
    angry: bool = False
    chest: bool = False
    key: bool = False
    jerk: bool = False
    super_enemy: bool = False
    hit_range: Optional[int] = None
    chain_gate: Optional[int] = None
    hp: Optional[int] = None

    @property
    def is_enemy(self) -> bool:
        return self.jerk or self.super_enemy

    @property
    def is_threat(self) -> bool:
        return self.is_enemy or self.angry

    def is_empty(self) -> bool:
        return not self.to_dict()

    def to_dict(self) -> Dict[str, Any]:
        """Sparse wire form: only attributes that are set are emitted."""
        data: Dict[str, Any] = {}
        if self.color is not None:
            data["color"] = self.color.value
        for flag in ("grindstone", "angry", "chest", "key", "jerk"):
            if getattr(self, flag):
                data[flag] = True
        if self.super_enemy:
            data["super"] = True
        if self.hit_range is not None:
            data["hitRange"] = self.hit_range
        if self.chain_gate is not None:
            data["chainGate"] = self.chain_gate
        if self.hp is not None:
            data["hp"] = self.hp
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tile":
        color = data.get("color")
        return cls(
            color=TileColor(color) if color else None,
            grindstone=bool(data.get("grindstone", False)),
            angry=bool(data.get("angry", False)),
            chest=bool(data.get("chest", False)),
            key=bool(data.get("key", False)),
            jerk=bool(data.get("jerk", False)),
            super_enemy=bool(data.get("super", False)),
            hit_range=data.get("hitRange"),
            chain_gate=data.get("chainGate"),
            hp=data.get("hp"),
        )


@dataclass
class Weights:
    w_len: float = 1.0
    w_gs: float = 3.0
    w_risk: float = 2.0
    w_obj: float = 4.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "w_len": self.w_len,
            "w_gs": self.w_gs,
            "w_risk": self.w_risk,
            "w_obj": self.w_obj,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Weights":
        defaults = cls()
        return cls(
            w_len=float(data.get("w_len", defaults.w_len)),
            w_gs=float(data.get("w_gs", defaults.w_gs)),
            w_risk=float(data.get("w_risk", defaults.w_risk)),
            w_obj=float(data.get("w_obj", defaults.w_obj)),
        )


class Board:
    def __init__(
        self,
        rows: int,
        cols: int,
        actor: Coord = (0, 0),
        tiles: Optional[Dict[Coord, Tile]] = None,
        weights: Optional[Weights] = None,
        avoid_enemies: bool = True,
    ):
        self.rows = rows
        self.cols = cols
        self.actor = actor
        self.tiles: Dict[Coord, Tile] = dict(tiles) if tiles else {}
        self.weights = weights if weights is not None else Weights()
        self.avoid_enemies = avoid_enemies

    def is_valid_position(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.rows and 0 <= c < self.cols

    def get_tile(self, coord: Coord) -> Optional[Tile]:
        return self.tiles.get(coord)

    def get_neighbors(self, coord: Coord) -> List[Coord]:
        r, c = coord
        neighbors = []
        for direction in Direction:
            n = (r + direction.dr, c + direction.dc)
            if self.is_valid_position(n):
                neighbors.append(n)
        return neighbors

    def colors(self) -> List[TileColor]:
        """Distinct tile colors, in tile insertion order."""
        seen: Dict[TileColor, None] = {}
        for tile in self.tiles.values():
            if tile.color is not None:
                seen.setdefault(tile.color, None)
        return list(seen)

    def find_tiles(self, flag: str) -> List[Coord]:
        return [pos for pos, tile in self.tiles.items() if getattr(tile, flag)]

    def copy(self) -> "Board":
        return Board(
            self.rows,
            self.cols,
            self.actor,
            {pos: Tile(**vars(tile)) for pos, tile in self.tiles.items()},
            Weights(**vars(self.weights)),
            self.avoid_enemies,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "actor": {"row": self.actor[0], "col": self.actor[1]},
            "tiles": {key_of(pos): tile.to_dict() for pos, tile in self.tiles.items()},
            "weights": self.weights.to_dict(),
            "avoidEnemies": self.avoid_enemies,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Board":
        # Older editor exports name the actor "jorj" and use {r, c}
        if "actor" in data:
            actor = (data["actor"]["row"], data["actor"]["col"])
        else:
            actor = (data["jorj"]["r"], data["jorj"]["c"])

        tiles = {
            parse_key(pos_str): Tile.from_dict(tile_data)
            for pos_str, tile_data in data.get("tiles", {}).items()
        }
        return cls(
            rows=data["rows"],
            cols=data["cols"],
            actor=actor,
            tiles=tiles,
            weights=Weights.from_dict(data.get("weights", {})),
            avoid_enemies=bool(data.get("avoidEnemies", True)),
        )

    def save_to_file(self, filename: str) -> None:
        with open(filename, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filename: str) -> "Board":
        with open(filename, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def to_glyph_grid(self) -> np.ndarray:
        grid = np.full((self.rows, self.cols), ".", dtype="<U1")
        for (r, c), tile in self.tiles.items():
            if not self.is_valid_position((r, c)):
                continue
            if tile.is_enemy:
                grid[r, c] = "E"
            elif tile.chain_gate:
                grid[r, c] = "#"
            elif tile.color is not None:
                grid[r, c] = tile.color.glyph
            elif tile.grindstone:
                grid[r, c] = "*"
            else:
                grid[r, c] = "o"
        if self.is_valid_position(self.actor):
            grid[self.actor] = "@"
        return grid

    def __str__(self) -> str:
        return "\n".join("".join(row) for row in self.to_glyph_grid())
