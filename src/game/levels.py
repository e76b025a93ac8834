from typing import List, Optional

from .board import Board, Coord, Tile, TileColor, Weights


class BoardBuilder:
    """Fluent editor for Grindstone boards.

    Each edit works on a private board; ``build()`` hands out a copy, so
    boards returned to callers are never touched by later edits.
    """

    ENEMY_KINDS = ("jerk", "super")
    TOGGLE_FLAGS = ("grindstone", "angry", "chest", "key")

    def __init__(self, rows: int, cols: int, actor: Coord = (0, 0)):
        self.board = Board(rows, cols, actor)

    def _update(self, pos: Coord, **changes) -> "BoardBuilder":
        tile = self.board.tiles.get(pos) or Tile()
        for attr, value in changes.items():
            setattr(tile, attr, value)
        if tile.is_empty():
            self.board.tiles.pop(pos, None)
        else:
            self.board.tiles[pos] = tile
        return self

    def paint(self, pos: Coord, color: Optional[TileColor]) -> "BoardBuilder":
        return self._update(pos, color=color)

    def toggle(self, pos: Coord, flag: str) -> "BoardBuilder":
        if flag not in self.TOGGLE_FLAGS:
            raise ValueError(f"Unknown tile flag: {flag}")
        current = self.board.tiles.get(pos)
        return self._update(pos, **{flag: not (current is not None and getattr(current, flag))})

    def add_enemy(self, pos: Coord, kind: str = "jerk", hit_range: int = 1) -> "BoardBuilder":
        if kind not in self.ENEMY_KINDS:
            raise ValueError(f"Unknown enemy kind: {kind}")
        return self._update(
            pos,
            jerk=kind == "jerk",
            super_enemy=kind == "super",
            hit_range=hit_range,
        )

    def add_obstacle(self, pos: Coord, chain_gate: int) -> "BoardBuilder":
        return self._update(pos, chain_gate=chain_gate)

    def erase(self, pos: Coord) -> "BoardBuilder":
        self.board.tiles.pop(pos, None)
        return self

    def set_actor(self, pos: Coord) -> "BoardBuilder":
        self.board.actor = pos
        return self

    def set_weights(self, **kwargs) -> "BoardBuilder":
        for key, value in kwargs.items():
            if hasattr(self.board.weights, key):
                setattr(self.board.weights, key, float(value))
        return self

    def set_avoid_enemies(self, avoid: bool) -> "BoardBuilder":
        self.board.avoid_enemies = avoid
        return self

    def clear(self) -> "BoardBuilder":
        self.board.tiles = {}
        return self

    def build(self) -> Board:
        return self.board.copy()


def validate_board(board: Board) -> List[str]:
    """List the problems that make a board unfit for the solver."""
    errors = []

    if board.rows <= 0 or board.cols <= 0:
        errors.append("Board dimensions must be positive")
        return errors

    if not board.is_valid_position(board.actor):
        errors.append(f"Actor at {board.actor} is outside board boundaries")

    for pos, tile in board.tiles.items():
        if not board.is_valid_position(pos):
            errors.append(f"Tile at {pos} is outside board boundaries")
        if tile.chain_gate is not None and tile.chain_gate < 0:
            errors.append(f"Tile at {pos} has a negative chain gate")
        if tile.hit_range is not None and tile.hit_range < 0:
            errors.append(f"Tile at {pos} has a negative hit range")

    return errors


def default_board() -> Board:
    """The 9x9 demo board the editor opens with."""
    builder = BoardBuilder(9, 9, actor=(4, 4))
    builder.paint((4, 4), TileColor.RED)
    builder.paint((4, 5), TileColor.RED)
    builder.paint((4, 6), TileColor.RED)
    builder.paint((5, 6), TileColor.BLUE).toggle((5, 6), "grindstone")
    builder.paint((6, 7), TileColor.BLUE).toggle((6, 7), "angry")
    builder.paint((2, 2), TileColor.YELLOW).toggle((2, 2), "chest")
    builder.board.weights = Weights(w_len=1.0, w_gs=3.0, w_risk=2.0, w_obj=4.0)
    return builder.build()
