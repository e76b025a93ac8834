"""
Tests for chain legality, danger sets and start colors.
"""

import pytest

from src.game.board import Board, Tile, TileColor
from src.game.rules import (
    StepResult,
    ThreatPolicy,
    can_step,
    compute_danger_set,
    start_colors,
)

RED = TileColor.RED
BLUE = TileColor.BLUE


def make_board(tiles, rows=3, cols=3, actor=(1, 1)):
    return Board(rows, cols, actor=actor, tiles=tiles)


class TestCanStep:
    """Test the step decision table."""

    def test_missing_destination_is_illegal(self):
        board = make_board({(0, 0): Tile(color=RED)})
        assert can_step(board, (0, 0), (0, 1), RED) == StepResult(False, RED)

    def test_chain_gate_met_destroys_obstacle(self):
        board = make_board({(0, 1): Tile(chain_gate=3)})
        step = can_step(board, (0, 0), (0, 1), RED, path_length=3)
        assert step.ok
        assert step.next_color == RED
        assert step.destroys_obstacle

    def test_chain_gate_not_met_falls_through(self):
        # Uncolored, non-switch gate below its threshold cannot be entered
        board = make_board({(0, 1): Tile(chain_gate=3)})
        step = can_step(board, (0, 0), (0, 1), RED, path_length=2)
        assert not step.ok
        assert not step.destroys_obstacle

    def test_colored_gate_below_threshold_uses_color_rules(self):
        board = make_board({(0, 1): Tile(color=RED, chain_gate=5)})
        step = can_step(board, (0, 0), (0, 1), RED, path_length=1)
        assert step.ok
        assert not step.destroys_obstacle

    def test_zero_chain_gate_is_no_gate(self):
        board = make_board({(0, 1): Tile(chain_gate=0)})
        assert not can_step(board, (0, 0), (0, 1), RED, path_length=4).ok

    def test_uncolored_switch_keeps_color(self):
        board = make_board({(0, 1): Tile(grindstone=True)})
        assert can_step(board, (0, 0), (0, 1), RED) == StepResult(True, RED)

    def test_uncolored_plain_tile_is_illegal(self):
        board = make_board({(0, 1): Tile(chest=True)})
        assert not can_step(board, (0, 0), (0, 1), RED).ok

    def test_unset_chain_takes_tile_color(self):
        board = make_board({(0, 1): Tile(color=BLUE)})
        assert can_step(board, (0, 0), (0, 1), None) == StepResult(True, BLUE)

    def test_same_color(self):
        board = make_board({(0, 0): Tile(color=RED), (0, 1): Tile(color=RED)})
        assert can_step(board, (0, 0), (0, 1), RED) == StepResult(True, RED)

    def test_color_mismatch_is_illegal(self):
        board = make_board({(0, 0): Tile(color=RED), (0, 1): Tile(color=BLUE)})
        assert can_step(board, (0, 0), (0, 1), RED) == StepResult(False, RED)

    def test_switch_on_source_changes_color(self):
        board = make_board(
            {(0, 0): Tile(color=RED, grindstone=True), (0, 1): Tile(color=BLUE)}
        )
        assert can_step(board, (0, 0), (0, 1), RED) == StepResult(True, BLUE)

    def test_switch_on_destination_changes_color(self):
        board = make_board(
            {(0, 0): Tile(color=RED), (0, 1): Tile(color=BLUE, grindstone=True)}
        )
        assert can_step(board, (0, 0), (0, 1), RED) == StepResult(True, BLUE)

    def test_enemy_tile_does_not_block(self):
        board = make_board({(0, 1): Tile(color=RED, jerk=True, hit_range=2)})
        assert can_step(board, (0, 0), (0, 1), RED).ok

    def test_source_without_tile(self):
        # The actor may stand on an empty cell
        board = make_board({(0, 1): Tile(color=BLUE)})
        assert not can_step(board, (1, 1), (0, 1), RED).ok


class TestDangerSet:
    """Test threat footprints under both policies."""

    def test_no_threats(self):
        board = make_board({(0, 0): Tile(color=RED)})
        assert compute_danger_set(board) == frozenset()

    def test_ranged_enemy_covers_chebyshev_square(self):
        board = make_board({(2, 2): Tile(jerk=True, hit_range=1)}, rows=5, cols=5)
        danger = compute_danger_set(board)
        assert danger == {(r, c) for r in range(1, 4) for c in range(1, 4)}

    def test_ranged_enemy_larger_range(self):
        board = make_board({(2, 2): Tile(super_enemy=True, hit_range=2)}, rows=5, cols=5)
        assert len(compute_danger_set(board)) == 25

    def test_ranged_enemy_clipped_at_corner(self):
        board = make_board({(0, 0): Tile(jerk=True, hit_range=1)}, rows=5, cols=5)
        assert compute_danger_set(board) == {(0, 0), (0, 1), (1, 0), (1, 1)}

    def test_ranged_default_and_negative_range(self):
        board = make_board({(2, 2): Tile(jerk=True)}, rows=5, cols=5)
        assert len(compute_danger_set(board)) == 9

        board = make_board({(2, 2): Tile(jerk=True, hit_range=-3)}, rows=5, cols=5)
        assert compute_danger_set(board) == {(2, 2)}

    def test_angry_threatens_orthogonal_neighbors(self):
        board = make_board({(2, 2): Tile(color=BLUE, angry=True)}, rows=5, cols=5)
        expected = {(1, 2), (3, 2), (2, 1), (2, 3)}
        assert compute_danger_set(board) == expected
        assert compute_danger_set(board, ThreatPolicy.FOOTPRINT) == expected

    def test_footprint_enemy_ignores_range(self):
        board = make_board({(2, 2): Tile(jerk=True, hit_range=3)}, rows=5, cols=5)
        danger = compute_danger_set(board, ThreatPolicy.FOOTPRINT)
        assert len(danger) == 8
        assert (2, 2) not in danger
        assert (0, 0) not in danger

    def test_overlapping_threats_union(self):
        board = make_board(
            {(0, 0): Tile(jerk=True, hit_range=1), (0, 2): Tile(jerk=True, hit_range=1)},
            rows=2,
            cols=3,
        )
        assert compute_danger_set(board) == {(r, c) for r in range(2) for c in range(3)}

    def test_danger_set_is_frozen(self):
        board = make_board({(1, 1): Tile(jerk=True)})
        danger = compute_danger_set(board)
        with pytest.raises(AttributeError):
            danger.add((0, 0))


class TestStartColors:
    """Test chain start color selection."""

    def test_actor_tile_then_neighbors(self):
        board = make_board(
            {
                (1, 1): Tile(color=RED),
                (0, 0): Tile(color=BLUE),
                (2, 2): Tile(color=RED),
                (0, 2): Tile(color=TileColor.GREEN),
            }
        )
        assert start_colors(board) == (RED, BLUE, TileColor.GREEN)

    def test_falls_back_to_all_board_colors(self):
        board = make_board(
            {(1, 2): Tile(grindstone=True), (0, 4): Tile(color=TileColor.PURPLE), (2, 4): Tile(color=RED)},
            rows=3,
            cols=5,
            actor=(1, 1),
        )
        assert start_colors(board) == (TileColor.PURPLE, RED)

    def test_empty_board(self):
        assert start_colors(make_board({})) == ()
