"""Tests for grid storage, gravity and row clearing."""

import pytest

from src.engine import Grid, Position, make_tile


class TestConstruction:
    """Building grids."""

    def test_empty_grid(self):
        """A new grid has no tiles."""
        grid = Grid(10, 20)
        assert grid.width == 10
        assert grid.height == 20
        assert grid.occupied_count() == 0

    def test_invalid_dimensions(self):
        """Zero or negative sizes are rejected."""
        with pytest.raises(ValueError):
            Grid(0, 10)

    def test_from_rows(self):
        """Text rows map letters to tiles and '.' to empty cells."""
        grid = Grid.from_rows(["...", "CAT"])
        assert grid.get(Position(0, 1)).letter == "C"
        assert grid.get(Position(0, 1)).value == 3
        assert grid.get(Position(0, 0)) is None
        assert grid.to_rows() == ["...", "CAT"]

    def test_ragged_rows_rejected(self):
        """All rows must be the same width."""
        with pytest.raises(ValueError):
            Grid.from_rows(["...", "CA"])

    def test_copy_is_independent(self):
        """Mutating a copy leaves the original untouched."""
        grid = Grid.from_rows(["...", "CAT"])
        clone = grid.copy()
        clone.remove_at([Position(0, 1)])
        assert grid.get(Position(0, 1)).letter == "C"
        assert clone != grid


class TestPlacement:
    """Placing tiles and placement checks."""

    def test_place_in_empty_cell(self):
        grid = Grid(3, 3)
        assert grid.place(make_tile("A"), Position(1, 2)) is True
        assert grid.get(Position(1, 2)).letter == "A"

    def test_place_on_occupied_cell_is_noop(self):
        """Placing on an occupied cell fails and keeps the original tile."""
        grid = Grid.from_rows(["...", "CAT"])
        assert grid.place(make_tile("Z"), Position(0, 1)) is False
        assert grid.get(Position(0, 1)).letter == "C"

    def test_place_out_of_bounds_is_noop(self):
        grid = Grid(3, 3)
        assert grid.place(make_tile("A"), Position(3, 0)) is False
        assert grid.place(make_tile("A"), Position(0, -1)) is False
        assert grid.occupied_count() == 0

    def test_can_place_above_grid(self):
        """The spawn buffer above the grid is open within column bounds."""
        grid = Grid(3, 3)
        assert grid.can_place(Position(1, -1)) is True
        assert grid.can_place(Position(-1, -1)) is False
        assert grid.can_place(Position(1, 3)) is False

    def test_drop_position(self):
        """Dropping stops on top of the highest tile in the column."""
        grid = Grid.from_rows(["...", "...", "...", "C.."])
        assert grid.drop_position(Position(0, 0)) == Position(0, 2)
        assert grid.drop_position(Position(1, -2)) == Position(1, 3)


class TestRemovalAndGravity:
    """Removing tiles and compacting columns."""

    def test_remove_does_not_reflow(self):
        grid = Grid.from_rows(["X..", "CAT"])
        grid.remove_at([Position(0, 1), Position(1, 1), Position(2, 1)])
        assert grid.to_rows() == ["X..", "..."]

    def test_removal_then_gravity(self):
        """Tiles above a removed word fall, keeping their order."""
        grid = Grid.from_rows([
            "....",
            "X...",
            "Y...",
            "CAT.",
        ])
        grid.remove_at([Position(0, 3), Position(1, 3), Position(2, 3)])
        grid.apply_gravity()
        assert grid.to_rows() == [
            "....",
            "....",
            "X...",
            "Y...",
        ]

    def test_gravity_is_idempotent(self):
        grid = Grid.from_rows([
            "A.C.",
            ".B..",
            "D..E",
            "....",
        ])
        grid.apply_gravity()
        once = grid.copy()
        grid.apply_gravity()
        assert grid == once

    def test_gravity_preserves_column_isolation(self):
        """Columns are compacted independently."""
        grid = Grid.from_rows([
            "A..Q",
            "...R",
            ".B.S",
            "....",
        ])
        grid.apply_gravity()
        rows = grid.to_rows()
        assert [row[3] for row in rows] == [".", "Q", "R", "S"]
        assert [row[0] for row in rows] == [".", ".", ".", "A"]
        assert [row[1] for row in rows] == [".", ".", ".", "B"]
        assert grid.occupied_count() == 5


class TestTopOutAndRows:
    """Top-out detection and completed-row clearing."""

    def test_topout_in_second_row(self):
        grid = Grid.from_rows(["...", "A..", "...", "..."])
        assert grid.is_topout_full() is True

    def test_no_topout_below_second_row(self):
        grid = Grid.from_rows(["...", "...", "A..", "..."])
        assert grid.is_topout_full() is False

    def test_full_rows(self):
        grid = Grid.from_rows([
            "A...",
            "BCDE",
            ".J..",
            "FGHI",
        ])
        assert grid.full_rows() == {1, 3}

    def test_clear_rows_shifts_down(self):
        """Cleared rows disappear and the rows above drop into place."""
        grid = Grid.from_rows([
            "A...",
            "BCDE",
            ".J..",
            "FGHI",
        ])
        cleared = grid.clear_rows(grid.full_rows())
        assert cleared == 2
        assert grid.to_rows() == [
            "....",
            "....",
            "A...",
            ".J..",
        ]

    def test_clear_no_rows(self):
        grid = Grid.from_rows(["A..", "..."])
        assert grid.clear_rows(set()) == 0
        assert grid.to_rows() == ["A..", "..."]
