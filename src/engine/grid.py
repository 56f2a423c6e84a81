"""Grid storage, gravity and completed-row clearing."""

from typing import Iterable, List, Optional, Set

from .models import Position, Tile
from .letters import make_tile


class Grid:
    """
    Fixed-size rectangular cell store.

    Cells are addressed as ``(x, y)`` with ``y == 0`` at the top. Every cell is
    either ``None`` or holds exactly one Tile.
    """

    def __init__(self, width: int = 10, height: int = 10):
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[List[Optional[Tile]]] = [[None] * width for _ in range(height)]

    @classmethod
    def from_rows(cls, rows: List[str]) -> "Grid":
        """
        Build a grid from text rows, '.' marking an empty cell.

        Example:
            Grid.from_rows(["...", "CAT"])
        """
        if not rows:
            raise ValueError("At least one row is required")
        width = len(rows[0])
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has length {len(row)}, expected {width}")
            for x, char in enumerate(row):
                if char != '.':
                    grid.cells[y][x] = make_tile(char)
        return grid

    def to_rows(self) -> List[str]:
        """Inverse of from_rows."""
        return [
            ''.join(cell.letter if cell else '.' for cell in row)
            for row in self.cells
        ]

    def copy(self) -> "Grid":
        new = Grid(self.width, self.height)
        new.cells = [row.copy() for row in self.cells]
        return new

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width, self.height, self.cells) == (other.width, other.height, other.cells)

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, {self.occupied_count()} tiles)"

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, pos: Position) -> Optional[Tile]:
        """Tile at a position, or None if empty or out of bounds."""
        if not self.in_bounds(pos):
            return None
        x, y = pos
        return self.cells[y][x]

    def is_empty(self, pos: Position) -> bool:
        return self.in_bounds(pos) and self.get(pos) is None

    def can_place(self, pos: Position) -> bool:
        """
        Check whether a falling tile may occupy a position.

        Positions above the grid (negative ``y``) are allowed as a spawn buffer
        as long as the column is in range.
        """
        x, y = pos
        if x < 0 or x >= self.width or y >= self.height:
            return False
        if y < 0:
            return True
        return self.cells[y][x] is None

    def drop_position(self, pos: Position) -> Position:
        """Lowest position reachable by dropping straight down from ``pos``."""
        x, y = pos
        while self.can_place(Position(x, y + 1)):
            y += 1
        return Position(x, y)

    def place(self, tile: Tile, pos: Position) -> bool:
        """Write a tile into an empty in-bounds cell. Returns False otherwise."""
        if not self.is_empty(pos):
            return False
        x, y = pos
        self.cells[y][x] = tile
        return True

    def remove_at(self, positions: Iterable[Position]) -> None:
        """Empty each listed cell. Does not reflow."""
        for pos in positions:
            if self.in_bounds(pos):
                x, y = pos
                self.cells[y][x] = None

    def apply_gravity(self) -> None:
        """Compact every column downward, preserving vertical order."""
        for x in range(self.width):
            column = [self.cells[y][x] for y in range(self.height) if self.cells[y][x] is not None]
            padding = self.height - len(column)
            for y in range(self.height):
                self.cells[y][x] = column[y - padding] if y >= padding else None

    def is_topout_full(self) -> bool:
        """True if either of the two topmost rows holds a tile."""
        return any(cell is not None for row in self.cells[:2] for cell in row)

    def full_rows(self) -> Set[int]:
        return {y for y, row in enumerate(self.cells) if all(cell is not None for cell in row)}

    def clear_rows(self, rows: Iterable[int]) -> int:
        """
        Clear the given rows and shift everything above them down.

        Returns:
            Number of rows cleared
        """
        rows = {y for y in rows if 0 <= y < self.height}
        if not rows:
            return 0
        kept = [row for y, row in enumerate(self.cells) if y not in rows]
        self.cells = [[None] * self.width for _ in rows] + kept
        return len(rows)

    def occupied_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell is not None)
