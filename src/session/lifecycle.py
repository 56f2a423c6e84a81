"""
Falling-piece state machine.

Tracks the active tile through FALLING -> LOCK_DELAY -> LOCKED. Movement that
is not possible is reported as a False/zero result, never raised. Timing is
driven by ``advance()``; pausing is handled by the session, which simply stops
advancing time.
"""

from typing import Optional

from ..engine.grid import Grid
from ..engine.models import Position, Tile


FALLING = "falling"
LOCK_DELAY = "lock_delay"
LOCKED = "locked"


class ActivePiece:
    """
    The tile currently under player control.

    Attributes:
        tile: The falling tile
        position: Current position (``y`` may be negative above the grid)
        phase: FALLING, LOCK_DELAY or LOCKED
        lock_delay_ms: Length of the grace period once the tile is blocked
        lock_delay_remaining: Time left on a pending lock delay
    """

    def __init__(self, tile: Tile, position: Position, lock_delay_ms: int = 500):
        self.tile = tile
        self.position = Position(*position)
        self.lock_delay_ms = lock_delay_ms
        self.phase = FALLING
        self.lock_delay_remaining: Optional[int] = None

    def __repr__(self) -> str:
        return f"ActivePiece({self.tile.letter!r}, {tuple(self.position)}, {self.phase})"

    @property
    def lock_delay_active(self) -> bool:
        return self.phase == LOCK_DELAY

    @property
    def locked(self) -> bool:
        return self.phase == LOCKED

    def can_fall(self, grid: Grid) -> bool:
        return grid.can_place(Position(self.position.x, self.position.y + 1))

    def _start_lock_delay(self) -> None:
        # Only one lock delay may be pending at a time
        if self.phase == FALLING:
            self.phase = LOCK_DELAY
            self.lock_delay_remaining = self.lock_delay_ms

    def _cancel_lock_delay(self) -> None:
        if self.phase == LOCK_DELAY:
            self.phase = FALLING
            self.lock_delay_remaining = None

    def _move_down(self) -> None:
        self.position = Position(self.position.x, self.position.y + 1)

    def gravity_tick(self, grid: Grid) -> bool:
        """
        One gravity step.

        Returns:
            True if the tile moved down
        """
        if self.locked:
            return False
        if self.can_fall(grid):
            self._move_down()
            self._cancel_lock_delay()
            return True
        self._start_lock_delay()
        return False

    def move(self, grid: Grid, dx: int) -> bool:
        """Shift horizontally by ``dx`` columns if the target cell is free."""
        if self.locked:
            return False
        target = Position(self.position.x + dx, self.position.y)
        if not grid.can_place(target):
            return False
        self.position = target
        if self.can_fall(grid):
            self._cancel_lock_delay()
        return True

    def soft_drop(self, grid: Grid) -> bool:
        """Move down one row, or start the lock delay if blocked."""
        return self.gravity_tick(grid)

    def hard_drop(self, grid: Grid) -> int:
        """
        Drop until blocked and lock immediately.

        Returns:
            Number of rows dropped
        """
        if self.locked:
            return 0
        landing = grid.drop_position(self.position)
        distance = landing.y - self.position.y
        self.position = landing
        self.lock_delay_remaining = None
        self.phase = LOCKED
        return distance

    def advance(self, elapsed_ms: int) -> bool:
        """
        Run the lock-delay timer.

        Returns:
            True if the lock delay expired and the piece is now LOCKED
        """
        if self.phase != LOCK_DELAY:
            return False
        self.lock_delay_remaining -= elapsed_ms
        if self.lock_delay_remaining <= 0:
            self.lock_delay_remaining = None
            self.phase = LOCKED
            return True
        return False
