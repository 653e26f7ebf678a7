"""Wall and self collision checks for a freshly moved head."""

from __future__ import annotations

import enum
from collections.abc import Collection
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snake_arcade.grid import Cell, Grid


class Collision(enum.Enum):
    """Outcome of a collision check."""

    NONE = "none"
    WALL = "wall"
    SELF = "self"

    def __bool__(self) -> bool:
        return self is not Collision.NONE


def hits_wall(grid: Grid, cell: Cell) -> bool:
    """True when *cell* lies outside the arena's configured bounds."""
    return not grid.in_bounds(cell)


def hits_body(cell: Cell, occupied: Collection[Cell]) -> bool:
    """True when *cell* is one of the pre-tick segment cells."""
    return cell in occupied


def detect(grid: Grid, new_head: Cell, occupied: Collection[Cell]) -> Collision:
    """Classify the new head position.

    *occupied* must be the segment cells captured before the chain shift.
    A wall hit takes precedence when both checks fire.
    """
    if hits_wall(grid, new_head):
        return Collision.WALL
    if hits_body(new_head, occupied):
        return Collision.SELF
    return Collision.NONE
