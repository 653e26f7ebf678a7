"""Arena model: integer cells and bounds checking."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import NamedTuple

import numpy as np


class Cell(NamedTuple):
    """A grid coordinate. ``y`` grows upward; there is no wraparound."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Cell:
        return Cell(self.x + dx, self.y + dy)


class BoundsMode(enum.Enum):
    """How the far arena edge is treated by wall collision.

    ``EXCLUSIVE`` allows ``0 <= x < width``; ``INCLUSIVE`` also allows
    ``x == width`` (and likewise for ``y``).
    """

    EXCLUSIVE = "exclusive"
    INCLUSIVE = "inclusive"


class Grid:
    """Arena dimensions and coordinate semantics.

    The grid holds no entity state. Occupancy is supplied by the caller
    when needed (e.g. to find free cells for food), and evaluated with a
    NumPy mask laid out as ``[y, x]``.
    """

    def __init__(
        self,
        width: int = 20,
        height: int = 20,
        bounds: BoundsMode = BoundsMode.EXCLUSIVE,
    ) -> None:
        if width < 4 or height < 4:
            raise ValueError("Arena dimensions must be at least 4×4.")
        self.width = width
        self.height = height
        self.bounds = bounds

    @property
    def columns(self) -> int:
        """Number of playable columns under the current bounds mode."""
        return self.width + 1 if self.bounds == BoundsMode.INCLUSIVE else self.width

    @property
    def rows(self) -> int:
        """Number of playable rows under the current bounds mode."""
        return self.height + 1 if self.bounds == BoundsMode.INCLUSIVE else self.height

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a cell lies inside the playable arena."""
        return 0 <= cell.x < self.columns and 0 <= cell.y < self.rows

    def free_cells(self, occupied: Iterable[Cell] = ()) -> list[Cell]:
        """Return every in-bounds cell not listed in *occupied*."""
        mask = np.ones((self.rows, self.columns), dtype=bool)
        for cell in occupied:
            if self.in_bounds(cell):
                mask[cell.y, cell.x] = False
        ys, xs = np.nonzero(mask)
        return [Cell(x, y) for y, x in zip(ys.tolist(), xs.tolist(), strict=True)]

    def to_dict(self) -> dict:
        """Serialize arena settings to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "bounds": self.bounds.value,
        }
