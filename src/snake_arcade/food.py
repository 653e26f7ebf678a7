"""Food spawning, eating and score keeping."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from snake_arcade.timer import RepeatingTimer

if TYPE_CHECKING:
    from snake_arcade.grid import Cell, Grid
    from snake_arcade.growth import GrowthQueue

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Owns the live food cells and the score counter.

    Food appears on its own fixed interval, decoupled from movement ticks.
    Placement uses a seeded NumPy RNG for reproducible games.
    """

    def __init__(
        self,
        grid: Grid,
        max_food: int = 5,
        spawn_interval: float = 1.0,
        growth_per_food: int = 1,
        rng: np.random.Generator | None = None,
    ) -> None:
        if max_food < 1:
            raise ValueError("max_food must be at least 1.")
        if growth_per_food < 0:
            raise ValueError("growth_per_food must be non-negative.")
        self.grid = grid
        self.max_food = max_food
        self.growth_per_food = growth_per_food
        self.timer = RepeatingTimer(spawn_interval)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.positions: list[Cell] = []
        self.score = 0

    def update(self, dt: float, occupied: Iterable[Cell]) -> Cell | None:
        """Advance the spawn timer and place one food item when it fires."""
        if not self.timer.tick(dt):
            return None
        spawned = self.spawn(1, occupied)
        return spawned[0] if spawned else None

    def spawn(self, count: int, occupied: Iterable[Cell] = ()) -> list[Cell]:
        """Place up to *count* food items on free cells.

        Cells covered by *occupied* or by existing food are skipped.
        Returns the newly placed cells.
        """
        needed = min(count, self.max_food - len(self.positions))
        if needed <= 0:
            return []

        free = self.grid.free_cells([*occupied, *self.positions])
        if not free:
            logger.warning("No free cells available for food spawning.")
            return []

        needed = min(needed, len(free))
        indices = self.rng.choice(len(free), size=needed, replace=False)
        spawned = [free[idx] for idx in indices]
        self.positions.extend(spawned)
        return spawned

    def place(self, cell: Cell) -> None:
        """Put a food item at an exact cell, ignoring the cap."""
        if cell not in self.positions:
            self.positions.append(cell)

    def remove(self, cell: Cell) -> bool:
        """Remove the food at *cell*. Returns True if removed."""
        if cell in self.positions:
            self.positions.remove(cell)
            return True
        return False

    def eat(self, head: Cell, growth: GrowthQueue) -> bool:
        """Consume food under the head, scoring and queueing growth."""
        if not self.remove(head):
            return False
        self.score += 1
        growth.schedule(self.growth_per_food)
        return True

    def clear(self) -> None:
        """Despawn all food and zero the score."""
        self.positions.clear()
        self.score = 0
        self.timer.reset()

    def to_dict(self) -> dict:
        """Serialize food state to a dictionary."""
        return {
            "positions": [list(p) for p in self.positions],
            "max_food": self.max_food,
        }
