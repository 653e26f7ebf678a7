"""Frame-driven game composing input, movement, collision, growth and food."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

import numpy as np

from snake_arcade.collision import Collision
from snake_arcade.config import GameConfig
from snake_arcade.controls import DirectionBuffer, Key
from snake_arcade.food import FoodSpawner
from snake_arcade.movement import MovementEngine, TickReport
from snake_arcade.snake import Direction, SnakeState

logger = logging.getLogger(__name__)

# Logical sprite sizes as a fraction of one tile.
HEAD_SIZE = 0.8
SEGMENT_SIZE = 0.65
FOOD_SIZE = 0.8


class Game:
    """Single-snake arcade game driven one frame at a time.

    Each call to :meth:`update` samples input, advances the movement
    timer, runs at most one movement tick, checks food and advances the
    food spawn timer, in that order. A collision resets the whole world
    to its initial configuration.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = self.config.build_grid()
        self.rng = np.random.default_rng(self.config.seed)

        self.controls = DirectionBuffer()
        self.movement = MovementEngine(self.config.tick_interval)
        self.food = FoodSpawner(
            self.grid,
            max_food=self.config.max_food,
            spawn_interval=self.config.food_interval,
            growth_per_food=self.config.growth_per_food,
            rng=self.rng,
        )
        self.snake = self._spawn_snake()

        self.frame = 0
        self.resets = 0
        self.last_collision = Collision.NONE
        self.on_reset: list[Callable[[Collision], None]] = []

    @property
    def score(self) -> int:
        return self.food.score

    def _spawn_snake(self) -> SnakeState:
        return SnakeState.spawn(
            self.config.head_cell,
            self.config.segment_cells,
            Direction.UP,
        )

    def update(self, dt: float, keys: Iterable[Key] = ()) -> TickReport | None:
        """Advance one frame of *dt* seconds with *keys* held.

        Returns the tick report when a movement tick fired this frame,
        otherwise ``None``.
        """
        self.frame += 1
        self.controls.poll(self.snake.head, keys)

        report = None
        if self.movement.update(dt):
            report = self.tick()

        self.food.update(dt, self.snake.occupied())
        return report

    def tick(self) -> TickReport:
        """Run one movement tick immediately, bypassing the timer."""
        report = self.movement.tick(self.snake, self.grid)
        if report.reset:
            self.reset(report.collision)
            return report

        if self.food.eat(self.snake.head.cell, self.snake.growth):
            logger.debug(
                "Food eaten at %s; score %d.",
                self.snake.head.cell, self.food.score,
            )
        return report

    def reset(self, collision: Collision = Collision.NONE) -> None:
        """Despawn snake and food and respawn the initial configuration."""
        logger.info(
            "Resetting after %s collision at tick %d with score %d.",
            collision.value, self.movement.ticks, self.food.score,
        )
        self.snake.chain.clear()
        self.snake = self._spawn_snake()
        self.food.clear()
        self.movement.reset()
        self.resets += 1
        self.last_collision = collision
        for callback in list(self.on_reset):
            callback(collision)

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        head = self.snake.head
        return {
            "frame": self.frame,
            "tick": self.movement.ticks,
            "score": self.food.score,
            "resets": self.resets,
            "last_collision": self.last_collision.value,
            "held_keys": sorted(d.name.lower() for d in self.controls.last_keys),
            "arena": self.grid.to_dict(),
            "snake": self.snake.to_dict(),
            "food": self.food.to_dict(),
            "sprites": [
                {"kind": "head", "cell": list(head.cell), "size": HEAD_SIZE},
                *(
                    {"kind": "segment", "cell": list(c), "size": SEGMENT_SIZE}
                    for c in self.snake.chain.cells()
                ),
                *(
                    {"kind": "food", "cell": list(c), "size": FOOD_SIZE}
                    for c in self.food.positions
                ),
            ],
        }
