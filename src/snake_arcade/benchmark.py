"""Throughput benchmarking for the movement tick."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from snake_arcade.config import GameConfig
from snake_arcade.controls import KEY_PRIORITY
from snake_arcade.engine import Game

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_ticks: int
    total_resets: int
    max_length: int
    wall_time_seconds: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_ticks} ticks, "
            f"{self.total_resets} resets, longest chain {self.max_length} in "
            f"{self.wall_time_seconds:.2f}s | "
            f"{self.ticks_per_second:.1f} ticks/s"
        )


def benchmark_throughput(
    *,
    ticks: int = 10_000,
    arena_width: int = 20,
    arena_height: int = 20,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw simulation throughput.

    Each tick holds one random key and feeds exactly one tick interval
    of frame time, so every frame fires a movement tick.
    """
    config = GameConfig.centered(arena_width, arena_height, seed=seed)
    game = Game(config)
    rng = np.random.default_rng(seed)
    max_length = len(game.snake.chain)

    start = time.perf_counter()
    for _ in range(ticks):
        key = KEY_PRIORITY[int(rng.integers(len(KEY_PRIORITY)))]
        game.update(config.tick_interval, [key])
        max_length = max(max_length, len(game.snake.chain))
    elapsed = time.perf_counter() - start

    result = BenchmarkResult(
        total_ticks=game.movement.ticks,
        total_resets=game.resets,
        max_length=max_length,
        wall_time_seconds=elapsed,
        ticks_per_second=game.movement.ticks / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
