"""Game configuration with JSON persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path

from snake_arcade.grid import BoundsMode, Cell, Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Tunable settings for a single game.

    Supports JSON serialization so a run can be reproduced.
    """

    # Arena
    arena_width: int = 20
    arena_height: int = 20
    bounds: str = "exclusive"

    # Clocks (seconds)
    tick_interval: float = 0.125
    food_interval: float = 1.0

    # Food
    max_food: int = 5
    growth_per_food: int = 1
    seed: int | None = None

    # Initial spawn
    head_start: tuple[int, int] = (10, 10)
    segment_starts: tuple[tuple[int, int], ...] = ((10, 9), (10, 8))

    def __post_init__(self) -> None:
        if self.arena_width < 4 or self.arena_height < 4:
            raise ValueError("arena_width and arena_height must each be at least 4.")
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive.")
        if self.food_interval <= 0:
            raise ValueError("food_interval must be positive.")
        if self.max_food < 1:
            raise ValueError("max_food must be at least 1.")
        if self.growth_per_food < 0:
            raise ValueError("growth_per_food must be non-negative.")

        grid = self.build_grid()
        starts = [self.head_cell, *self.segment_cells]
        for cell in starts:
            if not grid.in_bounds(cell):
                raise ValueError(
                    f"Start cell {tuple(cell)} lies outside the arena; "
                    "increase arena size or move the snake."
                )
        if len(set(starts)) != len(starts):
            raise ValueError("Initial head and segment cells must not overlap.")

    @property
    def bounds_mode(self) -> BoundsMode:
        return BoundsMode(self.bounds)

    @property
    def head_cell(self) -> Cell:
        return Cell(*self.head_start)

    @property
    def segment_cells(self) -> list[Cell]:
        return [Cell(*c) for c in self.segment_starts]

    def build_grid(self) -> Grid:
        """Create the arena described by this config."""
        return Grid(
            width=self.arena_width,
            height=self.arena_height,
            bounds=self.bounds_mode,
        )

    @classmethod
    def centered(cls, arena_width: int, arena_height: int, **kwargs) -> GameConfig:
        """Config whose snake starts mid-arena, facing up, tail below."""
        x, y = arena_width // 2, arena_height // 2
        return cls(
            arena_width=arena_width,
            arena_height=arena_height,
            head_start=(x, y),
            segment_starts=((x, y - 1), (x, y - 2)),
            **kwargs,
        )

    def with_overrides(self, **overrides) -> GameConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        data = dict(raw)
        if "head_start" in data:
            data["head_start"] = tuple(data["head_start"])
        if "segment_starts" in data:
            data["segment_starts"] = tuple(
                tuple(c) for c in data["segment_starts"]
            )
        return cls(**data)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
