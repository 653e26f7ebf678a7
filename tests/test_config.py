"""Tests for the game configuration dataclass."""

import json

import pytest

from snake_arcade.config import GameConfig
from snake_arcade.grid import BoundsMode, Cell


class TestGameConfigDefaults:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.arena_width == 20
        assert cfg.bounds_mode == BoundsMode.EXCLUSIVE
        assert cfg.head_cell == Cell(10, 10)
        assert cfg.segment_cells == [Cell(10, 9), Cell(10, 8)]
        assert cfg.growth_per_food == 1

    def test_build_grid(self):
        grid = GameConfig(bounds="inclusive").build_grid()
        assert grid.bounds == BoundsMode.INCLUSIVE
        assert grid.width == 20


class TestGameConfigValidation:
    def test_small_arena(self):
        with pytest.raises(ValueError, match="at least 4"):
            GameConfig(arena_width=3)

    def test_non_positive_intervals(self):
        with pytest.raises(ValueError, match="tick_interval"):
            GameConfig(tick_interval=0)
        with pytest.raises(ValueError, match="food_interval"):
            GameConfig(food_interval=-1.0)

    def test_negative_growth(self):
        with pytest.raises(ValueError, match="growth_per_food"):
            GameConfig(growth_per_food=-1)

    def test_start_out_of_bounds(self):
        with pytest.raises(ValueError, match="outside the arena"):
            GameConfig(arena_width=8, arena_height=8)

    def test_start_cell_on_far_edge_needs_inclusive_bounds(self):
        kwargs = dict(
            arena_width=10, arena_height=10,
            head_start=(10, 5), segment_starts=((9, 5),),
        )
        with pytest.raises(ValueError, match="outside the arena"):
            GameConfig(**kwargs)
        assert GameConfig(bounds="inclusive", **kwargs).head_cell == Cell(10, 5)

    def test_overlapping_start(self):
        with pytest.raises(ValueError, match="overlap"):
            GameConfig(segment_starts=((10, 9), (10, 9)))

    def test_unknown_bounds(self):
        with pytest.raises(ValueError):
            GameConfig(bounds="sideways")


class TestGameConfigHelpers:
    def test_centered(self):
        cfg = GameConfig.centered(8, 6, bounds="inclusive")
        assert cfg.head_cell == Cell(4, 3)
        assert cfg.segment_cells == [Cell(4, 2), Cell(4, 1)]
        assert cfg.bounds == "inclusive"

    def test_with_overrides_skips_none(self):
        cfg = GameConfig().with_overrides(max_food=2, seed=None)
        assert cfg.max_food == 2
        assert cfg.seed is None

    def test_with_overrides_no_changes_returns_self(self):
        cfg = GameConfig()
        assert cfg.with_overrides(seed=None) is cfg


class TestGameConfigPersistence:
    def test_to_dict_is_json_serializable(self):
        d = GameConfig().to_dict()
        assert json.loads(json.dumps(d))["head_start"] == [10, 10]

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(
            tick_interval=0.1, bounds="inclusive", seed=7,
            segment_starts=((10, 9), (10, 8), (10, 7)),
        )
        path = tmp_path / "nested" / "config.json"
        cfg.save(path)
        assert path.exists()

        loaded = GameConfig.load(path)
        assert loaded == cfg
        assert loaded.segment_starts == ((10, 9), (10, 8), (10, 7))
