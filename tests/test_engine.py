"""Tests for the frame-driven Game."""

import json

import numpy as np

from snake_arcade.collision import Collision
from snake_arcade.config import GameConfig
from snake_arcade.controls import KEY_PRIORITY
from snake_arcade.engine import Game
from snake_arcade.grid import Cell
from snake_arcade.snake import Direction

# Keeps random food out of the way in scripted scenarios.
_QUIET = GameConfig(food_interval=1000.0, seed=0)


def _assert_initial(game: Game) -> None:
    assert game.snake.head.cell == Cell(10, 10)
    assert game.snake.head.direction == Direction.UP
    assert game.snake.chain.cells() == [Cell(10, 9), Cell(10, 8)]
    assert game.snake.growth.pending == 0
    assert game.score == 0


class TestGameInit:
    def test_initial_configuration(self):
        game = Game()
        _assert_initial(game)
        assert game.resets == 0
        assert game.food.positions == []

    def test_uses_config(self):
        game = Game(GameConfig.centered(8, 8, bounds="inclusive"))
        assert game.grid.columns == 9
        assert game.snake.head.cell == Cell(4, 4)


class TestGameScenarios:
    def test_single_up_tick(self):
        game = Game(_QUIET)
        report = game.tick()
        assert not report.reset
        assert game.snake.head.cell == Cell(10, 11)
        assert game.snake.chain.cells() == [Cell(10, 10), Cell(10, 9)]
        assert len(game.snake.chain) == 2

    def test_food_grows_on_following_tick(self):
        game = Game(_QUIET)
        game.food.place(Cell(10, 11))

        game.tick()  # tick N: head lands on food
        assert game.score == 1
        assert game.snake.growth.pending == 1
        assert len(game.snake.chain) == 2
        assert game.food.positions == []

        report = game.tick()  # tick N+1: vacated tail becomes new segment
        assert game.snake.growth.pending == 0
        assert len(game.snake.chain) == 3
        assert game.snake.last_tail_cell == Cell(10, 9)
        assert game.snake.chain.cells() == [Cell(10, 11), Cell(10, 10), Cell(10, 9)]
        assert report.grown == game.snake.chain.tail

    def test_self_collision_resets(self):
        game = Game(_QUIET)
        seen: list[Collision] = []
        game.on_reset.append(seen.append)
        # Two quick turns inside one tick window swing the head into
        # its own neck: left, then down.
        assert game.update(0.0625, ["left"]) is None
        report = game.update(0.0625, ["down"])

        assert report is not None
        assert report.collision == Collision.SELF
        assert seen == [Collision.SELF]
        assert game.resets == 1
        assert game.last_collision == Collision.SELF
        _assert_initial(game)

    def test_wall_collision_resets(self):
        game = Game(_QUIET)
        reports = [game.tick() for _ in range(10)]
        assert not any(r.reset for r in reports[:9])
        assert reports[9].collision == Collision.WALL
        _assert_initial(game)

    def test_inclusive_bounds_allow_far_edge(self):
        game = Game(_QUIET.with_overrides(bounds="inclusive"))
        reports = [game.tick() for _ in range(11)]
        assert not any(r.reset for r in reports[:10])
        assert reports[10].collision == Collision.WALL

    def test_reset_clears_food_score_and_growth(self):
        game = Game(_QUIET)
        game.food.place(Cell(10, 11))
        game.tick()
        game.food.place(Cell(3, 3))
        assert game.snake.growth.pending == 1
        game.reset()
        _assert_initial(game)
        assert game.food.positions == []

    def test_reversal_is_ignored(self):
        game = Game(_QUIET)
        game.update(0.125, ["down"])
        assert game.snake.head.cell == Cell(10, 11)
        assert game.resets == 0


class TestGameClocks:
    def test_movement_waits_for_tick_interval(self):
        game = Game(_QUIET)
        assert game.update(0.0625) is None
        assert game.snake.head.cell == Cell(10, 10)
        assert game.update(0.0625) is not None
        assert game.snake.head.cell == Cell(10, 11)

    def test_turn_between_ticks_is_kept(self):
        game = Game(_QUIET)
        game.update(0.0625, ["right"])
        game.update(0.0625, [])
        assert game.snake.head.cell == Cell(11, 10)

    def test_food_spawns_on_its_own_interval(self):
        game = Game(GameConfig(food_interval=0.5, tick_interval=1.0, seed=3))
        game.update(0.25)
        assert game.food.positions == []
        game.update(0.25)
        assert len(game.food.positions) == 1
        assert game.movement.ticks == 0
        assert game.food.positions[0] not in game.snake.occupied()


class TestGameInvariants:
    def test_chain_growth_property(self):
        game = Game(GameConfig(food_interval=0.25, max_food=20, seed=11))
        rng = np.random.default_rng(5)
        for _ in range(400):
            before = len(game.snake.chain)
            pending = game.snake.growth.pending
            key = KEY_PRIORITY[int(rng.integers(4))]
            report = game.update(game.config.tick_interval, [key])
            assert report is not None
            if report.reset:
                assert len(game.snake.chain) == 2
                continue
            assert len(game.snake.chain) == before + (1 if pending > 0 else 0)
            cells = [game.snake.head.cell, *game.snake.chain.cells()]
            assert len(set(cells)) == len(cells)


class TestGameSerialization:
    def test_state_is_json_serializable(self):
        game = Game(GameConfig(seed=42))
        for _ in range(20):
            game.update(0.125, ["left"])
        assert isinstance(json.dumps(game.get_state()), str)

    def test_state_structure(self):
        state = Game(_QUIET).get_state()
        for key in ("frame", "tick", "score", "resets", "arena", "snake", "food"):
            assert key in state
        kinds = [s["kind"] for s in state["sprites"]]
        assert kinds == ["head", "segment", "segment"]
        assert state["sprites"][0]["cell"] == [10, 10]
        assert state["held_keys"] == []

    def test_state_reports_held_keys(self):
        game = Game(_QUIET)
        game.update(0.01, ["right", "left", "jump"])
        assert game.get_state()["held_keys"] == ["left", "right"]
        game.update(0.01, [])
        assert game.get_state()["held_keys"] == []


class TestGameDeterminism:
    def test_same_seed_same_outcome(self):
        keys = ["left", "left", "down", "right", "up", "up", "right"] * 6
        assert self._run(123, keys) == self._run(123, keys)

    @staticmethod
    def _run(seed: int, keys: list[str]) -> dict:
        game = Game(GameConfig(seed=seed, food_interval=0.25))
        for key in keys:
            game.update(0.125, [key])
        return game.get_state()
