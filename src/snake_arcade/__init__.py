"""Snake Arcade: grid snake body simulation."""

from snake_arcade.collision import Collision
from snake_arcade.config import GameConfig
from snake_arcade.controls import DirectionBuffer, resolve_direction
from snake_arcade.engine import Game
from snake_arcade.food import FoodSpawner
from snake_arcade.grid import BoundsMode, Cell, Grid
from snake_arcade.growth import GrowthQueue
from snake_arcade.movement import MovementEngine, TickReport, advance
from snake_arcade.snake import (
    Direction,
    Head,
    SegmentChain,
    SnakeState,
    opposite,
)
from snake_arcade.timer import RepeatingTimer

__all__ = [
    "BoundsMode",
    "Cell",
    "Collision",
    "Direction",
    "DirectionBuffer",
    "FoodSpawner",
    "Game",
    "GameConfig",
    "Grid",
    "GrowthQueue",
    "Head",
    "MovementEngine",
    "RepeatingTimer",
    "SegmentChain",
    "SnakeState",
    "TickReport",
    "advance",
    "opposite",
    "resolve_direction",
]
