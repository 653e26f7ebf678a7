"""Per-frame direction sampling from held movement keys."""

from __future__ import annotations

from collections.abc import Iterable

from snake_arcade.snake import Direction, Head

# First pressed key in this order wins.
KEY_PRIORITY: tuple[Direction, ...] = (
    Direction.LEFT,
    Direction.DOWN,
    Direction.UP,
    Direction.RIGHT,
)

_KEY_NAMES: dict[str, Direction] = {
    "left": Direction.LEFT,
    "down": Direction.DOWN,
    "up": Direction.UP,
    "right": Direction.RIGHT,
}

Key = Direction | str


def parse_keys(keys: Iterable[Key]) -> set[Direction]:
    """Normalize held keys to directions, dropping unknown names."""
    pressed: set[Direction] = set()
    for key in keys:
        if isinstance(key, Direction):
            pressed.add(key)
        elif isinstance(key, str):
            direction = _KEY_NAMES.get(key.strip().lower())
            if direction is not None:
                pressed.add(direction)
    return pressed


def resolve_direction(current: Direction, keys: Iterable[Key]) -> Direction:
    """Pick the facing for this frame.

    The highest-priority held key is the candidate; it is ignored when it
    would reverse *current*. With no keys held the facing is unchanged.
    """
    pressed = parse_keys(keys)
    for candidate in KEY_PRIORITY:
        if candidate in pressed:
            if candidate == current.opposite:
                return current
            return candidate
    return current


class DirectionBuffer:
    """Latches the facing chosen each frame onto the head.

    Sampling runs every frame, so a turn pressed between movement ticks is
    already on the head when the next tick fires.
    """

    def __init__(self) -> None:
        self.last_keys: frozenset[Direction] = frozenset()

    def poll(self, head: Head, keys: Iterable[Key]) -> Direction:
        """Apply this frame's held keys to *head* and return its facing."""
        pressed = parse_keys(keys)
        self.last_keys = frozenset(pressed)
        head.direction = resolve_direction(head.direction, pressed)
        return head.direction
