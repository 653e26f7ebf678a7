"""Tick-rate movement: head step, follow-the-leader shift, tick report."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from snake_arcade.collision import Collision, detect
from snake_arcade.timer import RepeatingTimer

if TYPE_CHECKING:
    from snake_arcade.grid import Cell, Grid
    from snake_arcade.snake import SegmentId, SnakeState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    """What a single chain shift did."""

    previous_head: Cell
    new_head: Cell
    occupied_before: frozenset[Cell]
    vacated_tail: Cell


@dataclass(frozen=True)
class TickReport:
    """Result of one movement tick.

    ``reset`` is the one-shot signal telling the game-state owner to tear
    the world down and respawn it.
    """

    move: Move
    collision: Collision
    grown: SegmentId | None = None

    @property
    def reset(self) -> bool:
        return bool(self.collision)


def advance(state: SnakeState) -> Move:
    """Step the head one cell and shift every segment into its
    predecessor's old cell.

    Each segment swaps its cell with the carried ``last_position`` so it
    only ever receives a pre-tick position. The final carried value is the
    cell the tail vacated and is stored as ``state.last_tail_cell``.
    """
    chain = state.chain
    occupied_before = frozenset(chain.occupied())

    previous_head = state.head.cell
    state.head.cell = state.head.next_cell()

    last_position = previous_head
    for segment_id in chain:
        current = chain.cell_of(segment_id)
        chain.place(segment_id, last_position)
        last_position = current

    state.last_tail_cell = last_position
    return Move(
        previous_head=previous_head,
        new_head=state.head.cell,
        occupied_before=occupied_before,
        vacated_tail=last_position,
    )


class MovementEngine:
    """Runs movement ticks at a fixed rate, independent of frame rate.

    :meth:`update` feeds frame time into the tick timer; :meth:`tick`
    performs one full tick against the given state.
    """

    def __init__(self, tick_interval: float = 0.125) -> None:
        self.timer = RepeatingTimer(tick_interval)
        self.ticks = 0

    @property
    def tick_interval(self) -> float:
        return self.timer.interval

    def update(self, dt: float) -> bool:
        """Accumulate *dt* seconds. Returns True when a tick is due."""
        return self.timer.tick(dt)

    def tick(self, state: SnakeState, grid: Grid) -> TickReport:
        """Move, check collisions, then materialize growth.

        The chain shift always completes. Growth is left pending when the
        tick ends in a collision, since the world is about to be reset.
        """
        move = advance(state)
        self.ticks += 1

        collision = detect(grid, move.new_head, move.occupied_before)
        if collision:
            logger.debug(
                "Tick %d: %s collision at %s.",
                self.ticks, collision.value, move.new_head,
            )
            return TickReport(move=move, collision=collision)

        grown = state.growth.drain(state.chain, state.last_tail_cell)
        return TickReport(move=move, collision=collision, grown=grown)

    def reset(self) -> None:
        self.timer.reset()
