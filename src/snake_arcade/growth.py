"""Pending growth counter and tail materialization."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snake_arcade.grid import Cell
    from snake_arcade.snake import SegmentChain, SegmentId


class GrowthQueue:
    """Counts growth events that have not yet become segments.

    At most one segment is added per :meth:`drain` call, so growth never
    outpaces one segment per tick.
    """

    def __init__(self) -> None:
        self.pending = 0

    def schedule(self, amount: int = 1) -> None:
        """Queue *amount* growth events."""
        if amount < 0:
            raise ValueError("Growth amount must be non-negative.")
        self.pending += amount

    def drain(
        self, chain: SegmentChain, last_tail_cell: Cell | None,
    ) -> SegmentId | None:
        """Append one tail segment at *last_tail_cell* if growth is pending.

        Returns the new segment id, or ``None`` when nothing was pending.
        """
        if self.pending <= 0:
            return None
        if last_tail_cell is None:
            raise ValueError("No vacated tail cell recorded for this tick.")
        self.pending -= 1
        return chain.append(last_tail_cell)

    def clear(self) -> None:
        self.pending = 0
