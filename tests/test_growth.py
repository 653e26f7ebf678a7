"""Tests for the growth queue."""

import pytest

from snake_arcade.grid import Cell
from snake_arcade.growth import GrowthQueue
from snake_arcade.snake import SegmentChain


class TestGrowthQueue:
    def test_starts_empty(self):
        assert GrowthQueue().pending == 0

    def test_schedule_accumulates(self):
        queue = GrowthQueue()
        queue.schedule()
        queue.schedule(2)
        assert queue.pending == 3

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            GrowthQueue().schedule(-1)

    def test_drain_noop_when_nothing_pending(self):
        chain = SegmentChain([Cell(0, 0)])
        assert GrowthQueue().drain(chain, Cell(0, 1)) is None
        assert len(chain) == 1

    def test_drain_appends_at_vacated_cell(self):
        chain = SegmentChain([Cell(0, 0), Cell(0, 1)])
        old_tail = chain.tail
        queue = GrowthQueue()
        queue.schedule(2)
        sid = queue.drain(chain, Cell(0, 2))
        assert sid == chain.tail
        assert chain.order[-2] == old_tail
        assert chain.cell_of(sid) == Cell(0, 2)
        assert queue.pending == 1

    def test_drain_requires_vacated_cell(self):
        queue = GrowthQueue()
        queue.schedule()
        with pytest.raises(ValueError, match="tail cell"):
            queue.drain(SegmentChain(), None)
        assert queue.pending == 1

    def test_clear(self):
        queue = GrowthQueue()
        queue.schedule(4)
        queue.clear()
        assert queue.pending == 0
