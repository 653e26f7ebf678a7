"""Snake entities: directions, the head, and the body segment chain."""

from __future__ import annotations

import enum
import itertools
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from snake_arcade.grid import Cell
from snake_arcade.growth import GrowthQueue

SegmentId = int


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``UP`` increases ``y``; the arena origin is the bottom-left corner.
    """

    LEFT = (-1, 0)
    UP = (0, 1)
    RIGHT = (1, 0)
    DOWN = (0, -1)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_OPPOSITES: dict[Direction, Direction] = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}


def opposite(direction: Direction) -> Direction:
    """Return the direction pointing the other way."""
    return _OPPOSITES[direction]


@dataclass
class Head:
    """The leading entity: current facing and its own cell."""

    cell: Cell
    direction: Direction = Direction.UP

    def next_cell(self) -> Cell:
        """Cell the head would enter on the next tick."""
        dx, dy = self.direction.value
        return self.cell.offset(dx, dy)


class SegmentChain:
    """Ordered body segments behind the head.

    Segments are identified by opaque integer ids. Positions live in an
    arena keyed by id; ``order`` lists ids from the segment nearest the
    head (index 0) to the tail (index -1). Ids are never reused within a
    chain, so an id that was removed can no longer resolve to a cell.
    """

    def __init__(self, cells: Iterable[Cell] = ()) -> None:
        self._ids = itertools.count()
        self._cells: dict[SegmentId, Cell] = {}
        self.order: list[SegmentId] = []
        for cell in cells:
            self.append(cell)

    def __len__(self) -> int:
        return len(self.order)

    def __iter__(self) -> Iterator[SegmentId]:
        return iter(self.order)

    def __contains__(self, segment_id: object) -> bool:
        return segment_id in self._cells

    @property
    def tail(self) -> SegmentId | None:
        return self.order[-1] if self.order else None

    def cell_of(self, segment_id: SegmentId) -> Cell:
        """Return the cell owned by *segment_id*.

        Raises ``KeyError`` for an id with no backing position.
        """
        return self._cells[segment_id]

    def place(self, segment_id: SegmentId, cell: Cell) -> None:
        """Move an existing segment to *cell*."""
        if segment_id not in self._cells:
            raise KeyError(segment_id)
        self._cells[segment_id] = cell

    def append(self, cell: Cell) -> SegmentId:
        """Add a new tail segment at *cell* and return its id."""
        return self.insert(len(self.order), cell)

    def insert(self, index: int, cell: Cell) -> SegmentId:
        """Insert a new segment at *index* in the chain order."""
        segment_id = next(self._ids)
        self._cells[segment_id] = cell
        self.order.insert(index, segment_id)
        return segment_id

    def remove(self, segment_id: SegmentId) -> Cell:
        """Remove a segment and return the cell it occupied."""
        cell = self._cells.pop(segment_id)
        self.order.remove(segment_id)
        return cell

    def clear(self) -> None:
        self._cells.clear()
        self.order.clear()

    def cells(self) -> list[Cell]:
        """Segment cells in chain order, head side first."""
        return [self._cells[sid] for sid in self.order]

    def occupied(self) -> set[Cell]:
        """Set of cells currently covered by segments."""
        return set(self._cells.values())


@dataclass
class SnakeState:
    """Everything one simulation tick reads and writes.

    ``last_tail_cell`` is the cell vacated by the tail on the most recent
    tick and is only meaningful right after that tick.
    """

    head: Head
    chain: SegmentChain
    growth: GrowthQueue = field(default_factory=GrowthQueue)
    last_tail_cell: Cell | None = None

    @classmethod
    def spawn(
        cls,
        head_cell: Cell,
        segment_cells: Iterable[Cell],
        direction: Direction = Direction.UP,
    ) -> SnakeState:
        """Create a fresh snake in its initial configuration."""
        return cls(
            head=Head(cell=head_cell, direction=direction),
            chain=SegmentChain(segment_cells),
        )

    def occupied(self) -> set[Cell]:
        """Cells covered by the head and every segment."""
        cells = self.chain.occupied()
        cells.add(self.head.cell)
        return cells

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "head": {
                "cell": list(self.head.cell),
                "direction": self.head.direction.name.lower(),
            },
            "segments": [list(c) for c in self.chain.cells()],
            "length": len(self.chain),
            "pending_growth": self.growth.pending,
            "last_tail_cell": (
                list(self.last_tail_cell)
                if self.last_tail_cell is not None else None
            ),
        }
