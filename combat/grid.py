from typing import Iterable, Iterator, List, Sequence

import numpy as np

from .model import Position

UP = (-1, 0)
LEFT = (0, -1)
RIGHT = (0, 1)
DOWN = (1, 0)
# Reading order of a cell's neighbours. Every tie-break depends on this.
DIRECTIONS = (UP, LEFT, RIGHT, DOWN)


def neighbors_reading_order(pos: Position) -> List[Position]:
    """Orthogonal neighbours of pos, unbounded, in reading order."""
    r, c = pos
    return [(r + dr, c + dc) for dr, dc in DIRECTIONS]


class Grid:
    """Static wall layout. Occupancy lives in the UnitRegistry."""

    def __init__(self, walls: np.ndarray):
        if walls.ndim != 2 or walls.size == 0:
            raise ValueError("grid must be a non-empty 2-D array")
        self._walls = walls.astype(bool)  # always a private copy
        self._walls.setflags(write=False)

    @classmethod
    def from_rows(cls, rows: Sequence[Iterable[bool]]) -> "Grid":
        """Build from rows of booleans, True meaning wall."""
        return cls(np.array([list(r) for r in rows], dtype=bool))

    @property
    def rows(self) -> int:
        return self._walls.shape[0]

    @property
    def cols(self) -> int:
        return self._walls.shape[1]

    def in_bounds(self, pos: Position) -> bool:
        r, c = pos
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_wall(self, pos: Position) -> bool:
        """Out-of-bounds cells count as walls."""
        if not self.in_bounds(pos):
            return True
        return bool(self._walls[pos])

    def neighbors_reading_order(self, pos: Position) -> Iterator[Position]:
        """In-bounds neighbours of pos: up, left, right, down."""
        for p in neighbors_reading_order(pos):
            if self.in_bounds(p):
                yield p
