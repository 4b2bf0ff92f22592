import copy
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import CombatStateError
from .grid import Grid
from .model import Position, Race, Unit


class UnitRegistry:
    """Units plus the position index that doubles as occupancy and liveness.

    Units are addressed by their index in ``units``; the index never changes
    and dead units stay in the list with zero hit points. ``positions`` maps
    every live unit's cell to its index and nothing else.
    """

    def __init__(self, grid: Grid, units: Iterable[Unit]):
        self.grid = grid
        self.units: List[Unit] = [copy.copy(u) for u in units]
        self.positions: Dict[Position, int] = {}
        for idx, u in enumerate(self.units):
            if not u.alive:
                continue
            if grid.is_wall(u.position):
                raise CombatStateError(f"unit {idx} placed on a wall at {u.position}")
            if u.position in self.positions:
                raise CombatStateError(
                    f"units {self.positions[u.position]} and {idx} share {u.position}")
            self.positions[u.position] = idx

    def __getitem__(self, idx: int) -> Unit:
        return self.units[idx]

    def is_open(self, pos: Position) -> bool:
        """In bounds, not a wall and not held by a live unit."""
        return not self.grid.is_wall(pos) and pos not in self.positions

    def open_neighbors(self, pos: Position) -> List[Position]:
        return [p for p in self.grid.neighbors_reading_order(pos) if self.is_open(p)]

    def unit_at(self, pos: Position) -> Optional[int]:
        return self.positions.get(pos)

    def living(self) -> Iterator[int]:
        for idx, u in enumerate(self.units):
            if u.alive:
                yield idx

    def living_of(self, race: Race) -> List[int]:
        return [idx for idx in self.living() if self.units[idx].race is race]

    def turn_order(self) -> List[int]:
        """Living unit indices sorted by reading order of position."""
        return sorted(self.living(), key=lambda idx: self.units[idx].position)

    def move(self, idx: int, dest: Position) -> Position:
        """Move a live unit to an open cell. Returns where it came from."""
        u = self.units[idx]
        src = u.position
        if self.positions.get(src) != idx:
            raise CombatStateError(f"unit {idx} is not indexed at {src}")
        if not self.is_open(dest):
            raise CombatStateError(f"unit {idx} cannot enter {dest}")
        del self.positions[src]
        self.positions[dest] = idx
        u.position = dest
        return src

    def damage(self, idx: int, amount: int) -> int:
        """Apply damage, floored at zero. Returns the remaining hit points."""
        u = self.units[idx]
        if not u.alive:
            raise CombatStateError(f"unit {idx} is already dead")
        u.hit_points = max(0, u.hit_points - amount)
        if not u.alive:
            del self.positions[u.position]
        return u.hit_points

    def total_hit_points(self, race: Optional[Race] = None) -> int:
        return sum(u.hit_points for u in self.units if race is None or u.race is race)

    def snapshot(self) -> Tuple[Unit, ...]:
        """Copies of the living units in reading order."""
        return tuple(copy.copy(self.units[idx]) for idx in self.turn_order())

    def check_invariants(self) -> None:
        """Raise CombatStateError if the position index drifted from the units."""
        expected: Dict[Position, int] = {}
        for idx in self.living():
            pos = self.units[idx].position
            if pos in expected:
                raise CombatStateError(f"units {expected[pos]} and {idx} share {pos}")
            if self.grid.is_wall(pos):
                raise CombatStateError(f"unit {idx} stands on a wall at {pos}")
            expected[pos] = idx
        if expected != self.positions:
            raise CombatStateError("position index out of sync with living units")
