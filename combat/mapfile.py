"""Turn the textual cave map into a battle setup.

The map is a rectangle of ``#`` (wall), ``.`` (open floor), ``E`` (elf) and
``G`` (goblin). Unit glyphs stand on open floor.
"""
from dataclasses import dataclass, replace
from typing import Tuple

from .engine import Battle
from .errors import MapFormatError
from .grid import Grid
from .model import DEFAULT_ATTACK_POWER, DEFAULT_HIT_POINTS, Race, Unit

WALL = "#"
FLOOR = "."


@dataclass(frozen=True)
class BattleSetup:
    """Immutable starting point. Every ``build`` gets its own copy of the units."""
    grid: Grid
    units: Tuple[Unit, ...]

    def with_power(self, race: Race, power: int) -> "BattleSetup":
        """Same map with every unit of race hitting for power."""
        units = tuple(replace(u, attack_power=power) if u.race is race else replace(u)
                      for u in self.units)
        return BattleSetup(self.grid, units)

    def count(self, race: Race) -> int:
        return sum(1 for u in self.units if u.race is race)

    def build(self, check_invariants: bool = False) -> Battle:
        return Battle(self.grid, self.units, check_invariants=check_invariants)


def parse_map(text: str, hit_points: int = DEFAULT_HIT_POINTS,
              attack_power: int = DEFAULT_ATTACK_POWER) -> BattleSetup:
    lines = text.strip("\n").split("\n")
    lines = [line.rstrip("\r") for line in lines]
    if not lines or not lines[0]:
        raise MapFormatError("empty map")

    width = len(lines[0])
    walls = []
    units = []
    for r, line in enumerate(lines):
        if len(line) != width:
            raise MapFormatError(f"row is {len(line)} wide, expected {width}", r, len(line))
        row = []
        for c, ch in enumerate(line):
            if ch == WALL:
                row.append(True)
                continue
            if ch == FLOOR:
                row.append(False)
                continue
            try:
                race = Race(ch)
            except ValueError:
                raise MapFormatError(f"unknown map character {ch!r}", r, c) from None
            row.append(False)
            units.append(Unit(race=race, position=(r, c),
                              hit_points=hit_points, attack_power=attack_power))
        walls.append(row)

    return BattleSetup(Grid.from_rows(walls), tuple(units))
