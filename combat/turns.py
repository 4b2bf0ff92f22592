from dataclasses import dataclass
from typing import List, Optional

from .errors import CombatStateError
from .grid import neighbors_reading_order
from .model import Position
from .pathfinder import explore
from .registry import UnitRegistry


@dataclass(frozen=True)
class Strike:
    target: int
    damage: int
    target_hp: int


@dataclass(frozen=True)
class TurnResult:
    """What one unit did on its turn. Both parts are optional."""
    move: Optional[Position] = None  # cell moved into
    strike: Optional[Strike] = None


def has_enemies(reg: UnitRegistry, idx: int) -> bool:
    return bool(reg.living_of(reg[idx].race.enemy))


def in_range_squares(reg: UnitRegistry, idx: int) -> List[Position]:
    """Open cells, or the unit's own cell, next to a living enemy."""
    me = reg[idx]
    squares = set()
    for enemy in reg.living_of(me.race.enemy):
        for p in neighbors_reading_order(reg[enemy].position):
            if p == me.position or reg.is_open(p):
                squares.add(p)
    return sorted(squares)


def choose_step(reg: UnitRegistry, idx: int) -> Optional[Position]:
    """Cell to step into this turn, or None to stay put."""
    here = reg[idx].position
    squares = in_range_squares(reg, idx)
    if not squares or here in squares:
        return None

    reach = explore(here, reg.open_neighbors)
    reachable = [(reach.distance(sq), sq) for sq in squares if sq in reach]
    if not reachable:
        return None
    _, goal = min(reachable)
    return reach.first_step(goal)


def choose_target(reg: UnitRegistry, idx: int) -> Optional[int]:
    """Adjacent living enemy with the fewest hit points, reading order on ties."""
    me = reg[idx]
    candidates = []
    for p in neighbors_reading_order(me.position):
        other = reg.unit_at(p)
        if other is not None and reg[other].race is not me.race:
            candidates.append((reg[other].hit_points, p, other))
    if not candidates:
        return None
    return min(candidates)[2]


def take_turn(reg: UnitRegistry, idx: int) -> TurnResult:
    """Move then attack for unit idx.

    The caller checks ``has_enemies`` first; a turn with no enemies left on
    the map ends the battle instead of being taken.
    """
    if not reg[idx].alive:
        raise CombatStateError(f"dead unit {idx} cannot take a turn")

    step = choose_step(reg, idx)
    if step is not None:
        reg.move(idx, step)

    target = choose_target(reg, idx)
    strike = None
    if target is not None:
        power = reg[idx].attack_power
        hp = reg.damage(target, power)
        strike = Strike(target=target, damage=power, target_hp=hp)

    return TurnResult(move=step, strike=strike)
