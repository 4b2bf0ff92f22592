from dataclasses import dataclass
from enum import Enum
from typing import Literal, Tuple, Union

Position = Tuple[int, int]  # (row, col); tuple order is reading order

DEFAULT_HIT_POINTS = 200
DEFAULT_ATTACK_POWER = 3


class Race(Enum):
    """Combatant race, valued by its map glyph"""
    ELF = "E"
    GOBLIN = "G"

    @property
    def enemy(self) -> "Race":
        return Race.GOBLIN if self is Race.ELF else Race.ELF


@dataclass
class Unit:
    race: Race
    position: Position
    hit_points: int = DEFAULT_HIT_POINTS
    attack_power: int = DEFAULT_ATTACK_POWER

    @property
    def alive(self) -> bool:
        return self.hit_points > 0


@dataclass(frozen=True)
class RoundStarted:
    round: int
    turn_order: Tuple[int, ...]  # unit indices, reading order
    kind: Literal["round_started"] = "round_started"


@dataclass(frozen=True)
class UnitMoved:
    round: int
    unit: int
    source: Position
    dest: Position
    kind: Literal["unit_moved"] = "unit_moved"


@dataclass(frozen=True)
class UnitAttacked:
    round: int
    unit: int
    target: int
    target_race: Race
    damage: int
    target_hp: int  # after the hit
    kind: Literal["unit_attacked"] = "unit_attacked"

    @property
    def killed(self) -> bool:
        return self.target_hp == 0


@dataclass(frozen=True)
class BattleEnded:
    completed_rounds: int
    total_hit_points: int
    winner: Race
    kind: Literal["battle_ended"] = "battle_ended"

    @property
    def score(self) -> int:
        return self.completed_rounds * self.total_hit_points


Step = Union[RoundStarted, UnitMoved, UnitAttacked, BattleEnded]


@dataclass(frozen=True)
class Outcome:
    """Final state of a battle that reached its end."""
    completed_rounds: int
    total_hit_points: int
    winner: Race
    survivors: Tuple[Unit, ...]

    @property
    def score(self) -> int:
        return self.completed_rounds * self.total_hit_points

    def remaining_hit_points(self, race: Race) -> int:
        return sum(u.hit_points for u in self.survivors if u.race is race)

    def survivor_count(self, race: Race) -> int:
        return sum(1 for u in self.survivors if u.race is race)
