import logging
from collections import deque
from typing import Deque, Iterable, Iterator, List, Optional

from .errors import CombatStateError, StalemateError
from .grid import Grid
from .model import BattleEnded, Outcome, RoundStarted, Step, Unit, UnitAttacked, UnitMoved
from .registry import UnitRegistry
from .turns import has_enemies, take_turn

log = logging.getLogger(__name__)


class Battle:
    """Pure, deterministic round scheduler.

    Each call to ``step`` plays one unit's turn and returns the steps it
    produced. Turn order is fixed when a round starts, so a unit that moves
    can never act twice or be skipped within that round.
    """

    def __init__(self, grid: Grid, units: Iterable[Unit], check_invariants: bool = False):
        self.registry = UnitRegistry(grid, units)
        self.current_round = 0
        self.turn_order: Deque[int] = deque()
        self.is_done = False
        self.result: Optional[BattleEnded] = None
        self._check = check_invariants
        self._active = False  # anything moved or attacked this round

    @property
    def grid(self) -> Grid:
        return self.registry.grid

    @property
    def units(self) -> List[Unit]:
        return self.registry.units

    @property
    def between_rounds(self) -> bool:
        """No living unit is still waiting for its turn this round."""
        return not any(self.units[idx].alive for idx in self.turn_order)

    def _start_round(self) -> RoundStarted:
        if self.current_round > 0 and not self._active:
            raise StalemateError(f"nothing happened in round {self.current_round}")
        self._active = False
        self.turn_order = deque(self.registry.turn_order())
        self.current_round += 1
        log.debug("round %d: %d units", self.current_round, len(self.turn_order))
        return RoundStarted(round=self.current_round, turn_order=tuple(self.turn_order))

    def _finish(self, idx: int) -> BattleEnded:
        completed = self.current_round - 1
        self.result = BattleEnded(
            completed_rounds=completed,
            total_hit_points=self.registry.total_hit_points(),
            winner=self.units[idx].race,
        )
        self.is_done = True
        self.turn_order.clear()
        log.debug("battle over after %d full rounds, %s win", completed, self.result.winner.name)
        return self.result

    def step(self) -> List[Step]:
        """Advance by one unit turn. Returns [] once the battle is over."""
        if self.is_done:
            return []

        evts: List[Step] = []
        while True:
            if not self.turn_order:
                evts.append(self._start_round())
                if not self.turn_order:
                    raise CombatStateError("no living units left to schedule")
            idx = self.turn_order.popleft()
            if self.units[idx].alive:
                break

        if not has_enemies(self.registry, idx):
            evts.append(self._finish(idx))
            return evts

        source = self.units[idx].position
        turn = take_turn(self.registry, idx)
        if turn.move is not None or turn.strike is not None:
            self._active = True
        if turn.move is not None:
            evts.append(UnitMoved(round=self.current_round, unit=idx,
                                  source=source, dest=turn.move))
        if turn.strike is not None:
            s = turn.strike
            evts.append(UnitAttacked(round=self.current_round, unit=idx, target=s.target,
                                     target_race=self.units[s.target].race,
                                     damage=s.damage, target_hp=s.target_hp))
        if self._check:
            self.registry.check_invariants()
        return evts

    def __iter__(self) -> Iterator[Step]:
        """Stream every remaining step until the battle ends."""
        while not self.is_done:
            yield from self.step()

    def run(self) -> Outcome:
        """Play to the end and return the outcome."""
        for _ in self:
            pass
        return self.outcome()

    def outcome(self) -> Outcome:
        if self.result is None:
            raise CombatStateError("battle has not finished")
        return Outcome(
            completed_rounds=self.result.completed_rounds,
            total_hit_points=self.result.total_hit_points,
            winner=self.result.winner,
            survivors=self.registry.snapshot(),
        )

    def snapshot(self) -> List[Unit]:
        """Living units in reading order."""
        return list(self.registry.snapshot())
