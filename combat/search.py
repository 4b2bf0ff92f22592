"""Search for the smallest attack power that wins a battle without losses.

Every trial starts from a fresh copy of the setup, so trials share no state
and may run in separate processes.
"""
import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Tuple

from .errors import NoWinningPowerError, StalemateError
from .mapfile import BattleSetup
from .model import Outcome, Race, UnitAttacked

log = logging.getLogger(__name__)

Strategy = Literal["linear", "binary"]
MAX_POWER = 200


@dataclass(frozen=True)
class TrialResult:
    power: int
    won: bool
    outcome: Optional[Outcome] = None  # None when the trial stopped early


@dataclass(frozen=True)
class SearchResult:
    race: Race
    power: int
    outcome: Outcome
    trials: int

    @property
    def score(self) -> int:
        return self.outcome.score

    @property
    def remaining_hit_points(self) -> int:
        return self.outcome.remaining_hit_points(self.race)


def run_trial(setup: BattleSetup, race: Race, power: int, fail_fast: bool = True) -> TrialResult:
    """Fight with race boosted to power.

    Won means every unit of race survived and the other race is wiped out.
    With fail_fast the battle stops at the first loss on the boosted side.
    A battle that stalls can never be won.
    """
    battle = setup.with_power(race, power).build()
    try:
        for evt in battle:
            if fail_fast and isinstance(evt, UnitAttacked) and evt.killed and evt.target_race is race:
                return TrialResult(power=power, won=False)
    except StalemateError as exc:
        log.debug("power %d: %s", power, exc)
        return TrialResult(power=power, won=False)
    outcome = battle.outcome()
    won = (outcome.survivor_count(race) == setup.count(race)
           and outcome.survivor_count(race.enemy) == 0)
    return TrialResult(power=power, won=won, outcome=outcome)


def _trial_job(args: Tuple[BattleSetup, Race, int]) -> TrialResult:
    setup, race, power = args
    return run_trial(setup, race, power)


def power_floor(setup: BattleSetup, race: Race) -> int:
    """One above the race's current attack power."""
    powers = [u.attack_power for u in setup.units if u.race is race]
    return max(powers) + 1 if powers else 1


def minimum_winning_power(setup: BattleSetup, race: Race = Race.ELF,
                          strategy: Strategy = "linear", max_power: int = MAX_POWER,
                          workers: int = 1) -> SearchResult:
    """Smallest power for race that wins with zero losses.

    ``linear`` scans upward from the floor and is always exact. ``binary``
    assumes that winning is monotonic in power. ``workers`` > 1 evaluates
    the linear scan in batches across processes.
    """
    floor = power_floor(setup, race)
    if floor > max_power:
        raise NoWinningPowerError(f"floor {floor} is above the ceiling {max_power}")

    if strategy == "linear":
        if workers > 1:
            found, trials = _linear_parallel(setup, race, floor, max_power, workers)
        else:
            found, trials = _linear(setup, race, floor, max_power)
    elif strategy == "binary":
        found, trials = _binary(setup, race, floor, max_power)
    else:
        raise ValueError(f"unknown search strategy {strategy!r}")

    if found is None:
        raise NoWinningPowerError(f"{race.name} cannot win cleanly with power <= {max_power}")
    log.info("%s need power %d (score %d, %d trials)",
             race.name, found.power, found.outcome.score, trials)
    return SearchResult(race=race, power=found.power, outcome=found.outcome, trials=trials)


def _linear(setup: BattleSetup, race: Race, lo: int, hi: int) -> Tuple[Optional[TrialResult], int]:
    trials = 0
    for power in range(lo, hi + 1):
        res = run_trial(setup, race, power)
        trials += 1
        log.debug("power %d: %s", power, "win" if res.won else "loss")
        if res.won:
            return res, trials
    return None, trials


def _linear_parallel(setup: BattleSetup, race: Race, lo: int, hi: int,
                     workers: int) -> Tuple[Optional[TrialResult], int]:
    trials = 0
    with ProcessPoolExecutor(max_workers=workers) as pool:
        for start in range(lo, hi + 1, workers):
            batch = [(setup, race, p) for p in range(start, min(start + workers, hi + 1))]
            # map keeps candidate order, so the first win is the least one
            results: List[TrialResult] = list(pool.map(_trial_job, batch))
            trials += len(results)
            for res in results:
                if res.won:
                    return res, trials
    return None, trials


def _binary(setup: BattleSetup, race: Race, lo: int, hi: int) -> Tuple[Optional[TrialResult], int]:
    seen: Dict[int, TrialResult] = {}

    def trial(power: int) -> TrialResult:
        if power not in seen:
            seen[power] = run_trial(setup, race, power)
        return seen[power]

    if not trial(hi).won:
        return None, len(seen)
    while lo < hi:
        mid = (lo + hi) // 2
        if trial(mid).won:
            hi = mid
        else:
            lo = mid + 1
    return trial(lo), len(seen)
