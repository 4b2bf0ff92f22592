import logging
from typing import List, Optional

from combat.engine import Battle
from combat.mapfile import BattleSetup, parse_map
from combat.model import BattleEnded, Outcome, RoundStarted, Step, UnitAttacked
from combat.render import render
from combat.search import SearchResult, minimum_winning_power
from .eventlog import EventLog
from .settings import ArenaSettings

log = logging.getLogger(__name__)


class BattleRunner:
    """Synchronous driver that plays a battle turn by turn and logs every step."""

    def __init__(self, battle: Battle, trace: bool = False):
        self.battle = battle
        self.trace = trace
        self.events = EventLog()

    def tick(self) -> List[Step]:
        """Play one unit turn and record what happened."""
        if self.trace and not self.battle.is_done and self.battle.between_rounds:
            log.info("After %d rounds:\n%s", self.battle.current_round, render(self.battle))
        evts = self.battle.step()
        for e in evts:
            if isinstance(e, RoundStarted):
                log.debug("Round %d starting with %d units", e.round, len(e.turn_order))
            elif isinstance(e, UnitAttacked) and e.killed:
                log.info("Round %d: unit %d killed %s unit %d",
                         e.round, e.unit, e.target_race.name, e.target)
            elif isinstance(e, BattleEnded):
                log.info("Battle over after %d rounds, %s win with %d hp (score %d)",
                         e.completed_rounds, e.winner.name, e.total_hit_points, e.score)
        self.events.record(evts)
        return evts

    def run(self) -> Outcome:
        """Play until the battle ends."""
        while not self.battle.is_done:
            self.tick()
        return self.battle.outcome()


def setup_from_text(text: str, settings: Optional[ArenaSettings] = None) -> BattleSetup:
    settings = settings or ArenaSettings()
    return parse_map(text, hit_points=settings.default_hit_points,
                     attack_power=settings.default_attack_power)


def run_battle(setup: BattleSetup, settings: Optional[ArenaSettings] = None) -> Outcome:
    settings = settings or ArenaSettings()
    return BattleRunner(setup.build(), trace=settings.trace).run()


def run_search(setup: BattleSetup, settings: Optional[ArenaSettings] = None) -> SearchResult:
    settings = settings or ArenaSettings()
    log.info("Searching %s power with %s strategy (ceiling %d, %d workers)",
             settings.race.name, settings.search_strategy, settings.max_power, settings.workers)
    return minimum_winning_power(setup, race=settings.race, strategy=settings.search_strategy,
                                 max_power=settings.max_power, workers=settings.workers)
