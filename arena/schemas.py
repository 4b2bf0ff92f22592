from dataclasses import asdict
from typing import Any, Dict, List, Literal

from pydantic import BaseModel

from combat.engine import Battle
from combat.model import Outcome, Race, Step
from combat.search import SearchResult


class StepOut(BaseModel):
    """One engine step, flattened for output."""
    kind: str
    data: Dict[str, Any]


class BattleReport(BaseModel):
    completed_rounds: int
    total_hit_points: int
    score: int
    winner: Literal["E", "G"]
    survivors: int


class SearchReport(BaseModel):
    race: Literal["E", "G"]
    power: int
    score: int
    remaining_hit_points: int
    trials: int


def step_out(evt: Step) -> StepOut:
    data = asdict(evt)
    kind = data.pop("kind")
    for key, val in data.items():
        if isinstance(val, Race):
            data[key] = val.value
    return StepOut(kind=kind, data=data)


def steps_out(evts: List[Step]) -> List[StepOut]:
    return [step_out(e) for e in evts]


def battle_report(outcome: Outcome) -> BattleReport:
    return BattleReport(
        completed_rounds=outcome.completed_rounds,
        total_hit_points=outcome.total_hit_points,
        score=outcome.score,
        winner=outcome.winner.value,
        survivors=len(outcome.survivors),
    )


def search_report(res: SearchResult) -> SearchReport:
    return SearchReport(
        race=res.race.value,
        power=res.power,
        score=res.score,
        remaining_hit_points=res.remaining_hit_points,
        trials=res.trials,
    )


def battle_state(battle: Battle) -> Dict[str, Any]:
    """Current round and living units, JSON-ready."""
    return {
        "round": battle.current_round,
        "done": battle.is_done,
        "units": [
            {"race": u.race.value, "pos": list(u.position), "hp": u.hit_points}
            for u in battle.snapshot()
        ],
    }
