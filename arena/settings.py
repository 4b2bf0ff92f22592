from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from combat.model import DEFAULT_ATTACK_POWER, DEFAULT_HIT_POINTS, Race
from combat.search import MAX_POWER


class ArenaSettings(BaseModel):
    """Knobs for running battles and power searches."""
    default_hit_points: int = Field(default=DEFAULT_HIT_POINTS, gt=0)
    default_attack_power: int = Field(default=DEFAULT_ATTACK_POWER, gt=0)
    boosted_race: Literal["E", "G"] = "E"
    search_strategy: Literal["linear", "binary"] = "linear"
    max_power: int = Field(default=MAX_POWER, gt=0)
    workers: int = Field(default=1, ge=1)
    trace: bool = False  # log the rendered map at every round start

    @model_validator(mode="after")
    def _ceiling_above_default(self) -> "ArenaSettings":
        if self.max_power <= self.default_attack_power:
            raise ValueError("max_power must exceed default_attack_power")
        return self

    @property
    def race(self) -> Race:
        return Race(self.boosted_race)


def load_settings(path: Optional[Union[str, Path]] = None, **overrides) -> ArenaSettings:
    """Read settings from a JSON file, then apply keyword overrides."""
    if path is None:
        base = ArenaSettings()
    else:
        base = ArenaSettings.model_validate_json(Path(path).read_text())
    if not overrides:
        return base
    return ArenaSettings.model_validate({**base.model_dump(), **overrides})
