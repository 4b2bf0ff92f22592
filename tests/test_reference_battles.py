"""The published example battles reproduce their known scores."""
import pytest

from combat.mapfile import parse_map
from combat.model import Race
from combat.search import minimum_winning_power
from conftest import REFERENCE_BATTLES


@pytest.mark.parametrize("text,score,power,boosted_score", REFERENCE_BATTLES)
def test_battle_to_the_death(text, score, power, boosted_score):
    assert parse_map(text).build().run().score == score


@pytest.mark.parametrize("strategy", ["linear", "binary"])
@pytest.mark.parametrize("text,score,power,boosted_score", REFERENCE_BATTLES)
def test_minimum_elf_power(text, score, power, boosted_score, strategy):
    res = minimum_winning_power(parse_map(text), Race.ELF, strategy=strategy)
    assert res.power == power
    assert res.score == boosted_score
    assert res.remaining_hit_points * res.outcome.completed_rounds == boosted_score
