"""Movement, target selection and damage for single turns."""
import pytest

from combat.errors import CombatStateError
from combat.grid import Grid
from combat.mapfile import parse_map
from combat.model import Race, Unit
from combat.registry import UnitRegistry
from combat.turns import choose_step, choose_target, in_range_squares, take_turn


def registry_for(text: str, **kw) -> UnitRegistry:
    setup = parse_map(text, **kw)
    return UnitRegistry(setup.grid, setup.units)


def test_nearest_in_range_square_wins_by_reading_order():
    reg = registry_for("""\
#######
#E..G.#
#...#.#
#.G.#G#
#######""")
    assert reg[0].race is Race.ELF
    assert in_range_squares(reg, 0) == [(1, 3), (1, 5), (2, 2), (2, 5), (3, 1), (3, 3)]
    # (1,3), (2,2) and (3,1) are all two steps away; (1,3) comes first
    assert choose_step(reg, 0) == (1, 2)


def test_equal_length_paths_take_reading_order_first_step():
    reg = registry_for("""\
#######
#.E...#
#.....#
#...G.#
#######""")
    # (2,4) is reachable via (1,3) or (2,2); right comes before down
    assert choose_step(reg, 0) == (1, 3)


def test_no_move_when_already_in_range():
    reg = registry_for("#####\n#EG.#\n#####")
    assert choose_step(reg, 0) is None


def test_no_move_when_nothing_reachable():
    reg = registry_for("#####\n#E#G#\n#####")
    assert choose_step(reg, 0) is None
    assert choose_target(reg, 0) is None
    result = take_turn(reg, 0)
    assert result.move is None and result.strike is None


def test_attack_picks_weakest_then_reading_order():
    grid = Grid.from_rows([[False] * 5 for _ in range(5)])
    reg = UnitRegistry(grid, [
        Unit(Race.GOBLIN, (0, 0), hit_points=9),
        Unit(Race.GOBLIN, (1, 2), hit_points=4),
        Unit(Race.ELF, (2, 2)),
        Unit(Race.GOBLIN, (2, 3), hit_points=2),
        Unit(Race.GOBLIN, (3, 2), hit_points=2),
        Unit(Race.GOBLIN, (4, 3), hit_points=1),
    ])
    assert choose_target(reg, 2) == 3


def test_attack_ignores_allies():
    reg = registry_for("#####\n#EE.#\n#####")
    assert choose_target(reg, 0) is None


def test_hit_points_never_go_negative():
    grid = Grid.from_rows([[False, False]])
    reg = UnitRegistry(grid, [
        Unit(Race.ELF, (0, 0), attack_power=200),
        Unit(Race.GOBLIN, (0, 1), hit_points=5),
    ])
    result = take_turn(reg, 0)
    assert result.strike.target == 1
    assert result.strike.target_hp == 0
    assert reg[1].hit_points == 0
    assert reg.unit_at((0, 1)) is None
    reg.check_invariants()


def test_move_then_attack_in_one_turn():
    reg = registry_for("######\n#E.G.#\n######")
    result = take_turn(reg, 0)
    assert result.move == (1, 2)
    assert result.strike.target == 1
    assert result.strike.target_hp == 197
    assert reg.unit_at((1, 2)) == 0
    assert reg.unit_at((1, 1)) is None


def test_dead_unit_cannot_take_a_turn():
    grid = Grid.from_rows([[False, False]])
    reg = UnitRegistry(grid, [
        Unit(Race.ELF, (0, 0), hit_points=0),
        Unit(Race.GOBLIN, (0, 1)),
    ])
    with pytest.raises(CombatStateError):
        take_turn(reg, 0)
