import pytest

from combat.mapfile import parse_map

# Reference battles: (map, score at default power, minimal elf power, score at that power)
REFERENCE_BATTLES = [
    ("""\
#######
#.G...#
#...EG#
#.#.#G#
#..G#E#
#.....#
#######""", 27730, 15, 4988),
    ("""\
#######
#E..EG#
#.#G.E#
#E.##E#
#G..#.#
#..E#.#
#######""", 39514, 4, 31284),
    ("""\
#######
#E.G#.#
#.#G..#
#G.#.G#
#G..#.#
#...E.#
#######""", 27755, 15, 3478),
    ("""\
#######
#.E...#
#.#..G#
#.###.#
#E#G#G#
#...#G#
#######""", 28944, 12, 6474),
    ("""\
#########
#G......#
#.E.#...#
#..##..G#
#...##..#
#...#...#
#.G...G.#
#.....G.#
#########""", 18740, 34, 1140),
]


@pytest.fixture
def first_battle():
    return parse_map(REFERENCE_BATTLES[0][0])
