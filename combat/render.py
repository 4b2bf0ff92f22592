from typing import List

from .engine import Battle
from .mapfile import FLOOR, WALL


def render(battle: Battle) -> str:
    """Draw the map with hit points of the living units on each row."""
    grid = battle.grid
    reg = battle.registry
    lines: List[str] = []
    for r in range(grid.rows):
        cells = []
        notes = []
        for c in range(grid.cols):
            idx = reg.unit_at((r, c))
            if idx is not None:
                u = reg[idx]
                cells.append(u.race.value)
                notes.append(f"{u.race.value}({u.hit_points})")
            else:
                cells.append(WALL if grid.is_wall((r, c)) else FLOOR)
        line = "".join(cells)
        if notes:
            line += "   " + ", ".join(notes)
        lines.append(line)
    return "\n".join(lines)
