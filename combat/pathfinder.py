from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List

from .errors import CombatStateError
from .model import Position

OpenNeighbors = Callable[[Position], List[Position]]


@dataclass(frozen=True)
class Route:
    distance: int
    first_step: Position


class Reachability:
    """Result of one breadth-first search from a source cell."""

    def __init__(self, source: Position, routes: Dict[Position, Route]):
        self.source = source
        self._routes = routes

    def __contains__(self, pos: Position) -> bool:
        return pos in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._routes)

    def distance(self, pos: Position) -> int:
        return self._route(pos).distance

    def first_step(self, pos: Position) -> Position:
        return self._route(pos).first_step

    def _route(self, pos: Position) -> Route:
        try:
            return self._routes[pos]
        except KeyError:
            raise CombatStateError(f"{pos} was not reached from {self.source}") from None


def explore(source: Position, open_neighbors: OpenNeighbors) -> Reachability:
    """Distances and first steps from source to every reachable open cell.

    ``open_neighbors`` must list open cells in reading order. Seeds and
    expansions both follow that order and a cell is assigned only once, so
    the first step recorded for a cell is the reading-order-least first step
    over all of its shortest paths.
    """
    routes: Dict[Position, Route] = {}
    frontier: deque = deque()

    for nbr in open_neighbors(source):
        routes[nbr] = Route(1, nbr)
        frontier.append(nbr)

    while frontier:
        cur = frontier.popleft()
        route = routes[cur]
        for nbr in open_neighbors(cur):
            if nbr == source or nbr in routes:
                continue
            routes[nbr] = Route(route.distance + 1, route.first_step)
            frontier.append(nbr)

    return Reachability(source, routes)
