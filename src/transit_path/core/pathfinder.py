"""Shortest travel time between stations using Dijkstra's algorithm.

Two interchangeable strategies are provided:

``frontier``
    Keeps the set of reached but not yet finalised stations and scans it
    linearly for the minimum after every step. O(V²); fine for networks of
    a few hundred stations.

``heap``
    Same contract backed by a ``heapq`` priority queue, O((V + E) log V).

Both strategies break ties on equal tentative distance by the lower station
index, so results (including the chosen path) are deterministic.
"""

import heapq
import logging

from .exceptions import UnreachableError, ValidationError
from .graph import Graph, StationRef
from .models import Leg, Route
from .vertex import INFINITY, Vertex

logger = logging.getLogger(__name__)

STRATEGIES = ("frontier", "heap")


class PathFinder:
    """Compute minimum travel times over a transit ``Graph``."""

    def __init__(self, graph: Graph, strategy: str = "frontier"):
        """Initialize the path finder.

        Args:
            graph: Network to search
            strategy: "frontier" or "heap"
        """
        if strategy not in STRATEGIES:
            raise ValidationError(
                f"Unknown strategy {strategy!r}; expected one of {', '.join(STRATEGIES)}"
            )
        self.graph = graph
        self.strategy = strategy

    def distance(self, source: StationRef, target: StationRef) -> int:
        """Return the minimum total travel time from ``source`` to ``target``.

        Raises:
            StationNotFoundError: If either station is missing
            UnreachableError: If no route connects them
        """
        return self.shortest_path(source, target).total_minutes

    def shortest_path(self, source: StationRef, target: StationRef) -> Route:
        """Return the shortest route from ``source`` to ``target``.

        Raises:
            StationNotFoundError: If either station is missing
            UnreachableError: If no route connects them
        """
        s = self.graph.index_of(source)
        t = self.graph.index_of(target)

        if self.strategy == "heap":
            dist, previous, finalized = self._run_heap(s, t)
        else:
            dist, previous, finalized = self._run_frontier(s, t)

        if not finalized[t]:
            names = self.graph.names
            logger.info(f"No route between {names[s]} and {names[t]}")
            raise UnreachableError(names[s], names[t])

        return self._build_route(s, t, dist, previous)

    def distances_from(self, source: StationRef) -> dict[str, int]:
        """Return the travel time from ``source`` to every reachable station."""
        s = self.graph.index_of(source)
        if self.strategy == "heap":
            dist, _previous, finalized = self._run_heap(s, None)
        else:
            dist, _previous, finalized = self._run_frontier(s, None)

        names = self.graph.names
        return {
            names[i]: int(dist[i]) for i in range(len(names)) if finalized[i]
        }

    def vertex_distances(self, source: StationRef) -> list[Vertex]:
        """Return copies of every reachable station with ``distance`` filled in."""
        result = []
        for name, minutes in self.distances_from(source).items():
            vertex = self.graph.get_vertex(name).model_copy(
                update={"visited": True, "distance": minutes}
            )
            result.append(vertex)
        return result

    def _run_frontier(
        self, s: int, t: int | None
    ) -> tuple[list[float], list[int | None], list[bool]]:
        n = self.graph.num_vertices
        dist: list[float] = [INFINITY] * n
        previous: list[int | None] = [None] * n
        finalized = [False] * n
        # dict keys act as an insertion-ordered set
        frontier: dict[int, None] = {}

        dist[s] = 0
        finalized[s] = True
        current = s

        while t is None or not finalized[t]:
            for j in self.graph.neighbor_indices(current):
                if finalized[j]:
                    continue
                new_distance = dist[current] + self.graph.weight_at(current, j)
                if new_distance < dist[j]:
                    dist[j] = new_distance
                    previous[j] = current
                frontier[j] = None

            if not frontier:
                break

            current = min(frontier, key=lambda i: (dist[i], i))
            finalized[current] = True
            del frontier[current]
            logger.debug(
                f"Finalized {self.graph.name_at(current)} at distance {dist[current]}"
            )

        return dist, previous, finalized

    def _run_heap(
        self, s: int, t: int | None
    ) -> tuple[list[float], list[int | None], list[bool]]:
        n = self.graph.num_vertices
        dist: list[float] = [INFINITY] * n
        previous: list[int | None] = [None] * n
        finalized = [False] * n

        dist[s] = 0
        heap: list[tuple[float, int]] = [(0, s)]

        while heap:
            current_distance, current = heapq.heappop(heap)
            if finalized[current]:
                continue
            finalized[current] = True
            logger.debug(
                f"Finalized {self.graph.name_at(current)} at distance {current_distance}"
            )
            if current == t:
                break

            for j in self.graph.neighbor_indices(current):
                if finalized[j]:
                    continue
                new_distance = current_distance + self.graph.weight_at(current, j)
                if new_distance < dist[j]:
                    dist[j] = new_distance
                    previous[j] = current
                    heapq.heappush(heap, (new_distance, j))

        return dist, previous, finalized

    def _build_route(
        self, s: int, t: int, dist: list[float], previous: list[int | None]
    ) -> Route:
        names = self.graph.names
        path = [t]
        while (step := previous[path[-1]]) is not None:
            path.append(step)
        path.reverse()

        legs = [
            Leg(
                from_station=names[a],
                to_station=names[b],
                duration_minutes=self.graph.weight_at(a, b),
            )
            for a, b in zip(path, path[1:])
        ]
        return Route(
            from_station=names[s],
            to_station=names[t],
            total_minutes=int(dist[t]),
            stations=[names[i] for i in path],
            legs=legs,
            strategy=self.strategy,
        )


def shortest_path(
    graph: Graph, source: StationRef, target: StationRef, strategy: str = "frontier"
) -> Route:
    """Convenience wrapper around ``PathFinder(graph, strategy).shortest_path``."""
    return PathFinder(graph, strategy=strategy).shortest_path(source, target)
