"""Undirected weighted graph of stations backed by an adjacency matrix."""

import logging
from collections import deque
from collections.abc import Iterator

from .exceptions import DuplicateStationError, StationNotFoundError, ValidationError
from .models import StationInfo, TraversalResult, TraversalStep
from .vertex import Vertex

logger = logging.getLogger(__name__)

# Matrix cell value for "no connection"; must stay below every valid weight.
NO_EDGE = -1

StationRef = str | Vertex


def station_name(station: StationRef) -> str:
    """Return the station name for either a plain name or a Vertex."""
    if isinstance(station, Vertex):
        return station.name
    return station


class Graph:
    """Transit network as an undirected graph.

    Vertices are kept in insertion order and that order is their matrix
    index. Cell ``(i, j)`` of the matrix holds ``0`` when ``i == j``, the
    travel time when stations ``i`` and ``j`` are directly connected and
    ``NO_EDGE`` otherwise. The matrix is always square and symmetric.

    Traversals never write to the vertices owned by the graph. Each run keeps
    its own per-index state and yields copies carrying that state.
    """

    def __init__(self) -> None:
        self._vertices: list[Vertex] = []
        self._index: dict[str, int] = {}
        self._matrix: list[list[int]] = []
        self._num_edges = 0

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_vertex(self, station: StationRef) -> Vertex:
        """Append a new station and grow the matrix by one row and column.

        Args:
            station: Station name or a Vertex carrying the name

        Returns:
            The Vertex record now owned by the graph

        Raises:
            ValidationError: If the name is empty
            DuplicateStationError: If a station with this name already exists
        """
        name = station_name(station)
        if not name or not name.strip():
            raise ValidationError("Station name cannot be empty")
        if name in self._index:
            raise DuplicateStationError(name)

        size = len(self._vertices) + 1
        new_matrix = [[NO_EDGE] * size for _ in range(size)]
        for i, row in enumerate(self._matrix):
            new_matrix[i][: size - 1] = row
        new_matrix[size - 1][size - 1] = 0
        self._matrix = new_matrix

        vertex = Vertex(name=name)
        self._vertices.append(vertex)
        self._index[name] = size - 1
        logger.debug(f"Added station #{size - 1}: {name}")
        return vertex

    def add_edge(self, a: StationRef, b: StationRef, weight: int = 1) -> None:
        """Connect two stations in both directions.

        An existing connection between the pair is overwritten.

        Raises:
            StationNotFoundError: If either station is missing
            ValidationError: If the weight is not a positive integer or a == b
        """
        i = self._find(a)
        j = self._find(b)
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise ValidationError(f"Edge weight must be an integer, got {weight!r}")
        if weight <= 0:
            raise ValidationError(f"Edge weight must be positive, got {weight}")
        if i == j:
            raise ValidationError(
                f"Cannot connect station {self._vertices[i]} to itself"
            )

        if self._matrix[i][j] <= 0:
            self._num_edges += 1
        self._matrix[i][j] = weight
        self._matrix[j][i] = weight

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def num_vertices(self) -> int:
        return len(self._vertices)

    @property
    def num_edges(self) -> int:
        return self._num_edges

    @property
    def vertices(self) -> tuple[Vertex, ...]:
        return tuple(self._vertices)

    @property
    def names(self) -> list[str]:
        return [v.name for v in self._vertices]

    def get_num_vertices(self) -> int:
        return self.num_vertices

    def get_num_edges(self) -> int:
        return self.num_edges

    def vertex_exists(self, station: StationRef) -> bool:
        return station_name(station) in self._index

    def get_vertex(self, station: StationRef) -> Vertex:
        """Return the graph's own record for ``station``."""
        return self._vertices[self._find(station)]

    def index_of(self, station: StationRef) -> int:
        """Return the matrix index of ``station``."""
        return self._find(station)

    def get_edge(self, a: StationRef, b: StationRef) -> int:
        """Return the stored weight between two stations (may be NO_EDGE)."""
        return self._matrix[self._find(a)][self._find(b)]

    def edge_exists(self, a: StationRef, b: StationRef) -> bool:
        return self.get_edge(a, b) > 0

    def degree(self, station: StationRef) -> int:
        row = self._matrix[self._find(station)]
        return sum(1 for weight in row if weight > 0)

    def name_at(self, index: int) -> str:
        return self._vertices[index].name

    def weight_at(self, i: int, j: int) -> int:
        """Weight between two matrix indices, without a name lookup."""
        return self._matrix[i][j]

    def neighbor_indices(self, index: int) -> Iterator[int]:
        """Yield the indices connected to ``index`` in ascending order."""
        row = self._matrix[index]
        for j in range(len(row)):
            if row[j] > 0:
                yield j

    def _find(self, station: StationRef) -> int:
        name = station_name(station)
        try:
            return self._index[name]
        except KeyError:
            raise StationNotFoundError(name) from None

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def neighbors(self, station: StationRef) -> Iterator[Vertex]:
        """Return an iterator over the direct neighbours of ``station``.

        Neighbours come out in index order. Each call starts a fresh pass.

        Raises:
            StationNotFoundError: Immediately, if the station is missing
        """
        start = self._find(station)
        return (self._vertices[j] for j in self.neighbor_indices(start))

    neighbor_iterator = neighbors

    def bfs(self, station: StationRef) -> Iterator[Vertex]:
        """Breadth-first iterator over every station reachable from ``station``.

        Stations come out level by level; within a level they follow the
        order in which they were discovered. Yielded vertices are copies
        with ``visited`` and ``level`` filled in.

        Raises:
            StationNotFoundError: Immediately, if the station is missing
        """
        return self._bfs(self._find(station))

    bfs_iterator = bfs

    def _bfs(self, start: int) -> Iterator[Vertex]:
        visited = [False] * len(self._vertices)
        level = [0] * len(self._vertices)
        visited[start] = True
        frontier = deque([start])

        while frontier:
            current = frontier.popleft()
            logger.debug(
                f"BFS visiting {self._vertices[current]} at level {level[current]}"
            )
            for j in self.neighbor_indices(current):
                if not visited[j]:
                    visited[j] = True
                    level[j] = level[current] + 1
                    frontier.append(j)
            yield self._snapshot(current, level=level[current])

    def dfs(self, station: StationRef) -> Iterator[Vertex]:
        """Depth-first (pre-order) iterator over stations reachable from ``station``.

        From each station the search descends into the first unvisited
        neighbour in index order and backtracks at dead ends. Yielded
        vertices are copies with ``visited`` set and ``level`` holding the
        depth in the search tree.

        Raises:
            StationNotFoundError: Immediately, if the station is missing
        """
        return self._dfs(self._find(station))

    dfs_iterator = dfs

    def _dfs(self, start: int) -> Iterator[Vertex]:
        visited = [False] * len(self._vertices)
        visited[start] = True
        yield self._snapshot(start, level=0)

        stack = [(start, self.neighbor_indices(start))]
        while stack:
            current, pending = stack[-1]
            for j in pending:
                if visited[j]:
                    continue
                visited[j] = True
                depth = len(stack)
                logger.debug(
                    f"DFS descending {self._vertices[current]} -> {self._vertices[j]}"
                )
                yield self._snapshot(j, level=depth)
                stack.append((j, self.neighbor_indices(j)))
                break
            else:
                logger.debug(f"DFS backtracking from {self._vertices[current]}")
                stack.pop()

    def traverse(self, station: StationRef, order: str = "bfs") -> TraversalResult:
        """Run a BFS or DFS from ``station`` and collect the visiting order."""
        if order == "bfs":
            visits = self.bfs(station)
        elif order == "dfs":
            visits = self.dfs(station)
        else:
            raise ValidationError(
                f"Unknown traversal order {order!r}; expected bfs or dfs"
            )

        steps = [
            TraversalStep(order=i, name=v.name, level=v.level)
            for i, v in enumerate(visits, 1)
        ]
        return TraversalResult(start=station_name(station), order=order, steps=steps)

    def station_info(self, station: StationRef) -> StationInfo:
        """Describe a station and its direct connections."""
        i = self._find(station)
        neighbors = {
            self._vertices[j].name: self._matrix[i][j] for j in self.neighbor_indices(i)
        }
        return StationInfo(
            name=self._vertices[i].name, degree=len(neighbors), neighbors=neighbors
        )

    def _snapshot(self, index: int, level: int) -> Vertex:
        return self._vertices[index].model_copy(
            update={"visited": True, "level": level}
        )

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, station: object) -> bool:
        if isinstance(station, (str, Vertex)):
            return self.vertex_exists(station)
        return False

    def __iter__(self) -> Iterator[Vertex]:
        return iter(tuple(self._vertices))

    def __str__(self) -> str:
        lines = ["vertices:"]
        lines.extend(f"\t{v}" for v in self._vertices)
        lines.append("")
        lines.append("Adjacency matrix:")
        for row in self._matrix:
            lines.append("\t" + " ".join(str(w) for w in row))
        return "\n".join(lines) + "\n"
