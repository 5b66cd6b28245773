"""Station file loader for building the transit graph.

The station file is plain text read in two passes::

    Central
    4 Harbour
    7 Museum

    Harbour
    4 Central

Pass one registers every line starting with a letter as a station. Pass two
walks the file again: a station line sets the current station and every
following ``<minutes> <neighbour>`` line connects it to that neighbour.
Each connection is usually listed under both of its stations.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from ..core.exceptions import (
    MalformedInputError,
    StationNotFoundError,
    TransitPathError,
    ValidationError,
)
from ..core.graph import Graph
from ..core.models import NetworkSummary

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


class StationFileLoader:
    """Build a ``Graph`` from a station file."""

    def __init__(self, encoding: str = "utf-8"):
        """Initialize the loader.

        Args:
            encoding: Text encoding of station files
        """
        self.encoding = encoding

    def load(self, file_path: str | Path) -> Graph:
        """Load a station file from disk.

        Raises:
            MalformedInputError: If the file is missing or cannot be parsed
        """
        path = Path(file_path)
        if not path.exists():
            raise MalformedInputError("Station file not found", path=str(path))

        graph = Graph()
        try:
            with open(path, encoding=self.encoding) as f:
                self._register_stations(f, graph, str(path))
            with open(path, encoding=self.encoding) as f:
                self._connect_stations(f, graph, str(path))
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedInputError(
                f"Cannot read station file: {e}", path=str(path)
            ) from e

        logger.info(
            f"Loaded {graph.num_vertices} stations and {graph.num_edges} "
            f"connections from {path}"
        )
        return graph

    def load_from_string(self, text: str, source: str | None = None) -> Graph:
        """Load a network from station file text held in memory."""
        return self.parse_lines(text.splitlines(), source=source)

    def parse_lines(self, lines: Iterable[str], source: str | None = None) -> Graph:
        """Build a graph from already read station file lines."""
        lines = list(lines)
        graph = Graph()
        self._register_stations(lines, graph, source)
        self._connect_stations(lines, graph, source)
        logger.debug(
            f"Parsed {graph.num_vertices} stations and {graph.num_edges} connections"
        )
        return graph

    def _register_stations(
        self, lines: Iterable[str], graph: Graph, source: str | None
    ) -> None:
        for line_number, raw in enumerate(lines, 1):
            line = raw.rstrip()
            if self._is_station_line(line):
                try:
                    graph.add_vertex(line)
                except ValidationError as e:
                    raise MalformedInputError(
                        str(e), path=source, line_number=line_number
                    ) from e

    def _connect_stations(
        self, lines: Iterable[str], graph: Graph, source: str | None
    ) -> None:
        current: str | None = None

        for line_number, raw in enumerate(lines, 1):
            line = raw.rstrip()
            if not line.strip() or line.startswith(COMMENT_PREFIX):
                continue

            if self._is_station_line(line):
                current = line
                continue

            if not line[0].isdigit():
                raise MalformedInputError(
                    f"Unexpected line {line!r}", path=source, line_number=line_number
                )
            if current is None:
                raise MalformedInputError(
                    "Connection listed before any station",
                    path=source,
                    line_number=line_number,
                )

            weight, neighbor = self._parse_connection(line, source, line_number)
            try:
                previous = graph.get_edge(current, neighbor)
                if previous > 0 and previous != weight:
                    logger.warning(
                        f"Travel time {current} - {neighbor} changed from "
                        f"{previous} to {weight} at line {line_number}"
                    )
                graph.add_edge(current, neighbor, weight)
            except StationNotFoundError as e:
                raise MalformedInputError(
                    f"Unknown station {e.station!r}",
                    path=source,
                    line_number=line_number,
                ) from e
            except TransitPathError as e:
                raise MalformedInputError(
                    str(e), path=source, line_number=line_number
                ) from e

    def _parse_connection(
        self, line: str, source: str | None, line_number: int
    ) -> tuple[int, str]:
        parts = line.split(maxsplit=1)
        if len(parts) != 2 or not parts[0].isdecimal():
            raise MalformedInputError(
                f"Expected '<minutes> <station>', got {line!r}",
                path=source,
                line_number=line_number,
            )

        weight = int(parts[0])
        if weight <= 0:
            raise MalformedInputError(
                f"Travel time must be positive, got {weight}",
                path=source,
                line_number=line_number,
            )
        return weight, parts[1].strip()

    @staticmethod
    def _is_station_line(line: str) -> bool:
        return bool(line.strip()) and line[0].isalpha()


def load_graph(file_path: str | Path) -> Graph:
    """Load a station file with the default loader."""
    return StationFileLoader().load(file_path)


def summarize(graph: Graph) -> NetworkSummary:
    """Compute aggregate statistics for a loaded network."""
    degrees = {v.name: graph.degree(v) for v in graph}
    max_degree = max(degrees.values(), default=0)
    return NetworkSummary(
        station_count=graph.num_vertices,
        connection_count=graph.num_edges,
        isolated_stations=[name for name, d in degrees.items() if d == 0],
        max_degree=max_degree,
        busiest_stations=[
            name for name, d in degrees.items() if d == max_degree and d > 0
        ],
    )
