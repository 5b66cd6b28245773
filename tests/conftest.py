"""Test configuration and fixtures."""

import pytest

from transit_path.config import get_settings
from transit_path.core.graph import Graph


SAMPLE_STATION_FILE = """Central
4 Harbour
7 Museum
3 Market

Harbour
4 Central
6 Lighthouse

Museum
7 Central
2 Park
5 University

Market
3 Central
2 Park

Park
2 Museum
2 Market

University
5 Museum

Lighthouse
6 Harbour

Airport
"""


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Keep TRANSIT_PATH_* settings isolated between tests."""
    for var in (
        "TRANSIT_PATH_DATA_FILE",
        "TRANSIT_PATH_STRATEGY",
        "TRANSIT_PATH_OUTPUT_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def station_file_text():
    """Station file contents for a small eight station network."""
    return SAMPLE_STATION_FILE


@pytest.fixture
def station_file(tmp_path, station_file_text):
    """Station file written to a temporary directory."""
    path = tmp_path / "stations.txt"
    path.write_text(station_file_text, encoding="utf-8")
    return path


@pytest.fixture
def triangle_graph():
    """A-B 5, B-C 3, A-C 100: the cheap route goes through B."""
    graph = Graph()
    for name in ("A", "B", "C"):
        graph.add_vertex(name)
    graph.add_edge("A", "B", 5)
    graph.add_edge("B", "C", 3)
    graph.add_edge("A", "C", 100)
    return graph


@pytest.fixture
def square_graph():
    """A-B 1, B-C 2, C-D 3, A-D 10."""
    graph = Graph()
    for name in ("A", "B", "C", "D"):
        graph.add_vertex(name)
    graph.add_edge("A", "B", 1)
    graph.add_edge("B", "C", 2)
    graph.add_edge("C", "D", 3)
    graph.add_edge("A", "D", 10)
    return graph


@pytest.fixture
def hop_graph():
    """Graph with a known hop structure plus a separate component.

    Layout (unit weights)::

        S - A - C - E
        |   |
        B - D       X - Y
    """
    graph = Graph()
    for name in ("S", "A", "B", "C", "D", "E", "X", "Y"):
        graph.add_vertex(name)
    graph.add_edge("S", "A")
    graph.add_edge("S", "B")
    graph.add_edge("A", "C")
    graph.add_edge("A", "D")
    graph.add_edge("B", "D")
    graph.add_edge("C", "E")
    graph.add_edge("X", "Y")
    return graph
