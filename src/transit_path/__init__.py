"""Transit Path Package

A Python package for computing the shortest travel time between stations
of a transit network, with CLI and MCP server front ends.
"""

__version__ = "0.1.0"

from .core.graph import Graph
from .core.models import Route
from .core.pathfinder import PathFinder, shortest_path
from .core.vertex import Vertex

__all__ = ["Graph", "PathFinder", "Route", "Vertex", "shortest_path"]
