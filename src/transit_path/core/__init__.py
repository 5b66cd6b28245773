"""Core transit graph and shortest path functionality."""

from .exceptions import (
    DuplicateStationError,
    MalformedInputError,
    StationNotFoundError,
    TransitPathError,
    UnreachableError,
    ValidationError,
)
from .graph import NO_EDGE, Graph
from .models import Leg, NetworkSummary, Route, StationInfo, TraversalResult, TraversalStep
from .pathfinder import STRATEGIES, PathFinder, shortest_path
from .vertex import INFINITY, Vertex

__all__ = [
    "Graph",
    "Vertex",
    "PathFinder",
    "shortest_path",
    "NO_EDGE",
    "INFINITY",
    "STRATEGIES",
    "Leg",
    "Route",
    "StationInfo",
    "NetworkSummary",
    "TraversalResult",
    "TraversalStep",
    "TransitPathError",
    "StationNotFoundError",
    "UnreachableError",
    "MalformedInputError",
    "ValidationError",
    "DuplicateStationError",
]
