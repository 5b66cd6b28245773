"""Station vertex used by the transit graph."""

import math

from pydantic import BaseModel, Field

INFINITY = math.inf


class Vertex(BaseModel):
    """A named station in the transit network.

    Two vertices are equal when their names are equal. The traversal fields
    are only meaningful on the snapshots handed out by a traversal or a
    shortest path run; records owned by a ``Graph`` keep their defaults.
    """

    name: str = Field(..., frozen=True, description="Station name")
    visited: bool = Field(False, description="Set once a traversal reaches it")
    level: int = Field(0, description="Hop count from the traversal start")
    distance: float = Field(INFINITY, description="Tentative travel time")

    def mark(self) -> None:
        self.visited = True

    def unmark(self) -> None:
        self.visited = False

    def is_marked(self) -> bool:
        return self.visited

    def get_level(self) -> int:
        return self.level

    def set_level(self, level: int) -> None:
        self.level = level

    def get_distance(self) -> float:
        return self.distance

    def set_distance(self, distance: float) -> None:
        self.distance = distance

    def get_name(self) -> str:
        return self.name

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Vertex):
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Vertex({self.name!r})"
