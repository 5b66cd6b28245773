"""Data models for transit path results."""

from pydantic import BaseModel, Field


class Leg(BaseModel):
    """A single hop between two directly connected stations."""

    from_station: str = Field(..., description="Departure station name")
    to_station: str = Field(..., description="Arrival station name")
    duration_minutes: int = Field(..., description="Travel time in minutes")

    def __str__(self) -> str:
        return f"{self.from_station} → {self.to_station} ({self.duration_minutes} min)"


class Route(BaseModel):
    """Shortest route between two stations."""

    from_station: str = Field(..., description="Starting station")
    to_station: str = Field(..., description="Destination station")
    total_minutes: int = Field(..., description="Total travel time in minutes")
    stations: list[str] = Field(
        default_factory=list, description="Stations along the route, inclusive"
    )
    legs: list[Leg] = Field(default_factory=list, description="Hops along the route")
    strategy: str = Field("frontier", description="Dijkstra variant used")

    @property
    def stop_count(self) -> int:
        """Number of intermediate stations."""
        return max(len(self.stations) - 2, 0)

    def __str__(self) -> str:
        return f"{self.from_station} → {self.to_station} ({self.total_minutes} min)"

    def summary(self) -> str:
        """Get route summary."""
        return (
            f"The shortest travel time between {self.from_station} and "
            f"{self.to_station} is {self.total_minutes} minutes."
        )


class TraversalStep(BaseModel):
    """A station visited during a breadth- or depth-first traversal."""

    order: int = Field(..., description="Position in the traversal, from 1")
    name: str = Field(..., description="Station name")
    level: int = Field(..., description="Hop count (BFS) or tree depth (DFS)")


class TraversalResult(BaseModel):
    """Full result of a graph traversal from one station."""

    start: str = Field(..., description="Station the traversal started from")
    order: str = Field(..., description="Traversal order: bfs or dfs")
    steps: list[TraversalStep] = Field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [step.name for step in self.steps]


class StationInfo(BaseModel):
    """A station with its direct connections."""

    name: str = Field(..., description="Station name")
    degree: int = Field(..., description="Number of directly connected stations")
    neighbors: dict[str, int] = Field(
        default_factory=dict, description="Neighbour name to travel time"
    )


class NetworkSummary(BaseModel):
    """Aggregate statistics about a loaded network."""

    station_count: int = Field(..., description="Number of stations")
    connection_count: int = Field(..., description="Number of undirected edges")
    isolated_stations: list[str] = Field(
        default_factory=list, description="Stations with no connections"
    )
    max_degree: int = Field(0, description="Largest number of connections")
    busiest_stations: list[str] = Field(
        default_factory=list, description="Stations with the largest degree"
    )
