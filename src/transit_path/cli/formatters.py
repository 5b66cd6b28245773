"""Output formatters for CLI display."""

import json

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.models import NetworkSummary, Route, StationInfo, TraversalResult

console = Console()


def format_route_table(route: Route, verbose: bool = False) -> None:
    """Display a route as a rich table."""
    table = Table(
        title=f"Route: {route.from_station} → {route.to_station}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("Travel time", f"{route.total_minutes} min")
    table.add_row("Stops", str(route.stop_count))
    if verbose:
        table.add_row("Strategy", route.strategy)

    console.print(table)

    if verbose and route.legs:
        console.print()
        leg_table = Table(
            title="Leg Details", show_header=True, header_style="bold blue"
        )
        leg_table.add_column("From", style="cyan")
        leg_table.add_column("To", style="cyan")
        leg_table.add_column("Minutes", style="green", justify="right")
        for leg in route.legs:
            leg_table.add_row(
                leg.from_station, leg.to_station, str(leg.duration_minutes)
            )
        console.print(leg_table)

    console.print(route.summary())


def format_route_detailed(route: Route) -> None:
    """Display a route with every leg in its own panel."""
    summary_text = f"""[bold]From:[/bold] {route.from_station}
[bold]To:[/bold] {route.to_station}
[bold]Travel time:[/bold] {route.total_minutes} min
[bold]Stops:[/bold] {route.stop_count}"""

    console.print(Panel(summary_text, title="Route Summary", border_style="blue"))

    if route.legs:
        console.print()
        console.print("[bold]Leg Details:[/bold]")

        elapsed = 0
        for i, leg in enumerate(route.legs, 1):
            elapsed += leg.duration_minutes
            leg_text = f"""[cyan]{leg.from_station}[/cyan] → [cyan]{leg.to_station}[/cyan]
[bold]Duration:[/bold] {leg.duration_minutes} min
[bold]Elapsed:[/bold] {elapsed} min"""
            console.print(Panel(leg_text, title=f"Leg {i}", border_style="green"))


def format_route_json(route: Route) -> str:
    """Format a route as JSON."""
    return json.dumps(route.model_dump(mode="json"), ensure_ascii=False, indent=2)


def format_station_table(stations: list[StationInfo], verbose: bool = False) -> None:
    """Display stations as a table."""
    table = Table(
        title=f"Stations ({len(stations)})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Connections", style="green", justify="right")
    if verbose:
        table.add_column("Neighbours", style="blue")

    for station in stations:
        row = [station.name, str(station.degree)]
        if verbose:
            row.append(
                ", ".join(f"{name} ({mins})" for name, mins in station.neighbors.items())
            )
        table.add_row(*row)

    console.print(table)


def format_traversal_table(result: TraversalResult) -> None:
    """Display a BFS or DFS traversal as a table."""
    level_header = "Level" if result.order == "bfs" else "Depth"
    table = Table(
        title=f"{result.order.upper()} from {result.start}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Station", style="cyan")
    table.add_column(level_header, style="green", justify="right")

    for step in result.steps:
        table.add_row(str(step.order), step.name, str(step.level))

    console.print(table)


def format_network_summary(summary: NetworkSummary, source: str) -> None:
    """Display aggregate network statistics."""
    console.print("[bold]Station Network Information[/bold]")
    console.print(f"Station file: {source}")
    console.print(f"Total stations: {summary.station_count}")
    console.print(f"Connections: {summary.connection_count}")
    if summary.busiest_stations:
        console.print(
            f"Busiest stations ({summary.max_degree} connections): "
            f"{', '.join(summary.busiest_stations)}"
        )
    if summary.isolated_stations:
        console.print(
            f"[yellow]Isolated stations:[/yellow] {', '.join(summary.isolated_stations)}"
        )
