"""CLI commands for station inspection."""

import csv
import io
import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ..config import get_settings
from ..core import Graph, PathFinder, StationNotFoundError, TransitPathError
from ..loader import StationFileLoader, StationSearcher, summarize
from .formatters import (
    format_network_summary,
    format_station_table,
    format_traversal_table,
)

logger = logging.getLogger(__name__)

console = Console()

DATA_HELP = "Station data file (defaults to TRANSIT_PATH_DATA_FILE)"


def resolve_data_path(data: str | None) -> Path:
    """Return the station file path from the option or the settings."""
    return Path(data) if data else get_settings().data_file


def load_network(data_path: Path) -> Graph:
    """Load the station network at ``data_path``."""
    logger.debug(f"Loading station network from {data_path}")
    return StationFileLoader().load(data_path)


def report_missing_station(error: StationNotFoundError, graph: Graph) -> None:
    """Print a not-found message with close station names, if any."""
    settings = get_settings()
    console.print(f"[red]Station not found:[/red] {error.station}")
    suggestions = StationSearcher(graph).suggest(
        error.station,
        limit=settings.suggestion_limit,
        threshold=settings.suggestion_threshold,
    )
    if suggestions:
        console.print(f"[dim]Did you mean: {', '.join(suggestions)}?[/dim]")



def titled_table(title: str) -> Table:
    """Table at least as wide as its title, so the title never wraps."""
    return Table(
        title=title,
        show_header=True,
        header_style="bold magenta",
        min_width=len(title) + 4,
    )


@click.group()
def stations() -> None:
    """Station inspection commands."""
    pass


@stations.command("list")
@click.option("--limit", "-l", default=50, help="Maximum number of results")
@click.option("--data", "-d", type=click.Path(), default=None, help=DATA_HELP)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "csv"]),
    default="table",
    help="Output format",
)
@click.option("--verbose", "-v", is_flag=True, help="Show neighbour details")
def list_stations(
    limit: int, data: str | None, output_format: str, verbose: bool
) -> None:
    """List stations with their number of connections.

    Examples:
        transit-path stations list
        transit-path stations list --format csv
        transit-path stations list --data my_stations.txt --verbose
    """
    data_path = resolve_data_path(data)

    if not data_path.exists():
        console.print(f"[red]Station data file not found:[/red] {data_path}")
        return

    try:
        graph = load_network(data_path)
        infos = [graph.station_info(v) for v in graph][:limit]

        if not infos:
            console.print("[yellow]No stations found[/yellow]")
            return

        if output_format == "json":
            click.echo(
                json.dumps(
                    [info.model_dump(mode="json") for info in infos],
                    ensure_ascii=False,
                    indent=2,
                )
            )
        elif output_format == "csv":
            output = io.StringIO()
            writer = csv.DictWriter(output, fieldnames=["name", "degree", "neighbors"])
            writer.writeheader()
            for info in infos:
                writer.writerow(
                    {
                        "name": info.name,
                        "degree": info.degree,
                        "neighbors": "|".join(
                            f"{name}:{mins}" for name, mins in info.neighbors.items()
                        ),
                    }
                )
            click.echo(output.getvalue(), nl=False)
        else:
            format_station_table(infos, verbose=verbose)

    except TransitPathError as e:
        console.print(f"[red]Error listing stations:[/red] {e}")


@stations.command("info")
@click.option("--data", "-d", type=click.Path(), default=None, help=DATA_HELP)
def station_info(data: str | None) -> None:
    """Show station network information.

    Examples:
        transit-path stations info
    """
    data_path = resolve_data_path(data)

    if not data_path.exists():
        console.print(f"[red]Station data file not found:[/red] {data_path}")
        return

    try:
        graph = load_network(data_path)
        format_network_summary(summarize(graph), str(data_path))
    except TransitPathError as e:
        console.print(f"[red]Error reading station info:[/red] {e}")


@stations.command("neighbors")
@click.argument("name")
@click.option("--data", "-d", type=click.Path(), default=None, help=DATA_HELP)
def station_neighbors(name: str, data: str | None) -> None:
    """Show the stations directly connected to NAME.

    Examples:
        transit-path stations neighbors "Central"
    """
    data_path = resolve_data_path(data)

    if not data_path.exists():
        console.print(f"[red]Station data file not found:[/red] {data_path}")
        return

    try:
        graph = load_network(data_path)
    except TransitPathError as e:
        console.print(f"[red]Error loading stations:[/red] {e}")
        return

    try:
        info = graph.station_info(name)
    except StationNotFoundError as e:
        report_missing_station(e, graph)
        return

    if not info.neighbors:
        console.print(f"[yellow]{info.name} has no connections[/yellow]")
        return

    table = titled_table(f"Neighbours of {info.name} ({info.degree})")
    table.add_column("Station", style="cyan")
    table.add_column("Minutes", style="green", justify="right")
    for neighbor, minutes in info.neighbors.items():
        table.add_row(neighbor, str(minutes))
    console.print(table)


@stations.command("traverse")
@click.argument("name")
@click.option(
    "--order",
    "-o",
    type=click.Choice(["bfs", "dfs"]),
    default="bfs",
    help="Breadth-first or depth-first order",
)
@click.option("--data", "-d", type=click.Path(), default=None, help=DATA_HELP)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
def traverse(name: str, order: str, data: str | None, output_format: str) -> None:
    """Walk every station reachable from NAME.

    Examples:
        transit-path stations traverse "Central"
        transit-path stations traverse "Central" --order dfs --format json
    """
    data_path = resolve_data_path(data)

    if not data_path.exists():
        console.print(f"[red]Station data file not found:[/red] {data_path}")
        return

    try:
        graph = load_network(data_path)
    except TransitPathError as e:
        console.print(f"[red]Error loading stations:[/red] {e}")
        return

    try:
        result = graph.traverse(name, order=order)
    except StationNotFoundError as e:
        report_missing_station(e, graph)
        return

    if output_format == "json":
        click.echo(
            json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2)
        )
    else:
        format_traversal_table(result)


@stations.command("reachable")
@click.argument("name")
@click.option("--data", "-d", type=click.Path(), default=None, help=DATA_HELP)
@click.option(
    "--strategy",
    "-s",
    type=click.Choice(["frontier", "heap"]),
    default=None,
    help="Dijkstra variant",
)
def reachable(name: str, data: str | None, strategy: str | None) -> None:
    """Show the travel time from NAME to every reachable station.

    Examples:
        transit-path stations reachable "Central"
    """
    data_path = resolve_data_path(data)

    if not data_path.exists():
        console.print(f"[red]Station data file not found:[/red] {data_path}")
        return

    try:
        graph = load_network(data_path)
    except TransitPathError as e:
        console.print(f"[red]Error loading stations:[/red] {e}")
        return

    finder = PathFinder(graph, strategy=strategy or get_settings().strategy)
    try:
        times = finder.distances_from(name)
    except StationNotFoundError as e:
        report_missing_station(e, graph)
        return

    table = titled_table(f"Travel times from {name}")
    table.add_column("Station", style="cyan")
    table.add_column("Minutes", style="green", justify="right")
    for station, minutes in sorted(times.items(), key=lambda item: (item[1], item[0])):
        table.add_row(station, str(minutes))
    console.print(table)


@stations.command("search")
@click.argument("query")
@click.option("--limit", "-l", default=10, help="Maximum number of results")
@click.option("--data", "-d", type=click.Path(), default=None, help=DATA_HELP)
@click.option("--exact", "-e", is_flag=True, help="Exact (case-insensitive) match")
@click.option(
    "--fuzzy-threshold",
    "-t",
    default=70,
    type=click.IntRange(0, 100),
    help="Minimum fuzzy match score (0-100)",
)
@click.option("--show-scores", is_flag=True, help="Show fuzzy match scores")
def search_stations(
    query: str,
    limit: int,
    data: str | None,
    exact: bool,
    fuzzy_threshold: int,
    show_scores: bool,
) -> None:
    """Search station names.

    Examples:
        transit-path stations search "centrl"
        transit-path stations search "harbour" --exact
    """
    data_path = resolve_data_path(data)

    if not data_path.exists():
        console.print(f"[red]Station data file not found:[/red] {data_path}")
        return

    try:
        graph = load_network(data_path)
    except TransitPathError as e:
        console.print(f"[red]Error searching stations:[/red] {e}")
        return

    searcher = StationSearcher(graph)
    if show_scores and not exact:
        results = searcher.fuzzy_search(query, limit=limit, threshold=fuzzy_threshold)
    elif exact:
        results = [(name, 100) for name in searcher.search_by_name(query, exact=True)]
    else:
        results = [
            (name, None)
            for name in searcher.search_stations(
                query, limit=limit, fuzzy_threshold=fuzzy_threshold
            )
        ]
    results = results[:limit]

    if not results:
        console.print(f"[yellow]No stations found matching '{query}'[/yellow]")
        if not exact and fuzzy_threshold > 50:
            console.print(
                f"[dim]Try lowering --fuzzy-threshold (currently {fuzzy_threshold})[/dim]"
            )
        return

    table = titled_table(f"Station Search Results: '{query}'")
    table.add_column("Name", style="cyan", no_wrap=True)
    if show_scores and not exact:
        table.add_column("Score", style="magenta", no_wrap=True)
    table.add_column("Connections", style="green", justify="right")

    for name, score in results:
        row = [name]
        if show_scores and not exact:
            row.append(str(score))
        row.append(str(graph.degree(name)))
        table.add_row(*row)

    console.print(table)
