"""CLI main entry point for transit path search."""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from .. import __version__
from ..config import get_settings
from ..core import (
    STRATEGIES,
    MalformedInputError,
    PathFinder,
    StationNotFoundError,
    UnreachableError,
    ValidationError,
)
from ..loader import StationSearcher
from .formatters import format_route_detailed, format_route_json, format_route_table
from .station_commands import load_network, resolve_data_path, stations

console = Console()
error_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send package logs to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Transit Path - Shortest travel times between stations of a network."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)


@cli.command()
@click.argument("from_station", required=False)
@click.argument("to_station", required=False)
@click.option("--data", "-d", type=click.Path(), default=None, help="Station data file")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "detailed"]),
    default=None,
    help="Output format",
)
@click.option(
    "--strategy",
    "-s",
    type=click.Choice(list(STRATEGIES)),
    default=None,
    help="Dijkstra variant: frontier scan or binary heap",
)
@click.option("--legs", "-l", is_flag=True, help="Show every leg of the route")
@click.pass_context
def route(
    ctx: click.Context,
    from_station: str | None,
    to_station: str | None,
    data: str | None,
    output_format: str | None,
    strategy: str | None,
    legs: bool,
) -> None:
    """Find the shortest travel time between two stations.

    Station names left out on the command line are asked for interactively.

    Examples:
        transit-path route "Central" "Museum"
        transit-path route "Central" "Museum" --format json
        transit-path route --data my_stations.txt
    """
    settings = get_settings()
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    output_format = output_format or settings.output_format
    strategy = strategy or settings.strategy
    data_path = resolve_data_path(data)

    if not data_path.exists():
        error_console.print(f"[red]Station data file not found:[/red] {data_path}")
        sys.exit(1)

    graph = None
    try:
        graph = load_network(data_path)

        if not from_station:
            from_station = click.prompt("Enter the station you intend to start from")
        if not to_station:
            to_station = click.prompt("Enter the station you intend to travel to")

        finder = PathFinder(graph, strategy=strategy)
        result = finder.shortest_path(from_station.strip(), to_station.strip())

        if output_format == "json":
            click.echo(format_route_json(result))
        elif output_format == "detailed":
            format_route_detailed(result)
        else:
            format_route_table(result, verbose=legs or verbose)

    except MalformedInputError as e:
        error_console.print(f"[red]Invalid station file:[/red] {e}")
        sys.exit(1)
    except StationNotFoundError as e:
        error_console.print(
            f"[red]Error:[/red] The station '{e.station}' does not exist. "
            "Double check the station name."
        )
        if graph is not None:
            suggestions = StationSearcher(graph).suggest(
                e.station,
                limit=settings.suggestion_limit,
                threshold=settings.suggestion_threshold,
            )
            if suggestions:
                error_console.print(f"Did you mean: {', '.join(suggestions)}?")
        sys.exit(1)
    except UnreachableError as e:
        error_console.print(f"[yellow]No route found:[/yellow] {e}")
        sys.exit(1)
    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    except click.Abort:
        raise
    except Exception as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            error_console.print_exception()
        sys.exit(1)


# Add the imported stations command group to the main CLI
cli.add_command(stations)


@cli.group()
def config() -> None:
    """Configuration management."""
    pass


@config.command("show")
def show_config() -> None:
    """Show current configuration.

    Values come from TRANSIT_PATH_* environment variables or defaults.
    """
    settings = get_settings()
    console.print("[bold]Current Configuration:[/bold]")
    console.print(f"• Station file: {settings.data_file}")
    console.print(f"• Strategy: {settings.strategy}")
    console.print(f"• Default format: {settings.output_format}")
    console.print(
        f"• Suggestions: up to {settings.suggestion_limit} "
        f"(threshold {settings.suggestion_threshold})"
    )


if __name__ == "__main__":
    cli()
