"""MCP Server for Transit Path.

This module implements a Model Context Protocol (MCP) server that exposes
shortest route search and station inspection over a loaded station network.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import (
    TextContent,
    Tool,
)

from .. import __version__
from ..config import get_settings
from ..core.exceptions import (
    StationNotFoundError,
    TransitPathError,
    UnreachableError,
)
from ..core.graph import Graph
from ..core.pathfinder import STRATEGIES, PathFinder
from ..loader import StationFileLoader, StationSearcher

logger = logging.getLogger(__name__)


class TransitMCPServer:
    """MCP Server for transit path functionality."""

    def __init__(self, data_file: str | Path | None = None) -> None:
        """Initialize the Transit MCP Server.

        Args:
            data_file: Station file to serve; defaults to the configured one
        """
        self.settings = get_settings()
        self.server = Server("transit-path")
        self.graph = Graph()
        self.station_searcher = StationSearcher(self.graph)

        self._load_stations(Path(data_file) if data_file else self.settings.data_file)

        # Register handlers
        self._register_handlers()

    def _load_stations(self, data_file: Path) -> None:
        """Load the station network (read-only)."""
        if not data_file.exists():
            logger.warning(
                f"No station file found at {data_file}. Starting with an empty network."
            )
            return

        logger.info(f"Loading stations from file: {data_file}")
        try:
            self.graph = StationFileLoader().load(data_file)
        except TransitPathError as e:
            logger.warning(f"Failed to load stations: {e}. Starting with an empty network.")
            return

        self.station_searcher = StationSearcher(self.graph)
        logger.info(f"Loaded {self.graph.num_vertices} stations")

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List available tools."""
            return [
                Tool(
                    name="shortest_route",
                    description="Find the shortest travel time between two stations",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "from_station": {
                                "type": "string",
                                "description": "Departure station name",
                            },
                            "to_station": {
                                "type": "string",
                                "description": "Destination station name",
                            },
                            "strategy": {
                                "type": "string",
                                "description": "Dijkstra variant: 'frontier' (linear scan) or 'heap'",
                                "enum": list(STRATEGIES),
                                "default": "frontier",
                            },
                        },
                        "required": ["from_station", "to_station"],
                    },
                ),
                Tool(
                    name="list_stations",
                    description="List the stations of the loaded network",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "query": {
                                "type": "string",
                                "description": "Only list stations matching this text (optional)",
                            },
                            "limit": {
                                "type": "integer",
                                "description": "Maximum number of results",
                                "default": 50,
                                "minimum": 1,
                                "maximum": 1000,
                            },
                        },
                    },
                ),
                Tool(
                    name="station_neighbors",
                    description="List the stations directly connected to a station with travel times",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "station_name": {
                                "type": "string",
                                "description": "Exact station name",
                            }
                        },
                        "required": ["station_name"],
                    },
                ),
                Tool(
                    name="traverse_network",
                    description="Walk every station reachable from a station in breadth-first or depth-first order",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "station_name": {
                                "type": "string",
                                "description": "Station to start from",
                            },
                            "order": {
                                "type": "string",
                                "enum": ["bfs", "dfs"],
                                "default": "bfs",
                            },
                        },
                        "required": ["station_name"],
                    },
                ),
            ]

        @self.server.call_tool()
        async def handle_call_tool(
            name: str, arguments: dict[str, Any]
        ) -> list[TextContent]:
            """Handle tool calls."""
            try:
                if name == "shortest_route":
                    return await self._shortest_route(arguments)
                elif name == "list_stations":
                    return await self._list_stations(arguments)
                elif name == "station_neighbors":
                    return await self._station_neighbors(arguments)
                elif name == "traverse_network":
                    return await self._traverse_network(arguments)
                else:
                    return [TextContent(type="text", text=f"Unknown tool: {name}")]

            except Exception as e:
                logger.error(f"Error in tool {name}: {e}")
                return [TextContent(type="text", text=f"Error: {str(e)}")]

    def _not_found_text(self, error: StationNotFoundError) -> str:
        text = f"Station not found: {error.station}"
        suggestions = self.station_searcher.suggest(
            error.station,
            limit=self.settings.suggestion_limit,
            threshold=self.settings.suggestion_threshold,
        )
        if suggestions:
            text += f"\nDid you mean: {', '.join(suggestions)}?"
        return text

    async def _shortest_route(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Find the shortest route between stations."""
        from_station = arguments["from_station"]
        to_station = arguments["to_station"]
        strategy = arguments.get("strategy", self.settings.strategy)

        try:
            route = PathFinder(self.graph, strategy=strategy).shortest_path(
                from_station, to_station
            )
        except StationNotFoundError as e:
            return [TextContent(type="text", text=self._not_found_text(e))]
        except UnreachableError as e:
            return [TextContent(type="text", text=f"No route found: {e}")]
        except TransitPathError as e:
            return [TextContent(type="text", text=f"Route search failed: {str(e)}")]

        result_text = f"**{route.from_station} → {route.to_station}: {route.total_minutes} minutes**\n\n"
        result_text += f"   • Stops: {route.stop_count}\n"
        if route.legs:
            result_text += "   Route Details:\n"
            for i, leg in enumerate(route.legs, 1):
                result_text += f"     {i}. {leg.from_station} → {leg.to_station} - {leg.duration_minutes}min\n"

        return [
            TextContent(type="text", text=result_text),
            TextContent(
                type="text",
                text=f"JSON Data:\n```json\n{json.dumps(route.model_dump(mode='json'), indent=2, ensure_ascii=False)}\n```",
            ),
        ]

    async def _list_stations(self, arguments: dict[str, Any]) -> list[TextContent]:
        """List stations, optionally filtered by a search query."""
        query = arguments.get("query")
        limit = arguments.get("limit", 50)

        if query:
            names = self.station_searcher.search_stations(query, limit=limit)
        else:
            names = self.graph.names[:limit]

        if not names:
            filter_desc = f" matching '{query}'" if query else ""
            return [TextContent(type="text", text=f"No stations found{filter_desc}")]

        result_text = f"**Station Network ({len(names)} of {self.graph.num_vertices} stations):**\n\n"
        for i, name in enumerate(names, 1):
            result_text += f"{i}. **{name}** ({self.graph.degree(name)} connections)\n"

        return [TextContent(type="text", text=result_text)]

    async def _station_neighbors(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Describe a station's direct connections."""
        station_name = arguments["station_name"]

        try:
            info = self.graph.station_info(station_name)
        except StationNotFoundError as e:
            return [TextContent(type="text", text=self._not_found_text(e))]

        result_text = f"**{info.name}** ({info.degree} connections)\n"
        for neighbor, minutes in info.neighbors.items():
            result_text += f"   • {neighbor}: {minutes}min\n"

        return [
            TextContent(type="text", text=result_text),
            TextContent(
                type="text",
                text=f"JSON Data:\n```json\n{json.dumps(info.model_dump(mode='json'), indent=2, ensure_ascii=False)}\n```",
            ),
        ]

    async def _traverse_network(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Traverse the network from a station."""
        station_name = arguments["station_name"]
        order = arguments.get("order", "bfs")

        try:
            result = self.graph.traverse(station_name, order=order)
        except StationNotFoundError as e:
            return [TextContent(type="text", text=self._not_found_text(e))]
        except TransitPathError as e:
            return [TextContent(type="text", text=f"Traversal failed: {str(e)}")]

        label = "level" if order == "bfs" else "depth"
        result_text = f"**{order.upper()} from {result.start} ({len(result.steps)} stations):**\n\n"
        for step in result.steps:
            result_text += f"{step.order}. {step.name} ({label} {step.level})\n"

        return [TextContent(type="text", text=result_text)]


async def main() -> None:
    """Main entry point for the MCP server."""
    # Configure logging
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting Transit Path MCP Server")

    # Create the server
    server_instance = TransitMCPServer()

    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP Server running with stdio transport")
        await server_instance.server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="transit-path",
                server_version=__version__,
                capabilities=server_instance.server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def main_sync() -> None:
    """Synchronous wrapper for the async main function - used as entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
