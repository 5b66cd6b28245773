"""Tests for MCP server functionality."""

import json
from unittest.mock import patch

import pytest

from transit_path.config import get_settings
from transit_path.core.exceptions import ValidationError
from transit_path.mcp.server import TransitMCPServer


class TestTransitMCPServer:
    """Test cases for TransitMCPServer."""

    @pytest.fixture
    def server(self, station_file):
        """Create a TransitMCPServer over the sample network."""
        return TransitMCPServer(data_file=station_file)

    def test_server_initialization(self, server):
        """Test the station file is loaded on start."""
        assert server.server.name == "transit-path"
        assert server.graph.num_vertices == 8
        assert server.graph.num_edges == 7

    def test_server_missing_station_file(self, tmp_path):
        """Test a missing station file leaves the network empty."""
        server = TransitMCPServer(data_file=tmp_path / "missing.txt")
        assert server.graph.num_vertices == 0

    def test_server_malformed_station_file(self, tmp_path):
        """Test a broken station file leaves the network empty."""
        path = tmp_path / "broken.txt"
        path.write_text("Central\n0 Central\n", encoding="utf-8")

        server = TransitMCPServer(data_file=path)
        assert server.graph.num_vertices == 0

    def test_server_undecodable_station_file(self, tmp_path):
        """Test a station file that is not UTF-8 leaves the network empty."""
        path = tmp_path / "stations.txt"
        path.write_bytes(b"Central\n4 \xffHarbour\n")

        server = TransitMCPServer(data_file=path)
        assert server.graph.num_vertices == 0

    def test_server_uses_configured_station_file(self, station_file, monkeypatch):
        """Test the default station file comes from the settings."""
        monkeypatch.setenv("TRANSIT_PATH_DATA_FILE", str(station_file))
        get_settings.cache_clear()
        server = TransitMCPServer()
        assert "Lighthouse" in server.graph

    @pytest.mark.asyncio
    async def test_list_tools(self, server):
        """Test that server has registered handlers."""
        assert hasattr(server.server, "list_tools")
        assert callable(server.server.list_tools)

    @pytest.mark.asyncio
    async def test_shortest_route_success(self, server):
        """Test successful route search."""
        result = await server._shortest_route(
            {"from_station": "Central", "to_station": "Park"}
        )

        assert len(result) == 2  # Text content and JSON data

        text_content = result[0].text
        assert "Central → Park: 5 minutes" in text_content
        assert "Stops: 1" in text_content
        assert "2. Market → Park - 2min" in text_content

        json_content = result[1].text
        assert "JSON Data:" in json_content
        payload = json_content.split("```json\n", 1)[1].rsplit("\n```", 1)[0]
        data = json.loads(payload)
        assert data["stations"] == ["Central", "Market", "Park"]
        assert data["strategy"] == "frontier"

    @pytest.mark.asyncio
    async def test_shortest_route_heap_strategy(self, server):
        """Test the strategy argument is passed through."""
        result = await server._shortest_route(
            {"from_station": "Lighthouse", "to_station": "University", "strategy": "heap"}
        )

        assert "22 minutes" in result[0].text
        assert '"strategy": "heap"' in result[1].text

    @pytest.mark.asyncio
    async def test_shortest_route_same_station(self, server):
        """Test a route from a station to itself."""
        result = await server._shortest_route(
            {"from_station": "Museum", "to_station": "Museum"}
        )

        assert "Museum → Museum: 0 minutes" in result[0].text
        assert "Route Details" not in result[0].text

    @pytest.mark.asyncio
    async def test_shortest_route_unknown_station(self, server):
        """Test route search with a misspelled station."""
        result = await server._shortest_route(
            {"from_station": "Centrl", "to_station": "Park"}
        )

        assert len(result) == 1
        assert "Station not found: Centrl" in result[0].text
        assert "Did you mean: Central" in result[0].text

    @pytest.mark.asyncio
    async def test_shortest_route_unreachable(self, server):
        """Test route search when the stations are disconnected."""
        result = await server._shortest_route(
            {"from_station": "Central", "to_station": "Airport"}
        )

        assert len(result) == 1
        assert "No route found" in result[0].text

    @pytest.mark.asyncio
    async def test_shortest_route_bad_strategy(self, server):
        """Test route search with an unknown strategy."""
        result = await server._shortest_route(
            {"from_station": "Central", "to_station": "Park", "strategy": "astar"}
        )

        assert len(result) == 1
        assert "Route search failed" in result[0].text

    @pytest.mark.asyncio
    async def test_shortest_route_validation_error(self, server):
        """Test errors from the path finder are reported."""
        with patch(
            "transit_path.mcp.server.PathFinder",
            side_effect=ValidationError("Empty station name"),
        ):
            result = await server._shortest_route(
                {"from_station": "", "to_station": "Park"}
            )

        assert "Route search failed" in result[0].text
        assert "Empty station name" in result[0].text

    @pytest.mark.asyncio
    async def test_list_stations_default_params(self, server):
        """Test listing every station."""
        result = await server._list_stations({})

        assert len(result) == 1
        text_content = result[0].text
        assert "Station Network (8 of 8 stations)" in text_content
        assert "1. **Central** (3 connections)" in text_content
        assert "**Airport** (0 connections)" in text_content

    @pytest.mark.asyncio
    async def test_list_stations_with_limit(self, server):
        """Test the limit argument."""
        result = await server._list_stations({"limit": 2})

        assert "Station Network (2 of 8 stations)" in result[0].text
        assert "Museum" not in result[0].text

    @pytest.mark.asyncio
    async def test_list_stations_with_query(self, server):
        """Test listing stations matching a query."""
        result = await server._list_stations({"query": "harb"})

        assert "Harbour" in result[0].text

    @pytest.mark.asyncio
    async def test_list_stations_no_results(self, server):
        """Test station listing with no results."""
        result = await server._list_stations({"query": "Zzzzqx"})

        assert len(result) == 1
        assert "No stations found matching 'Zzzzqx'" in result[0].text

    @pytest.mark.asyncio
    async def test_list_stations_empty_network(self, tmp_path):
        """Test station listing before any network was loaded."""
        server = TransitMCPServer(data_file=tmp_path / "missing.txt")
        result = await server._list_stations({})

        assert result[0].text == "No stations found"

    @pytest.mark.asyncio
    async def test_station_neighbors_success(self, server):
        """Test listing direct connections."""
        result = await server._station_neighbors({"station_name": "Museum"})

        assert len(result) == 2
        assert "**Museum** (3 connections)" in result[0].text
        assert "University: 5min" in result[0].text
        assert "JSON Data:" in result[1].text

    @pytest.mark.asyncio
    async def test_station_neighbors_not_found(self, server):
        """Test listing connections of an unknown station."""
        result = await server._station_neighbors({"station_name": "Musuem"})

        assert len(result) == 1
        assert "Station not found: Musuem" in result[0].text
        assert "Museum" in result[0].text

    @pytest.mark.asyncio
    async def test_traverse_network_bfs(self, server):
        """Test breadth-first traversal output."""
        result = await server._traverse_network({"station_name": "Central"})

        text_content = result[0].text
        assert "BFS from Central (7 stations)" in text_content
        assert "1. Central (level 0)" in text_content
        assert "5. Lighthouse (level 2)" in text_content
        assert "Airport" not in text_content

    @pytest.mark.asyncio
    async def test_traverse_network_dfs(self, server):
        """Test depth-first traversal output."""
        result = await server._traverse_network(
            {"station_name": "Central", "order": "dfs"}
        )

        text_content = result[0].text
        assert "DFS from Central" in text_content
        assert "3. Lighthouse (depth 2)" in text_content

    @pytest.mark.asyncio
    async def test_traverse_network_unknown_order(self, server):
        """Test an unsupported traversal order."""
        result = await server._traverse_network(
            {"station_name": "Central", "order": "random"}
        )

        assert "Traversal failed" in result[0].text
