"""Unit tests for CLI components."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from transit_path.cli.main import cli
from transit_path.config import get_settings


class TestCLI:
    """Test CLI commands."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_cli_version(self):
        """Test CLI version option."""
        result = self.runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_cli_help(self):
        """Test CLI help."""
        result = self.runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Transit Path" in result.output
        assert "route" in result.output
        assert "stations" in result.output

    def test_route_table_format(self, station_file):
        """Test a successful route search with table output."""
        result = self.runner.invoke(
            cli, ["route", "Central", "Park", "--data", str(station_file)]
        )

        assert result.exit_code == 0
        assert "Central" in result.output
        assert "5 min" in result.output
        assert "is 5 minutes." in result.output

    def test_route_json_format(self, station_file):
        """Test a successful route search with JSON output."""
        result = self.runner.invoke(
            cli,
            ["route", "Central", "Park", "--data", str(station_file), "--format", "json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["from_station"] == "Central"
        assert data["to_station"] == "Park"
        assert data["total_minutes"] == 5
        assert data["stations"] == ["Central", "Market", "Park"]
        assert len(data["legs"]) == 2

    def test_route_detailed_format(self, station_file):
        """Test a successful route search with detailed output."""
        result = self.runner.invoke(
            cli,
            [
                "route",
                "Harbour",
                "Park",
                "--data",
                str(station_file),
                "--format",
                "detailed",
            ],
        )

        assert result.exit_code == 0
        assert "Route Summary" in result.output
        assert "Leg Details" in result.output
        assert "Leg 3" in result.output

    def test_route_with_legs(self, station_file):
        """Test the leg table is shown on request."""
        result = self.runner.invoke(
            cli, ["route", "Central", "Park", "--data", str(station_file), "--legs"]
        )

        assert result.exit_code == 0
        assert "Leg Details" in result.output
        assert "Market" in result.output

    def test_route_heap_strategy(self, station_file):
        """Test the heap strategy gives the same answer."""
        result = self.runner.invoke(
            cli,
            [
                "route",
                "Lighthouse",
                "University",
                "--data",
                str(station_file),
                "--strategy",
                "heap",
                "--format",
                "json",
            ],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        # Lighthouse-Harbour-Central = 10, then 12 more to University
        assert data["total_minutes"] == 22
        assert data["strategy"] == "heap"

    def test_route_prompts_for_missing_names(self, station_file):
        """Test station names are asked for interactively."""
        result = self.runner.invoke(
            cli,
            ["route", "--data", str(station_file)],
            input="Central\nMarket\n",
        )

        assert result.exit_code == 0
        assert "Enter the station you intend to start from" in result.output
        assert "Enter the station you intend to travel to" in result.output
        assert "is 3 minutes." in result.output

    def test_route_unknown_station(self, station_file):
        """Test an unknown station exits with suggestions."""
        result = self.runner.invoke(
            cli, ["route", "Centrl", "Park", "--data", str(station_file)]
        )

        assert result.exit_code == 1
        assert "does not exist" in result.output
        assert "Did you mean: Central" in result.output

    def test_route_unreachable(self, station_file):
        """Test a disconnected station reports no route."""
        result = self.runner.invoke(
            cli, ["route", "Central", "Airport", "--data", str(station_file)]
        )

        assert result.exit_code == 1
        assert "No route found" in result.output

    def test_route_missing_data_file(self, tmp_path):
        """Test a missing station file exits with an error."""
        result = self.runner.invoke(
            cli, ["route", "A", "B", "--data", str(tmp_path / "missing.txt")]
        )

        assert result.exit_code == 1
        assert "Station data file not found" in result.output

    def test_route_malformed_data_file(self, tmp_path):
        """Test a broken station file exits before any search."""
        path = tmp_path / "broken.txt"
        path.write_text("A\n4 Nowhere\n", encoding="utf-8")

        result = self.runner.invoke(cli, ["route", "A", "A", "--data", str(path)])

        assert result.exit_code == 1
        assert "Invalid station file" in result.output

    def test_route_data_path_is_directory(self, tmp_path):
        """Test a directory given as the station file exits with an error."""
        result = self.runner.invoke(cli, ["route", "A", "B", "--data", str(tmp_path)])

        assert result.exit_code == 1
        assert "Invalid station file" in result.output

    def test_route_data_file_from_environment(self, station_file, monkeypatch):
        """Test the station file defaults to TRANSIT_PATH_DATA_FILE."""
        monkeypatch.setenv("TRANSIT_PATH_DATA_FILE", str(station_file))
        get_settings.cache_clear()

        result = self.runner.invoke(cli, ["route", "Museum", "Park", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["total_minutes"] == 2

    @patch("transit_path.cli.main.PathFinder")
    def test_route_unexpected_error(self, mock_finder_class, station_file):
        """Test unexpected errors exit cleanly."""
        mock_finder_class.return_value.shortest_path.side_effect = RuntimeError(
            "boom"
        )

        result = self.runner.invoke(
            cli, ["route", "Central", "Park", "--data", str(station_file)]
        )

        assert result.exit_code == 1
        assert "Unexpected error" in result.output
        assert "boom" in result.output

    @pytest.mark.parametrize("fmt", ["table", "json", "detailed"])
    def test_route_help_lists_formats(self, fmt):
        """Test every output format is advertised."""
        result = self.runner.invoke(cli, ["route", "--help"])
        assert result.exit_code == 0
        assert fmt in result.output

    def test_config_show(self, monkeypatch):
        """Test config show prints the active settings."""
        monkeypatch.setenv("TRANSIT_PATH_STRATEGY", "heap")
        get_settings.cache_clear()

        result = self.runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "Current Configuration" in result.output
        assert "Strategy: heap" in result.output
