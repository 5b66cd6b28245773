"""Configuration using Pydantic Settings.

Every setting can be overridden through an environment variable with the
``TRANSIT_PATH_`` prefix, for example ``TRANSIT_PATH_DATA_FILE`` or
``TRANSIT_PATH_STRATEGY=heap``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the CLI and MCP server."""

    model_config = SettingsConfigDict(env_prefix="TRANSIT_PATH_")

    data_file: Path = Field(
        Path("data/stations.txt"), description="Station file to load"
    )
    strategy: Literal["frontier", "heap"] = Field(
        "frontier", description="Dijkstra variant"
    )
    output_format: Literal["table", "json", "detailed"] = Field(
        "table", description="Default CLI output format"
    )
    suggestion_limit: int = Field(
        3, ge=0, description="Maximum station name suggestions on a miss"
    )
    suggestion_threshold: int = Field(
        70, ge=0, le=100, description="Minimum fuzzy score for a suggestion"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
