"""Station file loading and station name search."""

from .searcher import StationSearcher
from .station_file import StationFileLoader, load_graph, summarize

__all__ = ["StationFileLoader", "StationSearcher", "load_graph", "summarize"]
