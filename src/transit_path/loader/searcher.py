"""Station name search with fuzzy matching."""

import logging

from fuzzywuzzy import fuzz, process  # type: ignore[import-untyped]

from ..core.graph import Graph

logger = logging.getLogger(__name__)


class StationSearcher:
    """Search engine over the station names of a network."""

    def __init__(self, graph: Graph):
        """Initialize searcher with a loaded network.

        Args:
            graph: Network whose station names are searched
        """
        self.graph = graph
        self._build_search_index()

    def _build_search_index(self) -> None:
        """Build a lowercase name index for case-insensitive lookups."""
        self.names = self.graph.names
        self.lower_index: dict[str, list[str]] = {}
        for name in self.names:
            self.lower_index.setdefault(name.casefold(), []).append(name)

    def search_by_name(self, query: str, exact: bool = False) -> list[str]:
        """Search station names.

        Args:
            query: Text to look for
            exact: Only return names equal to ``query`` ignoring case

        Returns:
            Matching station names in network order
        """
        key = query.strip().casefold()
        if not key:
            return []
        if exact:
            return list(self.lower_index.get(key, []))
        return [name for name in self.names if key in name.casefold()]

    def fuzzy_search(
        self, query: str, limit: int = 10, threshold: int = 70
    ) -> list[tuple[str, int]]:
        """Return ``(name, score)`` pairs scoring at least ``threshold``."""
        if not query.strip() or not self.names or limit <= 0:
            return []

        matches = process.extract(
            query, self.names, scorer=fuzz.WRatio, limit=limit
        )
        results = [(name, score) for name, score in matches if score >= threshold]
        logger.debug(f"Fuzzy search for {query!r} returned {len(results)} matches")
        return results

    def search_stations(
        self, query: str, limit: int = 10, fuzzy_threshold: int = 70
    ) -> list[str]:
        """Substring matches first, then fuzzy matches, without duplicates."""
        results = self.search_by_name(query)
        for name, _score in self.fuzzy_search(
            query, limit=limit, threshold=fuzzy_threshold
        ):
            if name not in results:
                results.append(name)
        return results[:limit]

    def suggest(self, query: str, limit: int = 3, threshold: int = 70) -> list[str]:
        """Suggest likely station names for a name that was not found."""
        exact = self.search_by_name(query, exact=True)
        if exact:
            return exact[:limit]
        return [
            name for name, _score in self.fuzzy_search(query, limit, threshold)
        ]
