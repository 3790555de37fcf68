"""Brave Search client implementation."""

import logging

import httpx

from ._http import request_json, to_result
from .base import SearchProvider, SearchQuery, SearchResults
from .errors import ConfigError

logger = logging.getLogger(__name__)

BRAVE_API_BASE = "https://api.search.brave.com/res/v1"

# The web endpoint refuses counts above 20.
MAX_COUNT = 20


class BraveSearchClient:
    """Brave Search API client."""

    PROVIDER = SearchProvider.BRAVE
    REQUIRES_API_KEY = True

    def __init__(
        self,
        api_key: str,
        timeout: float = 15.0,
        safesearch: str = "moderate",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Brave Search client.

        Args:
            api_key: Brave Search API key
            timeout: Request timeout in seconds
            safesearch: Filter level - "off", "moderate", or "strict"
            transport: Optional httpx transport (used by tests)
        """
        self._api_key = api_key
        self._timeout = timeout
        self._safesearch = safesearch
        self._transport = transport

    async def search(self, query: SearchQuery) -> SearchResults:
        """Perform a Brave web search."""
        if not self._api_key:
            raise ConfigError("Brave Search requires BRAVE_API_KEY to be set")

        params = {
            "q": query.text,
            "count": min(query.max_results, MAX_COUNT),
            "safesearch": self._safesearch,
        }

        async with httpx.AsyncClient(
            base_url=BRAVE_API_BASE,
            headers={
                "Accept": "application/json",
                "Accept-Encoding": "gzip",
                "X-Subscription-Token": self._api_key,
            },
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            data = await request_json(client, "GET", "/web/search", "Brave", params=params)

        results = []
        for raw in data.get("web", {}).get("results", []):
            result = to_result(raw.get("title"), raw.get("url"), raw.get("description"))
            if result is not None:
                results.append(result)

        logger.debug(f"Brave search '{query.text}' returned {len(results)} results")
        return SearchResults.build(query, results)
