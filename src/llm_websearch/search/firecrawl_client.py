"""Firecrawl search client."""

import logging

import httpx

from ._http import request_json, to_result
from .base import SearchProvider, SearchQuery, SearchResults
from .errors import ConfigError, NetworkError

logger = logging.getLogger(__name__)

FIRECRAWL_SEARCH_URL = "https://api.firecrawl.dev/v1/search"


class FirecrawlSearchClient:
    """Firecrawl search API client. Configure via FIRECRAWL_API_KEY."""

    PROVIDER = SearchProvider.FIRECRAWL
    REQUIRES_API_KEY = True

    def __init__(
        self,
        api_key: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def search(self, query: SearchQuery) -> SearchResults:
        """Perform a Firecrawl web search."""
        if not self._api_key:
            raise ConfigError("Firecrawl requires FIRECRAWL_API_KEY to be set")

        async with httpx.AsyncClient(
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            data = await request_json(
                client,
                "POST",
                FIRECRAWL_SEARCH_URL,
                "Firecrawl",
                json={"query": query.text, "limit": query.max_results},
            )

        if data.get("success") is False:
            raise NetworkError(f"Firecrawl search failed: {data.get('error', 'unknown error')}")

        results = []
        for raw in data.get("data", []):
            content = raw.get("description") or raw.get("markdown", "")
            result = to_result(raw.get("title"), raw.get("url"), content)
            if result is not None:
                results.append(result)

        logger.debug(f"Firecrawl search '{query.text}' returned {len(results)} results")
        return SearchResults.build(query, results)
