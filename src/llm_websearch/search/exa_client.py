"""Exa search client.

Neural search API; returns highlights extracted from each page, which make
better snippets than the page description.
"""

import logging
from typing import Any

import httpx

from ._http import request_json, to_result
from .base import SearchDepth, SearchProvider, SearchQuery, SearchResults
from .errors import ConfigError

logger = logging.getLogger(__name__)

EXA_SEARCH_URL = "https://api.exa.ai/search"


class ExaSearchClient:
    """Exa search API client. Configure via EXA_API_KEY."""

    PROVIDER = SearchProvider.EXA
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
        """Perform an Exa search with highlights."""
        if not self._api_key:
            raise ConfigError("Exa requires EXA_API_KEY to be set")

        payload: dict[str, Any] = {
            "query": query.text,
            "numResults": query.max_results,
            # "neural" is the slower, more thorough mode
            "type": "neural" if query.search_depth == SearchDepth.ADVANCED else "auto",
            "contents": {"highlights": True},
        }
        if query.include_domains:
            payload["includeDomains"] = sorted(query.include_domains)
        if query.exclude_domains:
            payload["excludeDomains"] = sorted(query.exclude_domains)

        async with httpx.AsyncClient(
            headers={"x-api-key": self._api_key, "Accept": "application/json"},
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            data = await request_json(client, "POST", EXA_SEARCH_URL, "Exa", json=payload)

        results = []
        for raw in data.get("results", []):
            highlights = raw.get("highlights") or []
            content = " ".join(highlights) if highlights else raw.get("text", "")
            result = to_result(raw.get("title"), raw.get("url"), content)
            if result is not None:
                results.append(result)

        logger.debug(f"Exa search '{query.text}' returned {len(results)} results")
        return SearchResults.build(query, results)
