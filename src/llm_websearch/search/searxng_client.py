"""SearXNG search client.

Talks to a self-hosted SearXNG instance. The instance must have the JSON
output format enabled (`search.formats: [html, json]` in settings.yml).
"""

import logging

import httpx

from ._http import request_json, sanitize_url, to_result
from .base import SearchDepth, SearchProvider, SearchQuery, SearchResults
from .errors import ConfigError

logger = logging.getLogger(__name__)


def build_query_text(query: SearchQuery) -> str:
    """Express domain filters as site: operators, which SearXNG passes through."""
    terms = [query.text]
    terms.extend(f"site:{d}" for d in sorted(query.include_domains))
    terms.extend(f"-site:{d}" for d in sorted(query.exclude_domains))
    return " ".join(terms)


class SearXNGSearchClient:
    """SearXNG JSON API client. Configure via SEARXNG_API_URL."""

    PROVIDER = SearchProvider.SEARXNG
    REQUIRES_API_KEY = True

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def search(self, query: SearchQuery) -> SearchResults:
        """Search general and image categories in one request."""
        if not self._base_url:
            raise ConfigError("SearXNG requires SEARXNG_API_URL to be set")

        params = {
            "q": build_query_text(query),
            "format": "json",
            "categories": "general,images",
        }
        if query.search_depth == SearchDepth.ADVANCED:
            params["safesearch"] = "0"

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            data = await request_json(client, "GET", f"{self._base_url}/search", "SearXNG", params=params)

        results = []
        images = []
        for raw in data.get("results", []):
            if raw.get("category") == "images":
                image = sanitize_url(raw.get("img_src"))
                if image:
                    images.append(image)
                continue
            result = to_result(raw.get("title"), raw.get("url"), raw.get("content"))
            if result is not None:
                results.append(result)

        logger.debug(f"SearXNG search '{query.text}' returned {len(results)} results, {len(images)} images")
        return SearchResults.build(query, results, images=images)
