"""Tavily search client.

Production-ready search API designed specifically for LLM agents.
Provides relevance-ordered results plus related images.

Requires API key: https://tavily.com/
Free tier: 1,000 searches/month
"""

import logging
from typing import Any

import httpx
from tavily import AsyncTavilyClient
from tavily.errors import ForbiddenError, InvalidAPIKeyError, UsageLimitExceededError
from tavily.errors import TimeoutError as TavilyTimeoutError

from ._http import sanitize_url, to_result, translate_transport_error
from .base import SearchProvider, SearchQuery, SearchResults
from .errors import AuthError, ConfigError, NetworkError, RateLimitError, SearchTimeoutError

logger = logging.getLogger(__name__)

# Tavily rejects very short queries and bills a minimum of 5 results anyway.
MIN_QUERY_LENGTH = 5
MIN_MAX_RESULTS = 5


class TavilyClient:
    """Tavily search client - optimized for LLM agents.

    Configure via TAVILY_API_KEY.
    """

    PROVIDER = SearchProvider.TAVILY
    REQUIRES_API_KEY = True

    def __init__(self, api_key: str):
        """Initialize Tavily client.

        Args:
            api_key: Tavily API key (checked at call time, not here)
        """
        self._api_key = api_key
        self._client: AsyncTavilyClient | None = None

    def _get_client(self) -> AsyncTavilyClient:
        """Lazy-initialize the Tavily client."""
        if self._client is None:
            self._client = AsyncTavilyClient(api_key=self._api_key)
        return self._client

    async def search(self, query: SearchQuery) -> SearchResults:
        """Perform a Tavily web search.

        Raises:
            ConfigError: TAVILY_API_KEY is not set
            AuthError: The key was rejected
            RateLimitError: Usage limit reached
            NetworkError, SearchTimeoutError: Transport failures
        """
        if not self._api_key:
            raise ConfigError("Tavily requires TAVILY_API_KEY to be set")

        text = query.text.ljust(MIN_QUERY_LENGTH)

        try:
            response = await self._get_client().search(
                query=text,
                search_depth=query.search_depth.value,
                max_results=max(query.max_results, MIN_MAX_RESULTS),
                include_domains=sorted(query.include_domains) or None,
                exclude_domains=sorted(query.exclude_domains) or None,
                include_images=True,
                include_image_descriptions=True,
            )
        except (InvalidAPIKeyError, ForbiddenError) as e:
            logger.error("Tavily API key is invalid")
            raise AuthError(f"Tavily authentication failed: {e}") from e
        except UsageLimitExceededError as e:
            logger.warning("Tavily usage limit exceeded")
            raise RateLimitError(f"Tavily usage limit exceeded: {e}") from e
        except httpx.HTTPError as e:
            raise translate_transport_error(e, "Tavily") from e
        except (TavilyTimeoutError, TimeoutError) as e:
            raise SearchTimeoutError(f"Tavily search timed out: {e}") from e
        except Exception as e:
            logger.error(f"Tavily search failed: {e}")
            raise NetworkError(f"Tavily search failed: {e}") from e

        results = []
        for raw in response.get("results", []):
            result = to_result(raw.get("title"), raw.get("url"), raw.get("content"))
            if result is not None:
                results.append(result)

        images = [url for url in (_image_url(img) for img in response.get("images", [])) if url]

        logger.debug(f"Tavily search '{query.text}' returned {len(results)} results")
        return SearchResults.build(query, results, images=images)


def _image_url(image: Any) -> str:
    # Plain URLs, or {"url", "description"} when descriptions are requested.
    if isinstance(image, dict):
        return sanitize_url(image.get("url"))
    return sanitize_url(image)
