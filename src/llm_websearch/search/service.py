"""Entry point for running a search through the selected provider."""

import logging
from collections.abc import Iterable

from .base import SearchDepth, SearchProvider, SearchQuery, SearchResults
from .factory import SearchRegistry, get_registry

logger = logging.getLogger(__name__)


async def search(
    query: str,
    *,
    max_results: int | None = None,
    search_depth: SearchDepth | str = SearchDepth.BASIC,
    include_domains: Iterable[str] = (),
    exclude_domains: Iterable[str] = (),
    provider: SearchProvider | str | None = None,
    registry: SearchRegistry | None = None,
) -> SearchResults:
    """Search the web with exactly one provider.

    Args:
        query: Search text, echoed back unchanged in the result
        max_results: Maximum number of results (default: SEARCH_MAX_RESULTS)
        search_depth: 'basic' or 'advanced' (honoured by some providers)
        include_domains: Restrict results to these hosts (advisory)
        exclude_domains: Drop results from these hosts (advisory)
        provider: Force a provider instead of the configured default
        registry: Registry to select from (default: process-wide registry)

    Returns:
        SearchResults from whichever provider was selected

    Raises:
        ValueError: Invalid query
        ConfigError, AuthError, NetworkError, SearchTimeoutError: Provider
            failures, unchanged. No other provider is tried.
    """
    registry = registry or get_registry()
    if max_results is None:
        max_results = registry.settings.SEARCH_MAX_RESULTS

    search_query = SearchQuery(
        text=query,
        max_results=max_results,
        search_depth=SearchDepth(search_depth),
        include_domains=include_domains,
        exclude_domains=exclude_domains,
    )

    client = registry.select(provider)
    logger.debug(f"Searching '{query}' with {client.PROVIDER.value} (max_results={max_results})")

    results = await client.search(search_query)
    logger.info(f"Search via {client.PROVIDER.value} returned {results.number_of_results} results")
    return results
