"""Search client abstraction for web search capabilities.

Provides a pluggable search client system supporting multiple providers:
- Tavily (production-ready, LLM-optimized)
- Exa (neural search with highlights)
- Brave (privacy-focused, API key required)
- Firecrawl (search API)
- SearXNG (self-hosted metasearch)
- DuckDuckGo (free HTML scraping fallback, no API key required)

Exactly one provider answers each call; see SearchRegistry for selection.
"""

from .base import (
    SearchClient,
    SearchDepth,
    SearchProvider,
    SearchQuery,
    SearchResult,
    SearchResults,
    format_results_for_llm,
)
from .errors import AuthError, ConfigError, NetworkError, RateLimitError, SearchError, SearchTimeoutError
from .extraction import extract_results
from .factory import SearchRegistry, get_registry, get_search_client
from .service import search

__all__ = [
    "SearchClient",
    "SearchDepth",
    "SearchProvider",
    "SearchQuery",
    "SearchResult",
    "SearchResults",
    "format_results_for_llm",
    "SearchError",
    "ConfigError",
    "AuthError",
    "NetworkError",
    "RateLimitError",
    "SearchTimeoutError",
    "extract_results",
    "SearchRegistry",
    "get_registry",
    "get_search_client",
    "search",
]
