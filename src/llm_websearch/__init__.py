"""Provider-agnostic web search for LLM tools."""

from .search import (
    AuthError,
    ConfigError,
    NetworkError,
    SearchDepth,
    SearchError,
    SearchProvider,
    SearchResult,
    SearchResults,
    SearchTimeoutError,
    search,
)

__version__ = "0.1.0"

__all__ = [
    "AuthError",
    "ConfigError",
    "NetworkError",
    "SearchDepth",
    "SearchError",
    "SearchProvider",
    "SearchResult",
    "SearchResults",
    "SearchTimeoutError",
    "search",
]
