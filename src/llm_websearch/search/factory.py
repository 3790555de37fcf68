"""Factory for creating search clients.

Handles provider selection from explicit requests, the SEARCH_API override
and configured credentials.
"""

import logging
from collections.abc import Callable
from functools import cached_property, lru_cache

import httpx

from ..utils.config import CREDENTIAL_SETTINGS, SearchSettings, get_settings
from .base import SearchClient, SearchProvider
from .brave_client import BraveSearchClient
from .duckduckgo_client import DuckDuckGoClient
from .exa_client import ExaSearchClient
from .firecrawl_client import FirecrawlSearchClient
from .searxng_client import SearXNGSearchClient
from .tavily_client import TavilyClient

logger = logging.getLogger(__name__)

Transport = httpx.AsyncBaseTransport | None

_BUILDERS: dict[SearchProvider, Callable[[SearchSettings, Transport], SearchClient]] = {
    SearchProvider.TAVILY: lambda s, t: TavilyClient(api_key=s.TAVILY_API_KEY),
    SearchProvider.EXA: lambda s, t: ExaSearchClient(api_key=s.EXA_API_KEY, timeout=s.SEARCH_TIMEOUT, transport=t),
    SearchProvider.BRAVE: lambda s, t: BraveSearchClient(api_key=s.BRAVE_API_KEY, timeout=s.SEARCH_TIMEOUT, transport=t),
    SearchProvider.FIRECRAWL: lambda s, t: FirecrawlSearchClient(api_key=s.FIRECRAWL_API_KEY, timeout=s.SEARCH_TIMEOUT, transport=t),
    SearchProvider.SEARXNG: lambda s, t: SearXNGSearchClient(base_url=s.SEARXNG_API_URL, timeout=s.SEARCH_TIMEOUT, transport=t),
    SearchProvider.DUCKDUCKGO: lambda s, t: DuckDuckGoClient(timeout=s.SEARCH_TIMEOUT, transport=t),
}


class SearchRegistry:
    """Chooses which provider answers a search.

    Provider selection priority:
    1. Explicit provider argument
    2. SEARCH_API override setting
    3. First credentialed provider with a credential configured
       (Tavily, Exa, Brave, Firecrawl, SearXNG)
    4. DuckDuckGo (free fallback)

    Availability is judged only by whether a credential is set; nothing is
    probed over the network. Steps 3-4 are computed once per registry.
    """

    def __init__(self, settings: SearchSettings, transport: Transport = None):
        """Initialize the registry.

        Args:
            settings: Resolved search settings
            transport: Optional httpx transport handed to httpx-based clients
        """
        self.settings = settings
        self._transport = transport

    @cached_property
    def default_provider(self) -> SearchProvider:
        """Provider used when nothing is requested explicitly or overridden."""
        for name, setting in CREDENTIAL_SETTINGS.items():
            if self.settings.credential_for(name):
                logger.debug(f"Auto-selected {name} ({setting} configured)")
                return SearchProvider(name)
        logger.debug("Auto-selected DuckDuckGo (free fallback)")
        return SearchProvider.DUCKDUCKGO

    def resolve(self, provider: SearchProvider | str | None = None) -> SearchProvider:
        """Return the provider kind that would answer a call."""
        if provider is not None:
            resolved = SearchProvider.parse(provider)
            if resolved is not None:
                return resolved
            logger.warning(f"Unknown search provider: {provider}")

        override = self.settings.SEARCH_API
        if override:
            resolved = SearchProvider.parse(override)
            if resolved is not None:
                return resolved
            logger.warning(f"Unknown search provider in SEARCH_API: {override}")

        return self.default_provider

    def create(self, provider: SearchProvider) -> SearchClient:
        """Instantiate the client for a provider kind."""
        return _BUILDERS[provider](self.settings, self._transport)

    def select(self, provider: SearchProvider | str | None = None) -> SearchClient:
        """Return a ready client. Never fails; misconfiguration surfaces on search."""
        return self.create(self.resolve(provider))

    def describe_selection(self, provider: SearchProvider | str | None = None) -> str:
        """Return a human-readable reason for the provider that would be used."""
        resolved = self.resolve(provider)

        if provider is not None and SearchProvider.parse(provider) == resolved:
            reason = "requested explicitly"
        elif self.settings.SEARCH_API and SearchProvider.parse(self.settings.SEARCH_API) == resolved:
            reason = "forced by SEARCH_API"
        elif resolved == SearchProvider.DUCKDUCKGO:
            return (
                "Using DuckDuckGo (free fallback). Set TAVILY_API_KEY, EXA_API_KEY, "
                "BRAVE_API_KEY, FIRECRAWL_API_KEY or SEARXNG_API_URL to use a credentialed provider."
            )
        else:
            return f"Using {resolved.value} ({CREDENTIAL_SETTINGS[resolved.value]} is configured)."

        setting = CREDENTIAL_SETTINGS.get(resolved.value)
        if setting and not self.settings.credential_for(resolved):
            return f"Using {resolved.value} ({reason}), but {setting} is not set; searches will fail."
        return f"Using {resolved.value} ({reason})."


@lru_cache(maxsize=1)
def get_registry() -> SearchRegistry:
    """Process-wide registry built from environment settings."""
    return SearchRegistry(get_settings())


def get_search_client(provider: SearchProvider | str | None = None) -> SearchClient:
    """Create a search client using the process-wide registry."""
    return get_registry().select(provider)
