"""Tests for provider selection in the search registry."""

import logging

import pytest

from conftest import make_settings
from llm_websearch.search.base import SearchClient, SearchProvider, SearchQuery
from llm_websearch.search.brave_client import BraveSearchClient
from llm_websearch.search.duckduckgo_client import DuckDuckGoClient
from llm_websearch.search.errors import ConfigError
from llm_websearch.search.exa_client import ExaSearchClient
from llm_websearch.search.factory import SearchRegistry, get_registry
from llm_websearch.search.firecrawl_client import FirecrawlSearchClient
from llm_websearch.search.searxng_client import SearXNGSearchClient
from llm_websearch.search.tavily_client import TavilyClient
from llm_websearch.utils.config import get_settings

ALL_CREDENTIALS = {
    "TAVILY_API_KEY": "tvly-key",
    "EXA_API_KEY": "exa-key",
    "BRAVE_API_KEY": "brave-key",
    "FIRECRAWL_API_KEY": "fc-key",
    "SEARXNG_API_URL": "http://localhost:8080",
}


class TestDefaultProvider:
    """Auto-selection from configured credentials."""

    def test_no_credentials_selects_duckduckgo(self):
        registry = SearchRegistry(make_settings())

        assert registry.default_provider == SearchProvider.DUCKDUCKGO
        assert isinstance(registry.select(), DuckDuckGoClient)

    def test_first_configured_wins(self):
        registry = SearchRegistry(make_settings(**ALL_CREDENTIALS))
        assert registry.select().PROVIDER == SearchProvider.TAVILY

    def test_third_listed_backend_alone(self):
        registry = SearchRegistry(make_settings(BRAVE_API_KEY="brave-key"))

        client = registry.select()
        assert isinstance(client, BraveSearchClient)
        assert client.PROVIDER == SearchProvider.BRAVE

    @pytest.mark.parametrize("setting,expected", [
        ("TAVILY_API_KEY", SearchProvider.TAVILY),
        ("EXA_API_KEY", SearchProvider.EXA),
        ("BRAVE_API_KEY", SearchProvider.BRAVE),
        ("FIRECRAWL_API_KEY", SearchProvider.FIRECRAWL),
        ("SEARXNG_API_URL", SearchProvider.SEARXNG),
    ])
    def test_each_credential(self, setting, expected):
        registry = SearchRegistry(make_settings(**{setting: ALL_CREDENTIALS[setting]}))
        assert registry.default_provider == expected

    def test_order_among_later_providers(self):
        registry = SearchRegistry(make_settings(FIRECRAWL_API_KEY="fc", EXA_API_KEY="exa"))
        assert registry.default_provider == SearchProvider.EXA

    def test_blank_credential_ignored(self):
        registry = SearchRegistry(make_settings(TAVILY_API_KEY="   "))
        assert registry.default_provider == SearchProvider.DUCKDUCKGO

    def test_default_is_memoized(self):
        settings = make_settings()
        registry = SearchRegistry(settings)
        assert registry.default_provider == SearchProvider.DUCKDUCKGO

        # Credentials are read once; later changes don't move the default.
        settings.BRAVE_API_KEY = "late-key"
        assert registry.default_provider == SearchProvider.DUCKDUCKGO


class TestExplicitAndOverride:
    """Explicit requests and the SEARCH_API override."""

    def test_explicit_beats_configured_credentials(self):
        registry = SearchRegistry(make_settings(TAVILY_API_KEY="tvly-key"))
        assert isinstance(registry.select(SearchProvider.DUCKDUCKGO), DuckDuckGoClient)

    def test_explicit_string_is_case_insensitive(self):
        registry = SearchRegistry(make_settings())
        assert isinstance(registry.select("Exa"), ExaSearchClient)

    def test_explicit_without_credential_still_returned(self):
        """Selection never checks credentials for explicit requests."""
        registry = SearchRegistry(make_settings())
        assert isinstance(registry.select(SearchProvider.FIRECRAWL), FirecrawlSearchClient)

    def test_explicit_beats_override(self):
        registry = SearchRegistry(make_settings(SEARCH_API="brave"))
        assert isinstance(registry.select("searxng"), SearXNGSearchClient)

    def test_override_beats_credentials(self):
        registry = SearchRegistry(make_settings(SEARCH_API="duckduckgo", TAVILY_API_KEY="tvly-key"))
        assert isinstance(registry.select(), DuckDuckGoClient)

    def test_override_evaluated_per_call(self):
        settings = make_settings(TAVILY_API_KEY="tvly-key")
        registry = SearchRegistry(settings)
        assert isinstance(registry.select(), TavilyClient)

        settings.SEARCH_API = "brave"
        assert isinstance(registry.select(), BraveSearchClient)

    def test_unknown_explicit_falls_through(self, caplog):
        registry = SearchRegistry(make_settings(EXA_API_KEY="exa"))

        with caplog.at_level(logging.WARNING):
            client = registry.select("altavista")

        assert isinstance(client, ExaSearchClient)
        assert "Unknown search provider" in caplog.text

    def test_unknown_override_falls_through(self, caplog):
        registry = SearchRegistry(make_settings(SEARCH_API="bing"))

        with caplog.at_level(logging.WARNING):
            client = registry.select()

        assert isinstance(client, DuckDuckGoClient)
        assert "SEARCH_API" in caplog.text

    @pytest.mark.parametrize("provider", list(SearchProvider))
    def test_every_provider_satisfies_client_protocol(self, provider):
        client = SearchRegistry(make_settings()).select(provider)

        assert isinstance(client, SearchClient)
        assert client.PROVIDER == provider


@pytest.mark.asyncio
class TestMisconfiguredExplicitProvider:
    """Missing credentials fail at call time, not at selection time."""

    @pytest.mark.parametrize("provider", [
        SearchProvider.TAVILY,
        SearchProvider.EXA,
        SearchProvider.BRAVE,
        SearchProvider.FIRECRAWL,
        SearchProvider.SEARXNG,
    ])
    async def test_config_error_on_search(self, provider):
        client = SearchRegistry(make_settings()).select(provider)
        with pytest.raises(ConfigError):
            await client.search(SearchQuery("test"))


class TestDescribeSelection:
    """Human-readable selection explanations."""

    def test_fallback_message_lists_credentials(self):
        message = SearchRegistry(make_settings()).describe_selection()
        assert "DuckDuckGo" in message
        assert "TAVILY_API_KEY" in message

    def test_configured_message(self):
        message = SearchRegistry(make_settings(BRAVE_API_KEY="k")).describe_selection()
        assert message == "Using brave (BRAVE_API_KEY is configured)."

    def test_explicit_missing_credential_warns(self):
        message = SearchRegistry(make_settings()).describe_selection("exa")
        assert "requested explicitly" in message
        assert "EXA_API_KEY is not set" in message

    def test_override_message(self):
        message = SearchRegistry(make_settings(SEARCH_API="duckduckgo")).describe_selection()
        assert message == "Using duckduckgo (forced by SEARCH_API)."


class TestProcessRegistry:
    """The process-wide registry reads the environment once."""

    def test_registry_from_environment(self, monkeypatch):
        monkeypatch.setenv("EXA_API_KEY", "exa-from-env")
        get_settings.cache_clear()
        get_registry.cache_clear()
        try:
            registry = get_registry()
            assert registry.default_provider == SearchProvider.EXA
            assert get_registry() is registry
        finally:
            get_settings.cache_clear()
            get_registry.cache_clear()
