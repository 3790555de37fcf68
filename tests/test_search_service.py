"""End-to-end tests for the search entry point."""

import httpx
import pytest

from conftest import load_fixture, make_settings
from llm_websearch.search import SearchRegistry, search
from llm_websearch.search.errors import ConfigError, NetworkError


def _ddg_transport(hosts: list[str]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        hosts.append(request.url.host)
        return httpx.Response(200, text=load_fixture("ddg_rust_ownership.html"))

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
class TestSearch:
    """search() with a registry built from explicit settings."""

    async def test_fallback_path_without_credentials(self):
        hosts: list[str] = []
        registry = SearchRegistry(make_settings(), transport=_ddg_transport(hosts))

        results = await search("rust ownership", max_results=3, registry=registry)

        assert hosts == ["html.duckduckgo.com"]
        assert results.query == "rust ownership"
        assert 0 < len(results.results) <= 3
        assert results.number_of_results == len(results.results)
        assert results.images == ()
        for result in results.results:
            assert result.title
            assert result.url.startswith("https://")

    async def test_default_result_count_from_settings(self):
        hosts: list[str] = []
        registry = SearchRegistry(make_settings(SEARCH_MAX_RESULTS=2), transport=_ddg_transport(hosts))

        results = await search("rust ownership", registry=registry)
        assert results.number_of_results == 2

    async def test_explicit_provider_overrides_credentials(self):
        hosts: list[str] = []
        registry = SearchRegistry(make_settings(BRAVE_API_KEY="k"), transport=_ddg_transport(hosts))

        await search("rust ownership", provider="duckduckgo", registry=registry)
        assert hosts == ["html.duckduckgo.com"]

    async def test_credentialed_provider_selected(self):
        hosts: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            hosts.append(request.url.host)
            return httpx.Response(200, json={"web": {"results": [
                {"title": "Brave hit", "url": "https://example.com/b", "description": "d"},
            ]}})

        registry = SearchRegistry(make_settings(BRAVE_API_KEY="k"), transport=httpx.MockTransport(handler))
        results = await search("rust", registry=registry)

        assert hosts == ["api.search.brave.com"]
        assert results.results[0].title == "Brave hit"

    async def test_failure_is_not_retried_elsewhere(self):
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.host)
            return httpx.Response(502)

        registry = SearchRegistry(make_settings(EXA_API_KEY="k"), transport=httpx.MockTransport(handler))
        with pytest.raises(NetworkError):
            await search("rust", registry=registry)
        assert calls == ["api.exa.ai"]

    async def test_explicit_provider_without_credential(self):
        registry = SearchRegistry(make_settings())
        with pytest.raises(ConfigError):
            await search("rust", provider="firecrawl", registry=registry)

    async def test_invalid_query(self):
        registry = SearchRegistry(make_settings())
        with pytest.raises(ValueError):
            await search("   ", registry=registry)
