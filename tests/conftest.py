"""Shared fixtures for search tests."""

from pathlib import Path

import pytest

from llm_websearch.utils.config import SearchSettings

FIXTURES = Path(__file__).parent / "fixtures"

SEARCH_ENV_VARS = (
    "SEARCH_API",
    "TAVILY_API_KEY",
    "EXA_API_KEY",
    "BRAVE_API_KEY",
    "FIRECRAWL_API_KEY",
    "SEARXNG_API_URL",
    "SEARCH_TIMEOUT",
    "SEARCH_MAX_RESULTS",
)


@pytest.fixture(autouse=True)
def clean_search_env(monkeypatch):
    """Keep credentials from the developer's shell out of the tests."""
    for name in SEARCH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def make_settings(**values) -> SearchSettings:
    """Settings built only from the given values (no .env file)."""
    return SearchSettings(_env_file=None, **values)
