"""Base search types and the client interface.

Defines the result model shared by every provider and the SearchClient
protocol that all providers satisfy.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


class SearchProvider(str, Enum):
    """Available search providers."""
    TAVILY = "tavily"
    EXA = "exa"
    BRAVE = "brave"
    FIRECRAWL = "firecrawl"
    SEARXNG = "searxng"
    DUCKDUCKGO = "duckduckgo"

    @classmethod
    def parse(cls, value: "SearchProvider | str | None") -> "SearchProvider | None":
        """Resolve a provider from an enum member or a case-insensitive name.

        Returns None for empty or unknown names.
        """
        if value is None or isinstance(value, SearchProvider):
            return value
        name = value.strip().lower()
        if not name:
            return None
        try:
            return cls(name)
        except ValueError:
            return None


class SearchDepth(str, Enum):
    """How hard a provider should look (only some backends honour it)."""
    BASIC = "basic"
    ADVANCED = "advanced"


def is_absolute_url(url: str) -> bool:
    """True for http(s) URLs carrying a host."""
    if not url:
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def host_matches(url: str, domain: str) -> bool:
    """True if the URL's host is `domain` or one of its subdomains."""
    try:
        host = (urlsplit(url).hostname or "").lower()
    except ValueError:
        return False
    domain = domain.lower()
    return host == domain or host.endswith("." + domain)


@dataclass(frozen=True)
class SearchQuery:
    """A search request.

    Attributes:
        text: The query as submitted (never normalized)
        max_results: Upper bound on returned results
        search_depth: Basic or advanced search, for backends that support it
        include_domains: Hostnames to restrict results to (advisory)
        exclude_domains: Hostnames to drop from results (advisory)
    """
    text: str
    max_results: int = 10
    search_depth: SearchDepth = SearchDepth.BASIC
    include_domains: frozenset[str] = field(default_factory=frozenset)
    exclude_domains: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValueError("Search query text must be a non-empty string")
        if isinstance(self.max_results, bool) or not isinstance(self.max_results, int) or self.max_results < 1:
            raise ValueError(f"max_results must be a positive integer, got {self.max_results!r}")
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "search_depth", SearchDepth(self.search_depth))
        object.__setattr__(self, "include_domains", _domain_set(self.include_domains))
        object.__setattr__(self, "exclude_domains", _domain_set(self.exclude_domains))


def _domain_set(domains: Iterable[str] | None) -> frozenset[str]:
    if not domains:
        return frozenset()
    if isinstance(domains, str):
        domains = [domains]
    return frozenset(d.strip().lower() for d in domains if d and d.strip())


@dataclass(frozen=True)
class SearchResult:
    """A single search result.

    Attributes:
        title: Page title (may be empty when only the URL could be recovered)
        url: Absolute URL to the page
        content: Text snippet/description from the result
    """
    title: str
    url: str
    content: str = ""

    def __post_init__(self):
        if not is_absolute_url(self.url):
            raise ValueError(f"Search result URL must be absolute, got {self.url!r}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"title": self.title, "url": self.url, "content": self.content}


@dataclass(frozen=True)
class SearchResults:
    """The normalized answer to one search call."""
    query: str
    results: tuple[SearchResult, ...] = ()
    images: tuple[str, ...] = ()

    @property
    def number_of_results(self) -> int:
        return len(self.results)

    @classmethod
    def build(
        cls,
        query: SearchQuery,
        results: Iterable[SearchResult],
        images: Iterable[str] = (),
        exclude_host: str | None = None,
    ) -> "SearchResults":
        """Assemble results for `query`, enforcing the output invariants.

        Drops results that point back at `exclude_host` (the backend's own
        domain), keeps backend order and truncates to `query.max_results`.
        """
        kept: list[SearchResult] = []
        for result in results:
            if len(kept) >= query.max_results:
                break
            if exclude_host and host_matches(result.url, exclude_host):
                logger.debug(f"Dropping self-referencing result: {result.url}")
                continue
            kept.append(result)
        return cls(
            query=query.text,
            results=tuple(kept),
            images=tuple(url for url in images if is_absolute_url(url)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "results": [r.to_dict() for r in self.results],
            "images": list(self.images),
            "number_of_results": self.number_of_results,
        }


@runtime_checkable
class SearchClient(Protocol):
    """Capability shared by every search backend.

    Implementations expose their PROVIDER id and a coroutine that answers
    one query. Failures surface as SearchError subclasses.
    """

    PROVIDER: SearchProvider

    async def search(self, query: SearchQuery) -> SearchResults: ...


def format_results_for_llm(results: SearchResults | Sequence[SearchResult]) -> str:
    """Format search results for injection into LLM context.

    Args:
        results: A SearchResults or a plain sequence of results

    Returns:
        Formatted string suitable for tool result injection
    """
    items = results.results if isinstance(results, SearchResults) else tuple(results)
    if not items:
        return "No results found for your search query."

    lines = [f"Found {len(items)} results:\n"]
    for i, result in enumerate(items, 1):
        lines.append(f"{i}. **{result.title or result.url}**")
        if result.content:
            lines.append(f"   {result.content}")
        lines.append(f"   Source: {result.url}")
        lines.append("")  # Blank line between results

    return "\n".join(lines)
