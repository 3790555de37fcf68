"""DuckDuckGo search client.

Free search by scraping DuckDuckGo's HTML endpoint. No API key required,
but the page is unversioned and the backend may rate limit or serve a
different layout to clients that don't look like a browser.

Note: for heavy production use configure Tavily or another official API.
"""

import asyncio
import logging
from urllib.parse import quote

import httpx

from ._http import translate_transport_error
from .base import SearchProvider, SearchQuery, SearchResults
from .errors import NetworkError, SearchTimeoutError
from .extraction import BACKEND_DOMAIN, extract_results

logger = logging.getLogger(__name__)

DUCKDUCKGO_HTML_URL = "https://html.duckduckgo.com/html/"

DEFAULT_TIMEOUT = 15.0

# Without these the endpoint may answer with a layout the extractor can't read.
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


def build_search_url(text: str) -> str:
    """Return the HTML endpoint URL with `text` percent-encoded into `q`."""
    return f"{DUCKDUCKGO_HTML_URL}?q={quote(text, safe='')}"


class DuckDuckGoClient:
    """DuckDuckGo search via the HTML results page.

    Each call makes exactly one GET under a hard deadline. When the deadline
    passes the request task is cancelled, which closes the underlying
    connection; the caller gets SearchTimeoutError. Domain filters and
    search depth are not supported by this backend and are ignored.
    """

    PROVIDER = SearchProvider.DUCKDUCKGO
    REQUIRES_API_KEY = False

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize DuckDuckGo client.

        Args:
            timeout: Deadline in seconds for the whole call
            transport: Optional httpx transport (used by tests)
        """
        self._timeout = timeout
        self._transport = transport

    async def search(self, query: SearchQuery) -> SearchResults:
        """Perform a DuckDuckGo web search.

        Raises:
            NetworkError: Transport failure or non-2xx status
            SearchTimeoutError: The deadline passed before the page arrived
        """
        url = build_search_url(query.text)

        try:
            async with asyncio.timeout(self._timeout):
                html = await self._fetch(url)
        except SearchTimeoutError:
            raise
        except TimeoutError as e:
            logger.warning(f"DuckDuckGo search timed out after {self._timeout:g}s")
            raise SearchTimeoutError(
                f"DuckDuckGo search timed out after {self._timeout:g} seconds"
            ) from e

        results = extract_results(html, query.max_results)
        logger.debug(f"DuckDuckGo search '{query.text}' returned {len(results)} results")

        return SearchResults.build(query, results, images=(), exclude_host=BACKEND_DOMAIN)

    async def _fetch(self, url: str) -> str:
        # Client is scoped to the call so cancellation tears the connection down.
        async with httpx.AsyncClient(
            headers=BROWSER_HEADERS,
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(url)
            except httpx.HTTPError as e:
                logger.error(f"DuckDuckGo search request failed: {e}")
                raise translate_transport_error(e, "DuckDuckGo") from e

            if not response.is_success:
                logger.error(f"DuckDuckGo search error: {response.status_code}")
                raise NetworkError(
                    f"DuckDuckGo search error: {response.status_code} {response.reason_phrase}",
                    status_code=response.status_code,
                )
            return response.text
