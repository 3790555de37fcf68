"""HTTP helpers shared by the REST-backed search clients."""

import logging
from typing import Any

import httpx

from .base import SearchResult, is_absolute_url
from .errors import AuthError, ConfigError, NetworkError, RateLimitError, SearchTimeoutError

logger = logging.getLogger(__name__)


def raise_for_status(response: httpx.Response, provider: str) -> None:
    """Translate a non-success response into the shared error types."""
    if response.is_success:
        return

    status = response.status_code
    if status in (401, 403):
        logger.error(f"{provider} rejected the API key ({status})")
        raise AuthError(f"{provider} authentication failed: {status}", status_code=status)
    if status == 429:
        logger.warning(f"{provider} rate limit exceeded")
        raise RateLimitError(f"{provider} rate limit exceeded")
    logger.error(f"{provider} search HTTP error: {status} {response.reason_phrase}")
    raise NetworkError(
        f"{provider} search error: {status} {response.reason_phrase}",
        status_code=status,
    )


def translate_transport_error(exc: httpx.HTTPError, provider: str) -> Exception:
    """Map an httpx transport exception onto the shared error types."""
    if isinstance(exc, httpx.TimeoutException):
        return SearchTimeoutError(f"{provider} search timed out: {exc}")
    return NetworkError(f"{provider} search request failed: {exc}")


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    provider: str,
    **kwargs: Any,
) -> dict[str, Any]:
    """Send a request and return its decoded JSON object.

    Raises:
        ConfigError: The configured endpoint is not a valid URL
        AuthError, RateLimitError, NetworkError, SearchTimeoutError
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.InvalidURL as e:
        raise ConfigError(f"{provider} endpoint is not a valid URL: {e}") from e
    except httpx.HTTPError as e:
        raise translate_transport_error(e, provider) from e

    raise_for_status(response, provider)
    try:
        data = response.json()
    except ValueError as e:
        raise NetworkError(f"{provider} returned a non-JSON response", status_code=response.status_code) from e

    if not isinstance(data, dict):
        raise NetworkError(
            f"{provider} returned an unexpected payload: {type(data).__name__}",
            status_code=response.status_code,
        )
    return data


def to_result(title: Any, url: Any, content: Any) -> SearchResult | None:
    """Build a SearchResult from loosely-typed API fields, or None if the URL is unusable."""
    url = sanitize_url(url)
    if not url:
        return None
    return SearchResult(
        title=" ".join(str(title or "").split()),
        url=url,
        content=" ".join(str(content or "").split()),
    )


def sanitize_url(url: Any) -> str:
    """Return `url` with spaces encoded if it's an absolute URL, else ''."""
    if not isinstance(url, str):
        return ""
    url = url.strip().replace(" ", "%20")
    return url if is_absolute_url(url) else ""
