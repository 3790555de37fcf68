"""Error types raised by search clients.

Every provider translates its own failure shapes into these so callers can
decide what to do (retry with another provider, surface a config problem)
without knowing which backend answered.
"""


class SearchError(Exception):
    """Base class for all search failures."""


class ConfigError(SearchError):
    """A provider was requested but its credential is not configured."""


class AuthError(SearchError):
    """The backend rejected the configured credential (HTTP 401/403)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(SearchError):
    """Transport failure or a non-success HTTP status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(NetworkError):
    """The backend answered 429 / usage limit exceeded."""

    def __init__(self, message: str, status_code: int | None = 429):
        super().__init__(message, status_code=status_code)


class SearchTimeoutError(SearchError, TimeoutError):
    """The call exceeded its deadline.

    Kept apart from NetworkError: a slow backend is worth retrying
    elsewhere, a dead one usually isn't.
    """
