"""Error taxonomy shared by the ingest, storage and server layers."""


class SnowHoundError(Exception):
    """Base class for all SnowHound errors."""


class ValidationError(SnowHoundError, ValueError):
    """Input rejected before any network call (coordinates, queries, model ids)."""


class UpstreamUnavailable(SnowHoundError):
    """A weather or geocoding provider could not be used.

    Covers transport errors, timeouts, non-2xx responses and missing API keys.
    """

    def __init__(self, message: str, provider: str = "", status_code: int | None = None):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class RateLimited(SnowHoundError):
    """Too many requests; the caller should wait ``retry_after`` seconds."""

    def __init__(self, message: str = "Too many requests", retry_after: float | None = None):
        super().__init__(message)
        self.retry_after = retry_after


class BackendError(SnowHoundError):
    """The caching backend proxy failed to answer a forecast request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class CacheUnavailable(SnowHoundError):
    """The forecast cache store could not be read or written."""
