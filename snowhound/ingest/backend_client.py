"""Client for the SnowHound caching backend (forecast proxy and geocoding)."""

import logging

from snowhound.config.schema import AppConfig
from snowhound.errors import BackendError, UpstreamUnavailable
from snowhound.ingest.http_client import request_json
from snowhound.ingest.parsers import detect_payload, parse_records
from snowhound.ingest.routing import PROVIDER_DISPLAY_NAMES
from snowhound.models.common import ProviderId, utc_now_iso
from snowhound.models.forecast import ForecastSeries
from snowhound.models.location import Location

logger = logging.getLogger(__name__)

PROVIDER = "backend"


class BackendClient:
    def __init__(self, base_url: str, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: AppConfig) -> "BackendClient":
        return cls(config.backend.api_base_url, config.backend.api_timeout_seconds)

    async def get_forecast(
        self, location: Location, model_name: str, provider: ProviderId
    ) -> ForecastSeries:
        """Fetch one model through the backend and normalize its payload.

        Raises RateLimited when the backend throttles us and BackendError for
        anything else.
        """
        try:
            data = await request_json(
                "POST",
                f"{self.base_url}/api/weather/forecast",
                provider=PROVIDER,
                timeout=self.timeout,
                json={
                    "location": {"lat": location.lat, "lon": location.lon},
                    "model": model_name,
                    "provider": provider.value,
                },
                headers={"Content-Type": "application/json"},
            )
        except UpstreamUnavailable as e:
            raise BackendError(f"Backend forecast request failed: {e}", e.status_code) from e

        if not isinstance(data, dict):
            raise BackendError("Backend returned a non-object forecast payload")
        cached = data.pop("cached", None)
        logger.debug("Backend forecast %s/%s cached=%s", model_name, provider, cached)

        try:
            records = parse_records(detect_payload(data), model_name)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise BackendError(f"Backend payload for {model_name} could not be parsed: {e!r}") from e

        return ForecastSeries(
            location=location,
            model=model_name,
            provider=PROVIDER_DISPLAY_NAMES[provider],
            records=tuple(records),
            last_updated=utc_now_iso(),
            is_mock=False,
        )

    async def geocode(self, query: str) -> list[dict]:
        """Raw geocoding results via the backend.

        An unavailable backend yields []; RateLimited propagates.
        """
        try:
            data = await request_json(
                "GET",
                f"{self.base_url}/api/weather/geocode",
                provider=PROVIDER,
                timeout=self.timeout,
                params={"q": query},
            )
        except UpstreamUnavailable as e:
            logger.warning("Backend geocoding failed for %r: %s", query, e)
            return []
        return data if isinstance(data, list) else []
