"""National Weather Service client: points lookup followed by zone forecast."""

import logging

from snowhound.config.schema import DEFAULT_USER_AGENT
from snowhound.errors import UpstreamUnavailable
from snowhound.ingest.http_client import expect_object, request_json

logger = logging.getLogger(__name__)

NWS_BASE_URL = "https://api.weather.gov"
PROVIDER = "nws"


class NwsClient:
    def __init__(
        self,
        base_url: str = NWS_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 15.0,
        max_retries: int = 1,
        retry_base_delay: float = 1.0,
    ):
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/geo+json"}

    async def _get(self, url: str) -> dict:
        data = await request_json(
            "GET",
            url,
            provider=PROVIDER,
            timeout=self.timeout,
            headers=self._headers(),
            max_retries=self.max_retries,
            retry_base_delay=self.retry_base_delay,
        )
        return expect_object(data, PROVIDER)

    async def get_forecast_url(self, lat: float, lon: float) -> str:
        """Resolve a coordinate to its forecast-zone URL via /points."""
        points = await self._get(f"{self.base_url}/points/{lat},{lon}")
        properties = points.get("properties")
        url = properties.get("forecast") if isinstance(properties, dict) else None
        if not url or not isinstance(url, str):
            raise UpstreamUnavailable(
                f"NWS points lookup for {lat},{lon} has no forecast URL",
                provider=PROVIDER,
            )
        return url

    async def get_forecast(self, lat: float, lon: float) -> dict:
        """Fetch the period forecast for the zone covering lat/lon."""
        forecast_url = await self.get_forecast_url(lat, lon)
        logger.debug("NWS forecast URL for %s,%s: %s", lat, lon, forecast_url)
        return await self._get(forecast_url)
