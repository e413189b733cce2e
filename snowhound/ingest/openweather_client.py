"""OpenWeatherMap 5-day / 3-hour forecast client."""

from snowhound.errors import UpstreamUnavailable
from snowhound.ingest.http_client import expect_object, request_json

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
PROVIDER = "openweathermap"


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 15.0,
        max_retries: int = 1,
        retry_base_delay: float = 1.0,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    async def get_forecast(self, lat: float, lon: float) -> dict:
        """Fetch the gridded forecast in imperial units."""
        if not self.api_key:
            raise UpstreamUnavailable(
                "OpenWeatherMap API key not configured", provider=PROVIDER
            )
        data = await request_json(
            "GET",
            f"{self.base_url}/forecast",
            provider=PROVIDER,
            timeout=self.timeout,
            params={
                "lat": lat,
                "lon": lon,
                "appid": self.api_key,
                "units": "imperial",
            },
            max_retries=self.max_retries,
            retry_base_delay=self.retry_base_delay,
        )
        return expect_object(data, PROVIDER)
