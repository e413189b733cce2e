"""WeatherAPI.com multi-day forecast client."""

from snowhound.errors import UpstreamUnavailable
from snowhound.ingest.http_client import expect_object, request_json

WEATHERAPI_BASE_URL = "https://api.weatherapi.com/v1"
PROVIDER = "weatherapi"
FORECAST_DAYS = 7


class WeatherApiClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = WEATHERAPI_BASE_URL,
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
        if not self.api_key:
            raise UpstreamUnavailable("WeatherAPI key not configured", provider=PROVIDER)
        data = await request_json(
            "GET",
            f"{self.base_url}/forecast.json",
            provider=PROVIDER,
            timeout=self.timeout,
            params={"key": self.api_key, "q": f"{lat},{lon}", "days": FORECAST_DAYS},
            max_retries=self.max_retries,
            retry_base_delay=self.retry_base_delay,
        )
        return expect_object(data, PROVIDER)
