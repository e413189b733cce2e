"""Provider adapters: fetch one upstream forecast and normalize it to a ForecastSeries.

``fetch`` returns an explicit FetchSuccess/FetchFailure value. ``fetch_series``
layers the fallback policy on top so that it always yields a series: a mock
series when mock mode is forced, the provider has no key, or the fetch failed.
"""

import logging
import random
from dataclasses import dataclass

from snowhound.config.schema import AppConfig
from snowhound.errors import RateLimited, UpstreamUnavailable
from snowhound.ingest.mock_generator import generate_mock_series
from snowhound.ingest.nws_client import NwsClient
from snowhound.ingest.openweather_client import OpenWeatherClient
from snowhound.ingest.parsers import (
    NwsPayload,
    OpenWeatherPayload,
    Payload,
    WeatherApiPayload,
    parse_records,
)
from snowhound.ingest.weatherapi_client import WeatherApiClient
from snowhound.models.common import ProviderId, utc_now_iso
from snowhound.models.forecast import ForecastSeries
from snowhound.models.location import Location

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchSuccess:
    series: ForecastSeries


@dataclass(frozen=True)
class FetchFailure:
    provider: ProviderId
    error: Exception


FetchResult = FetchSuccess | FetchFailure


class ProviderAdapter:
    """Base adapter. Subclasses supply the raw fetch and the payload variant."""

    provider_id: ProviderId
    display_name: str
    mock_name: str

    def __init__(self, config: AppConfig, rng: random.Random | None = None):
        self.config = config
        self.rng = rng

    @property
    def configured(self) -> bool:
        return True

    async def _fetch_raw(self, location: Location) -> dict:
        raise NotImplementedError

    def _wrap(self, raw: dict) -> Payload:
        raise NotImplementedError

    async def fetch(self, location: Location, model_label: str) -> FetchResult:
        """Call the provider once. Upstream and parse errors become FetchFailure."""
        try:
            raw = await self._fetch_raw(location)
            records = parse_records(self._wrap(raw), model_label)
        except (UpstreamUnavailable, RateLimited) as e:
            return FetchFailure(self.provider_id, e)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            return FetchFailure(
                self.provider_id,
                UpstreamUnavailable(
                    f"{self.display_name} response could not be parsed: {e!r}",
                    provider=self.provider_id.value,
                ),
            )
        return FetchSuccess(
            ForecastSeries(
                location=location,
                model=model_label,
                provider=self.display_name,
                records=tuple(records),
                last_updated=utc_now_iso(),
                is_mock=False,
            )
        )

    async def fetch_series(self, location: Location, model_label: str) -> ForecastSeries:
        """Always returns a series, falling back to mock data."""
        if self.config.features.enable_mock_data:
            return self.mock(location, model_label)
        if not self.configured:
            logger.info("%s not configured, using mock data for %s", self.display_name, model_label)
            return self.mock(location, model_label)

        result = await self.fetch(location, model_label)
        if isinstance(result, FetchSuccess):
            return result.series
        logger.warning(
            "%s fetch failed for %s at %s, using mock data: %s",
            self.display_name, model_label, location.id, result.error,
        )
        return self.mock(location, model_label)

    def mock(self, location: Location, model_label: str) -> ForecastSeries:
        return generate_mock_series(location, model_label, self.mock_name, rng=self.rng)


class OpenWeatherAdapter(ProviderAdapter):
    provider_id = ProviderId.OPENWEATHERMAP
    display_name = "OpenWeatherMap"
    mock_name = "OpenWeatherMap"

    def __init__(
        self,
        config: AppConfig,
        client: OpenWeatherClient | None = None,
        rng: random.Random | None = None,
    ):
        super().__init__(config, rng)
        self.client = client or OpenWeatherClient(
            api_key=config.keys.openweather_api_key,
            timeout=config.http.timeout_seconds,
            max_retries=config.http.max_retries,
            retry_base_delay=config.http.retry_base_delay,
        )

    @property
    def configured(self) -> bool:
        return bool(self.client.api_key)

    async def _fetch_raw(self, location: Location) -> dict:
        return await self.client.get_forecast(location.lat, location.lon)

    def _wrap(self, raw: dict) -> Payload:
        return OpenWeatherPayload(raw)


class WeatherApiAdapter(ProviderAdapter):
    provider_id = ProviderId.WEATHERAPI
    display_name = "WeatherAPI.com"
    mock_name = "WeatherAPI"

    def __init__(
        self,
        config: AppConfig,
        client: WeatherApiClient | None = None,
        rng: random.Random | None = None,
    ):
        super().__init__(config, rng)
        self.client = client or WeatherApiClient(
            api_key=config.keys.weatherapi_key,
            timeout=config.http.timeout_seconds,
            max_retries=config.http.max_retries,
            retry_base_delay=config.http.retry_base_delay,
        )

    @property
    def configured(self) -> bool:
        return bool(self.client.api_key)

    async def _fetch_raw(self, location: Location) -> dict:
        return await self.client.get_forecast(location.lat, location.lon)

    def _wrap(self, raw: dict) -> Payload:
        return WeatherApiPayload(raw)


class NwsAdapter(ProviderAdapter):
    provider_id = ProviderId.NWS
    display_name = "National Weather Service"
    mock_name = "NWS"

    def __init__(
        self,
        config: AppConfig,
        client: NwsClient | None = None,
        rng: random.Random | None = None,
    ):
        super().__init__(config, rng)
        self.client = client or NwsClient(
            user_agent=config.http.user_agent,
            timeout=config.http.timeout_seconds,
            max_retries=config.http.max_retries,
            retry_base_delay=config.http.retry_base_delay,
        )

    async def _fetch_raw(self, location: Location) -> dict:
        return await self.client.get_forecast(location.lat, location.lon)

    def _wrap(self, raw: dict) -> Payload:
        return NwsPayload(raw)


def build_adapters(
    config: AppConfig, rng: random.Random | None = None
) -> dict[ProviderId, ProviderAdapter]:
    return {
        ProviderId.NWS: NwsAdapter(config, rng=rng),
        ProviderId.OPENWEATHERMAP: OpenWeatherAdapter(config, rng=rng),
        ProviderId.WEATHERAPI: WeatherApiAdapter(config, rng=rng),
    }
