"""Aggregation facade: one ForecastSeries per requested model, in request order."""

import asyncio
import logging
import random

from snowhound.config.schema import AppConfig
from snowhound.errors import BackendError, ValidationError
from snowhound.ingest.adapters import ProviderAdapter, build_adapters
from snowhound.ingest.backend_client import BackendClient
from snowhound.ingest.routing import resolve_model
from snowhound.models.common import ProviderId
from snowhound.models.forecast import ForecastSeries, WeatherModel
from snowhound.models.location import Location

logger = logging.getLogger(__name__)


class ForecastAggregator:
    """Fans a (location, model ids) request out to providers concurrently.

    Unknown model ids reject the whole batch before any request is made.
    Only ValidationError and RateLimited reach the caller; provider failures
    surface as mock series.
    """

    def __init__(
        self,
        config: AppConfig,
        adapters: dict[ProviderId, ProviderAdapter] | None = None,
        backend: BackendClient | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config
        self.adapters = adapters or build_adapters(config, rng=rng)
        self.backend = backend
        if self.backend is None and config.features.use_backend:
            self.backend = BackendClient.from_config(config)

    async def get_forecast(self, location: Location, model_id: str) -> ForecastSeries:
        (series,) = await self.get_multiple_forecasts(location, [model_id])
        return series

    async def get_multiple_forecasts(
        self, location: Location, model_ids: list[str]
    ) -> list[ForecastSeries]:
        if not model_ids:
            raise ValidationError("At least one model id is required")
        resolved = [resolve_model(model_id) for model_id in model_ids]

        if self.backend is not None:
            try:
                return await self._fetch_via_backend(location, resolved)
            except BackendError as e:
                logger.warning(
                    "Backend failed, falling back to direct API calls: %s", e
                )

        return list(
            await asyncio.gather(
                *(self._fetch_direct(location, m, p) for m, p in resolved)
            )
        )

    async def _fetch_via_backend(
        self, location: Location, resolved: list[tuple[WeatherModel, ProviderId]]
    ) -> list[ForecastSeries]:
        assert self.backend is not None
        return list(
            await asyncio.gather(
                *(self.backend.get_forecast(location, m.name, p) for m, p in resolved)
            )
        )

    async def _fetch_direct(
        self, location: Location, model: WeatherModel, provider: ProviderId
    ) -> ForecastSeries:
        return await self.adapters[provider].fetch_series(location, model.name)
