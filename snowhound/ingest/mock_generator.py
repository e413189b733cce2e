"""Synthetic 7-day forecast used when a provider cannot be reached."""

import random
from datetime import datetime, timedelta

from snowhound.models.common import utc_now
from snowhound.models.forecast import ForecastSeries, SnowfallRecord
from snowhound.models.location import Location

MOCK_DAYS = 7
MOCK_SUFFIX = " (Mock)"


def mock_provider_name(provider: str) -> str:
    if provider.endswith(MOCK_SUFFIX):
        return provider
    return f"{provider}{MOCK_SUFFIX}"


def generate_mock_series(
    location: Location,
    model: str,
    provider: str,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> ForecastSeries:
    """Build a plausible daily series flagged as mock.

    Values are drawn uniformly: snowfall [0, 6) in, temperature [20, 40) °F,
    wind [5, 20) mph, humidity [60, 90) %.
    """
    rng = rng or random.Random()
    now = now or utc_now()

    records = []
    for day in range(MOCK_DAYS):
        records.append(
            SnowfallRecord(
                timestamp=(now + timedelta(days=day)).isoformat(),
                snowfall=round(rng.random() * 6, 1),
                temperature=round(20 + rng.random() * 20, 1),
                wind_speed=round(5 + rng.random() * 15, 1),
                humidity=round(60 + rng.random() * 30),
                model=model,
            )
        )

    return ForecastSeries(
        location=location,
        model=model,
        provider=mock_provider_name(provider),
        records=tuple(records),
        last_updated=now.isoformat(),
        is_mock=True,
    )
