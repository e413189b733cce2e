"""Shared test fixtures."""

import json
import sqlite3
from collections.abc import Callable
from pathlib import Path

import pytest

from snowhound.config.schema import AppConfig
from snowhound.models.common import LocationType
from snowhound.models.forecast import ForecastSeries, SnowfallRecord
from snowhound.models.location import Location
from snowhound.storage.database import open_database

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def load_fixture() -> Callable[[str], object]:
    def _load(name: str) -> object:
        with open(FIXTURE_DIR / name) as f:
            return json.load(f)

    return _load


@pytest.fixture
def config() -> AppConfig:
    """Config with both provider keys set and instant retries."""
    return AppConfig(
        keys={"openweather_api_key": "ow-test", "weatherapi_key": "wa-test"},
        http={"max_retries": 0, "retry_base_delay": 0.0},
    )


@pytest.fixture
def vail() -> Location:
    return Location("vail", "Vail, CO", 39.6403, -106.3742, LocationType.SEARCH, 8150)


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    return open_database(tmp_path / "test.db")


@pytest.fixture
def make_series(vail: Location) -> Callable[..., ForecastSeries]:
    """Build a series from per-day snowfall values (other fields fixed or overridable)."""

    def _make(
        model: str,
        snowfall: list[float],
        temperature: float = 25.0,
        wind_speed: float = 8.0,
        humidity: float = 45.0,
        is_mock: bool = False,
    ) -> ForecastSeries:
        records = tuple(
            SnowfallRecord(
                timestamp=f"2026-02-{11 + i:02d}T06:00:00+00:00",
                snowfall=s,
                temperature=temperature,
                wind_speed=wind_speed,
                humidity=humidity,
                model=model,
            )
            for i, s in enumerate(snowfall)
        )
        return ForecastSeries(
            location=vail,
            model=model,
            provider="Test",
            records=records,
            last_updated="2026-02-11T00:00:00+00:00",
            is_mock=is_mock,
        )

    return _make
