"""Tests for synthetic mock forecasts."""

import random
from datetime import UTC, datetime, timedelta

from snowhound.ingest.mock_generator import generate_mock_series, mock_provider_name

NOW = datetime(2026, 2, 11, 6, 0, tzinfo=UTC)


class TestMockGenerator:
    def test_shape_and_flags(self, vail):
        series = generate_mock_series(vail, "GFS", "NWS", rng=random.Random(1), now=NOW)
        assert len(series) == 7
        assert series.is_mock is True
        assert series.provider == "NWS (Mock)"
        assert series.model == "GFS"
        assert series.location == vail
        assert series.last_updated == NOW.isoformat()

    def test_daily_timestamps(self, vail):
        series = generate_mock_series(vail, "GFS", "NWS", rng=random.Random(1), now=NOW)
        expected = [(NOW + timedelta(days=d)).isoformat() for d in range(7)]
        assert [r.timestamp for r in series.records] == expected

    def test_value_ranges(self, vail):
        rng = random.Random(42)
        for _ in range(20):
            series = generate_mock_series(vail, "ECMWF", "OpenWeatherMap", rng=rng, now=NOW)
            for r in series.records:
                assert 0 <= r.snowfall <= 6
                assert 20 <= r.temperature <= 40
                assert 5 <= r.wind_speed <= 20
                assert 60 <= r.humidity <= 90
                assert r.model == "ECMWF"

    def test_seeded_rng_is_reproducible(self, vail):
        a = generate_mock_series(vail, "GFS", "NWS", rng=random.Random(7), now=NOW)
        b = generate_mock_series(vail, "GFS", "NWS", rng=random.Random(7), now=NOW)
        assert a == b

    def test_mock_provider_name(self):
        assert mock_provider_name("WeatherAPI") == "WeatherAPI (Mock)"
        assert mock_provider_name("WeatherAPI (Mock)") == "WeatherAPI (Mock)"
