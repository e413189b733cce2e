"""Tests for location search and geocoding."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
import respx
from httpx import Response

from snowhound.errors import RateLimited, UpstreamUnavailable, ValidationError
from snowhound.ingest.geocoder import (
    LocationService,
    locations_from_results,
    short_display_name,
)
from snowhound.ingest.nominatim_client import NominatimClient

SEARCH_URL = "https://nominatim.openstreetmap.org/search"


class TestResultConversion:
    def test_short_display_name(self):
        assert short_display_name("Vail, Eagle County, Colorado, United States") == (
            "Vail, Colorado, United States"
        )
        assert short_display_name("Vail, Arizona, United States") == "Vail, Arizona, United States"

    def test_drops_invalid_results(self, load_fixture):
        locations = locations_from_results(load_fixture("nominatim_search.json"))
        assert [loc.id for loc in locations] == ["geocoded-297134", "geocoded-88812"]
        assert locations[0].name == "Vail, Colorado, United States"
        assert locations[0].lat == pytest.approx(39.6433)
        assert locations[0].lon == pytest.approx(-106.3781)

    def test_missing_place_id_uses_index(self):
        locations = locations_from_results([{"lat": "1", "lon": "2", "display_name": "X"}])
        assert locations[0].id == "geocoded-0"


class TestLocationService:
    def test_local_search(self, config):
        service = LocationService(config)
        assert [loc.id for loc in service.search_locations("crystal")] == [
            "crystal-mountain-wa",
            "crystal-mountain-mi",
        ]
        assert service.search_locations("RANGE")[0].id == "cascades"
        assert service.search_locations("  ") == []

    def test_find(self, config):
        service = LocationService(config)
        assert service.find("alps").name == "Alps"
        assert service.find("nowhere") is None

    def test_by_coordinates(self, config):
        loc = LocationService(config).by_coordinates(45.5, -120.25)
        assert loc.id == "custom-45.5--120.25"
        assert loc.name == "45.5000, -120.2500"

    def test_by_coordinates_invalid(self, config):
        with pytest.raises(ValidationError):
            LocationService(config).by_coordinates(95, 0)

    @respx.mock(assert_all_called=False)
    def test_search_prefers_local(self, config):
        route = respx.get(SEARCH_URL)
        result = asyncio.run(LocationService(config).search("vail"))
        assert [loc.id for loc in result] == ["vail"]
        assert not route.called

    @respx.mock
    def test_search_falls_back_to_geocoding(self, config, load_fixture):
        route = respx.get(SEARCH_URL).mock(
            return_value=Response(200, json=load_fixture("nominatim_search.json"))
        )
        result = asyncio.run(LocationService(config).search(" <Vail> Eagle "))
        assert len(result) == 2
        assert route.calls.last.request.url.params["q"] == "Vail Eagle"

    @respx.mock(assert_all_called=False)
    def test_short_query_skips_geocoding(self, config):
        route = respx.get(SEARCH_URL)
        assert asyncio.run(LocationService(config).geocode(" x ")) == []
        assert not route.called

    def test_geocoding_error_is_empty(self, config, caplog):
        nominatim = MagicMock(spec=NominatimClient)
        nominatim.search = AsyncMock(side_effect=UpstreamUnavailable("down"))
        service = LocationService(config, nominatim=nominatim)
        assert asyncio.run(service.geocode("Denver")) == []
        assert "Geocoding failed" in caplog.text

    def test_geocodes_through_backend(self, config, load_fixture):
        backend = MagicMock()
        backend.geocode = AsyncMock(return_value=load_fixture("nominatim_search.json"))
        nominatim = MagicMock(spec=NominatimClient)
        nominatim.search = AsyncMock()
        service = LocationService(config, nominatim=nominatim, backend=backend)
        result = asyncio.run(service.geocode("Vail"))
        assert [loc.id for loc in result] == ["geocoded-297134", "geocoded-88812"]
        nominatim.search.assert_not_awaited()

    def test_geocoding_rate_limit_propagates(self, config):
        nominatim = MagicMock(spec=NominatimClient)
        nominatim.search = AsyncMock(side_effect=RateLimited("slow", retry_after=30))
        service = LocationService(config, nominatim=nominatim)
        with pytest.raises(RateLimited):
            asyncio.run(service.search("Denver"))
