"""Tests for Location construction, identity and serialization."""

import math

import pytest

from snowhound.errors import ValidationError
from snowhound.models.common import LocationType
from snowhound.models.location import Location


class TestLocation:
    def test_equality_by_id(self):
        a = Location("vail", "Vail, CO", 39.64, -106.37)
        b = Location("vail", "Somewhere else", 10.0, 10.0, LocationType.FAVORITE)
        c = Location("aspen", "Vail, CO", 39.64, -106.37)
        assert a == b
        assert a != c
        assert len({a, b, c}) == 2

    def test_immutable(self):
        loc = Location("vail", "Vail", 39.64, -106.37)
        with pytest.raises(AttributeError):
            loc.lat = 0.0  # type: ignore[misc]

    @pytest.mark.parametrize(
        "lat,lon", [(91, 0), (-90.1, 0), (0, 180.5), (0, -181), (math.nan, 0)]
    )
    def test_invalid_coordinates_rejected(self, lat, lon):
        with pytest.raises(ValidationError):
            Location("x", "X", lat, lon)

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            Location("", "X", 0, 0)

    def test_type_coerced_from_string(self):
        loc = Location("x", "X", 0, 0, "favorite")  # type: ignore[arg-type]
        assert loc.type is LocationType.FAVORITE

    def test_as_favorite(self):
        loc = Location("vail", "Vail", 39.64, -106.37, elevation=8150)
        fav = loc.as_favorite()
        assert fav.type == LocationType.FAVORITE
        assert fav.elevation == 8150
        assert loc.type == LocationType.SEARCH

    def test_dict_round_trip(self):
        loc = Location("vail", "Vail", 39.64, -106.37, LocationType.CURRENT, 8150)
        data = loc.to_dict()
        assert data["type"] == "current"
        restored = Location.from_dict(data)
        assert restored == loc
        assert restored.elevation == 8150
        assert restored.name == "Vail"

    def test_to_dict_omits_missing_elevation(self):
        assert "elevation" not in Location("x", "X", 0, 0).to_dict()
