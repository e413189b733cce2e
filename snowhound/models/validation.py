"""Input validation for coordinates and free-text search queries."""

import math

MAX_QUERY_LENGTH = 100
MIN_QUERY_LENGTH = 2


def validate_coordinates(lat: object, lon: object) -> bool:
    """True when lat is in [-90, 90] and lon in [-180, 180]. NaN and non-numbers fail."""
    for value in (lat, lon):
        if isinstance(value, bool) or not isinstance(value, int | float):
            return False
        if math.isnan(value):
            return False
    return -90 <= lat <= 90 and -180 <= lon <= 180  # type: ignore[operator]


def validate_location(location: object) -> bool:
    lat = getattr(location, "lat", None)
    lon = getattr(location, "lon", None)
    if isinstance(location, dict):
        lat, lon = location.get("lat"), location.get("lon")
    return validate_coordinates(lat, lon)


def sanitize_search_query(query: str) -> str:
    """Trim, cap at MAX_QUERY_LENGTH characters and strip angle brackets."""
    return query.strip()[:MAX_QUERY_LENGTH].replace("<", "").replace(">", "")


def is_searchable(query: str) -> bool:
    return len(sanitize_search_query(query)) >= MIN_QUERY_LENGTH
