"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum


class LocationType(StrEnum):
    CURRENT = "current"
    SEARCH = "search"
    FAVORITE = "favorite"


class ProviderId(StrEnum):
    NWS = "nws"
    OPENWEATHERMAP = "openweathermap"
    WEATHERAPI = "weatherapi"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()
