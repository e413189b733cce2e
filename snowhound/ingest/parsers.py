"""Per-provider response parsers producing unified SnowfallRecords.

Each upstream schema is wrapped in its own payload variant; ``parse_records``
dispatches on the variant. Supporting a new provider means adding a variant
and a case, not branching inside an existing parser.
"""

import logging
import re
from dataclasses import dataclass

from snowhound.models.forecast import SnowfallRecord

logger = logging.getLogger(__name__)

CM_PER_INCH = 2.54
NWS_MAX_PERIODS = 7

_LEADING_INT = re.compile(r"^([+-]?\d+)")


@dataclass(frozen=True)
class OpenWeatherPayload:
    """3-hour interval entries under ``list``."""

    raw: dict


@dataclass(frozen=True)
class WeatherApiPayload:
    """One entry per day under ``forecast.forecastday``; snow in centimeters."""

    raw: dict


@dataclass(frozen=True)
class NwsPayload:
    """Day and night periods under ``properties.periods``."""

    raw: dict


@dataclass(frozen=True)
class UnknownPayload:
    raw: object


Payload = OpenWeatherPayload | WeatherApiPayload | NwsPayload | UnknownPayload


def detect_payload(raw: object) -> Payload:
    """Classify an untagged provider response by its shape."""
    if isinstance(raw, dict):
        if isinstance(raw.get("list"), list):
            return OpenWeatherPayload(raw)
        forecast = raw.get("forecast")
        if isinstance(forecast, dict) and isinstance(forecast.get("forecastday"), list):
            return WeatherApiPayload(raw)
        properties = raw.get("properties")
        if isinstance(properties, dict) and isinstance(properties.get("periods"), list):
            return NwsPayload(raw)
    return UnknownPayload(raw)


def parse_records(payload: Payload, model: str) -> list[SnowfallRecord]:
    """Translate a provider payload into records for ``model``.

    Raises KeyError/TypeError/ValueError on malformed entries; callers treat
    that as a failed fetch.
    """
    match payload:
        case OpenWeatherPayload(raw=raw):
            return [_openweather_record(item, model) for item in raw["list"]]
        case WeatherApiPayload(raw=raw):
            return [
                _weatherapi_record(day, model)
                for day in raw["forecast"]["forecastday"]
            ]
        case NwsPayload(raw=raw):
            periods = [p for p in raw["properties"]["periods"] if p.get("isDaytime")]
            return [_nws_record(p, model) for p in periods[:NWS_MAX_PERIODS]]
        case UnknownPayload():
            logger.warning("Unrecognized forecast payload for %s, no records parsed", model)
            return []
    raise TypeError(f"Unsupported payload type: {type(payload).__name__}")


def _openweather_record(item: dict, model: str) -> SnowfallRecord:
    snow = item.get("snow") or {}
    return SnowfallRecord(
        timestamp=item["dt_txt"],
        snowfall=float(snow.get("3h") or 0),
        temperature=float(item["main"]["temp"]),
        wind_speed=float(item["wind"]["speed"]),
        humidity=float(item["main"]["humidity"]),
        model=model,
    )


def _weatherapi_record(day: dict, model: str) -> SnowfallRecord:
    stats = day["day"]
    snow_cm = stats.get("totalsnow_cm") or 0
    return SnowfallRecord(
        timestamp=day["date"],
        snowfall=float(snow_cm) / CM_PER_INCH,
        temperature=float(stats["avgtemp_f"]),
        wind_speed=float(stats["maxwind_mph"]),
        humidity=float(stats["avghumidity"]),
        model=model,
    )


def _nws_record(period: dict, model: str) -> SnowfallRecord:
    snowfall = (period.get("snowfallAmount") or {}).get("value") or 0
    return SnowfallRecord(
        timestamp=period["startTime"],
        snowfall=float(snowfall),
        temperature=float(period["temperature"]),
        wind_speed=float(parse_wind_speed(period.get("windSpeed"))),
        humidity=0.0,  # not provided by the period forecast
        model=model,
    )


def parse_wind_speed(text: object) -> int:
    """First token of a "<number> mph" string as an integer, 0 if unparseable.

    Ranges such as "10 to 15 mph" yield the lower bound.
    """
    if not isinstance(text, str):
        return 0
    match = _LEADING_INT.match(text.split(" ")[0])
    if match is None:
        return 0
    return max(int(match.group(1)), 0)
