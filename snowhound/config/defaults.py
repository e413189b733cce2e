"""Static reference data: the forecast model catalog and well-known locations."""

from snowhound.models.common import LocationType
from snowhound.models.forecast import WeatherModel
from snowhound.models.location import Location

WEATHER_MODELS: list[WeatherModel] = [
    WeatherModel(
        id="gfs",
        name="GFS",
        provider="NOAA",
        description="Global Forecast System - Primary US weather model",
    ),
    WeatherModel(
        id="ecmwf",
        name="ECMWF",
        provider="European Centre",
        description="European Centre for Medium-Range Weather Forecasts",
    ),
    WeatherModel(
        id="nam",
        name="NAM",
        provider="NOAA",
        description="North American Mesoscale Forecast System",
    ),
    WeatherModel(
        id="hrrr",
        name="HRRR",
        provider="NOAA",
        description="High-Resolution Rapid Refresh - Short-term forecasts",
    ),
    WeatherModel(
        id="ukmet",
        name="UKMET",
        provider="UK Met Office",
        description="UK Met Office Global Model",
    ),
    WeatherModel(
        id="gem",
        name="GEM",
        provider="Environment Canada",
        description="Global Environmental Multiscale Model",
    ),
    WeatherModel(
        id="jma",
        name="JMA",
        provider="Japan Meteorological Agency",
        description="JMA Global Spectral Model",
    ),
]

MODELS_BY_ID: dict[str, WeatherModel] = {m.id: m for m in WEATHER_MODELS}

MAX_SELECTED_MODELS = 5

_S = LocationType.SEARCH

SKI_RESORTS: list[Location] = [
    Location("vail", "Vail, CO", 39.6403, -106.3742, _S, 8150),
    Location("aspen", "Aspen, CO", 39.1911, -106.8175, _S, 8000),
    Location("breckenridge", "Breckenridge, CO", 39.4817, -106.0384, _S, 9600),
    Location("whistler", "Whistler, BC", 50.1163, -122.9574, _S, 2182),
    Location("park-city", "Park City, UT", 40.6461, -111.4980, _S, 7000),
    Location("jackson-hole", "Jackson Hole, WY", 43.5875, -110.8278, _S, 6311),
    Location("alta", "Alta, UT", 40.5886, -111.6378, _S, 8530),
    Location("mammoth", "Mammoth Mountain, CA", 37.6308, -119.0326, _S, 11053),
    Location("tahoe", "Lake Tahoe, CA", 39.0968, -120.0324, _S, 6225),
    Location("telluride", "Telluride, CO", 37.9375, -107.8123, _S, 8725),
    Location("crystal-mountain-wa", "Crystal Mountain, WA", 46.9361, -121.4744, _S, 7012),
    Location("crystal-mountain-mi", "Crystal Mountain, MI", 44.5214, -85.9981, _S, 1025),
]

MOUNTAIN_RANGES: list[Location] = [
    Location("rockies", "Rocky Mountains", 39.7392, -105.9903, _S),
    Location("sierra-nevada", "Sierra Nevada", 37.8651, -119.5383, _S),
    Location("cascades", "Cascade Range", 45.3736, -121.6959, _S),
    Location("wasatch", "Wasatch Range", 40.7608, -111.8910, _S),
    Location("alps", "Alps", 46.5197, 9.8384, _S),
]
