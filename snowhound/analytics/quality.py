"""Snow quality scoring from the cross-model average temperature, wind and humidity.

Ideal conditions for preserving powder: 20-30°F, wind at most 15 mph and
humidity at most 60%.
"""

from collections.abc import Sequence

from snowhound.models.analytics import (
    HumidityFactor,
    QualityFactors,
    QualityLevel,
    SnowQualityRecord,
    TemperatureFactor,
    WindFactor,
)
from snowhound.models.forecast import ForecastSeries

TEMP_WEIGHT = 0.4
WIND_WEIGHT = 0.4
HUMIDITY_WEIGHT = 0.2


def temperature_score(temp: float) -> float:
    if temp < 20:
        return 60 - (20 - temp) * 2
    if temp > 30:
        return 100 - (temp - 30) * 3
    return 100.0


def wind_score(wind: float) -> float:
    if wind > 15:
        return 100 - (wind - 15) * 2
    return 100.0


def humidity_score(humidity: float) -> float:
    if humidity > 60:
        return 100 - (humidity - 60) * 1.5
    return 100.0


def quality_level(score: float) -> QualityLevel:
    if score >= 80:
        return QualityLevel.EXCELLENT
    if score >= 60:
        return QualityLevel.GOOD
    if score >= 40:
        return QualityLevel.FAIR
    return QualityLevel.POOR


def quality_factors(temp: float, wind: float, humidity: float) -> QualityFactors:
    if 20 <= temp <= 30:
        temp_factor = TemperatureFactor.IDEAL
    elif temp > 30:
        temp_factor = TemperatureFactor.WARM
    else:
        temp_factor = TemperatureFactor.COLD

    if wind < 10:
        wind_factor = WindFactor.CALM
    elif wind < 20:
        wind_factor = WindFactor.MODERATE
    else:
        wind_factor = WindFactor.STRONG

    if humidity < 50:
        humidity_factor = HumidityFactor.DRY
    elif humidity < 70:
        humidity_factor = HumidityFactor.MODERATE
    else:
        humidity_factor = HumidityFactor.HUMID

    return QualityFactors(temp_factor, wind_factor, humidity_factor)


def compute_quality(
    forecasts: Sequence[ForecastSeries], day_index: int
) -> SnowQualityRecord | None:
    """Score one day. Series without an entry for the day contribute zeros."""
    if not forecasts:
        return None
    first = forecasts[0].record_at(day_index)
    if first is None:
        return None

    records = [f.record_at(day_index) for f in forecasts]
    n = len(forecasts)
    avg_temp = sum(r.temperature for r in records if r is not None) / n
    avg_wind = sum(r.wind_speed for r in records if r is not None) / n
    avg_humidity = sum(r.humidity for r in records if r is not None) / n

    score = (
        temperature_score(avg_temp) * TEMP_WEIGHT
        + wind_score(avg_wind) * WIND_WEIGHT
        + humidity_score(avg_humidity) * HUMIDITY_WEIGHT
    )

    return SnowQualityRecord(
        date=first.timestamp,
        quality=quality_level(score),
        score=max(0.0, min(100.0, score)),
        temperature=avg_temp,
        wind_speed=avg_wind,
        humidity=avg_humidity,
        factors=quality_factors(avg_temp, avg_wind, avg_humidity),
    )


def compute_all_quality(forecasts: Sequence[ForecastSeries]) -> list[SnowQualityRecord]:
    if not forecasts:
        return []
    days = max(len(f) for f in forecasts)
    return [
        record
        for i in range(days)
        if (record := compute_quality(forecasts, i)) is not None
    ]
