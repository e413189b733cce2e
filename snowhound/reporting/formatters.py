"""Plain text renderers for forecasts and derived analytics."""

from collections.abc import Sequence

from snowhound.models.analytics import (
    ConfidenceRecord,
    OverallConfidence,
    SnowDepthEntry,
    SnowQualityRecord,
)
from snowhound.models.forecast import ForecastSeries, WeatherModel
from snowhound.models.location import Location
from snowhound.reporting.export import ForecastCard


def format_models(models: Sequence[WeatherModel]) -> str:
    return "\n".join(f"{m.id:<6} {m.name:<6} {m.provider:<28} {m.description}" for m in models)


def format_locations(locations: Sequence[Location]) -> str:
    if not locations:
        return "No locations found"
    lines = []
    for loc in locations:
        elevation = f" ({loc.elevation:.0f} ft)" if loc.elevation is not None else ""
        lines.append(f"{loc.id:<24} {loc.name}{elevation}  [{loc.lat:.4f}, {loc.lon:.4f}]")
    return "\n".join(lines)


def format_series(series: ForecastSeries) -> str:
    tag = " [MOCK]" if series.is_mock else ""
    lines = [f"--- {series.model} via {series.provider}{tag} ---"]
    for r in series.records:
        lines.append(
            f"{r.timestamp[:16]:<17} snow {r.snowfall:5.1f}\"  "
            f"temp {r.temperature:5.1f}F  wind {r.wind_speed:4.1f} mph  "
            f"rh {r.humidity:3.0f}%"
        )
    return "\n".join(lines)


def format_confidence(
    records: Sequence[ConfidenceRecord], overall: OverallConfidence
) -> str:
    lines = [f"Model agreement: {overall.label} ({overall.score}/100)"]
    for c in records:
        lines.append(
            f"  {c.date[:10]}  {c.confidence:5.1f}  {c.agreement.value:<6} "
            f"sd={c.variance:.2f}"
        )
    return "\n".join(lines)


def format_quality(records: Sequence[SnowQualityRecord]) -> str:
    lines = ["Snow quality:"]
    for q in records:
        lines.append(
            f"  {q.date[:10]}  {q.score:5.1f}  {q.quality.value:<9} "
            f"temp={q.factors.temperature.value} wind={q.factors.wind.value} "
            f"humidity={q.factors.humidity.value}"
        )
    return "\n".join(lines)


def format_depth(entries: Sequence[SnowDepthEntry], season_total: float) -> str:
    lines = [f"Snow depth (season total {season_total:.1f}\"):"]
    for e in entries:
        lines.append(f"  {e.date[:10]}  +{e.accumulation:.1f}\"  = {e.cumulative:.1f}\"")
    return "\n".join(lines)


def format_card(card: ForecastCard) -> str:
    return "\n".join(
        [
            card.title,
            card.description,
            f"  Next 24h:    {card.next_24h:.1f}\"",
            f"  7-day total: {card.seven_day_total:.1f}\"",
            f"  Peak day:    {card.peak_day:.1f}\"",
            f"  Models:      {', '.join(card.models)}",
        ]
    )
