"""Forecast export (JSON, CSV) and shareable summary card data."""

import csv
import io
import json
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from snowhound.models.common import utc_now
from snowhound.models.forecast import ForecastSeries
from snowhound.models.location import Location


@dataclass(frozen=True)
class ForecastCard:
    title: str
    description: str
    location: str
    next_24h: float
    seven_day_total: float
    peak_day: float
    models: tuple[str, ...]


def export_json(
    location: Location,
    forecasts: Sequence[ForecastSeries],
    now: datetime | None = None,
) -> str:
    data = {
        "location": location.to_dict(),
        "forecasts": [
            {
                "model": f.model,
                "provider": f.provider,
                "isMock": f.is_mock,
                "data": [
                    {
                        "date": r.timestamp,
                        "snowfall": r.snowfall,
                        "temperature": r.temperature,
                        "windSpeed": r.wind_speed,
                        "humidity": r.humidity,
                    }
                    for r in f.records
                ],
            }
            for f in forecasts
        ],
        "exportedAt": (now or utc_now()).isoformat(),
    }
    return json.dumps(data, indent=2)


def export_csv(forecasts: Sequence[ForecastSeries]) -> str:
    """One row per day, snowfall/temp/wind columns per model; blanks where a model has no entry."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    header = ["Date"]
    for f in forecasts:
        header += [f"{f.model} (Snowfall)", f"{f.model} (Temp)", f"{f.model} (Wind)"]
    writer.writerow(header)

    days = max((len(f) for f in forecasts), default=0)
    for i in range(days):
        first = forecasts[0].record_at(i)
        row: list[object] = [first.timestamp if first else ""]
        for f in forecasts:
            record = f.record_at(i)
            if record is None:
                row += ["", "", ""]
            else:
                row += [record.snowfall, record.temperature, record.wind_speed]
        writer.writerow(row)

    return buf.getvalue()


def forecast_card(
    location: Location,
    forecasts: Sequence[ForecastSeries],
    selected_models: Sequence[str],
) -> ForecastCard:
    """Headline numbers: first-model next 24h, model-average 7-day total, peak day."""
    first = forecasts[0].record_at(0) if forecasts else None
    next_24h = first.snowfall if first else 0.0
    if forecasts:
        total = sum(r.snowfall for f in forecasts for r in f.records) / len(forecasts)
    else:
        total = 0.0
    peak = max((r.snowfall for f in forecasts for r in f.records), default=0.0)

    return ForecastCard(
        title=f"SnowHound Forecast: {location.name}",
        description=f'Check out the {total:.1f}" of snow expected over the next 7 days!',
        location=location.name,
        next_24h=next_24h,
        seven_day_total=total,
        peak_day=peak,
        models=tuple(selected_models),
    )
