"""Cross-model agreement: how tightly snowfall predictions cluster per day."""

import math
from collections.abc import Sequence

from snowhound.models.analytics import (
    Agreement,
    ConfidenceRecord,
    ModelSnowfall,
    OverallConfidence,
)
from snowhound.models.forecast import ForecastSeries

HIGH_CV = 0.2
MEDIUM_CV = 0.5
OVERALL_HIGH = 75
OVERALL_MEDIUM = 50


def compute_confidence(
    forecasts: Sequence[ForecastSeries], day_index: int
) -> ConfidenceRecord | None:
    """Score model agreement for one day from the coefficient of variation.

    CV < 0.2 maps linearly onto 100..80 (high), 0.2..0.5 onto 80..50
    (medium), and larger CVs onto 50..0 (low). Unanimous zero snowfall is
    full confidence. Returns None when no series has data for the day.
    """
    if not forecasts:
        return None
    first = forecasts[0].record_at(day_index)
    if first is None:
        return None

    values = [
        ModelSnowfall(model=f.model, snowfall=record.snowfall)
        for f in forecasts
        if (record := f.record_at(day_index)) is not None
    ]

    mean = sum(v.snowfall for v in values) / len(values)
    stddev = math.sqrt(sum((v.snowfall - mean) ** 2 for v in values) / len(values))
    cv = stddev / mean if mean > 0 else stddev

    if cv < HIGH_CV:
        confidence = 100 - (cv / HIGH_CV) * 20
        agreement = Agreement.HIGH
    elif cv < MEDIUM_CV:
        confidence = 80 - ((cv - HIGH_CV) / (MEDIUM_CV - HIGH_CV)) * 30
        agreement = Agreement.MEDIUM
    else:
        confidence = 50 - min((cv - MEDIUM_CV) * 50, 50)
        agreement = Agreement.LOW

    if mean == 0 and stddev == 0:
        confidence = 100
        agreement = Agreement.HIGH

    return ConfidenceRecord(
        date=first.timestamp,
        confidence=max(0.0, min(100.0, float(confidence))),
        agreement=agreement,
        variance=stddev,
        models=tuple(values),
    )


def compute_all_confidences(forecasts: Sequence[ForecastSeries]) -> list[ConfidenceRecord]:
    if not forecasts:
        return []
    days = max(len(f) for f in forecasts)
    return [
        record
        for i in range(days)
        if (record := compute_confidence(forecasts, i)) is not None
    ]


def overall_confidence(confidences: Sequence[ConfidenceRecord]) -> OverallConfidence:
    if not confidences:
        return OverallConfidence(score=0, agreement=Agreement.LOW, label="No data")

    average = sum(c.confidence for c in confidences) / len(confidences)
    if average >= OVERALL_HIGH:
        agreement, label = Agreement.HIGH, "High Agreement"
    elif average >= OVERALL_MEDIUM:
        agreement, label = Agreement.MEDIUM, "Moderate Agreement"
    else:
        agreement, label = Agreement.LOW, "Low Agreement"
    return OverallConfidence(
        score=math.floor(average + 0.5), agreement=agreement, label=label
    )
