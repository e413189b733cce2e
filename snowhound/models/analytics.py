"""Derived analytics records: model agreement, snow quality and snow depth."""

from dataclasses import dataclass
from enum import StrEnum


class Agreement(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class QualityLevel(StrEnum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class TemperatureFactor(StrEnum):
    IDEAL = "ideal"
    COLD = "cold"
    WARM = "warm"


class WindFactor(StrEnum):
    CALM = "calm"
    MODERATE = "moderate"
    STRONG = "strong"


class HumidityFactor(StrEnum):
    DRY = "dry"
    MODERATE = "moderate"
    HUMID = "humid"


@dataclass(frozen=True)
class ModelSnowfall:
    model: str
    snowfall: float


@dataclass(frozen=True)
class ConfidenceRecord:
    date: str
    confidence: float  # 0-100
    agreement: Agreement
    variance: float  # population standard deviation of snowfall
    models: tuple[ModelSnowfall, ...]


@dataclass(frozen=True)
class OverallConfidence:
    score: int
    agreement: Agreement
    label: str


@dataclass(frozen=True)
class QualityFactors:
    temperature: TemperatureFactor
    wind: WindFactor
    humidity: HumidityFactor


@dataclass(frozen=True)
class SnowQualityRecord:
    date: str
    quality: QualityLevel
    score: float  # 0-100
    temperature: float
    wind_speed: float
    humidity: float
    factors: QualityFactors


@dataclass(frozen=True)
class SnowDepthEntry:
    date: str
    accumulation: float  # new snow for the day, inches
    cumulative: float  # running total including stored history

    @property
    def depth(self) -> float:
        return self.cumulative

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "depth": self.cumulative,
            "accumulation": self.accumulation,
            "cumulative": self.cumulative,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SnowDepthEntry":
        return cls(
            date=str(data.get("date", "")),
            accumulation=float(data.get("accumulation", 0.0)),
            cumulative=float(data.get("cumulative", 0.0)),
        )
