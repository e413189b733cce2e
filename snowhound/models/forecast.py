"""Unified forecast data models shared by every provider adapter."""

from dataclasses import dataclass, field

from snowhound.errors import ValidationError
from snowhound.models.location import Location


@dataclass(frozen=True)
class WeatherModel:
    id: str
    name: str
    provider: str
    description: str


@dataclass(frozen=True)
class SnowfallRecord:
    timestamp: str  # ISO-8601
    snowfall: float  # inches
    temperature: float  # °F
    wind_speed: float  # mph
    humidity: float  # percent
    model: str

    def __post_init__(self) -> None:
        if not self.snowfall >= 0:
            raise ValidationError(f"snowfall must be >= 0, got {self.snowfall}")
        if not self.wind_speed >= 0:
            raise ValidationError(f"wind_speed must be >= 0, got {self.wind_speed}")
        if not 0 <= self.humidity <= 100:
            raise ValidationError(f"humidity must be in [0, 100], got {self.humidity}")

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "snowfall": self.snowfall,
            "temperature": self.temperature,
            "windSpeed": self.wind_speed,
            "humidity": self.humidity,
            "model": self.model,
        }


@dataclass(frozen=True)
class ForecastSeries:
    location: Location
    model: str
    provider: str
    records: tuple[SnowfallRecord, ...] = field(default_factory=tuple)
    last_updated: str = ""
    is_mock: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))

    def __len__(self) -> int:
        return len(self.records)

    def record_at(self, index: int) -> SnowfallRecord | None:
        if 0 <= index < len(self.records):
            return self.records[index]
        return None

    def to_dict(self) -> dict:
        return {
            "location": self.location.to_dict(),
            "model": self.model,
            "provider": self.provider,
            "data": [r.to_dict() for r in self.records],
            "lastUpdated": self.last_updated,
            "isMock": self.is_mock,
        }
