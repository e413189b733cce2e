"""Location model: a named point that forecasts are requested for."""

from dataclasses import dataclass, replace

from snowhound.errors import ValidationError
from snowhound.models.common import LocationType
from snowhound.models.validation import validate_coordinates


@dataclass(frozen=True, eq=False)
class Location:
    id: str
    name: str
    lat: float
    lon: float
    type: LocationType = LocationType.SEARCH
    elevation: float | None = None  # feet

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Location id is required")
        if not validate_coordinates(self.lat, self.lon):
            raise ValidationError(
                f"Invalid coordinates for {self.id}: lat={self.lat}, lon={self.lon}"
            )
        object.__setattr__(self, "type", LocationType(self.type))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def as_favorite(self) -> "Location":
        return replace(self, type=LocationType.FAVORITE)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "type": self.type.value,
        }
        if self.elevation is not None:
            data["elevation"] = self.elevation
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Location":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            lat=float(data["lat"]),
            lon=float(data["lon"]),
            type=LocationType(data.get("type", LocationType.SEARCH)),
            elevation=data.get("elevation"),
        )
