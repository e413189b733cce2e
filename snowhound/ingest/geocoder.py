"""Location search: well-known resorts, Nominatim geocoding and coordinate lookup."""

import logging

from snowhound.config.defaults import MOUNTAIN_RANGES, SKI_RESORTS
from snowhound.config.schema import AppConfig
from snowhound.errors import UpstreamUnavailable, ValidationError
from snowhound.ingest.backend_client import BackendClient
from snowhound.ingest.nominatim_client import NominatimClient
from snowhound.models.common import LocationType
from snowhound.models.location import Location
from snowhound.models.validation import (
    MIN_QUERY_LENGTH,
    sanitize_search_query,
    validate_coordinates,
)

logger = logging.getLogger(__name__)


def short_display_name(display_name: str) -> str:
    """Keep the place name plus the last two parts (usually state, country)."""
    parts = [p.strip() for p in display_name.split(",")]
    if len(parts) > 3:
        return ", ".join([parts[0], *parts[-2:]])
    return display_name


def locations_from_results(results: list[dict]) -> list[Location]:
    """Convert raw geocoding results, dropping entries with invalid coordinates."""
    locations = []
    for index, item in enumerate(results):
        try:
            lat = float(item["lat"])
            lon = float(item["lon"])
        except (KeyError, TypeError, ValueError):
            continue
        if not validate_coordinates(lat, lon):
            continue
        place_id = item.get("place_id") or index
        display_name = str(item.get("display_name") or f"{lat:.4f}, {lon:.4f}")
        locations.append(
            Location(
                id=f"geocoded-{place_id}",
                name=short_display_name(display_name),
                lat=lat,
                lon=lon,
                type=LocationType.SEARCH,
            )
        )
    return locations


class LocationService:
    def __init__(
        self,
        config: AppConfig,
        nominatim: NominatimClient | None = None,
        backend: BackendClient | None = None,
    ):
        self.config = config
        self.nominatim = nominatim or NominatimClient(
            user_agent=config.http.user_agent, timeout=config.http.timeout_seconds
        )
        self.backend = backend
        if self.backend is None and config.features.use_backend:
            self.backend = BackendClient.from_config(config)

    def search_locations(self, query: str) -> list[Location]:
        """Case-insensitive substring match over the built-in resorts and ranges."""
        needle = query.strip().lower()
        if not needle:
            return []
        return [
            loc for loc in [*SKI_RESORTS, *MOUNTAIN_RANGES]
            if needle in loc.name.lower()
        ]

    async def geocode(self, query: str) -> list[Location]:
        """Geocode a free-text query.

        Short queries and unavailable providers yield []; RateLimited propagates.
        """
        sanitized = sanitize_search_query(query)
        if len(sanitized) < MIN_QUERY_LENGTH:
            return []

        if self.backend is not None:
            return locations_from_results(await self.backend.geocode(sanitized))

        try:
            results = await self.nominatim.search(sanitized)
        except UpstreamUnavailable as e:
            logger.warning("Geocoding failed for %r: %s", sanitized, e)
            return []
        return locations_from_results(results)

    async def search(self, query: str) -> list[Location]:
        """Built-in locations first; fall back to geocoding when none match."""
        local = self.search_locations(query)
        if local:
            return local
        return await self.geocode(query)

    def by_coordinates(self, lat: float, lon: float) -> Location:
        if not validate_coordinates(lat, lon):
            raise ValidationError(f"Invalid coordinates: lat={lat}, lon={lon}")
        return Location(
            id=f"custom-{lat}-{lon}",
            name=f"{lat:.4f}, {lon:.4f}",
            lat=lat,
            lon=lon,
            type=LocationType.SEARCH,
        )

    def find(self, location_id: str) -> Location | None:
        for loc in [*SKI_RESORTS, *MOUNTAIN_RANGES]:
            if loc.id == location_id:
                return loc
        return None
