"""Repository for favorite locations, stored as a JSON list under one key."""

import json
import logging

from snowhound.models.location import Location
from snowhound.storage.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

FAVORITES_KEY = "snowhound-favorites"


class FavoritesRepo:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def get_favorites(self) -> list[Location]:
        raw = self.store.get(FAVORITES_KEY)
        if not raw:
            return []
        try:
            return [Location.from_dict(item) for item in json.loads(raw)]
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding unreadable favorites list")
            return []

    def add_favorite(self, location: Location) -> bool:
        """Store a location as a favorite. Returns False if it was already present."""
        favorites = self.get_favorites()
        if location in favorites:
            return False
        favorites.append(location.as_favorite())
        self._save(favorites)
        return True

    def remove_favorite(self, location_id: str) -> None:
        self._save([f for f in self.get_favorites() if f.id != location_id])

    def is_favorite(self, location_id: str) -> bool:
        return any(f.id == location_id for f in self.get_favorites())

    def _save(self, favorites: list[Location]) -> None:
        self.store.set(FAVORITES_KEY, json.dumps([f.to_dict() for f in favorites]))
