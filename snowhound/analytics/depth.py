"""Cumulative snow depth tracking with a rolling per-location history."""

import json
import logging
from collections.abc import Sequence

from snowhound.models.analytics import SnowDepthEntry
from snowhound.models.forecast import ForecastSeries
from snowhound.models.location import Location
from snowhound.storage.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_PREFIX = "snowhound-snow-depth"
MAX_HISTORY = 30


def history_key(location: Location) -> str:
    return f"{STORAGE_PREFIX}-{location.id}"


class SnowDepthTracker:
    """Accumulates the cross-model mean daily snowfall on top of stored history.

    The last stored cumulative value seeds the next update; history is kept
    to the most recent ``max_history`` entries.
    """

    def __init__(self, store: KeyValueStore, max_history: int = MAX_HISTORY):
        self.store = store
        self.max_history = max_history

    def history(self, location: Location) -> list[SnowDepthEntry]:
        raw = self.store.get(history_key(location))
        if not raw:
            return []
        try:
            return [SnowDepthEntry.from_dict(item) for item in json.loads(raw)]
        except (ValueError, TypeError, AttributeError):
            logger.warning("Unreadable snow depth history for %s, starting fresh", location.id)
            return []

    def update_depth(
        self, location: Location, forecasts: Sequence[ForecastSeries]
    ) -> list[SnowDepthEntry]:
        if not forecasts:
            return []

        history = self.history(location)
        cumulative = history[-1].cumulative if history else 0.0

        longest = max(forecasts, key=len)
        entries = []
        for i in range(len(longest)):
            accumulation = sum(
                r.snowfall for f in forecasts if (r := f.record_at(i)) is not None
            ) / len(forecasts)
            cumulative += accumulation
            entries.append(
                SnowDepthEntry(
                    date=longest.records[i].timestamp,
                    accumulation=accumulation,
                    cumulative=cumulative,
                )
            )

        recent = [*history, *entries][-self.max_history:]
        self.store.set(history_key(location), json.dumps([e.to_dict() for e in recent]))
        return entries

    def season_total(self, location: Location) -> float:
        """Sum of stored daily accumulations (not cumulative values)."""
        return sum(e.accumulation for e in self.history(location))
