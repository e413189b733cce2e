"""Repository for cached provider payloads keyed by (rounded location, model)."""

import json
import logging
import sqlite3
from datetime import datetime, timedelta

from snowhound.errors import CacheUnavailable
from snowhound.models.common import utc_now

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=1)


def location_key(lat: float, lon: float) -> str:
    """Coordinates rounded to 4 decimal places, e.g. "39.6403,-106.3742"."""
    return f"{lat:.4f},{lon:.4f}"


def get_cached_forecast(
    conn: sqlite3.Connection,
    lat: float,
    lon: float,
    model: str,
    now: datetime | None = None,
) -> dict | None:
    """Return the cached payload if it has not expired, else None."""
    now = now or utc_now()
    try:
        row = conn.execute(
            "SELECT data_json, expires_at FROM forecast_cache "
            "WHERE location_key = ? AND model_name = ?",
            (location_key(lat, lon), model),
        ).fetchone()
    except sqlite3.Error as e:
        raise CacheUnavailable(f"Cache read failed: {e}") from e
    if row is None:
        return None
    if now >= datetime.fromisoformat(row[1]):
        return None
    return json.loads(row[0])


def cache_forecast(
    conn: sqlite3.Connection,
    lat: float,
    lon: float,
    model: str,
    data: dict,
    ttl: timedelta = DEFAULT_TTL,
    now: datetime | None = None,
) -> None:
    """Upsert a payload with an expiry of now + ttl."""
    now = now or utc_now()
    try:
        conn.execute(
            "INSERT INTO forecast_cache (location_key, model_name, data_json, expires_at) "
            "VALUES (?, ?, ?, ?) "
            "ON CONFLICT(location_key, model_name) DO UPDATE SET "
            "data_json = excluded.data_json, expires_at = excluded.expires_at, "
            "created_at = CURRENT_TIMESTAMP",
            (location_key(lat, lon), model, json.dumps(data), (now + ttl).isoformat()),
        )
        conn.commit()
    except sqlite3.Error as e:
        raise CacheUnavailable(f"Cache write failed: {e}") from e


def purge_expired(conn: sqlite3.Connection, now: datetime | None = None) -> int:
    """Delete expired rows. Returns the number removed."""
    now = now or utc_now()
    try:
        cursor = conn.execute(
            "DELETE FROM forecast_cache WHERE expires_at <= ?", (now.isoformat(),)
        )
        conn.commit()
    except sqlite3.Error as e:
        raise CacheUnavailable(f"Cache purge failed: {e}") from e
    return cursor.rowcount


class ForecastCache:
    """Cache facade that never fails its caller: errors read as misses."""

    def __init__(self, conn: sqlite3.Connection | None, ttl: timedelta = DEFAULT_TTL):
        self.conn = conn
        self.ttl = ttl

    def get(self, lat: float, lon: float, model: str, now: datetime | None = None) -> dict | None:
        if self.conn is None:
            return None
        try:
            return get_cached_forecast(self.conn, lat, lon, model, now)
        except (CacheUnavailable, ValueError) as e:
            logger.warning("Cache unavailable, fetching fresh data: %s", e)
            return None

    def put(
        self, lat: float, lon: float, model: str, data: dict, now: datetime | None = None
    ) -> None:
        if self.conn is None:
            return
        try:
            cache_forecast(self.conn, lat, lon, model, data, self.ttl, now)
        except (CacheUnavailable, TypeError, ValueError) as e:
            logger.warning("Cache unavailable, skipping cache save: %s", e)
