"""Initial schema: forecast response cache and the key-value store."""

import sqlite3

DDL = [
    # Raw provider payloads keyed by rounded location and model
    """
    CREATE TABLE IF NOT EXISTS forecast_cache (
        location_key TEXT NOT NULL,
        model_name TEXT NOT NULL,
        data_json TEXT NOT NULL,
        expires_at TEXT NOT NULL,
        created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
        PRIMARY KEY (location_key, model_name)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_forecast_cache_expires ON forecast_cache(expires_at)",

    # Favorites and per-location snow depth history
    """
    CREATE TABLE IF NOT EXISTS kv_store (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
]


def up(conn: sqlite3.Connection) -> None:
    for stmt in DDL:
        conn.execute(stmt)
    conn.commit()
