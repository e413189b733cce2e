"""Tests for the SQLite connection manager and migrations."""

from snowhound.storage.database import connect, open_database, run_migrations


class TestDatabase:
    def test_connect_wal_mode(self, tmp_path):
        conn = connect(tmp_path / "test.db")
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode == "wal"
        conn.close()

    def test_connect_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "snowhound.db"
        conn = connect(path)
        assert path.parent.is_dir()
        conn.close()

    def test_run_migrations(self, tmp_path):
        conn = connect(tmp_path / "test.db")
        applied = run_migrations(conn)
        assert "v001_initial" in applied

        tables = {
            row[0]
            for row in conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        }
        assert {"forecast_cache", "kv_store", "schema_versions"} <= tables
        conn.close()

    def test_migrations_idempotent(self, tmp_path):
        conn = connect(tmp_path / "test.db")
        run_migrations(conn)
        assert run_migrations(conn) == []
        conn.close()

    def test_open_database(self, tmp_path):
        conn = open_database(tmp_path / "data" / "snowhound.db")
        versions = [row[0] for row in conn.execute("SELECT version FROM schema_versions")]
        assert versions == ["v001_initial"]
        conn.close()

    def test_in_memory(self):
        conn = open_database(":memory:")
        assert conn.execute("SELECT COUNT(*) FROM kv_store").fetchone()[0] == 0
        conn.close()
