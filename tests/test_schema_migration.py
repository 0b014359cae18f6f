import os
import sqlite3
import sys

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import Database, ExerciseRepository
from migrate import migrate

LEGACY_TABLE = (
    "CREATE TABLE exercises (id TEXT PRIMARY KEY, day TEXT NOT NULL, type TEXT NOT NULL, "
    "title TEXT NOT NULL, target TEXT NOT NULL, progress TEXT NOT NULL DEFAULT '0')"
)


def _legacy_db(path):
    conn = sqlite3.connect(str(path))
    conn.execute(LEGACY_TABLE)
    conn.execute(
        "INSERT INTO exercises VALUES ('a', '2025-01-01', 'run', 'Morning', '5', '2')"
    )
    conn.execute("CREATE TABLE exercises_old (id INTEGER)")
    conn.commit()
    conn.close()


def _columns(path):
    conn = sqlite3.connect(str(path))
    cols = [row[1] for row in conn.execute("PRAGMA table_info(exercises)")]
    conn.close()
    return cols


class TestSchemaMigration:
    def test_database_upgrades_legacy_table(self, tmp_path):
        db_file = tmp_path / "legacy.db"
        _legacy_db(db_file)

        Database(str(db_file))

        conn = sqlite3.connect(str(db_file))
        cur = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='exercises_old'"
        )
        assert cur.fetchone() is None
        conn.close()
        assert "updated_at_utc" in _columns(db_file)
        stored = ExerciseRepository(str(db_file)).fetch_detail("a")
        assert str(stored.progress) == "2"
        assert stored.created_at == stored.updated_at

    def test_migrate_script_adds_columns(self, tmp_path):
        db_file = tmp_path / "legacy.db"
        _legacy_db(db_file)
        migrate(str(db_file))
        cols = _columns(db_file)
        assert "created_at_utc" in cols
        assert "updated_at_utc" in cols
        conn = sqlite3.connect(str(db_file))
        row = conn.execute(
            "SELECT created_at_utc, updated_at_utc FROM exercises WHERE id = 'a'"
        ).fetchone()
        names = [r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='index'")]
        conn.close()
        assert row[0] is not None and row[0] == row[1]
        assert "idx_exercises_day" in names

    def test_migrate_on_empty_database(self, tmp_path):
        db_file = tmp_path / "empty.db"
        migrate(str(db_file))
        assert _columns(db_file) == []
