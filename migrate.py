import sqlite3
import sys

def migrate(db_path='calendar.db'):
    conn = sqlite3.connect(db_path)
    cur = conn.cursor()
    cur.execute("PRAGMA table_info(exercises);")
    cols = [r[1] for r in cur.fetchall()]
    if not cols:
        conn.close()
        return
    if 'progress' not in cols:
        cur.execute("ALTER TABLE exercises ADD COLUMN progress TEXT NOT NULL DEFAULT '0';")
    if 'created_at_utc' not in cols:
        cur.execute("ALTER TABLE exercises ADD COLUMN created_at_utc TEXT;")
        cur.execute(
            "UPDATE exercises SET created_at_utc = strftime('%Y-%m-%dT%H:%M:%S+00:00', 'now') WHERE created_at_utc IS NULL;"
        )
    if 'updated_at_utc' not in cols:
        cur.execute("ALTER TABLE exercises ADD COLUMN updated_at_utc TEXT;")
        cur.execute(
            "UPDATE exercises SET updated_at_utc = created_at_utc WHERE updated_at_utc IS NULL;"
        )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_exercises_day ON exercises (day);")
    conn.commit()
    conn.close()

if __name__ == '__main__':
    path = sys.argv[1] if len(sys.argv) > 1 else 'calendar.db'
    migrate(path)
