import sqlite3
import aiosqlite
import datetime
from contextlib import contextmanager, asynccontextmanager
from decimal import Decimal
from typing import List, Tuple

from errors import ExerciseError, ExerciseNotFoundError
from models import ActivityType, Exercise


EXERCISE_COLUMNS = (
    "id, day, type, title, target, progress, created_at_utc, updated_at_utc"
)


def _row_to_exercise(row: Tuple) -> Exercise:
    ex_id, day, ex_type, title, target, progress, created, updated = row
    return Exercise(
        id=ex_id,
        day=datetime.date.fromisoformat(day),
        type=ActivityType(ex_type),
        title=title,
        target=Decimal(target),
        progress=Decimal(progress),
        created_at=datetime.datetime.fromisoformat(created),
        updated_at=datetime.datetime.fromisoformat(updated),
    )


def _exercise_params(exercise: Exercise) -> Tuple:
    return (
        exercise.id,
        exercise.day.isoformat(),
        exercise.type.value,
        exercise.title,
        str(exercise.target),
        str(exercise.progress),
        exercise.created_at.isoformat(),
        exercise.updated_at.isoformat(),
    )


class Database:
    """Provides SQLite connection management and schema initialization."""

    _TABLE_DEFINITIONS = {
        "exercises": (
            """CREATE TABLE exercises (
                    id TEXT PRIMARY KEY,
                    day TEXT NOT NULL,
                    type TEXT NOT NULL CHECK (length(type) <= 32),
                    title TEXT NOT NULL CHECK (length(title) <= 200),
                    target TEXT NOT NULL CHECK (CAST(target AS REAL) > 0),
                    progress TEXT NOT NULL DEFAULT '0' CHECK (CAST(progress AS REAL) >= 0),
                    created_at_utc TEXT NOT NULL,
                    updated_at_utc TEXT NOT NULL
                );""",
            [
                "id",
                "day",
                "type",
                "title",
                "target",
                "progress",
                "created_at_utc",
                "updated_at_utc",
            ],
        ),
    }

    def __init__(self, db_path: str = "calendar.db") -> None:
        self._db_path = db_path
        self._ensure_schema()
        self._ensure_indexes()

    @contextmanager
    def _connection(self):
        connection = sqlite3.connect(self._db_path)
        try:
            yield connection
            connection.commit()
        finally:
            connection.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            for table, (sql, columns) in self._TABLE_DEFINITIONS.items():
                self._ensure_table(conn, table, sql, columns)

    def _ensure_indexes(self) -> None:
        with self._connection() as conn:
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_exercises_day ON exercises (day);"
            )

    def _ensure_table(
        self, conn: sqlite3.Connection, table: str, sql: str, columns: List[str]
    ) -> None:
        cur = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?;", (table,)
        )
        if cur.fetchone() is None:
            conn.execute(sql)
            return

        cur = conn.execute(f"PRAGMA table_info({table});")
        existing_cols = [row[1] for row in cur.fetchall()]
        if existing_cols == columns:
            return

        conn.execute(f"DROP TABLE IF EXISTS {table}_old;")
        conn.execute(f"ALTER TABLE {table} RENAME TO {table}_old;")
        conn.execute(sql)

        common = [c for c in existing_cols if c in columns]
        if common:
            cols = ", ".join(common)
            missing = [c for c in columns if c not in existing_cols]
            if missing:
                def default_val(col: str) -> str:
                    if col == "progress":
                        return "'0'"
                    if col in ("created_at_utc", "updated_at_utc"):
                        return "strftime('%Y-%m-%dT%H:%M:%S+00:00', 'now')"
                    return "NULL"

                defaults = ", ".join(default_val(c) for c in missing)
                conn.execute(
                    f"INSERT INTO {table} ({cols}, {', '.join(missing)}) SELECT {cols}, {defaults} FROM {table}_old;"
                )
            else:
                conn.execute(
                    f"INSERT INTO {table} ({cols}) SELECT {cols} FROM {table}_old;"
                )
        conn.execute(f"DROP TABLE {table}_old;")


class BaseRepository(Database):
    """Base repository providing helper methods."""

    def execute(self, query: str, params: Tuple = ()) -> int:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.lastrowid

    def fetch_all(self, query: str, params: Tuple = ()) -> List[Tuple]:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.fetchall()

    def _delete_all(self, table: str) -> None:
        self.execute(f"DELETE FROM {table};")


class ExerciseRepository(BaseRepository):
    """Repository for scheduled exercises."""

    def insert(self, exercise: Exercise) -> Exercise:
        try:
            self.execute(
                f"INSERT INTO exercises ({EXERCISE_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?);",
                _exercise_params(exercise),
            )
        except sqlite3.IntegrityError as e:
            if len(exercise.title) > 200:
                raise ExerciseError(
                    "Field 'title' must be at most 200 characters.", "title"
                ) from e
            raise
        return exercise

    def fetch(
        self, start_day: datetime.date, end_day: datetime.date
    ) -> List[Exercise]:
        rows = self.fetch_all(
            f"SELECT {EXERCISE_COLUMNS} FROM exercises "
            "WHERE day >= ? AND day <= ? ORDER BY day, created_at_utc, id;",
            (start_day.isoformat(), end_day.isoformat()),
        )
        return [_row_to_exercise(r) for r in rows]

    def fetch_all_exercises(self) -> List[Exercise]:
        rows = self.fetch_all(
            f"SELECT {EXERCISE_COLUMNS} FROM exercises ORDER BY day, created_at_utc, id;"
        )
        return [_row_to_exercise(r) for r in rows]

    def fetch_detail(self, exercise_id: str) -> Exercise:
        rows = self.fetch_all(
            f"SELECT {EXERCISE_COLUMNS} FROM exercises WHERE id = ?;",
            (exercise_id,),
        )
        if not rows:
            raise ExerciseNotFoundError(exercise_id)
        return _row_to_exercise(rows[0])

    def update_progress(
        self,
        exercise_id: str,
        progress: Decimal,
        updated_at: datetime.datetime,
    ) -> Exercise:
        existing = self.fetch_detail(exercise_id)
        self.execute(
            "UPDATE exercises SET progress = ?, updated_at_utc = ? WHERE id = ?;",
            (str(progress), updated_at.isoformat(), exercise_id),
        )
        return existing.with_progress(progress, updated_at)

    def delete_all(self) -> None:
        self._delete_all("exercises")


class AsyncDatabase(Database):
    """Provides asynchronous connection management."""

    @asynccontextmanager
    async def _async_connection(self):
        conn = await aiosqlite.connect(self._db_path)
        try:
            yield conn
            await conn.commit()
        finally:
            await conn.close()


class AsyncBaseRepository(AsyncDatabase):
    """Asynchronous variant of BaseRepository using aiosqlite."""

    async def execute(self, query: str, params: Tuple = ()) -> int:
        async with self._async_connection() as conn:
            cursor = await conn.execute(query, params)
            await conn.commit()
            return cursor.lastrowid

    async def fetch_all(self, query: str, params: Tuple = ()) -> List[Tuple]:
        async with self._async_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return rows

    async def _delete_all(self, table: str) -> None:
        await self.execute(f"DELETE FROM {table};")


class AsyncExerciseRepository(AsyncBaseRepository):
    """Async repository for scheduled exercises."""

    async def insert(self, exercise: Exercise) -> Exercise:
        try:
            await self.execute(
                f"INSERT INTO exercises ({EXERCISE_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?);",
                _exercise_params(exercise),
            )
        except sqlite3.IntegrityError as e:
            if len(exercise.title) > 200:
                raise ExerciseError(
                    "Field 'title' must be at most 200 characters.", "title"
                ) from e
            raise
        return exercise

    async def fetch(
        self, start_day: datetime.date, end_day: datetime.date
    ) -> List[Exercise]:
        rows = await self.fetch_all(
            f"SELECT {EXERCISE_COLUMNS} FROM exercises "
            "WHERE day >= ? AND day <= ? ORDER BY day, created_at_utc, id;",
            (start_day.isoformat(), end_day.isoformat()),
        )
        return [_row_to_exercise(r) for r in rows]

    async def fetch_detail(self, exercise_id: str) -> Exercise:
        rows = await self.fetch_all(
            f"SELECT {EXERCISE_COLUMNS} FROM exercises WHERE id = ?;",
            (exercise_id,),
        )
        if not rows:
            raise ExerciseNotFoundError(exercise_id)
        return _row_to_exercise(rows[0])

    async def update_progress(
        self,
        exercise_id: str,
        progress: Decimal,
        updated_at: datetime.datetime,
    ) -> Exercise:
        existing = await self.fetch_detail(exercise_id)
        await self.execute(
            "UPDATE exercises SET progress = ?, updated_at_utc = ? WHERE id = ?;",
            (str(progress), updated_at.isoformat(), exercise_id),
        )
        return existing.with_progress(progress, updated_at)

    async def delete_all(self) -> None:
        await self._delete_all("exercises")
