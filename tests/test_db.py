import os
import sys
import datetime
import sqlite3
from decimal import Decimal

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import ExerciseRepository
from errors import ExerciseError, ExerciseNotFoundError


@pytest.fixture
def repo(tmp_path):
    return ExerciseRepository(str(tmp_path / "calendar.db"))


def test_insert_and_fetch_detail(repo, make_exercise):
    ex = make_exercise(target="12.50", progress="0")
    repo.insert(ex)
    stored = repo.fetch_detail(ex.id)
    assert stored == ex
    assert stored.target == Decimal("12.50")


def test_fetch_range_is_inclusive(repo, make_exercise):
    for day in ["2024-12-31", "2025-01-01", "2025-01-02", "2025-01-03"]:
        repo.insert(make_exercise(day=day))
    rows = repo.fetch(datetime.date(2025, 1, 1), datetime.date(2025, 1, 2))
    assert [r.day.isoformat() for r in rows] == ["2025-01-01", "2025-01-02"]
    assert len(repo.fetch_all_exercises()) == 4


def test_update_progress(repo, make_exercise):
    ex = make_exercise()
    repo.insert(ex)
    stamp = datetime.datetime(2025, 1, 5, 12, 0, tzinfo=datetime.timezone.utc)
    updated = repo.update_progress(ex.id, Decimal("4.5"), stamp)
    assert updated.progress == Decimal("4.5")
    assert updated.updated_at == stamp
    assert repo.fetch_detail(ex.id) == updated
    assert updated.created_at == ex.created_at


def test_unknown_id(repo):
    with pytest.raises(ExerciseNotFoundError):
        repo.fetch_detail("missing")
    with pytest.raises(ExerciseNotFoundError):
        repo.update_progress("missing", Decimal("1"), datetime.datetime.now())


def test_storage_constraints(repo, make_exercise):
    with pytest.raises(ExerciseError) as exc:
        repo.insert(make_exercise(title="x" * 201))
    assert exc.value.field == "title"
    with pytest.raises(sqlite3.IntegrityError):
        repo.insert(make_exercise(target="0"))


def test_delete_all(repo, make_exercise):
    repo.insert(make_exercise())
    repo.delete_all()
    assert repo.fetch_all_exercises() == []


def test_day_index_exists(repo, tmp_path):
    conn = sqlite3.connect(str(tmp_path / "calendar.db"))
    names = [r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='index'")]
    conn.close()
    assert "idx_exercises_day" in names
