import os
import sys
import datetime
from decimal import Decimal

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import AsyncExerciseRepository, ExerciseRepository
from errors import ExerciseError, ExerciseNotFoundError


@pytest.mark.asyncio
async def test_async_exercise_repo(tmp_path, make_exercise):
    db_file = str(tmp_path / "calendar.db")
    repo = AsyncExerciseRepository(db_file)
    ex = make_exercise(day="2025-03-01", target="20")
    await repo.insert(ex)
    rows = await repo.fetch(datetime.date(2025, 3, 1), datetime.date(2025, 3, 1))
    assert rows == [ex]
    stamp = datetime.datetime(2025, 3, 1, 9, 0, tzinfo=datetime.timezone.utc)
    updated = await repo.update_progress(ex.id, Decimal("20"), stamp)
    assert updated.progress == Decimal("20")
    assert ExerciseRepository(db_file).fetch_detail(ex.id) == updated
    await repo.delete_all()
    assert await repo.fetch(datetime.date(2025, 1, 1), datetime.date(2025, 12, 31)) == []


@pytest.mark.asyncio
async def test_async_unknown_id(tmp_path):
    repo = AsyncExerciseRepository(str(tmp_path / "calendar.db"))
    with pytest.raises(ExerciseNotFoundError):
        await repo.fetch_detail("missing")


@pytest.mark.asyncio
async def test_async_title_too_long(tmp_path, make_exercise):
    repo = AsyncExerciseRepository(str(tmp_path / "calendar.db"))
    with pytest.raises(ExerciseError) as exc:
        await repo.insert(make_exercise(title="x" * 201))
    assert exc.value.field == "title"
    assert await repo.fetch(datetime.date(2025, 1, 1), datetime.date(2025, 12, 31)) == []
