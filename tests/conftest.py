import os
import sys
import datetime
import uuid
from decimal import Decimal

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from models import ActivityType, Exercise

CREATED = datetime.datetime(2025, 1, 1, 8, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def make_exercise():
    def _make(
        day="2025-01-01",
        target="10",
        progress="0",
        type="run",
        created_at=CREATED,
        id=None,
        title=None,
    ):
        return Exercise(
            id=id or str(uuid.uuid4()),
            day=datetime.date.fromisoformat(day),
            type=ActivityType(type),
            title=title or f"{type} training",
            target=Decimal(target),
            progress=Decimal(progress),
            created_at=created_at,
            updated_at=created_at,
        )

    return _make
