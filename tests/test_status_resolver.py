import os
import sys
import datetime
from decimal import Decimal

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import ExerciseStatus, StatusResolver

TODAY = datetime.date(2025, 1, 2)
PAST = datetime.date(2025, 1, 1)
FUTURE = datetime.date(2025, 1, 3)


@pytest.mark.parametrize(
    "day,progress,target,expected",
    [
        (PAST, "10", "10", ExerciseStatus.DONE),
        (TODAY, "10", "10", ExerciseStatus.DONE),
        (FUTURE, "12", "10", ExerciseStatus.DONE),
        (PAST, "3", "10", ExerciseStatus.SKIPPED),
        (PAST, "0", "10", ExerciseStatus.SKIPPED),
        (TODAY, "0", "10", ExerciseStatus.PLANNED),
        (FUTURE, "0", "10", ExerciseStatus.PLANNED),
        (TODAY, "0.5", "10", ExerciseStatus.IN_PROGRESS),
        (FUTURE, "9.99", "10", ExerciseStatus.IN_PROGRESS),
    ],
)
def test_resolve(day, progress, target, expected):
    assert (
        StatusResolver.resolve(day, Decimal(progress), Decimal(target), TODAY)
        is expected
    )


def test_completed_late_exercise_is_done_not_skipped():
    status = StatusResolver.resolve(
        datetime.date(2020, 1, 1), Decimal("5"), Decimal("5"), TODAY
    )
    assert status is ExerciseStatus.DONE


def test_today_is_an_argument():
    day = datetime.date(2025, 1, 1)
    progress, target = Decimal("3"), Decimal("10")
    assert StatusResolver.resolve(day, progress, target, day) is ExerciseStatus.IN_PROGRESS
    assert StatusResolver.resolve(day, progress, target, TODAY) is ExerciseStatus.SKIPPED


def test_status_values():
    assert [s.value for s in ExerciseStatus] == [
        "planned",
        "in_progress",
        "done",
        "skipped",
    ]
