from __future__ import annotations

import datetime
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

from algorithms import DateKey, ExerciseStatus, StatusResolver
from errors import UnsupportedTypeError


class ActivityType(str, Enum):
    """Closed set of activities that can be scheduled."""

    RUN = "run"
    BIKE = "bike"
    SWIM = "swim"
    YOGA = "yoga"
    STRENGTH = "strength"

    @classmethod
    def from_text(cls, value: str) -> "ActivityType":
        """Parse ``value`` case-insensitively, ignoring surrounding blanks."""
        normalized = str(value or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedTypeError(value) from None


@dataclass(frozen=True)
class Exercise:
    """One planned activity on one day."""

    id: str
    day: datetime.date
    type: ActivityType
    title: str
    target: Decimal
    progress: Decimal
    created_at: datetime.datetime
    updated_at: datetime.datetime

    def status(self, today: datetime.date) -> ExerciseStatus:
        return StatusResolver.resolve(self.day, self.progress, self.target, today)

    def with_progress(
        self, progress: Decimal, updated_at: datetime.datetime
    ) -> "Exercise":
        return replace(self, progress=progress, updated_at=updated_at)

    def sort_key(self) -> tuple[datetime.date, datetime.datetime, str]:
        return (self.day, self.created_at, self.id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": DateKey.format(self.day),
            "type": self.type.value,
            "title": self.title,
            "target": float(self.target),
            "progress": float(self.progress),
        }


@dataclass
class DailySummary:
    """Per-day status counts for the exercises of a queried range."""

    day: datetime.date
    planned: int = 0
    in_progress: int = 0
    done: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.planned + self.in_progress + self.done + self.skipped

    def add(self, status: ExerciseStatus) -> None:
        if status is ExerciseStatus.PLANNED:
            self.planned += 1
        elif status is ExerciseStatus.IN_PROGRESS:
            self.in_progress += 1
        elif status is ExerciseStatus.DONE:
            self.done += 1
        elif status is ExerciseStatus.SKIPPED:
            self.skipped += 1
        else:  # pragma: no cover - closed enum
            raise ValueError(f"unknown status {status!r}")

    def to_dict(self) -> dict:
        return {
            "date": DateKey.format(self.day),
            "totalExercises": self.total,
            "plannedExercises": self.planned,
            "inProgressExercises": self.in_progress,
            "doneExercises": self.done,
            "skippedExercises": self.skipped,
        }
