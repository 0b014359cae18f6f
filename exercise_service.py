from __future__ import annotations

import datetime
import uuid
from typing import Any, Callable, Mapping

from loguru import logger

from db import ExerciseRepository
from exercise_validator import ExerciseValidator
from models import Exercise


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class ExerciseService:
    """Creates exercises and records progress after validation."""

    def __init__(
        self,
        exercise_repo: ExerciseRepository,
        validator: ExerciseValidator | None = None,
        clock: Callable[[], datetime.datetime] = utc_now,
    ) -> None:
        self.exercises = exercise_repo
        self.validator = validator or ExerciseValidator()
        self.clock = clock

    def create(self, payload: Mapping[str, Any]) -> Exercise:
        draft = self.validator.validate_create(payload)
        now = self.clock()
        exercise = Exercise(
            id=str(uuid.uuid4()),
            day=draft.day,
            type=draft.type,
            title=draft.title,
            target=draft.target,
            progress=draft.progress,
            created_at=now,
            updated_at=now,
        )
        self.exercises.insert(exercise)
        logger.info(
            f"Created exercise {exercise.id} ({exercise.type.value}) on {exercise.day}"
        )
        return exercise

    def get(self, exercise_id: str) -> Exercise:
        return self.exercises.fetch_detail(exercise_id)

    def update_progress(self, exercise_id: str, progress: Any) -> Exercise:
        """Store ``progress`` clamped to the exercise target.

        Negative values are rejected before the exercise is looked up;
        values above the target are reduced to the target.
        """
        requested = self.validator.validate_progress(progress)
        existing = self.exercises.fetch_detail(exercise_id)
        applied = self.validator.clamp_progress(requested, existing.target)
        updated = self.exercises.update_progress(exercise_id, applied, self.clock())
        logger.info(
            f"Updated progress of {exercise_id}: requested={requested} applied={applied}"
        )
        return updated
