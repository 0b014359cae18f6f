import datetime
from decimal import Decimal
from enum import Enum


class ExerciseStatus(str, Enum):
    """Lifecycle status derived from progress, target and scheduled day."""

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    SKIPPED = "skipped"


class StatusResolver:
    """Derive an exercise status relative to a caller supplied ``today``."""

    @staticmethod
    def resolve(
        day: datetime.date,
        progress: Decimal,
        target: Decimal,
        today: datetime.date,
    ) -> ExerciseStatus:
        # order matters: a finished exercise stays done even when late
        if progress >= target:
            return ExerciseStatus.DONE
        if day < today:
            return ExerciseStatus.SKIPPED
        if progress <= 0:
            return ExerciseStatus.PLANNED
        return ExerciseStatus.IN_PROGRESS
