from __future__ import annotations

import datetime
from typing import Iterable

from models import DailySummary, Exercise


class DailySummaryAggregator:
    """Roll exercises up into per-day status counts."""

    @staticmethod
    def summarize(
        exercises: Iterable[Exercise], today: datetime.date
    ) -> list[DailySummary]:
        """Return one summary per day that has exercises, ordered by day.

        ``today`` is applied to every exercise of the batch so that a single
        call never classifies items against two different dates.
        """
        by_day: dict[datetime.date, DailySummary] = {}
        for exercise in exercises:
            summary = by_day.get(exercise.day)
            if summary is None:
                summary = by_day[exercise.day] = DailySummary(exercise.day)
            summary.add(exercise.status(today))
        return [by_day[day] for day in sorted(by_day)]
