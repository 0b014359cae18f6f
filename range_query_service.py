from __future__ import annotations

import datetime
from typing import Callable

from loguru import logger

from algorithms import DateKey
from db import ExerciseRepository
from errors import InvalidRangeError
from models import DailySummary, Exercise
from summary_service import DailySummaryAggregator


class RangeQueryService:
    """Validates date ranges and answers list and summary queries."""

    def __init__(
        self,
        exercise_repo: ExerciseRepository,
        aggregator: DailySummaryAggregator | None = None,
        today_provider: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self.exercises = exercise_repo
        self.aggregator = aggregator or DailySummaryAggregator()
        self.today_provider = today_provider

    @staticmethod
    def parse_range(
        start: str, end: str
    ) -> tuple[datetime.date, datetime.date]:
        start_day = DateKey.parse(start, "from")
        end_day = DateKey.parse(end, "to")
        if start_day > end_day:
            raise InvalidRangeError()
        return start_day, end_day

    def _fetch(self, start: str, end: str) -> list[Exercise]:
        start_day, end_day = self.parse_range(start, end)
        rows = self.exercises.fetch(start_day, end_day)
        logger.debug(f"Fetched {len(rows)} exercises for {start}..{end}")
        return rows

    def list_exercises(self, start: str, end: str) -> list[Exercise]:
        """Return exercises in the inclusive range ordered by day, creation time, id."""
        return sorted(self._fetch(start, end), key=Exercise.sort_key)

    def summarize(
        self, start: str, end: str, today: datetime.date | None = None
    ) -> list[DailySummary]:
        rows = self._fetch(start, end)
        if today is None:
            today = self.today_provider()
        return self.aggregator.summarize(rows, today)
