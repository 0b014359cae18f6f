from __future__ import annotations

import datetime
import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from algorithms import DateKey
from errors import InvalidProgressError, InvalidTargetError
from localization import Translator, translator as default_translator
from models import ActivityType


@dataclass(frozen=True)
class ExerciseDraft:
    """Validated creation payload, ready to become an ``Exercise``."""

    day: datetime.date
    type: ActivityType
    title: str
    target: Decimal
    progress: Decimal = Decimal("0")


def to_decimal(value: Any) -> Decimal | None:
    """Return ``value`` as a finite ``Decimal`` or ``None`` if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


class ExerciseValidator:
    """Checks creation and progress payloads before anything is written."""

    def __init__(self, translator: Translator | None = None) -> None:
        self.translator = translator or default_translator

    def validate_create(self, payload: Mapping[str, Any]) -> ExerciseDraft:
        """Validate a creation payload.

        Checks run in field order ``date``, ``type``, ``target`` and the first
        failure is raised. A blank title becomes the localized default and
        any ``progress`` in the payload is ignored.
        """
        day = DateKey.parse(payload.get("date"), "date")
        activity = ActivityType.from_text(payload.get("type") or "")
        target = to_decimal(payload.get("target"))
        # stored as SQLite REAL and sent as a JSON float
        if target is None or target <= 0 or not 0 < float(target) < math.inf:
            raise InvalidTargetError()
        title = (payload.get("title") or "").strip()
        if not title:
            title = self.translator.default_title(activity.value)
        return ExerciseDraft(day=day, type=activity, title=title, target=target)

    @staticmethod
    def validate_progress(progress: Any) -> Decimal:
        value = to_decimal(progress)
        if value is None or value < 0:
            raise InvalidProgressError()
        return value

    @staticmethod
    def clamp_progress(progress: Decimal, target: Decimal) -> Decimal:
        """Clamp ``progress`` to the inclusive range [0, target]."""
        return max(Decimal("0"), min(progress, target))
