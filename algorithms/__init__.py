from .date_key import DateKey
from .status_resolver import ExerciseStatus, StatusResolver

__all__ = ["DateKey", "ExerciseStatus", "StatusResolver"]
