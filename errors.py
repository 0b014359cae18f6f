class ExerciseError(ValueError):
    """Base class for rejected exercise input."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidFormatError(ExerciseError):
    """Date text is not a valid ``YYYY-MM-DD`` calendar date."""

    def __init__(self, field: str = "date", message: str | None = None) -> None:
        super().__init__(
            message or f"Field '{field}' must have format YYYY-MM-DD.", field
        )


class InvalidRangeError(ExerciseError):
    def __init__(self, message: str = "'from' must be less than or equal to 'to'.") -> None:
        super().__init__(message, "from")


class UnsupportedTypeError(ExerciseError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Unsupported activity type '{value}'.", "type")
        self.value = value


class InvalidTargetError(ExerciseError):
    def __init__(self) -> None:
        super().__init__("Field 'target' must be greater than zero.", "target")


class InvalidProgressError(ExerciseError):
    def __init__(self) -> None:
        super().__init__(
            "Field 'progress' must be greater than or equal to zero.", "progress"
        )


class ExerciseNotFoundError(ExerciseError):
    def __init__(self, exercise_id: str) -> None:
        super().__init__("Exercise not found.", "id")
        self.exercise_id = exercise_id
