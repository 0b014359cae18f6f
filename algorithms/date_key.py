import datetime
import re

from errors import InvalidFormatError


class DateKey:
    """Strict conversion between calendar dates and ``YYYY-MM-DD`` text."""

    PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")

    @classmethod
    def parse(cls, text: str, field: str = "date") -> datetime.date:
        """Return the date spelled by ``text`` or raise ``InvalidFormatError``.

        Only the zero-padded form is accepted; ``2024-1-1``, trailing time
        components and impossible dates such as ``2024-02-30`` are rejected.
        """
        if not isinstance(text, str):
            raise InvalidFormatError(field)
        match = cls.PATTERN.fullmatch(text)
        if match is None:
            raise InvalidFormatError(field)
        year, month, day = (int(part) for part in match.groups())
        try:
            return datetime.date(year, month, day)
        except ValueError:
            raise InvalidFormatError(field) from None

    @staticmethod
    def format(value: datetime.date) -> str:
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
