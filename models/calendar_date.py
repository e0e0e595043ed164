"""Calendar date model.

CalendarDate is a plain (year, month, day) triple. It never carries a time of
day or a timezone, so arithmetic, comparison and formatting cannot shift a
date by one when it is serialized near midnight.
"""

import calendar
import re
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

from models.exceptions import InvalidDateError


ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
MIN_YEAR = 1
MAX_YEAR = 9999


def is_leap_year(year: int) -> bool:
    """Check whether a Gregorian year has a February 29.

    Args:
        year: Year to check.

    Returns:
        True for leap years.
    """
    return calendar.isleap(year)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a month.

    Args:
        year: Year of the month.
        month: Month number (1-12).

    Returns:
        Length of the month in days.
    """
    return calendar.monthrange(year, month)[1]


def _validated_parts(value: object, year: int, month: int, day: int) -> dict[str, int]:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidDateError(value, f"year must be between {MIN_YEAR} and {MAX_YEAR}")
    if not 1 <= month <= 12:
        raise InvalidDateError(value, "month must be between 1 and 12")
    if not 1 <= day <= days_in_month(year, month):
        raise InvalidDateError(value, f"{year:04d}-{month:02d} has no day {day}")
    return {"year": year, "month": month, "day": day}


def _split_iso(text: str) -> dict[str, int]:
    match = ISO_DATE_PATTERN.match(text.strip())
    if match is None:
        raise InvalidDateError(text)
    year, month, day = (int(part) for part in match.groups())
    return _validated_parts(text, year, month, day)


class CalendarDate(BaseModel):
    """A timezone-naive Gregorian calendar date.

    Accepts a ``YYYY-MM-DD`` string, a ``datetime.date`` or the three fields
    on input, and always serializes back to ``YYYY-MM-DD``.

    Args:
        year: Calendar year (1-9999).
        month: Month number (1-12).
        day: Day of month, valid for the given month.
    """

    model_config = ConfigDict(frozen=True)

    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR, description="Calendar year")
    month: int = Field(ge=1, le=12, description="Month number")
    day: int = Field(ge=1, le=31, description="Day of month")

    @model_validator(mode="before")
    @classmethod
    def coerce_input(cls, value: Any) -> Any:
        """Convert strings and ``datetime.date`` values into field dicts.

        Args:
            value: Raw input.

        Returns:
            A dict of fields, or the input unchanged.

        Raises:
            InvalidDateError: If a string is not a real ``YYYY-MM-DD`` date.
        """
        if isinstance(value, str):
            return _split_iso(value)
        if isinstance(value, date):
            return {"year": value.year, "month": value.month, "day": value.day}
        return value

    @model_validator(mode="after")
    def check_day_exists(self) -> "CalendarDate":
        """Reject days the month does not have (Feb 30, Apr 31, ...).

        Raises:
            InvalidDateError: If the day is past the end of the month.
        """
        _validated_parts(
            f"{self.year:04d}-{self.month:02d}-{self.day:02d}",
            self.year,
            self.month,
            self.day,
        )
        return self

    @model_serializer
    def serialize_date(self) -> str:
        """Serialize to the ``YYYY-MM-DD`` wire form."""
        return self.isoformat()

    @classmethod
    def parse(cls, text: str) -> "CalendarDate":
        """Parse a ``YYYY-MM-DD`` string.

        Args:
            text: Date string.

        Returns:
            The parsed date.

        Raises:
            InvalidDateError: If the text is malformed or names a date that
                does not exist.
        """
        if not isinstance(text, str):
            raise InvalidDateError(text, "expected a string")
        return cls(**_split_iso(text))

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        """Build from a ``datetime.date``, ignoring any time component."""
        return cls(year=value.year, month=value.month, day=value.day)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "CalendarDate":
        """Build from a proleptic Gregorian ordinal (0001-01-01 is 1).

        Raises:
            InvalidDateError: If the ordinal is outside the supported range.
        """
        try:
            return cls.from_date(date.fromordinal(ordinal))
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(ordinal, "ordinal out of range") from e

    @classmethod
    def try_create(cls, year: int, month: int, day: int) -> Optional["CalendarDate"]:
        """Build a date if it exists on the calendar.

        Args:
            year: Calendar year.
            month: Month number.
            day: Day of month.

        Returns:
            The date, or None when the combination is not a real date
            (e.g. a 31st in a 30-day month, Feb 29 in a common year).
        """
        if not MIN_YEAR <= year <= MAX_YEAR or not 1 <= month <= 12:
            return None
        if not 1 <= day <= days_in_month(year, month):
            return None
        return cls(year=year, month=month, day=day)

    def isoformat(self) -> str:
        """Render as ``YYYY-MM-DD`` straight from the fields."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()

    def to_date(self) -> date:
        """Convert to ``datetime.date``."""
        return date(self.year, self.month, self.day)

    def toordinal(self) -> int:
        """Return the proleptic Gregorian ordinal of this date."""
        return self.to_date().toordinal()

    def add_days(self, days: int) -> "CalendarDate":
        """Return the date ``days`` calendar days later (earlier if negative).

        Raises:
            InvalidDateError: If the result leaves the supported range.
        """
        return CalendarDate.from_ordinal(self.toordinal() + days)

    @property
    def day_of_week(self) -> int:
        """Day of week with Sunday as 0 and Saturday as 6."""
        return (self.to_date().weekday() + 1) % 7

    def first_of_month(self) -> "CalendarDate":
        """Return day 1 of this date's month."""
        return CalendarDate(year=self.year, month=self.month, day=1)

    def last_of_month(self) -> "CalendarDate":
        """Return the last day of this date's month."""
        return CalendarDate(
            year=self.year, month=self.month, day=days_in_month(self.year, self.month)
        )

    def _key(self) -> tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() >= other._key()


MIN_DATE = CalendarDate(year=MIN_YEAR, month=1, day=1)
MAX_DATE = CalendarDate(year=MAX_YEAR, month=12, day=31)
