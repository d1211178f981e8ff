"""
Domain models for the working calendar and turnaround durations.
"""

import re
from dataclasses import dataclass, fields
from datetime import date
from typing import FrozenSet, Mapping

from pendulum import DateTime

from .exceptions import CalendarPolicyError, InvalidTurnaroundError


# US holidays for one reference year. Most of them are "Nth weekday of month"
# rules, so this table is only accurate for the year it was computed for.
US_HOLIDAYS: FrozenSet[str] = frozenset({
    "01/01",  # New Year's Day
    "01/20",  # Martin Luther King Jr. Day
    "02/17",  # Presidents' Day
    "05/26",  # Memorial Day
    "07/04",  # Independence Day
    "09/01",  # Labor Day
    "10/13",  # Columbus Day
    "11/11",  # Veterans Day
    "11/27",  # Thanksgiving Day
    "12/25",  # Christmas Day
})

WEEKDAYS: FrozenSet[int] = frozenset({0, 1, 2, 3, 4})  # Monday to Friday

_HOLIDAY_PATTERN = re.compile(r"^(\d{2})/(\d{2})$")


def validate_holiday(value: str) -> str:
    """
    Check that a holiday is a zero-padded ``MM/DD`` string for a real day.

    February 29th is accepted since the table is year-independent.
    """
    match = _HOLIDAY_PATTERN.match(value)
    if not match:
        raise CalendarPolicyError(f"Holiday must be formatted as MM/DD, got '{value}'")

    month, day = int(match.group(1)), int(match.group(2))
    try:
        date(2000, month, day)  # leap year
    except ValueError as exc:
        raise CalendarPolicyError(f"Holiday '{value}' is not a valid month/day") from exc

    return value


@dataclass(frozen=True)
class CalendarPolicy:
    """
    Immutable working calendar: daily working window, working weekdays
    and fixed-date holidays.

    Weekdays use ``datetime.weekday()`` numbering (0=Monday, 6=Sunday).
    """
    start_hour: int = 9
    end_hour: int = 17
    working_weekdays: FrozenSet[int] = WEEKDAYS
    holidays: FrozenSet[str] = US_HOLIDAYS

    def __post_init__(self):
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise CalendarPolicyError(
                f"Working hours must satisfy 0 <= start < end <= 24, "
                f"got {self.start_hour}-{self.end_hour}"
            )

        weekdays = frozenset(self.working_weekdays)
        if not weekdays:
            raise CalendarPolicyError("At least one working weekday is required")
        invalid_days = sorted(day for day in weekdays if day not in range(7))
        if invalid_days:
            raise CalendarPolicyError(f"Weekdays must be between 0 and 6, got {invalid_days}")

        holidays = frozenset(validate_holiday(h) for h in self.holidays)

        # Accept any iterable but store frozensets
        object.__setattr__(self, "working_weekdays", weekdays)
        object.__setattr__(self, "holidays", holidays)

    @property
    def working_day_seconds(self) -> int:
        """Length of one working day in seconds."""
        return (self.end_hour - self.start_hour) * 3600

    def is_working_day(self, dt: DateTime) -> bool:
        """Check if a given datetime falls on a working weekday."""
        return dt.weekday() in self.working_weekdays

    def is_holiday(self, dt: DateTime) -> bool:
        """Check if the month and day of a datetime match a holiday."""
        return dt.strftime("%m/%d") in self.holidays

    def is_working_period_day(self, dt: DateTime) -> bool:
        """Check if a datetime falls on a working weekday that is not a holiday."""
        return self.is_working_day(dt) and not self.is_holiday(dt)

    def within_working_hours(self, dt: DateTime) -> bool:
        """Check if a datetime lies inside the working window of a working day."""
        return (
            self.is_working_period_day(dt)
            and self.start_hour <= dt.hour < self.end_hour
        )


DEFAULT_POLICY = CalendarPolicy()


@dataclass(frozen=True)
class TurnaroundTime:
    """
    Turnaround duration in working days, hours, minutes and seconds.

    A day counts as one full working day of the policy in use, not 24 hours.
    """
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidTurnaroundError(
                    f"{f.name} must be an integer, got {value!r}"
                )
            if value < 0:
                raise InvalidTurnaroundError(f"{f.name} must not be negative, got {value}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, int]) -> "TurnaroundTime":
        """Build from a mapping with any subset of the duration keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise InvalidTurnaroundError(f"Unknown turnaround field(s): {', '.join(unknown)}")
        return cls(**values)

    def total_seconds(self, working_day_seconds: int) -> int:
        """Total working seconds, using the given length for each day."""
        return (
            self.days * working_day_seconds
            + self.hours * 3600
            + self.minutes * 60
            + self.seconds
        )

    def __str__(self) -> str:
        return f"{self.days}d {self.hours}h {self.minutes}m {self.seconds}s"
