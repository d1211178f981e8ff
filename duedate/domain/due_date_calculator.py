"""
Core business logic for calculating due dates in working time.

Pure domain logic: no configuration loading and no I/O apart from logging.
"""

import logging
from datetime import datetime
from typing import Mapping, Optional, Union

import pendulum
from pendulum import DateTime

from .exceptions import CalendarPolicyError
from .models import DEFAULT_POLICY, CalendarPolicy, TurnaroundTime

logger = logging.getLogger(__name__)

Turnaround = Union[TurnaroundTime, Mapping[str, int]]


class DueDateCalculator:
    """
    Walks forward through working time until a turnaround is used up.

    Algorithm:
    1. Convert the turnaround to seconds (a day is one working day)
    2. Take the seconds left in the current day
    3. If the remainder fits, add it to the clock and stop
    4. Otherwise consume the day and jump to the next working day start

    The submit timestamp is used as given. Outside working hours the day
    capacity is not clamped, so a submit after hours *adds* to the remaining
    time before rolling over and one before hours counts the early hours.
    Weekend and holiday submits are treated like working days. Set
    ``roll_forward_submit`` to move such submits to the next working
    period start first.
    """

    def __init__(
        self,
        policy: CalendarPolicy = DEFAULT_POLICY,
        roll_forward_submit: bool = False,
        max_skip_days: int = 366,
    ):
        if max_skip_days < 1:
            raise CalendarPolicyError(f"max_skip_days must be positive, got {max_skip_days}")
        self.policy = policy
        self.roll_forward_submit = roll_forward_submit
        self.max_skip_days = max_skip_days

    def calculate_due_date(self, submit: datetime, turnaround: Turnaround) -> DateTime:
        """
        Calculate the due date for a submit timestamp and turnaround.

        Args:
            submit: Submission timestamp (naive values are taken as UTC)
            turnaround: TurnaroundTime or mapping of days/hours/minutes/seconds

        Returns:
            Due date as a pendulum DateTime

        Raises:
            InvalidTurnaroundError: If the turnaround is malformed
            CalendarPolicyError: If no working day is found within max_skip_days
        """
        if not isinstance(turnaround, TurnaroundTime):
            turnaround = TurnaroundTime.from_mapping(turnaround)

        remaining = turnaround.total_seconds(self.policy.working_day_seconds)
        due = _as_datetime(submit)

        if remaining == 0:
            return due

        if not self.policy.within_working_hours(due):
            if self.roll_forward_submit:
                due = self.roll_forward(due)
                logger.debug("Submit rolled forward to %s", due)
            else:
                logger.warning(
                    "Submit %s is outside working hours; counting from it unchanged",
                    due.to_datetime_string(),
                )

        while remaining > 0:
            available = self.available_seconds_in_day(due)

            if remaining <= available:
                due = due.add(seconds=remaining)
                remaining = 0
            else:
                remaining -= available
                logger.debug(
                    "Used %d seconds on %s, %d remaining",
                    available, due.to_date_string(), remaining,
                )
                due = self.next_working_day_start(due)

        return due

    def available_seconds_in_day(self, dt: DateTime) -> int:
        """
        Seconds between ``dt`` and the end of the working window that day.

        Not clamped: negative after hours, above a full day before hours.
        """
        remaining_hours = self.policy.end_hour - dt.hour
        return remaining_hours * 3600 - dt.minute * 60 - dt.second

    def next_working_day_start(self, dt: DateTime) -> DateTime:
        """
        Start of the first working period strictly after the day of ``dt``.

        Raises:
            CalendarPolicyError: If more than max_skip_days days are skipped
        """
        dt = _as_datetime(dt)
        candidate = self._day_start(dt.add(days=1))
        skipped = 0

        while not self.policy.is_working_period_day(candidate):
            skipped += 1
            if skipped > self.max_skip_days:
                raise CalendarPolicyError(
                    f"No working day found within {self.max_skip_days} days "
                    f"after {dt.to_date_string()}"
                )
            candidate = candidate.add(days=1)

        return candidate

    def roll_forward(self, dt: DateTime) -> DateTime:
        """Move a timestamp outside working hours to the next working period start."""
        dt = _as_datetime(dt)
        if self.policy.within_working_hours(dt):
            return dt
        if self.policy.is_working_period_day(dt) and dt.hour < self.policy.start_hour:
            return self._day_start(dt)
        return self.next_working_day_start(dt)

    def _day_start(self, dt: DateTime) -> DateTime:
        return dt.set(hour=self.policy.start_hour, minute=0, second=0, microsecond=0)


def _as_datetime(value: datetime) -> DateTime:
    if isinstance(value, DateTime):
        return value
    return pendulum.instance(value)


def calculate_due_date(
    submit: datetime,
    turnaround: Turnaround,
    policy: Optional[CalendarPolicy] = None,
) -> DateTime:
    """Calculate a due date with a one-off calculator for ``policy``."""
    calculator = DueDateCalculator(policy=policy or DEFAULT_POLICY)
    return calculator.calculate_due_date(submit, turnaround)
