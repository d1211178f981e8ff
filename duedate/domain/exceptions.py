"""
Domain-specific exception hierarchy for the due date calculator.
"""


class DueDateError(Exception):
    """Base class for all application-level errors."""


class InvalidTurnaroundError(DueDateError, ValueError):
    """Raised when a turnaround duration has negative or non-integer parts."""


class CalendarPolicyError(DueDateError, ValueError):
    """Raised when a calendar policy is invalid or never yields a working day."""
