"""
Domain layer - Pure business logic without external dependencies.
"""

from .due_date_calculator import DueDateCalculator, calculate_due_date
from .exceptions import CalendarPolicyError, DueDateError, InvalidTurnaroundError
from .models import DEFAULT_POLICY, US_HOLIDAYS, CalendarPolicy, TurnaroundTime

__all__ = [
    "CalendarPolicy",
    "TurnaroundTime",
    "DueDateCalculator",
    "calculate_due_date",
    "DEFAULT_POLICY",
    "US_HOLIDAYS",
    "DueDateError",
    "InvalidTurnaroundError",
    "CalendarPolicyError",
]
