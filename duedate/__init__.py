"""
duedate - Calculate due dates in working time.
"""

from .domain import (
    DEFAULT_POLICY,
    CalendarPolicy,
    DueDateCalculator,
    TurnaroundTime,
    calculate_due_date,
)

__version__ = "0.1.0"

__all__ = [
    "CalendarPolicy",
    "TurnaroundTime",
    "DueDateCalculator",
    "calculate_due_date",
    "DEFAULT_POLICY",
]
