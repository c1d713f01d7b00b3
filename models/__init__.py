"""Event planner data models package.

This package contains the data types the conflict core works on:
standalone events, recurring event templates, their recurrence rules and
the tagged end bound of a template's date range.
"""

from models.bounds import (
    FAR_FUTURE_DATE,
    Bounded,
    TemplateEnd,
    Unbounded,
    earlier_end,
    end_before,
    end_from_date,
    end_to_date,
    includes,
)
from models.event import Event
from models.recurrence import DayOfWeek, RecurrenceFrequency, RecurrenceRule
from models.recurring_event import RecurringEvent

__all__ = [
    "FAR_FUTURE_DATE",
    "Bounded",
    "TemplateEnd",
    "Unbounded",
    "earlier_end",
    "end_before",
    "end_from_date",
    "end_to_date",
    "includes",
    "Event",
    "DayOfWeek",
    "RecurrenceFrequency",
    "RecurrenceRule",
    "RecurringEvent",
]
