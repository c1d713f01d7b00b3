"""Fixtures for recurring events."""

from datetime import date, time

import pytest

from models.bounds import Bounded, TemplateEnd, Unbounded
from models.recurrence import DayOfWeek, RecurrenceRule
from models.recurring_event import RecurringEvent


def weekly(*names: str) -> RecurrenceRule:
    """Build a weekly rule from lowercase day names."""
    return RecurrenceRule.weekly(*(DayOfWeek(name) for name in names))


def create_recurring_event(
    rule: RecurrenceRule | None = None,
    start_date: date = date(2025, 7, 1),
    end: TemplateEnd | date | None = None,
    start_time: time = time(9, 0),
    end_time: time = time(10, 0),
    creator_id: int = 1,
    name: str = "Weekly sync",
    confirmed: bool = True,
    **kwargs,
) -> RecurringEvent:
    """Create a RecurringEvent with sensible defaults.

    Args:
        rule: Recurrence rule (defaults to every Monday).
        start_date: First date of the series.
        end: End bound, a plain date (wrapped as Bounded) or None for Unbounded.
        start_time: Local start time of each occurrence.
        end_time: Local end time of each occurrence.
        creator_id: Owner of the series.
        name: Series name.
        confirmed: Whether the series is scheduled. Defaults to True.
        **kwargs: Additional fields to override.

    Returns:
        RecurringEvent instance ready for testing.
    """
    if end is None:
        end = Unbounded()
    elif isinstance(end, date):
        end = Bounded(on=end)

    return RecurringEvent(
        creator_id=creator_id,
        name=name,
        start_date=start_date,
        end=end,
        start_time=start_time,
        end_time=end_time,
        recurrence_rule=rule or weekly("monday"),
        confirmed=confirmed,
        **kwargs,
    )


@pytest.fixture
def monday_series():
    """Provide an endless Monday 09:00-10:00 series starting 2025-07-01."""
    return create_recurring_event()
