"""Recurring event (template) model."""

from datetime import date, time
from typing import Optional

from pydantic import BaseModel, Field

from models.bounds import TemplateEnd, Unbounded, end_before
from models.recurrence import RecurrenceRule


class RecurringEvent(BaseModel):
    """A recurring commitment: a weekly pattern with a daily time window.

    Times are local wall-clock times in the creator's zone; the window
    applies on every date the rule fires between ``start_date`` and ``end``.

    Args:
        recurring_event_id: Storage identifier (None until persisted).
        creator_id: ID of the user who owns the template.
        name: Template name.
        start_date: First date the template applies to.
        end: Last date (Bounded) or Unbounded for an infinite template.
        start_time: Local start time of each occurrence.
        end_time: Local end time of each occurrence.
        recurrence_rule: Weekly day-of-week pattern.
        skip_days: Dates explicitly excluded from the pattern.
        confirmed: Whether the template is scheduled. Drafts never conflict.
    """

    recurring_event_id: Optional[int] = Field(
        default=None, description="Storage identifier"
    )
    creator_id: int = Field(description="Owner user ID")
    name: str = Field(default="", description="Template name")
    start_date: date = Field(description="First applicable date")
    end: TemplateEnd = Field(default_factory=Unbounded, description="End bound")
    start_time: time = Field(description="Local start time of day")
    end_time: time = Field(description="Local end time of day")
    recurrence_rule: RecurrenceRule = Field(description="Weekly recurrence pattern")
    skip_days: set[date] = Field(
        default_factory=set, description="Explicitly skipped dates"
    )
    confirmed: bool = Field(default=False, description="Scheduled (not a draft)")

    @property
    def is_unbounded(self) -> bool:
        """Check if the template recurs indefinitely."""
        return isinstance(self.end, Unbounded)

    def covers(self, day: date) -> bool:
        """Check if a date lies within the template's date range."""
        return self.start_date <= day and not end_before(self.end, day)

    def add_skip_day(self, day: date) -> None:
        """Exclude a date from the template's occurrences."""
        self.skip_days.add(day)

    def remove_skip_day(self, day: date) -> None:
        """Re-enable a previously skipped date. Unknown dates are ignored."""
        self.skip_days.discard(day)

    def time_window_overlaps(self, start: time, end: time) -> bool:
        """Check closed-interval overlap of ``[start, end]`` with this window.

        Boundary touching counts as overlap.
        """
        return start <= self.end_time and end >= self.start_time

    def summary(self) -> str:
        """Describe the template's recurrence in English."""
        return self.recurrence_rule.summary(self.start_date, self.end)
