"""Shared request and response models for API endpoints.

The request models carry the wire form of events and recurring events
(recurrence rule as text, optional end date) and convert themselves into
the domain models the services and the detector work on.
"""

from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, Field

from models.bounds import Bounded, end_from_date
from models.event import Event
from models.recurrence import RecurrenceRule
from models.recurring_event import RecurringEvent


class EventRequest(BaseModel):
    """Request model for creating or replacing a standalone event.

    Attributes:
        creator_id: Owner of the event.
        name: Display name.
        start: Start instant (timezone-aware).
        end: End instant (timezone-aware).
        confirmed: False saves a draft without conflict checks.
    """

    creator_id: int
    name: str = ""
    start: datetime
    end: datetime
    confirmed: bool = True

    def to_event(self, event_id: Optional[int] = None) -> Event:
        """Build the domain Event for this request."""
        return Event(
            event_id=event_id,
            creator_id=self.creator_id,
            name=self.name,
            start=self.start,
            end=self.end,
            confirmed=self.confirmed,
        )


class EventCheckRequest(EventRequest):
    """Request model for checking a standalone event.

    Attributes:
        event_id: ID of the event when an existing event is being edited.
    """

    event_id: Optional[int] = None

    def to_event(self, event_id: Optional[int] = None) -> Event:
        return super().to_event(event_id if event_id is not None else self.event_id)


class EventResponse(BaseModel):
    """Response model for event details."""

    event_id: int
    creator_id: int
    name: str
    start: datetime
    end: datetime
    confirmed: bool

    @classmethod
    def from_event(cls, event: Event) -> "EventResponse":
        return cls(
            event_id=event.event_id,
            creator_id=event.creator_id,
            name=event.name,
            start=event.start,
            end=event.end,
            confirmed=event.confirmed,
        )


class RecurringEventRequest(BaseModel):
    """Request model for creating or replacing a recurring event.

    New recurring events are drafts unless ``confirmed`` is set; drafts are
    stored without field or conflict checks and scheduled later through the
    confirm endpoint.

    Attributes:
        creator_id: Owner of the recurring event.
        name: Display name.
        start_date: First date of the series.
        end_date: Last date of the series, or None for an endless series.
        start_time: Local start time of each occurrence.
        end_time: Local end time of each occurrence.
        recurrence_rule: Rule text, e.g. ``WEEKLY:MONDAY,WEDNESDAY`` or ``DAILY``.
        skip_days: Dates excluded from the series.
        confirmed: Whether the series is scheduled.
    """

    creator_id: int
    name: str = ""
    start_date: date
    end_date: Optional[date] = None
    start_time: time
    end_time: time
    recurrence_rule: str = Field(..., min_length=1, description="Recurrence rule text")
    skip_days: list[date] = Field(default_factory=list)
    confirmed: bool = False

    def to_recurring_event(self, recurring_event_id: Optional[int] = None) -> RecurringEvent:
        """Build the domain RecurringEvent for this request.

        Raises:
            InvalidRecurrenceRuleError: If the rule text cannot be parsed.
        """
        return RecurringEvent(
            recurring_event_id=recurring_event_id,
            creator_id=self.creator_id,
            name=self.name,
            start_date=self.start_date,
            end=end_from_date(self.end_date),
            start_time=self.start_time,
            end_time=self.end_time,
            recurrence_rule=RecurrenceRule.parse(self.recurrence_rule),
            skip_days=set(self.skip_days),
            confirmed=self.confirmed,
        )


class RecurringEventCheckRequest(RecurringEventRequest):
    """Request model for checking a recurring event.

    Attributes:
        recurring_event_id: ID when an existing recurring event is being edited.
    """

    recurring_event_id: Optional[int] = None
    confirmed: bool = True

    def to_recurring_event(self, recurring_event_id: Optional[int] = None) -> RecurringEvent:
        return super().to_recurring_event(
            recurring_event_id
            if recurring_event_id is not None
            else self.recurring_event_id
        )


class RecurringEventResponse(BaseModel):
    """Response model for recurring event details.

    Attributes:
        end_date: Last date of the series, None when it never ends.
        recurrence_rule: Rule in its text form.
        summary: Human-readable description of the schedule.
    """

    recurring_event_id: int
    creator_id: int
    name: str
    start_date: date
    end_date: Optional[date] = None
    start_time: time
    end_time: time
    recurrence_rule: str
    summary: str
    skip_days: list[date]
    confirmed: bool

    @classmethod
    def from_recurring_event(cls, recurring_event: RecurringEvent) -> "RecurringEventResponse":
        end = recurring_event.end
        return cls(
            recurring_event_id=recurring_event.recurring_event_id,
            creator_id=recurring_event.creator_id,
            name=recurring_event.name,
            start_date=recurring_event.start_date,
            end_date=end.on if isinstance(end, Bounded) else None,
            start_time=recurring_event.start_time,
            end_time=recurring_event.end_time,
            recurrence_rule=recurring_event.recurrence_rule.to_text(),
            summary=recurring_event.summary(),
            skip_days=sorted(recurring_event.skip_days),
            confirmed=recurring_event.confirmed,
        )


class SkipDaysRequest(BaseModel):
    """Request model for adding or removing skip days.

    Attributes:
        days: Dates to skip or re-enable.
    """

    days: list[date] = Field(..., min_length=1, description="Skip days")


class DeleteDraftsResponse(BaseModel):
    """Response model for draft cleanup."""

    creator_id: int
    deleted: int


class CreatorTimezoneRequest(BaseModel):
    """Request model for setting a creator's zone.

    Attributes:
        timezone: IANA zone identifier, e.g. ``America/New_York``.
    """

    timezone: str = Field(..., min_length=1)


class CreatorTimezoneResponse(BaseModel):
    """Response model for a creator's zone."""

    creator_id: int
    timezone: str


class SkipDayRemovalRequest(BaseModel):
    """Request model for checking a skip-day removal.

    Attributes:
        recurring_event_id: Stored recurring event whose skip days are removed.
        days: Dates about to become occurrences again.
    """

    recurring_event_id: int
    days: list[date] = Field(..., min_length=1, description="Skip days to remove")


class ConflictCheckResponse(BaseModel):
    """Response model for conflict checks.

    Attributes:
        conflicting_ids: Sorted IDs of the conflicting commitments.
        has_conflict: Whether any conflict was found.
    """

    conflicting_ids: list[int]
    has_conflict: bool

    @classmethod
    def from_ids(cls, ids: set[int]) -> "ConflictCheckResponse":
        return cls(conflicting_ids=sorted(ids), has_conflict=bool(ids))


class SkipDayRemovalResponse(BaseModel):
    """Response model for a skip-day removal that raised no conflict.

    Attributes:
        recurring_event_id: The checked recurring event.
        days: The dates that can be re-enabled.
        has_conflict: Always False; conflicts are reported as 409.
    """

    recurring_event_id: int
    days: list[date]
    has_conflict: bool = False
