"""Storage collaborators used by the conflict detector.

The protocols describe the queries the detector needs; any backend can
implement them. The in-memory stores implement the same predicates a
relational backend would push into its WHERE clauses, and hand out copies
so callers can't mutate stored state without calling ``save``.
"""

import logging
from datetime import date, datetime, time
from itertools import count
from typing import Optional, Protocol, Union

from models.bounds import Bounded, Unbounded, includes
from models.event import Event
from models.recurring_event import RecurringEvent

logger = logging.getLogger(__name__)

# Recurring event ids start here so they never equal a standalone event id
# inside one conflict set
RECURRING_EVENT_ID_START = 1_000_001


class EventStore(Protocol):
    """Read access to persisted standalone events."""

    def find_overlapping_events(
        self,
        creator_id: int,
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> list[Event]:
        ...


class RecurringEventStore(Protocol):
    """Read access to persisted recurring events (confirmed only)."""

    def find_templates_for_single_day_check(
        self, creator_id: int, day: date, start_time: time, end_time: time
    ) -> list[RecurringEvent]:
        ...

    def find_templates_in_date_range(
        self, creator_id: int, start_date: date, end_date: date
    ) -> list[RecurringEvent]:
        ...

    def find_overlapping_templates(
        self,
        creator_id: int,
        end_time: time,
        start_time: time,
        start_date: date,
        end: Union[Bounded, Unbounded],
    ) -> list[RecurringEvent]:
        ...


class InMemoryEventStore:
    """Dict-backed EventStore with save/get/delete for the services layer."""

    def __init__(self) -> None:
        self.events: dict[int, Event] = {}
        self._ids = count(1)

    def save(self, event: Event) -> Event:
        """Persist an event, assigning an ID on first save.

        Returns:
            A copy of the stored event.
        """
        if event.event_id is None:
            event = event.model_copy(update={"event_id": next(self._ids)})
        self.events[event.event_id] = event.model_copy(deep=True)
        logger.debug(f"Saved event {event.event_id}")
        return event.model_copy(deep=True)

    def get(self, event_id: int) -> Optional[Event]:
        event = self.events.get(event_id)
        return event.model_copy(deep=True) if event else None

    def delete(self, event_id: int) -> None:
        self.events.pop(event_id, None)

    def find_overlapping_events(
        self,
        creator_id: int,
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> list[Event]:
        return [
            event.model_copy(deep=True)
            for event in self.events.values()
            if event.creator_id == creator_id
            and event.confirmed
            and event.event_id != exclude_id
            and event.overlaps(start, end)
        ]


class InMemoryRecurringEventStore:
    """Dict-backed RecurringEventStore with save/get/delete for the services layer."""

    def __init__(self) -> None:
        self.recurring_events: dict[int, RecurringEvent] = {}
        self._ids = count(RECURRING_EVENT_ID_START)

    def save(self, recurring_event: RecurringEvent) -> RecurringEvent:
        """Persist a recurring event, assigning an ID on first save.

        Returns:
            A copy of the stored recurring event.
        """
        if recurring_event.recurring_event_id is None:
            recurring_event = recurring_event.model_copy(
                update={"recurring_event_id": next(self._ids)}
            )
        stored = recurring_event.model_copy(deep=True)
        self.recurring_events[stored.recurring_event_id] = stored
        logger.debug(f"Saved recurring event {stored.recurring_event_id}")
        return stored.model_copy(deep=True)

    def get(self, recurring_event_id: int) -> Optional[RecurringEvent]:
        recurring_event = self.recurring_events.get(recurring_event_id)
        return recurring_event.model_copy(deep=True) if recurring_event else None

    def delete(self, recurring_event_id: int) -> None:
        self.recurring_events.pop(recurring_event_id, None)

    def delete_unconfirmed(self, creator_id: int) -> int:
        """Delete a creator's drafts.

        Returns:
            Number of drafts deleted.
        """
        draft_ids = [
            rid
            for rid, existing in self.recurring_events.items()
            if existing.creator_id == creator_id and not existing.confirmed
        ]
        for rid in draft_ids:
            del self.recurring_events[rid]
        return len(draft_ids)

    def _confirmed_for(self, creator_id: int) -> list[RecurringEvent]:
        return [
            existing
            for existing in self.recurring_events.values()
            if existing.creator_id == creator_id and existing.confirmed
        ]

    def find_templates_for_single_day_check(
        self, creator_id: int, day: date, start_time: time, end_time: time
    ) -> list[RecurringEvent]:
        return [
            existing.model_copy(deep=True)
            for existing in self._confirmed_for(creator_id)
            if existing.covers(day)
            and existing.start_time <= end_time
            and existing.end_time >= start_time
        ]

    def find_templates_in_date_range(
        self, creator_id: int, start_date: date, end_date: date
    ) -> list[RecurringEvent]:
        return [
            existing.model_copy(deep=True)
            for existing in self._confirmed_for(creator_id)
            if existing.start_date <= end_date and includes(existing.end, start_date)
        ]

    def find_overlapping_templates(
        self,
        creator_id: int,
        end_time: time,
        start_time: time,
        start_date: date,
        end: Union[Bounded, Unbounded],
    ) -> list[RecurringEvent]:
        # Date ranges intersect and daily time windows intersect (inclusive)
        return [
            existing.model_copy(deep=True)
            for existing in self._confirmed_for(creator_id)
            if includes(end, existing.start_date)
            and includes(existing.end, start_date)
            and existing.start_time <= end_time
            and existing.end_time >= start_time
        ]
