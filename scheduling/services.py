"""Business services for events and recurring events.

These services own the create/update flows: they check field preconditions,
run the conflict detector for scheduled (confirmed) entities and only then
persist. A rejected change leaves storage untouched.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Iterable, Optional

from models.bounds import Bounded
from models.event import Event
from models.recurring_event import RecurringEvent
from scheduling.detector import ConflictDetector
from scheduling.exceptions import InvalidArgumentError, InvalidSkipDayError, NotFoundError
from scheduling.stores import InMemoryEventStore, InMemoryRecurringEventStore
from scheduling.timezones import TimezoneResolver, load_zone

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: the current UTC time."""
    return datetime.now(timezone.utc)


class EventService:
    """Creates, updates and deletes standalone events.

    Args:
        store: Event storage.
        detector: Conflict detector run before confirmed events are saved.
    """

    def __init__(self, store: InMemoryEventStore, detector: ConflictDetector):
        self.store = store
        self.detector = detector

    def get_event(self, event_id: int) -> Event:
        """Get an event by ID.

        Raises:
            NotFoundError: If the event doesn't exist.
        """
        event = self.store.get(event_id)
        if event is None:
            raise NotFoundError("event", event_id)
        return event

    def create_event(self, event: Event) -> Event:
        """Validate and persist a new event.

        Drafts are saved without conflict checks.

        Raises:
            InvalidArgumentError: If the event's start is not before its end.
            ConflictError: If a confirmed event overlaps existing commitments.
        """
        logger.info(f"Creating new event '{event.name}'")
        _validate_event_times(event)
        if event.confirmed:
            self.detector.validate_event(event)

        saved = self.store.save(event)
        logger.info(f"Event created with ID {saved.event_id}")
        return saved

    def update_event(self, event: Event) -> Event:
        """Validate and persist changes to an existing event.

        The event is excluded from its own conflict check.

        Raises:
            NotFoundError: If the event doesn't exist.
            InvalidArgumentError: If the event's start is not before its end.
            ConflictError: If the updated event overlaps existing commitments.
        """
        if event.event_id is None:
            raise InvalidArgumentError("Cannot update an event without an ID")
        self.get_event(event.event_id)

        logger.info(f"Updating event ID {event.event_id}")
        _validate_event_times(event)
        if event.confirmed:
            self.detector.validate_event(event)

        return self.store.save(event)

    def delete_event(self, event_id: int) -> None:
        """Delete an event.

        Raises:
            NotFoundError: If the event doesn't exist.
        """
        self.get_event(event_id)
        logger.info(f"Deleting event ID {event_id}")
        self.store.delete(event_id)


class RecurringEventService:
    """Creates, confirms and edits recurring events, including skip days.

    Args:
        store: Recurring event storage.
        detector: Conflict detector run before confirmed templates are saved.
        timezone_resolver: Resolves the creator's zone to find "today".
        clock: Returns the current time. Injected so "today" is testable.
    """

    def __init__(
        self,
        store: InMemoryRecurringEventStore,
        detector: ConflictDetector,
        timezone_resolver: TimezoneResolver,
        clock: Optional[Clock] = None,
    ):
        self.store = store
        self.detector = detector
        self.timezone_resolver = timezone_resolver
        self.clock = clock or utc_now

    def get_recurring_event(self, recurring_event_id: int) -> RecurringEvent:
        """Get a recurring event by ID.

        Raises:
            NotFoundError: If the recurring event doesn't exist.
        """
        recurring_event = self.store.get(recurring_event_id)
        if recurring_event is None:
            raise NotFoundError("recurring_event", recurring_event_id)
        return recurring_event

    def create_recurring_event(self, recurring_event: RecurringEvent) -> RecurringEvent:
        """Persist a new recurring event.

        Drafts are saved as-is. Confirmed recurring events are field-checked
        and conflict-checked first.

        Raises:
            InvalidArgumentError: If a confirmed recurring event is malformed.
            ConflictError: If it collides with another recurring event.
        """
        if not recurring_event.confirmed:
            logger.info(
                f"Creating draft recurring event for user ID {recurring_event.creator_id}"
            )
            return self.store.save(recurring_event)

        logger.info(f"Creating scheduled recurring event '{recurring_event.name}'")
        _validate_recurring_event_fields(recurring_event)
        self.detector.validate_recurring_event(recurring_event)
        return self.store.save(recurring_event)

    def update_recurring_event(self, recurring_event: RecurringEvent) -> RecurringEvent:
        """Persist changes to an existing recurring event.

        Raises:
            NotFoundError: If the recurring event doesn't exist.
            InvalidArgumentError: If a confirmed recurring event is malformed.
            ConflictError: If it collides with another recurring event.
        """
        if recurring_event.recurring_event_id is None:
            raise InvalidArgumentError("Cannot update a recurring event without an ID")
        self.get_recurring_event(recurring_event.recurring_event_id)

        logger.info(f"Updating recurring event ID {recurring_event.recurring_event_id}")
        if recurring_event.confirmed:
            _validate_recurring_event_fields(recurring_event)
            self.detector.validate_recurring_event(recurring_event)
        return self.store.save(recurring_event)

    def confirm_recurring_event(self, recurring_event_id: int) -> RecurringEvent:
        """Turn a draft into a scheduled recurring event.

        Raises:
            NotFoundError: If the recurring event doesn't exist.
            InvalidArgumentError: If the draft is incomplete or malformed.
            ConflictError: If it collides with another recurring event.
        """
        recurring_event = self.get_recurring_event(recurring_event_id)
        logger.info(f"Confirming recurring event ID {recurring_event_id}")

        _validate_recurring_event_fields(recurring_event)
        self.detector.validate_recurring_event(recurring_event)

        recurring_event.confirmed = True
        return self.store.save(recurring_event)

    def delete_recurring_event(self, recurring_event_id: int) -> None:
        """Delete a recurring event.

        Raises:
            NotFoundError: If the recurring event doesn't exist.
        """
        self.get_recurring_event(recurring_event_id)
        logger.info(f"Deleting recurring event ID {recurring_event_id}")
        self.store.delete(recurring_event_id)

    def delete_unconfirmed(self, creator_id: int) -> int:
        """Delete every draft recurring event of a creator.

        Returns:
            Number of drafts deleted.
        """
        deleted = self.store.delete_unconfirmed(creator_id)
        logger.info(f"Deleted {deleted} draft recurring events for user ID {creator_id}")
        return deleted

    def add_skip_days(self, recurring_event_id: int, days: Iterable[date]) -> RecurringEvent:
        """Exclude dates from a recurring event.

        Skipping only removes occurrences, so no conflict check is needed.

        Raises:
            NotFoundError: If the recurring event doesn't exist.
            InvalidSkipDayError: If any date is in the past for the creator.
        """
        recurring_event = self.get_recurring_event(recurring_event_id)
        days = set(days)
        self._reject_past_days(recurring_event, days, "add")

        for day in days:
            recurring_event.add_skip_day(day)

        logger.info(f"Added {len(days)} skip days to recurring event ID {recurring_event_id}")
        return self.store.save(recurring_event)

    def remove_skip_days(
        self, recurring_event_id: int, days: Iterable[date]
    ) -> RecurringEvent:
        """Re-enable previously skipped dates after checking for collisions.

        Raises:
            NotFoundError: If the recurring event doesn't exist.
            InvalidSkipDayError: If no dates are given or any is in the past.
            ConflictError: If another recurring event fires on a re-enabled date.
        """
        recurring_event = self.get_recurring_event(recurring_event_id)
        days = set(days)
        if not days:
            raise InvalidSkipDayError(days, "No skip days given to remove")
        self._reject_past_days(recurring_event, days, "remove")

        self.detector.validate_skip_day_removal(recurring_event, days)

        for day in days:
            recurring_event.remove_skip_day(day)

        logger.info(
            f"Removed {len(days)} skip days from recurring event ID {recurring_event_id}"
        )
        return self.store.save(recurring_event)

    def _today_for(self, creator_id: int) -> date:
        zone = load_zone(self.timezone_resolver.resolve_zone(creator_id))
        return self.clock().astimezone(zone).date()

    def _reject_past_days(
        self, recurring_event: RecurringEvent, days: set[date], action: str
    ) -> None:
        today = self._today_for(recurring_event.creator_id)
        invalid = {day for day in days if day is None or day < today}
        if invalid:
            raise InvalidSkipDayError(
                invalid,
                f"Cannot {action} skip days in the past: "
                f"{sorted(str(day) for day in invalid)}",
            )


def _validate_event_times(event: Event) -> None:
    if event.start >= event.end:
        raise InvalidArgumentError(
            f"Event start {event.start.isoformat()} must be before end {event.end.isoformat()}"
        )


def _validate_recurring_event_fields(recurring_event: RecurringEvent) -> None:
    if not recurring_event.name or not recurring_event.name.strip():
        raise InvalidArgumentError("Recurring event name is required")
    if recurring_event.start_time >= recurring_event.end_time:
        raise InvalidArgumentError(
            f"Start time {recurring_event.start_time} must be before "
            f"end time {recurring_event.end_time}"
        )
    end = recurring_event.end
    if isinstance(end, Bounded) and end.on <= recurring_event.start_date:
        raise InvalidArgumentError(
            f"Start date {recurring_event.start_date} must be before the end date"
        )
