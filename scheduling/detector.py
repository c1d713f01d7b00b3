"""Conflict detection for events and recurring events.

The detector is a pure validation step run before a create or update is
persisted. It queries the stores for coarse candidates, narrows them with
the recurrence expander and either returns silently or raises
ConflictError carrying every conflicting ID.

Two overlap rules are in play:

- Standalone events use half-open intervals: an event ending at 15:00 does
  not conflict with one starting at 15:00.
- Recurring occurrences are compared on local time of day with closed
  intervals: touching boundaries count as overlap.
"""

import logging
from datetime import date, time, timedelta
from typing import Iterable, Optional

from models.bounds import Bounded, earlier_end, end_before
from models.event import Event
from models.recurring_event import RecurringEvent
from scheduling.exceptions import ConflictError, InvalidArgumentError
from scheduling.expander import ONE_DAY, RecurrenceExpander
from scheduling.stores import EventStore, RecurringEventStore
from scheduling.timezones import LocalWindow, TimezoneResolver, to_local_window

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 31


class ConflictDetector:
    """Checks candidates against a creator's existing commitments.

    Args:
        event_store: Source of persisted standalone events.
        recurring_event_store: Source of persisted recurring events.
        timezone_resolver: Resolves each creator's local zone.
        expander: Recurrence expander (a new one by default).
        window_days: Longest window expanded when two recurring events
            are compared. Windows longer than this, or open-ended ones, are
            clamped to ``window_days`` days from the overlap start. This is
            a sampling bound: a one-sided infinite pair whose first shared
            date lies beyond the clamp is not detected.
    """

    def __init__(
        self,
        event_store: EventStore,
        recurring_event_store: RecurringEventStore,
        timezone_resolver: TimezoneResolver,
        expander: Optional[RecurrenceExpander] = None,
        window_days: int = DEFAULT_WINDOW_DAYS,
    ):
        if window_days < 1:
            raise InvalidArgumentError("window_days must be at least 1")
        self.event_store = event_store
        self.recurring_event_store = recurring_event_store
        self.timezone_resolver = timezone_resolver
        self.expander = expander or RecurrenceExpander()
        self.window_days = window_days

    # ------------------------------------------------------------------
    # Standalone events
    # ------------------------------------------------------------------

    def validate_event(self, event: Event) -> None:
        """Raise ConflictError if the event overlaps anything its creator has.

        Raises:
            InvalidArgumentError: If the event's end is not after its start.
            ConflictError: If any standalone event or recurring occurrence
                overlaps the event.
        """
        conflicting_ids = self.find_event_conflicts(event)
        if conflicting_ids:
            logger.warning(
                "Event conflict detected for '%s' (ID: %s) with %d existing: %s",
                event.name,
                event.event_id,
                len(conflicting_ids),
                sorted(conflicting_ids),
            )
            raise ConflictError(event, conflicting_ids)

        logger.info(
            "Event validation successful for '%s' (ID: %s) - no conflicts found",
            event.name,
            event.event_id,
        )

    def find_event_conflicts(self, event: Event) -> set[int]:
        """Collect IDs of everything the event overlaps.

        Returns:
            IDs of conflicting standalone events and recurring events.
            Empty if there is no conflict.
        """
        _require_valid_event(event)
        conflicting_ids: set[int] = set()

        overlapping = self.event_store.find_overlapping_events(
            event.creator_id, event.start, event.end, exclude_id=event.event_id
        )
        conflicting_ids.update(e.event_id for e in overlapping)
        logger.debug(f"Found {len(overlapping)} standalone event conflicts")

        zone = self.timezone_resolver.resolve_zone(event.creator_id)
        window = to_local_window(event.start, event.end, zone)
        logger.debug(f"Event in zone {zone}: {window}")

        if window.single_day:
            conflicting_ids.update(self._single_day_conflicts(event.creator_id, window))
        else:
            conflicting_ids.update(self._multi_day_conflicts(event.creator_id, window))

        return conflicting_ids

    def _single_day_conflicts(self, creator_id: int, window: LocalWindow) -> set[int]:
        # The store has already matched date range and time of day
        candidates = self.recurring_event_store.find_templates_for_single_day_check(
            creator_id, window.start_date, window.start_time, window.end_time
        )
        return {
            existing.recurring_event_id
            for existing in candidates
            if self.expander.expand(
                existing.recurrence_rule,
                window.start_date,
                window.start_date,
                existing.skip_days,
            )
        }

    def _multi_day_conflicts(self, creator_id: int, window: LocalWindow) -> set[int]:
        candidates = self.recurring_event_store.find_templates_in_date_range(
            creator_id, window.start_date, window.end_date
        )
        conflicting_ids = set()

        for existing in candidates:
            day = window.start_date
            while day <= window.end_date:
                fires = self.expander.expand(
                    existing.recurrence_rule, day, day, existing.skip_days
                )
                if fires:
                    check_start, check_end = _effective_window(day, window)
                    if existing.time_window_overlaps(check_start, check_end):
                        conflicting_ids.add(existing.recurring_event_id)
                        break
                day += ONE_DAY

        return conflicting_ids

    # ------------------------------------------------------------------
    # Recurring events
    # ------------------------------------------------------------------

    def validate_recurring_event(self, recurring_event: RecurringEvent) -> None:
        """Raise ConflictError if the recurring event shares an occurrence
        with another confirmed recurring event of the same creator.

        Raises:
            InvalidArgumentError: If the recurring event is malformed.
            ConflictError: If any recurring event collides with it.
        """
        conflicting_ids = self.find_recurring_conflicts(recurring_event)
        if conflicting_ids:
            logger.warning(
                "Recurring event conflict detected for '%s' (ID: %s) with %d existing: %s",
                recurring_event.name,
                recurring_event.recurring_event_id,
                len(conflicting_ids),
                sorted(conflicting_ids),
            )
            raise ConflictError(recurring_event, conflicting_ids)

        logger.info(
            "Recurring event validation successful for '%s' (ID: %s) - no conflicts found",
            recurring_event.name,
            recurring_event.recurring_event_id,
        )

    def find_recurring_conflicts(self, recurring_event: RecurringEvent) -> set[int]:
        """Collect IDs of recurring events sharing an occurrence date.

        Returns:
            IDs of conflicting recurring events. Empty if there is no conflict.
        """
        _require_valid_recurring_event(recurring_event)
        conflicting_ids = set()

        for existing in self._overlap_candidates(recurring_event):
            if recurring_event.is_unbounded and existing.is_unbounded:
                # Two endless weekly rules sharing a weekday always meet eventually
                if recurring_event.recurrence_rule.shares_day_with(existing.recurrence_rule):
                    logger.debug(
                        f"Infinite recurring events share days with ID {existing.recurring_event_id}"
                    )
                    conflicting_ids.add(existing.recurring_event_id)
                continue

            if not recurring_event.recurrence_rule.shares_day_with(existing.recurrence_rule):
                logger.debug(
                    f"Skipping ID {existing.recurring_event_id} - no shared recurrence days"
                )
                continue

            window = self._overlap_window(recurring_event, existing)
            if window is None:
                continue

            new_dates = self.expander.expand(
                recurring_event.recurrence_rule, *window, recurring_event.skip_days
            )
            existing_dates = self.expander.expand(
                existing.recurrence_rule, *window, existing.skip_days
            )
            if not set(new_dates).isdisjoint(existing_dates):
                conflicting_ids.add(existing.recurring_event_id)

        return conflicting_ids

    def _overlap_window(
        self, a: RecurringEvent, b: RecurringEvent
    ) -> Optional[tuple[date, date]]:
        """Shared date window of two recurring events, clamped to window_days.

        Returns:
            ``(start, end)`` or None if their date ranges don't intersect.
        """
        overlap_start = max(a.start_date, b.start_date)
        overlap_end = earlier_end(a.end, b.end)

        if end_before(overlap_end, overlap_start):
            return None

        clamp = overlap_start + timedelta(days=self.window_days)
        if not isinstance(overlap_end, Bounded) or overlap_end.on > clamp:
            logger.debug(
                f"Capping validation window to {self.window_days} days from {overlap_start}"
            )
            return overlap_start, clamp

        return overlap_start, overlap_end.on

    # ------------------------------------------------------------------
    # Skip-day removal
    # ------------------------------------------------------------------

    def validate_skip_day_removal(
        self, recurring_event: RecurringEvent, days: Iterable[date]
    ) -> None:
        """Raise ConflictError if re-enabling skipped dates causes a collision.

        Args:
            recurring_event: Recurring event whose skip days are being removed.
            days: Dates about to become occurrences again.

        Raises:
            InvalidArgumentError: If ``days`` is empty.
            ConflictError: If another recurring event fires on any of them.
        """
        days = sorted(set(days))
        if not days:
            raise InvalidArgumentError("No skip days to remove")
        _require_valid_recurring_event(recurring_event)

        conflicting_ids = set()
        for existing in self._overlap_candidates(recurring_event):
            if not recurring_event.recurrence_rule.shares_day_with(existing.recurrence_rule):
                continue

            for day in days:
                if self.expander.occurs_on(existing.recurrence_rule, day):
                    logger.debug(
                        f"Skip day {day} conflicts with ID {existing.recurring_event_id}"
                    )
                    conflicting_ids.add(existing.recurring_event_id)
                    break

        if conflicting_ids:
            logger.warning(
                "Skip day conflict detected for '%s' (ID: %s) with %d existing: %s",
                recurring_event.name,
                recurring_event.recurring_event_id,
                len(conflicting_ids),
                sorted(conflicting_ids),
            )
            raise ConflictError(recurring_event, conflicting_ids)

        logger.info(
            "Skip day validation successful for '%s' (ID: %s) - no conflicts found",
            recurring_event.name,
            recurring_event.recurring_event_id,
        )

    def _overlap_candidates(self, recurring_event: RecurringEvent) -> list[RecurringEvent]:
        candidates = self.recurring_event_store.find_overlapping_templates(
            recurring_event.creator_id,
            recurring_event.end_time,
            recurring_event.start_time,
            recurring_event.start_date,
            recurring_event.end,
        )
        logger.debug(f"Found {len(candidates)} recurring event candidates")

        own_id = recurring_event.recurring_event_id
        if own_id is None:
            return candidates
        return [c for c in candidates if c.recurring_event_id != own_id]


def _effective_window(day: date, window: LocalWindow) -> tuple[time, time]:
    """Portion of a multi-day event's local window falling on ``day``."""
    if day == window.start_date:
        return window.start_time, time.max
    if day == window.end_date:
        return time.min, window.end_time
    return time.min, time.max


def _require_valid_event(event: Event) -> None:
    if event is None:
        raise InvalidArgumentError("Event is required")
    if event.creator_id is None:
        raise InvalidArgumentError("Event has no creator")
    if event.end <= event.start:
        raise InvalidArgumentError(
            f"Event end {event.end.isoformat()} is not after start {event.start.isoformat()}"
        )


def _require_valid_recurring_event(recurring_event: RecurringEvent) -> None:
    if recurring_event is None:
        raise InvalidArgumentError("Recurring event is required")
    if recurring_event.creator_id is None:
        raise InvalidArgumentError("Recurring event has no creator")
    if recurring_event.end_time <= recurring_event.start_time:
        raise InvalidArgumentError(
            f"Recurring event end time {recurring_event.end_time} is not after "
            f"start time {recurring_event.start_time}"
        )
    if end_before(recurring_event.end, recurring_event.start_date):
        raise InvalidArgumentError(
            f"Recurring event ends before its start date {recurring_event.start_date}"
        )
