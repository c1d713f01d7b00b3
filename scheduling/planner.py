"""Wiring of stores, timezone resolver, detector and services."""

from typing import Optional

from config import Settings, get_settings
from scheduling.detector import ConflictDetector
from scheduling.expander import RecurrenceExpander
from scheduling.services import Clock, EventService, RecurringEventService
from scheduling.stores import InMemoryEventStore, InMemoryRecurringEventStore
from scheduling.timezones import StaticTimezoneResolver


class Planner:
    """Holds one set of collaborators for the conflict core.

    Args:
        settings: Application settings (defaults to the cached settings).
        clock: Clock used by the recurring event service.
    """

    def __init__(self, settings: Optional[Settings] = None, clock: Optional[Clock] = None):
        self.settings = settings or get_settings()
        self.event_store = InMemoryEventStore()
        self.recurring_event_store = InMemoryRecurringEventStore()
        self.timezones = StaticTimezoneResolver(default=self.settings.default_timezone)
        self.expander = RecurrenceExpander()
        self.detector = ConflictDetector(
            self.event_store,
            self.recurring_event_store,
            self.timezones,
            expander=self.expander,
            window_days=self.settings.conflict_window_days,
        )
        self.events = EventService(self.event_store, self.detector)
        self.recurring_events = RecurringEventService(
            self.recurring_event_store, self.detector, self.timezones, clock=clock
        )
