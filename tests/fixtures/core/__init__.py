"""Core fixtures."""

from tests.fixtures.core.events import (
    create_event,
    utc,
)
from tests.fixtures.core.recurring_events import (
    create_recurring_event,
    weekly,
)
from tests.fixtures.core.planner import (
    FIXED_NOW,
    create_planner,
    fixed_clock,
)

__all__ = [
    "create_event",
    "utc",
    "create_recurring_event",
    "weekly",
    "FIXED_NOW",
    "create_planner",
    "fixed_clock",
]
