"""Exceptions raised by the scheduling core.

Each exception stores its context as attributes so the API layer can build
a structured response without parsing messages.
"""

from datetime import date
from typing import Any, Iterable


class PlannerError(Exception):
    """Base class for all scheduling errors."""


class ConflictError(PlannerError):
    """Raised when a candidate overlaps existing commitments of its creator.

    Args:
        candidate: The rejected event or recurring event.
        conflicting_ids: IDs of the existing events and recurring events
            the candidate collides with.
    """

    def __init__(self, candidate: Any, conflicting_ids: Iterable[int]):
        self.candidate = candidate
        self.conflicting_ids = frozenset(conflicting_ids)
        name = getattr(candidate, "name", None) or type(candidate).__name__
        super().__init__(
            f"'{name}' conflicts with {len(self.conflicting_ids)} existing "
            f"commitment(s): {sorted(self.conflicting_ids)}"
        )


class InvalidArgumentError(PlannerError, ValueError):
    """Raised when a candidate or request violates a precondition.

    Args:
        message: Description of the violated precondition.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidRecurrenceRuleError(InvalidArgumentError):
    """Raised when recurrence rule text cannot be parsed.

    Args:
        code: Machine-readable reason (``unsupported_recurrence``,
            ``weekly_missing_days`` or ``invalid_day``).
        message: Human-readable description.
    """

    def __init__(self, code: str, message: str):
        self.code = code
        super().__init__(message)


class InvalidSkipDayError(InvalidArgumentError):
    """Raised when skip days cannot be added or removed.

    Args:
        invalid_days: The offending dates.
        message: Human-readable description.
    """

    def __init__(self, invalid_days: Iterable[date], message: str):
        self.invalid_days = frozenset(invalid_days)
        super().__init__(message)


class NotFoundError(PlannerError):
    """Raised when a requested entity doesn't exist.

    Args:
        entity: Entity kind, e.g. "event" or "recurring_event".
        entity_id: The ID that was looked up.
    """

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")
