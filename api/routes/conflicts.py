"""Conflict check endpoints.

These endpoints let callers ask whether an event or recurring event would
collide with a creator's existing commitments before they persist it, and
whether skipped dates can be re-enabled.
"""

import logging

from fastapi import APIRouter

from api.dependencies import PlannerDep
from api.models import (
    ConflictCheckResponse,
    EventCheckRequest,
    RecurringEventCheckRequest,
    SkipDayRemovalRequest,
    SkipDayRemovalResponse,
)

logger = logging.getLogger(__name__)

# Create router for conflict-related endpoints
router = APIRouter(
    prefix="/conflicts",
    tags=["conflicts"],
)


# Route Handlers


@router.post("/events", response_model=ConflictCheckResponse)
async def check_event(request: EventCheckRequest, planner: PlannerDep):
    """Check a standalone event against existing commitments.

    Args:
        request: The event to check.
        planner: The shared Planner instance (injected by FastAPI).

    Returns:
        IDs of every conflicting event and recurring event.
    """
    conflicting_ids = planner.detector.find_event_conflicts(request.to_event())
    return ConflictCheckResponse.from_ids(conflicting_ids)


@router.post("/recurring-events", response_model=ConflictCheckResponse)
async def check_recurring_event(request: RecurringEventCheckRequest, planner: PlannerDep):
    """Check a recurring event against the creator's other recurring events.

    Args:
        request: The recurring event to check.
        planner: The shared Planner instance (injected by FastAPI).

    Returns:
        IDs of every conflicting recurring event.
    """
    conflicting_ids = planner.detector.find_recurring_conflicts(
        request.to_recurring_event()
    )
    return ConflictCheckResponse.from_ids(conflicting_ids)


@router.post("/skip-days", response_model=SkipDayRemovalResponse)
async def check_skip_day_removal(request: SkipDayRemovalRequest, planner: PlannerDep):
    """Check whether skipped dates of a stored recurring event can be re-enabled.

    A conflict is reported as 409 by the ConflictError handler.

    Args:
        request: The recurring event ID and the dates to re-enable.
        planner: The shared Planner instance (injected by FastAPI).

    Returns:
        The checked dates when no conflict was found.
    """
    recurring_event = planner.recurring_events.get_recurring_event(
        request.recurring_event_id
    )
    planner.detector.validate_skip_day_removal(recurring_event, request.days)

    logger.info(
        f"Skip day removal for recurring event ID {request.recurring_event_id} is conflict-free"
    )
    return SkipDayRemovalResponse(
        recurring_event_id=request.recurring_event_id,
        days=sorted(set(request.days)),
    )
