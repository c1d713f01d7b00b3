"""Recurring event endpoints.

Recurring events are created as drafts by default. Drafts are stored
unchecked and never block anything; confirming one runs the field and
conflict checks and schedules it. Skip days can be added at any time and
removed only when no other series fires at the same time on those dates.
"""

import logging

from fastapi import APIRouter, status

from api.dependencies import PlannerDep
from api.models import (
    DeleteDraftsResponse,
    RecurringEventRequest,
    RecurringEventResponse,
    SkipDaysRequest,
)

logger = logging.getLogger(__name__)

# Create router for recurring-event-related endpoints
router = APIRouter(
    prefix="/recurring-events",
    tags=["recurring-events"],
)


# Route Handlers


@router.post("", response_model=RecurringEventResponse, status_code=status.HTTP_201_CREATED)
async def create_recurring_event(request: RecurringEventRequest, planner: PlannerDep):
    """Create a recurring event, as a draft unless ``confirmed`` is set.

    Args:
        request: Recurring event details.
        planner: The shared Planner instance (injected by FastAPI).

    Returns:
        The stored recurring event with its assigned ID.
    """
    recurring_event = planner.recurring_events.create_recurring_event(
        request.to_recurring_event()
    )
    return RecurringEventResponse.from_recurring_event(recurring_event)


@router.delete("/drafts", response_model=DeleteDraftsResponse)
async def delete_drafts(creator_id: int, planner: PlannerDep):
    """Delete every draft recurring event of a creator.

    Args:
        creator_id: Owner whose drafts are discarded (query parameter).
        planner: The shared Planner instance (injected by FastAPI).
    """
    deleted = planner.recurring_events.delete_unconfirmed(creator_id)
    return DeleteDraftsResponse(creator_id=creator_id, deleted=deleted)


@router.get("/{recurring_event_id}", response_model=RecurringEventResponse)
async def get_recurring_event(recurring_event_id: int, planner: PlannerDep):
    """Get a specific recurring event by ID."""
    recurring_event = planner.recurring_events.get_recurring_event(recurring_event_id)
    return RecurringEventResponse.from_recurring_event(recurring_event)


@router.put("/{recurring_event_id}", response_model=RecurringEventResponse)
async def update_recurring_event(
    recurring_event_id: int, request: RecurringEventRequest, planner: PlannerDep
):
    """Replace an existing recurring event.

    Args:
        recurring_event_id: ID of the recurring event to replace.
        request: New details. Confirmed replacements are checked again.
        planner: The shared Planner instance (injected by FastAPI).

    Returns:
        The updated recurring event.
    """
    recurring_event = planner.recurring_events.update_recurring_event(
        request.to_recurring_event(recurring_event_id)
    )
    return RecurringEventResponse.from_recurring_event(recurring_event)


@router.post("/{recurring_event_id}/confirm", response_model=RecurringEventResponse)
async def confirm_recurring_event(recurring_event_id: int, planner: PlannerDep):
    """Schedule a draft recurring event.

    Args:
        recurring_event_id: ID of the draft.
        planner: The shared Planner instance (injected by FastAPI).

    Returns:
        The confirmed recurring event.
    """
    recurring_event = planner.recurring_events.confirm_recurring_event(recurring_event_id)
    return RecurringEventResponse.from_recurring_event(recurring_event)


@router.delete("/{recurring_event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recurring_event(recurring_event_id: int, planner: PlannerDep):
    """Delete a recurring event."""
    planner.recurring_events.delete_recurring_event(recurring_event_id)


@router.post("/{recurring_event_id}/skip-days", response_model=RecurringEventResponse)
async def add_skip_days(
    recurring_event_id: int, request: SkipDaysRequest, planner: PlannerDep
):
    """Exclude dates from a recurring event.

    Args:
        recurring_event_id: ID of the recurring event.
        request: Dates to skip. Past dates are rejected with 400.
        planner: The shared Planner instance (injected by FastAPI).
    """
    recurring_event = planner.recurring_events.add_skip_days(
        recurring_event_id, request.days
    )
    return RecurringEventResponse.from_recurring_event(recurring_event)


@router.post("/{recurring_event_id}/skip-days/remove", response_model=RecurringEventResponse)
async def remove_skip_days(
    recurring_event_id: int, request: SkipDaysRequest, planner: PlannerDep
):
    """Re-enable skipped dates of a recurring event.

    Args:
        recurring_event_id: ID of the recurring event.
        request: Dates to re-enable. Past dates are rejected with 400 and a
            collision with another series with 409.
        planner: The shared Planner instance (injected by FastAPI).
    """
    recurring_event = planner.recurring_events.remove_skip_days(
        recurring_event_id, request.days
    )
    logger.info(
        f"Re-enabled {len(set(request.days))} dates on recurring event ID {recurring_event_id}"
    )
    return RecurringEventResponse.from_recurring_event(recurring_event)
