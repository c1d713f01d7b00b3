"""Standalone event endpoints.

These endpoints let clients create, query, replace and delete events.
Confirmed events are conflict-checked before they are stored; a collision
is reported as 409 by the ConflictError handler and nothing is saved.
"""

from fastapi import APIRouter, status

from api.dependencies import PlannerDep
from api.models import EventRequest, EventResponse

# Create router for event-related endpoints
router = APIRouter(
    prefix="/events",
    tags=["events"],
)


# Route Handlers


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(request: EventRequest, planner: PlannerDep):
    """Create a new event.

    Args:
        request: Event details.
        planner: The shared Planner instance (injected by FastAPI).

    Returns:
        The stored event with its assigned ID.
    """
    event = planner.events.create_event(request.to_event())
    return EventResponse.from_event(event)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: int, planner: PlannerDep):
    """Get a specific event by ID."""
    return EventResponse.from_event(planner.events.get_event(event_id))


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(event_id: int, request: EventRequest, planner: PlannerDep):
    """Replace an existing event.

    The event is excluded from its own conflict check, so moving it within
    its old slot succeeds.

    Args:
        event_id: ID of the event to replace.
        request: New event details.
        planner: The shared Planner instance (injected by FastAPI).

    Returns:
        The updated event.
    """
    event = planner.events.update_event(request.to_event(event_id))
    return EventResponse.from_event(event)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: int, planner: PlannerDep):
    """Delete an event."""
    planner.events.delete_event(event_id)
