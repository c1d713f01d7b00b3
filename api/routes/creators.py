"""Creator settings endpoints.

A creator's zone decides how their events map onto the local dates and
times their recurring events are defined in.
"""

from fastapi import APIRouter

from api.dependencies import PlannerDep
from api.models import CreatorTimezoneRequest, CreatorTimezoneResponse

# Create router for creator-related endpoints
router = APIRouter(
    prefix="/creators",
    tags=["creators"],
)


# Route Handlers


@router.get("/{creator_id}/timezone", response_model=CreatorTimezoneResponse)
async def get_timezone(creator_id: int, planner: PlannerDep):
    """Get the zone a creator's dates and times are resolved in."""
    return CreatorTimezoneResponse(
        creator_id=creator_id, timezone=planner.timezones.resolve_zone(creator_id)
    )


@router.put("/{creator_id}/timezone", response_model=CreatorTimezoneResponse)
async def set_timezone(
    creator_id: int, request: CreatorTimezoneRequest, planner: PlannerDep
):
    """Set a creator's zone.

    Unknown zone identifiers are rejected with 400.
    """
    planner.timezones.set_zone(creator_id, request.timezone)
    return CreatorTimezoneResponse(creator_id=creator_id, timezone=request.timezone)
