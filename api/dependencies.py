"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to the shared Planner (stores, detector and services).
"""

from typing import Annotated

from fastapi import Depends

from scheduling.planner import Planner


# Global state
# Storage is in-memory, so one shared Planner lives for the app's lifetime
_planner: Planner | None = None


def get_planner() -> Planner:
    """Get the shared Planner instance.

    This function is a FastAPI dependency. Tests replace it through
    ``app.dependency_overrides``.

    Returns:
        The shared Planner instance.

    Raises:
        RuntimeError: If the planner hasn't been initialized yet.
    """
    if _planner is None:
        raise RuntimeError("Planner not initialized. Call initialize_planner() first.")

    return _planner


def initialize_planner() -> Planner:
    """Initialize the shared Planner instance.

    This should be called once when the FastAPI app starts up.

    Returns:
        The newly created Planner instance.
    """
    global _planner

    _planner = Planner()
    return _planner


def shutdown_planner() -> None:
    """Drop the shared Planner when the app shuts down."""
    global _planner

    _planner = None


# Type alias for dependency injection
PlannerDep = Annotated[Planner, Depends(get_planner)]
