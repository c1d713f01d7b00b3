"""Main entry point for the event planner conflict service.

This module creates and configures the FastAPI app instance that stores
events and recurring events and exposes the scheduling conflict checks over
HTTP.

To run the development server:
    uv run uvicorn main:app --reload

To run in production:
    uv run uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_planner, shutdown_planner
from api.exceptions import (
    conflict_error_handler,
    generic_exception_handler,
    invalid_argument_handler,
    not_found_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import conflicts as conflicts_routes
from api.routes import creators as creators_routes
from api.routes import events as events_routes
from api.routes import recurring_events as recurring_events_routes
from config import get_settings
from scheduling.exceptions import ConflictError, InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    This context manager runs code at startup (before yield) and shutdown
    (after yield).

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("Starting planner - initializing conflict detector")
    initialize_planner()
    logger.info(
        f"Planner initialized (window: {settings.conflict_window_days} days, "
        f"default zone: {settings.default_timezone})"
    )

    yield  # App runs and handles requests here

    logger.info("Shutting down planner")
    shutdown_planner()


# Create the FastAPI application instance
app = FastAPI(
    title="Event Planner Conflict Service",
    description="Conflict detection for events and recurring events",
    version="0.1.0",
    lifespan=lifespan,
)

# Register exception handlers
# Handlers are resolved by exception class hierarchy, most specific first
app.add_exception_handler(ConflictError, conflict_error_handler)
app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
app.add_exception_handler(NotFoundError, not_found_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Register route modules
app.include_router(events_routes.router)
app.include_router(recurring_events_routes.router)
app.include_router(creators_routes.router)
app.include_router(conflicts_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message.

    Returns:
        A dictionary with a welcome message.
    """
    return {
        "message": "Welcome to the Event Planner Conflict Service",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring.

    Returns:
        A dictionary indicating the service is healthy.
    """
    return {"status": "healthy"}
