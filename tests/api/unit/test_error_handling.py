"""Unit tests for API error handling.

These tests verify that scheduling exceptions are converted to consistent
JSON responses.
"""

import asyncio
import json
from datetime import date
from unittest.mock import MagicMock

from fastapi import status
from pydantic import ValidationError

from api.exceptions import (
    conflict_error_handler,
    generic_exception_handler,
    invalid_argument_handler,
    not_found_handler,
    validation_exception_handler,
    value_error_handler,
)
from models.event import Event
from scheduling.exceptions import (
    ConflictError,
    InvalidArgumentError,
    InvalidRecurrenceRuleError,
    InvalidSkipDayError,
    NotFoundError,
)
from tests.fixtures.core.events import create_event


def run_async(coro):
    """Run an async coroutine synchronously."""
    return asyncio.run(coro)


def body(response):
    return json.loads(response.body)


# =============================================================================
# Exception Class Tests
# =============================================================================


class TestSchedulingExceptions:
    """Tests for the scheduling exception classes."""

    def test_conflict_error_stores_ids(self):
        exc = ConflictError(create_event(name="Review"), [3, 1, 3])

        assert exc.conflicting_ids == {1, 3}
        assert "'Review'" in str(exc)
        assert "[1, 3]" in str(exc)

    def test_invalid_argument_is_value_error(self):
        assert isinstance(InvalidArgumentError("bad"), ValueError)

    def test_not_found_message(self):
        exc = NotFoundError("event", 7)

        assert str(exc) == "event 7 not found"


# =============================================================================
# Handler Tests
# =============================================================================


class TestConflictErrorHandler:
    """Tests for conflict_error_handler."""

    def test_returns_409_with_sorted_ids(self):
        exc = ConflictError(create_event(), {5, 2})

        response = run_async(conflict_error_handler(MagicMock(), exc))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert body(response)["conflicting_ids"] == [2, 5]
        assert body(response)["error"] == "Scheduling Conflict"


class TestInvalidArgumentHandler:
    """Tests for invalid_argument_handler."""

    def test_plain_invalid_argument(self):
        response = run_async(invalid_argument_handler(MagicMock(), InvalidArgumentError("bad")))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert body(response) == {
            "error": "Invalid Argument",
            "detail": "bad",
            "type": "InvalidArgumentError",
        }

    def test_recurrence_rule_code_included(self):
        exc = InvalidRecurrenceRuleError("invalid_day", "Invalid day name")

        response = run_async(invalid_argument_handler(MagicMock(), exc))

        assert body(response)["code"] == "invalid_day"

    def test_invalid_skip_days_included(self):
        exc = InvalidSkipDayError({date(2025, 6, 30), date(2025, 6, 2)}, "past")

        response = run_async(invalid_argument_handler(MagicMock(), exc))

        assert body(response)["invalid_days"] == ["2025-06-02", "2025-06-30"]


class TestOtherHandlers:
    """Tests for the not-found, validation, value and generic handlers."""

    def test_not_found(self):
        response = run_async(not_found_handler(MagicMock(), NotFoundError("recurring_event", 4)))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert body(response)["entity"] == "recurring_event"

    def test_validation_error(self):
        try:
            Event(creator_id=1, start="not a date", end="also not")
        except ValidationError as exc:
            response = run_async(validation_exception_handler(MagicMock(), exc))

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert len(body(response)["validation_errors"]) == 2

    def test_value_error(self):
        response = run_async(value_error_handler(MagicMock(), ValueError("nope")))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert body(response)["detail"] == "nope"

    def test_generic_error_hides_details(self):
        request = MagicMock()
        request.method = "POST"
        request.url.path = "/conflicts/events"

        response = run_async(generic_exception_handler(request, KeyError("secret")))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert body(response)["detail"] == "An unexpected error occurred"
        assert "secret" not in response.body.decode()
