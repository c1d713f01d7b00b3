"""Test fixtures for the event planner.

This package provides reusable test fixtures:
- core: Factories for events and recurring events, plus planner wiring
- api: TestClient and dependency override fixtures
"""
