"""Pytest configuration and shared fixtures."""

# Load environment variables from .env file at test startup
# so PLANNER_* settings are available before fixtures are created
from dotenv import load_dotenv
load_dotenv()

# Import all fixtures from fixture modules
pytest_plugins = [
    "tests.fixtures.core.events",
    "tests.fixtures.core.recurring_events",
    "tests.fixtures.core.planner",
    "tests.fixtures.api",
]
