"""Pytest configuration and fixtures."""

import logging
import os

import pytest
import structlog

from uiplanner.agents import PlanCache, Planner
from uiplanner.core import Settings
from uiplanner.core.logging_config import PACKAGE_LOGGER


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['UIPLAN_LOG_LEVEL'] = 'DEBUG'
    os.environ['UIPLAN_ENABLE_CACHE'] = 'false'  # Disable cache in tests


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo logging configuration applied by a test."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    level = package_logger.level
    yield
    package_logger.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


# ============================================================================
# Completion Fakes
# ============================================================================

class FakeCompleter:
    """Stands in for the text-completion service; replays canned responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings with caching disabled."""
    return Settings(enable_cache=False)


@pytest.fixture
def plan_cache():
    return PlanCache(max_size=10, ttl_seconds=60)


@pytest.fixture
def make_planner(settings):
    """Build a planner around canned completion responses."""
    def _make(*responses, cache=None):
        completer = FakeCompleter(*responses)
        return Planner(completer, cache=cache, settings=settings), completer
    return _make


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def sample_plan():
    """Plan touching every component kind."""
    return {
        "layout": "sidebar-layout",
        "components": [
            {
                "type": "Layout",
                "props": {"type": "flex"},
                "children": [
                    {"type": "Input", "props": {"label": "Email", "placeholder": "you@example.com", "type": "email"}},
                    {"type": "Button", "props": {"label": "Subscribe", "variant": "primary", "size": "md"}},
                ],
            },
            {
                "type": "Card",
                "props": {"title": "Usage", "description": "Last 7 days"},
                "children": [
                    {
                        "type": "Table",
                        "props": {
                            "headers": ["Day", "Requests"],
                            "rows": [["Mon", "120"], ["Tue", "98"]],
                            "caption": "Requests per day",
                        },
                    }
                ],
            },
        ],
    }


@pytest.fixture
def sample_plan_text(sample_plan):
    """Sample plan as a chatty completion would return it."""
    import json
    return f"Here is your plan:\n```json\n{json.dumps(sample_plan, indent=2)}\n```\nLet me know!"
