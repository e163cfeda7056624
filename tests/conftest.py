"""Pytest configuration and fixtures."""

import os
from copy import deepcopy
from datetime import datetime, timezone

import pytest

from schema_engine.core import configure_logging
from schema_engine.core.config import Settings
from schema_engine.registry import create_default_registry
from schema_engine.validation import Validator
from schema_engine.evolution import EvolutionApplier
from schema_engine.engine import Engine


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["SCHEMA_ENGINE_LOG_LEVEL"] = "DEBUG"
    configure_logging(level="DEBUG")


# ============================================================================
# Data
# ============================================================================

STAT_CARD = {"id": "a", "type": "stat-card", "props": {"label": "Revenue", "value": 1200}}
TABLE = {"id": "b", "type": "table", "props": {"columns": ["name", "total"]}}
KANBAN = {"id": "k", "type": "kanban", "props": {"columns": [{"title": "Todo"}, {"title": "Done"}]}}


@pytest.fixture
def stat_card():
    return deepcopy(STAT_CARD)


@pytest.fixture
def table_node():
    return deepcopy(TABLE)


@pytest.fixture
def kanban_node():
    return deepcopy(KANBAN)


@pytest.fixture
def make_candidate():
    """Factory for candidate documents shaped like model output."""

    def _make(*components, schema_id="dashboard"):
        return {
            "id": schema_id,
            "version": "1.0.0",
            "type": "screen",
            "layout": {"mode": "grid", "columns": 2},
            "components": [deepcopy(c) for c in components],
            "metadata": {
                "intent": "show revenue",
                "timestamp": "2024-01-01T00:00:00+00:00",
                "conversationId": "conv-1",
            },
        }

    return _make


@pytest.fixture
def nested_candidate(make_candidate):
    """Card holding a stat card and a button that targets it."""
    return make_candidate(
        {
            "id": "card",
            "type": "card",
            "props": {"title": "Overview"},
            "children": [
                deepcopy(STAT_CARD),
                {
                    "id": "refresh",
                    "type": "button",
                    "props": {"label": "Refresh"},
                    "actions": [
                        {
                            "id": "refresh-click",
                            "type": "click",
                            "intent": "reload revenue",
                            "updates": [
                                {"type": "update", "target": "a", "schema": {"props": {"value": 0}}}
                            ],
                        }
                    ],
                },
            ],
        },
        deepcopy(TABLE),
    )


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Small limits so boundaries are easy to reach."""
    return Settings(history_depth=5, max_queue_depth=2, max_string_length=64, max_prop_depth=4)


@pytest.fixture
def registry():
    return create_default_registry()


@pytest.fixture
def validator(registry):
    return Validator(registry)


@pytest.fixture
def applier(validator):
    return EvolutionApplier(validator)


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine(registry, settings, fixed_clock):
    return Engine(registry, settings=settings, clock=fixed_clock)


@pytest.fixture
def document(validator, make_candidate):
    """Validated document with a stat card and a table."""
    result = validator.validate(make_candidate(STAT_CARD, TABLE))
    assert result.valid, result.errors
    return result.document
