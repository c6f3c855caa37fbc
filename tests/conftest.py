"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from deepops.config import reset_settings
from deepops.core.override import get_overrides
from deepops.core.schema import SchemaRegistry
from deepops.tracing import RecordingHook


@pytest.fixture(autouse=True)
def fresh_settings():
    """Every test starts from settings loaded from the environment."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def registry():
    """Isolated schema registry."""
    return SchemaRegistry()


@pytest.fixture
def overrides():
    """Global override table, emptied after the test."""
    table = get_overrides()
    yield table
    table.clear()


@pytest.fixture
def hook():
    """Hook that records every traversal event."""
    return RecordingHook()
