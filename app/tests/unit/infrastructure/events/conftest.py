"""Fixtures for infrastructure event system tests."""

from datetime import datetime
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from infrastructure.events import EventEmitter
from infrastructure.events.models import Event


@pytest.fixture
def event_factory():
    """Factory for creating test events."""

    def _factory(
        event_type: str = "test.event",
        timestamp: datetime = None,
        correlation_id=None,
        metadata: dict = None,
    ):
        return Event(
            event_type=event_type,
            timestamp=timestamp or datetime.now(),
            correlation_id=correlation_id or uuid4(),
            metadata=metadata or {},
        )

    return _factory


@pytest.fixture
def emitter():
    """Emitter for a test event type."""
    return EventEmitter("test.changed")


@pytest.fixture
def mock_event_handler():
    """Mock event handler function."""
    return MagicMock()
