"""Shared fixtures for typed-notification tests."""

from __future__ import annotations

import pytest

from typed_notification.application.center import TypedCenter
from typed_notification.config.settings import get_settings
from typed_notification.container import CenterFactory
from typed_notification.infrastructure.broadcast.memory import InMemoryBroadcastCenter


@pytest.fixture(autouse=True)
def _isolate_process_state():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    CenterFactory.reset()


@pytest.fixture
def broadcast() -> InMemoryBroadcastCenter:
    return InMemoryBroadcastCenter()


@pytest.fixture
def center(broadcast: InMemoryBroadcastCenter) -> TypedCenter:
    return TypedCenter(broadcast)
