"""Shared fixtures for failed message tests."""

from datetime import datetime, timedelta
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

from infrastructure.resilience.failed_messages import (
    FailedMessage,
    FailedMessagesHandler,
    InMemoryFailedMessagesRepository,
    ReceiverResolver,
)
from infrastructure.streams import ReceiverRegistry, default_identity
from tests.factories.failed_messages import (
    FROZEN_NOW,
    make_failed_message,
    make_received_message,
    make_stream_content,
)
from tests.fixtures.receivers import LocalListener
from tests.fixtures.streams import FakeStreamLog


class TickingClock:
    """Clock that advances one second on every call."""

    def __init__(self, start: datetime = FROZEN_NOW):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def repository(clock):
    """Fresh in-memory repository with a deterministic clock."""
    return InMemoryFailedMessagesRepository(clock=clock)


@pytest.fixture
def stream_log():
    return FakeStreamLog()


@pytest.fixture
def registry():
    return ReceiverRegistry()


@pytest.fixture
def resolver(registry):
    return ReceiverResolver(registry)


@pytest.fixture
def handler(repository, stream_log, resolver):
    return FailedMessagesHandler(
        repository=repository,
        stream_log=stream_log,
        resolver=resolver,
    )


@pytest.fixture(autouse=True)
def reset_local_listener():
    LocalListener.handled = []
    yield
    LocalListener.handled = []


@pytest.fixture
def local_listener_identity():
    return default_identity(LocalListener)


@pytest.fixture
def mock_listener(registry, local_listener_identity):
    """Mock LocalListener returned whenever its identity is resolved."""
    listener = MagicMock(spec=LocalListener)
    registry.register(local_listener_identity, lambda: listener)
    return listener


@pytest.fixture
def failed_message_factory():
    return make_failed_message


@pytest.fixture
def received_message_factory():
    return make_received_message


@pytest.fixture
def fail_fake_message(handler, stream_log, local_listener_identity):
    """Put a message on a stream and store a failure for it.

    Returns a function (stream, id, payload) -> stored FailedMessage.
    """

    def _fail(stream: str, message_id: str, payload: Any) -> FailedMessage:
        content: Dict[str, Any] = make_stream_content(stream, payload)
        stream_log.append(stream, message_id, content)
        message = make_received_message(message_id, stream, payload)
        return handler.store(message, LocalListener(), Exception("error"))

    return _fail
