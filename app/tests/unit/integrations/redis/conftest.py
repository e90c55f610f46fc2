"""Fixtures for Redis integration tests.

Level: Component-level fixtures for the Redis integration
"""

from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture
def mock_redis_client():
    """Mock Redis client returned by the patched Redis class."""
    with patch("integrations.redis.client.Redis") as mock_redis:
        client = MagicMock()
        mock_redis.return_value = client
        yield client


@pytest.fixture
def mock_connection_pool():
    """Mock Redis connection pool for testing."""
    with patch("integrations.redis.client.ConnectionPool") as mock_pool:
        yield mock_pool


@pytest.fixture
def mock_redis_settings():
    """Settings with a local Redis server."""
    mock_settings = MagicMock()
    mock_settings.redis.REDIS_HOST = "redis.internal"
    mock_settings.redis.REDIS_PORT = 6380
    mock_settings.redis.REDIS_DB = 2
    mock_settings.redis.REDIS_PASSWORD = None
    mock_settings.redis.REDIS_SOCKET_TIMEOUT = 2.5
    mock_settings.redis.REDIS_MAX_CONNECTIONS = 5
    return mock_settings


@pytest.fixture
def reset_redis_global_state():
    """Reset the shared client between tests.

    Use this fixture when tests need isolated connection state.
    """
    import integrations.redis.client as rc

    original_pool = rc._connection_pool
    original_client = rc._redis_client

    rc._connection_pool = None
    rc._redis_client = None

    yield

    rc._connection_pool = original_pool
    rc._redis_client = original_client
