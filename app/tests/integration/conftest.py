"""
Root-level conftest.py for integration tests.

Integration tests talk to a real Redis server, configured through the usual
REDIS_* settings. They are skipped when no server answers.
"""

import uuid

import pytest
from redis import Redis, RedisError

from infrastructure.configuration import RedisSettings


@pytest.fixture
def live_redis():
    """Redis client for the configured server, or skip the test."""
    settings = RedisSettings()
    client = Redis(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        db=settings.REDIS_DB,
        password=settings.REDIS_PASSWORD,
        decode_responses=True,
        socket_connect_timeout=1,
    )
    try:
        client.ping()
    except RedisError as e:
        client.close()
        pytest.skip(f"Redis not available at {settings.REDIS_HOST}: {e}")

    yield client
    client.close()


@pytest.fixture
def live_key(live_redis):
    """Hash key private to one test, deleted afterwards."""
    key = f"test:failed_messages:{uuid.uuid4().hex}"
    yield key
    live_redis.delete(key)
