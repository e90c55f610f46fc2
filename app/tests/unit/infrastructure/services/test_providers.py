"""
Unit tests for dependency injection providers.

Tests cover:
- get_settings() caching behavior
- get_failed_messages_repository() backend selection
- get_failed_messages_handler() wiring
"""

from unittest.mock import patch

import pytest

from infrastructure.configuration import FailedMessagesSettings, Settings
from infrastructure.resilience.failed_messages import (
    FailedMessagesHandler,
    InMemoryFailedMessagesRepository,
)
from infrastructure.services.providers import (
    get_failed_messages_handler,
    get_failed_messages_repository,
    get_settings,
)
from infrastructure.streams import default_registry
from integrations.redis import RedisStreamLog


@pytest.fixture(autouse=True)
def clear_provider_caches():
    get_settings.cache_clear()
    get_failed_messages_repository.cache_clear()
    get_failed_messages_handler.cache_clear()
    yield
    get_settings.cache_clear()
    get_failed_messages_repository.cache_clear()
    get_failed_messages_handler.cache_clear()


@pytest.fixture
def memory_settings():
    settings = Settings(
        failed_messages=FailedMessagesSettings(
            FAILED_MESSAGES_BACKEND="memory", STREAM_PREFIX="streamer:"
        )
    )
    with patch(
        "infrastructure.services.providers.get_settings", return_value=settings
    ):
        yield settings


@pytest.mark.unit
class TestGetSettings:
    """Tests for get_settings() provider function."""

    def test_get_settings_returns_settings_instance(self):
        """get_settings() returns a Settings instance."""
        assert isinstance(get_settings(), Settings)

    def test_get_settings_returns_cached_instance(self):
        """get_settings() returns the same instance (caching)."""
        assert get_settings() is get_settings()

    def test_get_settings_cache_can_be_cleared(self):
        """get_settings() cache can be cleared for testing."""
        instance1 = get_settings()
        get_settings.cache_clear()
        instance2 = get_settings()

        assert instance1 is not instance2


@pytest.mark.unit
class TestFailedMessagesProviders:
    """Tests for the failed messages providers."""

    def test_repository_uses_configured_backend(self, memory_settings):
        repository = get_failed_messages_repository()

        assert isinstance(repository, InMemoryFailedMessagesRepository)
        assert get_failed_messages_repository() is repository

    def test_handler_wiring(self, memory_settings):
        handler = get_failed_messages_handler()

        assert isinstance(handler, FailedMessagesHandler)
        assert handler.repository is get_failed_messages_repository()
        assert isinstance(handler.stream_log, RedisStreamLog)
        assert handler.stream_log.prefix == "streamer:"
        assert handler.resolver.registry is default_registry

    def test_handler_is_cached(self, memory_settings):
        assert get_failed_messages_handler() is get_failed_messages_handler()
