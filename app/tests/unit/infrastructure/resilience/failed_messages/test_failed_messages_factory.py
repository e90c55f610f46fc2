"""Unit tests for the failed messages repository factory."""

from unittest.mock import MagicMock, Mock, patch

import pytest
import structlog

from infrastructure.configuration import Settings
from infrastructure.resilience.failed_messages import (
    InMemoryFailedMessagesRepository,
    RedisFailedMessagesRepository,
    create_failed_messages_repository,
)


@pytest.fixture
def mock_settings():
    settings = Mock(spec=Settings)
    settings.failed_messages = Mock()
    settings.failed_messages.backend = "memory"
    settings.failed_messages.key = "test:failed"
    return settings


@pytest.mark.unit
class TestCreateFailedMessagesRepository:
    """Tests for create_failed_messages_repository."""

    def test_memory_backend_from_settings(self, mock_settings):
        repository = create_failed_messages_repository(settings=mock_settings)

        assert isinstance(repository, InMemoryFailedMessagesRepository)

    @patch("integrations.redis.get_redis_client")
    def test_redis_backend(self, mock_get_client, mock_settings):
        mock_settings.failed_messages.backend = "redis"
        mock_get_client.return_value = MagicMock()

        repository = create_failed_messages_repository(settings=mock_settings)

        assert isinstance(repository, RedisFailedMessagesRepository)
        assert repository.key == "test:failed"
        mock_get_client.assert_called_once_with(mock_settings)

    def test_backend_argument_overrides_settings(self, mock_settings):
        mock_settings.failed_messages.backend = "redis"

        repository = create_failed_messages_repository(
            backend="memory", settings=mock_settings
        )

        assert isinstance(repository, InMemoryFailedMessagesRepository)

    def test_unknown_backend(self, mock_settings):
        with pytest.raises(ValueError, match="Unknown failed messages backend"):
            create_failed_messages_repository(
                backend="dynamodb", settings=mock_settings
            )

    @patch("infrastructure.services.providers.get_settings")
    def test_defaults_to_provider_settings(self, mock_get_settings, mock_settings):
        mock_get_settings.return_value = mock_settings

        repository = create_failed_messages_repository()

        assert isinstance(repository, InMemoryFailedMessagesRepository)
        mock_get_settings.assert_called_once_with()

    def test_logs_with_module_context(self):
        from infrastructure.resilience.failed_messages import factory

        context = structlog.get_context(factory.logger)

        assert context["component"] == "factory"
        assert context["module_path"] == (
            "infrastructure.resilience.failed_messages.factory"
        )
