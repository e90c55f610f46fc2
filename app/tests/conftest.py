import pytest
import structlog

from infrastructure.services.providers import (
    get_failed_messages_handler,
    get_failed_messages_repository,
    get_settings,
)


@pytest.fixture(autouse=True)
def reset_logging_context():
    """Keep retry context bound in one test out of the next."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def reset_providers():
    """Drop cached singletons so tests never share settings or repositories."""
    yield
    get_failed_messages_handler.cache_clear()
    get_failed_messages_repository.cache_clear()
    get_settings.cache_clear()
