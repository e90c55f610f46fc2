"""
Dependency injection services.

Provides provider functions for application-scoped singletons.
"""

from infrastructure.services.providers import (
    get_failed_messages_handler,
    get_failed_messages_repository,
    get_settings,
)

__all__ = [
    "get_settings",
    "get_failed_messages_repository",
    "get_failed_messages_handler",
]
