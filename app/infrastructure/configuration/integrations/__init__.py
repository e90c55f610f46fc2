"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.redis import RedisSettings

__all__ = [
    "RedisSettings",
]
