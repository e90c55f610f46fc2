"""Structured logging for the streamer client.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_retry_context(): Bind the message being retried to every log line
"""

from infrastructure.logging.context import bind_retry_context
from infrastructure.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_retry_context",
]
