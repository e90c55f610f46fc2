"""Test data factories for deterministic test data generation."""

from tests.factories.failed_messages import (
    make_failed_message,
    make_received_message,
    make_stream_content,
)

__all__ = [
    "make_failed_message",
    "make_received_message",
    "make_stream_content",
]
