"""Retry context binding for structured logging.

Binds the identity of the message being retried to every log entry emitted
while the retry runs, so store, stream and receiver logs can be correlated.

Usage:
    from infrastructure.logging import bind_retry_context

    with bind_retry_context(message_id="1700000000000-0", stream="orders.created"):
        logger.info("failed_message_retrying")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_retry_context(
    message_id: str,
    stream: Optional[str] = None,
    receiver: Optional[str] = None,
    correlation_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind retry-scoped context to all logs within the context manager.

    Args:
        message_id: Stream id of the message being retried.
        stream: Stream the message belongs to.
        receiver: Identity of the receiver handling the message.
        correlation_id: Identifier for this retry attempt. Auto-generated if
            not provided.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars for the block.
    """
    context: dict[str, Any] = {
        "message_id": message_id,
        "correlation_id": correlation_id or str(uuid.uuid4()),
    }

    if stream is not None:
        context["stream"] = stream

    if receiver is not None:
        context["receiver"] = receiver

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())
