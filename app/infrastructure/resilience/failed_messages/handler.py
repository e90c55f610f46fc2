"""Storing and retrying failed messages.

FailedMessagesHandler is the entry point for both sides of a failure's
lifecycle:

- the consumer calls ``store`` when a receiver raises while handling a
  message read from a stream;
- an operator or a batch job calls ``retry`` (one record) or ``retry_all``
  (every stored record) to replay messages through their receivers.

Retries are at-least-once. Two callers retrying the same id at the same time
may both invoke the receiver.
"""

from typing import Optional

from infrastructure.logging import bind_retry_context, get_module_logger
from infrastructure.resilience.failed_messages.exceptions import (
    MessageNotFoundError,
    ReceiverResolutionError,
    RetryFailedError,
)
from infrastructure.resilience.failed_messages.models import (
    FailedMessage,
    RetryOutcome,
    RetryReport,
)
from infrastructure.resilience.failed_messages.repository import (
    FailedMessagesRepository,
)
from infrastructure.resilience.failed_messages.resolver import ReceiverResolver
from infrastructure.streams.log import StreamLog
from infrastructure.streams.models import Range, ReceivedMessage
from infrastructure.streams.receivers import MessageReceiver

logger = get_module_logger()

NO_MATCHING_MESSAGES = "No matching messages found on a Stream to retry"


class FailedMessagesHandler:
    """Records failed deliveries and replays them on demand.

    Attributes:
        repository: Storage for failed messages
        stream_log: Stream log the original messages are read back from
        resolver: Resolves receiver identities at retry time
    """

    def __init__(
        self,
        repository: FailedMessagesRepository,
        stream_log: StreamLog,
        resolver: Optional[ReceiverResolver] = None,
    ) -> None:
        self.repository = repository
        self.stream_log = stream_log
        self.resolver = resolver or ReceiverResolver()

    def store(
        self,
        message: ReceivedMessage,
        receiver: MessageReceiver,
        error: BaseException,
    ) -> FailedMessage:
        """Record that `receiver` failed to handle `message`.

        Args:
            message: The message that was being handled
            receiver: The receiver that raised
            error: The exception it raised

        Returns:
            The stored record

        Raises:
            FailedMessagesStorageError: If the repository cannot store it
        """
        identity = self.resolver.identity_of(receiver)
        return self._record_failure(message, identity, error)

    def _record_failure(
        self, message: ReceivedMessage, receiver: str, error: BaseException
    ) -> FailedMessage:
        record = FailedMessage(
            id=message.id,
            stream=message.name,
            receiver=receiver,
            error=str(error) or type(error).__name__,
        )
        stored = self.repository.add(record)

        logger.info(
            "failed_message_stored",
            message_id=stored.id,
            stream=stored.stream,
            receiver=stored.receiver,
            error=stored.error,
        )
        return stored

    def retry(self, failed_message: FailedMessage) -> None:
        """Replay a failed message through its receiver.

        On success the record is removed. When the receiver fails again a
        replacement record carrying the new error is stored first, then the
        original record is removed, and RetryFailedError is raised.

        If the receiver cannot be resolved or the message is no longer on
        its stream, the record is left as it is.

        Raises:
            RetryFailedError: The retry did not succeed
            FailedMessagesStorageError: The repository failed
        """
        with bind_retry_context(
            message_id=failed_message.id,
            stream=failed_message.stream,
            receiver=failed_message.receiver,
        ):
            receiver = self._make_receiver(failed_message)
            content = self._read_message(failed_message)
            original = self._stored_attempt(failed_message)

            logger.info("failed_message_retrying")

            message = None
            settled = False
            try:
                message = ReceivedMessage(failed_message.id, content)
                receiver.handle(message)
                settled = True
            except Exception as e:
                if message is None:
                    raise

                # Same identity as the record being retried
                self._record_failure(message, failed_message.receiver, e)
                settled = True

                logger.warning("failed_message_retry_failed", error=str(e))
                raise RetryFailedError(failed_message, str(e), cause=e) from e
            finally:
                # Only once the outcome is recorded, so a failure is never lost
                if settled and original is not None:
                    self.repository.remove(original)

            logger.info("failed_message_retry_succeeded")

    def retry_all(self) -> RetryReport:
        """Retry every stored failed message, oldest first.

        Each record is retried independently; a RetryFailedError for one
        record is recorded in the report and the batch continues. Storage
        errors are fatal and abort the batch.

        Returns:
            RetryReport with one outcome per attempted record
        """
        records = self.repository.all()
        report = RetryReport()

        if not records:
            logger.debug("failed_messages_retry_all_no_records")
            return report

        logger.info("failed_messages_retry_all_start", record_count=len(records))

        for record in records:
            try:
                self.retry(record)
            except RetryFailedError as e:
                report.outcomes.append(RetryOutcome(record, error=e))
            else:
                report.outcomes.append(RetryOutcome(record))

        logger.info("failed_messages_retry_all_complete", **report.as_stats())
        return report

    def _make_receiver(self, failed_message: FailedMessage) -> MessageReceiver:
        try:
            return self.resolver.resolve(failed_message.receiver)
        except ReceiverResolutionError as e:
            raise RetryFailedError(failed_message, str(e), cause=e) from e

    def _read_message(self, failed_message: FailedMessage) -> dict:
        entries = self.stream_log.read_range(
            failed_message.stream, Range.single(failed_message.id), limit=1
        )
        if len(entries) != 1:
            not_found = MessageNotFoundError(
                failed_message.stream, failed_message.id, found=len(entries)
            )
            logger.warning("failed_message_not_on_stream", found=not_found.found)
            raise RetryFailedError(
                failed_message, NO_MATCHING_MESSAGES, cause=not_found
            ) from not_found

        _, content = entries[0]
        return content

    def _stored_attempt(self, failed_message: FailedMessage) -> Optional[FailedMessage]:
        """The stored record this retry replaces.

        A timestamped record identifies the stored attempt itself. Otherwise
        whatever is currently stored for the id is used.
        """
        if failed_message.recorded_at is not None:
            return failed_message
        return self.repository.find(failed_message.id)
