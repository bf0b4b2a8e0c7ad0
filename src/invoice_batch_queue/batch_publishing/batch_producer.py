"""Buffers records and sends them to a transport in bounded batches."""

from __future__ import annotations

import json
import logging
from types import TracebackType

from invoice_batch_queue.configuration.runtime_settings import DEFAULT_MAX_BATCH_SIZE
from invoice_batch_queue.errors import ProducerClosedError, TransportError
from invoice_batch_queue.record_container import DataContainer

from .delivery_outcomes import BatchEntry, BatchReport, DeliveryOutcome, DeliveryStatus
from .transports import BatchTransport

logger = logging.getLogger(__name__)


class BatchProducer:
    """Accumulates records and flushes them as batches of at most `max_batch_size`.

    A batch is sent when the buffer fills up, when `flush` is called, and once
    more when the producer is closed. Use the producer as a context manager so
    the final flush runs on every exit path::

        with BatchProducer(transport, max_batch_size=10) as producer:
            for invoice in invoices:
                producer.enqueue(invoice)

    Transport failures are raised as `TransportError` and never retried. The
    failed batch has already been removed from the buffer, so the producer
    can carry on with the next batch.
    """

    def __init__(
        self,
        transport: BatchTransport,
        *,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
    ) -> None:
        if isinstance(max_batch_size, bool) or not isinstance(max_batch_size, int):
            raise TypeError("max_batch_size must be an integer.")
        if max_batch_size <= 0:
            raise ValueError("max_batch_size must be greater than zero.")
        self._transport = transport
        self._max_batch_size = max_batch_size
        self._buffer: list[BatchEntry] = []
        self._sequence = 0
        self._closed = False
        self.sent_count = 0
        self.failed_count = 0
        self.batches_sent = 0

    @property
    def max_batch_size(self) -> int:
        return self._max_batch_size

    @property
    def pending(self) -> int:
        """Number of entries waiting in the buffer."""
        return len(self._buffer)

    @property
    def closed(self) -> bool:
        return self._closed

    def enqueue(self, record: DataContainer) -> None:
        """Buffer `record`, flushing first-in-first-out once the batch is full."""
        if self._closed:
            raise ProducerClosedError("Cannot enqueue records on a closed producer.")
        self._sequence += 1
        self._buffer.append(
            BatchEntry(
                entry_id=str(self._sequence),
                key=record.message_key,
                body=json.dumps(record.get_data(), separators=(",", ":")),
            )
        )
        if len(self._buffer) >= self._max_batch_size:
            self.flush()

    def flush(self) -> BatchReport:
        """Send the buffered entries as one batch. An empty buffer sends nothing."""
        if not self._buffer:
            return BatchReport()
        batch, self._buffer = self._buffer, []
        self.batches_sent += 1
        try:
            outcomes = list(self._transport.send_batch(batch))
        except TransportError as exc:
            self._report(batch, [DeliveryOutcome.failed(entry.entry_id, exc) for entry in batch])
            raise
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._report(batch, [DeliveryOutcome.failed(entry.entry_id, exc) for entry in batch])
            raise TransportError(
                f"Batch send failed: {exc}", [entry.entry_id for entry in batch]
            ) from exc
        if len(outcomes) != len(batch):
            outcomes = _align_outcomes(batch, outcomes)
        return self._report(batch, outcomes)

    def close(self) -> None:
        """Flush anything still buffered, then refuse further records. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self.flush()

    def __enter__(self) -> BatchProducer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def _report(self, batch: list[BatchEntry], outcomes: list[DeliveryOutcome]) -> BatchReport:
        for entry, outcome in zip(batch, outcomes, strict=True):
            if outcome.status == DeliveryStatus.FAILED:
                self.failed_count += 1
                logger.error(
                    "Kafka produce batch: entry=%s key=%s status=%s error=%s",
                    entry.entry_id,
                    entry.key,
                    outcome.status.value,
                    outcome.error_message,
                )
                continue
            if outcome.status == DeliveryStatus.SENT:
                self.sent_count += 1
            logger.info(
                "Kafka produce batch: entry=%s key=%s status=%s",
                entry.entry_id,
                entry.key,
                outcome.status.value,
            )
        return BatchReport.of(outcomes)


def _align_outcomes(
    batch: list[BatchEntry], outcomes: list[DeliveryOutcome]
) -> list[DeliveryOutcome]:
    by_id = {outcome.entry_id: outcome for outcome in outcomes}
    return [
        by_id.get(entry.entry_id)
        or DeliveryOutcome.failed(entry.entry_id, "no delivery report from transport")
        for entry in batch
    ]
