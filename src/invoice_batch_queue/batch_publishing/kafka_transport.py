"""Kafka producer wrapper used as the batch transport."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol, cast

from confluent_kafka import KafkaException, Producer

from invoice_batch_queue.configuration.runtime_settings import KafkaSettings
from invoice_batch_queue.errors import TransportError

from .delivery_outcomes import BatchEntry, DeliveryOutcome

logger = logging.getLogger(__name__)

DeliveryCallback = Callable[[Any, Any], None]


class KafkaProducerProtocol(Protocol):
    """Subset of the confluent producer API used by the transport."""

    def produce(
        self,
        topic: str,
        value: bytes | None = None,
        key: bytes | None = None,
        on_delivery: DeliveryCallback | None = None,
    ) -> None: ...

    def poll(self, timeout: float) -> int: ...

    def flush(self, timeout: float) -> int: ...

    def purge(self, in_queue: bool = True) -> None: ...


class KafkaBatchTransport:
    """Produces every batch entry to one topic and waits for all delivery reports."""

    def __init__(
        self,
        kafka_settings: KafkaSettings,
        producer: KafkaProducerProtocol | None = None,
    ) -> None:
        self._settings = kafka_settings
        self._producer = producer or self._create_producer()

    def send_batch(self, entries: Sequence[BatchEntry]) -> list[DeliveryOutcome]:
        outcomes: dict[str, DeliveryOutcome] = {}
        entry_ids = [entry.entry_id for entry in entries]
        try:
            for entry in entries:
                self._producer.produce(
                    self._settings.topic,
                    value=entry.body.encode("utf-8"),
                    key=entry.key.encode("utf-8") if entry.key is not None else None,
                    on_delivery=_delivery_recorder(entry.entry_id, outcomes),
                )
                self._producer.poll(0)
            remaining = self._producer.flush(self._settings.flush_timeout_seconds)
        except (KafkaException, BufferError) as exc:
            # The whole batch is reported failed, so nothing of it may go out later.
            self._discard_queued(entry_ids)
            raise TransportError(f"Kafka produce batch failed: {exc}", entry_ids) from exc

        delivered = dict(outcomes)
        if remaining:
            logger.warning("%d messages still queued after flush timeout, purging", remaining)
            self._discard_queued(entry_ids)
        return [
            delivered.get(entry_id)
            or DeliveryOutcome.failed(entry_id, "delivery timed out")
            for entry_id in entry_ids
        ]

    def _discard_queued(self, entry_ids: Sequence[str]) -> None:
        try:
            self._producer.purge(in_queue=True)
            self._producer.poll(0)
        except KafkaException as exc:
            raise TransportError(
                f"Failed to purge queued Kafka messages: {exc}", entry_ids
            ) from exc

    def _create_producer(self) -> KafkaProducerProtocol:
        config: dict[str, str | int | float | bool | None] = {
            "bootstrap.servers": ",".join(self._settings.bootstrap_servers),
            "client.id": self._settings.client_id,
            "acks": self._settings.acks,
        }
        for key, value in self._settings.security.items():
            if isinstance(value, str | int | float | bool) or value is None:
                config[key] = value
        try:
            return cast(KafkaProducerProtocol, Producer(config))
        except KafkaException as exc:
            raise TransportError(f"Failed to create Kafka producer: {exc}") from exc


def _delivery_recorder(
    entry_id: str, outcomes: dict[str, DeliveryOutcome]
) -> DeliveryCallback:
    def on_delivery(error: Any, _message: Any) -> None:
        if error is not None:
            outcomes[entry_id] = DeliveryOutcome.failed(entry_id, str(error))
        else:
            outcomes[entry_id] = DeliveryOutcome.sent(entry_id)

    return on_delivery
