"""Batch publishing exports."""

from .batch_producer import BatchProducer
from .delivery_outcomes import BatchEntry, BatchReport, DeliveryOutcome, DeliveryStatus
from .kafka_transport import KafkaBatchTransport
from .transports import BatchTransport, DryRunTransport

__all__ = [
    "BatchEntry",
    "BatchProducer",
    "BatchReport",
    "BatchTransport",
    "DeliveryOutcome",
    "DeliveryStatus",
    "DryRunTransport",
    "KafkaBatchTransport",
]
