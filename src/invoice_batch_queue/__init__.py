"""Schema-validated invoice records published to Kafka in bounded batches."""

from .batch_publishing import BatchProducer, DryRunTransport, KafkaBatchTransport
from .errors import (
    ArgumentCountError,
    InvalidAccessorError,
    InvoiceQueueError,
    ProducerClosedError,
    TransportError,
    TypeMismatchError,
    ValidationError,
)
from .record_container import BillingAddress, Invoice, InvoiceItem
from .schema_management import JsonSchemaValidator, load_invoice_schema

__all__ = [
    "ArgumentCountError",
    "BatchProducer",
    "BillingAddress",
    "DryRunTransport",
    "InvalidAccessorError",
    "Invoice",
    "InvoiceItem",
    "InvoiceQueueError",
    "JsonSchemaValidator",
    "KafkaBatchTransport",
    "ProducerClosedError",
    "TransportError",
    "TypeMismatchError",
    "ValidationError",
    "load_invoice_schema",
]
