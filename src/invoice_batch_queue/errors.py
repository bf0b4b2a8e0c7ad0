"""Error taxonomy shared by the record container and the batch producer."""

from __future__ import annotations

from collections.abc import Sequence

from invoice_batch_queue.schema_management.schema_models import SchemaViolation


class InvoiceQueueError(Exception):
    """Base class for record and producer failures."""


class ValidationError(InvoiceQueueError):
    """Raised when raw data fails schema validation at load time."""

    def __init__(self, violations: Sequence[SchemaViolation]) -> None:
        self.violations: tuple[SchemaViolation, ...] = tuple(violations)
        summary = "; ".join(f"{item.path or '<root>'}: {item.message}" for item in self.violations)
        super().__init__(f"Data failed schema validation: {summary}")


class InvalidAccessorError(InvoiceQueueError, AttributeError):
    """Raised when an accessor name does not resolve to a declared field."""


class ArgumentCountError(InvoiceQueueError, TypeError):
    """Raised when an accessor is invoked with the wrong number of arguments."""


class TypeMismatchError(InvoiceQueueError, TypeError):
    """Raised when a value does not match the declared type of a field."""

    def __init__(self, field_name: str, expected: str, actual: str) -> None:
        self.field_name = field_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid type for field `{field_name}`. Expects {expected}, {actual} found."
        )


class TransportError(InvoiceQueueError):
    """Raised when a batch send call fails as a whole."""

    def __init__(self, message: str, entry_ids: Sequence[str] = ()) -> None:
        self.entry_ids: tuple[str, ...] = tuple(entry_ids)
        super().__init__(message)


class ProducerClosedError(InvoiceQueueError):
    """Raised when records are enqueued on a closed producer."""
