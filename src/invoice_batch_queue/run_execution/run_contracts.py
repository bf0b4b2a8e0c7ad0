"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass

from invoice_batch_queue.schema_management.schema_models import SchemaViolation


@dataclass(frozen=True)
class PublishRequest:
    """Input contract for one publish run."""

    config_path: str
    input_path: str
    dry_run: bool = False
    configure_logs: bool = False


@dataclass(frozen=True)
class PublishOutcome:
    """Output contract for one completed publish run."""

    loaded: int
    sent: int
    failed: int
    batches: int
    dry_run: bool


@dataclass(frozen=True)
class InvoiceCheck:
    """Validation result for one invoice document in an input file."""

    position: int
    invoice_id: str | None
    violations: tuple[SchemaViolation, ...]

    @property
    def valid(self) -> bool:
        return not self.violations
