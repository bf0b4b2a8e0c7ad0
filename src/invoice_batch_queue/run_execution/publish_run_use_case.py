"""Publish and validate use-case services."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from invoice_batch_queue.batch_publishing import (
    BatchProducer,
    BatchTransport,
    DryRunTransport,
    KafkaBatchTransport,
)
from invoice_batch_queue.configuration import (
    Configuration,
    ConfigurationError,
    KafkaSettings,
    load_configuration,
)
from invoice_batch_queue.errors import TransportError, ValidationError
from invoice_batch_queue.logging_setup import configure_logging
from invoice_batch_queue.record_container import Invoice
from invoice_batch_queue.record_ingestion import RecordInputError, read_invoice_documents
from invoice_batch_queue.schema_management import (
    JsonSchemaValidator,
    SchemaError,
    SchemaViolation,
    load_invoice_schema,
)

from .run_contracts import InvoiceCheck, PublishOutcome, PublishRequest

TransportFactory = Callable[[KafkaSettings], BatchTransport]

logger = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_publish_run(
    request: PublishRequest,
    *,
    transport_factory: TransportFactory | None = None,
) -> PublishOutcome:
    """Validate every invoice in the input file, then publish them in batches.

    Nothing is sent unless every invoice passes validation.
    """
    try:
        configuration = load_configuration(request.config_path)
    except ConfigurationError as exc:
        raise RunExecutionError(str(exc)) from exc
    if request.configure_logs:
        configure_logging(configuration.logging.level, configuration.logging.json_logs)

    invoices = _load_invoices(configuration, request.input_path)
    transport = _prepare_transport(configuration, request.dry_run, transport_factory)
    logger.info(
        "Publishing %d invoices to topic %s in batches of %d%s",
        len(invoices),
        configuration.kafka.topic,
        configuration.producer.max_batch_size,
        " (dry run)" if request.dry_run else "",
    )

    producer = BatchProducer(transport, max_batch_size=configuration.producer.max_batch_size)
    try:
        with producer:
            for invoice in invoices:
                producer.enqueue(invoice)
    except TransportError as exc:
        raise RunExecutionError(str(exc)) from exc

    return PublishOutcome(
        loaded=len(invoices),
        sent=producer.sent_count,
        failed=producer.failed_count,
        batches=producer.batches_sent,
        dry_run=request.dry_run,
    )


def check_invoice_documents(
    input_path: str, schema_path: str | None = None
) -> tuple[InvoiceCheck, ...]:
    """Validate every invoice document in `input_path` and report all violations."""
    try:
        validator = JsonSchemaValidator(load_invoice_schema(schema_path))
        documents = read_invoice_documents(input_path)
    except (SchemaError, RecordInputError) as exc:
        raise RunExecutionError(str(exc)) from exc

    checks = []
    for position, document in enumerate(documents, start=1):
        violations: tuple[SchemaViolation, ...] = ()
        try:
            Invoice.load(document, validator)
        except ValidationError as exc:
            violations = exc.violations
        checks.append(
            InvoiceCheck(
                position=position,
                invoice_id=_invoice_id(document),
                violations=violations,
            )
        )
    return tuple(checks)


def _load_invoices(configuration: Configuration, input_path: str) -> list[Invoice]:
    try:
        validator = JsonSchemaValidator(load_invoice_schema(configuration.schema.path))
        documents = read_invoice_documents(input_path)
    except (SchemaError, RecordInputError) as exc:
        raise RunExecutionError(str(exc)) from exc

    invoices = []
    for position, document in enumerate(documents, start=1):
        try:
            invoices.append(Invoice.load(document, validator))
        except ValidationError as exc:
            raise RunExecutionError(
                f"Invoice #{position} ({_invoice_id(document) or 'no invoice_id'}) "
                f"in {Path(input_path).name} is invalid. {exc}"
            ) from exc
    return invoices


def _prepare_transport(
    configuration: Configuration,
    dry_run: bool,
    transport_factory: TransportFactory | None,
) -> BatchTransport:
    if dry_run:
        return DryRunTransport()
    factory = transport_factory or KafkaBatchTransport
    try:
        return factory(configuration.kafka)
    except TransportError as exc:
        raise RunExecutionError(str(exc)) from exc


def _invoice_id(document: Mapping[str, Any]) -> str | None:
    value = document.get("invoice_id")
    return value if isinstance(value, str) else None


def format_invoice_checks(checks: Sequence[InvoiceCheck]) -> list[str]:
    """Render one line per valid invoice and one line per violation."""
    lines = []
    for check in checks:
        label = check.invoice_id or f"invoice #{check.position}"
        if check.valid:
            lines.append(f"{label}: ok")
            continue
        for violation in check.violations:
            lines.append(f"{label}: {violation.path or '<root>'}: {violation.message}")
    return lines
