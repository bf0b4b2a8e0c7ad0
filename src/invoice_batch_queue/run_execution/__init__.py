"""Run execution domain exports."""

from .publish_run_use_case import (
    RunExecutionError,
    check_invoice_documents,
    execute_publish_run,
    format_invoice_checks,
)
from .run_contracts import InvoiceCheck, PublishOutcome, PublishRequest

__all__ = [
    "InvoiceCheck",
    "PublishOutcome",
    "PublishRequest",
    "RunExecutionError",
    "check_invoice_documents",
    "execute_publish_run",
    "format_invoice_checks",
]
