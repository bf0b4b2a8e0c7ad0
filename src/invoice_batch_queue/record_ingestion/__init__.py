"""Record ingestion exports."""

from .invoice_document_reader import RecordInputError, read_invoice_documents

__all__ = ["RecordInputError", "read_invoice_documents"]
