"""Record container exports."""

from .data_container import DataContainer, default_validator
from .field_registry import (
    Accessor,
    FieldDescriptor,
    FieldRegistry,
    FieldType,
    accessor_suffix,
    field_name_for,
)
from .invoice_records import BillingAddress, Invoice, InvoiceItem

__all__ = [
    "Accessor",
    "BillingAddress",
    "DataContainer",
    "FieldDescriptor",
    "FieldRegistry",
    "FieldType",
    "Invoice",
    "InvoiceItem",
    "accessor_suffix",
    "default_validator",
    "field_name_for",
]
