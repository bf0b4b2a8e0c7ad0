"""Schema management exports."""

from .schema_models import SchemaDocument, SchemaViolation
from .schema_validation import (
    BUNDLED_SCHEMA_NAME,
    JsonSchemaValidator,
    RecordValidator,
    SchemaError,
    load_invoice_schema,
)

__all__ = [
    "BUNDLED_SCHEMA_NAME",
    "JsonSchemaValidator",
    "RecordValidator",
    "SchemaDocument",
    "SchemaError",
    "SchemaViolation",
    "load_invoice_schema",
]
