"""Reads raw invoice documents from JSON or YAML files."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml


class RecordInputError(Exception):
    """Raised when an invoice input file cannot be read."""


def read_invoice_documents(input_path: Path | str) -> tuple[Mapping[str, Any], ...]:
    """Return the raw invoice mappings held in `input_path`.

    The file holds either a list of invoice objects or a mapping with an
    ``invoices`` list. JSON files are read by the same YAML parser.
    """
    path = Path(input_path)
    if not path.exists():
        raise RecordInputError(f"Input file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RecordInputError(f"Unable to read input file {path}: {exc}") from exc
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RecordInputError(f"Failed to parse input file: {exc}") from exc

    documents = _extract_documents(parsed)
    for index, document in enumerate(documents):
        if not isinstance(document, Mapping):
            raise RecordInputError(f"Invoice #{index + 1} must be an object.")
    return tuple(documents)


def _extract_documents(parsed: Any) -> Sequence[Any]:
    if parsed is None:
        return ()
    if isinstance(parsed, Mapping):
        invoices = parsed.get("invoices")
        if invoices is None:
            raise RecordInputError("Input mapping must contain an 'invoices' list.")
        parsed = invoices
    if isinstance(parsed, str) or not isinstance(parsed, Sequence):
        raise RecordInputError("Invoices must be provided as a list.")
    return parsed
