"""Schema loading and record validation service."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from importlib import resources
from pathlib import Path
from typing import Any, Protocol

from jsonschema import Draft7Validator, validators
from jsonschema import exceptions as jsonschema_exceptions

from .schema_models import SchemaDocument, SchemaViolation

BUNDLED_SCHEMA_NAME = "invoice.schema.json"


def _is_strict_integer(_checker: Any, instance: Any) -> bool:
    # Integral floats such as 2.0 are not integers for record fields.
    return isinstance(instance, int) and not isinstance(instance, bool)


RecordSchemaValidator = validators.extend(
    Draft7Validator,
    type_checker=Draft7Validator.TYPE_CHECKER.redefine("integer", _is_strict_integer),
)


class SchemaError(Exception):
    """Raised for schema loading or compilation failures."""


class RecordValidator(Protocol):
    """Contract for validators used when loading records."""

    def validate(self, data: Mapping[str, Any], definition: str | None = None) -> bool: ...

    @property
    def errors(self) -> tuple[SchemaViolation, ...]: ...


def load_invoice_schema(path: Path | str | None = None) -> SchemaDocument:
    """Load the invoice schema from `path`, or the schema bundled with the package."""
    if path is None:
        text = (
            resources.files("invoice_batch_queue.schema_management")
            .joinpath("schemas", BUNDLED_SCHEMA_NAME)
            .read_text(encoding="utf-8")
        )
        source_path = None
    else:
        source_path = Path(path)
        if not source_path.exists():
            raise SchemaError(f"Schema file not found: {source_path}")
        try:
            text = source_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SchemaError(f"Unable to read schema file {source_path}: {exc}") from exc

    try:
        root = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid JSON schema: {exc}") from exc
    if not isinstance(root, Mapping):
        raise SchemaError("JSON schema root must be an object.")
    try:
        Draft7Validator.check_schema(root)
    except jsonschema_exceptions.SchemaError as exc:
        raise SchemaError(f"Invalid JSON schema: {exc.message}") from exc
    return SchemaDocument(root=root, source_path=source_path)


class JsonSchemaValidator:
    """Validates data against the root schema or one of its named definitions."""

    def __init__(self, document: SchemaDocument | None = None) -> None:
        self._document = document or load_invoice_schema()
        self._validators: dict[str | None, Any] = {}
        self._errors: tuple[SchemaViolation, ...] = ()

    @property
    def document(self) -> SchemaDocument:
        return self._document

    @property
    def errors(self) -> tuple[SchemaViolation, ...]:
        """Violations found by the most recent `validate` call."""
        return self._errors

    def validate(self, data: Mapping[str, Any], definition: str | None = None) -> bool:
        validator = self._validator_for(definition)
        found = sorted(validator.iter_errors(data), key=_path_sort_key)
        self._errors = tuple(_to_violations(found))
        return not self._errors

    def _validator_for(self, definition: str | None) -> Any:
        if definition not in self._validators:
            root = dict(self._document.root)
            if definition is not None:
                if definition not in self._document.definition_names:
                    raise SchemaError(f"Unknown schema definition: {definition}")
                # Draft 7 ignores keywords beside $ref, so only the definition applies.
                root["$ref"] = f"#/definitions/{definition}"
            self._validators[definition] = RecordSchemaValidator(root)
        return self._validators[definition]


def _path_sort_key(
    error: jsonschema_exceptions.ValidationError,
) -> tuple[tuple[int, int, str], ...]:
    # Array indices order numerically, so items.2 comes before items.10.
    return tuple(
        (0, part, "") if isinstance(part, int) else (1, 0, str(part))
        for part in error.absolute_path
    )


def _to_violations(
    errors: Iterable[jsonschema_exceptions.ValidationError],
) -> list[SchemaViolation]:
    violations: list[SchemaViolation] = []
    reported_required: set[str] = set()
    for error in errors:
        parent_path = _dotted_path(error.absolute_path)
        if error.validator == "required" and isinstance(error.instance, Mapping):
            if parent_path in reported_required:
                continue
            reported_required.add(parent_path)
            for name in error.validator_value:
                if name not in error.instance:
                    violations.append(
                        SchemaViolation(
                            path=_join_path(parent_path, name),
                            message=f"The property {name} is required",
                        )
                    )
            continue
        violations.append(SchemaViolation(path=parent_path, message=error.message))
    return violations


def _dotted_path(parts: Iterable[Any]) -> str:
    return ".".join(str(part) for part in parts)


def _join_path(prefix: str, name: str) -> str:
    return name if not prefix else f"{prefix}.{name}"
