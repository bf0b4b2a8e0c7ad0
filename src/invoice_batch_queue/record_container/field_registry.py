"""Per-kind field declarations and the accessor lookup table built from them."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from invoice_batch_queue.errors import InvalidAccessorError

GET_PREFIX = "get"
SET_PREFIX = "set"

_BOUNDARY = re.compile(r"([A-Z0-9])")


class FieldType(str, Enum):
    """Scalar types a field can declare."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"

    def matches(self, value: Any) -> bool:
        # bool is a subclass of int, so it is checked by exact type.
        if self is FieldType.BOOLEAN:
            return type(value) is bool
        if self is FieldType.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        if self is FieldType.FLOAT:
            return isinstance(value, float)
        return isinstance(value, str)


def type_tag(value: Any) -> str:
    """Name the runtime type of `value` using the declared type vocabulary."""
    for field_type in (FieldType.BOOLEAN, FieldType.INTEGER, FieldType.FLOAT, FieldType.STRING):
        if field_type.matches(value):
            return field_type.value
    if value is None:
        return "null"
    return type(value).__name__


@dataclass(frozen=True)
class FieldDescriptor:
    """Declared name and scalar type of one field."""

    name: str
    field_type: FieldType


@dataclass(frozen=True)
class Accessor:
    """One resolved get or set accessor name."""

    name: str
    prefix: str
    field: FieldDescriptor

    @property
    def arity(self) -> int:
        return 0 if self.prefix == GET_PREFIX else 1


def accessor_suffix(field_name: str) -> str:
    """Map a snake_case field name to its CamelCase accessor suffix."""
    return "".join(segment[:1].upper() + segment[1:] for segment in field_name.split("_"))


def field_name_for(accessor_name: str) -> str:
    """Map a `get`/`set` accessor name back to the snake_case field name it addresses."""
    for prefix in (GET_PREFIX, SET_PREFIX):
        if accessor_name.startswith(prefix):
            accessor_name = accessor_name[len(prefix) :]
            break
    snake = _BOUNDARY.sub(lambda match: "_" + match.group(1).lower(), accessor_name)
    return snake.lstrip("_")


class FieldRegistry:
    """Static field table for one entity kind.

    The accessor table is built once, when the registry is created, and maps
    every ``getX``/``setX`` name to exactly one declared field.
    """

    def __init__(self, kind: str, descriptors: Iterable[FieldDescriptor]) -> None:
        self.kind = kind
        fields: dict[str, FieldDescriptor] = {}
        accessors: dict[str, Accessor] = {}
        for descriptor in descriptors:
            if descriptor.name in fields:
                raise ValueError(f"{kind} declares field `{descriptor.name}` more than once.")
            suffix = accessor_suffix(descriptor.name)
            if field_name_for(suffix) != descriptor.name:
                raise ValueError(
                    f"{kind} field `{descriptor.name}` has no reversible accessor name."
                )
            fields[descriptor.name] = descriptor
            for prefix in (GET_PREFIX, SET_PREFIX):
                name = prefix + suffix
                accessors[name] = Accessor(name=name, prefix=prefix, field=descriptor)
        self._fields = MappingProxyType(fields)
        self._accessors = MappingProxyType(accessors)

    @property
    def fields(self) -> Mapping[str, FieldDescriptor]:
        return self._fields

    @property
    def accessors(self) -> Mapping[str, Accessor]:
        return self._accessors

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._fields

    def __iter__(self):
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def descriptor(self, field_name: str) -> FieldDescriptor:
        try:
            return self._fields[field_name]
        except KeyError:
            raise InvalidAccessorError(
                f"`{self.kind}` has no field named `{field_name}`."
            ) from None

    def resolve_accessor(self, accessor_name: str) -> Accessor:
        try:
            return self._accessors[accessor_name]
        except KeyError:
            raise InvalidAccessorError(
                f"Invalid method name `{self.kind}::{accessor_name}`."
            ) from None
