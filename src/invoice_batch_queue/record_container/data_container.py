"""Schema-validated container for the named fields of one entity instance.

Fields are declared per kind in ``FIELDS``. Declaring them builds a
`FieldRegistry` and generates ``get_<field>()`` and ``set_<field>(value)``
methods per field, plus their CamelCase aliases::

    class InvoiceItem(DataContainer):
        FIELDS = (
            FieldDescriptor("sku", FieldType.STRING),
            FieldDescriptor("quantity", FieldType.INTEGER),
        )
        schema_definition = "line_item"

    item = InvoiceItem.create().set_sku("SKU1").set_quantity(2)
    item.get_quantity()
    item.call_accessor("getQuantity")

Records built with `DataContainer.load` are validated as a whole against the
named schema definition (or the root schema) and never exist in a partially
valid state.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, ClassVar, TypeVar

from invoice_batch_queue.errors import ArgumentCountError, TypeMismatchError, ValidationError
from invoice_batch_queue.schema_management import JsonSchemaValidator, RecordValidator

from .field_registry import (
    GET_PREFIX,
    Accessor,
    FieldDescriptor,
    FieldRegistry,
    type_tag,
)

ContainerT = TypeVar("ContainerT", bound="DataContainer")


@lru_cache(maxsize=1)
def default_validator() -> JsonSchemaValidator:
    """Validator over the bundled invoice schema, shared across loads."""
    return JsonSchemaValidator()


class DataContainer:
    """Typed attribute storage with schema-gated construction."""

    FIELDS: ClassVar[tuple[FieldDescriptor, ...]] = ()
    schema_definition: ClassVar[str | None] = None
    registry: ClassVar[FieldRegistry]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.registry = FieldRegistry(cls.__name__, cls.FIELDS)
        for accessor in cls.registry.accessors.values():
            for method_name in (f"{accessor.prefix}_{accessor.field.name}", accessor.name):
                if hasattr(DataContainer, method_name):
                    raise ValueError(
                        f"Field `{accessor.field.name}` of {cls.__name__} would replace "
                        f"DataContainer.{method_name}."
                    )
                if method_name not in cls.__dict__:
                    setattr(cls, method_name, _accessor_method(accessor, method_name))

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        validator: RecordValidator | None = None,
    ) -> None:
        if data is None:
            self._data: dict[str, Any] = self.base_data()
            return
        resolved_validator = validator or default_validator()
        if not resolved_validator.validate(data, self.schema_definition):
            raise ValidationError(resolved_validator.errors)
        self._data = copy.deepcopy(dict(data))

    @classmethod
    def base_data(cls) -> dict[str, Any]:
        """Structure every new instance starts from."""
        return {}

    @classmethod
    def create(cls: type[ContainerT]) -> ContainerT:
        return cls()

    @classmethod
    def load(
        cls: type[ContainerT],
        data: Mapping[str, Any],
        validator: RecordValidator | None = None,
    ) -> ContainerT:
        """Build a canonical instance from `data`, raising `ValidationError` if it is invalid."""
        return cls(data, validator)

    def validate(self: ContainerT, validator: RecordValidator | None = None) -> ContainerT:
        """Check the current data as a whole against the schema."""
        resolved_validator = validator or default_validator()
        if not resolved_validator.validate(self._data, self.schema_definition):
            raise ValidationError(resolved_validator.errors)
        return self

    def get_data(self) -> dict[str, Any]:
        """Return a copy of the full data structure, as sent over the wire."""
        return copy.deepcopy(self._data)

    @property
    def message_key(self) -> str | None:
        """Key under which the record is published, if any."""
        return None

    def get_field(self, field_name: str) -> Any:
        self.registry.descriptor(field_name)
        return self._data.get(field_name)

    def set_field(self: ContainerT, field_name: str, value: Any) -> ContainerT:
        descriptor = self.registry.descriptor(field_name)
        if not descriptor.field_type.matches(value):
            raise TypeMismatchError(field_name, descriptor.field_type.value, type_tag(value))
        self._data[field_name] = value
        return self

    def call_accessor(self, accessor_name: str, *args: Any) -> Any:
        """Invoke a CamelCase accessor such as ``getAmountGross`` or ``setTaxCode``."""
        return _dispatch(self, self.registry.resolve_accessor(accessor_name), args)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataContainer):
            return NotImplemented
        return type(self) is type(other) and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


def _dispatch(container: DataContainer, accessor: Accessor, args: tuple[Any, ...]) -> Any:
    if len(args) != accessor.arity:
        plural = "argument" if accessor.arity == 1 else "arguments"
        raise ArgumentCountError(
            f"`{type(container).__name__}::{accessor.name}` expects {accessor.arity} {plural}. "
            f"{len(args)} found."
        )
    if accessor.prefix == GET_PREFIX:
        return container.get_field(accessor.field.name)
    return container.set_field(accessor.field.name, args[0])


def _accessor_method(accessor: Accessor, method_name: str):
    def method(self: DataContainer, *args: Any) -> Any:
        return _dispatch(self, accessor, args)

    method.__name__ = method_name
    method.__qualname__ = method.__name__
    method.__doc__ = (
        f"Return `{accessor.field.name}`."
        if accessor.prefix == GET_PREFIX
        else f"Set `{accessor.field.name}` ({accessor.field.field_type.value})."
    )
    return method
