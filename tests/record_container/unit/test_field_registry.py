"""Field registry and accessor name resolution tests."""

from __future__ import annotations

import pytest
from invoice_batch_queue.errors import InvalidAccessorError
from invoice_batch_queue.record_container import (
    BillingAddress,
    FieldDescriptor,
    FieldRegistry,
    FieldType,
    Invoice,
    InvoiceItem,
    accessor_suffix,
    field_name_for,
)
from invoice_batch_queue.record_container.field_registry import type_tag


@pytest.mark.parametrize(
    ("accessor_name", "field_name"),
    [
        ("getAmountGross", "amount_gross"),
        ("setTaxCode", "tax_code"),
        ("getAddress1", "address_1"),
        ("setMoneyworksDebtorCode", "moneyworks_debtor_code"),
        ("getSku", "sku"),
    ],
)
def test_field_name_for_converts_camel_case_accessors(accessor_name: str, field_name: str) -> None:
    assert field_name_for(accessor_name) == field_name


def test_accessor_suffix_is_inverse_of_field_name_for() -> None:
    for kind in (Invoice, BillingAddress, InvoiceItem):
        for descriptor in kind.registry:
            assert field_name_for("get" + accessor_suffix(descriptor.name)) == descriptor.name


def test_every_declared_field_has_exactly_one_get_and_one_set_accessor() -> None:
    for kind in (Invoice, BillingAddress, InvoiceItem):
        registry = kind.registry
        assert len(registry.accessors) == 2 * len(registry)
        for descriptor in registry:
            matching = [
                accessor
                for accessor in registry.accessors.values()
                if accessor.field is descriptor
            ]
            assert sorted(accessor.prefix for accessor in matching) == ["get", "set"]


def test_resolve_accessor_returns_declared_field() -> None:
    accessor = InvoiceItem.registry.resolve_accessor("setUnitPrice")

    assert accessor.field.name == "unit_price"
    assert accessor.field.field_type is FieldType.INTEGER
    assert accessor.arity == 1


@pytest.mark.parametrize(
    "accessor_name",
    ["getFoo", "setSkus", "getsku", "get_sku", "deleteSku", "", "getBillingAddress"],
)
def test_resolve_accessor_rejects_unknown_names(accessor_name: str) -> None:
    with pytest.raises(InvalidAccessorError):
        InvoiceItem.registry.resolve_accessor(accessor_name)


def test_registry_rejects_duplicate_fields() -> None:
    with pytest.raises(ValueError, match="more than once"):
        FieldRegistry(
            "Broken",
            (FieldDescriptor("sku", FieldType.STRING), FieldDescriptor("sku", FieldType.STRING)),
        )


def test_registry_rejects_names_without_reversible_accessor() -> None:
    with pytest.raises(ValueError, match="reversible"):
        FieldRegistry("Broken", (FieldDescriptor("line2b", FieldType.STRING),))


@pytest.mark.parametrize(
    ("field_type", "value", "expected"),
    [
        (FieldType.INTEGER, 3, True),
        (FieldType.INTEGER, True, False),
        (FieldType.INTEGER, 3.0, False),
        (FieldType.FLOAT, 3.0, True),
        (FieldType.FLOAT, 3, False),
        (FieldType.BOOLEAN, False, True),
        (FieldType.BOOLEAN, 0, False),
        (FieldType.STRING, "3", True),
        (FieldType.STRING, None, False),
    ],
)
def test_field_type_matches_runtime_types(field_type: FieldType, value: object, expected: bool) -> None:
    assert field_type.matches(value) is expected


def test_type_tag_uses_declared_type_vocabulary() -> None:
    assert type_tag("two") == "string"
    assert type_tag(2) == "integer"
    assert type_tag(2.5) == "float"
    assert type_tag(True) == "boolean"
    assert type_tag(None) == "null"
    assert type_tag([1]) == "list"
