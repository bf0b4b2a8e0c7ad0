"""Invoice, billing address and line item records."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from invoice_batch_queue.errors import TypeMismatchError

from .data_container import DataContainer
from .field_registry import FieldDescriptor, FieldType

_STRING = FieldType.STRING
_INTEGER = FieldType.INTEGER


class BillingAddress(DataContainer):
    """Billing address nested inside an invoice."""

    FIELDS = (
        FieldDescriptor("company_name", _STRING),
        FieldDescriptor("person_name", _STRING),
        FieldDescriptor("address_1", _STRING),
        FieldDescriptor("address_2", _STRING),
        FieldDescriptor("address_3", _STRING),
        FieldDescriptor("city", _STRING),
        FieldDescriptor("region", _STRING),
        FieldDescriptor("post_code", _STRING),
        FieldDescriptor("country_iso", _STRING),
    )
    schema_definition = "billing_address"


class InvoiceItem(DataContainer):
    """One invoice line. Monetary amounts are integers in minor currency units."""

    FIELDS = (
        FieldDescriptor("sku", _STRING),
        FieldDescriptor("quantity", _INTEGER),
        FieldDescriptor("amount_gross", _INTEGER),
        FieldDescriptor("amount_tax", _INTEGER),
        FieldDescriptor("amount_net", _INTEGER),
        FieldDescriptor("unit_price", _INTEGER),
        FieldDescriptor("tax_code", _STRING),
    )
    schema_definition = "line_item"


class Invoice(DataContainer):
    """Invoice with scalar attributes, a billing address and an ordered list of items.

    Nested setters only check that they receive the right record kind. The
    invoice as a whole is checked against the schema by `load` and `validate`.
    """

    FIELDS = (
        FieldDescriptor("source", _STRING),
        FieldDescriptor("invoice_id", _STRING),
        FieldDescriptor("invoice_date", _STRING),
        FieldDescriptor("order_id", _STRING),
        FieldDescriptor("transaction_reference", _STRING),
        FieldDescriptor("payment_provider", _STRING),
        FieldDescriptor("moneyworks_debtor_code", _STRING),
        FieldDescriptor("subscription_id", _STRING),
        FieldDescriptor("currency", _STRING),
        FieldDescriptor("gross_amount", _INTEGER),
    )
    schema_definition = None

    @classmethod
    def base_data(cls) -> dict[str, Any]:
        return {"billing_address": {}, "items": []}

    @property
    def message_key(self) -> str | None:
        return self.get_field("invoice_id")

    def get_billing_address(self) -> BillingAddress:
        address = BillingAddress.create()
        address._data = dict(self._data.get("billing_address") or {})
        return address

    def set_billing_address(self, address: BillingAddress) -> Invoice:
        _require_kind(address, BillingAddress, "billing_address")
        self._data["billing_address"] = address.get_data()
        return self

    def get_items(self) -> list[InvoiceItem]:
        items = []
        for raw_item in self._data.get("items") or []:
            item = InvoiceItem.create()
            item._data = dict(raw_item)
            items.append(item)
        return items

    def add_item(self, item: InvoiceItem) -> Invoice:
        _require_kind(item, InvoiceItem, "items")
        self._data.setdefault("items", []).append(item.get_data())
        return self

    def set_items(self, items: Iterable[InvoiceItem]) -> Invoice:
        collected = list(items)
        for item in collected:
            _require_kind(item, InvoiceItem, "items")
        self._data["items"] = [item.get_data() for item in collected]
        return self


def _require_kind(value: Any, expected: type[DataContainer], field_name: str) -> None:
    if not isinstance(value, expected):
        raise TypeMismatchError(field_name, expected.__name__, type(value).__name__)
