"""Shared invoice fixtures."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

import pytest

_VALID_INVOICE: dict[str, Any] = {
    "source": "SwsEc",
    "invoice_id": "INV-1234ABCD",
    "invoice_date": "2020-01-21T08:54:09Z",
    "order_id": "1234567",
    "transaction_reference": "REF-ABCD1234",
    "payment_provider": "BT",
    "moneyworks_debtor_code": "WEBC001",
    "subscription_id": "SUB-XYZ-ABC",
    "currency": "USD",
    "gross_amount": 2200,
    "billing_address": {
        "company_name": "Company Inc",
        "person_name": "Jo Bloggs",
        "address_1": "123 Street Road",
        "address_2": "Suburbia",
        "address_3": "The Stixx",
        "city": "Townsville",
        "region": "Statey",
        "post_code": "90210",
        "country_iso": "NZ",
    },
    "items": [
        {
            "sku": "SKU1",
            "quantity": 2,
            "amount_gross": 2200,
            "amount_tax": 200,
            "amount_net": 2000,
            "unit_price": 1000,
            "tax_code": "V",
        }
    ],
}


@pytest.fixture
def invoice_document() -> Callable[..., dict[str, Any]]:
    """Build a valid raw invoice, overriding top-level keys as requested."""

    def build(**overrides: Any) -> dict[str, Any]:
        document = copy.deepcopy(_VALID_INVOICE)
        document.update(overrides)
        return document

    return build
