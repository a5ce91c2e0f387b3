import copy

import pytest

from order_export.columns import default_mapping
from order_export.core.builder.mapping import MappingBuilder
from order_export.core.engine import OrderFlattener


SAMPLE_ORDER = {
    "id": 5012345678901,
    "name": "#1001",
    "email": "jane@example.com",
    "financial_status": "paid",
    "fulfillment_status": None,
    "buyer_accepts_marketing": True,
    "currency": "CAD",
    "subtotal_price": "40.00",
    "total_shipping_price_set": {"shop_money": {"amount": "5.00", "currency_code": "CAD"}},
    "total_tax": "3.20",
    "total_price": "48.20",
    "discount_codes": [{"code": "SPRING", "amount": "2.00", "type": "fixed_amount"}],
    "current_total_discounts": "2.00",
    "shipping_lines": [{"title": "Standard"}],
    "fulfillments": [],
    "created_at": "2025-03-27T11:51:11-04:00",
    "cancelled_at": None,
    "note_attributes": [{"name": "gift", "value": "yes"}],
    "refunds": [{"transactions": [{"amount": "10.00"}]}],
    "billing_address": {
        "name": "Jane Doe",
        "address1": "12 Elm St",
        "address2": "",
        "company": None,
        "city": "Toronto",
        "zip": "M5V 2T6",
        "province_code": "ON",
        "country": "Canada",
        "country_code": "CA",
        "phone": "+1 416 555 0100",
    },
    "shipping_address": {
        "name": "Jane Doe",
        "address1": "99 King St W",
        "address2": "Unit 4",
        "company": "Acme, Inc.",
        "city": "Toronto",
        "zip": "M5H 1J9",
        "province_code": "ON",
        "country": "Canada",
        "country_code": "CA",
        "phone": None,
    },
    "line_items": [
        {
            "quantity": 2,
            "name": "Stoneware Mug",
            "price": "15.00",
            "sku": "MUG-1",
            "taxable": True,
            "requires_shipping": True,
            "fulfillment_status": None,
            "vendor": "Acme",
            "total_discount": "0.00",
        },
        {
            "quantity": 1,
            "name": "Gift Card",
            "price": "10.00",
            "sku": "GC-10",
            "taxable": False,
            "requires_shipping": False,
            "fulfillment_status": "fulfilled",
            "vendor": "House",
            "total_discount": "2.00",
        },
    ],
}


@pytest.fixture
def order():
    return copy.deepcopy(SAMPLE_ORDER)


@pytest.fixture
def mapping():
    return default_mapping()


@pytest.fixture
def flattener(mapping):
    return OrderFlattener(mapping)


@pytest.fixture
def small_mapping():
    """Alternate table exercising every rule variant."""
    return (MappingBuilder()
            .path("Order", "name")
            .empty("Blank")
            .line_item("Sku", "sku")
            .join("Street", "billing_address.address1", "billing_address.address2")
            .special("Marketing", "marketing_consent", "buyer_accepts_marketing")
            .build())
