"""
Shopify order export columns.

Compact rule notation: '' is a blank placeholder column, 'a.b' a path into the
order, 'line_items.x' a path into the current line item, and space-separated
paths are joined with a single space.
"""
from __future__ import annotations

from typing import Dict, Tuple

from .core.mapping import FieldMapping

SHOPIFY_ORDER_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("Name", "name"),
    ("Email", "email"),
    ("Financial Status", "financial_status"),
    ("Paid at", ""),
    ("Fulfillment Status", "fulfillment_status"),
    ("Fulfilled at", "fulfillments.created_at"),
    ("Accepts Marketing", "buyer_accepts_marketing"),
    ("Currency", "currency"),
    ("Subtotal", "subtotal_price"),
    ("Shipping", "total_shipping_price_set.shop_money.amount"),
    ("Taxes", "total_tax"),
    ("Total", "total_price"),
    ("Discount Code", "discount_codes"),
    ("Discount Amount", "current_total_discounts"),
    ("Shipping Method", "shipping_lines.title"),
    ("Created at", "created_at"),
    ("Lineitem quantity", "line_items.quantity"),
    ("Lineitem name", "line_items.name"),
    ("Lineitem price", "line_items.price"),
    ("Lineitem compare at price", ""),
    ("Lineitem sku", "line_items.sku"),
    ("Lineitem requires shipping", "line_items.requires_shipping"),
    ("Lineitem taxable", "line_items.taxable"),
    ("Lineitem fulfillment status", "line_items.fulfillment_status"),
    ("Billing Name", "billing_address.name"),
    ("Billing Street", "billing_address.address1 billing_address.address2"),
    ("Billing Address1", "billing_address.address1"),
    ("Billing Address2", "billing_address.address2"),
    ("Billing Company", "billing_address.company"),
    ("Billing City", "billing_address.city"),
    ("Billing Zip", "billing_address.zip"),
    ("Billing Province", "billing_address.province_code"),
    ("Billing Country", "billing_address.country"),
    ("Billing Phone", "billing_address.phone"),
    ("Shipping Name", "shipping_address.name"),
    ("Shipping Street", "shipping_address.address1 shipping_address.address2"),
    ("Shipping Address1", "shipping_address.address1"),
    ("Shipping Address2", "shipping_address.address2"),
    ("Shipping Company", "shipping_address.company"),
    ("Shipping City", "shipping_address.city"),
    ("Shipping Zip", "shipping_address.zip"),
    ("Shipping Province", "shipping_address.province_code"),
    ("Shipping Country", "shipping_address.country"),
    ("Shipping Phone", "shipping_address.phone"),
    ("Note Attributes", "note_attributes"),
    ("Cancelled at", "cancelled_at"),
    ("Refunded Amount", "refunds.0.transactions.0.amount"),
    ("Vendor", "line_items.vendor"),
    ("Order ID", "id"),
    ("Lineitem discount", "line_items.total_discount"),
    ("Billing Province Name", "billing_address.province_code"),
    ("Shipping Province Name", "shipping_address.province_code"),
)

# Columns whose value is not a plain lookup of the listed path: (kind, source path).
SPECIAL_COLUMNS: Dict[str, Tuple[str, str]] = {
    "Accepts Marketing": ("marketing_consent", "buyer_accepts_marketing"),
    "Created at": ("timestamp", "created_at"),
    "Billing Country": ("country_code", "billing_address"),
    "Shipping Country": ("country_code", "shipping_address"),
}


def default_mapping() -> FieldMapping:
    return FieldMapping.from_dict(dict(SHOPIFY_ORDER_COLUMNS), special_columns=SPECIAL_COLUMNS)
