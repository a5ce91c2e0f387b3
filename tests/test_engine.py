"""
Tests for the order flattening engine.

Validates:
- One row per (order, line item), in order-then-line-item order
- Exact column set and order on every row
- Rule semantics: empty, order path, line-item path, multi-path, special columns
- Blank-on-missing policy
- Error modes for malformed timestamps
- Purity (identical output on repeated calls)
"""
import logging

import pytest

from order_export.core.engine import EngineConfig, OrderFlattener
from order_export.core.exceptions import MappingError, TimestampFormatError
from order_export.core.mapping import FieldMapping
from order_export.core.registry import OperationRegistry
from order_export.core.rules import PathRule


def test_one_row_per_line_item(flattener, order):
    rows = flattener.flatten([order])
    assert len(rows) == 2
    assert [r["Lineitem sku"] for r in rows] == ["MUG-1", "GC-10"]


def test_order_level_values_repeat(flattener, order):
    rows = flattener.flatten([order])
    order_cols = ["Name", "Email", "Total", "Billing Street", "Created at", "Order ID"]
    for col in order_cols:
        assert rows[0][col] == rows[1][col]


def test_row_order_follows_orders_then_items(flattener, order):
    second = dict(order, name="#1002", line_items=[dict(order["line_items"][0], sku="X-1")])
    rows = flattener.flatten([order, second])
    assert [(r["Name"], r["Lineitem sku"]) for r in rows] == [
        ("#1001", "MUG-1"),
        ("#1001", "GC-10"),
        ("#1002", "X-1"),
    ]


def test_every_row_has_exact_columns(flattener, mapping, order):
    sparse = {"id": 1, "line_items": [{}]}
    rows = flattener.flatten([order, sparse])
    for row in rows:
        assert tuple(row.keys()) == mapping.columns
        assert all(isinstance(v, str) for v in row.values())


def test_full_row_values(flattener, order):
    row = flattener.flatten([order])[0]
    assert row["Name"] == "#1001"
    assert row["Email"] == "jane@example.com"
    assert row["Financial Status"] == "paid"
    assert row["Paid at"] == ""
    assert row["Fulfillment Status"] == ""
    assert row["Fulfilled at"] == ""
    assert row["Accepts Marketing"] == "TRUE"
    assert row["Currency"] == "CAD"
    assert row["Subtotal"] == "40.00"
    assert row["Shipping"] == "5.00"
    assert row["Taxes"] == "3.20"
    assert row["Total"] == "48.20"
    assert row["Discount Code"] == '[{"code":"SPRING","amount":"2.00","type":"fixed_amount"}]'
    assert row["Discount Amount"] == "2.00"
    assert row["Shipping Method"] == ""
    assert row["Created at"] == "27-03-2025 11:51"
    assert row["Lineitem quantity"] == "2"
    assert row["Lineitem name"] == "Stoneware Mug"
    assert row["Lineitem price"] == "15.00"
    assert row["Lineitem compare at price"] == ""
    assert row["Lineitem requires shipping"] == "true"
    assert row["Lineitem taxable"] == "true"
    assert row["Lineitem fulfillment status"] == ""
    assert row["Billing Name"] == "Jane Doe"
    assert row["Billing Street"] == "12 Elm St "
    assert row["Billing Address2"] == ""
    assert row["Billing Company"] == ""
    assert row["Billing Zip"] == "M5V 2T6"
    assert row["Billing Province"] == "ON"
    assert row["Billing Country"] == "CA"
    assert row["Shipping Street"] == "99 King St W Unit 4"
    assert row["Shipping Company"] == "Acme, Inc."
    assert row["Shipping Country"] == "CA"
    assert row["Shipping Phone"] == ""
    assert row["Note Attributes"] == '[{"name":"gift","value":"yes"}]'
    assert row["Cancelled at"] == ""
    assert row["Refunded Amount"] == "10.00"
    assert row["Vendor"] == "Acme"
    assert row["Order ID"] == "5012345678901"
    assert row["Lineitem discount"] == "0.00"
    assert row["Billing Province Name"] == "ON"


def test_false_line_item_flags_are_blank(flattener, order):
    row = flattener.flatten([order])[1]
    assert row["Lineitem taxable"] == ""
    assert row["Lineitem requires shipping"] == ""
    assert row["Lineitem fulfillment status"] == "fulfilled"


def test_missing_billing_address_blanks_billing_columns(flattener, mapping, order):
    del order["billing_address"]
    row = flattener.flatten([order])[0]
    billing = [c for c in mapping.columns if c.startswith("Billing")]
    assert billing
    assert all(row[c] == "" for c in billing if c != "Billing Street")
    # The street join keeps its separator even when both parts are missing.
    assert row["Billing Street"] == " "


@pytest.mark.parametrize("value,expected", [
    (True, "TRUE"),
    (False, "FALSE"),
    (None, "FALSE"),
])
def test_marketing_consent(flattener, order, value, expected):
    order["buyer_accepts_marketing"] = value
    assert flattener.flatten([order])[0]["Accepts Marketing"] == expected


def test_marketing_consent_absent(flattener, order):
    del order["buyer_accepts_marketing"]
    assert flattener.flatten([order])[0]["Accepts Marketing"] == "FALSE"


@pytest.mark.parametrize("raw,expected", [
    ("2025-03-27T11:51:11-04:00", "27-03-2025 11:51"),
    ("2024-12-01T00:05:59+05:30", "01-12-2024 00:05"),
    ("2024-01-09T23:59:00Z", "09-01-2024 23:59"),
    ("2025-03-27T11:51:11.5-04:00", "27-03-2025 11:51"),
    ("2025-03-27T11:51:11.12345-04:00", "27-03-2025 11:51"),
])
def test_created_at_reformat(flattener, order, raw, expected):
    order["created_at"] = raw
    assert flattener.flatten([order])[0]["Created at"] == expected


def test_created_at_missing_is_blank(flattener, order):
    del order["created_at"]
    assert flattener.flatten([order])[0]["Created at"] == ""


@pytest.mark.parametrize("raw", ["2025-03-27", "27/03/2025 11:51", "2025-03-27T11-51-11", "2025-13-01T10:00:00"])
def test_created_at_malformed_raises(flattener, order, raw):
    order["created_at"] = raw
    with pytest.raises(TimestampFormatError) as excinfo:
        flattener.flatten([order])
    assert excinfo.value.column == "Created at"


def test_created_at_malformed_warn_mode(mapping, order, caplog):
    order["created_at"] = "not a date"
    flattener = OrderFlattener(mapping, config=EngineConfig(on_error="warn"))
    with caplog.at_level(logging.WARNING):
        rows = flattener.flatten([order])
    assert [r["Created at"] for r in rows] == ["", ""]
    assert "Created at" in caplog.text
    assert "#1001" in caplog.text


def test_created_at_malformed_blank_mode(mapping, order):
    order["created_at"] = "garbage"
    flattener = OrderFlattener(mapping, config=EngineConfig(on_error="blank"))
    assert flattener.flatten([order])[0]["Created at"] == ""


def test_country_uses_country_code_not_display_name(flattener, order):
    order["shipping_address"]["country_code"] = None
    row = flattener.flatten([order])[0]
    assert row["Billing Country"] == "CA"
    assert row["Shipping Country"] == ""


def test_falsy_values_render_blank(flattener, order):
    order["subtotal_price"] = 0
    order["total_tax"] = ""
    order["line_items"][0]["quantity"] = 0
    row = flattener.flatten([order])[0]
    assert row["Subtotal"] == ""
    assert row["Taxes"] == ""
    assert row["Lineitem quantity"] == ""


def test_refund_index_missing(flattener, order):
    order["refunds"] = []
    assert flattener.flatten([order])[0]["Refunded Amount"] == ""


@pytest.mark.parametrize("items", [None, [], "n/a"])
def test_order_without_line_items_yields_no_rows(flattener, order, items):
    order["line_items"] = items
    assert flattener.flatten([order]) == []


def test_order_missing_line_items_key(flattener, order):
    del order["line_items"]
    assert flattener.flatten([order]) == []


def test_empty_input(flattener):
    assert flattener.flatten([]) == []


def test_flatten_is_idempotent(flattener, order):
    first = flattener.flatten([order])
    second = flattener.flatten([order])
    assert first == second


def test_flatten_does_not_mutate_input(flattener, order):
    import copy
    snapshot = copy.deepcopy(order)
    flattener.flatten([order])
    assert order == snapshot


def test_alternate_mapping(small_mapping, order):
    rows = OrderFlattener(small_mapping).flatten([order])
    assert rows == [
        {"Order": "#1001", "Blank": "", "Sku": "MUG-1", "Street": "12 Elm St ", "Marketing": "TRUE"},
        {"Order": "#1001", "Blank": "", "Sku": "GC-10", "Street": "12 Elm St ", "Marketing": "TRUE"},
    ]


def test_multi_path_mixes_order_and_line_item_roots(order):
    mapping = FieldMapping.from_dict({"Label": "name line_items.sku"})
    rows = OrderFlattener(mapping).flatten([order])
    assert [r["Label"] for r in rows] == ["#1001 MUG-1", "#1001 GC-10"]


def test_to_dataframe(flattener, mapping, order):
    df = flattener.to_dataframe([order])
    assert list(df.columns) == list(mapping.columns)
    assert len(df) == 2
    empty = flattener.to_dataframe([])
    assert list(empty.columns) == list(mapping.columns)
    assert len(empty) == 0


def test_trace(flattener, order):
    trace = flattener.trace(order)
    assert trace["rows_emitted"] == 2
    cols = trace["columns_trace"][0]
    assert cols["Created at"] == {"op": "special:timestamp", "value": "27-03-2025 11:51"}
    assert cols["Paid at"]["op"] == "empty"
    assert cols["Billing Street"]["op"] == "multi"


def test_trace_reports_rule_errors(flattener, order):
    order["created_at"] = "bad"
    cols = flattener.trace(order)["columns_trace"][0]
    assert "error" in cols["Created at"]


def test_missing_handler_rejected_at_construction():
    mapping = FieldMapping([("A", PathRule("a"))])
    with pytest.raises(MappingError):
        OrderFlattener(mapping, registry=OperationRegistry())


def test_invalid_error_mode(mapping):
    with pytest.raises(MappingError):
        OrderFlattener(mapping, config=EngineConfig(on_error="ignore"))


def test_requires_field_mapping():
    with pytest.raises(MappingError):
        OrderFlattener({"columns": {"A": {"path": "a"}}})
