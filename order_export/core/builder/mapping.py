from __future__ import annotations
from typing import Dict, List

from ..mapping import FieldMapping
from ..rules import (
    LINE_ITEM_PREFIX,
    EmptyRule,
    LineItemPathRule,
    MultiPathRule,
    PathRule,
    Rule,
    SpecialRule,
)


class MappingBuilder:
    """
    Fluent construction of a FieldMapping; columns keep insertion order.

        mapping = (MappingBuilder()
                   .path("Order ID", "id")
                   .line_item("Lineitem sku", "sku")
                   .join("Billing Street", "billing_address.address1", "billing_address.address2")
                   .special("Created at", "timestamp", "created_at")
                   .build())
    """
    __slots__ = ("_columns",)

    def __init__(self) -> None:
        self._columns: Dict[str, Rule] = {}

    def _set(self, name: str, rule: Rule) -> "MappingBuilder":
        if not name or not isinstance(name, str):
            raise ValueError("column name must be a non-empty string.")
        self._columns[name] = rule
        return self

    def empty(self, name: str) -> "MappingBuilder":
        return self._set(name, EmptyRule())

    def path(self, name: str, dotted: str) -> "MappingBuilder":
        if not dotted or not isinstance(dotted, str):
            raise ValueError("path() requires a non-empty string.")
        return self._set(name, PathRule(dotted))

    def line_item(self, name: str, dotted: str) -> "MappingBuilder":
        if not dotted or not isinstance(dotted, str):
            raise ValueError("line_item() requires a non-empty string.")
        if dotted.startswith(LINE_ITEM_PREFIX):
            dotted = dotted[len(LINE_ITEM_PREFIX):]
        return self._set(name, LineItemPathRule(dotted))

    def join(self, name: str, *paths: str, sep: str = " ") -> "MappingBuilder":
        if len(paths) < 2:
            raise ValueError("join() needs at least two paths.")
        parts: List[Rule] = []
        for p in paths:
            if p.startswith(LINE_ITEM_PREFIX):
                parts.append(LineItemPathRule(p[len(LINE_ITEM_PREFIX):]))
            else:
                parts.append(PathRule(p))
        return self._set(name, MultiPathRule(tuple(parts), sep=sep))

    def special(self, name: str, kind: str, dotted: str) -> "MappingBuilder":
        return self._set(name, SpecialRule(kind, dotted))

    def build(self) -> FieldMapping:
        return FieldMapping(self._columns.items())
