from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional, Tuple, Union

LINE_ITEM_PREFIX = "line_items."
PATH_SEPARATOR = " "

SpecialKind = Literal["marketing_consent", "timestamp", "country_code"]
SPECIAL_KINDS = frozenset({"marketing_consent", "timestamp", "country_code"})


@dataclass(frozen=True)
class EmptyRule:
    """Placeholder column, always blank."""

    kind = "empty"


@dataclass(frozen=True)
class PathRule:
    """Dotted path resolved against the order."""

    path: str
    kind = "path"


@dataclass(frozen=True)
class LineItemPathRule:
    """Dotted path resolved against the current line item (prefix already stripped)."""

    path: str
    kind = "line_item"


@dataclass(frozen=True)
class MultiPathRule:
    parts: Tuple[Union[PathRule, LineItemPathRule], ...]
    sep: str = PATH_SEPARATOR
    kind = "multi"


@dataclass(frozen=True)
class SpecialRule:
    """
    Column with custom extraction logic.

      - marketing_consent: boolean at `path` -> 'TRUE' / 'FALSE'
      - timestamp:         ISO date-time at `path` -> 'DD-MM-YYYY HH:MM'
      - country_code:      `<path>.country_code` of an address object
    """

    special: SpecialKind
    path: str
    kind = "special"


Rule = Union[EmptyRule, PathRule, LineItemPathRule, MultiPathRule, SpecialRule]


def _single_path_rule(text: str) -> Union[PathRule, LineItemPathRule]:
    if text.startswith(LINE_ITEM_PREFIX):
        return LineItemPathRule(text[len(LINE_ITEM_PREFIX):])

    return PathRule(text)


def parse_rule(text: Optional[str], *, special: Optional[Tuple[str, str]] = None) -> Rule:
    """
    Parse the compact string notation of a column rule.

    ''                                   -> EmptyRule
    'billing_address.city'               -> PathRule
    'line_items.sku'                     -> LineItemPathRule('sku')
    'billing_address.address1 billing_address.address2' -> MultiPathRule

    `special` is a (kind, path) pair assigned by column identity; it wins over
    whatever path the text holds, but an empty text still means an empty column.
    """
    if not text:
        return EmptyRule()

    if special is not None:
        kind, path = special
        return SpecialRule(kind, path)

    if PATH_SEPARATOR in text:
        parts = tuple(_single_path_rule(p) for p in text.split(PATH_SEPARATOR) if p)
        return MultiPathRule(parts)

    return _single_path_rule(text)


def to_compact(rule: Rule) -> str:
    """Inverse of parse_rule for non-special rules; special rules render their source path."""
    if isinstance(rule, EmptyRule):
        return ""

    if isinstance(rule, LineItemPathRule):
        return LINE_ITEM_PREFIX + rule.path

    if isinstance(rule, PathRule):
        return rule.path

    if isinstance(rule, MultiPathRule):
        return rule.sep.join(to_compact(p) for p in rule.parts)

    return rule.path
