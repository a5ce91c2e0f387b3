from __future__ import annotations

from typing import Any

from ..registry import register_operation
from ..utils import format_timestamp, to_cell


def _op_empty(rule: Any, ctx, eval_rule) -> str:
    return ""
register_operation("empty", _op_empty)

def _op_path(rule: Any, ctx, eval_rule) -> str:
    return to_cell(ctx.get_from_root(rule.path))
register_operation("path", _op_path)

def _op_line_item(rule: Any, ctx, eval_rule) -> str:
    return to_cell(ctx.get_from_rel(rule.path))
register_operation("line_item", _op_line_item)


def _op_multi(rule: Any, ctx, eval_rule) -> str:
    # Each part defaults to '' on its own, so separators are always kept.
    return rule.sep.join(eval_rule(part) for part in rule.parts)
register_operation("multi", _op_multi)


def _op_marketing_consent(rule: Any, ctx, eval_rule) -> str:
    return "TRUE" if ctx.get_from_root(rule.path) else "FALSE"
register_operation("special:marketing_consent", _op_marketing_consent)

def _op_timestamp(rule: Any, ctx, eval_rule) -> str:
    return format_timestamp(ctx.get_from_root(rule.path), column=ctx.column)
register_operation("special:timestamp", _op_timestamp)

def _op_country_code(rule: Any, ctx, eval_rule) -> str:
    return to_cell(ctx.get_from_root(f"{rule.path}.country_code"))
register_operation("special:country_code", _op_country_code)
