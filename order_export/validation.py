from __future__ import annotations

from typing import Any, Iterable, List, Set, Tuple

from .core.exceptions import MappingError
from .core.path import PathResolver, PathSyntaxError
from .core.rules import (
    SPECIAL_KINDS,
    EmptyRule,
    LineItemPathRule,
    MultiPathRule,
    PathRule,
    SpecialRule,
)


def validate_mapping(entries: Iterable[Tuple[Any, Any]], *, raise_on_error: bool = False) -> Tuple[bool, List[str]]:
    """
    Check an ordered sequence of (column, rule) pairs.

    Returns (ok, errors); with raise_on_error=True a non-empty error list raises MappingError.
    """
    errors: List[str] = []

    def err(msg: str, path: str = "$") -> None:
        errors.append(f"{path}: {msg}")

    entries = list(entries)
    if not entries:
        err("Mapping must contain at least one column.", "$.columns")
        return _finish(errors, raise_on_error)

    seen: Set[str] = set()
    for col_name, rule in entries:
        if not isinstance(col_name, str) or not col_name.strip():
            err("Column name must be a non-empty string.", "$.columns[<name>]")
            continue

        if col_name in seen:
            err(f"Duplicate column '{col_name}'.", f"$.columns.{col_name}")
        seen.add(col_name)

        _validate_rule(rule, path=f"$.columns.{col_name}", add_err=err)

    return _finish(errors, raise_on_error)


def _finish(errors: List[str], raise_on_error: bool) -> Tuple[bool, List[str]]:
    if errors and raise_on_error:
        raise MappingError("Invalid mapping:\n- " + "\n- ".join(errors))
    return (len(errors) == 0, errors)


def _check_path(value: Any, *, path: str, add_err) -> None:
    try:
        PathResolver.split(value)
    except PathSyntaxError as e:
        add_err(str(e), path)


def _validate_rule(rule: Any, *, path: str, add_err) -> None:
    if isinstance(rule, EmptyRule):
        return

    if isinstance(rule, (PathRule, LineItemPathRule)):
        _check_path(rule.path, path=f"{path}.path", add_err=add_err)
        return

    if isinstance(rule, MultiPathRule):
        if len(rule.parts) < 2:
            add_err("Multi-path rule needs at least two paths.", f"{path}.parts")
        for i, part in enumerate(rule.parts):
            if not isinstance(part, (PathRule, LineItemPathRule)):
                add_err("Multi-path parts must be order or line-item paths.", f"{path}.parts[{i}]")
                continue
            _check_path(part.path, path=f"{path}.parts[{i}]", add_err=add_err)
        if not isinstance(rule.sep, str):
            add_err("'sep' must be a string.", f"{path}.sep")
        return

    if isinstance(rule, SpecialRule):
        if rule.special not in SPECIAL_KINDS:
            add_err(f"Unknown special rule: {rule.special} (allowed: {sorted(SPECIAL_KINDS)})", f"{path}.special")
        _check_path(rule.path, path=f"{path}.path", add_err=add_err)
        return

    add_err(f"Unsupported rule type: {type(rule).__name__}", path)
