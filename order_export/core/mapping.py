from __future__ import annotations
from typing import Any, Dict, Iterable, Iterator, Mapping as TMapping, Optional, Tuple

from .rules import Rule, parse_rule, to_compact


class FieldMapping:
    """
    Immutable, ordered table of (column, rule) pairs.

    Column order is the CSV column order. The table is validated once on
    construction and never changes afterwards.
    """
    __slots__ = ("_entries", "_index")

    def __init__(self, entries: Iterable[Tuple[str, Rule]]) -> None:
        from ..validation import validate_mapping

        items = tuple((name, rule) for name, rule in entries)
        validate_mapping(items, raise_on_error=True)
        object.__setattr__(self, "_entries", items)
        object.__setattr__(self, "_index", dict(items))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_dict(
        cls,
        compact: TMapping[str, Optional[str]],
        *,
        special_columns: Optional[TMapping[str, Tuple[str, str]]] = None,
    ) -> "FieldMapping":
        special_columns = special_columns or {}
        return cls(
            (name, parse_rule(text, special=special_columns.get(name)))
            for name, text in compact.items()
        )

    @property
    def columns(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self._entries)

    def items(self) -> Tuple[Tuple[str, Rule], ...]:
        return self._entries

    def to_dict(self) -> Dict[str, str]:
        return {name: to_compact(rule) for name, rule in self._entries}

    def __getitem__(self, column: str) -> Rule:
        return self._index[column]

    def __contains__(self, column: Any) -> bool:
        return column in self._index

    def __iter__(self) -> Iterator[Tuple[str, Rule]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FieldMapping):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"FieldMapping({len(self._entries)} columns)"
