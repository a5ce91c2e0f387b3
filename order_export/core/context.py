from __future__ import annotations
from typing import Any, Dict, Optional
from .path import PathResolver


class EvaluationContext:
    """
    Evaluation context for one flat row: the order (root) and one of its line items (rel).
    """
    __slots__ = ("root", "rel", "column")

    def __init__(self, root: Dict[str, Any], rel: Optional[Any], column: Optional[str] = None) -> None:
        self.root = root
        self.rel = rel
        self.column = column

    def get_from_root(self, path: str) -> Any:
        return PathResolver.get(self.root, path)

    def get_from_rel(self, path: str) -> Any:
        if self.rel is None:
            return None

        return PathResolver.get(self.rel, path)

    def for_column(self, column: str) -> "EvaluationContext":
        return EvaluationContext(self.root, self.rel, column)
