from __future__ import annotations
from typing import Any, Callable, Dict, Optional

# Operation handler signature:
# handler(rule: Rule,
#         ctx: EvaluationContext,
#         eval_rule: Callable[[Rule], str],   # evaluates a nested rule in the same context
# ) -> str

OperationHandler = Callable[[Any, Any, Callable[[Any], str]], str]


class OperationRegistry:
    """
    Registry mapping rule kinds ('empty', 'path', 'line_item', 'multi', 'special')
    and special-column kinds ('special:timestamp', ...) to evaluation handlers.
    """
    def __init__(self) -> None:
        self._handlers: Dict[str, OperationHandler] = {}

    def register(self, key: str, handler: OperationHandler) -> None:
        if not key or not isinstance(key, str):
            raise ValueError("key must be a non-empty string.")

        self._handlers[key] = handler

    def get_match_key(self, rule: Any) -> Optional[str]:
        kind = getattr(rule, "kind", None)
        if kind == "special":
            return f"special:{rule.special}"

        return kind

    def get_handler(self, key: str) -> OperationHandler:
        return self._handlers[key]

    def supports(self, rule: Any) -> bool:
        key = self.get_match_key(rule)
        return key is not None and key in self._handlers


_global_registry: Optional[OperationRegistry] = None


def get_registry() -> OperationRegistry:
    global _global_registry
    if _global_registry is None:
        _global_registry = OperationRegistry()
        # Built-ins are registered on import
        from .ops import builtin  # noqa: F401

    return _global_registry


def register_operation(key: str, handler: OperationHandler) -> None:
    get_registry().register(key, handler)
