from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging

from .backends.pandas import DataFrameBackend, PandasBackend
from .context import EvaluationContext
from .exceptions import MappingError, RuleEvaluationError
from .mapping import FieldMapping
from .registry import get_registry, OperationRegistry

ErrorMode = str  # "raise" | "warn" | "blank"
ERROR_MODES = ("raise", "warn", "blank")

FlatRow = Dict[str, str]

LINE_ITEMS_PATH = "line_items"

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    on_error: ErrorMode = "raise"
    backend: DataFrameBackend = field(default_factory=PandasBackend)
    logger: Optional[logging.Logger] = None


class OrderFlattener:
    """
    Flattens orders into one row per (order, line item) pair.

    Every row carries exactly the mapping's columns, in mapping order. Rows are
    emitted order by order, and within an order in line-item order.
    """
    def __init__(
        self,
        mapping: FieldMapping,
        *,
        registry: Optional[OperationRegistry] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        if not isinstance(mapping, FieldMapping):
            raise MappingError("mapping must be a FieldMapping.")

        self.mapping = mapping
        self._registry: OperationRegistry = registry or get_registry()
        self._config: EngineConfig = config or EngineConfig()

        if self._config.on_error not in ERROR_MODES:
            raise MappingError(f"on_error must be one of {ERROR_MODES}, got '{self._config.on_error}'.")

        self._validate_handlers()

    @property
    def columns(self) -> Tuple[str, ...]:
        return self.mapping.columns

    def flatten(self, orders: Iterable[Dict[str, Any]]) -> List[FlatRow]:
        rows: List[FlatRow] = []
        for order in orders:
            rows.extend(self._build_rows_for_order(order))

        return rows

    def to_dataframe(self, orders: Iterable[Dict[str, Any]]):
        rows = self.flatten(orders)
        return self._config.backend.to_dataframe(rows, list(self.columns))

    def trace(self, order: Dict[str, Any]) -> Dict[str, Any]:
        traces: Dict[int, Dict[str, Any]] = {}
        for idx, item in enumerate(self._line_items(order)):
            ctx = EvaluationContext(order, item)
            row_trace: Dict[str, Any] = {}
            for name, rule in self.mapping:
                try:
                    val = self._eval_rule(rule, ctx.for_column(name))
                    row_trace[name] = {"op": self._registry.get_match_key(rule), "value": val}
                except RuleEvaluationError as exc:
                    row_trace[name] = {"op": self._registry.get_match_key(rule), "error": str(exc)}
            traces[idx] = row_trace

        return {"rows_emitted": len(traces), "columns_trace": traces}

    def _validate_handlers(self) -> None:
        missing = [
            name for name, rule in self.mapping
            if not self._registry.supports(rule)
        ]
        if missing:
            raise MappingError(f"No handler registered for columns: {missing}")

    @staticmethod
    def _line_items(order: Any) -> List[Any]:
        if not isinstance(order, dict):
            return []

        items = order.get(LINE_ITEMS_PATH)
        if not isinstance(items, list):
            return []

        return items

    def _build_rows_for_order(self, order: Dict[str, Any]) -> List[FlatRow]:
        rows: List[FlatRow] = []
        for item in self._line_items(order):
            ctx = EvaluationContext(order, item)
            rows.append(self._eval_columns(ctx))

        return rows

    def _eval_columns(self, ctx: EvaluationContext) -> FlatRow:
        out: FlatRow = {}
        for name, rule in self.mapping:
            col_ctx = ctx.for_column(name)
            try:
                out[name] = self._eval_rule(rule, col_ctx)
            except RuleEvaluationError as exc:
                out[name] = self._handle_rule_error(exc, col_ctx)
        return out

    def _eval_rule(self, rule: Any, ctx: EvaluationContext) -> str:
        handler = self._registry.get_handler(self._registry.get_match_key(rule))

        def _eval(inner: Any) -> str:
            return self._eval_rule(inner, ctx)

        return handler(rule, ctx, _eval)

    def _handle_rule_error(self, exc: RuleEvaluationError, ctx: EvaluationContext) -> str:
        mode = self._config.on_error
        if exc.column is None:
            exc.column = ctx.column

        if mode == "raise":
            raise exc

        if mode == "warn":
            log = self._config.logger or logger
            order_ref = ctx.root.get("name") or ctx.root.get("id")
            log.warning("Rule error for column '%s' in order %s: %s", ctx.column, order_ref, exc)

        return ""
