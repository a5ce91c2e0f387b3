from .exceptions import MappingError, RuleEvaluationError, TimestampFormatError
from .rules import EmptyRule, PathRule, LineItemPathRule, MultiPathRule, SpecialRule, parse_rule
from .mapping import FieldMapping
from .engine import OrderFlattener, EngineConfig, FlatRow
from .backends.pandas import DataFrameBackend, PandasBackend
from .registry import OperationRegistry, register_operation, get_registry
from .builder.mapping import MappingBuilder
from .io import serialize_csv, write_csv

__all__ = [
    "MappingError",
    "RuleEvaluationError",
    "TimestampFormatError",
    "EmptyRule",
    "PathRule",
    "LineItemPathRule",
    "MultiPathRule",
    "SpecialRule",
    "parse_rule",
    "FieldMapping",
    "OrderFlattener",
    "EngineConfig",
    "FlatRow",
    "DataFrameBackend",
    "PandasBackend",
    "OperationRegistry",
    "register_operation",
    "get_registry",
    "MappingBuilder",
    "serialize_csv",
    "write_csv",
]
