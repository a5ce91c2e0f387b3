from .columns import SHOPIFY_ORDER_COLUMNS, SPECIAL_COLUMNS, default_mapping
from .core import FieldMapping, MappingBuilder, OrderFlattener, EngineConfig, serialize_csv

__all__ = [
    "SHOPIFY_ORDER_COLUMNS",
    "SPECIAL_COLUMNS",
    "default_mapping",
    "FieldMapping",
    "MappingBuilder",
    "OrderFlattener",
    "EngineConfig",
    "serialize_csv",
]
