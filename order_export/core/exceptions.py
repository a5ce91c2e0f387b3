from __future__ import annotations
from typing import Any, Optional


class MappingError(ValueError):
    pass


class RuleEvaluationError(MappingError):
    """Raised when a single column rule cannot produce a value for a row."""

    def __init__(self, message: str, *, column: Optional[str] = None, value: Any = None) -> None:
        super().__init__(message)
        self.column = column
        self.value = value


class TimestampFormatError(RuleEvaluationError):
    """Raised when a timestamp field is present but not in ISO-8601 date-time form."""
