from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, Optional

from .exceptions import TimestampFormatError

_ISO_DATETIME = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})?$"
)
_FRACTION = re.compile(r"\.\d+")


def is_blank(x: Any) -> bool:
    # Missing and falsy scalars render identically in the export.
    if x is None or x is False:
        return True

    if isinstance(x, str):
        return x == ""

    if isinstance(x, (int, float)):
        return x == 0

    return False


def to_cell(x: Any) -> str:
    if is_blank(x):
        return ""

    if x is True:
        return "true"

    if isinstance(x, float) and x.is_integer():
        return str(int(x))

    if isinstance(x, (dict, list)):
        return json.dumps(x, ensure_ascii=False, separators=(",", ":"))

    return str(x)


def format_timestamp(src: Any, out_fmt: str = "%d-%m-%Y %H:%M", *, column: Optional[str] = None) -> str:
    """
    Reformat an ISO-8601 date-time string, keeping its wall-clock time.

    '2025-03-27T11:51:11-04:00' -> '27-03-2025 11:51'. The UTC offset is dropped,
    not applied. Blank input yields ''.
    """
    if is_blank(src):
        return ""

    s = str(src).strip()
    if not _ISO_DATETIME.match(s):
        raise TimestampFormatError(f"Malformed timestamp: {s!r}", column=column, value=src)

    # Seconds fractions are never rendered; fromisoformat on 3.10 only takes 3 or 6 digits.
    s = _FRACTION.sub("", s, count=1)
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError as exc:
        raise TimestampFormatError(f"Malformed timestamp: {s!r}", column=column, value=src) from exc

    return dt.strftime(out_fmt)
