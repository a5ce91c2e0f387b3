from __future__ import annotations
from typing import Dict, Optional, Sequence
import csv

from .backends.pandas import DataFrameBackend, PandasBackend


def serialize_csv(
    rows: Sequence[Dict[str, str]],
    columns: Sequence[str],
    *,
    quote_all: bool = False,
    backend: Optional[DataFrameBackend] = None,
) -> str:
    """
    Render rows as CSV text: header equal to `columns`, then one line per row in column order.

    Values containing the delimiter, quote character or line breaks are quoted;
    with quote_all=True every field is. Zero rows yield the header line only.
    """
    backend = backend or PandasBackend()
    frame = backend.to_dataframe(list(rows), columns)
    quoting = csv.QUOTE_ALL if quote_all else csv.QUOTE_MINIMAL
    return backend.to_csv(frame, quoting=quoting)


def write_csv(
    rows: Sequence[Dict[str, str]],
    columns: Sequence[str],
    out_path: str,
    *,
    quote_all: bool = False,
    backend: Optional[DataFrameBackend] = None,
) -> str:
    payload = serialize_csv(rows, columns, quote_all=quote_all, backend=backend)
    with open(out_path, "w", encoding="utf-8", newline="") as fout:
        fout.write(payload)

    return out_path
