from typing import List, Dict, Optional, Sequence

import pandas as pd


class DataFrameBackend:
    def to_dataframe(self, rows: List[Dict[str, str]], columns: Optional[Sequence[str]] = None):
        raise NotImplementedError

    def to_csv(self, frame, *, quoting: int) -> str:
        raise NotImplementedError


class PandasBackend(DataFrameBackend):
    def to_dataframe(self, rows: List[Dict[str, str]], columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
        # Explicit columns keep header order stable, also for zero rows.
        return pd.DataFrame(rows, columns=list(columns) if columns is not None else None, dtype=object)

    def to_csv(self, frame: pd.DataFrame, *, quoting: int) -> str:
        return frame.to_csv(index=False, quoting=quoting, lineterminator="\n")
