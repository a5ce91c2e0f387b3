from __future__ import annotations
from typing import Any, List, Optional


class PathSyntaxError(ValueError):
    pass


class PathResolver:
    """
    Resolve dotted paths into nested dict/list structures.

    Segments per path:
      - key                  e.g. billing_address
      - N                    list index, e.g. refunds.0.transactions.0.amount

    A segment that does not apply to the current value (missing key, index out
    of range, key on a list, anything on a scalar) resolves the whole path to None.

    Examples:
      name
      billing_address.city
      refunds.0.transactions.0.amount
    """

    @classmethod
    def split(cls, path: str) -> List[str]:
        if not isinstance(path, str) or not path:
            raise PathSyntaxError("Path must be a non-empty string.")

        segments = path.split(".")
        if any(not seg for seg in segments):
            raise PathSyntaxError(f"Empty segment in path '{path}'")

        return segments

    @classmethod
    def get(cls, obj: Any, path: Optional[str]) -> Any:
        if path is None:
            return None

        cur = obj
        for seg in cls.split(path):
            if cur is None:
                return None

            cur = cls._apply_segment(cur, seg)

        return cur

    @staticmethod
    def _apply_segment(base: Any, segment: str) -> Any:
        if isinstance(base, dict):
            return base.get(segment)

        if isinstance(base, (list, tuple)):
            if not segment.isdigit():
                return None

            idx = int(segment)
            if 0 <= idx < len(base):
                return base[idx]

            return None

        return None
