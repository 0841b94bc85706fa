"""Backend for plain Python lists.

A list of lists is a row-major matrix; a flat list of numbers is a column
vector. Ragged rows are rejected.
"""

from __future__ import annotations

import numbers
from typing import Any

import numpy as np


def _is_nested(obj: list) -> bool:
    return bool(obj) and all(isinstance(row, list) for row in obj)


class ListBackend:
    name = "list"

    def accepts(self, obj: Any) -> bool:
        if not isinstance(obj, list):
            return False
        if _is_nested(obj):
            return all(isinstance(value, numbers.Real) for row in obj for value in row)
        return all(isinstance(value, numbers.Real) for value in obj)

    def shape(self, obj: list) -> tuple[int, int]:
        if not obj:
            return 0, 0
        if not _is_nested(obj):
            return len(obj), 1
        widths = {len(row) for row in obj}
        if len(widths) != 1:
            raise ValueError("Nested lists must have rows of equal length.")
        return len(obj), widths.pop()

    def dtype(self, obj: list) -> np.dtype:
        return np.dtype(np.float64)

    def get(self, obj: list, row: int, col: int) -> float:
        if isinstance(obj[row], list):
            return float(obj[row][col])
        return float(obj[row])

    def like(self, obj: list, dtype: np.dtype) -> list:
        if _is_nested(obj):
            return [[0.0] * len(row) for row in obj]
        return [0.0] * len(obj)

    def empty(self, rows: int, cols: int, dtype: np.dtype) -> list:
        return [[0.0] * cols for _ in range(rows)]

    def set(self, out: list, row: int, col: int, value: float) -> None:
        if isinstance(out[row], list):
            out[row][col] = float(value)
        else:
            out[row] = float(value)
