"""Backend for 0-, 1- and 2-D numpy arrays.

One-dimensional arrays are treated as column vectors and keep their 1-D
shape on output.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from .base import output_dtype


class NumpyBackend:
    name = "numpy"

    def accepts(self, obj: Any) -> bool:
        return isinstance(obj, np.ndarray) and obj.ndim <= 2

    def shape(self, obj: np.ndarray) -> tuple[int, int]:
        if obj.ndim == 0:
            return 1, 1
        if obj.ndim == 1:
            return obj.shape[0], 1
        return obj.shape[0], obj.shape[1]

    def dtype(self, obj: np.ndarray) -> np.dtype:
        return output_dtype(obj.dtype)

    def get(self, obj: np.ndarray, row: int, col: int) -> float:
        if obj.ndim == 0:
            return float(obj[()])
        if obj.ndim == 1:
            return float(obj[row])
        return float(obj[row, col])

    def like(self, obj: np.ndarray, dtype: np.dtype) -> np.ndarray:
        return np.empty(obj.shape, dtype=dtype)

    def empty(self, rows: int, cols: int, dtype: np.dtype) -> np.ndarray:
        return np.empty((rows, cols), dtype=dtype)

    def set(self, out: np.ndarray, row: int, col: int, value: float) -> None:
        if out.ndim == 0:
            out[()] = value
        elif out.ndim == 1:
            out[row] = value
        else:
            out[row, col] = value
