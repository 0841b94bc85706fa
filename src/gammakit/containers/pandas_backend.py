"""Backend for pandas ``DataFrame`` and ``Series`` objects.

Outputs keep the input's index and column labels.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from .base import output_dtype


class PandasBackend:
    name = "pandas"

    def accepts(self, obj: Any) -> bool:
        return isinstance(obj, pd.DataFrame | pd.Series)

    def shape(self, obj: pd.DataFrame | pd.Series) -> tuple[int, int]:
        if isinstance(obj, pd.Series):
            return len(obj), 1
        return obj.shape[0], obj.shape[1]

    def dtype(self, obj: pd.DataFrame | pd.Series) -> np.dtype:
        if isinstance(obj, pd.Series):
            return output_dtype(obj.dtype)
        dtypes = set(obj.dtypes)
        if len(dtypes) == 1:
            return output_dtype(dtypes.pop())
        return np.dtype(np.float64)

    def get(self, obj: pd.DataFrame | pd.Series, row: int, col: int) -> float:
        if isinstance(obj, pd.Series):
            return float(obj.iat[row])
        return float(obj.iat[row, col])

    def like(self, obj: pd.DataFrame | pd.Series, dtype: np.dtype) -> pd.DataFrame | pd.Series:
        if isinstance(obj, pd.Series):
            return pd.Series(np.empty(len(obj), dtype=dtype), index=obj.index, name=obj.name)
        return pd.DataFrame(
            np.empty(obj.shape, dtype=dtype), index=obj.index, columns=obj.columns
        )

    def empty(self, rows: int, cols: int, dtype: np.dtype) -> pd.DataFrame:
        return pd.DataFrame(np.empty((rows, cols), dtype=dtype))

    def set(self, out: pd.DataFrame | pd.Series, row: int, col: int, value: float) -> None:
        if isinstance(out, pd.Series):
            out.iat[row] = value
        else:
            out.iat[row, col] = value
