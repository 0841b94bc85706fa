"""F distribution variates as a ratio of scaled gamma draws."""

from __future__ import annotations

import logging
import math
from collections.abc import MutableSequence
from typing import Any

from ..containers import MatrixBackend
from ..engines import EngineLike, RandomEngine, resolve_engine
from ..vectorize import fill_buffer, fill_matrix
from .gamma import draw_gamma

logger = logging.getLogger(__name__)


def draw_f(df1: float, df2: float, gen: RandomEngine) -> float:
    """One F(df1, df2) variate: ``(X / df1) / (Y / df2)`` with ``X, Y`` chi-squared."""
    df1, df2 = float(df1), float(df2)
    if not (math.isfinite(df1) and math.isfinite(df2) and df1 > 0.0 and df2 > 0.0):
        logger.debug("rf domain error (df1=%r, df2=%r)", df1, df2)
        return math.nan
    numerator = draw_gamma(0.5 * df1, 2.0, gen)
    denominator = draw_gamma(0.5 * df2, 2.0, gen)
    if denominator == 0.0:
        return math.inf
    return (numerator / df1) / (denominator / df2)


def rf(df1: float, df2: float, engine: EngineLike = None) -> float:
    """Sample one F(df1, df2) variate from a borrowed generator or a seed."""
    return draw_f(df1, df2, resolve_engine(engine))


def rf_into(
    df1: float,
    df2: float,
    vals_out: MutableSequence[float],
    num_elem: int | None = None,
    engine: EngineLike = None,
) -> None:
    fill_buffer(lambda gen: draw_f(df1, df2, gen), vals_out, num_elem, engine)


def rf_matrix(
    rows: int,
    cols: int,
    df1: float,
    df2: float,
    *,
    engine: EngineLike = None,
    backend: str | MatrixBackend = "numpy",
) -> Any:
    return fill_matrix(
        lambda gen: draw_f(df1, df2, gen), rows, cols, engine=engine, backend=backend
    )


__all__ = ["draw_f", "rf", "rf_into", "rf_matrix"]
