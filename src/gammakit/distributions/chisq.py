"""Chi-squared distribution as Gamma(df / 2, 2)."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from typing import Any

from ..config import SolverConfig
from ..containers import MatrixBackend
from ..engines import EngineLike, RandomEngine, resolve_engine
from ..vectorize import apply_buffer, apply_scalar_or_container, fill_buffer, fill_matrix
from .gamma import _dgamma_scalar, _pgamma_scalar, _qgamma_scalar, draw_gamma


def _qchisq_scalar(p: float, df: float, config: SolverConfig | None = None) -> float:
    return _qgamma_scalar(p, 0.5 * float(df), 2.0, config)


def _pchisq_scalar(x: float, df: float, config: SolverConfig | None = None) -> float:
    return _pgamma_scalar(x, 0.5 * float(df), 2.0, config)


def _dchisq_scalar(x: float, df: float) -> float:
    return _dgamma_scalar(x, 0.5 * float(df), 2.0)


def _draw_chisq(df: float, gen: RandomEngine) -> float:
    return draw_gamma(0.5 * float(df), 2.0, gen)


def qchisq(p: Any, df: float, *, config: SolverConfig | None = None) -> Any:
    """Quantile function of the chi-squared distribution."""
    return apply_scalar_or_container(_qchisq_scalar, p, df, config=config)


def qchisq_into(
    vals_in: Sequence[float],
    df: float,
    vals_out: MutableSequence[float],
    num_elem: int | None = None,
    *,
    config: SolverConfig | None = None,
) -> None:
    apply_buffer(_qchisq_scalar, vals_in, vals_out, num_elem, df, config=config)


def pchisq(x: Any, df: float, *, config: SolverConfig | None = None) -> Any:
    return apply_scalar_or_container(_pchisq_scalar, x, df, config=config)


def pchisq_into(
    vals_in: Sequence[float],
    df: float,
    vals_out: MutableSequence[float],
    num_elem: int | None = None,
    *,
    config: SolverConfig | None = None,
) -> None:
    apply_buffer(_pchisq_scalar, vals_in, vals_out, num_elem, df, config=config)


def dchisq(x: Any, df: float) -> Any:
    return apply_scalar_or_container(_dchisq_scalar, x, df)


def dchisq_into(
    vals_in: Sequence[float],
    df: float,
    vals_out: MutableSequence[float],
    num_elem: int | None = None,
) -> None:
    apply_buffer(_dchisq_scalar, vals_in, vals_out, num_elem, df)


def rchisq(df: float, engine: EngineLike = None) -> float:
    return _draw_chisq(df, resolve_engine(engine))


def rchisq_into(
    df: float,
    vals_out: MutableSequence[float],
    num_elem: int | None = None,
    engine: EngineLike = None,
) -> None:
    fill_buffer(lambda gen: _draw_chisq(df, gen), vals_out, num_elem, engine)


def rchisq_matrix(
    rows: int,
    cols: int,
    df: float,
    *,
    engine: EngineLike = None,
    backend: str | MatrixBackend = "numpy",
) -> Any:
    return fill_matrix(lambda gen: _draw_chisq(df, gen), rows, cols, engine=engine, backend=backend)


__all__ = [
    "dchisq",
    "dchisq_into",
    "pchisq",
    "pchisq_into",
    "qchisq",
    "qchisq_into",
    "rchisq",
    "rchisq_into",
    "rchisq_matrix",
]
