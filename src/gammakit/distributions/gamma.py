"""Gamma distribution: quantile inversion, CDF, density and variate sampling.

Quantiles are found on the unit-scale problem: a Wilson–Hilferty seed (or a
small-shape power-law seed) refined by Newton–Raphson in ``log x`` on the
log of whichever tail holds ``p``. Every Newton step is kept inside a bracket
around the root and replaced by bisection when it leaves it. Variates come
from Marsaglia & Tsang (2000), with the ``u**(1/shape)`` boost for
``shape < 1``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import MutableSequence, Sequence
from typing import Any

from scipy.special import gammaln, ndtri

from ..config import SolverConfig, resolve_config
from ..containers import MatrixBackend
from ..engines import EngineLike, RandomEngine, resolve_engine
from ..special import gamma_density, gamma_p, log_gamma_p, log_gamma_q
from ..vectorize import apply_buffer, apply_scalar_or_container, fill_buffer, fill_matrix

logger = logging.getLogger(__name__)

_MIN_SEED = 1e-3
_LOG_MAX = math.log(1.7976931348623157e308)
_LOG_TINY = math.log(5e-324)
_MAX_EXPANSIONS = 64


def _positive(*values: float) -> bool:
    return all(math.isfinite(value) and value > 0.0 for value in values)


def _exp(value: float) -> float:
    return math.inf if value > _LOG_MAX else math.exp(value)


def _log_seed(p: float, q: float, shape: float) -> float:
    """Log of the starting point for the unit-scale inversion, ``q = 1 - p``."""
    if shape > 1.0:
        z = float(ndtri(p)) if p <= 0.5 else -float(ndtri(q))
        t = 1.0 - 1.0 / (9.0 * shape) + z / (3.0 * math.sqrt(shape))
        if t > 0.0 and shape * t**3 > _MIN_SEED:
            return math.log(shape * t**3)
        # left tail, where P(a, x) ~ x**a / Gamma(a + 1)
        return (math.log(p) + float(gammaln(shape + 1.0))) / shape
    t = 1.0 - shape * (0.253 + shape * 0.12)
    if p < t:
        return (math.log(p) - math.log(t)) / shape
    return math.log(1.0 - math.log(q / (1.0 - t)))


class _TailResidual:
    """Residual of the inversion in ``u = log x``, increasing in ``u``.

    For ``p <= 0.5`` this is ``log P(a, x) - log p``, otherwise
    ``log q - log Q(a, x)``; either way the tail that is being matched is
    computed directly, so neither underflow nor ``1 - p`` rounding limits
    the accuracy.
    """

    def __init__(self, p: float, q: float, shape: float, config: SolverConfig) -> None:
        self.lower = p <= 0.5
        self.target = math.log(p) if self.lower else math.log(q)
        self.shape = shape
        self.config = config
        self.log_gamma_shape = float(gammaln(shape))

    def __call__(self, u: float) -> float:
        x = _exp(u)
        if self.lower:
            return log_gamma_p(self.shape, x, self.config) - self.target
        return self.target - log_gamma_q(self.shape, x, self.config)

    def newton_step(self, u: float, residual: float) -> float:
        # d/du log P(e^u) = x f(x) / P, and likewise for Q
        log_tail = residual + self.target if self.lower else self.target - residual
        log_slope = self.shape * u - _exp(u) - self.log_gamma_shape - log_tail
        return residual * _exp(-log_slope)


def _bracket(residual: _TailResidual, u: float, value: float) -> tuple[float, float]:
    width = 1.0
    if value > 0.0:
        lo, hi = u - width, u
        for _ in range(_MAX_EXPANSIONS):
            if not residual(lo) > 0.0:
                break
            hi = lo
            width *= 2.0
            lo = hi - width
        return lo, hi
    lo, hi = u, u + width
    for _ in range(_MAX_EXPANSIONS):
        if not residual(hi) < 0.0:
            break
        lo = hi
        width *= 2.0
        hi = lo + width
    return lo, hi


def _invert_unit_gamma(p: float, shape: float, config: SolverConfig) -> float:
    q = 1.0 - p
    u = _log_seed(p, q, shape)
    if u < _LOG_TINY:
        # the quantile is below the smallest subnormal
        return 0.0
    residual = _TailResidual(p, q, shape, config)
    value = residual(u)
    if value == 0.0:
        return _exp(u)
    lo, hi = _bracket(residual, u, value)
    best_u, best_value = u, abs(value)
    for _ in range(config.quantile_max_iter):
        if value < 0.0:
            lo = u
        elif value > 0.0:
            hi = u
        else:
            break
        candidate = u - residual.newton_step(u, value)
        if not lo < candidate < hi:
            candidate = 0.5 * (lo + hi)
        if abs(candidate - u) <= config.quantile_tol:
            u = candidate
            break
        u = candidate
        value = residual(u)
        if abs(value) < best_value:
            best_u, best_value = u, abs(value)
    else:
        logger.debug(
            "Gamma quantile did not converge in %d iterations (p=%g, shape=%g)",
            config.quantile_max_iter,
            p,
            shape,
        )
        u = best_u
    return _exp(u)


def _qgamma_scalar(
    p: float, shape: float, scale: float, config: SolverConfig | None = None
) -> float:
    p, shape, scale = float(p), float(shape), float(scale)
    if not (_positive(shape, scale) and 0.0 <= p <= 1.0):
        logger.debug("qgamma domain error (p=%r, shape=%r, scale=%r)", p, shape, scale)
        return math.nan
    if p == 0.0:
        return 0.0
    if p == 1.0:
        return math.inf
    return scale * _invert_unit_gamma(p, shape, resolve_config(config))


def _pgamma_scalar(
    x: float, shape: float, scale: float, config: SolverConfig | None = None
) -> float:
    x, shape, scale = float(x), float(shape), float(scale)
    if not _positive(shape, scale) or math.isnan(x):
        logger.debug("pgamma domain error (x=%r, shape=%r, scale=%r)", x, shape, scale)
        return math.nan
    if x <= 0.0:
        return 0.0
    return gamma_p(shape, x / scale, config)


def _dgamma_scalar(x: float, shape: float, scale: float) -> float:
    x, shape, scale = float(x), float(shape), float(scale)
    if not _positive(shape, scale):
        logger.debug("dgamma domain error (shape=%r, scale=%r)", shape, scale)
        return math.nan
    return gamma_density(x, shape, scale)


def qgamma(p: Any, shape: float, scale: float = 1.0, *, config: SolverConfig | None = None) -> Any:
    """Quantile function of Gamma(shape, scale).

    Parameters
    ----------
    p : float or container
        Probability in [0, 1]. A container (numpy array, pandas object or
        nested list) returns a new container of the same shape.
    shape, scale : float
        Positive distribution parameters, shared by every element.
    config : SolverConfig, optional
        Overrides the default tolerances and iteration caps.

    Returns
    -------
    float or container
        ``0`` for ``p == 0``, ``inf`` for ``p == 1`` and NaN on domain errors.
    """
    return apply_scalar_or_container(_qgamma_scalar, p, shape, scale, config=config)


def qgamma_into(
    vals_in: Sequence[float],
    shape: float,
    scale: float,
    vals_out: MutableSequence[float],
    num_elem: int | None = None,
    *,
    config: SolverConfig | None = None,
) -> None:
    """Buffer form of :func:`qgamma`; writes the first ``num_elem`` results into ``vals_out``."""
    apply_buffer(_qgamma_scalar, vals_in, vals_out, num_elem, shape, scale, config=config)


def pgamma(x: Any, shape: float, scale: float = 1.0, *, config: SolverConfig | None = None) -> Any:
    """CDF of Gamma(shape, scale) for a scalar or container."""
    return apply_scalar_or_container(_pgamma_scalar, x, shape, scale, config=config)


def pgamma_into(
    vals_in: Sequence[float],
    shape: float,
    scale: float,
    vals_out: MutableSequence[float],
    num_elem: int | None = None,
    *,
    config: SolverConfig | None = None,
) -> None:
    apply_buffer(_pgamma_scalar, vals_in, vals_out, num_elem, shape, scale, config=config)


def dgamma(x: Any, shape: float, scale: float = 1.0) -> Any:
    """Density of Gamma(shape, scale) for a scalar or container."""
    return apply_scalar_or_container(_dgamma_scalar, x, shape, scale)


def dgamma_into(
    vals_in: Sequence[float],
    shape: float,
    scale: float,
    vals_out: MutableSequence[float],
    num_elem: int | None = None,
) -> None:
    apply_buffer(_dgamma_scalar, vals_in, vals_out, num_elem, shape, scale)


def _standard_gamma(shape: float, gen: RandomEngine) -> float:
    if shape < 1.0:
        boosted = _standard_gamma(shape + 1.0, gen)
        u = gen.random()
        return boosted * u ** (1.0 / shape)
    d = shape - 1.0 / 3.0
    c = 1.0 / math.sqrt(9.0 * d)
    while True:
        x = gen.standard_normal()
        v = 1.0 + c * x
        if v <= 0.0:
            continue
        v = v * v * v
        u = gen.random()
        if u < 1.0 - 0.0331 * x**4:
            return d * v
        if u > 0.0 and math.log(u) < 0.5 * x * x + d * (1.0 - v + math.log(v)):
            return d * v


def draw_gamma(shape: float, scale: float, gen: RandomEngine) -> float:
    """One Gamma(shape, scale) variate from ``gen``; NaN without drawing on bad parameters."""
    shape, scale = float(shape), float(scale)
    if not _positive(shape, scale):
        logger.debug("rgamma domain error (shape=%r, scale=%r)", shape, scale)
        return math.nan
    return scale * _standard_gamma(shape, gen)


def rgamma(shape: float, scale: float = 1.0, engine: EngineLike = None) -> float:
    """Sample one Gamma(shape, scale) variate.

    ``engine`` may be a :class:`numpy.random.Generator` (borrowed and
    advanced), an integer seed, or ``None`` for OS entropy.
    """
    return draw_gamma(shape, scale, resolve_engine(engine))


def rgamma_into(
    shape: float,
    scale: float,
    vals_out: MutableSequence[float],
    num_elem: int | None = None,
    engine: EngineLike = None,
) -> None:
    """Fill ``vals_out`` with Gamma(shape, scale) variates from a single engine."""
    fill_buffer(lambda gen: draw_gamma(shape, scale, gen), vals_out, num_elem, engine)


def rgamma_matrix(
    rows: int,
    cols: int,
    shape: float,
    scale: float = 1.0,
    *,
    engine: EngineLike = None,
    backend: str | MatrixBackend = "numpy",
) -> Any:
    """Return a ``rows x cols`` container of Gamma(shape, scale) variates."""
    return fill_matrix(
        lambda gen: draw_gamma(shape, scale, gen), rows, cols, engine=engine, backend=backend
    )


__all__ = [
    "draw_gamma",
    "dgamma",
    "dgamma_into",
    "pgamma",
    "pgamma_into",
    "qgamma",
    "qgamma_into",
    "rgamma",
    "rgamma_into",
    "rgamma_matrix",
]
