import math

import numpy as np
import pytest
from scipy import special, stats

from gammakit.config import SolverConfig
from gammakit.special import gamma_density, gamma_p, gamma_q, log_gamma_p, log_gamma_q


@pytest.mark.parametrize("shape", [0.1, 0.5, 1.0, 2.5, 10.0, 150.0])
@pytest.mark.parametrize("x", [1e-6, 0.05, 0.9, 3.4, 11.0, 160.0])
def test_gamma_p_matches_scipy(shape: float, x: float) -> None:
    expected = special.gammainc(shape, x)
    assert gamma_p(shape, x) == pytest.approx(expected, rel=1e-9, abs=1e-14)
    assert gamma_q(shape, x) == pytest.approx(special.gammaincc(shape, x), rel=1e-9, abs=1e-14)


@pytest.mark.parametrize("shape", [0.3, 1.0, 4.0, 40.0])
def test_gamma_p_and_q_are_complementary(shape: float) -> None:
    for x in np.linspace(0.0, 3.0 * shape + 5.0, 25):
        assert gamma_p(shape, x) + gamma_q(shape, x) == pytest.approx(1.0, abs=1e-14)


def test_gamma_p_is_monotone_across_regime_switch() -> None:
    shape = 3.0
    xs = np.linspace(shape + 0.5, shape + 1.5, 201)  # series/fraction switch at shape + 1
    values = [gamma_p(shape, x) for x in xs]
    assert all(b >= a for a, b in zip(values, values[1:], strict=False))


def test_gamma_p_boundaries() -> None:
    assert gamma_p(2.0, 0.0) == 0.0
    assert gamma_p(2.0, math.inf) == 1.0
    assert gamma_q(2.0, 0.0) == 1.0
    assert gamma_q(2.0, math.inf) == 0.0


@pytest.mark.parametrize(
    "shape,x",
    [(0.0, 1.0), (-1.0, 1.0), (2.0, -0.5), (math.nan, 1.0), (2.0, math.nan)],
)
def test_gamma_p_domain_errors_are_nan(shape: float, x: float) -> None:
    assert math.isnan(gamma_p(shape, x))
    assert math.isnan(gamma_q(shape, x))


def test_configured_caps_are_lower_bounds() -> None:
    config = SolverConfig(series_max_iter=2, fraction_max_iter=2)
    assert gamma_p(5.0, 3.0, config) == pytest.approx(special.gammainc(5.0, 3.0), rel=1e-12)
    assert gamma_q(5.0, 30.0, config) == pytest.approx(special.gammaincc(5.0, 30.0), rel=1e-10)


@pytest.mark.parametrize("shape", [1e5, 1e6])
@pytest.mark.parametrize("ratio", [0.999, 1.0, 1.001])
def test_large_shape_matches_scipy(shape: float, ratio: float) -> None:
    x = shape * ratio
    assert gamma_p(shape, x) == pytest.approx(special.gammainc(shape, x), rel=1e-8)
    assert gamma_q(shape, x) == pytest.approx(special.gammaincc(shape, x), rel=1e-8)


def test_large_shape_median_region() -> None:
    # the series needs several thousand terms at this shape
    assert gamma_p(1e6, 1e6) == pytest.approx(0.50013298, rel=1e-6)


def test_log_tails_below_double_range() -> None:
    expected = math.log(special.gammainc(3.0, 1e-30))
    assert log_gamma_p(3.0, 1e-30) == pytest.approx(expected, rel=1e-12)
    # Q(3, x) = exp(-x) * (1 + x + x**2 / 2)
    expected = -800.0 + math.log(1.0 + 800.0 + 320_000.0)
    assert log_gamma_q(3.0, 800.0) == pytest.approx(expected, rel=1e-12)
    assert gamma_q(3.0, 800.0) == 0.0


def test_log_tail_boundaries() -> None:
    assert log_gamma_p(2.0, 0.0) == -math.inf
    assert log_gamma_p(2.0, math.inf) == 0.0
    assert log_gamma_q(2.0, 0.0) == 0.0
    assert log_gamma_q(2.0, math.inf) == -math.inf
    assert math.isnan(log_gamma_p(-1.0, 1.0))
    assert math.isnan(log_gamma_q(2.0, -1.0))


@pytest.mark.parametrize("shape,scale", [(0.5, 1.0), (1.0, 2.0), (3.0, 2.0), (30.0, 0.1)])
def test_gamma_density_matches_scipy(shape: float, scale: float) -> None:
    for x in [0.01, 0.5, 2.0, 7.5]:
        expected = stats.gamma.pdf(x, a=shape, scale=scale)
        assert gamma_density(x, shape, scale) == pytest.approx(expected, rel=1e-10, abs=1e-300)


def test_gamma_density_at_zero() -> None:
    assert gamma_density(0.0, 0.5) == math.inf
    assert gamma_density(0.0, 1.0, 2.0) == 0.5
    assert gamma_density(0.0, 2.0) == 0.0
    assert gamma_density(-1.0, 2.0) == 0.0
    assert math.isnan(gamma_density(1.0, 2.0, -1.0))
