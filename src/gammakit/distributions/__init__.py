"""Distribution registry and the gamma-family kernels."""

from __future__ import annotations

from .base import (
    Distribution,
    clear_registry,
    get_distribution,
    list_distributions,
    load_entry_points,
    register_distribution,
)
from .chisq import (
    dchisq,
    dchisq_into,
    pchisq,
    pchisq_into,
    qchisq,
    qchisq_into,
    rchisq,
    rchisq_into,
    rchisq_matrix,
)
from .f import rf, rf_into, rf_matrix
from .gamma import (
    dgamma,
    dgamma_into,
    pgamma,
    pgamma_into,
    qgamma,
    qgamma_into,
    rgamma,
    rgamma_into,
    rgamma_matrix,
)

__all__ = [
    "Distribution",
    "get_distribution",
    "list_distributions",
    "register_distribution",
    "clear_registry",
    "STANDARD_DISTRIBUTIONS",
    "dchisq",
    "dchisq_into",
    "dgamma",
    "dgamma_into",
    "pchisq",
    "pchisq_into",
    "pgamma",
    "pgamma_into",
    "qchisq",
    "qchisq_into",
    "qgamma",
    "qgamma_into",
    "rchisq",
    "rchisq_into",
    "rchisq_matrix",
    "rf",
    "rf_into",
    "rf_matrix",
    "rgamma",
    "rgamma_into",
    "rgamma_matrix",
]


STANDARD_DISTRIBUTIONS = [
    Distribution(
        name="gamma",
        parameters=("shape", "scale"),
        sampler=rgamma,
        sampler_into=rgamma_into,
        quantile=qgamma,
        cdf=pgamma,
        pdf=dgamma,
        defaults={"scale": 1.0},
        notes="Gamma distribution in shape/scale form.",
    ),
    Distribution(
        name="chisq",
        parameters=("df",),
        sampler=rchisq,
        sampler_into=rchisq_into,
        quantile=qchisq,
        cdf=pchisq,
        pdf=dchisq,
        notes="Chi-squared distribution, Gamma(df/2, 2).",
    ),
    Distribution(
        name="f",
        parameters=("df1", "df2"),
        sampler=rf,
        sampler_into=rf_into,
        notes="F distribution sampled as a ratio of scaled chi-squared draws.",
    ),
]


def _register_builtin() -> None:
    for dist in STANDARD_DISTRIBUTIONS:
        register_distribution(dist, overwrite=True)


_register_builtin()
load_entry_points()
