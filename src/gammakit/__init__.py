"""Top-level package exports for gammakit."""

from __future__ import annotations

from importlib import metadata

__version__ = "0.1.0"

try:
    __version__ = metadata.version("gammakit")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
    pass

from . import containers as containers  # noqa: F401
from . import distributions as distributions  # noqa: F401
from .config import SolverConfig, load_solver_config  # noqa: F401
from .distributions import (  # noqa: F401
    dchisq,
    dchisq_into,
    dgamma,
    dgamma_into,
    pchisq,
    pchisq_into,
    pgamma,
    pgamma_into,
    qchisq,
    qchisq_into,
    qgamma,
    qgamma_into,
    rchisq,
    rchisq_into,
    rchisq_matrix,
    rf,
    rf_into,
    rf_matrix,
    rgamma,
    rgamma_into,
    rgamma_matrix,
)
from .engines import make_engine  # noqa: F401
from .special import gamma_density, gamma_p, gamma_q  # noqa: F401

__all__ = [
    "__version__",
    "containers",
    "distributions",
    "SolverConfig",
    "load_solver_config",
    "make_engine",
    "gamma_density",
    "gamma_p",
    "gamma_q",
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
