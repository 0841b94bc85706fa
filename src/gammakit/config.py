"""Solver tolerances and iteration caps shared by the numerical kernels."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GAMMAKIT_SOLVER_CONFIG"


@dataclass(slots=True)
class SolverConfig:
    """Iteration caps and convergence tolerances.

    Exhausting a cap is not an error: the kernels return their best estimate.
    The series and continued-fraction caps are lower bounds; the incomplete
    gamma kernels raise them to about ``30 * sqrt(shape)`` for large shapes.
    """

    series_tol: float = 1e-15
    series_max_iter: int = 1000
    fraction_tol: float = 1e-15
    fraction_max_iter: int = 1000
    fraction_tiny: float = 1e-300
    quantile_tol: float = 1e-10
    quantile_max_iter: int = 100

    def replace(self, **overrides: Any) -> SolverConfig:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **overrides)


_FIELD_TYPES = {field.name: field.type for field in dataclasses.fields(SolverConfig)}


def _coerce(key: str, value: Any) -> float | int:
    # PyYAML reads ``1e-12`` (no dot) as a string.
    kind = _FIELD_TYPES[key]
    try:
        return int(value) if kind == "int" else float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for solver setting '{key}': {value!r}") from exc


def solver_config_from_mapping(
    data: dict[str, Any], *, base: SolverConfig | None = None
) -> SolverConfig:
    """Build a :class:`SolverConfig` from a plain mapping of overrides."""
    unknown = sorted(set(data) - set(_FIELD_TYPES))
    if unknown:
        raise ValueError(f"Unknown solver settings: {', '.join(unknown)}.")
    overrides = {key: _coerce(key, value) for key, value in data.items()}
    return (base or SolverConfig()).replace(**overrides)


def load_solver_config(path: str | os.PathLike[str]) -> SolverConfig:
    """Load solver settings from the ``solver:`` section of a YAML file."""
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse solver config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Solver config {path} must contain a mapping.")
    section = data.get("solver", {}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"The 'solver' section of {path} must be a mapping.")
    config = solver_config_from_mapping(section)
    logger.debug("Loaded solver config from %s: %s", path, config)
    return config


_DEFAULT = SolverConfig()


def get_default_solver_config() -> SolverConfig:
    """Return the configuration used when a kernel is called without ``config``."""
    return _DEFAULT


def set_default_solver_config(config: SolverConfig) -> None:
    """Replace the process default configuration."""
    global _DEFAULT
    _DEFAULT = config


def resolve_config(config: SolverConfig | None) -> SolverConfig:
    return config if config is not None else _DEFAULT


def _load_env_config() -> None:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if not env_path:
        return
    if not Path(env_path).exists():
        logger.warning("Solver config %s named by %s not found", env_path, CONFIG_ENV_VAR)
        return
    try:
        config = load_solver_config(env_path)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring solver config %s: %s", env_path, exc)
        return
    set_default_solver_config(config)


_load_env_config()


__all__ = [
    "CONFIG_ENV_VAR",
    "SolverConfig",
    "get_default_solver_config",
    "load_solver_config",
    "resolve_config",
    "set_default_solver_config",
    "solver_config_from_mapping",
]
