"""Distribution registry infrastructure."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from importlib import metadata
from typing import Any

import numpy as np

from ..engines import EngineLike, resolve_engine

Kernel = Callable[..., Any]
Sampler = Callable[..., float]

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "gammakit.distributions"


@dataclass(slots=True)
class Distribution:
    """Bundle the kernels of one distribution with its parameter metadata.

    ``quantile``, ``cdf`` and ``pdf`` take the evaluation point first followed
    by the parameters in ``parameters`` order. ``sampler`` takes the
    parameters followed by an engine and ``sampler_into`` the parameters
    followed by an output buffer, a count and an engine.
    """

    name: str
    parameters: tuple[str, ...]
    sampler: Sampler
    sampler_into: Callable[..., None] | None = None
    quantile: Kernel | None = None
    cdf: Kernel | None = None
    pdf: Kernel | None = None
    defaults: dict[str, float] | None = None
    notes: str | None = None

    def bind(self, params: dict[str, float]) -> tuple[float, ...]:
        """Order ``params`` by ``self.parameters``, filling in defaults."""
        merged = dict(self.defaults or {})
        merged.update(params)
        unknown = sorted(set(merged) - set(self.parameters))
        if unknown:
            raise ValueError(f"Unknown parameters for '{self.name}': {', '.join(unknown)}.")
        missing = [name for name in self.parameters if name not in merged]
        if missing:
            raise ValueError(f"Missing parameters for '{self.name}': {', '.join(missing)}.")
        return tuple(float(merged[name]) for name in self.parameters)

    def sample(
        self, params: dict[str, float], size: int, *, random_state: EngineLike = None
    ) -> np.ndarray:
        """Draw ``size`` variates into a new float64 array."""
        out = np.empty(size, dtype=float)
        args = self.bind(params)
        if self.sampler_into is not None:
            self.sampler_into(*args, out, size, random_state)
            return out
        rng = resolve_engine(random_state)
        for i in range(size):
            out[i] = self.sampler(*args, rng)
        return out


_REGISTRY: dict[str, Distribution] = {}


def list_distributions() -> Iterable[str]:
    """Return registered distribution names."""
    return sorted(_REGISTRY.keys())


def get_distribution(name: str) -> Distribution:
    """Retrieve a distribution by name."""
    key = name.lower()
    if key not in _REGISTRY:
        raise KeyError(f"Unknown distribution '{name}'.")
    return _REGISTRY[key]


def register_distribution(distribution: Distribution, *, overwrite: bool = False) -> None:
    """Register a distribution in the global registry."""
    key = distribution.name.lower()
    if key in _REGISTRY and not overwrite:
        raise ValueError(f"Distribution '{distribution.name}' already registered.")
    _REGISTRY[key] = distribution


def clear_registry() -> None:
    """Reset the registry (primarily for testing)."""
    _REGISTRY.clear()


def _iter_distributions(candidate: Any) -> Iterable[Distribution]:
    if isinstance(candidate, Distribution):
        yield candidate
    elif isinstance(candidate, Iterable) and not isinstance(candidate, str | bytes):
        for item in candidate:
            yield from _iter_distributions(item)
    elif callable(candidate):
        yield from _iter_distributions(candidate())
    else:
        raise TypeError(
            "Unsupported distribution specification. Expected Distribution, an iterable of "
            "Distribution instances, or a callable returning them."
        )


def load_entry_points(group: str = ENTRY_POINT_GROUP) -> list[str]:
    """Discover third-party distributions via entry points."""
    loaded: list[str] = []
    try:
        candidates = metadata.entry_points().select(group=group)
    except Exception as exc:  # pragma: no cover - discovery failure
        logger.debug("Entry point discovery failed: %s", exc)
        return loaded

    for ep in candidates:
        try:
            obj = ep.load()
            for dist in _iter_distributions(obj):
                register_distribution(dist, overwrite=True)
                loaded.append(dist.name)
        except Exception as exc:  # pragma: no cover - plugin failure
            logger.warning("Failed to load distribution entry point '%s': %s", ep.name, exc)
    return loaded


__all__ = [
    "Distribution",
    "ENTRY_POINT_GROUP",
    "Kernel",
    "Sampler",
    "list_distributions",
    "get_distribution",
    "register_distribution",
    "clear_registry",
    "load_entry_points",
]
