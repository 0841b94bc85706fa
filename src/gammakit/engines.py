"""Random engine construction.

Samplers accept either a caller-owned :class:`numpy.random.Generator`, which
is borrowed and advanced, or a seed (``int`` or ``None``) from which a
transient generator is built for the duration of one call.
"""

from __future__ import annotations

from typing import TypeAlias

import numpy as np

RandomEngine: TypeAlias = np.random.Generator
EngineLike: TypeAlias = np.random.Generator | int | None


def make_engine(seed: int | None = None) -> RandomEngine:
    """Return a fresh PCG64 generator; ``None`` draws OS entropy."""
    return np.random.Generator(np.random.PCG64(seed))


def resolve_engine(engine: EngineLike = None) -> RandomEngine:
    """Borrow ``engine`` if it is a generator, otherwise seed a transient one."""
    if isinstance(engine, np.random.Generator):
        return engine
    if engine is not None and not isinstance(engine, int | np.integer):
        raise TypeError(
            f"Expected a numpy Generator, an integer seed or None, got {type(engine).__name__}."
        )
    return make_engine(None if engine is None else int(engine))


__all__ = ["EngineLike", "RandomEngine", "make_engine", "resolve_engine"]
