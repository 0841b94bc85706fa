"""Matrix backend protocol and registry."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class MatrixBackend(Protocol):
    """Adapter exposing a rectangular container type to the vectorized kernels."""

    name: str

    def accepts(self, obj: Any) -> bool: ...

    def shape(self, obj: Any) -> tuple[int, int]: ...

    def dtype(self, obj: Any) -> np.dtype: ...

    def get(self, obj: Any, row: int, col: int) -> float: ...

    def like(self, obj: Any, dtype: np.dtype) -> Any: ...

    def empty(self, rows: int, cols: int, dtype: np.dtype) -> Any: ...

    def set(self, out: Any, row: int, col: int, value: float) -> None: ...


_BACKENDS: dict[str, MatrixBackend] = {}


def register_backend(backend: MatrixBackend, *, overwrite: bool = False) -> None:
    """Register a matrix backend under ``backend.name``."""
    key = backend.name.lower()
    if key in _BACKENDS and not overwrite:
        raise ValueError(f"Backend '{backend.name}' already registered.")
    _BACKENDS[key] = backend


def get_backend(name: str) -> MatrixBackend:
    """Retrieve a backend by name."""
    key = name.lower()
    if key not in _BACKENDS:
        raise KeyError(f"Unknown matrix backend '{name}'.")
    return _BACKENDS[key]


def list_backends() -> Iterable[str]:
    """Return registered backend names in registration order."""
    return list(_BACKENDS.keys())


def backend_for(obj: Any) -> MatrixBackend:
    """Return the first registered backend that accepts ``obj``."""
    for backend in _BACKENDS.values():
        if backend.accepts(obj):
            return backend
    raise TypeError(f"No matrix backend accepts objects of type {type(obj).__name__}.")


def output_dtype(dtype: Any) -> np.dtype:
    """Floating input keeps its width; anything else computes in float64."""
    try:
        resolved = np.dtype(dtype)
    except TypeError:
        return np.dtype(np.float64)
    if np.issubdtype(resolved, np.floating):
        return resolved
    return np.dtype(np.float64)


__all__ = [
    "MatrixBackend",
    "backend_for",
    "get_backend",
    "list_backends",
    "output_dtype",
    "register_backend",
]
