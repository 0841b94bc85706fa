"""Container backends for the vectorized kernels."""

from __future__ import annotations

from .base import (
    MatrixBackend,
    backend_for,
    get_backend,
    list_backends,
    output_dtype,
    register_backend,
)
from .list_backend import ListBackend
from .numpy_backend import NumpyBackend
from .pandas_backend import PandasBackend

__all__ = [
    "MatrixBackend",
    "NumpyBackend",
    "PandasBackend",
    "ListBackend",
    "backend_for",
    "get_backend",
    "list_backends",
    "output_dtype",
    "register_backend",
]


def _register_builtin() -> None:
    for backend in (NumpyBackend(), PandasBackend(), ListBackend()):
        register_backend(backend, overwrite=True)


_register_builtin()
