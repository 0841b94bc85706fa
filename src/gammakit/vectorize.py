"""Element-wise adapters applying scalar kernels to buffers and containers.

Distribution parameters are broadcast: every element sees the same
``params``. Kernels report domain errors as NaN, so one bad element never
aborts the rest of a buffer or container.
"""

from __future__ import annotations

import numbers
from collections.abc import Callable, MutableSequence, Sequence
from typing import Any

import numpy as np

from .containers import MatrixBackend, backend_for, get_backend
from .engines import EngineLike, RandomEngine, resolve_engine

Kernel = Callable[..., float]
Draw = Callable[[RandomEngine], float]


def is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real)


def _element_count(num_elem: int | None, *buffers: Sequence[Any]) -> int:
    count = len(buffers[0]) if num_elem is None else int(num_elem)
    if count < 0:
        raise ValueError("num_elem must be non-negative.")
    for buffer in buffers:
        if len(buffer) < count:
            raise ValueError(
                f"Buffer of length {len(buffer)} is shorter than num_elem={count}."
            )
    return count


def apply_scalar_or_container(kernel: Kernel, values: Any, *params: Any, **kwargs: Any) -> Any:
    """Evaluate ``kernel`` on a real number, or cellwise on a container."""
    if is_scalar(values):
        return kernel(values, *params, **kwargs)
    return apply_container(kernel, values, *params, **kwargs)


def apply_container(kernel: Kernel, values: Any, *params: Any, **kwargs: Any) -> Any:
    """Return a new container shaped like ``values`` holding ``kernel`` of each cell."""
    backend = backend_for(values)
    rows, cols = backend.shape(values)
    out = backend.like(values, backend.dtype(values))
    for row in range(rows):
        for col in range(cols):
            result = kernel(backend.get(values, row, col), *params, **kwargs)
            backend.set(out, row, col, result)
    return out


def apply_buffer(
    kernel: Kernel,
    vals_in: Sequence[float],
    vals_out: MutableSequence[float],
    num_elem: int | None,
    *params: Any,
    **kwargs: Any,
) -> None:
    """Write ``kernel(vals_in[i], *params)`` into ``vals_out[i]`` for the first ``num_elem``.

    The caller guarantees that ``vals_in`` and ``vals_out`` do not overlap.
    """
    count = _element_count(num_elem, vals_in, vals_out)
    for i in range(count):
        vals_out[i] = kernel(vals_in[i], *params, **kwargs)


def fill_buffer(
    draw: Draw,
    vals_out: MutableSequence[float],
    num_elem: int | None = None,
    engine: EngineLike = None,
) -> None:
    """Fill the first ``num_elem`` slots of ``vals_out`` with draws from one engine."""
    count = _element_count(num_elem, vals_out)
    gen = resolve_engine(engine)
    for i in range(count):
        vals_out[i] = draw(gen)


def fill_matrix(
    draw: Draw,
    rows: int,
    cols: int,
    *,
    engine: EngineLike = None,
    backend: str | MatrixBackend = "numpy",
    dtype: Any = np.float64,
) -> Any:
    """Allocate a ``rows x cols`` container from ``backend`` and fill it row by row."""
    if rows < 0 or cols < 0:
        raise ValueError("Matrix dimensions must be non-negative.")
    impl = get_backend(backend) if isinstance(backend, str) else backend
    out = impl.empty(rows, cols, np.dtype(dtype))
    gen = resolve_engine(engine)
    for row in range(rows):
        for col in range(cols):
            impl.set(out, row, col, draw(gen))
    return out


__all__ = [
    "apply_buffer",
    "apply_container",
    "apply_scalar_or_container",
    "fill_buffer",
    "fill_matrix",
    "is_scalar",
]
