# broadcast.py
"""
Array forms of the scalar distribution operations.

`lift` turns the name of a scalar method into a function
``op(d, x, out=None, *, axis=None)`` that evaluates the method once per
element (univariate) or once per sample (multivariate / matrix-valued).
It is applied explicitly to each exported operation below.

Shape policy:
  - univariate: output has the shape of `x`; a scalar `x` returns a scalar
  - multivariate: `x` of shape (d,) -> scalar; (n, d) or (d, n) -> (n,)
  - matrix-valued: `x` of shape (r, c) -> scalar; (n, r, c) -> (n,)

A caller-supplied `out` must already have the output shape. It is filled in
place and returned; `x` is never modified.
"""
from __future__ import annotations

from typing import Any, Callable

import numpy as np

from .custom_types import Array, ArrayLike
from .errors import ShapeMismatchError, UnsupportedOperationError
from .array_backend.utils import (
    _as_array,
    _check_out_shape,
    _ensure_batch_array,
    _is_scalar_like,
    _sample_axis,
)
from .distributions.distribution import (
    Distribution,
    UNIVARIATE,
    MULTIVARIATE,
    MATRIXVARIATE,
    DISCRETE,
)

__all__ = [
    "lift",
    "density",
    "log_density",
    "cdf",
    "logcdf",
    "ccdf",
    "logccdf",
    "quantile",
    "cquantile",
    "invlogcdf",
    "invlogccdf",
    "pmf",
    "logpmf",
    "insupport",
]

# Operations that accept a whole vector/matrix sample, not only scalars.
_SAMPLE_OPS = frozenset({"density", "log_density"})


def _item(value: Any) -> Any:
    return value.item() if isinstance(value, np.generic) else value


def _new_or_checked(out: Array | None, shape: tuple) -> Array:
    if out is None:
        return np.empty(shape, dtype=float)
    return _check_out_shape(out, shape)


def _lift_univariate(op: Callable, x: ArrayLike, out: Array | None) -> Any:
    if out is None and _is_scalar_like(x):
        return op(_item(_as_array(x)[()]))

    arr = _as_array(x)
    res = _new_or_checked(out, arr.shape)
    for idx in np.ndindex(arr.shape):
        res[idx] = op(_item(arr[idx]))
    return res


def _lift_multivariate(op: Callable, dim: int, x: ArrayLike,
                       out: Array | None, axis: int | None) -> Any:
    arr = _as_array(x)

    if arr.ndim == 1:
        if arr.shape[0] != dim:
            raise ShapeMismatchError(f"expected a vector of length {dim}; got shape {arr.shape}")
        if out is None:
            return op(arr)
        res = _check_out_shape(out, ())
        res[()] = op(arr)
        return res

    sample_axis = _sample_axis(arr.shape, dim, axis)
    samples = arr if sample_axis == 0 else arr.T  # (n, d) view
    res = _new_or_checked(out, (samples.shape[0],))
    for j in range(samples.shape[0]):
        res[j] = op(samples[j])
    return res


def _lift_matrixvariate(op: Callable, dim: tuple, x: ArrayLike, out: Array | None) -> Any:
    arr = _as_array(x)
    dim = tuple(dim)

    if arr.ndim == 2:
        if arr.shape != dim:
            raise ShapeMismatchError(f"expected a matrix of shape {dim}; got shape {arr.shape}")
        if out is None:
            return op(arr)
        res = _check_out_shape(out, ())
        res[()] = op(arr)
        return res

    batch = _ensure_batch_array(arr, dim)
    res = _new_or_checked(out, (batch.shape[0],))
    for j in range(batch.shape[0]):
        res[j] = op(batch[j])
    return res


def lift(name: str) -> Callable[..., Any]:
    """Build the array form of the scalar method `name`.

    The returned function looks up `name` on the distribution at call time,
    so a variant's own override is used whenever it has one. Dispatch is on
    `d.variate_form`.

    Args:
        name: Name of a scalar method of `Distribution` (e.g. "ccdf").

    Returns:
        Callable ``op(d, x, out=None, *, axis=None)``.
    """

    def lifted(d: Distribution, x: ArrayLike, out: Array | None = None,
               *, axis: int | None = None) -> Any:
        form = d.variate_form
        if axis is not None and form != MULTIVARIATE:
            raise ValueError(f"axis is only meaningful for multivariate distributions; got {form}")

        if form == UNIVARIATE:
            return _lift_univariate(getattr(d, name), x, out)
        if name not in _SAMPLE_OPS:
            raise UnsupportedOperationError(
                f"{name} is only defined for univariate distributions; {type(d).__name__} is {form}"
            )
        if form == MULTIVARIATE:
            return _lift_multivariate(getattr(d, name), d.dim, x, out, axis)
        if form == MATRIXVARIATE:
            return _lift_matrixvariate(getattr(d, name), d.dim, x, out)
        raise UnsupportedOperationError(f"unknown variate form {form!r} for {type(d).__name__}")

    lifted.__name__ = name
    lifted.__qualname__ = name
    lifted.__doc__ = (
        f"Evaluate `{name}` of distribution `d` at `x`, elementwise for array inputs.\n\n"
        f"See the module docstring of `probderive.broadcast` for the shape policy."
    )
    return lifted


density = lift("density")
log_density = lift("log_density")
cdf = lift("cdf")
logcdf = lift("logcdf")
ccdf = lift("ccdf")
logccdf = lift("logccdf")
quantile = lift("quantile")
cquantile = lift("cquantile")
invlogcdf = lift("invlogcdf")
invlogccdf = lift("invlogccdf")


def _require_discrete(d: Distribution, name: str) -> None:
    if d.value_support != DISCRETE:
        raise UnsupportedOperationError(
            f"{name} is only defined for discrete distributions; {type(d).__name__} is {d.value_support}"
        )


def pmf(d: Distribution, *args: Any, **kwargs: Any) -> Any:
    """Probability mass; forwards every argument to `density`."""
    _require_discrete(d, "pmf")
    return density(d, *args, **kwargs)


def logpmf(d: Distribution, *args: Any, **kwargs: Any) -> Any:
    """Log probability mass; forwards every argument to `log_density`."""
    _require_discrete(d, "logpmf")
    return log_density(d, *args, **kwargs)


def insupport(d: Distribution, x: ArrayLike, *, axis: int | None = None) -> bool:
    """Return True if every value in `x` lies in the support of `d`.

    A single value (scalar, vector or matrix, according to the variate form)
    is passed straight to `d.insupport`.
    """
    arr = _as_array(x)
    form = d.variate_form

    if form == UNIVARIATE:
        if arr.ndim == 0:
            return bool(d.insupport(_item(arr[()])))
        return all(d.insupport(_item(e)) for e in arr.flat)

    if form == MULTIVARIATE:
        if arr.ndim == 1:
            return bool(d.insupport(arr))
        sample_axis = _sample_axis(arr.shape, d.dim, axis)
        samples = arr if sample_axis == 0 else arr.T
        return all(d.insupport(s) for s in samples)

    if form == MATRIXVARIATE:
        if arr.ndim == 2:
            return bool(d.insupport(arr))
        return all(d.insupport(m) for m in arr)

    raise UnsupportedOperationError(f"unknown variate form {form!r} for {type(d).__name__}")
