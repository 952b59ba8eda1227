# sampling.py
"""
Batch sampling built from a distribution's single-draw primitive.

Every element (or vector / matrix slot) of the result is filled by its own
call to `d.draw()`, in C iteration order. No random state is shared between
elements beyond whatever the distribution's own `draw` uses.

Result layout:
  - univariate: array of the requested shape; float64 for continuous
    distributions, int64 for discrete ones
  - multivariate: (n, d), one draw per row; an explicit 2-D shape may also
    be (d, n), one draw per column. A count equal to d is ambiguous.
  - matrix-valued: (n, rows, cols), a sequence of n matrices
"""
from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .custom_types import Array
from .errors import ShapeMismatchError, UnsupportedOperationError
from .array_backend.utils import (
    _ensure_batch_array,
    _ensure_vector,
    _normalize_dims,
    _sample_axis,
)
from .distributions.distribution import (
    Distribution,
    UNIVARIATE,
    MULTIVARIATE,
    MATRIXVARIATE,
    DISCRETE,
)

__all__ = ["sample", "sample_into"]

logger = logging.getLogger(__name__)


def _element_dtype(d: Distribution) -> Any:
    return np.int64 if d.value_support == DISCRETE else np.float64


def _fill_vectors(d: Distribution, out: Array, sample_axis: int) -> Array:
    dim = d.dim
    samples = out if sample_axis == 0 else out.T  # view; writes land in `out`
    for j in range(samples.shape[0]):
        samples[j] = _ensure_vector(d.draw(), length=dim)
    return out


def sample(d: Distribution, *dims: Any) -> Any:
    """
    Draw samples from `d`.

    Args:
        d: The distribution.
        *dims: Nothing for a single draw in the natural shape; otherwise
            the requested size, as integers or a single tuple. For
            multivariate distributions an integer `n` allocates (n, d) and
            a 2-tuple is used as given; both then go through the
            orientation rules of `sample_into`, so `n == d` is rejected. For
            matrix-valued distributions only a count `n` is accepted.

    Returns:
        A single draw, or a newly allocated array of draws.

    Raises:
        ShapeMismatchError: If the requested shape does not fit the
            distribution's variate form.
    """
    if not dims:
        return d.draw()

    shape = _normalize_dims(dims)
    form = d.variate_form
    dtype = _element_dtype(d)
    logger.debug("sampling %s with requested shape %s", type(d).__name__, shape)

    if form == UNIVARIATE:
        return sample_into(d, np.empty(shape, dtype=dtype))

    if form == MULTIVARIATE:
        if len(shape) == 1:
            # (n, d) still goes through orientation inference; n == d is ambiguous
            return sample_into(d, np.empty((shape[0], d.dim), dtype=dtype))
        if len(shape) == 2:
            return sample_into(d, np.empty(shape, dtype=dtype))
        raise ShapeMismatchError(
            f"multivariate sampling takes a count n or a 2-D shape; got {shape}"
        )

    if form == MATRIXVARIATE:
        if len(shape) != 1:
            raise ShapeMismatchError(f"matrix-valued sampling takes a single count n; got {shape}")
        return sample_into(d, np.empty((shape[0], *d.dim), dtype=dtype))

    raise UnsupportedOperationError(f"unknown variate form {form!r} for {type(d).__name__}")


def sample_into(d: Distribution, out: Array) -> Array:
    """
    Fill `out` in place with independent draws from `d` and return it.

    - univariate: every position of `out` receives one draw.
    - multivariate: `out` must be 2-D with exactly one axis of length
      `d.dim`. If axis 0 has that length each column is a draw, if axis 1
      has it each row is a draw.
    - matrix-valued: `out` must have shape (n, rows, cols) with
      (rows, cols) == d.dim, or be a single (rows, cols) matrix.

    Raises:
        ShapeMismatchError: If `out` has an incompatible shape, including a
            multivariate buffer where both axes (or neither) equal `d.dim`.
    """
    if not isinstance(out, np.ndarray):
        raise TypeError(f"out must be a numpy array; got {type(out).__name__}")

    form = d.variate_form

    if form == UNIVARIATE:
        for idx in np.ndindex(out.shape):
            out[idx] = d.draw()
        return out

    if form == MULTIVARIATE:
        return _fill_vectors(d, out, _sample_axis(out.shape, d.dim))

    if form == MATRIXVARIATE:
        dim = tuple(d.dim)
        batch = _ensure_batch_array(out, dim)  # view of `out`
        for j in range(batch.shape[0]):
            batch[j] = np.reshape(d.draw(), dim)
        return out

    raise UnsupportedOperationError(f"unknown variate form {form!r} for {type(d).__name__}")
