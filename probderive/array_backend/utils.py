# array_backend/utils.py
"""
Shape canonicalization and validation helpers used by probderive.

Notes for backend support
-------------------------
This module currently imports numpy as `np`. The helpers only inspect and
reshape arrays, so swapping in another array namespace should only require
changing that import.

Every check here raises `ShapeMismatchError` (a `ValueError`) on failure and
includes the offending shapes in the message.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Tuple

import numpy as np

from ..custom_types import Array, ArrayLike, Shape
from ..errors import DomainError, ShapeMismatchError

logger = logging.getLogger(__name__)


def _as_array(x: Any) -> Array:
    try:
        return np.asarray(x)
    except Exception as e:
        raise TypeError(
            f"Could not convert input to array.\n"
            f"Input type: {type(x).__name__}\n"
            f"Input value: {repr(x)}\n"
            f"Original error: {e}"
        ) from e


def _is_numpy_scalar(x: Any) -> bool:
    """Return true if object is a numpy generic or Python scalar"""
    return np.isscalar(x) or isinstance(x, np.generic)


def _is_scalar_like(x: Any) -> bool:
    """Return true for Python/numpy scalars and 0-D arrays."""
    return _is_numpy_scalar(x) or np.ndim(x) == 0


def _ensure_real_scalar(x: Any) -> float | int:
    """
    Return a Python scalar for inputs that contain a single real value.

    Accepts Python scalars, numpy scalar types and 0-D arrays.

    Raises:
      ValueError if input has more than one element or is complex-valued.
    """
    arr = _as_array(x)
    if arr.ndim != 0:
        raise ValueError(f"_ensure_real_scalar: expected a scalar; got shape={arr.shape}")
    if np.iscomplexobj(arr):
        raise ValueError(f"_ensure_real_scalar: input is complex-valued: {x!r}")
    return arr.item()


def _ensure_probability(p: Any) -> float:
    """Return `p` as a float, raising DomainError unless 0 <= p <= 1."""
    value = float(_ensure_real_scalar(p))
    if not 0.0 <= value <= 1.0:
        raise DomainError(f"probability must lie in [0, 1]; got {value!r}")
    return value


def _ensure_vector(x: ArrayLike, *, length: int | None = None) -> Array:
    """
    Ensure input is a 1-D vector of shape (n,).

    0-D inputs become (1,); 2-D inputs shaped (n,1) or (1,n) are flattened.

    Raises:
      ShapeMismatchError for ndim > 2, 2-D inputs with both dims > 1, or a
      length different from `length`.
    """
    arr = _as_array(x)

    if arr.ndim == 0:
        out = arr.reshape((1,))
    elif arr.ndim == 1:
        out = arr
    elif arr.ndim == 2 and 1 in arr.shape:
        out = np.ravel(arr)
    else:
        raise ShapeMismatchError(f"_ensure_vector: input of shape {arr.shape} is not a vector.")

    if length is not None and out.size != length:
        raise ShapeMismatchError(f"_ensure_vector: required length {length}. Got {out.size}.")
    return out


def _ensure_batch_array(x: ArrayLike, value_shape: Shape) -> Array:
    """Ensure `x` has a leading batch axis followed by `value_shape`.

    An input shaped exactly `value_shape` is a single value and is expanded
    to a singleton batch (1, *value_shape). Anything else must already have
    shape (B, *value_shape).

    Raises:
        ShapeMismatchError: if the per-value shape does not match.
    """
    arr = _as_array(x)
    value_shape = tuple(value_shape)

    if arr.ndim == len(value_shape):
        arr = arr[np.newaxis, ...]

    if arr.shape[1:] != value_shape:
        raise ShapeMismatchError(
            f"Batch array with value shape {arr.shape[1:]} does not match required value shape {value_shape}."
        )
    return arr


def _normalize_dims(dims: Iterable[Any]) -> Shape:
    """Turn `(2, 3)`, `((2, 3),)` or `()` into a tuple of non-negative ints."""
    dims = tuple(dims)
    if len(dims) == 1 and isinstance(dims[0], (tuple, list)):
        dims = tuple(dims[0])
    shape = tuple(int(n) for n in dims)
    if any(n < 0 for n in shape):
        raise ValueError(f"dimensions must be non-negative; got {shape}")
    return shape


def _check_out_shape(out: Array, shape: Shape) -> Array:
    """Return `out` unchanged if it has exactly `shape`."""
    if not isinstance(out, np.ndarray):
        raise TypeError(f"out must be a numpy array; got {type(out).__name__}")
    if out.shape != tuple(shape):
        raise ShapeMismatchError(
            f"Inconsistent array dimensions: out has shape {out.shape}, expected {tuple(shape)}."
        )
    return out


def _sample_axis(shape: Shape, dim: int, axis: int | None = None) -> int:
    """Return the axis of a 2-D batch that indexes samples.

    The other axis must have length `dim`. With `axis=None` the orientation
    is inferred: (n, dim) gives 0, (dim, n) gives 1. A shape where both or
    neither axis has length `dim` is rejected rather than guessed.

    Raises:
        ShapeMismatchError: if the orientation is ambiguous or impossible.
    """
    if len(shape) != 2:
        raise ShapeMismatchError(f"expected a 2-D batch of vectors; got shape {tuple(shape)}")

    rows, cols = shape
    if axis is not None:
        if axis not in (0, 1):
            raise ValueError(f"axis must be 0, 1 or None; got {axis!r}")
        if shape[1 - axis] != dim:
            raise ShapeMismatchError(
                f"axis {1 - axis} of shape {tuple(shape)} must have length {dim}."
            )
        return axis

    if rows == dim and cols == dim:
        raise ShapeMismatchError(
            f"ambiguous orientation: both axes of shape {tuple(shape)} equal the dimension {dim}."
        )
    if cols == dim:
        logger.debug("shape %s: one sample per row", tuple(shape))
        return 0
    if rows == dim:
        logger.debug("shape %s: one sample per column", tuple(shape))
        return 1
    raise ShapeMismatchError(
        f"wrong dimensions: neither axis of shape {tuple(shape)} equals the dimension {dim}."
    )


def _promote_shape(*shapes: Shape) -> Shape:
    """Resolve a common shape for parallel containers.

    Scalars (shape ()) are repeated to fit any shape. All other shapes must
    be identical.

    Raises:
        ShapeMismatchError: if two non-scalar shapes differ.
    """
    result: Tuple[int, ...] = ()
    for shape in shapes:
        shape = tuple(shape)
        if shape == ():
            continue
        if result == ():
            result = shape
        elif shape != result:
            raise ShapeMismatchError(
                f"dimensions must match: cannot promote shapes {[tuple(s) for s in shapes]}."
            )
    logger.debug("promoted shapes %s to %s", [tuple(s) for s in shapes], result)
    return result
