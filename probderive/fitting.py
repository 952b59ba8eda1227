# fitting.py
"""
Goodness-of-fit helpers built on a distribution's two-argument log density.

All functions take parallel containers (observations, fitted means,
weights) that must promote to a common shape: identical shapes, with
scalars repeated as needed. Index i of every container refers to the same
observation.
"""
from __future__ import annotations

from typing import Any, Callable

import numpy as np

from .custom_types import ArrayLike, Shape
from .array_backend.utils import _as_array, _promote_shape
from .distributions.distribution import Distribution

__all__ = [
    "promote_shape",
    "deviance",
    "devresid",
    "mustart",
    "var_at",
]


def promote_shape(*shapes: Shape) -> Shape:
    """Return the common shape of `shapes`.

    Scalars (shape ()) are repeated to fit. All other shapes must be equal.

    Raises:
        ShapeMismatchError: If no common shape exists.
    """
    return _promote_shape(*shapes)


def _parallel(fn: Callable[..., float], *args: ArrayLike) -> Any:
    """Apply `fn` index by index over promoted `args`.

    Returns a float when every argument is a scalar, otherwise a new float
    array with the promoted shape.
    """
    arrays = [_as_array(a) for a in args]
    shape = _promote_shape(*(a.shape for a in arrays))
    if shape == ():
        return float(fn(*(a.item() for a in arrays)))

    views = [np.broadcast_to(a, shape) for a in arrays]
    res = np.empty(shape, dtype=float)
    for idx in np.ndindex(shape):
        res[idx] = fn(*(v[idx].item() for v in views))
    return res


def deviance(d: Distribution, mu: ArrayLike, y: ArrayLike, wt: ArrayLike) -> float:
    """
    Deviance of observations `y` under fitted means `mu` with weights `wt`.

    Computes ``-2 * sum_i wt[i] * d.log_density_at(mu[i], y[i])`` over the
    promoted shape of the three inputs.

    Args:
        d: Distribution providing `log_density_at(mu, y)`.
        mu: Fitted values.
        y: Observed responses.
        wt: Prior weights.

    Returns:
        The deviance as a float.

    Raises:
        ShapeMismatchError: If the inputs cannot be promoted to one shape.
    """
    terms = _parallel(lambda m, o, w: w * d.log_density_at(m, o), mu, y, wt)
    return -2.0 * float(np.sum(terms))


def devresid(d: Distribution, y: ArrayLike, mu: ArrayLike, wt: ArrayLike) -> Any:
    """
    Deviance residuals ``-2 * wt * d.log_density_at(y, mu)``.

    With scalar arguments a float is returned; otherwise an array with the
    promoted shape of `y`, `mu` and `wt`, in positional correspondence with
    the inputs.
    """
    return _parallel(lambda o, m, w: -2.0 * w * d.log_density_at(o, m), y, mu, wt)


def mustart(d: Distribution, y: ArrayLike, wt: ArrayLike) -> Any:
    """Starting values for iterative fitting, one per observation."""
    return _parallel(d.mustart, y, wt)


def var_at(d: Distribution, mu: ArrayLike) -> Any:
    """Variance at each fitted mean in `mu`; same shape as `mu`."""
    return _parallel(d.var_at, mu)
