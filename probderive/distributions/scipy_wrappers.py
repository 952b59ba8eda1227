# distributions/scipy_wrappers.py
"""
Distributions backed by frozen ``scipy.stats`` objects.

SciPy supplies the primitives. Where SciPy has a more accurate form of a
secondary operation (``sf``, ``logsf``, ``isf``, ``logpdf``, ``logcdf``) the
wrapper overrides the generic fallback with it.

SciPy returns NaN for probabilities outside [0, 1]; the wrappers raise
`DomainError` instead so the error reaches the caller.
"""
from __future__ import annotations

import logging
from typing import Any

import numpy as np
import scipy.stats as sp

from ..custom_types import Array, ArrayLike, PRNG
from ..array_backend.utils import _ensure_probability
from .distribution import (
    Distribution,
    ContinuousUnivariateDistribution,
    DiscreteUnivariateDistribution,
    MultivariateDistribution,
    MatrixDistribution,
    DISCRETE,
    _unsupported,
)

__all__ = [
    "ScipyContinuous",
    "ScipyDiscrete",
    "ScipyMultivariate",
    "ScipyMatrix",
    "from_scipy",
]

logger = logging.getLogger(__name__)


def _frozen_attr(frozen: Any, name: str) -> Any:
    # scipy exposes some moments as attributes (multivariate_normal.mean)
    # and others as methods (dirichlet.mean()).
    value = getattr(frozen, name)
    return value() if callable(value) else value


class _ScipyUnivariate:
    """Shared primitives and overrides for scalar scipy distributions."""

    def __init__(self, frozen: Any, *, rng: PRNG | None = None):
        self._frozen = frozen
        self._rng = rng or np.random.default_rng()
        logger.debug("wrapped scipy distribution %s", frozen.dist.name)

    @property
    def frozen(self) -> Any:
        """The underlying frozen scipy distribution."""
        return self._frozen

    def cdf(self, x: float) -> float:
        return float(self._frozen.cdf(x))

    def logcdf(self, x: float) -> float:
        return float(self._frozen.logcdf(x))

    def ccdf(self, x: float) -> float:
        return float(self._frozen.sf(x))

    def logccdf(self, x: float) -> float:
        return float(self._frozen.logsf(x))

    def quantile(self, p: float) -> float:
        return float(self._frozen.ppf(_ensure_probability(p)))

    def cquantile(self, p: float) -> float:
        return float(self._frozen.isf(_ensure_probability(p)))

    def mean(self) -> float:
        return float(self._frozen.mean())

    def var(self) -> float:
        return float(self._frozen.var())

    def std(self) -> float:
        return float(self._frozen.std())

    def entropy(self) -> float:
        return float(self._frozen.entropy())

    def excess_kurtosis(self) -> float:
        # scipy reports Fisher (excess) kurtosis
        return float(self._frozen.stats(moments="k"))

    def insupport(self, x: float) -> bool:
        lo, hi = self._frozen.support()
        return bool(lo <= x <= hi)


class ScipyContinuous(_ScipyUnivariate, ContinuousUnivariateDistribution):
    """
    Continuous univariate distribution wrapping e.g. ``scipy.stats.norm(0, 1)``.

    Args:
        frozen: A frozen ``rv_continuous`` instance.
        rng: Random number generator used by `draw`.
    """

    def __init__(self, frozen: Any, *, rng: PRNG | None = None):
        if not isinstance(getattr(frozen, "dist", None), sp.rv_continuous):
            raise TypeError(f"expected a frozen scipy rv_continuous; got {type(frozen).__name__}")
        super().__init__(frozen, rng=rng)

    def density(self, x: float) -> float:
        return float(self._frozen.pdf(x))

    def log_density(self, x: float) -> float:
        return float(self._frozen.logpdf(x))

    def draw(self) -> float:
        return float(self._frozen.rvs(random_state=self._rng))


class ScipyDiscrete(_ScipyUnivariate, DiscreteUnivariateDistribution):
    """
    Discrete univariate distribution wrapping e.g. ``scipy.stats.poisson(3)``.

    Args:
        frozen: A frozen ``rv_discrete`` instance.
        rng: Random number generator used by `draw`.
    """

    def __init__(self, frozen: Any, *, rng: PRNG | None = None):
        if not isinstance(getattr(frozen, "dist", None), sp.rv_discrete):
            raise TypeError(f"expected a frozen scipy rv_discrete; got {type(frozen).__name__}")
        super().__init__(frozen, rng=rng)

    def density(self, x: float) -> float:
        return float(self._frozen.pmf(x))

    def log_density(self, x: float) -> float:
        return float(self._frozen.logpmf(x))

    def insupport(self, x: float) -> bool:
        return float(x).is_integer() and super().insupport(x)

    def draw(self) -> int:
        return int(self._frozen.rvs(random_state=self._rng))


class ScipyMultivariate(MultivariateDistribution):
    """
    Vector-valued distribution wrapping a frozen scipy multivariate
    distribution, e.g. ``multivariate_normal``, ``dirichlet`` or
    ``multinomial``. Distributions with a ``pmf`` instead of a ``pdf`` are
    treated as discrete.

    `insupport` is answered by evaluating the log density: a finite value
    means the point is in the support, and scipy's argument validation
    error (``ValueError``) means it is not.
    """

    def __init__(self, frozen: Any, *, rng: PRNG | None = None):
        self._frozen = frozen
        self._rng = rng or np.random.default_rng()
        if not hasattr(frozen, "pdf"):
            self.value_support = DISCRETE
        self._mean = np.atleast_1d(np.asarray(_frozen_attr(frozen, "mean"), dtype=float))
        logger.debug("wrapped scipy %s of dimension %d", type(frozen).__name__, self._mean.shape[0])

    @property
    def frozen(self) -> Any:
        return self._frozen

    def density(self, x: ArrayLike) -> float:
        f = self._frozen.pmf if self.value_support == DISCRETE else self._frozen.pdf
        return float(f(x))

    def log_density(self, x: ArrayLike) -> float:
        f = self._frozen.logpmf if self.value_support == DISCRETE else self._frozen.logpdf
        return float(f(x))

    def mean(self) -> Array:
        return self._mean.copy()

    def var(self) -> Array:
        """Per-coordinate variance, shape (d,)."""
        if callable(getattr(self._frozen, "var", None)):
            return np.asarray(self._frozen.var(), dtype=float)
        if hasattr(self._frozen, "cov"):
            return np.diag(np.atleast_2d(np.asarray(_frozen_attr(self._frozen, "cov"), dtype=float))).copy()
        raise _unsupported(self, "var")

    def entropy(self) -> float:
        return float(self._frozen.entropy())

    def insupport(self, x: ArrayLike) -> bool:
        x = np.asarray(x, dtype=float)
        if x.shape != (self.dim,):
            return False
        try:
            return bool(np.isfinite(self.log_density(x)))
        except ValueError:
            return False

    def draw(self) -> Array:
        return np.reshape(self._frozen.rvs(random_state=self._rng), (self.dim,))


class ScipyMatrix(MatrixDistribution):
    """
    Matrix-valued distribution wrapping e.g. ``scipy.stats.wishart`` or
    ``matrix_normal``.

    `insupport` follows `ScipyMultivariate`: the shape must equal `dim` and
    the log density must be finite.
    """

    def __init__(self, frozen: Any, *, rng: PRNG | None = None):
        self._frozen = frozen
        self._rng = rng or np.random.default_rng()
        self._mean = np.atleast_2d(np.asarray(_frozen_attr(frozen, "mean"), dtype=float))
        logger.debug("wrapped scipy %s of shape %s", type(frozen).__name__, self._mean.shape)

    @property
    def frozen(self) -> Any:
        return self._frozen

    def density(self, x: ArrayLike) -> float:
        return float(self._frozen.pdf(x))

    def log_density(self, x: ArrayLike) -> float:
        return float(self._frozen.logpdf(x))

    def mean(self) -> Array:
        return self._mean.copy()

    def entropy(self) -> float:
        return float(self._frozen.entropy())

    def insupport(self, x: ArrayLike) -> bool:
        x = np.asarray(x, dtype=float)
        if x.shape != self.dim:
            return False
        try:
            return bool(np.isfinite(self.log_density(x)))
        except ValueError:
            # includes LinAlgError for matrices that are not positive definite
            return False

    def draw(self) -> Array:
        return np.reshape(self._frozen.rvs(random_state=self._rng), self.dim)


def from_scipy(frozen: Any, *, rng: PRNG | None = None) -> Distribution:
    """
    Wrap a frozen scipy distribution in the matching probderive class.

    Scalar distributions are recognised by their ``rv_continuous`` /
    ``rv_discrete`` base; the rest are classified by the shape of their mean
    (vector -> multivariate, matrix -> matrix-valued).

    Raises:
        TypeError: If the object cannot be classified.
    """
    dist = getattr(frozen, "dist", None)
    if isinstance(dist, sp.rv_continuous):
        return ScipyContinuous(frozen, rng=rng)
    if isinstance(dist, sp.rv_discrete):
        return ScipyDiscrete(frozen, rng=rng)

    if not hasattr(frozen, "mean"):
        raise TypeError(f"cannot wrap {type(frozen).__name__}: no mean available")
    ndim = np.ndim(_frozen_attr(frozen, "mean"))
    if ndim == 1:
        return ScipyMultivariate(frozen, rng=rng)
    if ndim == 2:
        return ScipyMatrix(frozen, rng=rng)
    raise TypeError(f"cannot wrap {type(frozen).__name__}: mean has {ndim} dimensions")
