# distributions/distribution.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from ..custom_types import Shape
from ..errors import UnsupportedOperationError

__all__ = [
    "UNIVARIATE",
    "MULTIVARIATE",
    "MATRIXVARIATE",
    "CONTINUOUS",
    "DISCRETE",
    "Distribution",
    "UnivariateDistribution",
    "ContinuousUnivariateDistribution",
    "DiscreteUnivariateDistribution",
    "MultivariateDistribution",
    "MatrixDistribution",
]

# Category tags. The broadcast and sampling layers select behaviour by these,
# never by the concrete class.
UNIVARIATE = "univariate"
MULTIVARIATE = "multivariate"
MATRIXVARIATE = "matrixvariate"

CONTINUOUS = "continuous"
DISCRETE = "discrete"


def _unsupported(d: Distribution, name: str) -> UnsupportedOperationError:
    return UnsupportedOperationError(
        f"{type(d).__name__} ({d.value_support} {d.variate_form}) does not implement {name}()"
    )


# -------------------------- Abstract Classes ----------------------------


class Distribution(ABC):
    """
    Abstract base class for probability distributions.

    A concrete distribution ("variant") implements a small set of primitive
    methods. Every secondary statistic defined here is a fallback written
    purely in terms of those primitives, and any of them may be overridden
    with a closed form or a numerically better expression. Because all
    callers go through the bound method, an override always takes
    precedence over the fallback.

    Primitives:
        density, cdf, quantile, mean, var, entropy, insupport, draw,
        plus the optional excess_kurtosis, var_at, log_density_at, mustart.

    A primitive that a variant does not provide raises
    `UnsupportedOperationError`. Errors raised by a primitive (for example
    `DomainError` from `quantile`) propagate unchanged through every
    fallback that calls it; nothing is clamped.

    Variants are expected to be immutable once constructed.

    Class attributes:
        variate_form: one of "univariate", "multivariate", "matrixvariate".
        value_support: "continuous" or "discrete".
    """

    variate_form: str = UNIVARIATE
    value_support: str = CONTINUOUS

    # ---- Primitives ----

    @abstractmethod
    def density(self, x: Any) -> float:
        """
        Probability density (or mass, for discrete variants) at a single
        value `x` of the distribution's natural shape.
        """
        raise NotImplementedError

    def cdf(self, x: Any) -> float:
        """Cumulative probability P[X <= x]."""
        raise _unsupported(self, "cdf")

    def quantile(self, p: float) -> Any:
        """Inverse of `cdf`. Should raise `DomainError` for p outside [0, 1]."""
        raise _unsupported(self, "quantile")

    def mean(self) -> Any:
        raise _unsupported(self, "mean")

    def var(self) -> Any:
        raise _unsupported(self, "var")

    def var_at(self, mu: float) -> float:
        """Variance of an observation whose mean is `mu` (residual-style variance)."""
        raise _unsupported(self, "var_at")

    def entropy(self) -> float:
        """Entropy in nats."""
        raise _unsupported(self, "entropy")

    def excess_kurtosis(self) -> float:
        raise _unsupported(self, "excess_kurtosis")

    def insupport(self, x: Any) -> bool:
        raise _unsupported(self, "insupport")

    def draw(self) -> Any:
        """
        Draw one sample in the distribution's natural shape (scalar, vector
        or matrix).

        This layer calls `draw` once per output element and performs no
        locking. Implementations that may be used from several threads must
        use a thread-local or otherwise synchronised random generator.
        """
        raise _unsupported(self, "draw")

    def log_density_at(self, mu: float, y: float) -> float:
        """
        Log density of observation `y` when the distribution is located at
        `mu`. This two-argument form is what `deviance` and `devresid` use.
        """
        raise _unsupported(self, "log_density_at")

    def mustart(self, y: float, wt: float) -> float:
        """Starting value of the mean for one observation `y` with weight `wt`."""
        raise _unsupported(self, "mustart")

    @property
    def dim(self) -> int | Shape:
        raise _unsupported(self, "dim")

    # ---- Fallbacks ----

    def log_density(self, x: Any) -> float:
        with np.errstate(divide="ignore"):
            return np.log(self.density(x))

    def std(self) -> Any:
        return np.sqrt(self.var())

    def kurtosis(self, proper: bool = False) -> float:
        """
        Kurtosis of the distribution.

        Excess kurtosis is the default convention. With `proper=True` the
        proper kurtosis, excess + 3, is returned.
        """
        k = self.excess_kurtosis()
        return k + 3.0 if proper else k

    def excess(self) -> float:
        return self.excess_kurtosis()

    def proper_kurtosis(self) -> float:
        return self.kurtosis(proper=True)

    def binary_entropy(self) -> float:
        """Entropy in bits."""
        return self.entropy() / np.log(2.0)


class UnivariateDistribution(Distribution):
    """
    Distribution over real scalars. Adds the CDF-based fallbacks.
    """

    variate_form = UNIVARIATE

    def ccdf(self, x: float) -> float:
        return 1.0 - self.cdf(x)

    def cquantile(self, p: float) -> float:
        return self.quantile(1.0 - p)

    def logcdf(self, x: float) -> float:
        with np.errstate(divide="ignore"):
            return np.log(self.cdf(x))

    def logccdf(self, x: float) -> float:
        with np.errstate(divide="ignore"):
            return np.log(self.ccdf(x))

    def invlogcdf(self, lp: float) -> float:
        return self.quantile(np.exp(lp))

    def invlogccdf(self, lp: float) -> float:
        # -expm1(lp) == 1 - exp(lp) without cancellation for lp near 0
        return self.quantile(-np.expm1(lp))


class ContinuousUnivariateDistribution(UnivariateDistribution):
    value_support = CONTINUOUS


class DiscreteUnivariateDistribution(UnivariateDistribution):
    """
    Distribution over integers. `pmf`/`logpmf` are aliases of
    `density`/`log_density` and forward all arguments unchanged.
    """

    value_support = DISCRETE

    def pmf(self, *args: Any, **kwargs: Any) -> float:
        return self.density(*args, **kwargs)

    def logpmf(self, *args: Any, **kwargs: Any) -> float:
        return self.log_density(*args, **kwargs)


class MultivariateDistribution(Distribution):
    """
    Distribution over real vectors of fixed length d.

    `dim` defaults to the length of `mean()`; subclasses may override.
    """

    variate_form = MULTIVARIATE

    @property
    def dim(self) -> int:
        m = np.asarray(self.mean())
        if m.ndim != 1:
            raise ValueError("mean() must return a 1D array of shape (d,).")
        return int(m.shape[0])


class MatrixDistribution(Distribution):
    """
    Distribution over real matrices of fixed shape (rows, cols).

    `dim` is the matrix shape, inferred from `mean()` by default.
    """

    variate_form = MATRIXVARIATE

    @property
    def dim(self) -> Shape:
        m = np.asarray(self.mean())
        if m.ndim != 2:
            raise ValueError("mean() must return a 2D array of shape (rows, cols).")
        return tuple(int(n) for n in m.shape)
