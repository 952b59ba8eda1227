import math

import numpy as np
import pytest
from scipy.special import ndtri

from probderive.distributions import (
    ContinuousUnivariateDistribution,
    DiscreteUnivariateDistribution,
    MultivariateDistribution,
    MatrixDistribution,
)
from probderive.errors import DomainError


def _check_p(p):
    if not 0.0 <= p <= 1.0:
        raise DomainError(f"p={p!r} outside [0, 1]")


# Minimal variants: primitives only, so every secondary statistic below
# comes from the generic fallbacks.


class StdLogistic(ContinuousUnivariateDistribution):
    def __init__(self, rng=None):
        self._rng = rng or np.random.default_rng(0)

    def density(self, x):
        e = math.exp(-abs(x))
        return e / (1.0 + e) ** 2

    def cdf(self, x):
        return 1.0 / (1.0 + math.exp(-x))

    def quantile(self, p):
        _check_p(p)
        with np.errstate(divide="ignore"):
            return float(np.log(p) - np.log1p(-p))

    def mean(self):
        return 0.0

    def var(self):
        return math.pi ** 2 / 3.0

    def entropy(self):
        return 2.0

    def excess_kurtosis(self):
        return 1.2

    def insupport(self, x):
        return math.isfinite(x)

    def draw(self):
        return self.quantile(self._rng.random())

    def log_density_at(self, mu, y):
        return math.log(self.density(y - mu))


class UnitGaussian(ContinuousUnivariateDistribution):
    """N(0, 1) whose two-argument log density is the saturated form -(y - mu)^2 / 2."""

    def density(self, x):
        return math.exp(-0.5 * x * x) / math.sqrt(2.0 * math.pi)

    def cdf(self, x):
        return 0.5 * (1.0 + math.erf(x / math.sqrt(2.0)))

    def quantile(self, p):
        _check_p(p)
        return float(ndtri(p))

    def mean(self):
        return 0.0

    def var(self):
        return 1.0

    def var_at(self, mu):
        return 1.0

    def entropy(self):
        return 0.5 * math.log(2.0 * math.pi * math.e)

    def excess_kurtosis(self):
        return 0.0

    def log_density_at(self, mu, y):
        return -0.5 * (y - mu) ** 2

    def mustart(self, y, wt):
        return y


class Poisson(DiscreteUnivariateDistribution):
    def __init__(self, lam, rng=None):
        self.lam = float(lam)
        self._rng = rng or np.random.default_rng(0)

    def density(self, k):
        if k < 0 or k != int(k):
            return 0.0
        return math.exp(k * math.log(self.lam) - self.lam - math.lgamma(k + 1))

    def cdf(self, x):
        if x < 0:
            return 0.0
        return sum(self.density(i) for i in range(int(math.floor(x)) + 1))

    def quantile(self, p):
        _check_p(p)
        if p == 1.0:
            return math.inf
        k, total = 0, self.density(0)
        while total < p:
            k += 1
            total += self.density(k)
        return float(k)

    def mean(self):
        return self.lam

    def var(self):
        return self.lam

    def var_at(self, mu):
        return mu

    def excess_kurtosis(self):
        return 1.0 / self.lam

    def insupport(self, x):
        return x >= 0 and float(x).is_integer()

    def draw(self):
        return int(self._rng.poisson(self.lam))

    def log_density_at(self, mu, y):
        return y * math.log(mu) - mu - math.lgamma(y + 1)

    def mustart(self, y, wt):
        return y + 0.1


class IsoNormal(MultivariateDistribution):
    def __init__(self, mean, rng=None):
        self._mean = np.asarray(mean, dtype=float)
        self._rng = rng or np.random.default_rng(0)

    def mean(self):
        return self._mean

    def var(self):
        return np.ones_like(self._mean)

    def density(self, x):
        z = np.asarray(x, dtype=float) - self._mean
        return float(np.exp(-0.5 * z @ z) / (2.0 * math.pi) ** (0.5 * self.dim))

    def entropy(self):
        return 0.5 * self.dim * math.log(2.0 * math.pi * math.e)

    def insupport(self, x):
        return bool(np.all(np.isfinite(x)))

    def draw(self):
        return self._mean + self._rng.standard_normal(self.dim)


class GaussianMatrix(MatrixDistribution):
    def __init__(self, mean, rng=None):
        self._mean = np.asarray(mean, dtype=float)
        self._rng = rng or np.random.default_rng(0)

    def mean(self):
        return self._mean

    def density(self, x):
        z = np.ravel(np.asarray(x, dtype=float) - self._mean)
        return float(np.exp(-0.5 * z @ z) / (2.0 * math.pi) ** (0.5 * z.size))

    def insupport(self, x):
        return np.shape(x) == self.dim

    def draw(self):
        return self._mean + self._rng.standard_normal(self.dim)


class CountingScalar(ContinuousUnivariateDistribution):
    """Draws 0, 1, 2, ... so fill positions can be checked."""

    def __init__(self):
        self.calls = 0

    def density(self, x):
        return 1.0

    def draw(self):
        value = float(self.calls)
        self.calls += 1
        return value


class CountingVector(MultivariateDistribution):
    """Draws [k, k, ..., k] for k = 0, 1, 2, ..."""

    def __init__(self, dim):
        self._dim = dim
        self.calls = 0

    def mean(self):
        return np.zeros(self._dim)

    def density(self, x):
        return 1.0

    def draw(self):
        value = np.full(self._dim, float(self.calls))
        self.calls += 1
        return value


@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def logistic(rng):
    return StdLogistic(rng=rng)

@pytest.fixture
def gaussian():
    return UnitGaussian()

@pytest.fixture
def poisson(rng):
    return Poisson(3.0, rng=rng)

@pytest.fixture
def iso_normal(rng):
    return IsoNormal([0.0, 1.0, 2.0], rng=rng)

@pytest.fixture
def gaussian_matrix(rng):
    return GaussianMatrix(np.zeros((2, 3)), rng=rng)

@pytest.fixture
def counting_scalar():
    return CountingScalar()

@pytest.fixture
def counting_vector_factory():
    return CountingVector

@pytest.fixture
def iso_normal_factory(rng):
    return lambda mean: IsoNormal(mean, rng=rng)

@pytest.fixture
def dim():
    return 3

@pytest.fixture
def mean(dim):
    return np.arange(dim, dtype=float)  # [0,1,2]

@pytest.fixture
def cov_matrix(dim):
    A = np.eye(dim) * 2.0
    A[0,1] = A[1,0] = 0.3
    return A
