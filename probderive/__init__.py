"""
probderive: secondary statistics, array broadcasting and batch sampling
derived from a small set of distribution primitives.
"""

from .errors import (
    ProbDeriveError,
    ShapeMismatchError,
    DomainError,
    UnsupportedOperationError,
)
from .distributions import (
    Distribution,
    UnivariateDistribution,
    ContinuousUnivariateDistribution,
    DiscreteUnivariateDistribution,
    MultivariateDistribution,
    MatrixDistribution,
    ScipyContinuous,
    ScipyDiscrete,
    ScipyMultivariate,
    ScipyMatrix,
    from_scipy,
)
from .broadcast import (
    lift,
    density,
    log_density,
    cdf,
    logcdf,
    ccdf,
    logccdf,
    quantile,
    cquantile,
    invlogcdf,
    invlogccdf,
    pmf,
    logpmf,
    insupport,
)
from .sampling import sample, sample_into
from .fitting import promote_shape, deviance, devresid, mustart, var_at

__version__ = "0.1.0"
