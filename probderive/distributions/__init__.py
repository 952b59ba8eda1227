from .distribution import (
    UNIVARIATE,
    MULTIVARIATE,
    MATRIXVARIATE,
    CONTINUOUS,
    DISCRETE,
    Distribution,
    UnivariateDistribution,
    ContinuousUnivariateDistribution,
    DiscreteUnivariateDistribution,
    MultivariateDistribution,
    MatrixDistribution,
)
from .scipy_wrappers import (
    ScipyContinuous,
    ScipyDiscrete,
    ScipyMultivariate,
    ScipyMatrix,
    from_scipy,
)
