"""
Example: Deviance and Residuals for a Gaussian Family
-----------------------------------------------------

Defines a Normal variant with known scale that supplies the two-argument
log density and start-value rule used in iteratively reweighted fitting,
then computes start values, deviance and deviance residuals for a small
weighted data set.
"""

import numpy as np
import scipy.stats as sp

import probderive as pdv


class NormalFamily(pdv.ScipyContinuous):

    def __init__(self, sigma=1.0, *, rng=None):
        super().__init__(sp.norm(0.0, sigma), rng=rng)
        self.sigma = sigma

    def log_density_at(self, mu, y):
        return float(sp.norm(mu, self.sigma).logpdf(y))

    def mustart(self, y, wt):
        return y

    def var_at(self, mu):
        return self.sigma ** 2


family = NormalFamily(sigma=2.0)
y = np.array([0.3, 2.0, 5.0, 1.0])
wt = np.array([1.0, 1.0, 2.0, 0.5])
mu = np.full_like(y, y.mean())

print("start values:", pdv.mustart(family, y, wt))
print("variance at mu:", pdv.var_at(family, mu))
print("deviance at perfect fit:", pdv.deviance(family, y, y, wt))
print("deviance at the mean:", pdv.deviance(family, mu, y, wt))
print("deviance residuals:", pdv.devresid(family, y, mu, wt))
