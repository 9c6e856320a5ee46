"""
Standard normal distribution functions.

The CDF uses the Abramowitz-Stegun 7.1.26 rational approximation of erf,
with a maximum absolute error of about 1.5e-7. Both functions accept
scalars or numpy arrays.
"""
import numpy as np

# Abramowitz & Stegun 7.1.26
A1 = 0.254829592
A2 = -0.284496736
A3 = 1.421413741
A4 = -1.453152027
A5 = 1.061405429
P = 0.3275911

SQRT_2 = np.sqrt(2.0)
SQRT_2PI = np.sqrt(2.0 * np.pi)


def cdf(x):
    """
    Standard normal cumulative distribution function.

    Args:
        x: Scalar or array of real values

    Returns:
        Probability N(x) in [0, 1]
    """
    z = np.abs(x) / SQRT_2
    t = 1.0 / (1.0 + P * z)
    erf = 1.0 - ((((A5 * t + A4) * t + A3) * t + A2) * t + A1) * t * np.exp(-z * z)
    # np.sign(0) is 0, so cdf(0) is exactly 0.5
    return 0.5 * (1.0 + np.sign(x) * erf)


def pdf(x):
    """Standard normal probability density, exp(-x^2/2) / sqrt(2*pi)."""
    return np.exp(-0.5 * np.square(x)) / SQRT_2PI
