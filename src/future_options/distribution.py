"""
Standard normal density and the cumulative distribution approximation used by
every pricing formula in this package.

The CDF is the Zelen & Severo (Abramowitz & Stegun 26.2.17) rational
approximation. Its coefficients are part of the numeric contract: prices and
greeks are reproduced against this approximation, not against an erf-based Φ,
so the two differ in the last few significant digits.

Arithmetic runs on ``numpy.float64`` so that non-finite inputs propagate the
IEEE way instead of raising.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.special import ndtr

# Zelen & Severo coefficients, innermost last.
_P = 0.2316419
_B = (0.3193815, -0.3565638, 1.781478, -1.821256, 1.330274)

_INV_SQRT_2PI = 1.0 / np.sqrt(2.0 * np.pi)


def normal_density(x: float) -> float:
    """
    Standard normal probability density φ(x) = exp(−x²/2) / √(2π).

    Parameters
    ----------
    x : float
        Evaluation point.

    Returns
    -------
    float
        Density value. Even in ``x``.
    """

    value = np.float64(x)
    with np.errstate(over="ignore"):
        return float(np.exp(-value * value / 2.0) * _INV_SQRT_2PI)


def normal_cdf(x: float) -> float:
    """
    Approximate the standard normal CDF Φ(x).

    Absolute error is of order 1e-7 over the real line. ``nan`` maps to
    ``nan``; ``+inf`` and ``-inf`` map to ``1.0`` and ``0.0``.

    Parameters
    ----------
    x : float
        Evaluation point.

    Returns
    -------
    float
        Approximate probability that a standard normal variable is ``<= x``.

    Examples
    --------
    >>> round(normal_cdf(1.0), 4)
    0.8413
    """

    value = np.float64(x)
    with np.errstate(invalid="ignore", over="ignore"):
        t = 1.0 / (1.0 + _P * np.abs(value))
        poly = _B[0] + t * (_B[1] + t * (_B[2] + t * (_B[3] + t * _B[4])))
        prob = normal_density(value) * t * poly
    if value > 0:
        return float(1.0 - prob)
    return float(prob)


def exact_normal_cdf(x: ArrayLike) -> NDArray[np.float64]:
    """Reference Φ evaluated with ``scipy.special.ndtr``."""

    return ndtr(np.asarray(x, dtype=np.float64))


def cdf_approximation_error(x: ArrayLike) -> NDArray[np.float64]:
    """
    Absolute difference between :func:`normal_cdf` and the exact CDF.

    Parameters
    ----------
    x : ArrayLike
        Scalar or array of evaluation points.

    Returns
    -------
    numpy.ndarray
        ``|normal_cdf(x) - Φ(x)|`` with the shape of ``x``.
    """

    values = np.asarray(x, dtype=np.float64)
    approx = np.vectorize(normal_cdf, otypes=[np.float64])(values)
    return np.abs(approx - exact_normal_cdf(values))
