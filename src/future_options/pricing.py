"""
Black-Scholes-Merton formulas for European options on futures contracts.

This is the cost-of-carry = 0 (Black-76) form: the future is driftless under
the pricing measure and only the premium is discounted at the risk-free rate.

Parameter glossary (used throughout):
    future : Underlying future price
    strike : Strike price
    volatility : Annualized volatility of the future
    maturity : Time to expiry as a fraction of a year
    rate : Annual risk-free rate (continuous compounding), 0 by default

Conventions & numerical notes:
    • Inputs are not validated. Arithmetic runs on ``numpy.float64`` with
      floating point warnings silenced, so degenerate inputs (zero volatility,
      zero maturity, non-positive prices) yield ``nan``/``inf`` or a limiting
      value instead of raising.
    • Prices are rounded with ``round_half_up(x · 10·decimal) / (10·decimal)``.
      That is *not* rounding to ``decimal`` places: the default ``decimal=2``
      puts prices on a 0.05 grid. The formula is kept as-is for compatibility
      with existing quotes.
    • Vega is per 100 volatility points (dPrice/dσ divided by 100).
    • Theta is per day: the annual decay divided by ``days_per_year``.
"""

from __future__ import annotations

from typing import Literal

import numpy as np
from numpy.typing import NDArray

from .distribution import normal_cdf, normal_density
from .exceptions import InvalidOptionType

OptionType = Literal["call", "put"]

_IGNORE_FP = {"divide": "ignore", "invalid": "ignore", "over": "ignore"}


def normalize_option_type(option_type: str) -> OptionType:
    """
    Return ``"call"`` or ``"put"`` for a case-insensitive option type.

    Raises
    ------
    InvalidOptionType
        If ``option_type`` names anything else.
    """

    if isinstance(option_type, str):
        kind = option_type.strip().lower()
        if kind in ("call", "put"):
            return kind
    raise InvalidOptionType(option_type)


def _d1d2(future, strike, volatility, maturity):
    """
    d1 = [ln(F/K) + σ² t / 2] / (σ √t)
    d2 = [ln(F/K) − σ² t / 2] / (σ √t)

    Must be called with floating point warnings silenced.
    """
    F = np.float64(future)
    K = np.float64(strike)
    sigma = np.float64(volatility)
    T = np.float64(maturity)

    log_moneyness = np.log(F / K)
    half_variance = sigma**2 * T / 2.0
    vol_sqrt_t = sigma * np.sqrt(T)
    d1 = (log_moneyness + half_variance) / vol_sqrt_t
    d2 = (log_moneyness - half_variance) / vol_sqrt_t
    return d1, d2


def _discount(rate, maturity):
    return np.exp(-np.float64(rate) * np.float64(maturity))


def _round_price(value, decimal):
    # Half-way cases round toward +inf.
    scale = 10 * decimal
    return float(np.floor(value * scale + 0.5) / scale)


def call_price(future, strike, volatility, maturity, rate=0.0, decimal=2) -> float:
    """
    Price a European call on a future.

        C = e^{−rt} (F Φ(d1) − K Φ(d2))

    Parameters
    ----------
    future, strike, volatility, maturity, rate : float
        See module docstring.
    decimal : int, default=2
        Rounding parameter; the price is rounded to a grid of ``1 / (10·decimal)``.

    Returns
    -------
    float
        Rounded call premium.

    Examples
    --------
    >>> call_price(100.0, 120.0, 0.0, 1.0)
    0.0
    """

    with np.errstate(**_IGNORE_FP):
        d1, d2 = _d1d2(future, strike, volatility, maturity)
        price = _discount(rate, maturity) * (
            np.float64(future) * normal_cdf(d1) - np.float64(strike) * normal_cdf(d2)
        )
        return _round_price(price, decimal)


def put_price(future, strike, volatility, maturity, rate=0.0, decimal=2) -> float:
    """
    Price a European put on a future.

        P = e^{−rt} (K Φ(−d2) − F Φ(−d1))

    Rounded exactly like :func:`call_price`.
    """

    with np.errstate(**_IGNORE_FP):
        d1, d2 = _d1d2(future, strike, volatility, maturity)
        price = _discount(rate, maturity) * (
            np.float64(strike) * normal_cdf(-d2) - np.float64(future) * normal_cdf(-d1)
        )
        return _round_price(price, decimal)


def delta_call(future, strike, volatility, maturity, rate=0.0) -> float:
    """Call delta, e^{−rt} Φ(d1). Not rounded."""

    with np.errstate(**_IGNORE_FP):
        d1, _ = _d1d2(future, strike, volatility, maturity)
        return float(_discount(rate, maturity) * normal_cdf(d1))


def delta_put(future, strike, volatility, maturity, rate=0.0) -> float:
    """Put delta, −e^{−rt} Φ(−d1). Not rounded."""

    with np.errstate(**_IGNORE_FP):
        d1, _ = _d1d2(future, strike, volatility, maturity)
        return float(-_discount(rate, maturity) * normal_cdf(-d1))


def gamma(future, strike, volatility, maturity, rate=0.0) -> float:
    """Gamma, e^{−rt} φ(d1) / (σ F √t). Same for calls and puts."""

    with np.errstate(**_IGNORE_FP):
        d1, _ = _d1d2(future, strike, volatility, maturity)
        denominator = np.float64(volatility) * np.float64(future) * np.sqrt(np.float64(maturity))
        return float(_discount(rate, maturity) * normal_density(d1) / denominator)


def vega(future, strike, volatility, maturity, rate=0.0) -> float:
    """
    Vega, F e^{−rt} φ(d1) √t / 100. Same for calls and puts.

    The division by 100 expresses the sensitivity per volatility point, so a
    move of σ from 0.20 to 0.21 changes the premium by roughly ``vega``.
    """

    with np.errstate(**_IGNORE_FP):
        d1, _ = _d1d2(future, strike, volatility, maturity)
        sqrt_t = np.sqrt(np.float64(maturity))
        return float(
            np.float64(future) * _discount(rate, maturity) * normal_density(d1) * sqrt_t / 100.0
        )


def _theta_decay(future, volatility, maturity, discount, d1):
    sqrt_t = np.sqrt(np.float64(maturity))
    return -np.float64(future) * discount * normal_density(d1) * np.float64(volatility) / (2.0 * sqrt_t)


def theta_call(future, strike, volatility, maturity, rate=0.0, days_per_year=365) -> float:
    """
    Call theta per day.

        Θ = [−F e^{−rt} φ(d1) σ / (2√t) + r F e^{−rt} Φ(d1) − r K e^{−rt} Φ(d2)] / days
    """

    with np.errstate(**_IGNORE_FP):
        d1, d2 = _d1d2(future, strike, volatility, maturity)
        r = np.float64(rate)
        discount = _discount(rate, maturity)
        annual = (
            _theta_decay(future, volatility, maturity, discount, d1)
            + r * np.float64(future) * discount * normal_cdf(d1)
            - r * np.float64(strike) * discount * normal_cdf(d2)
        )
        return float(annual / days_per_year)


def theta_put(future, strike, volatility, maturity, rate=0.0, days_per_year=365) -> float:
    """
    Put theta per day.

        Θ = [−F e^{−rt} φ(d1) σ / (2√t) − r F e^{−rt} Φ(−d1) + r K e^{−rt} Φ(−d2)] / days
    """

    with np.errstate(**_IGNORE_FP):
        d1, d2 = _d1d2(future, strike, volatility, maturity)
        r = np.float64(rate)
        discount = _discount(rate, maturity)
        annual = (
            _theta_decay(future, volatility, maturity, discount, d1)
            - r * np.float64(future) * discount * normal_cdf(-d1)
            + r * np.float64(strike) * discount * normal_cdf(-d2)
        )
        return float(annual / days_per_year)


def option_price(
    option_type: str,
    future,
    strike,
    volatility,
    maturity,
    rate=0.0,
    decimal=2,
) -> float:
    """
    Price a call or put selected by a case-insensitive ``option_type``.

    Raises
    ------
    InvalidOptionType
        If ``option_type`` is neither ``"call"`` nor ``"put"``.
    """

    if normalize_option_type(option_type) == "call":
        return call_price(future, strike, volatility, maturity, rate, decimal)
    return put_price(future, strike, volatility, maturity, rate, decimal)


def option_greeks(
    option_type: str,
    future,
    strike,
    volatility,
    maturity,
    rate=0.0,
    days_per_year=365,
) -> NDArray[np.float64]:
    """
    Compute all greeks of a call or put in one call.

    Parameters
    ----------
    option_type : {"call", "put"}
        Case-insensitive. Selects the delta and theta branch.
    future, strike, volatility, maturity, rate : float
        See module docstring.
    days_per_year : int, default=365
        Day count used to express theta per day.

    Returns
    -------
    numpy.ndarray
        ``[delta, gamma, vega, theta]`` with ``float64`` dtype.

    Raises
    ------
    InvalidOptionType
        If ``option_type`` is neither ``"call"`` nor ``"put"``.
    """

    args = (future, strike, volatility, maturity, rate)
    if normalize_option_type(option_type) == "call":
        delta = delta_call(*args)
        theta = theta_call(*args, days_per_year=days_per_year)
    else:
        delta = delta_put(*args)
        theta = theta_put(*args, days_per_year=days_per_year)

    return np.array([delta, gamma(*args), vega(*args), theta], dtype=np.float64)
