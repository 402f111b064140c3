"""
Implied volatility for European options on futures.

The solver is a Newton-Raphson iteration on the rounded premium, seeded at
σ = 0.2. Each pass prices the option at the current guess, measures the gap
to the observed premium and moves σ by ``gap / vega / 100`` (vega being
quoted per 100 volatility points). The loop stops once the gap falls within
``tolerance`` times the premium and returns the guess *after* that last step.

There is no iteration cap unless one is requested. When vega collapses (deep
out of the money, tiny maturity) the step becomes non-finite and the solver
returns a non-finite volatility instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from .exceptions import DidNotConverge
from .pricing import call_price, normalize_option_type, put_price, vega

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverSettings:
    """
    Tuning knobs for :func:`implied_volatility`.

    Attributes
    ----------
    initial_volatility : float, default=0.2
        Starting guess.
    tolerance : float, default=0.02
        Convergence threshold as a fraction of the premium.
    max_iterations : int, optional
        Iteration budget. ``None`` loops until convergence.
    """

    initial_volatility: float = 0.2
    tolerance: float = 0.02
    max_iterations: Optional[int] = None

    def __post_init__(self):
        if self.max_iterations is not None and self.max_iterations < 1:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")


@dataclass(frozen=True)
class SolverStep:
    """One pass of the implied volatility iteration."""

    iteration: int
    volatility: float
    price: float
    vega: float
    error: float
    next_volatility: float


def iterate_implied_volatility(
    option_type: str,
    premium: float,
    future: float,
    strike: float,
    maturity: float,
    rate: float = 0.0,
    initial_volatility: float = 0.2,
) -> Iterator[SolverStep]:
    """
    Yield the solver's iterations without any stopping rule.

    The caller decides when to stop; :func:`implied_volatility` stops on
    ``abs(step.error) <= premium * tolerance``.

    Raises
    ------
    InvalidOptionType
        If ``option_type`` is neither ``"call"`` nor ``"put"``.
    """

    pricer = call_price if normalize_option_type(option_type) == "call" else put_price
    return _steps(pricer, premium, future, strike, maturity, rate, initial_volatility)


def _steps(pricer, premium, future, strike, maturity, rate, initial_volatility):
    vol = float(initial_volatility)
    iteration = 0
    while True:
        iteration += 1
        price = pricer(future, strike, vol, maturity, rate)
        veg = vega(future, strike, vol, maturity, rate)
        err = premium - price
        with np.errstate(divide="ignore", invalid="ignore"):
            next_vol = float(vol + (np.float64(err) / veg) / 100.0)
        yield SolverStep(iteration, vol, price, veg, err, next_vol)
        vol = next_vol


def implied_volatility(
    option_type: str,
    premium: float,
    future: float,
    strike: float,
    maturity: float,
    rate: float = 0.0,
    tolerance: float = 0.02,
    *,
    initial_volatility: float = 0.2,
    max_iterations: Optional[int] = None,
    settings: Optional[SolverSettings] = None,
) -> float:
    """
    Recover the volatility that reproduces an observed premium.

    Parameters
    ----------
    option_type : {"call", "put"}
        Case-insensitive.
    premium : float
        Observed option price.
    future, strike, maturity, rate : float
        Underlying future price, strike, time to expiry in years and annual rate.
    tolerance : float, default=0.02
        Stop once ``|premium - model price| <= premium * tolerance``.
    initial_volatility : float, default=0.2
        Starting guess.
    max_iterations : int, optional
        Iteration budget. Unbounded by default.
    settings : SolverSettings, optional
        Overrides ``tolerance``, ``initial_volatility`` and ``max_iterations``.

    Returns
    -------
    float
        Implied volatility. Non-finite when the iteration blew up.

    Raises
    ------
    InvalidOptionType
        If ``option_type`` is neither ``"call"`` nor ``"put"``.
    DidNotConverge
        If ``max_iterations`` passes complete without meeting the tolerance.

    Examples
    --------
    >>> premium = call_price(300.0, 350.0, 0.2, 0.55, 0.05)
    >>> implied_volatility("CALL", premium, 300.0, 350.0, 0.55, 0.05)
    0.2
    """

    if settings is None:
        settings = SolverSettings(
            initial_volatility=initial_volatility,
            tolerance=tolerance,
            max_iterations=max_iterations,
        )

    threshold = premium * settings.tolerance
    steps = iterate_implied_volatility(
        option_type, premium, future, strike, maturity, rate, settings.initial_volatility
    )
    for step in steps:
        logger.debug(
            "iteration %d: vol=%.8f price=%.4f vega=%.6f error=%.6f",
            step.iteration,
            step.volatility,
            step.price,
            step.vega,
            step.error,
        )
        if not abs(step.error) > threshold:
            break
        if settings.max_iterations is not None and step.iteration >= settings.max_iterations:
            logger.warning(
                "implied volatility exhausted %d iterations (last vol %r)",
                step.iteration,
                step.next_volatility,
            )
            raise DidNotConverge(step.next_volatility, step.iteration)

    result = step.next_volatility
    if not np.isfinite(result):
        logger.warning(
            "implied volatility is not finite after %d iterations for premium %r",
            step.iteration,
            premium,
        )
    return result

