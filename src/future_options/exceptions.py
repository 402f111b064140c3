"""
Exceptions raised by the future_options package.

Numeric degeneracy (zero volatility, zero maturity, non-positive prices) is
never reported through these classes; it surfaces as ``nan`` or ``inf``.
"""

from __future__ import annotations


class FutureOptionsError(Exception):
    """Base class for all errors raised by this package."""


class InvalidOptionType(FutureOptionsError, ValueError):
    """Raised when an option type other than ``"call"`` or ``"put"`` is given."""

    def __init__(self, option_type: object) -> None:
        super().__init__(f"option_type must be either 'call' or 'put', got {option_type!r}.")
        self.option_type = option_type


class DidNotConverge(FutureOptionsError, RuntimeError):
    """
    Raised when the implied volatility solver exhausts its iteration budget.

    Attributes
    ----------
    volatility : float
        Last volatility estimate produced by the solver.
    iterations : int
        Number of completed iterations.
    """

    def __init__(self, volatility: float, iterations: int) -> None:
        super().__init__(
            f"implied volatility did not converge after {iterations} iterations "
            f"(last estimate {volatility!r})."
        )
        self.volatility = volatility
        self.iterations = iterations
