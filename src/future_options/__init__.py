"""
Public API for the future_options package.
"""

import logging

from .distribution import (
    cdf_approximation_error,
    exact_normal_cdf,
    normal_cdf,
    normal_density,
)
from .pricing import (
    OptionType,
    call_price,
    delta_call,
    delta_put,
    gamma,
    normalize_option_type,
    option_greeks,
    option_price,
    put_price,
    theta_call,
    theta_put,
    vega,
)
from .implied_vol import (
    SolverSettings,
    SolverStep,
    implied_volatility,
    iterate_implied_volatility,
)
from .convergence import plot_solver_trace, solver_trace
from .exceptions import DidNotConverge, FutureOptionsError, InvalidOptionType

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Distribution
    "normal_density",
    "normal_cdf",
    "exact_normal_cdf",
    "cdf_approximation_error",
    # Prices and greeks
    "OptionType",
    "call_price",
    "put_price",
    "delta_call",
    "delta_put",
    "gamma",
    "vega",
    "theta_call",
    "theta_put",
    "option_price",
    "option_greeks",
    "normalize_option_type",
    # Implied volatility
    "SolverSettings",
    "SolverStep",
    "implied_volatility",
    "iterate_implied_volatility",
    # Analysis tools
    "solver_trace",
    "plot_solver_trace",
    # Errors
    "FutureOptionsError",
    "InvalidOptionType",
    "DidNotConverge",
]

__version__ = "1.0.0"
