"""
Convergence diagnostics for the implied volatility solver.

Provides a tabular trace of the Newton iteration and a matplotlib view of it,
useful for spotting oscillation or blow-up on hard inputs.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

import numpy as np
import pandas as pd

from .implied_vol import iterate_implied_volatility

TRACE_COLUMNS = [
    "iteration",
    "volatility",
    "price",
    "vega",
    "error",
    "relative_error",
    "next_volatility",
    "converged",
]


def solver_trace(
    option_type: str,
    premium: float,
    future: float,
    strike: float,
    maturity: float,
    rate: float = 0.0,
    tolerance: float = 0.02,
    *,
    initial_volatility: float = 0.2,
    max_iterations: Optional[int] = 100,
) -> pd.DataFrame:
    """
    Run the implied volatility iteration and record every pass.

    Unlike :func:`~future_options.implied_vol.implied_volatility`, running out
    of iterations is not an error here: the rows collected so far are returned
    and the ``converged`` column stays ``False``.

    Parameters
    ----------
    option_type : {"call", "put"}
        Case-insensitive.
    premium : float
        Observed option price.
    future, strike, maturity, rate : float
        Contract and market inputs, as for the solver.
    tolerance : float, default=0.02
        Convergence threshold as a fraction of the premium.
    initial_volatility : float, default=0.2
        Starting guess.
    max_iterations : int or None, default=100
        Row limit. ``None`` follows the solver until it stops, which may never
        happen on divergent inputs.

    Returns
    -------
    pandas.DataFrame
        One row per iteration with columns:
        - iteration: 1-based pass number
        - volatility: Guess used for pricing
        - price: Rounded model premium at that guess
        - vega: Vega at that guess (per volatility point)
        - error: ``premium - price``
        - relative_error: ``|error| / premium``
        - next_volatility: Guess after the Newton step
        - converged: Whether this pass met the tolerance

    Examples
    --------
    >>> df = solver_trace("put", 45.0, 300.0, 350.0, 0.55, 0.05)
    >>> df[["iteration", "volatility", "error"]]
    """
    threshold = premium * tolerance
    steps = iterate_implied_volatility(
        option_type, premium, future, strike, maturity, rate, initial_volatility
    )

    rows = []
    for step in steps:
        converged = not abs(step.error) > threshold
        row = asdict(step)
        with np.errstate(divide="ignore", invalid="ignore"):
            row["relative_error"] = float(np.abs(np.float64(step.error)) / premium)
        row["converged"] = converged
        rows.append(row)
        if converged:
            break
        if max_iterations is not None and step.iteration >= max_iterations:
            break

    return pd.DataFrame(rows, columns=TRACE_COLUMNS)


def plot_solver_trace(
    df: pd.DataFrame,
    log_scale: bool = True,
    title: str = "Implied Volatility Solver",
) -> tuple:
    """
    Create diagnostic plots from a solver trace.

    Generates two plots:
    1. Volatility guess vs iteration
    2. Relative pricing error vs iteration (log scale if log_scale=True)

    Parameters
    ----------
    df : pandas.DataFrame
        Results from solver_trace().
    log_scale : bool, default=True
        Use a log scale for the error plot.
    title : str, default="Implied Volatility Solver"
        Title for the plots.

    Returns
    -------
    tuple
        (fig, axes) matplotlib figure and axes objects.

    Notes
    -----
    Requires matplotlib to be installed.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for plotting. Install with: pip install matplotlib"
        )

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    ax1 = axes[0]
    ax1.plot(df["iteration"], df["volatility"], "o-", linewidth=2, markersize=8)
    ax1.set_xlabel("Iteration", fontsize=12)
    ax1.set_ylabel("Volatility", fontsize=12)
    ax1.set_title(f"{title}\nVolatility Path", fontsize=13)
    ax1.grid(True, alpha=0.3)

    ax2 = axes[1]
    # Zero errors cannot be drawn on a log axis.
    errors = df["relative_error"].where(df["relative_error"] > 0, np.nan)
    if log_scale and errors.notna().any():
        ax2.semilogy(df["iteration"], errors, "s-", linewidth=2, markersize=8, color="red")
        ax2.set_ylabel("Relative Error (log scale)", fontsize=12)
    else:
        ax2.plot(df["iteration"], df["relative_error"], "s-", linewidth=2, markersize=8, color="red")
        ax2.set_ylabel("Relative Error", fontsize=12)
    ax2.set_xlabel("Iteration", fontsize=12)
    ax2.set_title(f"{title}\nError Convergence", fontsize=13)
    ax2.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig, axes
