#!/usr/bin/env python3
"""
Futures Option Example
======================

This script demonstrates the basic functionality of the future_options package
by pricing an option on a future, computing its greeks and recovering the
implied volatility from the premium.

To run this example:
    python examples/futures_option_example.py

With custom parameters:
    python examples/futures_option_example.py --future 300 --strike 350 --expiry 0.55 \
        --rate 0.05 --volatility 0.2 --premium 4.10

The script will:
1. Price a European call and put on the future
2. Compute and display the greeks of both
3. Recover the implied volatility of the observed (or model) premium
4. Plot the solver's convergence path
"""

import argparse
import logging

import matplotlib.pyplot as plt

from future_options import (
    call_price,
    implied_volatility,
    option_greeks,
    plot_solver_trace,
    put_price,
    solver_trace,
)


def parse_args():
    parser = argparse.ArgumentParser(
        description="Pricing and implied volatility example for the future_options package.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--future", type=float, default=300.0, help="Underlying future price")
    parser.add_argument("--strike", type=float, default=350.0, help="Strike price")
    parser.add_argument("--expiry", type=float, default=0.55, help="Time to expiry in years")
    parser.add_argument("--rate", type=float, default=0.05, help="Annual risk-free rate")
    parser.add_argument("--volatility", type=float, default=0.2, help="Annualized volatility")
    parser.add_argument("--days", type=int, default=365, help="Days per year for theta")
    parser.add_argument("--option-type", default="call", choices=["call", "put"], help="Option to invert")
    parser.add_argument("--premium", type=float, default=None, help="Observed premium (defaults to the model price)")
    parser.add_argument("--tolerance", type=float, default=0.02, help="Solver tolerance as a fraction of the premium")
    parser.add_argument("--max-iterations", type=int, default=100, help="Solver iteration budget")
    parser.add_argument("--output", type=str, default="examples/solver_trace.png", help="Output file for the trace plot")
    parser.add_argument("--no-plot", action="store_true", help="Skip displaying the plot (still saves to file)")
    parser.add_argument("--verbose", action="store_true", help="Log every solver iteration")
    return parser.parse_args()


def main():
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    future = args.future
    strike = args.strike
    expiry = args.expiry
    rate = args.rate
    volatility = args.volatility

    # ==========================================================================
    # Part 1: Pricing
    # ==========================================================================
    print("=" * 60)
    print("Futures Option Pricing")
    print("=" * 60)

    call = call_price(future, strike, volatility, expiry, rate)
    put = put_price(future, strike, volatility, expiry, rate)

    print(f"Future:     {future:.2f}")
    print(f"Strike:     {strike:.2f}")
    print(f"Expiry:     {expiry:.2f} years")
    print(f"Rate:       {rate:.2%}")
    print(f"Volatility: {volatility:.2%}")
    print()
    print(f"Call Price: {call:.2f}")
    print(f"Put Price:  {put:.2f}")

    # ==========================================================================
    # Part 2: Greeks
    # ==========================================================================
    for option_type in ("call", "put"):
        print()
        print("=" * 60)
        print(f"Greeks ({option_type.capitalize()} Option)")
        print("=" * 60)

        delta, gamma, vega, theta = option_greeks(
            option_type, future, strike, volatility, expiry, rate, days_per_year=args.days
        )
        print(f"Delta: {delta:+.4f}  (sensitivity to the future)")
        print(f"Gamma: {gamma:+.4f}  (sensitivity of delta to the future)")
        print(f"Vega:  {vega:+.4f}  (per volatility point)")
        print(f"Theta: {theta:+.4f}  (time decay per day)")

    # ==========================================================================
    # Part 3: Implied Volatility
    # ==========================================================================
    premium = args.premium
    if premium is None:
        premium = call if args.option_type == "call" else put

    print()
    print("=" * 60)
    print("Implied Volatility")
    print("=" * 60)

    iv = implied_volatility(
        args.option_type,
        premium,
        future,
        strike,
        expiry,
        rate,
        args.tolerance,
        max_iterations=args.max_iterations,
    )
    print(f"Premium:            {premium:.2f}")
    print(f"Implied Volatility: {iv:.4%}")

    # ==========================================================================
    # Part 4: Visualization
    # ==========================================================================
    df = solver_trace(
        args.option_type,
        premium,
        future,
        strike,
        expiry,
        rate,
        args.tolerance,
        max_iterations=args.max_iterations,
    )
    print()
    print(df.to_string(index=False))

    fig, _ = plot_solver_trace(df)
    fig.savefig(args.output, dpi=150)
    print()
    print(f"Trace plot saved to: {args.output}")

    if not args.no_plot:
        plt.show()


if __name__ == "__main__":
    main()
