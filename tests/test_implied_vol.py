import logging
import math
import unittest

import pytest

from future_options import (
    DidNotConverge,
    InvalidOptionType,
    SolverSettings,
    SolverStep,
    call_price,
    implied_volatility,
    iterate_implied_volatility,
    option_price,
    put_price,
)

F, K, T, R = 300.0, 350.0, 0.55, 0.05


class ImpliedVolatilityTests(unittest.TestCase):
    def test_seed_volatility_is_recovered_exactly(self) -> None:
        premium = call_price(F, K, 0.2, T, R)
        self.assertEqual(implied_volatility("CALL", premium, F, K, T, R), 0.2)

    def test_out_of_the_money_call_round_trip(self) -> None:
        premium = call_price(F, K, 0.4, T, R)
        iv = implied_volatility("call", premium, F, K, T, R)
        self.assertLessEqual(abs(call_price(F, K, iv, T, R) - premium), premium * 0.02 + 0.05)
        self.assertAlmostEqual(iv, 0.4, delta=0.02)

    def test_unknown_type_raises(self) -> None:
        with self.assertRaises(InvalidOptionType):
            implied_volatility("STRADDLE", 10.0, F, K, T, R)
        with self.assertRaises(ValueError):
            iterate_implied_volatility("strangle", 10.0, F, K, T, R)

    def test_iteration_budget_raises_did_not_converge(self) -> None:
        premium = call_price(F, K, 0.4, T, R)
        with self.assertRaises(DidNotConverge) as ctx:
            implied_volatility("call", premium, F, K, T, R, max_iterations=1)
        self.assertEqual(ctx.exception.iterations, 1)
        self.assertTrue(math.isfinite(ctx.exception.volatility))
        self.assertGreater(ctx.exception.volatility, 0.2)
        self.assertIsInstance(ctx.exception, RuntimeError)

    def test_generous_budget_matches_unbounded_solver(self) -> None:
        premium = call_price(F, K, 0.4, T, R)
        unbounded = implied_volatility("call", premium, F, K, T, R)
        bounded = implied_volatility("call", premium, F, K, T, R, max_iterations=500)
        self.assertEqual(unbounded, bounded)

    def test_settings_override_keyword_arguments(self) -> None:
        premium = put_price(F, K, 0.3, T, R)
        settings = SolverSettings(tolerance=0.005, max_iterations=200)
        via_settings = implied_volatility("put", premium, F, K, T, R, settings=settings)
        via_kwargs = implied_volatility(
            "put", premium, F, K, T, R, tolerance=0.005, max_iterations=200
        )
        self.assertEqual(via_settings, via_kwargs)

    def test_settings_reject_non_positive_budget(self) -> None:
        with self.assertRaises(ValueError):
            SolverSettings(max_iterations=0)

    def test_zero_vega_returns_non_finite_volatility(self) -> None:
        # At expiry the out-of-the-money call is worth nothing and vega is zero.
        with self.assertLogs("future_options.implied_vol", level=logging.WARNING):
            iv = implied_volatility("call", 5.0, F, K, 0.0, R)
        self.assertTrue(math.isnan(iv))

    def test_iterations_expose_newton_step(self) -> None:
        premium = call_price(F, K, 0.4, T, R)
        steps = iterate_implied_volatility("call", premium, F, K, T, R)
        first = next(steps)
        second = next(steps)
        self.assertIsInstance(first, SolverStep)
        self.assertEqual(first.iteration, 1)
        self.assertEqual(first.volatility, 0.2)
        self.assertEqual(first.price, call_price(F, K, 0.2, T, R))
        self.assertAlmostEqual(
            first.next_volatility, 0.2 + first.error / first.vega / 100.0, places=12
        )
        self.assertEqual(second.volatility, first.next_volatility)


@pytest.mark.parametrize("option_type", ["call", "put"])
@pytest.mark.parametrize("vol", [0.15, 0.3, 0.5])
def test_at_the_money_round_trip(option_type, vol):
    future, strike, maturity, rate = 100.0, 100.0, 1.0, 0.03
    premium = option_price(option_type, future, strike, vol, maturity, rate)

    iv = implied_volatility(option_type, premium, future, strike, maturity, rate)

    repriced = option_price(option_type, future, strike, iv, maturity, rate)
    assert abs(repriced - premium) <= premium * 0.02 + 0.05
    assert iv == pytest.approx(vol, abs=0.02)


@pytest.mark.parametrize("vol", [0.25, 0.35])
def test_in_the_money_put_round_trip(vol):
    premium = put_price(F, K, vol, T, R)

    iv = implied_volatility("PUT", premium, F, K, T, R)

    assert abs(put_price(F, K, iv, T, R) - premium) <= premium * 0.02 + 0.05
