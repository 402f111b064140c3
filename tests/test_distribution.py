import math
import unittest

import numpy as np
import numpy.testing as npt
from scipy.special import ndtr

from future_options import (
    cdf_approximation_error,
    exact_normal_cdf,
    normal_cdf,
    normal_density,
)


class DistributionTests(unittest.TestCase):
    def test_normal_density_matches_reference_values(self) -> None:
        result = np.array([normal_density(x) for x in (-1.0, 0.0, 1.0)])
        reference = np.array(
            [0.24197072451914337, 0.3989422804014327, 0.24197072451914337],
            dtype=np.float64,
        )
        npt.assert_allclose(result, reference, rtol=0.0, atol=1e-12)

    def test_normal_density_is_even(self) -> None:
        for x in np.linspace(-6.0, 6.0, 49):
            self.assertEqual(normal_density(x), normal_density(-x))

    def test_normal_cdf_at_zero_is_one_half(self) -> None:
        self.assertAlmostEqual(normal_cdf(0.0), 0.5, delta=1e-6)

    def test_normal_cdf_tracks_exact_cdf(self) -> None:
        x = np.linspace(-8.0, 8.0, 321)
        approx = np.array([normal_cdf(v) for v in x])
        npt.assert_allclose(approx, ndtr(x), rtol=0.0, atol=1e-6)

    def test_normal_cdf_is_symmetric_away_from_zero(self) -> None:
        # At exactly zero both halves return the same tail estimate.
        for x in np.linspace(0.05, 6.0, 40):
            self.assertAlmostEqual(normal_cdf(x) + normal_cdf(-x), 1.0, places=12)

    def test_normal_cdf_keeps_published_coefficients(self) -> None:
        # Zelen & Severo value at x = 1, which differs from ndtr in the 7th digit.
        t = 1.0 / (1.0 + 0.2316419)
        poly = 0.3193815 + t * (-0.3565638 + t * (1.781478 + t * (-1.821256 + t * 1.330274)))
        expected = 1.0 - math.exp(-0.5) / math.sqrt(2.0 * math.pi) * t * poly
        self.assertAlmostEqual(normal_cdf(1.0), expected, places=12)

    def test_normal_cdf_limits(self) -> None:
        self.assertEqual(normal_cdf(math.inf), 1.0)
        self.assertEqual(normal_cdf(-math.inf), 0.0)
        self.assertTrue(math.isnan(normal_cdf(math.nan)))

    def test_normal_cdf_returns_plain_float(self) -> None:
        self.assertIsInstance(normal_cdf(np.float64(0.3)), float)
        self.assertIsInstance(normal_density(1), float)

    def test_exact_normal_cdf_matches_reference_values(self) -> None:
        result = exact_normal_cdf([-1.0, 0.0, 1.0])
        reference = np.array([0.15865525393145707, 0.5, 0.8413447460685429])
        npt.assert_allclose(result, reference, rtol=0.0, atol=1e-12)

    def test_cdf_approximation_error_is_small_and_shaped(self) -> None:
        x = np.linspace(-5.0, 5.0, 21).reshape(3, 7)
        errors = cdf_approximation_error(x)
        self.assertEqual(errors.shape, (3, 7))
        self.assertTrue(np.all(errors >= 0.0))
        self.assertLess(float(errors.max()), 1e-6)


if __name__ == "__main__":
    unittest.main()
