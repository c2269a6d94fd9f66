"""Unit tests for metrics module."""

import unittest
import sys
import os
import warnings
import pandas as pd

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from estimator.config import load_config
from estimator.metrics import MetricsCalculator


class TestMetricsCalculator(unittest.TestCase):
    """Test financial metrics calculations."""

    def setUp(self):
        """Set up default configuration."""
        self.config, _ = load_config()
        self.calc = MetricsCalculator(self.config)

    def test_payback_calculation(self):
        """Payback counts whole years of tariff-escalated savings."""
        # 36000 in year 1, 37800 in year 2
        self.assertEqual(self.calc.calculate_payback(65000.0, 36000.0), 2)
        self.assertEqual(self.calc.calculate_payback(36000.0, 36000.0), 1)
        self.assertEqual(self.calc.calculate_payback(36000.01, 36000.0), 2)

    def test_payback_zero_or_negative_cost(self):
        """Nothing to recover pays back immediately."""
        self.assertEqual(self.calc.calculate_payback(0.0, 1000.0), 0)
        self.assertEqual(self.calc.calculate_payback(-5000.0, 1000.0), 0)

    def test_payback_capped_at_lifespan(self):
        """Cost never recovered reports the lifespan."""
        self.assertEqual(self.calc.calculate_payback(1e9, 100.0), 25)
        self.assertEqual(self.calc.calculate_payback(1000.0, 0.0), 25)

    def test_payback_monotonic_in_cost(self):
        """Higher cost never shortens payback; result stays in [0, 25]."""
        costs = [-1000, 0, 10000, 50000, 100000, 250000, 500000, 1e6, 1e7]
        paybacks = [self.calc.calculate_payback(c, 12000.0) for c in costs]

        for i in range(1, len(paybacks)):
            self.assertGreaterEqual(paybacks[i], paybacks[i-1])
        for p in paybacks:
            self.assertIsInstance(p, int)
            self.assertGreaterEqual(p, 0)
            self.assertLessEqual(p, 25)

    def test_roi(self):
        """ROI is savings over cost; not computable without a cost."""
        self.assertAlmostEqual(self.calc.calculate_roi(300000.0, 100000.0), 300.0)
        self.assertIsNone(self.calc.calculate_roi(300000.0, 0.0))
        self.assertIsNone(self.calc.calculate_roi(300000.0, -10.0))

    def test_npv_simple_case(self):
        """Test NPV calculation."""
        npv = self.calc.calculate_npv([-1000, 1100], 0.10)

        # NPV at 10% discount = -1000 + 1100/1.1 = $0
        self.assertAlmostEqual(npv, 0.0, places=8)

    def test_irr_simple_case(self):
        """Invest 1000, get back 1200 after 1 year."""
        irr = self.calc.calculate_irr([-1000, 1200])

        self.assertAlmostEqual(irr, 0.20, places=6)

    def test_irr_not_computable(self):
        """No outlay or no inflows gives None."""
        self.assertIsNone(self.calc.calculate_irr([1000, 500, 500]))
        self.assertIsNone(self.calc.calculate_irr([-1000, 0, -50]))

    def test_irr_negative_when_savings_never_recover_cost(self):
        """Inflows below the outlay give a negative IRR, not None."""
        cashflows = [-1000.0] + [30.0] * 25

        with warnings.catch_warnings():
            warnings.simplefilter("error", RuntimeWarning)
            irr = self.calc.calculate_irr(cashflows)

        self.assertIsNotNone(irr)
        self.assertLess(irr, 0)
        self.assertGreater(irr, -0.99)
        self.assertAlmostEqual(self.calc.calculate_npv(cashflows, irr), 0.0, places=4)

    def test_all_metrics(self):
        """Metrics from a projection table."""
        projection_df = pd.DataFrame({
            'year': range(1, 26),
            'generation_kwh': [1000.0] * 25,
            'yearly_savings': [10000.0] * 25,
        })

        metrics = self.calc.calculate_all_metrics(projection_df, 50000.0, 10000.0, 400000.0)

        self.assertEqual(metrics['payback_years'], 5)
        self.assertAlmostEqual(metrics['roi_pct'], 800.0)
        self.assertAlmostEqual(metrics['lifetime_generation_kwh'], 25000.0)
        self.assertGreater(metrics['npv'], 0)
        self.assertGreater(metrics['project_irr'], 0.15)
        self.assertLess(metrics['project_irr'], 0.25)

    def test_all_metrics_without_cost(self):
        """Negative net cost leaves IRR and ROI undefined."""
        projection_df = pd.DataFrame({
            'year': range(1, 26),
            'generation_kwh': [1000.0] * 25,
            'yearly_savings': [10000.0] * 25,
        })

        metrics = self.calc.calculate_all_metrics(projection_df, -500.0, 10000.0, 400000.0)

        self.assertEqual(metrics['payback_years'], 0)
        self.assertIsNone(metrics['roi_pct'])
        self.assertIsNone(metrics['project_irr'])


if __name__ == '__main__':
    unittest.main()
