"""Unit tests for savings module."""

import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from estimator.config import load_config
from estimator.savings import SavingsModel


class TestSavingsModel(unittest.TestCase):
    """Test savings calculations."""

    def setUp(self):
        """Set up default configuration."""
        self.config, _ = load_config()
        self.savings_model = SavingsModel(self.config)

    def test_first_year_savings_capped_by_consumption(self):
        """Only self-consumed units are saved."""
        # Generation below consumption
        self.assertAlmostEqual(self.savings_model.calculate_first_year_savings(3600, 2000, 10.0), 20000.0)
        # Generation above consumption
        self.assertAlmostEqual(self.savings_model.calculate_first_year_savings(3600, 5000, 10.0), 36000.0)

    def test_monthly_savings(self):
        """Monthly savings are a twelfth of year one."""
        savings = self.savings_model.calculate_savings(3600, 2400, 10.0)

        self.assertAlmostEqual(savings['first_year_savings'], 24000.0)
        self.assertAlmostEqual(savings['monthly_savings'], 2000.0)

    def test_total_savings_matches_year_by_year_sum(self):
        """Lifetime total degrades output, escalates tariff, fixes consumption."""
        consumption = 3600.0
        generation = 3600.0
        tariff = 10.0

        expected = 0.0
        current_tariff = tariff
        for year in range(1, 26):
            yearly_generation = generation * (1 - 0.005) ** (year - 1)
            expected += min(yearly_generation, consumption) * current_tariff
            current_tariff *= 1.05

        total = self.savings_model.calculate_total_savings(consumption, generation, tariff)
        self.assertAlmostEqual(total, expected, places=4)

    def test_total_savings_oversized_system(self):
        """When generation always exceeds consumption, savings follow the tariff only."""
        total = self.savings_model.calculate_total_savings(1000.0, 5000.0, 8.0)

        expected = sum(1000.0 * 8.0 * 1.05 ** (year - 1) for year in range(1, 26))
        self.assertAlmostEqual(total, expected, places=4)

    def test_zero_tariff(self):
        """Zero tariff yields zero savings."""
        savings = self.savings_model.calculate_savings(3600, 3600, 0.0)

        self.assertEqual(savings['first_year_savings'], 0.0)
        self.assertEqual(savings['total_savings'], 0.0)


if __name__ == '__main__':
    unittest.main()
