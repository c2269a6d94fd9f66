"""Unit tests for yearly projection and opex modules."""

import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from estimator.config import load_config
from estimator.cashflow import ProjectionModel


class TestProjectionModel(unittest.TestCase):
    """Test yearly projection."""

    def setUp(self):
        """Build a projection for a 2 kW system meeting 3600 kWh."""
        self.config, _ = load_config()
        self.model = ProjectionModel(self.config)
        self.system_size = 2.0
        self.net_cost = 56000.0
        self.df = self.model.build_projection(
            annual_consumption=3600.0,
            annual_generation=3600.0,
            tariff_rate=10.0,
            system_size=self.system_size,
            net_cost=self.net_cost,
        )

    def test_one_row_per_year(self):
        """Years 1..lifespan in order."""
        self.assertEqual(len(self.df), 25)
        self.assertEqual(self.df['year'].tolist(), list(range(1, 26)))

    def test_first_year(self):
        """Year one uses base tariff, consumption, and undecayed output."""
        first = self.df.iloc[0]

        self.assertAlmostEqual(first['generation_kwh'], 3600.0)
        self.assertAlmostEqual(first['bill_without_solar'], 36000.0)
        self.assertAlmostEqual(first['bill_with_solar'], 0.0)
        self.assertAlmostEqual(first['om_expense'], 1000.0)
        self.assertAlmostEqual(first['yearly_savings'], 35000.0)
        self.assertAlmostEqual(first['cumulative_cash_flow'], -56000.0 + 35000.0)

    def test_consumption_and_tariff_compound(self):
        """Year two grows consumption 2% and tariff 5%; output decays 0.5%."""
        second = self.df.iloc[1]

        self.assertAlmostEqual(second['consumption_kwh'], 3672.0)
        self.assertAlmostEqual(second['tariff'], 10.5)
        self.assertAlmostEqual(second['generation_kwh'], 3582.0)
        self.assertAlmostEqual(second['units_from_grid'], 90.0)
        self.assertAlmostEqual(second['bill_with_solar'], 945.0)
        self.assertAlmostEqual(second['bill_without_solar'], 3672.0 * 10.5)

    def test_inverter_replacement_year(self):
        """Inverter cost is charged once, in year 10."""
        replacement = self.df['inverter_replacement']

        self.assertAlmostEqual(replacement.sum(), self.system_size * 8000.0)
        self.assertAlmostEqual(self.df.loc[self.df['year'] == 10, 'inverter_replacement'].iloc[0], 16000.0)
        self.assertAlmostEqual(self.df.loc[self.df['year'] == 10, 'total_opex'].iloc[0], 17000.0)
        self.assertAlmostEqual(self.df.loc[self.df['year'] == 11, 'total_opex'].iloc[0], 1000.0)

    def test_cumulative_cash_flow(self):
        """Cumulative cash flow starts at minus net cost and accumulates."""
        expected = -self.net_cost
        for savings, cumulative in zip(self.df['yearly_savings'], self.df['cumulative_cash_flow']):
            expected += savings
            self.assertAlmostEqual(cumulative, expected, places=6)

    def test_bills_non_negative(self):
        """Bills and generation never go negative."""
        for col in ['generation_kwh', 'bill_without_solar', 'bill_with_solar', 'units_from_grid']:
            self.assertTrue((self.df[col] >= 0).all(), col)

    def test_format_output_columns(self):
        """Projection entry columns."""
        out = self.model.format_output(self.df)
        self.assertEqual(
            list(out.columns),
            ['year', 'generation_kwh', 'bill_without_solar', 'bill_with_solar',
             'yearly_savings', 'cumulative_cash_flow'],
        )

    def test_replacement_after_lifespan_never_charged(self):
        """A replacement year beyond the system life adds nothing."""
        config, _ = load_config({'system_lifespan': 8})
        df = ProjectionModel(config).build_projection(3600.0, 3600.0, 10.0, 2.0, 50000.0)

        self.assertEqual(len(df), 8)
        self.assertEqual(df['inverter_replacement'].sum(), 0.0)


if __name__ == '__main__':
    unittest.main()
