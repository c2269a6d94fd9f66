"""
Bill savings calculation module.
Handles first-year savings and lifetime savings at constant consumption.
"""

import numpy as np
from typing import Dict

from .config import EstimatorConfig
from .energy import EnergyModel


class SavingsModel:
    """Calculates avoided electricity billing."""

    def __init__(self, config: EstimatorConfig):
        self.config = config
        self.energy_model = EnergyModel(config)

    def tariff_factors(self) -> np.ndarray:
        """Tariff escalation per operating year, (1 + g)^(year - 1)."""
        years = np.arange(self.config.system_lifespan)
        return (1.0 + self.config.tariff_increase_rate) ** years

    def calculate_first_year_savings(self, annual_consumption: float, annual_generation: float,
                                     tariff_rate: float) -> float:
        """Year-one savings from self-consumed solar units at the base tariff."""
        units_from_solar = min(annual_generation, annual_consumption)
        return units_from_solar * tariff_rate

    def calculate_total_savings(self, annual_consumption: float, annual_generation: float,
                                tariff_rate: float) -> float:
        """
        Lifetime savings with degrading output and escalating tariff.

        Consumption is held at its year-one value here; the yearly projection
        grows it instead, so the two figures are not expected to reconcile.

        Args:
            annual_consumption: Year-one consumption (kWh)
            annual_generation: Year-one generation (kWh)
            tariff_rate: Base tariff (per kWh)

        Returns:
            Total savings over system_lifespan years
        """
        yearly_generation = self.energy_model.calculate_yearly_generation(annual_generation)
        units_from_solar = np.minimum(yearly_generation, annual_consumption)
        yearly_tariff = tariff_rate * self.tariff_factors()

        return float(np.sum(units_from_solar * yearly_tariff))

    def calculate_savings(self, annual_consumption: float, annual_generation: float,
                          tariff_rate: float) -> Dict[str, float]:
        """
        Calculate all savings figures.

        Returns:
            Dict with first_year_savings, monthly_savings, total_savings
        """
        first_year = self.calculate_first_year_savings(annual_consumption, annual_generation, tariff_rate)

        return {
            'first_year_savings': first_year,
            'monthly_savings': first_year / 12.0,
            'total_savings': self.calculate_total_savings(annual_consumption, annual_generation, tariff_rate),
        }
