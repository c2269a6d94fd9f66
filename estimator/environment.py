"""
Environmental impact calculation module.
Converts generation into avoided CO2, tree equivalents, and coal.
"""

from typing import Dict

from .config import EstimatorConfig

COAL_KG_PER_KWH = 0.6


class EnvironmentModel:
    """Calculates emissions avoided by solar generation."""

    def __init__(self, config: EstimatorConfig):
        self.config = config

    def calculate_impact(self, annual_generation: float) -> Dict[str, float]:
        """
        Calculate avoided emissions.

        Args:
            annual_generation: Year-one generation (kWh)

        Returns:
            Dict with co2_saved_annually and co2_saved_lifetime (tonnes),
            trees_equivalent, coal_saved_kg
        """
        co2_saved_annually = annual_generation * self.config.co2_per_kwh / 1000.0
        co2_saved_lifetime = co2_saved_annually * self.config.system_lifespan

        return {
            'co2_saved_annually': co2_saved_annually,
            'co2_saved_lifetime': co2_saved_lifetime,
            'trees_equivalent': co2_saved_lifetime * self.config.trees_per_ton_co2,
            'coal_saved_kg': annual_generation * COAL_KG_PER_KWH,
        }
