"""
Energy production calculation module.
Handles irradiation lookup, system sizing, rooftop space, and degradation.
"""

import logging
import numpy as np
from typing import Optional, Tuple

from .config import EstimatorConfig

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365
SQ_FT_TO_SQ_M = 0.092903


class EnergyModel:
    """Sizes the system and calculates its yearly energy production."""

    def __init__(self, config: EstimatorConfig):
        self.config = config
        self.irradiation_table = config.solar_irradiation
        self.performance_ratio = config.performance_ratio

    def get_irradiation(self, state: str) -> float:
        """Irradiation for a region, falling back to the 'default' entry."""
        if state in self.irradiation_table:
            return self.irradiation_table[state]

        logger.debug("Region %r not in irradiation table, using default", state)
        return self.irradiation_table['default']

    def daily_generation_per_kw(self, irradiation: float) -> float:
        return irradiation * self.performance_ratio

    def calculate_system_size(self, annual_consumption: float, irradiation: float) -> float:
        """
        Size (kW) whose expected daily output matches average daily consumption.

        Args:
            annual_consumption: Annual consumption (kWh)
            irradiation: Daily irradiation (kWh/kWp/day)

        Returns:
            Required system size in kW
        """
        daily_consumption = annual_consumption / DAYS_PER_YEAR
        return daily_consumption / self.daily_generation_per_kw(irradiation)

    def calculate_space_required(self, system_size: float) -> Tuple[float, float]:
        """Rooftop space as (sq ft, sq m)."""
        space_sq_ft = system_size * self.config.space_per_kw
        return space_sq_ft, space_sq_ft * SQ_FT_TO_SQ_M

    def calculate_max_system_size(self, rooftop_area: float) -> Optional[float]:
        """Largest size the roof can hold, or None when unconstrained."""
        if rooftop_area > 0:
            return rooftop_area / self.config.space_per_kw
        return None

    def recommend_system_size(self, size_required: float, rooftop_area: float) -> float:
        """Required size, capped by the available rooftop area."""
        max_size = self.calculate_max_system_size(rooftop_area)

        if max_size is None:
            return size_required

        if max_size < size_required:
            logger.debug("Rooftop limits system to %.2f kW (%.2f kW required)", max_size, size_required)

        return min(size_required, max_size)

    def calculate_annual_generation(self, system_size: float, irradiation: float) -> float:
        """Year-one generation (kWh) before degradation."""
        return system_size * self.daily_generation_per_kw(irradiation) * DAYS_PER_YEAR

    def degradation_factors(self) -> np.ndarray:
        """Output factor per operating year, (1 - d)^(year - 1)."""
        years = np.arange(self.config.system_lifespan)
        return (1.0 - self.config.system_degradation) ** years

    def calculate_yearly_generation(self, annual_generation: float) -> np.ndarray:
        """
        Generation for each year of system life.

        Args:
            annual_generation: Year-one generation (kWh)

        Returns:
            Array of length system_lifespan, year 1 first
        """
        return annual_generation * self.degradation_factors()
