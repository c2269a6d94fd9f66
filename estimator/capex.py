"""
Capital expenditure calculation module.
Handles system cost breakdown, subsidy tiers, and net cost.
"""

import logging
from typing import Dict, Tuple

from .config import EstimatorConfig

logger = logging.getLogger(__name__)


class CapExModel:
    """Calculates installed cost and subsidy."""

    def __init__(self, config: EstimatorConfig):
        self.config = config
        self.subsidy_rates = config.subsidy_rates

    def calculate_system_cost(self, system_size: float) -> Tuple[float, Dict[str, float]]:
        """
        Calculate installed system cost.

        Returns:
            (total_cost, breakdown_dict)
        """
        breakdown = {
            'panels': system_size * self.config.cost_per_kw,
            'inverter': system_size * self.config.inverter_cost_per_kw,
        }

        return sum(breakdown.values()), breakdown

    def get_subsidy_tier(self, system_size: float) -> str:
        """Residential bracket for a system size."""
        if system_size <= 2:
            return '1-2'
        elif system_size <= 3:
            return '2-3'
        else:
            return '3+'

    def calculate_subsidy(self, system_size: float, property_type: str,
                          eligible_for_subsidy: bool) -> float:
        """
        Calculate the flat subsidy amount.

        Only eligible residential installations receive one; commercial is always 0.
        """
        if property_type != 'residential' or not eligible_for_subsidy:
            return 0.0

        tier = self.get_subsidy_tier(system_size)
        subsidy = self.subsidy_rates['residential'][tier]
        logger.debug("Subsidy tier %s for %.2f kW: %.2f", tier, system_size, subsidy)

        return subsidy

    def calculate_net_cost(self, system_cost: float, subsidy: float) -> float:
        """Cost after subsidy; not clamped, may go below zero."""
        return system_cost - subsidy
