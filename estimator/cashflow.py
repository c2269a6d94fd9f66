"""
Yearly projection module.
Builds the year-by-year bill, savings, and cumulative cash flow table.
"""

import numpy as np
import pandas as pd

from .config import EstimatorConfig
from .energy import EnergyModel
from .opex import OpExModel


class ProjectionModel:
    """Projects bills and cash flow over the system life."""

    def __init__(self, config: EstimatorConfig):
        self.config = config
        self.energy_model = EnergyModel(config)

    def build_projection(self, annual_consumption: float, annual_generation: float,
                         tariff_rate: float, system_size: float, net_cost: float) -> pd.DataFrame:
        """
        Build the yearly projection.

        Consumption and tariff both compound yearly from their year-one
        values; generation degrades from the recommended size's output.

        Args:
            annual_consumption: Year-one consumption (kWh)
            annual_generation: Year-one generation (kWh)
            tariff_rate: Year-one tariff (per kWh)
            system_size: Recommended system size (kW)
            net_cost: Net system cost, the opening cash outlay

        Returns:
            DataFrame with one row per year, year 1 first
        """
        lifespan = self.config.system_lifespan
        years = np.arange(1, lifespan + 1)

        df = pd.DataFrame({
            'year': years,
            'generation_kwh': self.energy_model.calculate_yearly_generation(annual_generation),
            'consumption_kwh': annual_consumption * (1 + self.config.consumption_increase_rate) ** (years - 1),
            'tariff': tariff_rate * (1 + self.config.tariff_increase_rate) ** (years - 1),
        })

        df['units_from_solar'] = np.minimum(df['generation_kwh'], df['consumption_kwh'])
        df['units_from_grid'] = df['consumption_kwh'] - df['units_from_solar']
        df['bill_without_solar'] = df['consumption_kwh'] * df['tariff']
        df['bill_with_solar'] = df['units_from_grid'] * df['tariff']

        df = OpExModel(self.config, system_size).calculate_total_opex(df)

        df['yearly_savings'] = df['bill_without_solar'] - df['bill_with_solar'] - df['total_opex']
        df['cumulative_cash_flow'] = -net_cost + df['yearly_savings'].cumsum()

        return df

    def format_output(self, df: pd.DataFrame) -> pd.DataFrame:
        """Columns reported per projection entry, in output order."""
        columns_order = [
            'year', 'generation_kwh', 'bill_without_solar', 'bill_with_solar',
            'yearly_savings', 'cumulative_cash_flow',
        ]
        return df[columns_order]
