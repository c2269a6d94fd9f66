"""
Operating expenditure calculation module.
Handles yearly O&M and the scheduled inverter replacement.
"""

import pandas as pd

from .config import EstimatorConfig


class OpExModel:
    """Calculates yearly operating expenses."""

    def __init__(self, config: EstimatorConfig, system_size: float):
        self.config = config
        self.system_size = system_size

    def calculate_yearly_om(self, projection_df: pd.DataFrame) -> pd.DataFrame:
        """
        Calculate fixed O&M (per kW-year).

        Args:
            projection_df: DataFrame with a 'year' column

        Returns:
            Updated DataFrame with om_expense column
        """
        projection_df['om_expense'] = self.system_size * self.config.om_cost_per_kw
        return projection_df

    def calculate_inverter_replacements(self, projection_df: pd.DataFrame) -> pd.DataFrame:
        """One inverter replacement, charged in the configured year only."""
        replacement_cost = self.system_size * self.config.inverter_cost_per_kw
        is_replacement_year = projection_df['year'] == self.config.inverter_replacement_year

        projection_df['inverter_replacement'] = is_replacement_year.astype(float) * replacement_cost
        return projection_df

    def calculate_total_opex(self, projection_df: pd.DataFrame) -> pd.DataFrame:
        """
        Calculate total operating expenses.

        Args:
            projection_df: DataFrame with year column

        Returns:
            Updated DataFrame with total_opex column
        """
        projection_df = self.calculate_yearly_om(projection_df)
        projection_df = self.calculate_inverter_replacements(projection_df)

        opex_columns = ['om_expense', 'inverter_replacement']
        projection_df['total_opex'] = projection_df[opex_columns].sum(axis=1)

        return projection_df
