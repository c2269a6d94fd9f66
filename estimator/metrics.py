"""
Financial metrics calculation module.
Calculates payback, ROI, NPV, and IRR for the estimate.
"""

import logging
import math
import numpy as np
import pandas as pd
from typing import Dict, Any, Optional, Sequence
from scipy.optimize import brentq, newton

from .config import EstimatorConfig

logger = logging.getLogger(__name__)

# Rates searched when bracketing the IRR root
IRR_LOWER_BOUND = -0.99
IRR_UPPER_BOUND = 10.0


class MetricsCalculator:
    """Calculates financial metrics from savings and the yearly projection."""

    def __init__(self, config: EstimatorConfig):
        self.config = config
        self.discount_rate = config.discount_rate
        self.lifespan = config.system_lifespan

    def calculate_payback(self, net_cost: float, first_year_savings: float) -> int:
        """
        Calculate simple payback period (whole years).

        Savings escalate with the tariff but are not degraded. The result is
        capped at the system lifespan when the cost is never recovered.

        Args:
            net_cost: Net system cost
            first_year_savings: Year-one savings

        Returns:
            Payback period in years, 0..system_lifespan
        """
        growth = 1 + self.config.tariff_increase_rate
        cumulative = 0.0
        current_savings = first_year_savings
        year = 0

        while cumulative < net_cost and year < self.lifespan:
            year += 1
            cumulative += current_savings
            current_savings *= growth

        return year

    def calculate_roi(self, total_savings: float, net_cost: float) -> Optional[float]:
        """Lifetime savings as a percentage of net cost; None if cost <= 0."""
        if net_cost <= 0:
            return None
        return total_savings / net_cost * 100.0

    def calculate_npv(self, cashflows: Sequence[float], rate: float) -> float:
        """
        Calculate NPV of yearly cashflows.

        Args:
            cashflows: Year 0 first (the outlay), then years 1..N
            rate: Discount rate (decimal)

        Returns:
            NPV
        """
        return sum(cf / (1 + rate) ** year for year, cf in enumerate(cashflows))

    def calculate_irr(self, cashflows: Sequence[float]) -> Optional[float]:
        """
        Calculate IRR of yearly cashflows.

        The root is bracketed on [IRR_LOWER_BOUND, IRR_UPPER_BOUND] and found
        with brentq, so negative IRRs are reported too. Newton from 10% is
        only tried when the bracket shows no sign change.

        Returns:
            IRR as decimal (e.g., 0.12 for 12%), or None if no root is found
        """
        cashflows = [float(cf) for cf in cashflows]

        if cashflows[0] >= 0 or all(cf <= 0 for cf in cashflows[1:]):
            return None

        def npv(rate):
            return self.calculate_npv(cashflows, rate)

        try:
            bracketed = npv(IRR_LOWER_BOUND) * npv(IRR_UPPER_BOUND) < 0
        except (OverflowError, ZeroDivisionError):
            bracketed = False
        if bracketed:
            return float(brentq(npv, IRR_LOWER_BOUND, IRR_UPPER_BOUND, maxiter=200))

        try:
            with np.errstate(over='ignore', divide='ignore', invalid='ignore'):
                irr = float(newton(npv, 0.1, maxiter=100))
        except (RuntimeError, OverflowError, ZeroDivisionError) as e:
            logger.debug("IRR search did not converge: %s", e)
            return None

        if not math.isfinite(irr) or irr <= -1:
            logger.debug("IRR search gave an unusable rate: %s", irr)
            return None
        return irr

    def project_cashflows(self, projection_df: pd.DataFrame, net_cost: float):
        """Outlay followed by each year's net savings."""
        return [-net_cost] + projection_df['yearly_savings'].tolist()

    def calculate_all_metrics(self, projection_df: pd.DataFrame, net_cost: float,
                              first_year_savings: float, total_savings: float) -> Dict[str, Any]:
        """
        Calculate all financial metrics.

        Args:
            projection_df: Yearly projection from ProjectionModel
            net_cost: Net system cost
            first_year_savings: Year-one savings
            total_savings: Lifetime savings at constant consumption

        Returns:
            Dictionary of all metrics
        """
        metrics = {}

        metrics['payback_years'] = self.calculate_payback(net_cost, first_year_savings)
        metrics['roi_pct'] = self.calculate_roi(total_savings, net_cost)

        cashflows = self.project_cashflows(projection_df, net_cost)
        metrics['npv'] = self.calculate_npv(cashflows, self.discount_rate)

        if net_cost > 0:
            metrics['project_irr'] = self.calculate_irr(cashflows)
        else:
            metrics['project_irr'] = None

        metrics['lifetime_generation_kwh'] = float(projection_df['generation_kwh'].sum())

        return metrics
