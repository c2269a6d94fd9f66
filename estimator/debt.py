"""
Loan financing calculation module.
Handles down payment, EMI, and totals for the fixed set of loan tenures.
"""

import logging
from typing import Dict, Any, List

from .config import EstimatorConfig

logger = logging.getLogger(__name__)

LOAN_TENURES_MONTHS = (12, 24, 36, 48, 60)
DOWN_PAYMENT_PCT = 20.0


class LoanModel:
    """Calculates amortizing-loan options for the net system cost."""

    def __init__(self, config: EstimatorConfig):
        self.config = config
        self.interest_rate_monthly = config.loan_interest_rate / 12.0

    def calculate_emi(self, principal: float, tenure_months: int) -> float:
        """
        Calculate level monthly payment (annuity).

        Args:
            principal: Amount financed
            tenure_months: Number of monthly payments

        Returns:
            Monthly payment; 0 when there is nothing to finance
        """
        if principal <= 0:
            return 0.0

        rate = self.interest_rate_monthly
        if rate > 0:
            growth = (1 + rate) ** tenure_months
            return principal * rate * growth / (growth - 1)

        return principal / tenure_months

    def calculate_loan_option(self, net_cost: float, tenure_months: int) -> Dict[str, Any]:
        """Down payment, financed amount, and repayment totals for one tenure."""
        down_payment = net_cost * DOWN_PAYMENT_PCT / 100.0
        principal = net_cost - down_payment

        if principal <= 0:
            # Subsidy covers the whole cost, nothing to finance
            down_payment = 0.0
            principal = 0.0

        emi = self.calculate_emi(principal, tenure_months)
        total_payment = emi * tenure_months

        return {
            'tenure_months': tenure_months,
            'tenure_years': tenure_months / 12.0,
            'emi': emi,
            'total_payment': total_payment,
            'total_interest': total_payment - principal,
            'down_payment': down_payment,
            'loan_amount': principal,
        }

    def calculate_loan_options(self, net_cost: float) -> List[Dict[str, Any]]:
        """
        Calculate loan options for every supported tenure.

        Args:
            net_cost: Net system cost after subsidy

        Returns:
            List of option dicts, shortest tenure first
        """
        if net_cost <= 0:
            logger.debug("Net cost %.2f leaves nothing to finance", net_cost)

        return [self.calculate_loan_option(net_cost, tenure) for tenure in LOAN_TENURES_MONTHS]
