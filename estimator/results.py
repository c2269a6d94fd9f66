"""
Estimate result records.
Values are rounded to 2 decimals here, at the output boundary only.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Tuple


def round2(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return round(float(value), 2)


@dataclass(frozen=True)
class SystemDetails:
    size_required: float
    size_recommended: float
    space_required: float
    space_required_sqm: float
    annual_generation: float
    monthly_generation: float
    daily_generation: float
    lifetime_generation: float
    max_solar_percentage: float
    irradiation: float


@dataclass(frozen=True)
class Financials:
    system_cost: float
    panel_cost: float
    inverter_cost: float
    subsidy: float
    net_system_cost: float
    cost_per_kw: float
    first_year_savings: float
    monthly_savings: float
    total_savings_25_years: float
    payback_period: int
    roi_25_years: Optional[float]
    npv: float
    project_irr: Optional[float]


@dataclass(frozen=True)
class LoanOption:
    tenure_months: int
    tenure_years: float
    emi: float
    total_payment: float
    total_interest: float
    down_payment: float
    loan_amount: float


@dataclass(frozen=True)
class EnvironmentalImpact:
    co2_saved_annually: float
    co2_saved_25_years: float
    trees_equivalent: int
    coal_saved_kg: float


@dataclass(frozen=True)
class YearlyProjectionEntry:
    year: int
    generation_from_solar: float
    bill_without_solar: float
    bill_with_solar: float
    yearly_savings: float
    cumulative_cash_flow: float


@dataclass(frozen=True)
class EstimateResult:
    """
    Complete estimate.

    total_savings_25_years holds consumption at its year-one level, while
    yearly_projection grows consumption every year; the lifetime total and the
    sum of projected savings therefore differ.
    """

    system_details: SystemDetails
    financials: Financials
    loan_options: Tuple[LoanOption, ...]
    environmental_impact: EnvironmentalImpact
    yearly_projection: Tuple[YearlyProjectionEntry, ...]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
