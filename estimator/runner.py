"""
Main runner module.
Orchestrates all estimate components and assembles the result.
"""

import logging
from typing import Dict, Any, Union

from .config import EstimatorConfig, load_config
from .inputs import EstimateInput, InputValidator, resolve_consumption
from .energy import EnergyModel
from .capex import CapExModel
from .savings import SavingsModel
from .debt import LoanModel
from .environment import EnvironmentModel
from .cashflow import ProjectionModel
from .metrics import MetricsCalculator
from .results import (
    EstimateResult, SystemDetails, Financials, LoanOption,
    EnvironmentalImpact, YearlyProjectionEntry, round2,
)

logger = logging.getLogger(__name__)


class SolarEstimator:
    """Main rooftop solar estimate orchestrator."""

    def __init__(self, config: Union[EstimatorConfig, Dict[str, Any], None] = None):
        """
        Initialize estimator with configuration.

        Args:
            config: EstimatorConfig, a mapping of overrides, or None for defaults
        """
        if isinstance(config, EstimatorConfig):
            self.config = config
            self.defaults_used = []
        else:
            self.config, self.defaults_used = load_config(config)

        # Sub-models hold nothing but the read-only config
        self.energy_model = EnergyModel(self.config)
        self.capex_model = CapExModel(self.config)
        self.savings_model = SavingsModel(self.config)
        self.loan_model = LoanModel(self.config)
        self.environment_model = EnvironmentModel(self.config)
        self.projection_model = ProjectionModel(self.config)
        self.metrics_calc = MetricsCalculator(self.config)

    def estimate(self, estimate_input: Union[EstimateInput, Dict[str, Any]]) -> EstimateResult:
        """
        Run complete estimate.

        Args:
            estimate_input: EstimateInput or a mapping of its fields

        Returns:
            EstimateResult

        Raises:
            InvalidInputError: if the input cannot be used
        """
        if not isinstance(estimate_input, EstimateInput):
            estimate_input = EstimateInput.from_dict(estimate_input)

        InputValidator().validate(estimate_input)

        # Step 1: Resolve tariff and consumption
        logger.debug("1. Resolving tariff and consumption...")
        tariff_rate, monthly_units = resolve_consumption(estimate_input, self.config)
        annual_consumption = monthly_units * 12

        # Step 2: Size the system
        logger.debug("2. Sizing system...")
        irradiation = self.energy_model.get_irradiation(estimate_input.state)
        size_required = self.energy_model.calculate_system_size(annual_consumption, irradiation)
        space_required, space_required_sqm = self.energy_model.calculate_space_required(size_required)
        size_recommended = self.energy_model.recommend_system_size(size_required, estimate_input.rooftop_area)
        annual_generation = self.energy_model.calculate_annual_generation(size_recommended, irradiation)

        # Step 3: Cost and subsidy
        logger.debug("3. Calculating cost and subsidy...")
        system_cost, cost_breakdown = self.capex_model.calculate_system_cost(size_recommended)
        subsidy = self.capex_model.calculate_subsidy(
            size_recommended, estimate_input.property_type, estimate_input.eligible_for_subsidy
        )
        net_cost = self.capex_model.calculate_net_cost(system_cost, subsidy)

        # Step 4: Savings
        logger.debug("4. Calculating savings...")
        savings = self.savings_model.calculate_savings(annual_consumption, annual_generation, tariff_rate)

        # Step 5: Loan options
        logger.debug("5. Calculating loan options...")
        loan_options = self.loan_model.calculate_loan_options(net_cost)

        # Step 6: Environmental impact
        logger.debug("6. Calculating environmental impact...")
        impact = self.environment_model.calculate_impact(annual_generation)

        # Step 7: Yearly projection
        logger.debug("7. Building yearly projection...")
        projection_df = self.projection_model.build_projection(
            annual_consumption, annual_generation, tariff_rate, size_recommended, net_cost
        )

        # Step 8: Metrics
        logger.debug("8. Calculating financial metrics...")
        metrics = self.metrics_calc.calculate_all_metrics(
            projection_df, net_cost, savings['first_year_savings'], savings['total_savings']
        )

        logger.info(
            "Estimate complete: %.2f kW recommended, net cost %.2f, payback %d years",
            size_recommended, net_cost, metrics['payback_years']
        )

        system_details = SystemDetails(
            size_required=round2(size_required),
            size_recommended=round2(size_recommended),
            space_required=round2(space_required),
            space_required_sqm=round2(space_required_sqm),
            annual_generation=round2(annual_generation),
            monthly_generation=round2(annual_generation / 12),
            daily_generation=round2(annual_generation / 365),
            lifetime_generation=round2(metrics['lifetime_generation_kwh']),
            max_solar_percentage=round2(annual_generation / annual_consumption * 100),
            irradiation=round2(irradiation),
        )

        irr = metrics['project_irr']
        financials = Financials(
            system_cost=round2(system_cost),
            panel_cost=round2(cost_breakdown['panels']),
            inverter_cost=round2(cost_breakdown['inverter']),
            subsidy=round2(subsidy),
            net_system_cost=round2(net_cost),
            cost_per_kw=round2(self.config.cost_per_kw),
            first_year_savings=round2(savings['first_year_savings']),
            monthly_savings=round2(savings['monthly_savings']),
            total_savings_25_years=round2(savings['total_savings']),
            payback_period=metrics['payback_years'],
            roi_25_years=round2(metrics['roi_pct']),
            npv=round2(metrics['npv']),
            project_irr=round2(irr * 100) if irr is not None else None,
        )

        environmental_impact = EnvironmentalImpact(
            co2_saved_annually=round2(impact['co2_saved_annually']),
            co2_saved_25_years=round2(impact['co2_saved_lifetime']),
            trees_equivalent=int(round(impact['trees_equivalent'])),
            coal_saved_kg=round2(impact['coal_saved_kg']),
        )

        return EstimateResult(
            system_details=system_details,
            financials=financials,
            loan_options=tuple(self._format_loan_option(option) for option in loan_options),
            environmental_impact=environmental_impact,
            yearly_projection=tuple(
                self._format_projection_entry(row)
                for row in self.projection_model.format_output(projection_df).itertuples(index=False)
            ),
        )

    def _format_loan_option(self, option: Dict[str, Any]) -> LoanOption:
        return LoanOption(
            tenure_months=option['tenure_months'],
            tenure_years=option['tenure_years'],
            emi=round2(option['emi']),
            total_payment=round2(option['total_payment']),
            total_interest=round2(option['total_interest']),
            down_payment=round2(option['down_payment']),
            loan_amount=round2(option['loan_amount']),
        )

    def _format_projection_entry(self, row) -> YearlyProjectionEntry:
        return YearlyProjectionEntry(
            year=int(row.year),
            generation_from_solar=round2(row.generation_kwh),
            bill_without_solar=round2(row.bill_without_solar),
            bill_with_solar=round2(row.bill_with_solar),
            yearly_savings=round2(row.yearly_savings),
            cumulative_cash_flow=round2(row.cumulative_cash_flow),
        )


def estimate(estimate_input: Union[EstimateInput, Dict[str, Any]],
             config: Union[EstimatorConfig, Dict[str, Any], None] = None) -> EstimateResult:
    """
    Convenience function to build an estimator and run one estimate.

    Args:
        estimate_input: EstimateInput or a mapping of its fields
        config: EstimatorConfig, overrides mapping, or None for defaults

    Returns:
        EstimateResult
    """
    estimator = SolarEstimator(config)
    return estimator.estimate(estimate_input)
