"""
Estimate input validation module.
Handles input records, validation, and tariff/consumption resolution.
"""

import logging
import math
from dataclasses import dataclass, fields
from typing import Dict, Any, Tuple

from .config import EstimatorConfig

logger = logging.getLogger(__name__)

PROPERTY_TYPES = ('residential', 'commercial')


class InvalidInputError(ValueError):
    """Raised when an estimate input cannot be used."""


@dataclass(frozen=True)
class EstimateInput:
    """One household's or business's usage and site details."""

    property_type: str = 'residential'
    monthly_bill: float = 0.0
    monthly_units: float = 0.0
    rooftop_area: float = 0.0
    state: str = 'default'
    eligible_for_subsidy: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EstimateInput':
        """Build an input from a mapping; missing or None values take defaults."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidInputError(f"Unknown input fields: {unknown}")

        return cls(**{key: value for key, value in data.items() if value is not None})


class InputValidator:
    """Validates estimate inputs and collects every problem found."""

    def __init__(self):
        self.validation_errors = []

    def validate(self, estimate_input: EstimateInput):
        """Raise InvalidInputError listing all problems, if any."""
        self.validation_errors = []

        if estimate_input.property_type not in PROPERTY_TYPES:
            self.validation_errors.append(
                f"Invalid property_type: {estimate_input.property_type!r} "
                f"(expected one of {list(PROPERTY_TYPES)})"
            )

        for key in ('monthly_bill', 'monthly_units', 'rooftop_area'):
            value = getattr(estimate_input, key)
            if not _is_number(value):
                self.validation_errors.append(f"{key} must be a number")
            elif value < 0:
                self.validation_errors.append(f"{key} must be >= 0")

        if not isinstance(estimate_input.state, str):
            self.validation_errors.append("state must be a string")

        if not isinstance(estimate_input.eligible_for_subsidy, bool):
            self.validation_errors.append("eligible_for_subsidy must be True or False")

        if not _is_usable(estimate_input.monthly_bill) and not _is_usable(estimate_input.monthly_units):
            self.validation_errors.append("Either monthly_bill or monthly_units must be provided")

        if self.validation_errors:
            raise InvalidInputError(f"Input validation failed: {self.validation_errors}")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _is_usable(value: Any) -> bool:
    return _is_number(value) and value > 0


def resolve_consumption(estimate_input: EstimateInput, config: EstimatorConfig) -> Tuple[float, float]:
    """
    Derive the average tariff and monthly consumption.

    A bill without units (or units without a bill) cannot yield a tariff on
    its own; config.fallback_tariff_rate fills the gap when set.

    Args:
        estimate_input: Validated input
        config: Estimator configuration

    Returns:
        (tariff_rate, monthly_units)
    """
    bill = estimate_input.monthly_bill
    units = estimate_input.monthly_units
    fallback = config.fallback_tariff_rate

    if bill > 0 and units > 0:
        return bill / units, float(units)

    if units > 0:
        if fallback is None:
            raise InvalidInputError(
                "monthly_bill is required to derive the tariff rate from monthly_units "
                "(or configure fallback_tariff_rate)"
            )
        logger.debug("No monthly bill given, using fallback tariff %.4f", fallback)
        return float(fallback), float(units)

    if bill > 0:
        if fallback is None:
            raise InvalidInputError(
                "monthly_units is required to derive the tariff rate from monthly_bill "
                "(or configure fallback_tariff_rate)"
            )
        logger.debug("No monthly units given, deriving consumption from fallback tariff %.4f", fallback)
        return float(fallback), bill / fallback

    raise InvalidInputError("Either monthly_bill or monthly_units must be provided")
