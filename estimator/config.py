"""
Configuration loading module.
Handles estimator defaults, caller overrides, and audit trail of defaults applied.
"""

import json
import math
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Dict, Any, List, Mapping, Optional, Tuple
from copy import deepcopy


# Average daily irradiation per installed kW (kWh/kWp/day)
DEFAULT_SOLAR_IRRADIATION = {
    # States
    'Andhra Pradesh': 5.3,
    'Arunachal Pradesh': 4.2,
    'Assam': 4.3,
    'Bihar': 4.8,
    'Chhattisgarh': 5.2,
    'Goa': 5.0,
    'Gujarat': 5.5,
    'Haryana': 5.2,
    'Himachal Pradesh': 5.0,
    'Jharkhand': 4.9,
    'Karnataka': 5.3,
    'Kerala': 4.8,
    'Madhya Pradesh': 5.4,
    'Maharashtra': 5.2,
    'Manipur': 4.3,
    'Meghalaya': 4.1,
    'Mizoram': 4.2,
    'Nagaland': 4.2,
    'Odisha': 5.0,
    'Punjab': 5.3,
    'Rajasthan': 5.7,
    'Sikkim': 4.5,
    'Tamil Nadu': 5.2,
    'Telangana': 5.3,
    'Tripura': 4.3,
    'Uttar Pradesh': 4.9,
    'Uttarakhand': 5.1,
    'West Bengal': 4.6,

    # Union Territories
    'Andaman and Nicobar Islands': 4.8,
    'Chandigarh': 5.2,
    'Dadra and Nagar Haveli and Daman and Diu': 5.3,
    'Delhi': 5.1,
    'Jammu and Kashmir': 5.4,
    'Ladakh': 5.8,
    'Lakshadweep': 5.0,
    'Puducherry': 5.1,

    'default': 5.0,
}

# Flat residential amounts by size bracket (kW)
DEFAULT_SUBSIDY_RATES = {
    'residential': {
        '1-2': 30000.0,
        '2-3': 60000.0,
        '3+': 78000.0,
    },
    'commercial': 0.0,
}

SUBSIDY_TIERS = ('1-2', '2-3', '3+')


@dataclass(frozen=True)
class EstimatorConfig:
    """Read-only tunables shared by every sub-model."""

    solar_irradiation: Mapping[str, float]
    panel_efficiency: float
    system_degradation: float
    performance_ratio: float
    cost_per_kw: float
    inverter_cost_per_kw: float
    om_cost_per_kw: float
    space_per_kw: float
    tariff_increase_rate: float
    consumption_increase_rate: float
    loan_interest_rate: float
    system_lifespan: int
    inverter_replacement_year: int
    subsidy_rates: Mapping[str, Any]
    co2_per_kwh: float
    trees_per_ton_co2: float
    discount_rate: float
    fallback_tariff_rate: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict copy, suitable for JSON."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == 'subsidy_rates':
                value = {
                    'residential': dict(value['residential']),
                    'commercial': value['commercial'],
                }
            elif isinstance(value, Mapping):
                value = dict(value)
            result[f.name] = value
        return result


class ConfigLoader:
    """Merges overrides over defaults and validates the result."""

    def __init__(self):
        self.defaults_used = []
        self.validation_errors = []

    def load_and_validate(self, json_path: str) -> EstimatorConfig:
        """Load JSON overrides and validate with defaults."""
        with open(json_path, 'r') as f:
            data = json.load(f)

        return self.build(data)

    def build(self, overrides: Optional[Dict[str, Any]] = None) -> EstimatorConfig:
        """Build an immutable configuration from (possibly partial) overrides."""
        overrides = overrides or {}

        unknown = sorted(set(overrides) - {f.name for f in fields(EstimatorConfig)})
        if unknown:
            self.validation_errors.append(f"Unknown configuration keys: {unknown}")

        validated = self._apply_defaults(overrides)
        self._validate_config(validated)

        if self.validation_errors:
            raise ValueError(f"Configuration validation failed: {self.validation_errors}")

        return self._freeze(validated)

    def _apply_defaults(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply defaults for missing values."""
        result = deepcopy(data)

        # Region table: overrides are merged entry by entry
        irradiation = dict(DEFAULT_SOLAR_IRRADIATION)
        supplied_irradiation = result.get('solar_irradiation')
        if supplied_irradiation is not None and not isinstance(supplied_irradiation, Mapping):
            self.validation_errors.append("solar_irradiation must be a mapping of region to value")
        elif supplied_irradiation:
            irradiation.update(supplied_irradiation)
        else:
            self.defaults_used.append("solar_irradiation = <default table>")
        result['solar_irradiation'] = irradiation

        # System specifications
        self._set_default(result, 'panel_efficiency', 0.19)
        self._set_default(result, 'system_degradation', 0.005)
        self._set_default(result, 'performance_ratio', 0.80)

        # Costs
        self._set_default(result, 'cost_per_kw', 50000.0)
        self._set_default(result, 'inverter_cost_per_kw', 8000.0)
        self._set_default(result, 'om_cost_per_kw', 500.0)

        # Space (sq ft per kW)
        self._set_default(result, 'space_per_kw', 100.0)

        # Financial parameters
        self._set_default(result, 'tariff_increase_rate', 0.05)
        self._set_default(result, 'consumption_increase_rate', 0.02)
        self._set_default(result, 'loan_interest_rate', 0.12)
        self._set_default(result, 'system_lifespan', 25)
        self._set_default(result, 'inverter_replacement_year', 10)
        self._set_default(result, 'discount_rate', 0.08)
        self._set_default(result, 'fallback_tariff_rate', None)

        # Subsidy table
        subsidy = deepcopy(DEFAULT_SUBSIDY_RATES)
        supplied = result.get('subsidy_rates') or {}
        if not isinstance(supplied, Mapping):
            self.validation_errors.append("subsidy_rates must be a mapping")
            supplied = {}
        residential = supplied.get('residential')
        if residential is not None and not isinstance(residential, Mapping):
            self.validation_errors.append("subsidy_rates.residential must be a mapping of tier to amount")
        elif residential:
            subsidy['residential'].update(residential)
        if supplied.get('commercial') is not None:
            subsidy['commercial'] = supplied['commercial']
        if not supplied:
            self.defaults_used.append("subsidy_rates = <default table>")
        result['subsidy_rates'] = subsidy

        # Environmental impact
        self._set_default(result, 'co2_per_kwh', 0.82)
        self._set_default(result, 'trees_per_ton_co2', 50.0)

        return result

    def _set_default(self, section: Dict, key: str, default: Any):
        """Set a default value and track it."""
        if key not in section or section[key] is None:
            section[key] = default
            self.defaults_used.append(f"{key} = {default}")

    def _validate_config(self, data: Dict[str, Any]):
        """Validate configuration constraints."""
        for region, value in data['solar_irradiation'].items():
            if not _is_number(value) or value <= 0:
                self.validation_errors.append(f"solar_irradiation[{region!r}] must be > 0")

        for key in ('performance_ratio', 'panel_efficiency'):
            value = data[key]
            if not _is_number(value) or not 0 < value <= 1:
                self.validation_errors.append(f"{key} must be in (0, 1]")

        for key in ('system_degradation', 'tariff_increase_rate', 'consumption_increase_rate',
                    'loan_interest_rate', 'discount_rate'):
            value = data[key]
            if not _is_number(value) or not 0 <= value < 1:
                self.validation_errors.append(f"{key} must be in [0, 1)")

        for key in ('cost_per_kw', 'inverter_cost_per_kw', 'om_cost_per_kw',
                    'co2_per_kwh', 'trees_per_ton_co2'):
            value = data[key]
            if not _is_number(value) or value < 0:
                self.validation_errors.append(f"{key} must be >= 0")

        if not _is_number(data['space_per_kw']) or data['space_per_kw'] <= 0:
            self.validation_errors.append("space_per_kw must be > 0")

        lifespan = data['system_lifespan']
        if not isinstance(lifespan, int) or isinstance(lifespan, bool) or lifespan < 1:
            self.validation_errors.append("system_lifespan must be an integer >= 1")

        replacement = data['inverter_replacement_year']
        if not isinstance(replacement, int) or isinstance(replacement, bool) or replacement < 1:
            self.validation_errors.append("inverter_replacement_year must be an integer >= 1")

        fallback = data['fallback_tariff_rate']
        if fallback is not None and (not _is_number(fallback) or fallback <= 0):
            self.validation_errors.append("fallback_tariff_rate must be > 0 when set")

        # Subsidy validation
        residential = data['subsidy_rates']['residential']
        for tier in SUBSIDY_TIERS:
            value = residential.get(tier)
            if not _is_number(value) or value < 0:
                self.validation_errors.append(f"subsidy_rates.residential[{tier!r}] must be >= 0")
        extra_tiers = sorted(set(residential) - set(SUBSIDY_TIERS))
        if extra_tiers:
            self.validation_errors.append(f"Unknown residential subsidy tiers: {extra_tiers}")
        if data['subsidy_rates']['commercial'] != 0:
            self.validation_errors.append("subsidy_rates.commercial must be 0 (no commercial subsidy program)")

    def _freeze(self, data: Dict[str, Any]) -> EstimatorConfig:
        """Wrap nested tables read-only and build the config record."""
        data = dict(data)
        data['solar_irradiation'] = MappingProxyType(
            {region: float(value) for region, value in data['solar_irradiation'].items()}
        )
        data['subsidy_rates'] = MappingProxyType({
            'residential': MappingProxyType(
                {tier: float(value) for tier, value in data['subsidy_rates']['residential'].items()}
            ),
            'commercial': float(data['subsidy_rates']['commercial']),
        })
        return EstimatorConfig(**data)


def _is_number(value: Any) -> bool:
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


def load_config(overrides: Optional[Dict[str, Any]] = None) -> Tuple[EstimatorConfig, List[str]]:
    """
    Build configuration from an overrides mapping.

    Returns:
        (config, defaults_used)
    """
    loader = ConfigLoader()
    config = loader.build(overrides)
    return config, loader.defaults_used


def load_config_file(json_path: str) -> Tuple[EstimatorConfig, List[str]]:
    """
    Load and validate configuration overrides from JSON file.

    Returns:
        (config, defaults_used)
    """
    loader = ConfigLoader()
    config = loader.load_and_validate(json_path)
    return config, loader.defaults_used
