"""
Rooftop Solar Estimator Package
Sizing, cost, financing, and environmental-impact estimates for rooftop solar.
"""

__version__ = "1.0.0"
__author__ = "Solar Model Team"

from .config import EstimatorConfig, load_config, load_config_file
from .inputs import EstimateInput, InvalidInputError
from .results import EstimateResult
from .runner import SolarEstimator, estimate

__all__ = [
    "EstimatorConfig",
    "EstimateInput",
    "EstimateResult",
    "InvalidInputError",
    "SolarEstimator",
    "estimate",
    "load_config",
    "load_config_file",
]
