"""
Run a rooftop solar estimate from a JSON inputs file.
Prints a summary and optionally writes the full result as JSON.
"""

import argparse
import json
import logging

from estimator import SolarEstimator


def run_estimate(inputs_path: str = 'example_inputs.json', output_path: str = None):
    """
    Estimate one site described by a JSON file.

    The file holds an "input" object (EstimateInput fields) and an optional
    "config" object of overrides.

    Args:
        inputs_path: Path to JSON inputs
        output_path: Optional path for the full JSON result

    Returns:
        EstimateResult
    """
    with open(inputs_path, 'r') as f:
        data = json.load(f)

    estimator = SolarEstimator(data.get('config'))
    result = estimator.estimate(data['input'])

    details = result.system_details
    financials = result.financials

    print("Rooftop Solar Estimate")
    print(f"  System size: {details.size_recommended:.2f} kW "
          f"(required {details.size_required:.2f} kW)")
    print(f"  Annual generation: {details.annual_generation:,.0f} kWh")
    print(f"  System cost: {financials.system_cost:,.2f} "
          f"(panels {financials.panel_cost:,.2f}, inverter {financials.inverter_cost:,.2f})")
    print(f"  Net system cost: {financials.net_system_cost:,.2f} "
          f"(subsidy {financials.subsidy:,.2f})")
    print(f"  First-year savings: {financials.first_year_savings:,.2f}")
    print(f"  Payback: {financials.payback_period} years")
    print(f"  CO2 avoided over system life: {result.environmental_impact.co2_saved_25_years:.2f} t")

    if output_path:
        with open(output_path, 'w') as f:
            json.dump(result.to_dict(), f, indent=2)
        print(f"  ✓ Full result written to: {output_path}")

    return result


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('inputs_path', nargs='?', default='example_inputs.json')
    parser.add_argument('-o', '--output', dest='output_path')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    run_estimate(args.inputs_path, args.output_path)
