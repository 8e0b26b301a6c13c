"""
EVI Forecast Engine

Projects the index over a fixed horizon by extending the current 7-day
trend, then shifts the projection by any hypothetical driver scenarios.

Formula:
    base_expected  = score + delta_7d × horizon_weeks
    scenario_delta = Σ (ΔVisibility × 0.40 + ΔAuthority × 0.35 + ΔMomentum × 0.25)
    expected       = clamp(base_expected + scenario_delta)
    low / high     = clamp(expected ∓ (base_variance + 1))

Scenarios are additive. Missing or malformed scenario fields count as 0.
The forecast is advisory and has no error path.
"""

from typing import Any, Dict, List, Optional, Union

from ..models.snapshot import ComputedIndex, ForecastInterval, ForecastScenario, DRIVER_ORDER
from .helpers import DEFAULT_FORMULA, FormulaConfig, clamp, round_half_up

ScenarioInput = Union[ForecastScenario, Dict[str, Any]]


def _as_scenario(scenario: Any) -> Optional[ForecastScenario]:
    if isinstance(scenario, ForecastScenario):
        return scenario
    if isinstance(scenario, dict):
        return ForecastScenario.from_dict(scenario)
    return None


def calculate_scenario_delta(
    scenarios: Optional[List[ScenarioInput]],
    formula: FormulaConfig = DEFAULT_FORMULA,
) -> float:
    """
    Weighted index impact of all scenarios combined.

    Args:
        scenarios: ForecastScenario objects or dicts; anything else is ignored
        formula: Driver weights

    Returns:
        Unrounded sum of weighted driver deltas
    """
    total = 0.0
    for raw in scenarios or []:
        scenario = _as_scenario(raw)
        if scenario is None:
            continue
        total += sum(
            scenario.get_delta(driver_type) * formula.weight(driver_type)
            for driver_type in DRIVER_ORDER
        )
    return total


def compute_forecast(
    current: ComputedIndex,
    scenarios: Optional[List[ScenarioInput]] = None,
    formula: FormulaConfig = DEFAULT_FORMULA,
) -> ForecastInterval:
    """
    Forecast the index at the end of the horizon.

    Args:
        current: The latest computed index
        scenarios: Zero or more hypothetical driver adjustments
        formula: Weights, horizon and base variance

    Returns:
        ForecastInterval with low <= expected <= high, all within 0-100
    """
    base_expected = current.score + current.delta_7d * formula.forecast_horizon_weeks
    scenario_delta = calculate_scenario_delta(scenarios, formula)

    expected = clamp(base_expected + scenario_delta)
    spread = formula.forecast_base_variance + 1
    low = clamp(expected - spread)
    high = clamp(expected + spread)

    return ForecastInterval(
        low=round_half_up(low, 1),
        expected=round_half_up(expected, 1),
        high=round_half_up(high, 1),
        horizon_weeks=formula.forecast_horizon_weeks,
        scenario_delta=round_half_up(scenario_delta, 2),
    )
