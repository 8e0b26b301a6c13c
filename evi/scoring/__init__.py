"""
Scoring Module for the EVI Engine

This module provides the Earned Visibility Index calculations:

1. **Composite Score** (0-100)
   Weighted blend of driver scores.
   Weights: Visibility 0.40, Authority 0.35, Momentum 0.25

2. **Status Band & Trend**
   Band: at_risk (0-40), emerging (41-60), competitive (61-80), dominant (81-100)
   Trend: up / flat / down with a ±0.5 point deadband

3. **History**
   Previous score, 7-day and 30-day deltas, 7-point sparkline

4. **Confidence** (0-1)
   Driver confidences blended with the score weights

5. **Forecast**
   4-week linear projection with additive what-if scenarios

Example Usage:
    from evi.scoring import compute_index, compute_forecast
    from evi.models import ForecastScenario

    index = compute_index(snapshot)
    print(f"EVI: {index.score} ({index.status.value}, {index.trend.value})")

    forecast = compute_forecast(index, [ForecastScenario(delta_authority=10)])
    print(f"4 weeks: {forecast.low}-{forecast.high} (expected {forecast.expected})")
"""

# Formula constants and helpers
from .helpers import (
    BandDefinition,
    FormulaConfig,
    STATUS_BANDS,
    DEFAULT_FORMULA,
    clamp,
    round_half_up,
    get_status_band,
    get_band_definition,
    classify_trend,
)

# Composite score
from .composite import (
    require_drivers,
    calculate_weighted_contribution,
    calculate_composite_score,
    build_driver_breakdown,
)

# History
from .history import (
    HistorySummary,
    build_sparkline,
    summarize_history,
)

# Confidence
from .confidence import calculate_confidence

# Index assembly
from .engine import (
    compute_index,
    find_focus_driver,
)

# Forecast
from .forecast import (
    calculate_scenario_delta,
    compute_forecast,
)

__all__ = [
    # Helpers
    "BandDefinition",
    "FormulaConfig",
    "STATUS_BANDS",
    "DEFAULT_FORMULA",
    "clamp",
    "round_half_up",
    "get_status_band",
    "get_band_definition",
    "classify_trend",

    # Composite
    "require_drivers",
    "calculate_weighted_contribution",
    "calculate_composite_score",
    "build_driver_breakdown",

    # History
    "HistorySummary",
    "build_sparkline",
    "summarize_history",

    # Confidence
    "calculate_confidence",

    # Index
    "compute_index",
    "find_focus_driver",

    # Forecast
    "calculate_scenario_delta",
    "compute_forecast",
]
