"""
Scoring Helper Functions and Constants

Holds the canonical EVI formula (driver weights, status bands, trend
deadband, history and forecast parameters) as a single immutable
FormulaConfig, plus the clamping, rounding and classification helpers
shared by every calculation.
"""

import math
from dataclasses import dataclass, field, replace
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Dict, Tuple

from ..models.snapshot import DriverType, StatusBand, Trend, DRIVER_ORDER


# ============================================================================
# STATUS BANDS
# ============================================================================

@dataclass(frozen=True)
class BandDefinition:
    """Inclusive score range for a status band."""
    status: StatusBand
    min: int
    max: int
    label: str
    description: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "status": self.status.value,
            "min": self.min,
            "max": self.max,
            "label": self.label,
            "description": self.description,
        }


STATUS_BANDS: Tuple[BandDefinition, ...] = (
    BandDefinition(
        StatusBand.AT_RISK, 0, 40, "At Risk",
        "Urgent action needed to improve brand visibility",
    ),
    BandDefinition(
        StatusBand.EMERGING, 41, 60, "Emerging",
        "Building momentum, focus on growth opportunities",
    ),
    BandDefinition(
        StatusBand.COMPETITIVE, 61, 80, "Competitive",
        "Strong position, maintain and optimize",
    ),
    BandDefinition(
        StatusBand.DOMINANT, 81, 100, "Dominant",
        "Market leader, focus on defense and expansion",
    ),
)


# ============================================================================
# FORMULA CONFIGURATION
# ============================================================================

@dataclass(frozen=True)
class FormulaConfig:
    """
    The complete EVI formula.

    Shared by the score calculator, the confidence aggregator and the
    forecast engine so that all three always weight drivers identically.
    """
    visibility_weight: float = 0.40
    authority_weight: float = 0.35
    momentum_weight: float = 0.25

    bands: Tuple[BandDefinition, ...] = field(default=STATUS_BANDS)

    # Trend deadband in index points; must stay > 0 to avoid flicker
    trend_threshold: float = 0.5

    sparkline_length: int = 7
    min_points_delta_7d: int = 2
    min_points_delta_30d: int = 5

    forecast_horizon_weeks: int = 4
    forecast_base_variance: float = 3.0

    def weight(self, driver_type: DriverType) -> float:
        """Canonical weight for a driver type."""
        return getattr(self, f"{driver_type.value}_weight")

    @property
    def weights(self) -> Dict[str, float]:
        """Weights keyed by driver name, canonical order."""
        return {d.value: self.weight(d) for d in DRIVER_ORDER}

    def with_forecast(self, horizon_weeks: int, base_variance: float) -> "FormulaConfig":
        """Copy with different forecast parameters. Weights and bands are kept."""
        return replace(
            self,
            forecast_horizon_weeks=horizon_weeks,
            forecast_base_variance=base_variance,
        )

    def describe(self) -> str:
        """Human-readable formula text."""
        terms = " + ".join(
            f"{d.value.capitalize()} × {self.weight(d):.2f}" for d in DRIVER_ORDER
        )
        return f"EVI = {terms}"


DEFAULT_FORMULA = FormulaConfig()


# ============================================================================
# NUMERIC HELPERS
# ============================================================================

def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float, places: int = 1) -> float:
    """
    Round half away from zero.

    Python's round() uses banker's rounding (round(0.125, 2) == 0.12);
    the EVI formula rounds 0.125 to 0.13 and -0.125 to -0.13.
    """
    if not math.isfinite(value):
        return value
    number = Decimal(str(value))
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # quantize must keep every integer digit plus `places` decimals
        ctx.prec = max(ctx.prec, number.adjusted() + places + 2)
        return float(number.quantize(quantum, rounding=ROUND_HALF_UP))


# ============================================================================
# CLASSIFICATION
# ============================================================================

def get_status_band(score: float, formula: FormulaConfig = DEFAULT_FORMULA) -> StatusBand:
    """
    Classify a composite score into a status band.

    Bands are inclusive integer ranges; a fractional score between two bands
    (e.g. 40.5) falls into the higher one.

    Args:
        score: Final composite score (clamped, rounded)
        formula: Formula whose bands to use

    Returns:
        StatusBand enum
    """
    for band in formula.bands:
        if score <= band.max:
            return band.status
    return formula.bands[-1].status


def get_band_definition(
    status: StatusBand,
    formula: FormulaConfig = DEFAULT_FORMULA,
) -> BandDefinition:
    """Look up the range, label and description of a band."""
    for band in formula.bands:
        if band.status == status:
            return band
    raise KeyError(status.value)


def classify_trend(delta: float, formula: FormulaConfig = DEFAULT_FORMULA) -> Trend:
    """
    Classify a 7-day delta into a trend direction.

    Args:
        delta: Signed score change
        formula: Formula whose deadband to use

    Returns:
        Trend.UP above +threshold, Trend.DOWN below -threshold, else FLAT
    """
    if delta > formula.trend_threshold:
        return Trend.UP
    if delta < -formula.trend_threshold:
        return Trend.DOWN
    return Trend.FLAT
