"""
Composite Score Calculator

Blends the three driver scores into the single EVI value.

Formula:
    EVI = (
        clamp(Visibility) × 0.40 +
        clamp(Authority) × 0.35 +
        clamp(Momentum) × 0.25
    )

Each driver score is clamped to 0-100 before weighting. The composite is
rounded half away from zero to 1 decimal; each weighted contribution shown
in the driver breakdown is rounded to 2 decimals.
"""

from typing import Dict

from ..models.errors import InvalidSnapshotError
from ..models.snapshot import (
    CompositeSnapshot,
    DriverBreakdown,
    DriverSnapshot,
    DriverType,
    DRIVER_ORDER,
)
from .helpers import (
    DEFAULT_FORMULA,
    FormulaConfig,
    clamp,
    classify_trend,
    round_half_up,
)


def require_drivers(snapshot: CompositeSnapshot) -> None:
    """
    Reject a snapshot that lacks any driver.

    Raises:
        InvalidSnapshotError: Naming every missing driver
    """
    if snapshot is None:
        raise InvalidSnapshotError("Snapshot is required")

    missing = snapshot.missing_drivers()
    if missing:
        raise InvalidSnapshotError(
            f"Snapshot for {snapshot.org_id} is missing driver(s): {', '.join(missing)}",
            missing_drivers=missing,
        )


def calculate_weighted_contribution(
    driver: DriverSnapshot,
    formula: FormulaConfig = DEFAULT_FORMULA,
) -> float:
    """Unrounded clamped driver score times its weight."""
    return clamp(driver.score) * formula.weight(driver.driver_type)


def calculate_composite_score(
    snapshot: CompositeSnapshot,
    formula: FormulaConfig = DEFAULT_FORMULA,
) -> float:
    """
    Calculate the composite EVI score.

    Args:
        snapshot: Snapshot with all three drivers present
        formula: Weights to apply

    Returns:
        Score clamped to 0-100, rounded to 1 decimal

    Raises:
        InvalidSnapshotError: If any driver is missing
    """
    require_drivers(snapshot)

    total = sum(
        calculate_weighted_contribution(snapshot.get_driver(driver_type), formula)
        for driver_type in DRIVER_ORDER
    )
    return clamp(round_half_up(total, 1))


def build_driver_breakdown(
    snapshot: CompositeSnapshot,
    formula: FormulaConfig = DEFAULT_FORMULA,
) -> Dict[DriverType, DriverBreakdown]:
    """
    Per-driver score, weight, contribution and trend.

    Raises:
        InvalidSnapshotError: If any driver is missing
    """
    require_drivers(snapshot)

    breakdown: Dict[DriverType, DriverBreakdown] = {}
    for driver_type in DRIVER_ORDER:
        driver = snapshot.get_driver(driver_type)
        breakdown[driver_type] = DriverBreakdown(
            driver_type=driver_type,
            score=clamp(driver.score),
            weight=formula.weight(driver_type),
            contribution=round_half_up(calculate_weighted_contribution(driver, formula), 2),
            delta_7d=driver.delta_7d,
            trend=classify_trend(driver.delta_7d, formula),
            confidence=round_half_up(clamp(driver.confidence, 0.0, 1.0), 2),
        )
    return breakdown
