"""
EVI Index Assembly

Runs the calculator, classifier, history builder and confidence aggregator
over one snapshot and assembles the ComputedIndex.

Pure function of its inputs: no I/O, no shared state. Pass computed_at to
get byte-identical results for identical snapshots.
"""

from datetime import datetime, timezone
from typing import Optional

from ..models.snapshot import (
    CompositeSnapshot,
    ComputedIndex,
    DriverType,
    DRIVER_ORDER,
)
from .composite import build_driver_breakdown, calculate_composite_score, require_drivers
from .confidence import calculate_confidence
from .helpers import DEFAULT_FORMULA, FormulaConfig, classify_trend, get_status_band
from .history import summarize_history


def compute_index(
    snapshot: CompositeSnapshot,
    formula: FormulaConfig = DEFAULT_FORMULA,
    computed_at: Optional[datetime] = None,
) -> ComputedIndex:
    """
    Compute the Earned Visibility Index for a snapshot.

    Args:
        snapshot: Provider snapshot with all three drivers
        formula: Formula configuration (defaults to the canonical one)
        computed_at: Timestamp to stamp on the result (defaults to now, UTC)

    Returns:
        ComputedIndex

    Raises:
        InvalidSnapshotError: If any driver snapshot is missing
    """
    require_drivers(snapshot)

    score = calculate_composite_score(snapshot, formula)
    history = summarize_history(score, snapshot.historical_scores, formula)

    return ComputedIndex(
        org_id=snapshot.org_id,
        score=score,
        previous_score=history.previous_score,
        delta_7d=history.delta_7d,
        delta_30d=history.delta_30d,
        status=get_status_band(score, formula),
        trend=classify_trend(history.delta_7d, formula),
        drivers=build_driver_breakdown(snapshot, formula),
        sparkline=history.sparkline,
        confidence=calculate_confidence(snapshot, formula),
        computed_at=computed_at or datetime.now(timezone.utc),
    )


def find_focus_driver(
    index: ComputedIndex,
    formula: FormulaConfig = DEFAULT_FORMULA,
) -> DriverType:
    """
    Pick the driver whose improvement would move the index most.

    That is the driver with the lowest score relative to its weight,
    measured as weighted headroom: weight × (100 - score). Ties go to the
    earlier driver in canonical order.
    """
    best = DRIVER_ORDER[0]
    best_headroom = -1.0
    for driver_type in DRIVER_ORDER:
        breakdown = index.drivers[driver_type]
        headroom = formula.weight(driver_type) * (100 - breakdown.score)
        if headroom > best_headroom:
            best, best_headroom = driver_type, headroom
    return best
