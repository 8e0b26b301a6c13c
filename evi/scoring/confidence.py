"""
Confidence Aggregator

Combines driver confidences with the same weights used for the score, so a
poorly-measured driver lowers overall confidence in proportion to its
influence on the index.
"""

from ..models.snapshot import CompositeSnapshot, DRIVER_ORDER
from .composite import require_drivers
from .helpers import DEFAULT_FORMULA, FormulaConfig, clamp, round_half_up


def calculate_confidence(
    snapshot: CompositeSnapshot,
    formula: FormulaConfig = DEFAULT_FORMULA,
) -> float:
    """
    Weighted overall confidence.

    Args:
        snapshot: Snapshot with all three drivers present
        formula: Weights to apply

    Returns:
        Confidence 0-1, rounded to 2 decimals
    """
    require_drivers(snapshot)

    weighted = sum(
        clamp(snapshot.get_driver(d).confidence, 0.0, 1.0) * formula.weight(d)
        for d in DRIVER_ORDER
    )
    return clamp(round_half_up(weighted, 2), 0.0, 1.0)
