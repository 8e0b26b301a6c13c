"""
History & Sparkline Builder

Derives the previous score, the 7-day and 30-day deltas and the fixed-length
sparkline from a snapshot's historical scores (oldest first).

The 30-day delta is measured against the oldest supplied point. Providers
are expected to window the history to the correct calendar range. Both
baselines (previous score and oldest point) are clamped to 0-100.
"""

from dataclasses import dataclass
from typing import List

from ..models.snapshot import HistoricalScore
from .helpers import DEFAULT_FORMULA, FormulaConfig, clamp, round_half_up


@dataclass
class HistorySummary:
    """Values derived from history for one computation."""
    previous_score: float
    delta_7d: float
    delta_30d: float
    sparkline: List[float]


def build_sparkline(
    values: List[float],
    score: float,
    length: int = 7,
) -> List[float]:
    """
    Build a fixed-length sparkline, oldest to newest.

    Args:
        values: Historical score values, oldest first
        score: Current score, used only when there is no history
        length: Number of points

    Returns:
        The last `length` values, left-padded with the earliest one
    """
    if not values:
        return [score] * length

    recent = list(values[-length:])
    padding = [recent[0]] * (length - len(recent))
    return padding + recent


def summarize_history(
    score: float,
    history: List[HistoricalScore],
    formula: FormulaConfig = DEFAULT_FORMULA,
) -> HistorySummary:
    """
    Derive previous score, deltas and sparkline.

    Args:
        score: Newly computed composite score
        history: Prior composite scores, oldest first
        formula: Minimum point counts and sparkline length

    Returns:
        HistorySummary. With too little history the deltas are 0 and the
        previous score equals the current one.
    """
    values = [h.score for h in (history or [])]

    if len(values) >= formula.min_points_delta_7d:
        previous_score = clamp(values[-2])
        delta_7d = round_half_up(score - previous_score, 1)
    else:
        previous_score = score
        delta_7d = 0.0

    if len(values) >= formula.min_points_delta_30d:
        delta_30d = round_half_up(score - clamp(values[0]), 1)
    else:
        delta_30d = 0.0

    return HistorySummary(
        previous_score=previous_score,
        delta_7d=delta_7d,
        delta_30d=delta_30d,
        sparkline=build_sparkline(values, score, formula.sparkline_length),
    )
