"""
Formula Integrity Check

Re-derives the invariants of the EVI formula so a code edit that silently
breaks the weights or the status bands fails CI instead of producing wrong
scores in production.

Checks:
- Driver weights sum to 1.0 (± 0.001), each within (0, 1)
- Status bands are at_risk, emerging, competitive, dominant in that order,
  contiguous, and span exactly 0-100
- Trend deadband is strictly positive

Not called on the request path.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, List

from ..models.errors import FormulaIntegrityError
from ..models.snapshot import DRIVER_ORDER, StatusBand
from ..scoring.helpers import DEFAULT_FORMULA, FormulaConfig

logger = logging.getLogger(__name__)

WEIGHT_SUM_TOLERANCE = 0.001
SCORE_MIN = 0
SCORE_MAX = 100


@dataclass
class FormulaIntegrityResult:
    """Outcome of a formula integrity check."""
    valid: bool
    formula: str
    weights: Dict[str, float]
    bands: List[Dict[str, Any]]
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "valid": self.valid,
            "formula": self.formula,
            "weights": dict(self.weights),
            "bands": list(self.bands),
            "errors": list(self.errors),
        }


def _check_weights(formula: FormulaConfig) -> List[str]:
    errors = []
    weights = formula.weights

    for driver_type in DRIVER_ORDER:
        weight = weights.get(driver_type.value)
        if weight is None:
            errors.append(f"Missing weight for {driver_type.value}")
        elif not 0 < weight < 1:
            errors.append(f"Weight for {driver_type.value} must be in (0, 1), got {weight}")

    total = sum(w for w in weights.values() if w is not None)
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        errors.append(f"Weights sum to {total:.4f}, expected 1.0 ± {WEIGHT_SUM_TOLERANCE}")

    return errors


def _check_bands(formula: FormulaConfig) -> List[str]:
    errors = []
    bands = formula.bands

    if not bands:
        return ["No status bands defined"]

    statuses = [band.status for band in bands]
    if statuses != list(StatusBand):
        errors.append(
            f"Bands must be {', '.join(s.value for s in StatusBand)} in that order, "
            f"got {', '.join(s.value for s in statuses)}"
        )

    for band in bands:
        if band.min > band.max:
            errors.append(f"Band {band.status.value} has min {band.min} > max {band.max}")

    for current, following in zip(bands, bands[1:]):
        if current.max + 1 != following.min:
            errors.append(
                f"Bands {current.status.value} and {following.status.value} are not contiguous "
                f"({current.max} + 1 != {following.min})"
            )

    if bands[0].min != SCORE_MIN:
        errors.append(f"First band {bands[0].status.value} starts at {bands[0].min}, expected {SCORE_MIN}")
    if bands[-1].max != SCORE_MAX:
        errors.append(f"Last band {bands[-1].status.value} ends at {bands[-1].max}, expected {SCORE_MAX}")

    return errors


def validate_formula_integrity(formula: FormulaConfig = DEFAULT_FORMULA) -> FormulaIntegrityResult:
    """
    Validate the weight, band and trend invariants.

    Args:
        formula: Formula to validate (defaults to the canonical one)

    Returns:
        FormulaIntegrityResult with valid flag, formula text, weights,
        bands and any errors found
    """
    errors = _check_weights(formula) + _check_bands(formula)

    if formula.trend_threshold <= 0:
        errors.append(f"Trend threshold must be > 0, got {formula.trend_threshold}")

    for error in errors:
        logger.warning(f"Formula integrity: {error}")
    if not errors:
        logger.info("Formula integrity check passed")

    return FormulaIntegrityResult(
        valid=not errors,
        formula=formula.describe(),
        weights=formula.weights,
        bands=[band.to_dict() for band in formula.bands],
        errors=errors,
    )


def assert_formula_integrity(formula: FormulaConfig = DEFAULT_FORMULA) -> FormulaIntegrityResult:
    """
    Validate the formula and raise on any violation.

    Raises:
        FormulaIntegrityError: Listing every failed invariant
    """
    result = validate_formula_integrity(formula)
    if not result.valid:
        raise FormulaIntegrityError(
            f"EVI formula integrity check failed: {'; '.join(result.errors)}",
            errors=result.errors,
        )
    return result
