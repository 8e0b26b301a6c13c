"""
Formula Quality Guard

Self-validation of the EVI formula constants, run from tests and CI.
"""

from .integrity import (
    FormulaIntegrityResult,
    validate_formula_integrity,
    assert_formula_integrity,
)

__all__ = [
    "FormulaIntegrityResult",
    "validate_formula_integrity",
    "assert_formula_integrity",
]
