"""
EVI Data Models

Driver snapshots in, computed index and forecast interval out.
"""

from .errors import EVIError, InvalidSnapshotError, FormulaIntegrityError
from .snapshot import (
    DriverType,
    StatusBand,
    Trend,
    DRIVER_ORDER,
    ComponentMetric,
    DriverSnapshot,
    HistoricalScore,
    CompositeSnapshot,
    DriverBreakdown,
    ComputedIndex,
    ForecastScenario,
    ForecastInterval,
)
from .payloads import parse_composite_snapshot

__all__ = [
    # Errors
    "EVIError",
    "InvalidSnapshotError",
    "FormulaIntegrityError",
    # Enums
    "DriverType",
    "StatusBand",
    "Trend",
    "DRIVER_ORDER",
    # Inputs
    "ComponentMetric",
    "DriverSnapshot",
    "HistoricalScore",
    "CompositeSnapshot",
    # Outputs
    "DriverBreakdown",
    "ComputedIndex",
    "ForecastScenario",
    "ForecastInterval",
    # Parsing
    "parse_composite_snapshot",
]
