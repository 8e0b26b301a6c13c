"""
EVI Data Models

Inputs supplied by driver snapshot providers and the values the engine
computes from them. All types are plain dataclasses; the engine never
mutates them.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any, List, Optional, Union


# ============================================================================
# ENUMS
# ============================================================================

class DriverType(Enum):
    """The three drivers that compose the index."""
    VISIBILITY = "visibility"
    AUTHORITY = "authority"
    MOMENTUM = "momentum"


class StatusBand(Enum):
    """Ordered qualitative classification of the composite score."""
    AT_RISK = "at_risk"           # 0-40
    EMERGING = "emerging"         # 41-60
    COMPETITIVE = "competitive"   # 61-80
    DOMINANT = "dominant"         # 81-100


class Trend(Enum):
    """Direction of short-term score movement."""
    UP = "up"
    FLAT = "flat"
    DOWN = "down"


# Canonical driver order, used for iteration and tie-breaking
DRIVER_ORDER: List[DriverType] = [
    DriverType.VISIBILITY,
    DriverType.AUTHORITY,
    DriverType.MOMENTUM,
]


def _isoformat(value: Union[datetime, str, None]) -> Optional[str]:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


# ============================================================================
# INPUTS
# ============================================================================

@dataclass
class ComponentMetric:
    """A named sub-metric behind a driver score. Informational only."""
    id: str
    label: str
    value: float
    max_value: float
    weight: float
    source: Optional[str] = None


@dataclass
class DriverSnapshot:
    """One driver's measurement for an organization in one cycle."""
    driver_type: DriverType
    score: float                # 0-100, not guaranteed pre-clamped
    confidence: float           # 0-1
    components: List[ComponentMetric] = field(default_factory=list)
    delta_7d: float = 0.0
    delta_30d: float = 0.0
    updated_at: Optional[datetime] = None


@dataclass
class HistoricalScore:
    """A prior composite score."""
    date: Union[datetime, str]
    score: float


@dataclass
class CompositeSnapshot:
    """
    Full input to one index computation.

    Drivers are Optional so an incomplete provider result can be represented;
    compute_index() rejects it rather than substituting defaults.
    """
    org_id: str
    generated_at: Optional[datetime] = None
    visibility: Optional[DriverSnapshot] = None
    authority: Optional[DriverSnapshot] = None
    momentum: Optional[DriverSnapshot] = None
    historical_scores: List[HistoricalScore] = field(default_factory=list)

    def get_driver(self, driver_type: DriverType) -> Optional[DriverSnapshot]:
        """Return the snapshot for a driver type, or None if absent."""
        return getattr(self, driver_type.value)

    def missing_drivers(self) -> List[str]:
        """Names of driver types with no snapshot, in canonical order."""
        return [
            driver_type.value
            for driver_type in DRIVER_ORDER
            if self.get_driver(driver_type) is None
        ]


# ============================================================================
# OUTPUTS
# ============================================================================

@dataclass
class DriverBreakdown:
    """Per-driver contribution to the composite score."""
    driver_type: DriverType
    score: float            # clamped raw driver score
    weight: float
    contribution: float     # score * weight, 2 decimals
    delta_7d: float
    trend: Trend
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.driver_type.value,
            "score": self.score,
            "weight": self.weight,
            "contribution": self.contribution,
            "delta_7d": self.delta_7d,
            "trend": self.trend.value,
            "confidence": self.confidence,
        }


@dataclass
class ComputedIndex:
    """The engine's result for one computation."""
    org_id: str
    score: float
    previous_score: float
    delta_7d: float
    delta_30d: float
    status: StatusBand
    trend: Trend
    drivers: Dict[DriverType, DriverBreakdown]
    sparkline: List[float]
    confidence: float
    computed_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON-ready wire shape consumed by dashboards."""
        return {
            "org_id": self.org_id,
            "score": self.score,
            "previous_score": self.previous_score,
            "delta_7d": self.delta_7d,
            "delta_30d": self.delta_30d,
            "status": self.status.value,
            "trend": self.trend.value,
            "drivers": {
                driver_type.value: self.drivers[driver_type].to_dict()
                for driver_type in DRIVER_ORDER
                if driver_type in self.drivers
            },
            "sparkline": list(self.sparkline),
            "confidence": self.confidence,
            "computed_at": _isoformat(self.computed_at),
        }


# ============================================================================
# FORECASTING
# ============================================================================

def _coerce_delta(value: Any) -> Optional[float]:
    """Best-effort numeric coercion. Anything unusable becomes None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


@dataclass
class ForecastScenario:
    """Hypothetical point changes to one or more driver scores."""
    delta_visibility: Optional[float] = None
    delta_authority: Optional[float] = None
    delta_momentum: Optional[float] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ForecastScenario":
        """
        Build a scenario from a loosely-shaped dict.

        Accepts snake_case ("delta_visibility") or camelCase
        ("deltaVisibility") keys. Malformed values become None.
        """
        def pick(snake: str, camel: str) -> Optional[float]:
            return _coerce_delta(data.get(snake, data.get(camel)))

        name = data.get("name")
        return cls(
            delta_visibility=pick("delta_visibility", "deltaVisibility"),
            delta_authority=pick("delta_authority", "deltaAuthority"),
            delta_momentum=pick("delta_momentum", "deltaMomentum"),
            name=str(name) if name is not None else None,
        )

    def get_delta(self, driver_type: DriverType) -> float:
        """Delta for a driver, 0 when absent or malformed."""
        value = _coerce_delta(getattr(self, f"delta_{driver_type.value}"))
        return value if value is not None else 0.0


@dataclass
class ForecastInterval:
    """Projected index range at the forecast horizon."""
    low: float
    expected: float
    high: float
    horizon_weeks: int = 4
    scenario_delta: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "low": self.low,
            "expected": self.expected,
            "high": self.high,
            "horizon_weeks": self.horizon_weeks,
            "scenario_delta": self.scenario_delta,
        }
