"""
Provider Payload Validation

Validates the JSON-shaped payloads handed over by driver snapshot providers
and converts them into CompositeSnapshot dataclasses.

Structural problems (missing driver, non-numeric score, a driver filed under
the wrong key) are rejected. Out-of-range numbers are accepted as-is; the
engine clamps them.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidSnapshotError
from .snapshot import (
    ComponentMetric,
    CompositeSnapshot,
    DriverSnapshot,
    DriverType,
    HistoricalScore,
    DRIVER_ORDER,
)

logger = logging.getLogger(__name__)


class ComponentMetricPayload(BaseModel):
    """Weighted sub-metric as sent by a provider."""
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    id: str
    label: str
    value: float
    max_value: float
    weight: float
    source: Optional[str] = None


class DriverSnapshotPayload(BaseModel):
    """One driver snapshot as sent by a provider."""
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    type: Optional[Literal["visibility", "authority", "momentum"]] = None
    score: float
    confidence: float
    components: List[ComponentMetricPayload] = Field(default_factory=list)
    delta_7d: float = 0.0
    delta_30d: float = 0.0
    updated_at: Optional[datetime] = None


class HistoricalScorePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    date: Union[datetime, str]
    score: float


class CompositeSnapshotPayload(BaseModel):
    """Full provider payload for one organization and cycle."""
    model_config = ConfigDict(extra="ignore")

    org_id: str
    generated_at: Optional[datetime] = None
    visibility: Optional[DriverSnapshotPayload] = None
    authority: Optional[DriverSnapshotPayload] = None
    momentum: Optional[DriverSnapshotPayload] = None
    historical_scores: List[HistoricalScorePayload] = Field(default_factory=list)


def _to_driver(driver_type: DriverType, payload: DriverSnapshotPayload) -> DriverSnapshot:
    return DriverSnapshot(
        driver_type=driver_type,
        score=payload.score,
        confidence=payload.confidence,
        components=[
            ComponentMetric(
                id=c.id,
                label=c.label,
                value=c.value,
                max_value=c.max_value,
                weight=c.weight,
                source=c.source,
            )
            for c in payload.components
        ],
        delta_7d=payload.delta_7d,
        delta_30d=payload.delta_30d,
        updated_at=payload.updated_at,
    )


def parse_composite_snapshot(payload: Dict[str, Any]) -> CompositeSnapshot:
    """
    Validate a provider payload and build a CompositeSnapshot.

    Args:
        payload: Dict with org_id, generated_at, visibility, authority,
            momentum and historical_scores (oldest first)

    Returns:
        CompositeSnapshot ready for compute_index()

    Raises:
        InvalidSnapshotError: If the payload is structurally incomplete
    """
    try:
        parsed = CompositeSnapshotPayload.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Rejected provider payload: {e.error_count()} validation error(s)")
        raise InvalidSnapshotError(f"Invalid snapshot payload: {e}") from e

    missing = [
        driver_type.value
        for driver_type in DRIVER_ORDER
        if getattr(parsed, driver_type.value) is None
    ]
    if missing:
        logger.warning(f"Rejected provider payload for {parsed.org_id}: missing {', '.join(missing)}")
        raise InvalidSnapshotError(
            f"Snapshot for {parsed.org_id} is missing driver(s): {', '.join(missing)}",
            missing_drivers=missing,
        )

    drivers: Dict[str, DriverSnapshot] = {}
    for driver_type in DRIVER_ORDER:
        driver_payload = getattr(parsed, driver_type.value)
        if driver_payload.type is not None and driver_payload.type != driver_type.value:
            logger.warning(
                f"Rejected provider payload for {parsed.org_id}: "
                f"{driver_type.value} declares type {driver_payload.type}"
            )
            raise InvalidSnapshotError(
                f"Driver under '{driver_type.value}' declares type '{driver_payload.type}'"
            )
        drivers[driver_type.value] = _to_driver(driver_type, driver_payload)

    return CompositeSnapshot(
        org_id=parsed.org_id,
        generated_at=parsed.generated_at,
        historical_scores=[
            HistoricalScore(date=h.date, score=h.score)
            for h in parsed.historical_scores
        ],
        **drivers,
    )
