"""
Pytest Configuration and Shared Fixtures

Provides snapshot builders and payloads shared by all test modules.
"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from evi.models import (
    CompositeSnapshot,
    DriverSnapshot,
    DriverType,
    HistoricalScore,
)


FIXED_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def make_history(scores: List[float], end: datetime = FIXED_NOW) -> List[HistoricalScore]:
    """Daily history ending at `end`, oldest first."""
    last = len(scores) - 1
    return [
        HistoricalScore(date=end - timedelta(days=last - i), score=s)
        for i, s in enumerate(scores)
    ]


def make_snapshot(
    visibility: Optional[float] = 72.5,
    authority: Optional[float] = 64.8,
    momentum: Optional[float] = 61.2,
    confidences=(0.85, 0.82, 0.78),
    driver_deltas=(0.0, 0.0, 0.0),
    history: Optional[List[float]] = None,
    org_id: str = "org_test",
) -> CompositeSnapshot:
    """Build a snapshot; pass None for a driver score to omit that driver."""
    drivers = {}
    for driver_type, score, confidence, delta in zip(
        (DriverType.VISIBILITY, DriverType.AUTHORITY, DriverType.MOMENTUM),
        (visibility, authority, momentum),
        confidences,
        driver_deltas,
    ):
        if score is None:
            drivers[driver_type.value] = None
            continue
        drivers[driver_type.value] = DriverSnapshot(
            driver_type=driver_type,
            score=score,
            confidence=confidence,
            delta_7d=delta,
            updated_at=FIXED_NOW,
        )

    return CompositeSnapshot(
        org_id=org_id,
        generated_at=FIXED_NOW,
        historical_scores=make_history(history or []),
        **drivers,
    )


# ============================================================================
# Snapshot Fixtures
# ============================================================================

@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def history_factory() -> Callable[..., List[HistoricalScore]]:
    """Factory for daily history ending at the fixed reference time."""
    return make_history


@pytest.fixture
def snapshot_factory() -> Callable[..., CompositeSnapshot]:
    """Factory for snapshots with custom driver scores and history."""
    return make_snapshot


@pytest.fixture
def worked_example_snapshot() -> CompositeSnapshot:
    """Reference drivers: 72.5 / 64.8 / 61.2 with confidences 0.85 / 0.82 / 0.78."""
    return make_snapshot(history=[54.2, 56.8, 59.1, 61.2, 63.3, 65.1, 67.4])


@pytest.fixture
def provider_payload() -> Dict[str, Any]:
    """Provider payload in the snake_case wire shape."""
    return {
        "generated_at": "2026-10-18T12:00:00+00:00",
        "org_id": "org_acme",
        "visibility": {
            "type": "visibility",
            "score": 72.5,
            "confidence": 0.85,
            "components": [
                {
                    "id": "m_ai_presence",
                    "label": "AI Answer Presence",
                    "value": 24,
                    "max_value": 100,
                    "weight": 0.35,
                    "source": "pr",
                },
            ],
            "delta_7d": 5.2,
            "delta_30d": 12.1,
            "updated_at": "2026-10-18T12:00:00+00:00",
        },
        "authority": {
            "type": "authority",
            "score": 64.8,
            "confidence": 0.82,
            "components": [],
            "delta_7d": 2.1,
            "delta_30d": 6.4,
        },
        "momentum": {
            "type": "momentum",
            "score": 61.2,
            "confidence": 0.78,
            "delta_7d": -0.3,
            "delta_30d": 8.9,
        },
        "historical_scores": [
            {"date": "2026-10-12T12:00:00+00:00", "score": 54.2},
            {"date": "2026-10-13T12:00:00+00:00", "score": 56.8},
            {"date": "2026-10-14T12:00:00+00:00", "score": 59.1},
            {"date": "2026-10-15T12:00:00+00:00", "score": 61.2},
            {"date": "2026-10-16T12:00:00+00:00", "score": 63.3},
            {"date": "2026-10-17T12:00:00+00:00", "score": 65.1},
            {"date": "2026-10-18T12:00:00+00:00", "score": 67.4},
        ],
    }
