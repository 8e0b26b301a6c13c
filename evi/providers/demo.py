"""
Demo Snapshot Provider

Builds a realistic CompositeSnapshot for an organization when real provider
data is unavailable (demo orgs, feature-flag fallback, local development).

Driver scores are derived from the default component metrics:
    Driver_Score = Σ (value / max_value × 100 × weight), rounded to 1 decimal
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from ..models.snapshot import (
    ComponentMetric,
    CompositeSnapshot,
    DriverSnapshot,
    DriverType,
    HistoricalScore,
)
from ..scoring.helpers import round_half_up

logger = logging.getLogger(__name__)


DEFAULT_COMPONENTS: Dict[DriverType, List[ComponentMetric]] = {
    DriverType.VISIBILITY: [
        ComponentMetric("m_ai_presence", "AI Answer Presence", 24, 100, 0.35, "pr"),
        ComponentMetric("m_press_coverage", "Press Mention Coverage", 78, 100, 0.25, "pr"),
        ComponentMetric("m_serp_coverage", "Topic SERP Coverage", 45, 100, 0.25, "seo"),
        ComponentMetric("m_featured_snippets", "Featured Snippets", 12, 50, 0.15, "seo"),
    ],
    DriverType.AUTHORITY: [
        ComponentMetric("m_citation_quality", "Citation Quality Score", 71, 100, 0.30, "pr"),
        ComponentMetric("m_domain_authority", "Referring Domain Authority", 58, 100, 0.25, "seo"),
        ComponentMetric("m_journalist_match", "Journalist Match Strength", 82, 100, 0.20, "pr"),
        ComponentMetric("m_structured_data", "Structured Data Coverage", 48, 100, 0.15, "seo"),
    ],
    DriverType.MOMENTUM: [
        ComponentMetric("m_citation_velocity", "Citation Velocity (WoW)", 17, 100, 0.30, "pr"),
        ComponentMetric("m_sov_change", "Share of Voice Change", -2, 100, 0.25, "pr"),
        ComponentMetric("m_content_velocity", "Content Velocity vs Competitors", 0.8, 2, 0.20, "content"),
        ComponentMetric("m_topic_growth", "Topic Growth Rate", 34, 100, 0.15, "content"),
    ],
}

# (confidence, delta_7d, delta_30d)
DEFAULT_DRIVER_STATS: Dict[DriverType, tuple] = {
    DriverType.VISIBILITY: (0.85, 5.2, 12.1),
    DriverType.AUTHORITY: (0.82, 2.1, 6.4),
    DriverType.MOMENTUM: (0.78, 4.8, 8.9),
}

# Daily composite scores, oldest first, ending today
DEFAULT_HISTORY: List[float] = [54.2, 56.8, 59.1, 61.2, 63.3, 65.1, 67.4]


def score_components(components: List[ComponentMetric]) -> float:
    """Weighted sum of normalized component values, 1 decimal."""
    score = 0.0
    for component in components:
        if component.max_value:
            score += (component.value / component.max_value) * 100 * component.weight
    return round_half_up(score, 1)


def generate_demo_snapshot(org_id: str, now: Optional[datetime] = None) -> CompositeSnapshot:
    """
    Generate a demo snapshot for an organization.

    Args:
        org_id: Organization identifier
        now: Reference time (defaults to now, UTC); history ends here

    Returns:
        CompositeSnapshot with all three drivers and 7 days of history
    """
    now = now or datetime.now(timezone.utc)

    drivers = {}
    for driver_type, components in DEFAULT_COMPONENTS.items():
        confidence, delta_7d, delta_30d = DEFAULT_DRIVER_STATS[driver_type]
        drivers[driver_type.value] = DriverSnapshot(
            driver_type=driver_type,
            score=score_components(components),
            confidence=confidence,
            components=[replace(component) for component in components],
            delta_7d=delta_7d,
            delta_30d=delta_30d,
            updated_at=now,
        )

    last = len(DEFAULT_HISTORY) - 1
    history = [
        HistoricalScore(date=now - timedelta(days=last - i), score=score)
        for i, score in enumerate(DEFAULT_HISTORY)
    ]

    logger.debug(f"Generated demo EVI snapshot for {org_id}")

    return CompositeSnapshot(
        org_id=org_id,
        generated_at=now,
        historical_scores=history,
        **drivers,
    )
