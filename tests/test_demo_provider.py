"""
Test Suite for the Demo Snapshot Provider
"""

import pytest
from datetime import timedelta

from evi.models import DriverType, StatusBand, Trend
from evi.providers import generate_demo_snapshot, score_components
from evi.providers.demo import DEFAULT_COMPONENTS, DEFAULT_HISTORY
from evi.scoring import compute_index


class TestDemoSnapshot:
    """Test the fallback snapshot used when provider data is unavailable."""

    def test_driver_scores_from_components(self):
        assert score_components(DEFAULT_COMPONENTS[DriverType.VISIBILITY]) == pytest.approx(42.8, abs=0.1)
        assert score_components(DEFAULT_COMPONENTS[DriverType.AUTHORITY]) == pytest.approx(59.4, abs=0.1)
        assert score_components(DEFAULT_COMPONENTS[DriverType.MOMENTUM]) == pytest.approx(17.7, abs=0.1)

    def test_zero_max_value_component_skipped(self):
        from evi.models import ComponentMetric

        assert score_components([ComponentMetric("m", "Broken", 10, 0, 1.0)]) == 0.0

    def test_snapshot_complete(self, fixed_now):
        snapshot = generate_demo_snapshot("org_demo", now=fixed_now)

        assert snapshot.org_id == "org_demo"
        assert snapshot.missing_drivers() == []
        assert snapshot.visibility.confidence == 0.85
        assert snapshot.authority.delta_30d == 6.4
        assert len(snapshot.momentum.components) == 4

    def test_history_ends_now(self, fixed_now):
        snapshot = generate_demo_snapshot("org_demo", now=fixed_now)

        assert [h.score for h in snapshot.historical_scores] == DEFAULT_HISTORY
        assert snapshot.historical_scores[-1].date == fixed_now
        assert snapshot.historical_scores[0].date == fixed_now - timedelta(days=6)

    def test_demo_index(self, fixed_now):
        index = compute_index(generate_demo_snapshot("org_demo", now=fixed_now), computed_at=fixed_now)

        assert index.score == pytest.approx(42.3, abs=0.1)
        assert index.status == StatusBand.EMERGING
        assert index.trend == Trend.DOWN
        assert index.confidence == 0.82
        assert index.sparkline == DEFAULT_HISTORY

    def test_demo_is_deterministic(self, fixed_now):
        first = generate_demo_snapshot("org_demo", now=fixed_now)
        second = generate_demo_snapshot("org_demo", now=fixed_now)

        assert first == second

    def test_components_not_shared_with_defaults(self, fixed_now):
        """Editing a snapshot's components leaves the defaults and other snapshots intact."""
        first = generate_demo_snapshot("org_demo", now=fixed_now)
        second = generate_demo_snapshot("org_demo", now=fixed_now)

        first.visibility.components[0].value = 99

        assert DEFAULT_COMPONENTS[DriverType.VISIBILITY][0].value == 24
        assert second.visibility.components[0].value == 24
        assert first.visibility.components[0] is not DEFAULT_COMPONENTS[DriverType.VISIBILITY][0]
