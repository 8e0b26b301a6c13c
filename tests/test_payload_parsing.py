"""
Test Suite for Provider Payload Parsing

Tests conversion of provider payloads into snapshots:
- Valid payloads round into a computable snapshot
- Structurally incomplete payloads are rejected
- Out-of-range numbers pass through for clamping
"""

import copy
import logging

import pytest

from evi.models import (
    CompositeSnapshot,
    DriverType,
    InvalidSnapshotError,
    parse_composite_snapshot,
)
from evi.scoring import compute_index


class TestValidPayloads:
    """Test parsing of well-formed payloads."""

    def test_parse_full_payload(self, provider_payload):
        snapshot = parse_composite_snapshot(provider_payload)

        assert isinstance(snapshot, CompositeSnapshot)
        assert snapshot.org_id == "org_acme"
        assert snapshot.visibility.driver_type == DriverType.VISIBILITY
        assert snapshot.authority.score == 64.8
        assert snapshot.momentum.delta_7d == -0.3
        assert len(snapshot.historical_scores) == 7
        assert snapshot.historical_scores[-1].score == 67.4

    def test_components_parsed(self, provider_payload):
        snapshot = parse_composite_snapshot(provider_payload)

        component = snapshot.visibility.components[0]
        assert component.id == "m_ai_presence"
        assert component.max_value == 100
        assert component.source == "pr"
        assert snapshot.authority.components == []

    def test_parsed_payload_computes(self, provider_payload):
        index = compute_index(parse_composite_snapshot(provider_payload))

        assert index.score == 67.0
        assert index.delta_7d == 1.9
        assert index.confidence == 0.82

    def test_out_of_range_values_accepted(self, provider_payload):
        """Providers may be imprecise; the engine clamps later."""
        payload = copy.deepcopy(provider_payload)
        payload["visibility"]["score"] = 150
        payload["momentum"]["confidence"] = 1.4

        snapshot = parse_composite_snapshot(payload)

        assert snapshot.visibility.score == 150
        assert compute_index(snapshot).score <= 100

    @pytest.mark.parametrize("extreme", [1e30, -1e30])
    def test_extreme_history_score_computes(self, provider_payload, extreme):
        """Huge finite history scores parse and compute without error."""
        payload = copy.deepcopy(provider_payload)
        payload["historical_scores"][0]["score"] = extreme
        payload["historical_scores"][-2]["score"] = extreme

        index = compute_index(parse_composite_snapshot(payload))

        assert index.score == 67.0
        assert 0 <= index.previous_score <= 100
        assert -100 <= index.delta_30d <= 100

    def test_type_field_optional(self, provider_payload):
        payload = copy.deepcopy(provider_payload)
        del payload["authority"]["type"]

        snapshot = parse_composite_snapshot(payload)

        assert snapshot.authority.driver_type == DriverType.AUTHORITY

    def test_history_optional(self, provider_payload):
        payload = copy.deepcopy(provider_payload)
        del payload["historical_scores"]

        index = compute_index(parse_composite_snapshot(payload))

        assert index.sparkline == [index.score] * 7

    def test_extra_keys_ignored(self, provider_payload):
        payload = copy.deepcopy(provider_payload)
        payload["top_movers"] = []
        payload["visibility"]["narrative"] = "ignored"

        assert parse_composite_snapshot(payload).org_id == "org_acme"


class TestInvalidPayloads:
    """Test rejection of structurally incomplete payloads."""

    @pytest.mark.parametrize("driver", ["visibility", "authority", "momentum"])
    def test_missing_driver(self, provider_payload, driver):
        payload = copy.deepcopy(provider_payload)
        del payload[driver]

        with pytest.raises(InvalidSnapshotError) as exc_info:
            parse_composite_snapshot(payload)

        assert exc_info.value.missing_drivers == [driver]

    def test_null_driver(self, provider_payload):
        payload = copy.deepcopy(provider_payload)
        payload["momentum"] = None

        with pytest.raises(InvalidSnapshotError) as exc_info:
            parse_composite_snapshot(payload)

        assert exc_info.value.missing_drivers == ["momentum"]

    def test_non_numeric_score(self, provider_payload):
        payload = copy.deepcopy(provider_payload)
        payload["visibility"]["score"] = "very visible"

        with pytest.raises(InvalidSnapshotError):
            parse_composite_snapshot(payload)

    def test_nan_score(self, provider_payload):
        payload = copy.deepcopy(provider_payload)
        payload["authority"]["score"] = float("nan")

        with pytest.raises(InvalidSnapshotError):
            parse_composite_snapshot(payload)

    def test_driver_under_wrong_key(self, provider_payload):
        payload = copy.deepcopy(provider_payload)
        payload["visibility"]["type"] = "authority"

        with pytest.raises(InvalidSnapshotError, match="declares type"):
            parse_composite_snapshot(payload)

    def test_driver_under_wrong_key_is_logged(self, provider_payload, caplog):
        payload = copy.deepcopy(provider_payload)
        payload["momentum"]["type"] = "visibility"

        with caplog.at_level(logging.WARNING, logger="evi.models.payloads"):
            with pytest.raises(InvalidSnapshotError):
                parse_composite_snapshot(payload)

        assert "org_acme" in caplog.text
        assert "momentum declares type visibility" in caplog.text

    def test_missing_org_id(self, provider_payload):
        payload = copy.deepcopy(provider_payload)
        del payload["org_id"]

        with pytest.raises(InvalidSnapshotError):
            parse_composite_snapshot(payload)
