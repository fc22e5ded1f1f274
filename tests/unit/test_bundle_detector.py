"""Unit tests for the bundle detector."""

import pytest

from dip_radar.config import BundleThresholds
from dip_radar.services.bundle_detector import detect_bundles, detect_coordinated_activity
from tests.fixtures.common import make_holder


@pytest.fixture
def bundle_holders():
    """Five 0.5% holders within 3% of each other, two of them jeeters."""
    balances = [1000, 1010, 1020, 1030, 990]
    return [
        make_holder(f"b{i}", balance=balance, percentage=0.5, is_jeeter=i < 2)
        for i, balance in enumerate(balances)
    ]


class TestBundleDetector:
    """Test suite for detect_bundles."""

    def test_jeeter_bundle_is_suspicious(self, bundle_holders):
        bundles = detect_bundles(bundle_holders)

        assert len(bundles) == 1
        bundle = bundles[0]
        assert bundle.size == 5
        assert bundle.is_suspicious is True
        assert bundle.total_percentage == pytest.approx(2.5)
        assert bundle.average_balance == pytest.approx(1010)
        assert "2 jeeters in bundle" in bundle.reasons
        assert not any("combined percentage" in reason for reason in bundle.reasons)

    def test_group_without_triggers_is_reported_but_not_suspicious(self):
        holders = [make_holder(f"h{i}", balance=1000 + i, percentage=0.5) for i in range(3)]
        bundles = detect_bundles(holders)

        assert len(bundles) == 1
        assert bundles[0].is_suspicious is False
        assert bundles[0].reasons == ()

    def test_two_similar_holders_are_not_a_bundle(self):
        holders = [make_holder(f"h{i}", balance=1000, percentage=0.5) for i in range(2)]

        assert detect_bundles(holders) == []

    def test_tiny_holders_do_not_join(self):
        holders = [make_holder("anchor", balance=1000, percentage=0.5)]
        holders += [make_holder(f"dust{i}", balance=1000, percentage=0.1) for i in range(3)]

        assert detect_bundles(holders) == []

    def test_zero_balance_anchor_never_matches(self):
        holders = [make_holder(f"z{i}", balance=0, percentage=0.5) for i in range(4)]

        assert detect_bundles(holders) == []

    def test_similar_hold_times_are_suspicious(self):
        holders = [
            make_holder(f"h{i}", balance=1000, percentage=0.5, average_hold_time=hold)
            for i, hold in enumerate([10, 12, 15])
        ]
        bundle = detect_bundles(holders)[0]

        assert bundle.is_suspicious is True
        assert "Similar hold times suggest coordination" in bundle.reasons

    def test_large_combined_percentage_is_suspicious(self):
        holders = [make_holder(f"h{i}", balance=1000, percentage=2) for i in range(3)]
        bundle = detect_bundles(holders)[0]

        assert bundle.is_suspicious is True
        assert bundle.total_percentage == pytest.approx(6)

    def test_holders_join_only_one_group(self):
        holders = [make_holder(f"a{i}", balance=1000, percentage=0.5) for i in range(3)]
        holders += [make_holder(f"b{i}", balance=5000, percentage=0.5) for i in range(3)]
        bundles = detect_bundles(holders)

        assert len(bundles) == 2
        members = [address for bundle in bundles for address in bundle.addresses]
        assert len(members) == len(set(members)) == 6

    def test_repeated_calls_are_independent(self, bundle_holders):
        assert detect_bundles(bundle_holders) == detect_bundles(bundle_holders)

    def test_custom_group_size(self):
        holders = [make_holder(f"h{i}", balance=1000, percentage=0.5) for i in range(2)]

        assert len(detect_bundles(holders, BundleThresholds(min_group_size=2))) == 1


class TestCoordinatedActivity:
    """Test suite for detect_coordinated_activity."""

    def test_summary(self, bundle_holders):
        activity = detect_coordinated_activity(bundle_holders)

        assert activity.has_bundles is True
        assert activity.bundle_count == 1
        assert len(activity.suspicious_bundles) == 1

    def test_no_bundles(self):
        activity = detect_coordinated_activity([])

        assert activity.has_bundles is False
        assert activity.bundle_count == 0
        assert activity.to_dict()["suspicious_bundles"] == []
