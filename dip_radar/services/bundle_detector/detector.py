"""Bundle detector for wallets that look coordinated by a single actor.

Holders are grouped greedily: each unprocessed holder anchors a group and
absorbs every later unprocessed holder whose balance is within 5% of the
anchor's. The pass is O(n^2), which is fine for a top-holder snapshot.
"""

from typing import List, Optional, Sequence, Set

from dip_radar.config import BundleThresholds, get_thresholds
from dip_radar.logging_config import get_logger
from dip_radar.models.holder import HolderRecord
from dip_radar.services.bundle_detector.models import BundleGroup, CoordinatedActivity

logger = get_logger(__name__)


def _balance_difference(anchor: HolderRecord, other: HolderRecord) -> Optional[float]:
    if anchor.balance <= 0:
        return None
    return abs((anchor.balance - other.balance) / anchor.balance)


def _evaluate_group(members: List[HolderRecord], limits: BundleThresholds) -> BundleGroup:
    total_percentage = sum(h.percentage for h in members)
    average_balance = sum(h.balance for h in members) / len(members)

    reasons = []
    is_suspicious = False

    hold_times = [h.average_hold_time for h in members if h.average_hold_time is not None]
    if len(hold_times) >= 2:
        if max(hold_times) - min(hold_times) < limits.max_hold_time_spread_minutes:
            is_suspicious = True
            reasons.append("Similar hold times suggest coordination")

    if total_percentage > limits.suspicious_combined_percentage:
        is_suspicious = True
        reasons.append(f"High combined percentage ({total_percentage:.2f}%)")

    jeeter_count = sum(1 for h in members if h.is_jeeter)
    if jeeter_count >= limits.min_jeeter_members:
        is_suspicious = True
        reasons.append(f"{jeeter_count} jeeters in bundle")

    return BundleGroup(
        addresses=tuple(h.address for h in members),
        total_percentage=total_percentage,
        average_balance=average_balance,
        is_suspicious=is_suspicious,
        reasons=tuple(reasons),
    )


def detect_bundles(
    holders: Sequence[HolderRecord],
    thresholds: Optional[BundleThresholds] = None,
) -> List[BundleGroup]:
    """Detect groups of holders with suspiciously similar balances.

    Args:
        holders: Ordered holder list (largest first)
        thresholds: Optional threshold overrides

    Returns:
        Bundle groups of at least ``min_group_size`` members
    """
    limits = thresholds or get_thresholds().bundle
    holders = list(holders)

    bundles: List[BundleGroup] = []
    processed: Set[str] = set()

    for index, anchor in enumerate(holders):
        if anchor.address in processed:
            continue

        members = [anchor]
        processed.add(anchor.address)

        for other in holders[index + 1:]:
            if other.address in processed:
                continue

            difference = _balance_difference(anchor, other)
            if difference is None:
                continue

            if difference < limits.max_balance_difference and other.percentage > limits.min_member_percentage:
                members.append(other)
                processed.add(other.address)

        if len(members) >= limits.min_group_size:
            bundles.append(_evaluate_group(members, limits))

    if bundles:
        logger.debug(
            f"Detected {len(bundles)} bundle groups "
            f"({sum(1 for b in bundles if b.is_suspicious)} suspicious)"
        )

    return bundles


def detect_coordinated_activity(
    holders: Sequence[HolderRecord],
    thresholds: Optional[BundleThresholds] = None,
) -> CoordinatedActivity:
    """Summarise bundle detection into a coordination verdict."""
    bundles = detect_bundles(holders, thresholds)
    suspicious = tuple(bundle for bundle in bundles if bundle.is_suspicious)

    return CoordinatedActivity(
        has_bundles=len(bundles) > 0,
        bundle_count=len(bundles),
        suspicious_bundles=suspicious,
    )
