"""Holder analysis builder.

Runs jeeter detection over the largest holders, detects bundles and
derives concentration and jeeter risk for the whole holder set.
"""

from dataclasses import replace
from typing import List, Optional, Sequence

from dip_radar.config import BundleThresholds
from dip_radar.logging_config import get_logger, log_with_context
from dip_radar.models.flow import NEUTRAL_RATIO, FlowWindowStats
from dip_radar.models.holder import HolderRecord
from dip_radar.services.bundle_detector import detect_bundles
from dip_radar.services.jeeter_risk.calculator import compute_jeeter_risk_score, get_risk_tier
from dip_radar.services.jeeter_risk.detector import calculate_jeeter_metrics, detect_jeeter
from dip_radar.services.jeeter_risk.models import HolderAnalysis

logger = get_logger(__name__)

JEETER_SCAN_LIMIT = 20
CONCENTRATION_HOLDERS = 10
SPIKY_VOLUME_SHARE = 0.3
SPIKY_SCORE = 80
CALM_SCORE = 20


def annotate_jeeters(
    holders: Sequence[HolderRecord],
    limit: int = JEETER_SCAN_LIMIT,
) -> List[HolderRecord]:
    """Return holders with jeeter flags set on the largest ``limit`` of them.

    Records are immutable; annotated holders are new copies.
    """
    annotated = []
    for index, holder in enumerate(holders):
        if index < limit:
            detection = detect_jeeter(holder)
            holder = holder.model_copy(
                update={"is_jeeter": detection.is_jeeter, "jeeter_score": detection.score}
            )
        annotated.append(holder)
    return annotated


def volume_spikiness(volume_5m: Optional[float], volume_24h: Optional[float]) -> float:
    """Coarse spikiness score; 0 when volume data is unavailable."""
    if volume_5m is None or volume_24h is None:
        return 0.0
    return SPIKY_SCORE if volume_5m > volume_24h * SPIKY_VOLUME_SHARE else CALM_SCORE


def build_holder_analysis(
    holders: Sequence[HolderRecord],
    flow: Optional[FlowWindowStats] = None,
    volume_5m: Optional[float] = None,
    volume_24h: Optional[float] = None,
    bundle_thresholds: Optional[BundleThresholds] = None,
) -> HolderAnalysis:
    """Build the holder analysis of a token.

    Args:
        holders: Holder list ordered largest first
        flow: Optional flow statistics for the buy/sell ratio (0.5 without)
        volume_5m: Optional 5 minute trading volume in USD
        volume_24h: Optional 24 hour trading volume in USD
        bundle_thresholds: Optional bundle detection overrides

    Returns:
        HolderAnalysis with jeeter risk score and tier
    """
    holders = annotate_jeeters(holders)
    metrics = calculate_jeeter_metrics(holders)
    bundles = detect_bundles(holders, bundle_thresholds)

    total = len(holders)
    jeeter_count = sum(1 for h in holders if h.is_jeeter)

    analysis = HolderAnalysis(
        total_holders=total,
        top_holders=tuple(holders[:JEETER_SCAN_LIMIT]),
        jeeter_count=jeeter_count,
        jeeter_percentage=jeeter_count / total * 100 if total else 0.0,
        bundle_count=len(bundles),
        average_hold_time=metrics.average_hold_time,
        holder_concentration=sum(h.percentage for h in holders[:CONCENTRATION_HOLDERS]),
        buy_sell_ratio=flow.buy_sell_ratio if flow is not None else NEUTRAL_RATIO,
        volume_spikiness=volume_spikiness(volume_5m, volume_24h),
        metrics=metrics,
    )

    risk_score = compute_jeeter_risk_score(analysis, metrics)
    analysis = replace(analysis, jeeter_risk_score=risk_score, risk_level=get_risk_tier(risk_score))

    log_with_context(
        logger, "debug", "Holder analysis complete",
        holders=total, jeeters=jeeter_count, bundles=len(bundles), risk=risk_score,
    )

    return analysis
