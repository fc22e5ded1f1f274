"""
Structural health engine.

Runs the wallet, liquidity, seller exhaustion and danger zone analyzers
over one holder/flow/token snapshot and fuses them into a 0-100
``structural_score`` (higher = healthier, bottom more likely).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from dip_radar.config import AnalysisThresholds, get_thresholds
from dip_radar.logging_config import get_logger
from dip_radar.models.flow import FlowWindowStats
from dip_radar.models.holder import HolderRecord
from dip_radar.models.token import PricePoint, TokenSnapshot
from dip_radar.services.danger_zone import RedFlagSignals, detect_danger_zone
from dip_radar.services.liquidity_health import LiquidityHealthSignals, score_liquidity
from dip_radar.services.seller_exhaustion import SellerExhaustionSignals, detect_seller_exhaustion
from dip_radar.services.wallet_quality import WalletQualityAnalysis, analyze_wallet_quality
from dip_radar.utils.numeric import clamp, round_half_up, sanitize

logger = get_logger(__name__)


@dataclass(frozen=True)
class StructuralSignals:
    """Component results and the fused structural score."""

    wallet_quality: WalletQualityAnalysis
    lp_health: LiquidityHealthSignals
    seller_exhaustion: SellerExhaustionSignals
    danger_zone: RedFlagSignals
    structural_score: float
    reasons: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wallet_quality": self.wallet_quality.to_dict(),
            "lp_health": self.lp_health.to_dict(),
            "seller_exhaustion": self.seller_exhaustion.to_dict(),
            "danger_zone": self.danger_zone.to_dict(),
            "structural_score": self.structural_score,
            "reasons": list(self.reasons),
        }


def compute_structural_signals(
    holders: Sequence[HolderRecord],
    flow: FlowWindowStats,
    token: TokenSnapshot,
    prices: Sequence[PricePoint] = (),
    thresholds: Optional[AnalysisThresholds] = None,
) -> StructuralSignals:
    """Compute structural health signals.

    Args:
        holders: Holder snapshot
        flow: Flow statistics
        token: Token snapshot
        prices: Optional price history for the exhaustion volatility checks
        thresholds: Optional threshold overrides

    Returns:
        StructuralSignals
    """
    thresholds = thresholds or get_thresholds()
    weights = thresholds.structural

    wallet_quality = analyze_wallet_quality(holders, thresholds.wallet)
    lp_health = score_liquidity(token, thresholds.liquidity)
    exhaustion = detect_seller_exhaustion(flow, prices, thresholds.exhaustion)
    danger_zone = detect_danger_zone(flow, wallet_quality, token, thresholds.danger_zone)

    score = (
        weights.base_score
        + sanitize(wallet_quality.overall_quality_score) * weights.wallet_quality_weight
        + sanitize(lp_health.health_score) * weights.lp_health_weight
        + sanitize(exhaustion.exhaustion_score) * weights.exhaustion_weight
        - sanitize(danger_zone.risk_score) * weights.danger_weight
    )
    structural_score = clamp(round_half_up(score), 0, 100)

    reasons = []
    if danger_zone.is_danger_zone:
        reasons.append("Danger zone detected")
    if not lp_health.is_healthy:
        reasons.append("LP health low")
    if exhaustion.is_bottom_signal:
        reasons.append("Seller exhaustion bottom signal")

    logger.debug(
        f"Structural score for {token.address}: {structural_score} "
        f"(wallets={wallet_quality.overall_quality_score:.1f}, lp={lp_health.health_score}, "
        f"exhaustion={exhaustion.exhaustion_score}, danger={danger_zone.risk_score})"
    )

    return StructuralSignals(
        wallet_quality=wallet_quality,
        lp_health=lp_health,
        seller_exhaustion=exhaustion,
        danger_zone=danger_zone,
        structural_score=structural_score,
        reasons=tuple(reasons),
    )
