"""Microcap dip screen.

Condenses seller exhaustion, wallet quality, liquidity health and the
danger zone into a single 0-100 score with a risk level and an entry
recommendation, next to an independent opportunity/trap call.
"""

from typing import List, Optional, Sequence, Tuple

from dip_radar.analysis import current_price
from dip_radar.config import AnalysisThresholds, get_thresholds
from dip_radar.logging_config import get_logger, log_with_context
from dip_radar.models.flow import FlowWindowStats
from dip_radar.models.holder import HolderRecord
from dip_radar.models.token import PricePoint, TokenSnapshot
from dip_radar.outcome_predictor import RiskLevel
from dip_radar.services.danger_zone import detect_danger_zone
from dip_radar.services.danger_zone.models import RedFlagSignals
from dip_radar.services.jeeter_risk.holder_analysis import annotate_jeeters
from dip_radar.services.liquidity_health import score_liquidity
from dip_radar.services.liquidity_health.models import LiquidityHealthSignals
from dip_radar.services.microcap.dip_predictor import predict_dip
from dip_radar.services.microcap.models import EntryRecommendation, MicrocapAnalysis
from dip_radar.services.seller_exhaustion import detect_seller_exhaustion
from dip_radar.services.seller_exhaustion.models import SellerExhaustionSignals
from dip_radar.services.wallet_quality import WalletCategory, analyze_wallet_quality
from dip_radar.services.wallet_quality.models import WalletQualityAnalysis
from dip_radar.utils.numeric import clamp, round_half_up, safe_ratio, sanitize

logger = get_logger(__name__)

BASE_SCORE = 50
EXHAUSTION_WEIGHT = 20
BOTTOM_SIGNAL_BONUS = 10
WALLET_QUALITY_WEIGHT = 25
HIGH_QUALITY_BONUS = 5
LP_HEALTH_WEIGHT = 15
STRONG_BUY_RATIO = 0.6
STRONG_BUY_POINTS = 15
MODERATE_BUY_RATIO = 0.5
MODERATE_BUY_POINTS = 8
HIGH_SELL_RATIO = 0.4
HIGH_SELL_PENALTY = 15
DANGER_PENALTY_DIVISOR = 4
MEV_PENALTY_DIVISOR = 5

HIGH_RISK_SCORE = 30
MEDIUM_RISK_SCORE = 60
AVOID_SCORE = 30
CAUTIOUS_SCORE = 50
STRONG_ENTRY_SCORE = 70


def calculate_microcap_score(
    flow: FlowWindowStats,
    exhaustion: SellerExhaustionSignals,
    wallet_quality: WalletQualityAnalysis,
    lp_health: LiquidityHealthSignals,
    danger_zone: RedFlagSignals,
) -> Tuple[float, List[str]]:
    """Additive 0-100 microcap score around a base of 50.

    Returns:
        Tuple of (score, reasons)
    """
    reasons = []
    score = float(BASE_SCORE)

    score += sanitize(exhaustion.exhaustion_score) / 100 * EXHAUSTION_WEIGHT
    if exhaustion.is_bottom_signal:
        score += BOTTOM_SIGNAL_BONUS
        reasons.append("Bottom signal detected")

    score += sanitize(wallet_quality.overall_quality_score) / 100 * WALLET_QUALITY_WEIGHT
    if wallet_quality.high_quality_wallet_count > 0:
        score += HIGH_QUALITY_BONUS
        reasons.append("High quality wallets present")

    score += sanitize(lp_health.health_score) / 100 * LP_HEALTH_WEIGHT

    ratio = flow.buy_sell_ratio
    if ratio > STRONG_BUY_RATIO:
        score += STRONG_BUY_POINTS
        reasons.append("Strong buying pressure")
    elif ratio > MODERATE_BUY_RATIO:
        score += MODERATE_BUY_POINTS
    elif ratio < HIGH_SELL_RATIO:
        score -= HIGH_SELL_PENALTY
        reasons.append("High selling pressure")

    if danger_zone.is_danger_zone:
        score -= sanitize(danger_zone.risk_score) / DANGER_PENALTY_DIVISOR
        reasons.append("Jeeter zone detected")

    mev = flow.mev_patterns
    if mev.detected:
        score -= sanitize(mev.score) / MEV_PENALTY_DIVISOR
        reasons.append("MEV activity detected")

    return clamp(round_half_up(score), 0, 100), reasons


def determine_risk_level(score: float, is_jeeter_zone: bool) -> Tuple[RiskLevel, str]:
    if is_jeeter_zone or score < HIGH_RISK_SCORE:
        return RiskLevel.HIGH, "High risk: Jeeter zone or low score"
    if score < MEDIUM_RISK_SCORE:
        return RiskLevel.MEDIUM, "Medium risk: Moderate score"
    return RiskLevel.LOW, "Low risk: Good score"


def determine_entry_recommendation(
    score: float,
    is_jeeter_zone: bool,
    is_bottom_signal: bool,
    jeeter_dominance: bool,
) -> EntryRecommendation:
    """Map the score and zone flags onto an entry recommendation.

    A strong entry needs a score of 70, a seller exhaustion bottom signal
    and no jeeter dominance.
    """
    if is_jeeter_zone or score < AVOID_SCORE:
        return EntryRecommendation.AVOID
    if score < CAUTIOUS_SCORE:
        return EntryRecommendation.CAUTIOUS
    if score >= STRONG_ENTRY_SCORE and is_bottom_signal and not jeeter_dominance:
        return EntryRecommendation.STRONG
    return EntryRecommendation.GOOD


def analyze_microcap(
    holders: Sequence[HolderRecord],
    flow: FlowWindowStats,
    token: TokenSnapshot,
    prices: Sequence[PricePoint] = (),
    thresholds: Optional[AnalysisThresholds] = None,
) -> MicrocapAnalysis:
    """Screen a microcap dip.

    Args:
        holders: Holder snapshot ordered largest first
        flow: Flow statistics for the token
        token: Token snapshot
        prices: Optional price samples ordered ascending by time
        thresholds: Optional threshold overrides

    Returns:
        MicrocapAnalysis
    """
    thresholds = thresholds or get_thresholds()
    prices = list(prices)
    holders = annotate_jeeters(holders)

    exhaustion = detect_seller_exhaustion(flow, prices, thresholds.exhaustion)
    wallet_quality = analyze_wallet_quality(holders, thresholds.wallet)
    danger_zone = detect_danger_zone(flow, wallet_quality, token, thresholds.danger_zone)
    lp_health = score_liquidity(token, thresholds.liquidity)
    prediction = predict_dip(flow, wallet_quality, lp_health, current_price(prices, token))

    score, reasoning = calculate_microcap_score(
        flow, exhaustion, wallet_quality, lp_health, danger_zone
    )
    is_jeeter_zone = danger_zone.is_danger_zone

    risk_level, risk_reason = determine_risk_level(score, is_jeeter_zone)
    reasoning.append(risk_reason)

    recommendation = determine_entry_recommendation(
        score, is_jeeter_zone, exhaustion.is_bottom_signal, wallet_quality.jeeter_dominance
    )
    reasoning.append(f"Recommendation: {recommendation.value.upper()}")

    result = MicrocapAnalysis(
        token_address=token.address,
        score=score,
        risk_level=risk_level,
        entry_recommendation=recommendation,
        is_jeeter_dominated=is_jeeter_zone or wallet_quality.jeeter_dominance,
        buy_sell_ratio=flow.buy_sell_ratio,
        seller_exhaustion=exhaustion,
        wallet_quality=wallet_quality,
        lp_health=lp_health,
        danger_zone=danger_zone,
        dip_prediction=prediction,
        sniper_percentage=safe_ratio(wallet_quality.count(WalletCategory.SNIPER), len(holders)) * 100,
        reasoning=tuple(reasoning),
    )

    log_with_context(
        logger,
        "info",
        f"Microcap analysis completed for {token.display_name}",
        token=token.address,
        score=score,
        risk=risk_level.value,
        recommendation=recommendation.value,
    )

    return result
