"""Liquidity pool health scorer."""

from typing import Optional

from dip_radar.config import LiquidityThresholds, get_thresholds
from dip_radar.logging_config import get_logger
from dip_radar.models.token import TokenSnapshot
from dip_radar.services.liquidity_health.models import LiquidityHealthSignals
from dip_radar.utils.numeric import clamp, safe_ratio

logger = get_logger(__name__)

# Score deductions
CRITICAL_LIQUIDITY_PENALTY = 40
LOW_LIQUIDITY_PENALTY = 20
MODERATE_LIQUIDITY_PENALTY = 10
CRITICAL_RATIO_PENALTY = 30
LOW_RATIO_PENALTY = 15
HIGH_RATIO_PENALTY = 10


def score_liquidity(
    token: TokenSnapshot,
    thresholds: Optional[LiquidityThresholds] = None,
) -> LiquidityHealthSignals:
    """Score the liquidity pool of a token.

    Starts at 100 and deducts for thin absolute liquidity and for a
    pool that is small (or suspiciously large) relative to market cap.

    Args:
        token: Token snapshot with liquidity and market cap in USD
        thresholds: Optional threshold overrides

    Returns:
        LiquidityHealthSignals
    """
    limits = thresholds or get_thresholds().liquidity
    liquidity = token.liquidity
    market_cap = token.market_cap

    lp_ratio = safe_ratio(liquidity, market_cap) if market_cap > 0 else 0.0
    risks = []
    score = 100.0

    # 1. Absolute liquidity amount
    if liquidity < limits.critical_usd:
        risks.append(f"LP too thin (<${limits.critical_usd:,.0f})")
        score -= CRITICAL_LIQUIDITY_PENALTY
    elif liquidity < limits.low_usd:
        risks.append(f"LP low (<${limits.low_usd:,.0f})")
        score -= LOW_LIQUIDITY_PENALTY
    elif liquidity < limits.moderate_usd:
        risks.append("LP moderate")
        score -= MODERATE_LIQUIDITY_PENALTY

    # 2. LP to market cap ratio
    if lp_ratio > 0:
        if lp_ratio < limits.ratio_critical:
            risks.append(f"LP/MC ratio too low (<{limits.ratio_critical:.0%})")
            score -= CRITICAL_RATIO_PENALTY
        elif lp_ratio < limits.ratio_low:
            risks.append(f"LP/MC ratio low (<{limits.ratio_low:.0%})")
            score -= LOW_RATIO_PENALTY
        elif lp_ratio > limits.ratio_high:
            risks.append(f"LP/MC ratio suspiciously high (>{limits.ratio_high:.0%})")
            score -= HIGH_RATIO_PENALTY

    # 3. Valued token with no pool at all
    if market_cap > 0 and liquidity == 0:
        risks.append("No liquidity detected")
        score = 0

    health_score = clamp(score, 0, 100)

    logger.debug(
        f"Liquidity health for {token.address}: score={health_score}, ratio={lp_ratio:.4f}"
    )

    return LiquidityHealthSignals(
        liquidity_amount=liquidity,
        lp_ratio=lp_ratio,
        is_healthy=health_score >= limits.healthy_score,
        health_score=health_score,
        risks=tuple(risks),
    )
