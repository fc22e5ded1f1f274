"""Jeeter risk and overall investability scoring.

Each metric maps to points through an ordered bucket table; the first
matching bucket wins. Tables are (threshold, points) pairs.
"""

from typing import List, Sequence, Tuple

from dip_radar.services.jeeter_risk.models import HolderAnalysis, JeeterMetrics, RiskTier
from dip_radar.utils.numeric import clamp, round_half_up, safe_ratio

Buckets = Sequence[Tuple[float, float]]

HOLD_TIME_BUCKETS: Buckets = ((5, 20), (30, 15), (60, 10), (120, 5))
ROUND_TRIPPER_BUCKETS: Buckets = ((60, 20), (40, 15), (20, 10), (10, 5))
BOT_PERCENTAGE_BUCKETS: Buckets = ((20, 15), (10, 10), (5, 5))
SELL_VELOCITY_BUCKETS: Buckets = ((70, 15), (50, 12), (30, 8), (15, 4))
CONCENTRATION_BUCKETS: Buckets = ((50, 15), (30, 12), (20, 8), (10, 4))
CHURN_BUCKETS: Buckets = ((60, 10), (40, 7), (20, 4), (10, 2))
BUY_SELL_RATIO_BUCKETS: Buckets = ((0.25, 5), (0.4, 3), (0.6, 1))

RISK_TIERS = ((80, RiskTier.CRITICAL), (50, RiskTier.HIGH), (20, RiskTier.MODERATE))


def points_below(value: float, buckets: Buckets) -> float:
    """Points of the first bucket whose threshold ``value`` is under."""
    for threshold, points in buckets:
        if value < threshold:
            return points
    return 0


def points_above(value: float, buckets: Buckets) -> float:
    """Points of the first bucket whose threshold ``value`` exceeds."""
    for threshold, points in buckets:
        if value > threshold:
            return points
    return 0


def compute_jeeter_risk_score(holder_analysis: HolderAnalysis, metrics: JeeterMetrics) -> float:
    """Compute the holder-set jeeter risk score.

    Args:
        holder_analysis: Holder distribution summary
        metrics: Jeeter metrics of the same holder set

    Returns:
        Score in [0, 100], higher = more jeeter risk
    """
    bot_percentage = safe_ratio(metrics.bot_like_patterns, holder_analysis.total_holders) * 100

    score = (
        points_below(metrics.average_hold_time, HOLD_TIME_BUCKETS)
        + points_above(metrics.round_tripper_percentage, ROUND_TRIPPER_BUCKETS)
        + points_above(bot_percentage, BOT_PERCENTAGE_BUCKETS)
        + points_above(metrics.sell_velocity, SELL_VELOCITY_BUCKETS)
        + points_above(holder_analysis.holder_concentration, CONCENTRATION_BUCKETS)
        + points_above(metrics.churn_rate, CHURN_BUCKETS)
        + points_below(holder_analysis.buy_sell_ratio, BUY_SELL_RATIO_BUCKETS)
    )

    return clamp(round_half_up(score), 0, 100)


def get_risk_tier(jeeter_risk_score: float) -> RiskTier:
    for threshold, tier in RISK_TIERS:
        if jeeter_risk_score >= threshold:
            return tier
    return RiskTier.LOW


def compute_overall_score(holder_analysis: HolderAnalysis) -> float:
    """Overall investability score; higher = better opportunity.

    Jeeter risk is applied first at half weight, then concentration and
    jeeter share penalties, then a bonus for a healthy distribution.
    """
    concentration = holder_analysis.holder_concentration
    jeeter_percentage = holder_analysis.jeeter_percentage

    score = 100 - holder_analysis.jeeter_risk_score * 0.5

    if concentration > 30:
        score -= 20
    elif concentration > 20:
        score -= 10

    if jeeter_percentage > 50:
        score -= 15
    elif jeeter_percentage > 30:
        score -= 10
    elif jeeter_percentage > 15:
        score -= 5

    if concentration < 10 and jeeter_percentage < 10:
        score += 10

    return clamp(round_half_up(score), 0, 100)


def generate_recommendations(holder_analysis: HolderAnalysis) -> List[str]:
    """Plain-language recommendations for a holder analysis."""
    recommendations = []
    risk = holder_analysis.jeeter_risk_score
    concentration = holder_analysis.holder_concentration

    if risk >= 80:
        recommendations.append(
            "CRITICAL: Extreme jeeter activity detected. High risk of price manipulation."
        )
        recommendations.append("Avoid this token - likely to be heavily scalped.")
    elif risk >= 50:
        recommendations.append("High jeeter activity. Be cautious with entry timing.")
        recommendations.append("Consider waiting for jeeter activity to decrease.")
    elif risk >= 20:
        recommendations.append("Moderate jeeter presence. Monitor holder behavior.")

    if concentration > 50:
        recommendations.append(
            "Top 10 holders control >50% of supply. High centralization risk."
        )
    elif concentration > 30:
        recommendations.append("Top 10 holders control >30% of supply. Monitor for dumps.")

    if holder_analysis.bundle_count > 0:
        recommendations.append(
            f"{holder_analysis.bundle_count} bundle groups detected. "
            "Possible coordinated activity."
        )

    if holder_analysis.average_hold_time < 30:
        recommendations.append("Very low average hold time. Token may lack sticky holders.")

    if holder_analysis.buy_sell_ratio < 0.4:
        recommendations.append(
            "Sell pressure is dominant. Wait for buying pressure to increase."
        )

    if risk < 20 and concentration < 20:
        recommendations.append("Healthy holder distribution with low jeeter activity.")
        recommendations.append("Consider this token for longer-term holds.")

    return recommendations
