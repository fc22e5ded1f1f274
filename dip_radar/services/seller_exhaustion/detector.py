"""Seller exhaustion detector.

Looks for the on-chain footprint of sellers running out: shrinking sell
volume and frequency, buyers taking over, one last large exit followed by
silence, idle MEV bots and a compressing price range. Each signal adds a
fixed number of points; the bottom signal is a stricter conjunctive gate.
"""

from typing import Optional, Sequence

from dip_radar.config import ExhaustionThresholds, get_thresholds
from dip_radar.logging_config import get_logger
from dip_radar.models.flow import FlowWindowStats
from dip_radar.models.token import PricePoint
from dip_radar.services.seller_exhaustion.helpers import (
    estimate_sell_volume_15m,
    price_volatility,
    volatility_trend,
)
from dip_radar.services.seller_exhaustion.models import SellerExhaustionSignals
from dip_radar.utils.numeric import clamp

logger = get_logger(__name__)

# Points per signal
DECREASING_SELL_VOLUME_POINTS = 20
DECREASING_SELL_FREQUENCY_POINTS = 15
SELLER_DOMINANCE_COLLAPSE_POINTS = 20
FINAL_LARGE_SELLER_EXIT_POINTS = 15
MEV_INACTIVITY_POINTS = 10
TIGHT_PRICE_RANGE_POINTS = 10
VOLATILITY_COLLAPSE_POINTS = 10


def detect_seller_exhaustion(
    flow: FlowWindowStats,
    prices: Sequence[PricePoint],
    thresholds: Optional[ExhaustionThresholds] = None,
) -> SellerExhaustionSignals:
    """Detect seller capitulation patterns.

    Args:
        flow: Aggregated flow statistics for the lookback window
        prices: Price series ordered ascending by time (may be empty)
        thresholds: Optional threshold overrides

    Returns:
        SellerExhaustionSignals
    """
    limits = thresholds or get_thresholds().exhaustion
    prices = list(prices)
    score = 0

    # 1. Sell volume in the last 15m well below the hourly sell volume
    sell_volume_15m = estimate_sell_volume_15m(flow, limits.fifteen_minute_volume_share)
    decreasing_sell_volume = sell_volume_15m < flow.sell_volume * limits.sell_volume_drop_ratio
    if decreasing_sell_volume:
        score += DECREASING_SELL_VOLUME_POINTS

    # 2. Few large sells relative to large buys
    decreasing_sell_frequency = (
        flow.large_sell_count < flow.large_buy_count * limits.large_sell_to_buy_ratio
        and flow.large_sell_count < limits.max_large_sells
    )
    if decreasing_sell_frequency:
        score += DECREASING_SELL_FREQUENCY_POINTS

    # 3. Buyers have taken over
    seller_dominance_collapse = flow.buy_sell_ratio > limits.buy_ratio_collapse
    if seller_dominance_collapse:
        score += SELLER_DOMINANCE_COLLAPSE_POINTS

    # 4. One last capitulation, then silence
    final_large_seller_exit = 0 < flow.large_sell_count <= limits.final_exit_max_large_sells
    if final_large_seller_exit:
        score += FINAL_LARGE_SELLER_EXIT_POINTS

    # 5. MEV / snipe bots idle
    mev = flow.mev_patterns
    mev_inactivity = not mev.detected or mev.score < limits.mev_inactive_score
    if mev_inactivity:
        score += MEV_INACTIVITY_POINTS

    # 6. Tight price range over the trailing window
    window = prices[-limits.volatility_window:]
    volatility = price_volatility(window)
    tight_price_range = volatility < limits.tight_range_volatility
    if tight_price_range:
        score += TIGHT_PRICE_RANGE_POINTS

    # 7. Volatility compressing over time
    trend = volatility_trend(window, limits.min_trend_samples)
    volatility_collapse = trend <= limits.volatility_collapse_trend
    if volatility_collapse:
        score += VOLATILITY_COLLAPSE_POINTS

    exhaustion_score = clamp(score, 0, 100)

    is_bottom_signal = (
        exhaustion_score >= limits.bottom_score
        and tight_price_range
        and seller_dominance_collapse
        and mev_inactivity
    )

    logger.debug(
        f"Seller exhaustion score={exhaustion_score}, bottom={is_bottom_signal}, "
        f"volatility={volatility:.4f}, trend={trend:.3f}"
    )

    return SellerExhaustionSignals(
        decreasing_sell_volume=decreasing_sell_volume,
        decreasing_sell_frequency=decreasing_sell_frequency,
        seller_dominance_collapse=seller_dominance_collapse,
        final_large_seller_exit=final_large_seller_exit,
        mev_inactivity=mev_inactivity,
        tight_price_range=tight_price_range,
        volatility_collapse=volatility_collapse,
        exhaustion_score=exhaustion_score,
        is_bottom_signal=is_bottom_signal,
        price_volatility=volatility,
        volatility_trend=trend,
    )
