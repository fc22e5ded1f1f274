"""Helper functions for seller exhaustion detection."""

from typing import Sequence

from dip_radar.models.flow import FlowWindowStats
from dip_radar.models.token import PricePoint
from dip_radar.utils.numeric import relative_changes, sanitize, std_dev

# Volatility reported when there are too few samples to measure it
UNMEASURED_VOLATILITY = 1.0


def estimate_sell_volume_15m(flow: FlowWindowStats, fifteen_minute_share: float) -> float:
    """Estimate the last 15 minutes of sell volume from window aggregates.

    The 15-minute window is approximated as a fixed share of total volume,
    split by the 15-minute buy ratio.
    """
    total_volume_15m = flow.total_volume * fifteen_minute_share
    return total_volume_15m * (1 - flow.buy_sell_ratio_15m)


def price_volatility(prices: Sequence[PricePoint]) -> float:
    """Standard deviation of absolute relative price changes.

    Returns ``UNMEASURED_VOLATILITY`` below two samples so that a missing
    series never reads as a tight range.
    """
    if len(prices) < 2:
        return UNMEASURED_VOLATILITY

    changes = relative_changes([p.price for p in prices], absolute=True)
    return sanitize(std_dev(changes))


def volatility_trend(prices: Sequence[PricePoint], min_samples: int) -> float:
    """Relative change of volatility between the two halves of a series.

    Negative values mean volatility is decreasing. Returns 0 below
    ``min_samples`` or when the earlier half was perfectly flat.
    """
    if len(prices) < min_samples:
        return 0.0

    midpoint = len(prices) // 2
    earlier = price_volatility(prices[:midpoint])
    recent = price_volatility(prices[midpoint:])

    if earlier == 0:
        return 0.0

    return sanitize((recent - earlier) / earlier)
