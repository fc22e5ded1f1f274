"""Flow aggregation from parsed swap records.

Turns a list of swaps into the windowed ``FlowWindowStats`` consumed by
the analyzers. Windows are measured back from ``now``; a window with no
volume reports a neutral 0.5 buy ratio.
"""

import time
from collections import Counter
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from dip_radar.logging_config import get_logger
from dip_radar.models.flow import (
    NEUTRAL_RATIO,
    FlowWindowStats,
    MevPatterns,
    SwapTransaction,
    WhaleActivity,
)

logger = get_logger(__name__)

LARGE_TRANSACTION_USD = 5_000
WHALE_TRANSACTION_USD = 10_000

WINDOW_SECONDS = {
    "buy_sell_ratio_5m": 5 * 60,
    "buy_sell_ratio_15m": 15 * 60,
    "buy_sell_ratio_1h": 60 * 60,
    "buy_sell_ratio_24h": 24 * 60 * 60,
}

# MEV heuristics
SANDWICH_WINDOW_SECONDS = 60
SANDWICH_SIZE_MULTIPLIER = 2
BOT_WALLET_MIN_SWAPS = 10
SANDWICH_POINTS = 20
FRONT_RUNNING_POINTS = 15
BOT_WALLET_POINTS = 5
MEV_DETECTION_SCORE = 30


def buy_ratio(swaps: Iterable[SwapTransaction]) -> float:
    """Buy volume over total volume, neutral when there is no volume."""
    buy_volume = 0.0
    sell_volume = 0.0
    for swap in swaps:
        if swap.type == "buy":
            buy_volume += swap.amount_usd
        else:
            sell_volume += swap.amount_usd

    total = buy_volume + sell_volume
    return buy_volume / total if total > 0 else NEUTRAL_RATIO


def _is_sandwich(first: SwapTransaction, second: SwapTransaction, third: SwapTransaction) -> bool:
    if not (first.wallet == second.wallet == third.wallet):
        return False
    if (first.type, second.type, third.type) != ("buy", "buy", "sell"):
        return False
    if second.amount_usd <= first.amount_usd * SANDWICH_SIZE_MULTIPLIER:
        return False
    elapsed = third.timestamp.timestamp() - first.timestamp.timestamp()
    return elapsed < SANDWICH_WINDOW_SECONDS


def detect_mev_patterns(swaps: Sequence[SwapTransaction]) -> MevPatterns:
    """Detect sandwich and bot-like patterns in time-ordered swaps.

    Front-running needs instruction-level data and is always 0 here.
    """
    sandwich_attacks = sum(
        1
        for first, second, third in zip(swaps, swaps[1:], swaps[2:])
        if _is_sandwich(first, second, third)
    )
    front_running = 0

    swaps_per_wallet = Counter(swap.wallet for swap in swaps)
    bot_like_behavior = sum(1 for count in swaps_per_wallet.values() if count > BOT_WALLET_MIN_SWAPS)

    score = min(
        100,
        sandwich_attacks * SANDWICH_POINTS
        + front_running * FRONT_RUNNING_POINTS
        + bot_like_behavior * BOT_WALLET_POINTS,
    )

    return MevPatterns(
        detected=score > MEV_DETECTION_SCORE,
        sandwich_attacks=sandwich_attacks,
        front_running=front_running,
        bot_like_behavior=bot_like_behavior,
        score=score,
    )


def aggregate_flow(
    swaps: Iterable[SwapTransaction],
    now: Optional[datetime] = None,
) -> FlowWindowStats:
    """Aggregate parsed swaps into flow window statistics.

    Args:
        swaps: Parsed swaps in any order
        now: Reference time for the sub-windows (defaults to the current time)

    Returns:
        FlowWindowStats; the empty instance when there are no swaps
    """
    ordered: List[SwapTransaction] = sorted(swaps, key=lambda swap: swap.timestamp.timestamp())
    if not ordered:
        return FlowWindowStats.empty()

    reference = now.timestamp() if now is not None else time.time()

    window_ratios = {}
    for name, seconds in WINDOW_SECONDS.items():
        cutoff = reference - seconds
        window_ratios[name] = buy_ratio(s for s in ordered if s.timestamp.timestamp() > cutoff)

    buy_volume = sum(s.amount_usd for s in ordered if s.type == "buy")
    sell_volume = sum(s.amount_usd for s in ordered if s.type == "sell")
    total_volume = buy_volume + sell_volume

    large = [s for s in ordered if s.amount_usd >= LARGE_TRANSACTION_USD]
    whales = [s for s in ordered if s.amount_usd >= WHALE_TRANSACTION_USD]
    whale_volume = sum(s.amount_usd for s in whales)

    # A single swap, or swaps sharing one timestamp, have no measurable rate
    span_minutes = (ordered[-1].timestamp.timestamp() - ordered[0].timestamp.timestamp()) / 60
    transactions_per_minute = len(ordered) / span_minutes if span_minutes > 0 else 0.0

    stats = FlowWindowStats(
        buy_sell_ratio=buy_ratio(ordered),
        buy_volume=buy_volume,
        sell_volume=sell_volume,
        total_volume=total_volume,
        large_buy_count=sum(1 for s in large if s.type == "buy"),
        large_sell_count=sum(1 for s in large if s.type == "sell"),
        whale_activity=WhaleActivity(
            count=len(whales),
            total_volume=whale_volume,
            average_size=whale_volume / len(whales) if whales else 0.0,
        ),
        mev_patterns=detect_mev_patterns(ordered),
        transaction_count=len(ordered),
        transactions_per_minute=transactions_per_minute,
        average_transaction_size=total_volume / len(ordered),
        **window_ratios,
    )

    logger.debug(
        f"Aggregated {len(ordered)} swaps: ratio={stats.buy_sell_ratio:.2f}, "
        f"tx/min={transactions_per_minute:.2f}, mev={stats.mev_patterns.score}"
    )

    return stats
