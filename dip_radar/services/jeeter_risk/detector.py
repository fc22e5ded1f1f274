"""Per-holder jeeter detection and holder-set jeeter metrics."""

from typing import Sequence

from dip_radar.models.holder import HolderRecord
from dip_radar.services.jeeter_risk.models import JeeterDetection, JeeterMetrics
from dip_radar.utils.numeric import count_where, mean

ROUND_TRIP_SECONDS = 60 * 60
QUICK_EXIT_SECONDS = 5 * 60
JEETER_SCORE_THRESHOLD = 30
BOT_TX_COUNT = 100
BOT_HOLD_MINUTES = 5
QUICK_SELLER_HOLD_MINUTES = 30
TOP_HOLDER_COUNT = 10


def _hold_time_points(hold: float):
    if hold < 5:
        return 30, "Extremely short hold time (<5 min)"
    if hold < 30:
        return 20, "Very short hold time (<30 min)"
    if hold < 60:
        return 10, "Short hold time (<1 hour)"
    return 0, None


def detect_jeeter(holder: HolderRecord) -> JeeterDetection:
    """Score how jeeter-like a single holder's trading is.

    Args:
        holder: Holder record, optionally with buy/sell event history

    Returns:
        JeeterDetection; ``is_jeeter`` at a score of 30 or more
    """
    reasons = []
    score = 0

    # 1. Hold time
    if holder.average_hold_time is not None:
        points, reason = _hold_time_points(holder.average_hold_time)
        if points:
            score += points
            reasons.append(reason)

    # 2. Buys sold again within the hour
    if holder.has_trade_history and holder.buy_count:
        round_trips = holder.count_round_trips(ROUND_TRIP_SECONDS)
        if round_trips > 0:
            percentage = round_trips / holder.buy_count * 100
            if percentage > 50:
                score += 25
                reasons.append(f"High round-trip rate ({percentage:.1f}%)")
            elif percentage > 30:
                score += 15
                reasons.append(f"Moderate round-trip rate ({percentage:.1f}%)")

    # 3. Transaction frequency
    tx_count = holder.transaction_count
    if tx_count is not None:
        if tx_count > 100:
            score += 15
            reasons.append("Very high transaction count (possible bot)")
        elif tx_count > 50:
            score += 10
            reasons.append("High transaction count")

    # 4. Quick exits
    if holder.has_trade_history:
        quick_exits = holder.count_round_trips(QUICK_EXIT_SECONDS)
        if quick_exits > holder.buy_count * 0.5:
            score += 20
            reasons.append("Frequent quick exits (<5 min)")

    # 5. Large holder trading frequently
    if holder.percentage > 1 and tx_count and tx_count > 10:
        score += 10
        reasons.append("Large holder with frequent trading")

    return JeeterDetection(
        is_jeeter=score >= JEETER_SCORE_THRESHOLD,
        score=min(100, score),
        reasons=tuple(reasons),
    )


def calculate_jeeter_metrics(holders: Sequence[HolderRecord]) -> JeeterMetrics:
    """Aggregate jeeter metrics over a holder set.

    Args:
        holders: Holder list ordered largest first

    Returns:
        JeeterMetrics (all zero for an empty set)
    """
    holders = list(holders)
    if not holders:
        return JeeterMetrics()

    total = len(holders)
    hold_times = [h.average_hold_time for h in holders if h.average_hold_time is not None]

    round_trippers = count_where(
        holders, lambda h: h.count_round_trips(ROUND_TRIP_SECONDS) > 0
    )

    bot_like = count_where(
        holders,
        lambda h: bool(h.transaction_count and h.transaction_count > BOT_TX_COUNT)
        or (h.average_hold_time is not None and h.average_hold_time < BOT_HOLD_MINUTES),
    )

    def exits_fast(holder: HolderRecord) -> bool:
        hold = holder.average_hold_time
        return hold is not None and hold < QUICK_SELLER_HOLD_MINUTES

    top_holders = holders[:TOP_HOLDER_COUNT]
    quick_sellers = count_where(top_holders, exits_fast)

    return JeeterMetrics(
        average_hold_time=mean(hold_times),
        round_tripper_percentage=round_trippers / total * 100,
        bot_like_patterns=bot_like,
        sell_velocity=quick_sellers / len(top_holders) * 100,
        churn_rate=count_where(holders, exits_fast) / total * 100,
    )
