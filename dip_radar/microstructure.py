"""
Microstructure signal engine.

Derives short-horizon momentum, flow deltas, volatility compression and a
bot activity index from a price series and the windowed buy ratios, then
folds them into a 0-100 ``micro_score`` (higher = bottom more likely).

The 5m/15m/1h flow ratios stand in for the 5/15/60-sample windows; sample
cadence is the caller's responsibility and is not validated here.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from dip_radar.config import MicrostructureParams, get_thresholds
from dip_radar.logging_config import get_logger
from dip_radar.models.flow import FlowWindowStats
from dip_radar.models.token import PricePoint, TokenSnapshot
from dip_radar.utils.numeric import clamp, round_half_up, sanitize, std_dev_relative_changes

logger = get_logger(__name__)


@dataclass(frozen=True)
class MicrostructureSignals:
    """Short-window price and flow signals."""

    momentum_5: float = 0.0
    momentum_15: float = 0.0
    momentum_60: float = 0.0
    buy_sell_delta_5: float = 0.0
    buy_sell_delta_15: float = 0.0
    buy_sell_delta_60: float = 0.0
    volatility_std_dev_recent: float = 0.0
    volatility_trend_pct: float = 0.0  # negative = compression
    bot_activity_index: float = 0.0  # 0-100
    # Needs historical pool snapshots; always 0 until such a feed exists
    liquidity_velocity: float = 0.0
    micro_score: float = 50.0
    reasons: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "momentum_5": self.momentum_5,
            "momentum_15": self.momentum_15,
            "momentum_60": self.momentum_60,
            "buy_sell_delta_5": self.buy_sell_delta_5,
            "buy_sell_delta_15": self.buy_sell_delta_15,
            "buy_sell_delta_60": self.buy_sell_delta_60,
            "volatility_std_dev_recent": self.volatility_std_dev_recent,
            "volatility_trend_pct": self.volatility_trend_pct,
            "bot_activity_index": self.bot_activity_index,
            "liquidity_velocity": self.liquidity_velocity,
            "micro_score": self.micro_score,
            "reasons": list(self.reasons),
        }


def last_samples(prices: Sequence[float], count: int) -> List[float]:
    """The last ``count`` samples, or the whole series when shorter."""
    if len(prices) >= count:
        return list(prices[-count:])
    return list(prices)


def momentum(samples: Sequence[float], limit: float) -> float:
    """Relative change from first to last sample, clamped to ``[-limit, limit]``."""
    if len(samples) < 2:
        return 0.0

    first = samples[0]
    if abs(first) < 1e-12:
        return 0.0

    return clamp((samples[-1] - first) / first, -limit, limit)


def bot_activity_index(flow: FlowWindowStats, params: MicrostructureParams) -> float:
    """Heuristic 0-100 index: fast, tiny swaps and MEV read as bots."""
    score = flow.transactions_per_minute / params.bot_reference_tx_per_minute * 50
    if flow.average_transaction_size < params.bot_small_tx_usd:
        score += 25
    if flow.mev_patterns.detected:
        score += min(flow.mev_patterns.score, params.bot_mev_cap)

    return min(100, round_half_up(max(0.0, sanitize(score))))


def compute_microstructure_signals(
    prices: Sequence[PricePoint],
    flow: FlowWindowStats,
    token: Optional[TokenSnapshot] = None,
    params: Optional[MicrostructureParams] = None,
) -> MicrostructureSignals:
    """Compute microstructure signals.

    Args:
        prices: Price samples ordered ascending by time (may be empty)
        flow: Flow statistics with 5m/15m/1h buy ratios
        token: Optional token snapshot, reserved for pool velocity
        params: Optional parameter overrides

    Returns:
        MicrostructureSignals
    """
    params = params or get_thresholds().microstructure
    series = [point.price for point in prices]
    count = len(series)
    reasons = []

    # Momentum over the last 5/15/60 samples
    limit = params.momentum_limit
    m5 = momentum(last_samples(series, max(2, min(5, count))), limit)
    m15 = momentum(last_samples(series, max(3, min(15, count))), limit)
    m60 = momentum(last_samples(series, max(5, min(60, count))), limit)

    # Successive flow deltas, fast window minus slower window
    delta_5 = flow.buy_sell_ratio_5m - flow.buy_sell_ratio_15m
    delta_15 = flow.buy_sell_ratio_15m - flow.buy_sell_ratio_1h
    delta_60 = flow.buy_sell_ratio_1h - flow.buy_sell_ratio

    # Volatility now versus the window before it
    window = params.volatility_window
    recent_volatility = clamp(
        std_dev_relative_changes(series[-window:]), 0, params.volatility_limit
    )
    earlier = series[-2 * window:-window] if count > 2 * window else series[:-window]
    earlier_volatility = clamp(std_dev_relative_changes(earlier), 0, params.volatility_limit)

    if earlier_volatility == 0:
        volatility_trend = 0.0
    else:
        volatility_trend = clamp(
            (recent_volatility - earlier_volatility) / max(earlier_volatility, 0.01), -1, 1
        )

    bot_index = bot_activity_index(flow, params)

    # Placeholder until pool snapshots are tracked over time
    liquidity_velocity = 0.0

    score = 50.0

    # Buyers returning on the short window
    score += clamp(round_half_up(delta_15 * 100), -20, 20)

    # Falling but decelerating momentum reads as a bottom forming
    deceleration = (m15 - m60) * 100
    score += clamp(round_half_up(-m60 * 50 + deceleration), -15, 15)

    if volatility_trend < params.volatility_compression_pct:
        score += 15
        reasons.append("Volatility compression detected")
    elif recent_volatility < params.volatility_collapse_std_dev:
        score += 10
        reasons.append("Low recent volatility")
    else:
        score -= 10

    score -= round_half_up(bot_index / 100 * 20)
    score += clamp(round_half_up(liquidity_velocity * 100), -10, 10)

    micro_score = clamp(round_half_up(sanitize(score)), 0, 100)

    if delta_15 > params.flow_delta_reason:
        reasons.append("Buy pressure increasing on short window")
    if delta_15 < -params.flow_delta_reason:
        reasons.append("Buy pressure falling on short window")

    logger.debug(
        f"Microstructure: score={micro_score}, m60={m60:.4f}, vol={recent_volatility:.4f}, "
        f"trend={volatility_trend:.3f}, bots={bot_index}"
    )

    return MicrostructureSignals(
        momentum_5=m5,
        momentum_15=m15,
        momentum_60=m60,
        buy_sell_delta_5=sanitize(delta_5),
        buy_sell_delta_15=sanitize(delta_15),
        buy_sell_delta_60=sanitize(delta_60),
        volatility_std_dev_recent=recent_volatility,
        volatility_trend_pct=volatility_trend,
        bot_activity_index=bot_index,
        liquidity_velocity=liquidity_velocity,
        micro_score=micro_score,
        reasons=tuple(reasons),
    )
