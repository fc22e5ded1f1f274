"""Danger zone detector.

Aggregates red flags from transaction flow, wallet composition and pool
depth into one additive risk score. Flags are independent: a token with a
$3k pool trips both the "low" and the "thin" liquidity penalties.
"""

from typing import Optional

from dip_radar.config import DangerZoneThresholds, get_thresholds
from dip_radar.logging_config import get_logger
from dip_radar.models.flow import FlowWindowStats
from dip_radar.models.token import TokenSnapshot
from dip_radar.services.danger_zone.models import RedFlagSignals
from dip_radar.services.wallet_quality.models import WalletCategory, WalletQualityAnalysis
from dip_radar.utils.numeric import sanitize

logger = get_logger(__name__)

# Points per flag
HIGH_SELL_RATIO_POINTS = 15
FAST_ROTATION_POINTS = 15
SNIPERS_POINTS = 20
QUICK_DUMPS_POINTS = 20
LOW_LIQUIDITY_POINTS = 15
MEV_SPAM_POINTS = 15
SWAP_BOTS_POINTS = 10
NO_STRONG_WALLETS_POINTS = 15
THIN_LIQUIDITY_POINTS = 20
ROUTER_ARBITRAGE_POINTS = 10
JEETER_DOMINANCE_POINTS = 25
SNIPER_DOMINANCE_POINTS = 20


def detect_danger_zone(
    flow: FlowWindowStats,
    wallet_quality: WalletQualityAnalysis,
    token: TokenSnapshot,
    thresholds: Optional[DangerZoneThresholds] = None,
) -> RedFlagSignals:
    """Detect whether a token is in a jeeter/danger zone.

    Args:
        flow: Aggregated flow statistics
        wallet_quality: Wallet composition of the holder set
        token: Token snapshot (liquidity in USD)
        thresholds: Optional threshold overrides

    Returns:
        RedFlagSignals with ``is_danger_zone`` set at ``danger_score``
    """
    limits = thresholds or get_thresholds().danger_zone
    flags = {}
    score = 0

    # 1. Sellers dominate the flow
    sell_ratio = 1 - flow.buy_sell_ratio
    flags["high_sell_to_buy_ratio"] = sell_ratio > limits.sell_ratio
    if flags["high_sell_to_buy_ratio"]:
        score += HIGH_SELL_RATIO_POINTS

    # Missing hold times count as zero
    average_hold = wallet_quality.average_hold_time

    # 2. Holders rotate out quickly
    flags["fast_holder_rotation"] = average_hold < limits.fast_rotation_minutes
    if flags["fast_holder_rotation"]:
        score += FAST_ROTATION_POINTS

    # 3. Snipers in the holder set
    sniper_fraction = wallet_quality.fraction(WalletCategory.SNIPER)
    flags["snipers_entering_early"] = sniper_fraction > limits.sniper_fraction
    if flags["snipers_entering_early"]:
        score += SNIPERS_POINTS

    # 4. Quick dumps, additive with fast rotation
    flags["quick_dumps"] = average_hold < limits.quick_dump_minutes
    if flags["quick_dumps"]:
        score += QUICK_DUMPS_POINTS

    # 5. Low liquidity (0 means unknown, not drained)
    liquidity = token.liquidity
    low_liquidity = 0 < liquidity < limits.lp_low_usd
    if low_liquidity:
        score += LOW_LIQUIDITY_POINTS

    # 6. MEV spam
    mev = flow.mev_patterns
    flags["mev_spam"] = mev.detected and mev.score > limits.mev_spam_score
    if flags["mev_spam"]:
        score += MEV_SPAM_POINTS

    # 7. Swap bots in the holder set
    mev_bot_fraction = wallet_quality.fraction(WalletCategory.MEV_BOT)
    flags["too_many_swap_bots"] = mev_bot_fraction > limits.swap_bot_fraction
    if flags["too_many_swap_bots"]:
        score += SWAP_BOTS_POINTS

    # 8. Nobody is accumulating
    flags["no_strong_wallet_accumulation"] = wallet_quality.high_quality_wallet_count == 0
    if flags["no_strong_wallet_accumulation"]:
        score += NO_STRONG_WALLETS_POINTS

    # 9. Pool too thin to absorb exits
    flags["lp_too_thin"] = low_liquidity
    if 0 < liquidity < limits.lp_thin_usd:
        score += THIN_LIQUIDITY_POINTS

    # 10. Many tiny swaps, the footprint of router arbitrage
    flags["router_arbitrage_pump"] = (
        flow.transactions_per_minute > limits.router_tx_per_minute
        and flow.average_transaction_size < limits.router_max_average_size_usd
    )
    if flags["router_arbitrage_pump"]:
        score += ROUTER_ARBITRAGE_POINTS

    # Dominance flags feed the score but have no boolean of their own
    if wallet_quality.jeeter_dominance:
        score += JEETER_DOMINANCE_POINTS
    if wallet_quality.sniper_dominance:
        score += SNIPER_DOMINANCE_POINTS

    # Need historical pool and creator-wallet snapshots; never set until
    # such a feed exists
    flags["liquidity_drainage"] = False
    flags["creator_wallet_activity"] = False
    flags["suspicious_lp_behavior"] = False

    risk_score = sanitize(score)
    signals = RedFlagSignals(
        risk_score=risk_score,
        is_danger_zone=risk_score >= limits.danger_score,
        **flags,
    )

    logger.debug(
        f"Danger zone for {token.address}: risk={risk_score}, "
        f"danger={signals.is_danger_zone}, flags={signals.active_flags()}"
    )

    return signals
