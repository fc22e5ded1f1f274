"""Safety and market health screens.

The safety filter is a set of binary checks that reject scam-like tokens
outright. The market health filter screens for tradeable microcaps and
also reports a score. Checks that need contract or historical analysis
are reported as None rather than guessed.
"""

from typing import Optional

from dip_radar.logging_config import get_logger, log_with_context
from dip_radar.models.flow import FlowWindowStats
from dip_radar.models.token import TokenSnapshot
from dip_radar.services.danger_zone.models import RedFlagSignals
from dip_radar.services.filters.models import (
    MarketHealthChecks,
    MarketHealthFilterResult,
    SafetyChecks,
    SafetyFilterResult,
)
from dip_radar.services.jeeter_risk.models import HolderAnalysis
from dip_radar.services.liquidity_health.models import LiquidityHealthSignals
from dip_radar.services.wallet_quality.models import WalletCategory, WalletQualityAnalysis
from dip_radar.utils.numeric import clamp, safe_ratio

logger = get_logger(__name__)

# Safety
LP_HEALTHY_SCORE = 70
HONEYPOT_JEETER_PERCENTAGE = 60
HONEYPOT_CONCENTRATION = 80
MAX_REASONABLE_SUPPLY = 1e12
SCAM_JEETER_RISK = 70
MAX_SAFE_CONCENTRATION = 60
MAX_SAFE_JEETER_PERCENTAGE = 50
MIN_SAFE_HOLDERS = 20

# Market health
MIN_MARKET_CAP = 50_000
MAX_MARKET_CAP = 2_000_000
MIN_LP_MC_RATIO = 0.1
MAX_LP_MC_RATIO = 0.5
MIN_HOLDERS = 50
MIN_LIQUIDITY = 20_000
MIN_VOLUME_24H = 50_000
MAX_BOT_PERCENTAGE = 50
MAX_SNIPER_PERCENTAGE = 30
MINUTES_PER_DAY = 60 * 24


def run_safety_filter(
    token: TokenSnapshot,
    holder_analysis: HolderAnalysis,
    lp_health: LiquidityHealthSignals,
    danger_zone: RedFlagSignals,
    wallet_quality: Optional[WalletQualityAnalysis] = None,
) -> SafetyFilterResult:
    """Run hard pass/fail safety checks.

    Args:
        token: Token snapshot
        holder_analysis: Holder distribution summary
        lp_health: Liquidity health signals
        danger_zone: Red flag signals
        wallet_quality: Optional wallet composition

    Returns:
        SafetyFilterResult; passed only when no check failed
    """
    failed = []

    lp_healthy = lp_health.is_healthy and lp_health.health_score >= LP_HEALTHY_SCORE
    # Lock status needs on-chain verification; a healthy funded pool stands in
    lp_locked = lp_health.is_healthy and lp_health.liquidity_amount > 0
    if not lp_locked:
        failed.append("LP not locked or unhealthy")
    if not lp_healthy:
        failed.append("LP health score too low")

    honeypot = (
        holder_analysis.jeeter_percentage > HONEYPOT_JEETER_PERCENTAGE
        or holder_analysis.holder_concentration > HONEYPOT_CONCENTRATION
    )
    if honeypot:
        failed.append("Honeypot patterns detected")

    mint_abuse = token.supply > MAX_REASONABLE_SUPPLY
    if mint_abuse:
        failed.append("Potential mint abuse (supply too high)")

    sniper_dominance = wallet_quality.sniper_dominance if wallet_quality else False
    scam_patterns = (
        danger_zone.is_danger_zone
        or sniper_dominance
        or holder_analysis.jeeter_risk_score > SCAM_JEETER_RISK
    )
    if scam_patterns:
        failed.append("Scam patterns detected")

    safe_tokenomics = (
        holder_analysis.holder_concentration < MAX_SAFE_CONCENTRATION
        and holder_analysis.jeeter_percentage < MAX_SAFE_JEETER_PERCENTAGE
        and holder_analysis.total_holders >= MIN_SAFE_HOLDERS
    )
    if not safe_tokenomics:
        failed.append("Unsafe tokenomics (too concentrated or jeeter-heavy)")

    result = SafetyFilterResult(
        passed=not failed,
        failed_checks=tuple(failed),
        details=SafetyChecks(
            lp_locked=lp_locked,
            lp_healthy=lp_healthy,
            honeypot=honeypot,
            mint_abuse=mint_abuse,
            scam_patterns=scam_patterns,
            safe_tokenomics=safe_tokenomics,
        ),
    )

    log_with_context(
        logger, "debug", "Safety filter evaluated",
        token=token.address, passed=result.passed, failed=len(failed),
    )
    return result


def run_market_health_filter(
    token: TokenSnapshot,
    holder_analysis: HolderAnalysis,
    flow: FlowWindowStats,
    wallet_quality: WalletQualityAnalysis,
    volume_24h: Optional[float] = None,
) -> MarketHealthFilterResult:
    """Screen for a healthy, tradeable microcap.

    Args:
        token: Token snapshot
        holder_analysis: Holder distribution summary
        flow: Flow statistics, used to estimate volume when none is given
        wallet_quality: Wallet composition
        volume_24h: Optional reported 24h volume in USD

    Returns:
        MarketHealthFilterResult
    """
    failed = []
    score = 100

    market_cap = token.market_cap
    market_cap_in_range = MIN_MARKET_CAP <= market_cap <= MAX_MARKET_CAP
    if not market_cap_in_range:
        direction = "too low" if market_cap < MIN_MARKET_CAP else "too high"
        failed.append(f"Market cap {direction} (${market_cap / 1000:.0f}K)")
        score -= 30

    liquidity = token.liquidity
    lp_mc_ratio = safe_ratio(liquidity, market_cap)
    lp_mc_ratio_stable = MIN_LP_MC_RATIO <= lp_mc_ratio <= MAX_LP_MC_RATIO
    if not lp_mc_ratio_stable:
        failed.append(f"LP/MC ratio unstable ({lp_mc_ratio * 100:.1f}%)")
        score -= 20

    total_holders = holder_analysis.total_holders
    min_holders = total_holders >= MIN_HOLDERS
    if not min_holders:
        failed.append(f"Insufficient holders ({total_holders} < {MIN_HOLDERS})")
        score -= 15

    min_liquidity = liquidity >= MIN_LIQUIDITY
    if not min_liquidity:
        failed.append(
            f"Insufficient liquidity (${liquidity / 1000:.0f}K < ${MIN_LIQUIDITY / 1000:.0f}K)"
        )
        score -= 15

    # Without a reported volume, extrapolate the current swap rate to a day
    volume = volume_24h or 0.0
    if volume == 0:
        volume = flow.average_transaction_size * flow.transactions_per_minute * MINUTES_PER_DAY
    min_volume = volume >= MIN_VOLUME_24H
    if not min_volume:
        failed.append(
            f"Insufficient volume (${volume / 1000:.0f}K < ${MIN_VOLUME_24H / 1000:.0f}K)"
        )
        score -= 10

    bot_percentage = safe_ratio(wallet_quality.count(WalletCategory.MEV_BOT), total_holders) * 100
    no_bot_only_volume = bot_percentage < MAX_BOT_PERCENTAGE
    if not no_bot_only_volume:
        failed.append(f"Bot-dominated volume ({bot_percentage:.1f}%)")
        score -= 20

    sniper_percentage = safe_ratio(wallet_quality.count(WalletCategory.SNIPER), total_holders) * 100
    no_sniper_dominance = sniper_percentage < MAX_SNIPER_PERCENTAGE
    if not no_sniper_dominance:
        failed.append(f"Sniper-dominated ({sniper_percentage:.1f}%)")
        score -= 15

    # Volume is scored but not required to pass
    passed = (
        market_cap_in_range
        and lp_mc_ratio_stable
        and min_holders
        and min_liquidity
        and no_bot_only_volume
        and no_sniper_dominance
    )

    result = MarketHealthFilterResult(
        passed=passed,
        score=clamp(score, 0, 100),
        failed_checks=tuple(failed),
        details=MarketHealthChecks(
            market_cap_in_range=market_cap_in_range,
            lp_mc_ratio_stable=lp_mc_ratio_stable,
            min_holders=min_holders,
            min_liquidity=min_liquidity,
            min_volume=min_volume,
            no_bot_only_volume=no_bot_only_volume,
            no_sniper_dominance=no_sniper_dominance,
        ),
    )

    log_with_context(
        logger, "debug", "Market health filter evaluated",
        token=token.address, passed=passed, score=result.score,
    )
    return result
