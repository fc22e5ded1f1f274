"""Dip opportunity/trap prediction from opposing point tallies."""

from dip_radar.logging_config import get_logger
from dip_radar.models.flow import FlowWindowStats
from dip_radar.outcome_predictor import EntryZone
from dip_radar.services.liquidity_health.models import LiquidityHealthSignals
from dip_radar.services.microcap.models import DipPrediction
from dip_radar.services.wallet_quality.models import WalletQualityAnalysis
from dip_radar.utils.numeric import sanitize

logger = get_logger(__name__)

BUYING_PRESSURE_RATIO = 0.6
SELLING_PRESSURE_RATIO = 0.4
LOW_MEV_SCORE = 30
HIGH_MEV_SCORE = 50
ROUTER_TX_PER_MINUTE = 5
ROUTER_MAX_AVERAGE_SIZE_USD = 100
MIN_CALL_SCORE = 40

TRAP_DIP_DEPTH = 20
OPPORTUNITY_DIP_DEPTH = 5


def predict_dip(
    flow: FlowWindowStats,
    wallet_quality: WalletQualityAnalysis,
    lp_health: LiquidityHealthSignals,
    current_price: float,
) -> DipPrediction:
    """Predict whether the current dip is an opportunity or a trap.

    Opportunity and trap points are tallied independently. A side wins
    when it scores higher and reaches 40; otherwise neither is called.

    Args:
        flow: Flow statistics
        wallet_quality: Wallet composition of the holder set
        lp_health: Liquidity pool health
        current_price: Latest price; non-finite or negative values count as 0

    Returns:
        DipPrediction
    """
    price = max(0.0, sanitize(current_price))
    mev = flow.mev_patterns
    reasons = []
    opportunity = 0
    trap = 0

    if flow.buy_sell_ratio > BUYING_PRESSURE_RATIO:
        opportunity += 20
        reasons.append("Buying pressure increasing")

    if wallet_quality.high_quality_wallet_count > 0:
        opportunity += 15
        reasons.append("Strong wallets accumulating")

    if not wallet_quality.jeeter_dominance and not wallet_quality.sniper_dominance:
        opportunity += 15
        reasons.append("Jeeters/snipers cleared out")

    if lp_health.is_healthy:
        opportunity += 10
        reasons.append("LP health good")

    if not mev.detected or mev.score < LOW_MEV_SCORE:
        opportunity += 10
        reasons.append("Low MEV activity")

    if wallet_quality.sniper_dominance:
        trap += 25
        reasons.append("Snipers still dominant - likely trap")

    if mev.detected and mev.score > HIGH_MEV_SCORE:
        trap += 20
        reasons.append("High MEV activity - manipulation likely")

    if not lp_health.is_healthy:
        trap += 20
        reasons.append("LP health poor - risk of removal")

    if flow.buy_sell_ratio < SELLING_PRESSURE_RATIO:
        trap += 15
        reasons.append("Selling pressure still high")

    if (
        flow.transactions_per_minute > ROUTER_TX_PER_MINUTE
        and flow.average_transaction_size < ROUTER_MAX_AVERAGE_SIZE_USD
    ):
        trap += 15
        reasons.append("Possible router arbitrage manipulation")

    is_opportunity = opportunity > trap and opportunity >= MIN_CALL_SCORE
    is_trap = trap > opportunity and trap >= MIN_CALL_SCORE

    if is_opportunity:
        confidence = min(100, opportunity)
        depth = OPPORTUNITY_DIP_DEPTH
        entry_zone = EntryZone.around(price, 0.95, 1.05, 0.98)
    elif is_trap:
        confidence = min(100, trap)
        depth = TRAP_DIP_DEPTH
        entry_zone = EntryZone.around(price, 0.7, 0.9, 0.8)
    else:
        confidence = max(opportunity, trap)
        depth = 0
        entry_zone = EntryZone.around(price, 0.9, 1.1, 1.0)

    logger.debug(
        f"Dip prediction: opportunity={opportunity}, trap={trap}, "
        f"call={'opportunity' if is_opportunity else 'trap' if is_trap else 'none'}"
    )

    return DipPrediction(
        is_dip_opportunity=is_opportunity,
        is_dip_trap=is_trap,
        dip_confidence=confidence,
        expected_dip_depth=depth,
        entry_zone=entry_zone,
        opportunity_score=opportunity,
        trap_score=trap,
        reasons=tuple(reasons),
    )
