"""Wallet behaviour classifier.

Wallets are labelled by an ordered rule chain: rules are evaluated top to
bottom and the first matching rule decides the category. The order is
part of the behaviour (a whale that also snipes is a sniper).
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from dip_radar.config import WalletThresholds, get_thresholds
from dip_radar.logging_config import get_logger
from dip_radar.models.holder import HolderRecord
from dip_radar.services.wallet_quality.models import (
    HIGH_QUALITY_CATEGORIES,
    WalletCategory,
    WalletClassification,
    WalletQualityAnalysis,
)
from dip_radar.utils.numeric import clamp, mean

logger = get_logger(__name__)

UNKNOWN_CLASSIFICATION = WalletClassification(
    category=WalletCategory.UNKNOWN,
    score=50,
    confidence=30,
    reasons=("Insufficient data",),
)


@dataclass(frozen=True)
class ClassificationRule:
    """One entry of the classification chain."""

    category: WalletCategory
    matches: Callable[[HolderRecord, WalletThresholds], bool]
    build: Callable[[HolderRecord, WalletThresholds], WalletClassification]


def is_sniper(holder: HolderRecord, limits: WalletThresholds) -> bool:
    """Very short holds with many transactions, or repeated fast round trips."""
    hold = holder.average_hold_time
    if (
        hold is not None
        and hold < limits.sniper_max_hold_minutes
        and holder.transaction_count
        and holder.transaction_count > limits.sniper_min_tx_count
    ):
        return True

    round_trips = holder.count_round_trips(limits.sniper_round_trip_seconds)
    return round_trips > limits.sniper_min_round_trips


def is_jeeter(holder: HolderRecord, limits: WalletThresholds) -> bool:
    if holder.is_jeeter:
        return True
    return bool(holder.jeeter_score) and holder.jeeter_score > limits.jeeter_score_threshold


def is_mev_bot(holder: HolderRecord, limits: WalletThresholds) -> bool:
    if holder.transaction_count and holder.transaction_count > limits.mev_min_tx_count:
        return True

    hold = holder.average_hold_time
    return (
        holder.buy_count > limits.mev_min_buy_count
        and hold is not None
        and hold < limits.mev_max_hold_minutes
    )


def is_whale(holder: HolderRecord, limits: WalletThresholds) -> bool:
    return holder.percentage > limits.whale_min_percentage


def is_strong_hands(holder: HolderRecord, limits: WalletThresholds) -> bool:
    hold = holder.average_hold_time
    if hold is None:
        return False

    ratio = holder.sell_buy_ratio
    if hold > limits.strong_min_hold_minutes and ratio is not None:
        if ratio < limits.strong_max_sell_buy_ratio:
            return True

    # Held through volatility without a single sell
    return hold > limits.strong_no_sell_hold_minutes and holder.sell_count == 0


def is_weak_hands(holder: HolderRecord, limits: WalletThresholds) -> bool:
    hold = holder.average_hold_time
    ratio = holder.sell_buy_ratio
    return (
        hold is not None
        and hold < limits.weak_max_hold_minutes
        and ratio is not None
        and ratio > limits.weak_min_sell_buy_ratio
    )


def _fixed(category: WalletCategory, score: float, confidence: float, reason: str):
    def build(holder: HolderRecord, limits: WalletThresholds) -> WalletClassification:
        return WalletClassification(category, score, confidence, (reason,))
    return build


def _whale(holder: HolderRecord, limits: WalletThresholds) -> WalletClassification:
    reasons = [f"Large holder ({holder.percentage:.2f}%)"]
    score = 70
    hold = holder.average_hold_time

    # A zero hold time means "no data" here, not "instant exit"
    if hold and hold > limits.whale_long_hold_minutes:
        score = 85
        reasons.append("Long hold time")
    elif hold and hold < limits.whale_fast_exit_minutes:
        score = 40
        reasons.append("Quick exits")

    return WalletClassification(WalletCategory.WHALE, score, 80, tuple(reasons))


CLASSIFICATION_RULES: Sequence[ClassificationRule] = (
    ClassificationRule(
        WalletCategory.SNIPER, is_sniper,
        _fixed(WalletCategory.SNIPER, 20, 70, "Sniper pattern detected"),
    ),
    ClassificationRule(
        WalletCategory.JEETER, is_jeeter,
        _fixed(WalletCategory.JEETER, 10, 80, "Jeeter behavior detected"),
    ),
    ClassificationRule(
        WalletCategory.MEV_BOT, is_mev_bot,
        _fixed(WalletCategory.MEV_BOT, 15, 60, "MEV bot pattern detected"),
    ),
    ClassificationRule(WalletCategory.WHALE, is_whale, _whale),
    ClassificationRule(
        WalletCategory.STRONG_HANDS, is_strong_hands,
        _fixed(WalletCategory.STRONG_HANDS, 80, 75, "Strong hands pattern"),
    ),
    ClassificationRule(
        WalletCategory.WEAK_HANDS, is_weak_hands,
        _fixed(WalletCategory.WEAK_HANDS, 30, 70, "Weak hands pattern"),
    ),
)


def classify_wallet(
    holder: HolderRecord,
    thresholds: Optional[WalletThresholds] = None,
    rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES,
) -> WalletClassification:
    """Classify a single wallet.

    Args:
        holder: Holder record to classify
        thresholds: Optional threshold overrides
        rules: Ordered rule chain (first match wins)

    Returns:
        WalletClassification for the holder
    """
    limits = thresholds or get_thresholds().wallet

    for rule in rules:
        if rule.matches(holder, limits):
            return rule.build(holder, limits)

    return UNKNOWN_CLASSIFICATION


def analyze_wallet_quality(
    holders: Iterable[HolderRecord],
    thresholds: Optional[WalletThresholds] = None,
) -> WalletQualityAnalysis:
    """Classify every holder and aggregate the wallet composition.

    Args:
        holders: Holder snapshot (typically the top 150-200 holders)
        thresholds: Optional threshold overrides

    Returns:
        WalletQualityAnalysis; the overall score is 0 for an empty set
    """
    limits = thresholds or get_thresholds().wallet
    holders = list(holders)

    wallet_scores: Dict[str, WalletClassification] = {}
    distribution: Dict[WalletCategory, int] = {category: 0 for category in WalletCategory}

    for holder in holders:
        classification = classify_wallet(holder, limits)
        wallet_scores[holder.address] = classification
        distribution[classification.category] += 1

    if not holders:
        return WalletQualityAnalysis(
            wallet_scores=wallet_scores,
            category_distribution=distribution,
        )

    total = len(holders)
    average_hold_time = sum(h.average_hold_time or 0.0 for h in holders) / total

    sell_buy_ratios: List[float] = [
        h.sell_count / max(h.buy_count, 1)
        for h in holders
        if h.has_trade_history
    ]
    average_sell_buy_ratio = mean(sell_buy_ratios)

    high_quality = sum(
        1 for score in wallet_scores.values() if score.category in HIGH_QUALITY_CATEGORIES
    )

    jeeter_fraction = distribution[WalletCategory.JEETER] / total
    sniper_fraction = distribution[WalletCategory.SNIPER] / total
    strong_fraction = (
        distribution[WalletCategory.STRONG_HANDS] + distribution[WalletCategory.WHALE]
    ) / total

    overall = strong_fraction * 100 - jeeter_fraction * 50 - sniper_fraction * 30

    analysis = WalletQualityAnalysis(
        wallet_scores=wallet_scores,
        category_distribution=distribution,
        average_hold_time=average_hold_time,
        average_sell_buy_ratio=average_sell_buy_ratio,
        high_quality_wallet_count=high_quality,
        jeeter_dominance=jeeter_fraction > limits.jeeter_dominance_fraction,
        sniper_dominance=sniper_fraction > limits.sniper_dominance_fraction,
        overall_quality_score=clamp(overall, 0, 100),
    )

    logger.debug(
        f"Classified {total} wallets: quality={analysis.overall_quality_score:.1f}, "
        f"high_quality={high_quality}, jeeters={distribution[WalletCategory.JEETER]}, "
        f"snipers={distribution[WalletCategory.SNIPER]}"
    )

    return analysis
