"""Data models for wallet quality classification."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class WalletCategory(str, Enum):
    """Closed set of behavioural wallet categories."""

    SNIPER = "sniper"
    JEETER = "jeeter"
    WEAK_HANDS = "weak_hands"
    STRONG_HANDS = "strong_hands"
    WHALE = "whale"
    MEV_BOT = "mev_bot"
    ROUTER_ARBITRAGE_BOT = "router_arbitrage_bot"
    UNKNOWN = "unknown"


HIGH_QUALITY_CATEGORIES = (WalletCategory.STRONG_HANDS, WalletCategory.WHALE)


@dataclass(frozen=True)
class WalletClassification:
    """Classification of a single wallet."""

    category: WalletCategory
    score: float  # 0-100, higher = better quality
    confidence: float  # 0-100
    reasons: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "score": self.score,
            "confidence": self.confidence,
            "reasons": list(self.reasons),
        }


@dataclass(frozen=True)
class WalletQualityAnalysis:
    """Aggregate wallet composition of a holder set."""

    wallet_scores: Dict[str, WalletClassification] = field(default_factory=dict)
    category_distribution: Dict[WalletCategory, int] = field(default_factory=dict)
    average_hold_time: float = 0.0
    average_sell_buy_ratio: float = 0.0
    high_quality_wallet_count: int = 0
    jeeter_dominance: bool = False
    sniper_dominance: bool = False
    overall_quality_score: float = 0.0

    @property
    def total_wallets(self) -> int:
        return sum(self.category_distribution.values())

    def count(self, category: WalletCategory) -> int:
        return self.category_distribution.get(category, 0)

    def fraction(self, category: WalletCategory) -> float:
        """Share of classified wallets in ``category`` (0 when none classified)."""
        total = self.total_wallets
        if total == 0:
            return 0.0
        return self.count(category) / total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wallet_scores": {
                address: score.to_dict() for address, score in self.wallet_scores.items()
            },
            "category_distribution": {
                category.value: count for category, count in self.category_distribution.items()
            },
            "average_hold_time": self.average_hold_time,
            "average_sell_buy_ratio": self.average_sell_buy_ratio,
            "high_quality_wallet_count": self.high_quality_wallet_count,
            "jeeter_dominance": self.jeeter_dominance,
            "sniper_dominance": self.sniper_dominance,
            "overall_quality_score": self.overall_quality_score,
        }
