"""Data models for the microcap dip screen."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from dip_radar.outcome_predictor import EntryZone, RiskLevel
from dip_radar.services.danger_zone.models import RedFlagSignals
from dip_radar.services.liquidity_health.models import LiquidityHealthSignals
from dip_radar.services.seller_exhaustion.models import SellerExhaustionSignals
from dip_radar.services.wallet_quality.models import WalletCategory, WalletQualityAnalysis

WHALE_ACCUMULATION_RATIO = 0.6
WHALE_DISTRIBUTION_RATIO = 0.4


class EntryRecommendation(str, Enum):
    """How hard to lean into an entry."""

    STRONG = "strong"
    GOOD = "good"
    CAUTIOUS = "cautious"
    AVOID = "avoid"


@dataclass(frozen=True)
class DipPrediction:
    """Opportunity/trap call from opposing point tallies."""

    is_dip_opportunity: bool
    is_dip_trap: bool
    dip_confidence: float  # 0-100
    expected_dip_depth: float  # percent
    entry_zone: EntryZone
    opportunity_score: float = 0.0
    trap_score: float = 0.0
    reasons: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_dip_opportunity": self.is_dip_opportunity,
            "is_dip_trap": self.is_dip_trap,
            "dip_confidence": self.dip_confidence,
            "expected_dip_depth": self.expected_dip_depth,
            "entry_zone": self.entry_zone.to_dict(),
            "opportunity_score": self.opportunity_score,
            "trap_score": self.trap_score,
            "reasons": list(self.reasons),
        }


@dataclass(frozen=True)
class MicrocapAnalysis:
    """Single-score microcap screen with the signals behind it."""

    token_address: str
    score: float  # 0-100
    risk_level: RiskLevel
    entry_recommendation: EntryRecommendation
    is_jeeter_dominated: bool
    buy_sell_ratio: float
    seller_exhaustion: SellerExhaustionSignals
    wallet_quality: WalletQualityAnalysis
    lp_health: LiquidityHealthSignals
    danger_zone: RedFlagSignals
    dip_prediction: DipPrediction
    sniper_percentage: float = 0.0
    reasoning: Tuple[str, ...] = ()

    def signals_dict(self) -> Dict[str, Any]:
        """Signal breakdown grouped by concern."""
        exhaustion = self.seller_exhaustion
        wallets = self.wallet_quality
        return {
            "seller_exhaustion": {
                "exhaustion_score": exhaustion.exhaustion_score,
                "is_bottom_signal": exhaustion.is_bottom_signal,
                "signals": exhaustion.active_signals(),
            },
            "wallet_quality": {
                "overall_quality_score": wallets.overall_quality_score,
                "high_quality_wallet_count": wallets.high_quality_wallet_count,
                "jeeter_dominance": wallets.jeeter_dominance,
                "sniper_dominance": wallets.sniper_dominance,
                "category_distribution": {
                    category.value: count
                    for category, count in wallets.category_distribution.items()
                },
            },
            "sniper_detection": {
                "sniper_count": wallets.count(WalletCategory.SNIPER),
                "sniper_percentage": self.sniper_percentage,
                "is_sniper_heavy": wallets.sniper_dominance,
            },
            "lp_health": self.lp_health.to_dict(),
            "volatility": {
                "current_volatility": exhaustion.price_volatility,
                "volatility_trend": exhaustion.volatility_trend,
                "is_compressed": exhaustion.tight_price_range,
            },
            "whale_activity": {
                "whale_count": wallets.count(WalletCategory.WHALE),
                "whale_accumulation": self.buy_sell_ratio > WHALE_ACCUMULATION_RATIO,
                "whale_distribution": self.buy_sell_ratio < WHALE_DISTRIBUTION_RATIO,
            },
            "jeeter_flags": self.danger_zone.active_flags(),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token": self.token_address,
            "score": self.score,
            "risk_level": self.risk_level.value,
            "entry_recommendation": self.entry_recommendation.value,
            "is_jeeter_dominated": self.is_jeeter_dominated,
            "signals": self.signals_dict(),
            "dip_prediction": self.dip_prediction.to_dict(),
            "debug": {"reasoning": list(self.reasoning)},
        }
