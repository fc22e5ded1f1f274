"""Data models for liquidity pool health scoring."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class LiquidityHealthSignals:
    """Liquidity pool depth and pool-to-valuation health."""

    liquidity_amount: float
    lp_ratio: float  # liquidity / market cap
    is_healthy: bool
    health_score: float  # 0-100
    risks: Tuple[str, ...] = ()
    # Needs historical pool snapshots; always "stable" until such a feed exists
    liquidity_stability: str = "stable"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "liquidity_amount": self.liquidity_amount,
            "liquidity_stability": self.liquidity_stability,
            "lp_ratio": self.lp_ratio,
            "is_healthy": self.is_healthy,
            "health_score": self.health_score,
            "risks": list(self.risks),
        }
