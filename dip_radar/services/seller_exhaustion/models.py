"""Data models for seller exhaustion detection."""

from dataclasses import dataclass
from typing import Any, Dict, List

SIGNAL_LABELS = {
    "decreasing_sell_volume": "Decreasing sell volume",
    "decreasing_sell_frequency": "Decreasing sell frequency",
    "seller_dominance_collapse": "Seller dominance collapse",
    "final_large_seller_exit": "Final large seller exit",
    "mev_inactivity": "MEV inactivity",
    "tight_price_range": "Tight price range",
    "volatility_collapse": "Volatility collapse",
}


@dataclass(frozen=True)
class SellerExhaustionSignals:
    """Seller capitulation signals and their additive score."""

    decreasing_sell_volume: bool = False
    decreasing_sell_frequency: bool = False
    seller_dominance_collapse: bool = False
    final_large_seller_exit: bool = False
    mev_inactivity: bool = False
    tight_price_range: bool = False
    volatility_collapse: bool = False
    exhaustion_score: float = 0.0  # 0-100, higher = more exhausted sellers
    is_bottom_signal: bool = False
    price_volatility: float = 0.0
    volatility_trend: float = 0.0

    def active_signals(self) -> List[str]:
        """Human-readable names of the signals that fired."""
        return [label for name, label in SIGNAL_LABELS.items() if getattr(self, name)]

    def to_dict(self) -> Dict[str, Any]:
        result = {name: getattr(self, name) for name in SIGNAL_LABELS}
        result.update({
            "exhaustion_score": self.exhaustion_score,
            "is_bottom_signal": self.is_bottom_signal,
            "price_volatility": self.price_volatility,
            "volatility_trend": self.volatility_trend,
            "signals": self.active_signals(),
        })
        return result
