"""Data models for the danger zone (red flag) detector."""

from dataclasses import dataclass
from typing import Any, Dict, List

FLAG_LABELS = {
    "high_sell_to_buy_ratio": "High sell to buy ratio",
    "fast_holder_rotation": "Fast holder rotation",
    "snipers_entering_early": "Snipers entering early",
    "quick_dumps": "Quick dumps",
    "liquidity_drainage": "Liquidity drainage",
    "mev_spam": "MEV spam",
    "too_many_swap_bots": "Too many swap bots",
    "no_strong_wallet_accumulation": "No strong wallet accumulation",
    "lp_too_thin": "LP too thin",
    "router_arbitrage_pump": "Router arbitrage pump",
    "creator_wallet_activity": "Creator wallet activity",
    "suspicious_lp_behavior": "Suspicious LP behavior",
}


@dataclass(frozen=True)
class RedFlagSignals:
    """Red flags that mark a token as a jeeter/danger zone."""

    high_sell_to_buy_ratio: bool = False
    fast_holder_rotation: bool = False
    snipers_entering_early: bool = False
    quick_dumps: bool = False
    liquidity_drainage: bool = False
    mev_spam: bool = False
    too_many_swap_bots: bool = False
    no_strong_wallet_accumulation: bool = False
    lp_too_thin: bool = False
    router_arbitrage_pump: bool = False
    creator_wallet_activity: bool = False
    suspicious_lp_behavior: bool = False
    risk_score: float = 0.0
    is_danger_zone: bool = False

    def active_flags(self) -> List[str]:
        """Human-readable names of the flags that are set."""
        return [label for name, label in FLAG_LABELS.items() if getattr(self, name)]

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {name: getattr(self, name) for name in FLAG_LABELS}
        result["risk_score"] = self.risk_score
        result["is_danger_zone"] = self.is_danger_zone
        result["active_flags"] = self.active_flags()
        return result
