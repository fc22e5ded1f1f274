"""Data models for holder-set jeeter risk."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from dip_radar.models.holder import HolderRecord


class RiskTier(str, Enum):
    """Descriptive tier of a jeeter risk score."""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    CRITICAL = "Critical"


@dataclass(frozen=True)
class JeeterDetection:
    """Jeeter verdict for a single holder."""

    is_jeeter: bool
    score: float  # 0-100, higher = more jeeter-like
    reasons: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"is_jeeter": self.is_jeeter, "score": self.score, "reasons": list(self.reasons)}


@dataclass(frozen=True)
class JeeterMetrics:
    """Holder-set level metrics feeding the jeeter risk score.

    Percentages are 0-100.
    """

    average_hold_time: float = 0.0  # minutes
    round_tripper_percentage: float = 0.0
    bot_like_patterns: int = 0  # wallet count
    sell_velocity: float = 0.0  # share of top 10 holders exiting fast
    churn_rate: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "average_hold_time": self.average_hold_time,
            "round_tripper_percentage": self.round_tripper_percentage,
            "bot_like_patterns": self.bot_like_patterns,
            "sell_velocity": self.sell_velocity,
            "churn_rate": self.churn_rate,
        }


@dataclass(frozen=True)
class HolderAnalysis:
    """Holder distribution summary of a token."""

    total_holders: int = 0
    top_holders: Tuple[HolderRecord, ...] = ()
    jeeter_count: int = 0
    jeeter_percentage: float = 0.0
    bundle_count: int = 0
    average_hold_time: float = 0.0
    holder_concentration: float = 0.0  # top 10 holders, % of supply
    jeeter_risk_score: float = 0.0
    buy_sell_ratio: float = 0.5
    volume_spikiness: float = 0.0
    risk_level: RiskTier = RiskTier.LOW
    metrics: Optional[JeeterMetrics] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_holders": self.total_holders,
            "top_holders": [holder.model_dump(mode="json") for holder in self.top_holders],
            "jeeter_count": self.jeeter_count,
            "jeeter_percentage": self.jeeter_percentage,
            "bundle_count": self.bundle_count,
            "average_hold_time": self.average_hold_time,
            "holder_concentration": self.holder_concentration,
            "jeeter_risk_score": self.jeeter_risk_score,
            "buy_sell_ratio": self.buy_sell_ratio,
            "volume_spikiness": self.volume_spikiness,
            "risk_level": self.risk_level.value,
            "metrics": self.metrics.to_dict() if self.metrics else None,
        }
