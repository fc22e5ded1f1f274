"""
Outcome predictor.

Fuses microstructure and structural signals into exactly one verdict:

1. Danger zone                          -> trap
2. Micro good and structural good       -> opportunity
3. Micro poor and structural poor       -> trap
4. Mixed                                -> wait

The branches are checked in that order and the first match wins.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from dip_radar.config import OutcomeParams, get_thresholds
from dip_radar.logging_config import get_logger
from dip_radar.microstructure import MicrostructureSignals
from dip_radar.structural_health import StructuralSignals
from dip_radar.utils.numeric import clamp, round_half_up, sanitize

logger = get_logger(__name__)

# Risk score assumed when the danger zone result is degenerate
FALLBACK_DANGER_RISK = 50


class Verdict(str, Enum):
    """Terminal decision of one prediction."""

    OPPORTUNITY = "opportunity"
    TRAP = "trap"
    WAIT = "wait"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class EntryZone:
    """Recommended entry price band."""

    min: float
    max: float
    optimal: float

    @classmethod
    def around(cls, price: float, low: float, high: float, optimal: float) -> "EntryZone":
        """Band expressed as multiples of ``price``."""
        return cls(min=price * low, max=price * high, optimal=price * optimal)

    def to_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max, "optimal": self.optimal}


@dataclass(frozen=True)
class Outcome:
    """Final fused decision."""

    verdict: Verdict
    dip_confidence: float  # 0-100
    expected_dip_depth_pct: float  # 0-100
    entry_zone: EntryZone
    combined_score: float  # 0-100
    risk_level: RiskLevel
    debug: Tuple[str, ...] = ()

    @property
    def is_dip_opportunity(self) -> bool:
        return self.verdict is Verdict.OPPORTUNITY

    @property
    def is_dip_trap(self) -> bool:
        return self.verdict is Verdict.TRAP

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "is_dip_opportunity": self.is_dip_opportunity,
            "is_dip_trap": self.is_dip_trap,
            "dip_confidence": self.dip_confidence,
            "expected_dip_depth_pct": self.expected_dip_depth_pct,
            "entry_zone": self.entry_zone.to_dict(),
            "combined_score": self.combined_score,
            "risk_level": self.risk_level.value,
            "debug": list(self.debug),
        }


def combine_scores(
    micro_score: float,
    structural_score: float,
    volatility_trend: float,
    params: Optional[OutcomeParams] = None,
) -> float:
    """Weighted blend of the micro, structural and volatility stability scores."""
    params = params or get_thresholds().outcome
    stability = max(0.0, (1 - abs(sanitize(volatility_trend))) * 100)

    raw = (
        sanitize(micro_score) * params.micro_weight
        + sanitize(structural_score) * params.structural_weight
        + stability * params.volatility_weight
    )
    return clamp(round_half_up(raw), 0, 100)


def predict_outcome(
    current_price: float,
    micro: MicrostructureSignals,
    structural: StructuralSignals,
    params: Optional[OutcomeParams] = None,
) -> Outcome:
    """Predict whether the current dip is an opportunity or a trap.

    Args:
        current_price: Latest price; non-finite or negative values count as 0
        micro: Microstructure signals
        structural: Structural signals

    Returns:
        Outcome with exactly one verdict
    """
    params = params or get_thresholds().outcome
    price = max(0.0, sanitize(current_price))

    micro_score = sanitize(micro.micro_score)
    structural_score = sanitize(structural.structural_score)
    combined = combine_scores(micro_score, structural_score, micro.volatility_trend_pct, params)

    debug = [
        f"micro_score={micro_score}, structural={structural_score}",
        f"combined_score={combined}",
    ]

    danger = structural.danger_zone
    is_danger_zone = danger.is_danger_zone
    micro_good = micro_score >= params.micro_good
    structural_good = structural_score >= params.structural_good

    if is_danger_zone:
        verdict = Verdict.TRAP
        danger_risk = sanitize(danger.risk_score, FALLBACK_DANGER_RISK)
        confidence = max(combined, danger_risk)
        dip_depth = 20 + min(40, danger_risk / 2)
        entry_zone = EntryZone.around(price, 0.65, 0.9, 0.8)
        debug.append("Decision: danger zone => trap")
    elif micro_good and structural_good:
        verdict = Verdict.OPPORTUNITY
        confidence = max(combined, 60)
        recent_volatility = sanitize(micro.volatility_std_dev_recent)
        dip_depth = 3 + max(0, 10 - round_half_up(recent_volatility * 100))
        entry_zone = EntryZone.around(price, 0.92, 1.02, 0.98)
        debug.append("Decision: micro good & structural good => opportunity")
    elif not micro_good and not structural_good:
        verdict = Verdict.TRAP
        confidence = max(combined, 55)
        dip_depth = 12
        entry_zone = EntryZone.around(price, 0.75, 0.95, 0.85)
        debug.append("Decision: micro poor & structural poor => trap")
    else:
        verdict = Verdict.WAIT
        confidence = round_half_up(combined * 0.7)
        dip_depth = 8
        entry_zone = EntryZone.around(price, 0.85, 1.0, 0.92)
        debug.append("Decision: mixed signals => wait")

    if is_danger_zone or sanitize(danger.risk_score) > params.danger_risk_high:
        risk_level = RiskLevel.HIGH
    elif combined > params.low_risk_combined:
        risk_level = RiskLevel.LOW
    else:
        risk_level = RiskLevel.MEDIUM

    outcome = Outcome(
        verdict=verdict,
        dip_confidence=clamp(round_half_up(confidence), 0, 100),
        expected_dip_depth_pct=clamp(dip_depth, 0, 100),
        entry_zone=entry_zone,
        combined_score=combined,
        risk_level=risk_level,
        debug=tuple(debug),
    )

    logger.debug(
        f"Outcome: {verdict.value} (confidence={outcome.dip_confidence}, "
        f"combined={combined}, risk={risk_level.value})"
    )

    return outcome
