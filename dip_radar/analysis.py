"""
Full three-layer analysis.

Annotates the largest holders with jeeter detection, then sequences the
microstructure engine, the structural health engine and the outcome
predictor over one snapshot of prices, flow, holders and token.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from dip_radar.config import AnalysisThresholds, get_thresholds
from dip_radar.logging_config import get_logger, log_with_context
from dip_radar.microstructure import MicrostructureSignals, compute_microstructure_signals
from dip_radar.models.flow import FlowWindowStats
from dip_radar.models.holder import HolderRecord
from dip_radar.models.token import PricePoint, TokenSnapshot
from dip_radar.outcome_predictor import Outcome, predict_outcome
from dip_radar.services.jeeter_risk.holder_analysis import annotate_jeeters
from dip_radar.structural_health import StructuralSignals, compute_structural_signals

logger = get_logger(__name__)


@dataclass(frozen=True)
class FullAnalysis:
    """Outcome together with the layer signals it was derived from."""

    outcome: Outcome
    micro: MicrostructureSignals
    structural: StructuralSignals

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.to_dict(),
            "micro": self.micro.to_dict(),
            "structural": self.structural.to_dict(),
        }


def current_price(prices: Sequence[PricePoint], token: TokenSnapshot) -> float:
    """Last sampled price, falling back to the snapshot price (0 when absent)."""
    if prices:
        return prices[-1].price
    return token.price


def run_full_analysis(
    prices: Sequence[PricePoint],
    flow: FlowWindowStats,
    holders: Sequence[HolderRecord],
    token: TokenSnapshot,
    thresholds: Optional[AnalysisThresholds] = None,
) -> FullAnalysis:
    """Run all three analysis layers and return a FullAnalysis.

    The verdict is on ``.outcome``; the microstructure and structural
    signals it was derived from ride along on ``.micro`` and ``.structural``.

    Args:
        prices: Price samples ordered ascending by time (may be empty)
        flow: Flow statistics for the token
        holders: Holder snapshot ordered largest first
        token: Token snapshot
        thresholds: Optional threshold overrides

    Returns:
        FullAnalysis; ``.outcome`` is the Outcome record
    """
    thresholds = thresholds or get_thresholds()
    prices = list(prices)
    holders = annotate_jeeters(holders)

    micro = compute_microstructure_signals(prices, flow, token, thresholds.microstructure)
    structural = compute_structural_signals(holders, flow, token, prices, thresholds)
    outcome = predict_outcome(current_price(prices, token), micro, structural, thresholds.outcome)

    log_with_context(
        logger,
        "info",
        f"Analysis completed for {token.display_name}",
        token=token.address,
        verdict=outcome.verdict.value,
        confidence=outcome.dip_confidence,
        combined=outcome.combined_score,
    )

    return FullAnalysis(outcome=outcome, micro=micro, structural=structural)
