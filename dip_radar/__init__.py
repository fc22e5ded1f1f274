"""Dip Radar Package.

This package scores token dips as entry opportunities or manipulated
traps by fusing wallet behaviour, liquidity health and short-window
price/flow microstructure into one decision.
"""

__version__ = "0.1.0"
__author__ = "Dip Radar Developers"
__email__ = "dev@dipradar.example"

from dip_radar.analysis import FullAnalysis, run_full_analysis
from dip_radar.microstructure import MicrostructureSignals, compute_microstructure_signals
from dip_radar.outcome_predictor import EntryZone, Outcome, RiskLevel, Verdict, predict_outcome
from dip_radar.services.bundle_detector import detect_bundles
from dip_radar.services.danger_zone import detect_danger_zone
from dip_radar.services.jeeter_risk import compute_jeeter_risk_score, compute_overall_score
from dip_radar.services.liquidity_health import score_liquidity
from dip_radar.services.microcap import MicrocapAnalysis, analyze_microcap
from dip_radar.services.seller_exhaustion import detect_seller_exhaustion
from dip_radar.services.wallet_quality import analyze_wallet_quality, classify_wallet
from dip_radar.structural_health import StructuralSignals, compute_structural_signals

__all__ = [
    "analyze_microcap",
    "analyze_wallet_quality",
    "classify_wallet",
    "compute_jeeter_risk_score",
    "compute_microstructure_signals",
    "compute_overall_score",
    "compute_structural_signals",
    "detect_bundles",
    "detect_danger_zone",
    "detect_seller_exhaustion",
    "predict_outcome",
    "run_full_analysis",
    "score_liquidity",
    "EntryZone",
    "FullAnalysis",
    "MicrocapAnalysis",
    "MicrostructureSignals",
    "Outcome",
    "RiskLevel",
    "StructuralSignals",
    "Verdict",
]
