"""Jeeter risk service for holder-set risk scoring."""

from dip_radar.services.jeeter_risk.calculator import (
    compute_jeeter_risk_score,
    compute_overall_score,
    generate_recommendations,
    get_risk_tier,
)
from dip_radar.services.jeeter_risk.detector import calculate_jeeter_metrics, detect_jeeter
from dip_radar.services.jeeter_risk.holder_analysis import annotate_jeeters, build_holder_analysis
from dip_radar.services.jeeter_risk.models import (
    HolderAnalysis,
    JeeterDetection,
    JeeterMetrics,
    RiskTier,
)

__all__ = [
    "annotate_jeeters",
    "build_holder_analysis",
    "calculate_jeeter_metrics",
    "compute_jeeter_risk_score",
    "compute_overall_score",
    "detect_jeeter",
    "generate_recommendations",
    "get_risk_tier",
    "HolderAnalysis",
    "JeeterDetection",
    "JeeterMetrics",
    "RiskTier",
]
