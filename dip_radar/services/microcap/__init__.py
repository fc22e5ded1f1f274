"""Microcap dip screen: single score, risk level and entry recommendation."""

from dip_radar.services.microcap.analyzer import (
    analyze_microcap,
    calculate_microcap_score,
    determine_entry_recommendation,
    determine_risk_level,
)
from dip_radar.services.microcap.dip_predictor import predict_dip
from dip_radar.services.microcap.models import (
    DipPrediction,
    EntryRecommendation,
    MicrocapAnalysis,
)

__all__ = [
    "analyze_microcap",
    "calculate_microcap_score",
    "determine_entry_recommendation",
    "determine_risk_level",
    "predict_dip",
    "DipPrediction",
    "EntryRecommendation",
    "MicrocapAnalysis",
]
