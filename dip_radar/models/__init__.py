"""Input data models for dip_radar analysis."""

from dip_radar.models.holder import TradeEvent, HolderRecord
from dip_radar.models.flow import (
    NEUTRAL_RATIO,
    MevPatterns,
    WhaleActivity,
    FlowWindowStats,
    SwapTransaction,
)
from dip_radar.models.token import TokenSnapshot, PricePoint
from dip_radar.models.snapshot import AnalysisSnapshot, ensure_unique_addresses

__all__ = [
    "TradeEvent",
    "HolderRecord",
    "NEUTRAL_RATIO",
    "MevPatterns",
    "WhaleActivity",
    "FlowWindowStats",
    "SwapTransaction",
    "TokenSnapshot",
    "PricePoint",
    "AnalysisSnapshot",
    "ensure_unique_addresses",
]
