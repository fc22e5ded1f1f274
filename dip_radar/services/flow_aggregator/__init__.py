"""Flow aggregation service for building windowed swap statistics."""

from dip_radar.services.flow_aggregator.aggregator import (
    aggregate_flow,
    buy_ratio,
    detect_mev_patterns,
)

__all__ = ["aggregate_flow", "buy_ratio", "detect_mev_patterns"]
