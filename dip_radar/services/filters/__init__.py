"""Pass/fail screens for token safety and market health."""

from dip_radar.services.filters.filters import run_market_health_filter, run_safety_filter
from dip_radar.services.filters.models import (
    MarketHealthChecks,
    MarketHealthFilterResult,
    SafetyChecks,
    SafetyFilterResult,
)

__all__ = [
    "run_market_health_filter",
    "run_safety_filter",
    "MarketHealthChecks",
    "MarketHealthFilterResult",
    "SafetyChecks",
    "SafetyFilterResult",
]
