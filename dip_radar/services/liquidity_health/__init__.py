"""Liquidity health service for scoring pool depth."""

from dip_radar.services.liquidity_health.scorer import score_liquidity
from dip_radar.services.liquidity_health.models import LiquidityHealthSignals

__all__ = ["score_liquidity", "LiquidityHealthSignals"]
