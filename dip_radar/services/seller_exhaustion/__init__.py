"""Seller exhaustion service for detecting capitulation bottoms."""

from dip_radar.services.seller_exhaustion.detector import detect_seller_exhaustion
from dip_radar.services.seller_exhaustion.models import SellerExhaustionSignals

__all__ = ["detect_seller_exhaustion", "SellerExhaustionSignals"]
