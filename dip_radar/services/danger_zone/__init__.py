"""Danger zone service for aggregating red flags."""

from dip_radar.services.danger_zone.detector import detect_danger_zone
from dip_radar.services.danger_zone.models import RedFlagSignals

__all__ = ["detect_danger_zone", "RedFlagSignals"]
