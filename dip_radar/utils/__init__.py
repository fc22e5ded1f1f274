"""Shared utilities for dip_radar."""

from dip_radar.utils.numeric import sanitize, clamp, round_half_up, std_dev, relative_changes
from dip_radar.utils.error_handling import (
    ErrorCode,
    DipRadarError,
    ConfigurationError,
    ValidationError,
)

__all__ = [
    "sanitize",
    "clamp",
    "round_half_up",
    "std_dev",
    "relative_changes",
    "ErrorCode",
    "DipRadarError",
    "ConfigurationError",
    "ValidationError",
]
