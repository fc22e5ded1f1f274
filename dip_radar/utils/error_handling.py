"""
Error handling utilities for dip_radar.

The scoring core itself never raises for well-typed input; degenerate
data degrades to neutral scores instead. Exceptions exist for the
boundaries around it:
- configuration loading (bad threshold overrides)
- request validation at the HTTP/CLI surface
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """Error codes for dip_radar."""
    # General errors
    UNKNOWN_ERROR = 1000
    CONFIGURATION_ERROR = 1001
    VALIDATION_ERROR = 1002

    # Data errors
    DATA_ERROR = 4000
    PARSING_ERROR = 4001


class DipRadarError(Exception):
    """Base exception class for all dip_radar errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize a new DipRadarError.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        formatted_message = f"[{error_code.name}] {message}"
        if details:
            formatted_message += f" - Details: {details}"

        super().__init__(formatted_message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a JSON-serializable dictionary."""
        return {
            "error": self.message,
            "error_code": self.error_code.value,
            "error_type": self.error_code.name,
            "details": self.details,
        }


class ConfigurationError(DipRadarError):
    """Error raised for invalid threshold or server configuration."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(DipRadarError):
    """Error raised when request input cannot be turned into analysis records."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)
