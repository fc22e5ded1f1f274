"""
Token and price data models.

Market data providers frequently omit fields for freshly launched tokens.
Every numeric field therefore defaults to 0 and missing or non-finite
values are coerced to 0 rather than rejected.
"""

from typing import Optional

from pydantic import BaseModel, field_validator

from dip_radar.utils.numeric import sanitize


class TokenSnapshot(BaseModel):
    """
    Model for a point-in-time token/market snapshot.
    """
    address: str
    symbol: Optional[str] = None
    name: Optional[str] = None
    decimals: int = 0
    supply: float = 0.0
    market_cap: float = 0.0
    price: float = 0.0
    liquidity: float = 0.0

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "address": "ENxauXrtBtnFH1aJAFYZnxVVM4rGLkXJi3bUhT7tpump",
                "symbol": "MCAP",
                "name": "Microcap",
                "decimals": 6,
                "supply": 1000000000,
                "market_cap": 250000,
                "price": 0.00025,
                "liquidity": 40000
            }
        }
    }

    @field_validator("decimals", mode="before")
    @classmethod
    def _default_decimals(cls, value):
        return int(max(0.0, sanitize(value)))

    @field_validator("supply", "market_cap", "price", "liquidity", mode="before")
    @classmethod
    def _default_numeric(cls, value):
        return max(0.0, sanitize(value))

    @property
    def display_name(self) -> str:
        """Get a display name for the token."""
        if self.name:
            return self.name
        if self.symbol:
            return self.symbol
        return f"Unknown Token ({self.address[:8]}...)"


class PricePoint(BaseModel):
    """One price sample; series are ordered ascending by timestamp."""

    timestamp: float = 0.0
    price: float

    model_config = {"frozen": True}

    @field_validator("price", mode="before")
    @classmethod
    def _finite_price(cls, value):
        return max(0.0, sanitize(value))
