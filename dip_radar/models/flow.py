"""
Aggregated transaction-flow models.

``FlowWindowStats`` summarises swap activity over a lookback window
rather than listing individual swaps. Ratios are buy volume over total
volume: 1.0 means all buys, 0.5 balanced, 0.0 all sells.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from dip_radar.utils.numeric import clamp, sanitize

NEUTRAL_RATIO = 0.5


class MevPatterns(BaseModel):
    """Result of frequency/size based MEV heuristics."""

    detected: bool = False
    sandwich_attacks: int = Field(0, ge=0)
    front_running: int = Field(0, ge=0)
    bot_like_behavior: int = Field(0, ge=0)
    score: float = 0.0

    model_config = {"frozen": True}

    @field_validator("score", mode="before")
    @classmethod
    def _bounded_score(cls, value):
        return clamp(value, 0.0, 100.0)


class WhaleActivity(BaseModel):
    """Swaps at or above the whale threshold."""

    count: int = Field(0, ge=0)
    total_volume: float = 0.0
    average_size: float = 0.0

    model_config = {"frozen": True}

    @field_validator("total_volume", "average_size", mode="before")
    @classmethod
    def _non_negative(cls, value):
        return max(0.0, sanitize(value))


class FlowWindowStats(BaseModel):
    """Buy/sell flow statistics for one token over a lookback window."""

    buy_sell_ratio: float = NEUTRAL_RATIO
    buy_volume: float = 0.0
    sell_volume: float = 0.0
    total_volume: float = 0.0

    buy_sell_ratio_5m: float = NEUTRAL_RATIO
    buy_sell_ratio_15m: float = NEUTRAL_RATIO
    buy_sell_ratio_1h: float = NEUTRAL_RATIO
    buy_sell_ratio_24h: float = NEUTRAL_RATIO

    large_buy_count: int = Field(0, ge=0)
    large_sell_count: int = Field(0, ge=0)
    whale_activity: WhaleActivity = Field(default_factory=WhaleActivity)
    mev_patterns: MevPatterns = Field(default_factory=MevPatterns)

    transaction_count: int = Field(0, ge=0)
    transactions_per_minute: float = 0.0
    average_transaction_size: float = 0.0

    model_config = {"frozen": True}

    @field_validator(
        "buy_sell_ratio",
        "buy_sell_ratio_5m",
        "buy_sell_ratio_15m",
        "buy_sell_ratio_1h",
        "buy_sell_ratio_24h",
        mode="before",
    )
    @classmethod
    def _bounded_ratio(cls, value):
        if value is None:
            return NEUTRAL_RATIO
        number = sanitize(value, NEUTRAL_RATIO)
        return max(0.0, min(1.0, number))

    @field_validator(
        "buy_volume",
        "sell_volume",
        "total_volume",
        "transactions_per_minute",
        "average_transaction_size",
        mode="before",
    )
    @classmethod
    def _non_negative(cls, value):
        return max(0.0, sanitize(value))

    @classmethod
    def empty(cls) -> "FlowWindowStats":
        """The defined instance for a window with no transactions."""
        return cls()


class SwapTransaction(BaseModel):
    """An already-parsed swap, as delivered by the transaction fetcher."""

    signature: str = ""
    timestamp: datetime
    type: Literal["buy", "sell"]
    amount_usd: float = 0.0
    amount_tokens: float = 0.0
    price: Optional[float] = None
    wallet: str = ""

    model_config = {"frozen": True}

    @field_validator("amount_usd", "amount_tokens", mode="before")
    @classmethod
    def _non_negative(cls, value):
        return max(0.0, sanitize(value))
