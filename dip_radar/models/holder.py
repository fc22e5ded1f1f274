"""
Holder data models.

A holder snapshot is built fresh for every analysis request from the
top holders of a token. Records are frozen; annotating a holder (for
example with a jeeter verdict) produces a new record via
``model_copy(update=...)``.
"""

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from dip_radar.utils.numeric import clamp, sanitize


class TradeEvent(BaseModel):
    """A single buy or sell by a holder."""

    timestamp: datetime
    amount: float = Field(0.0, ge=0)
    signature: Optional[str] = None
    price: Optional[float] = None

    model_config = {"frozen": True}

    @property
    def epoch_seconds(self) -> float:
        return self.timestamp.timestamp()


class HolderRecord(BaseModel):
    """Point-in-time holding and trading statistics for one wallet."""

    address: str
    balance: float = Field(0.0, ge=0)
    percentage: float = Field(0.0, description="Share of total supply, 0-100")
    first_seen: Optional[datetime] = None
    last_seen: Optional[datetime] = None
    transaction_count: Optional[int] = Field(None, ge=0)
    buy_transactions: Optional[Tuple[TradeEvent, ...]] = None
    sell_transactions: Optional[Tuple[TradeEvent, ...]] = None
    average_hold_time: Optional[float] = Field(None, description="Average hold time in minutes")
    is_jeeter: bool = False
    jeeter_score: Optional[float] = None
    is_bundle: bool = False

    model_config = {"frozen": True}

    @field_validator("balance", mode="before")
    @classmethod
    def _finite_balance(cls, value):
        return max(0.0, sanitize(value))

    @field_validator("percentage", mode="before")
    @classmethod
    def _bounded_percentage(cls, value):
        return clamp(value, 0.0, 100.0)

    @field_validator("jeeter_score", mode="before")
    @classmethod
    def _bounded_jeeter_score(cls, value):
        if value is None:
            return None
        return clamp(value, 0.0, 100.0)

    @field_validator("average_hold_time", mode="before")
    @classmethod
    def _finite_hold_time(cls, value):
        if value is None:
            return None
        return max(0.0, sanitize(value))

    @property
    def has_trade_history(self) -> bool:
        """True when both buy and sell event lists were supplied (even empty)."""
        return self.buy_transactions is not None and self.sell_transactions is not None

    @property
    def buy_count(self) -> int:
        return len(self.buy_transactions or ())

    @property
    def sell_count(self) -> int:
        return len(self.sell_transactions or ())

    @property
    def sell_buy_ratio(self) -> Optional[float]:
        """Sell events per buy event.

        None when the trade history is missing or empty on both sides;
        infinity when there are sells but no recorded buys.
        """
        if not self.has_trade_history:
            return None
        if self.buy_count == 0:
            return float("inf") if self.sell_count > 0 else None
        return self.sell_count / self.buy_count

    def count_round_trips(self, max_seconds: float) -> int:
        """Count buys followed by any sell within ``max_seconds``."""
        if not self.has_trade_history:
            return 0

        sell_times = [sell.epoch_seconds for sell in self.sell_transactions]
        round_trips = 0
        for buy in self.buy_transactions:
            buy_time = buy.epoch_seconds
            if any(0 < sell_time - buy_time < max_seconds for sell_time in sell_times):
                round_trips += 1
        return round_trips
