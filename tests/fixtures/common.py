"""Common test fixtures for dip_radar tests.

This module provides builders and fixtures that can be reused across
different test modules.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Sequence

import pytest

from dip_radar.models import (
    FlowWindowStats,
    HolderRecord,
    MevPatterns,
    PricePoint,
    TokenSnapshot,
    TradeEvent,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_holder(address: str = "wallet1", **overrides) -> HolderRecord:
    """Build a holder record with neutral defaults."""
    data = {"address": address, "balance": 1000.0, "percentage": 1.0}
    data.update(overrides)
    return HolderRecord(**data)


def trades_at(seconds: Sequence[float], amount: float = 100.0) -> List[TradeEvent]:
    """Trade events at the given offsets (seconds) from BASE_TIME."""
    return [
        TradeEvent(timestamp=BASE_TIME + timedelta(seconds=offset), amount=amount)
        for offset in seconds
    ]


def make_flow(**overrides) -> FlowWindowStats:
    return FlowWindowStats(**overrides)


def make_token(**overrides) -> TokenSnapshot:
    data = {
        "address": "TokenMint1111111111111111111111111111111111",
        "symbol": "DIP",
        "name": "Dip Token",
        "decimals": 6,
        "supply": 1_000_000_000,
        "market_cap": 250_000,
        "price": 0.00025,
        "liquidity": 50_000,
    }
    data.update(overrides)
    return TokenSnapshot(**data)


def price_series(prices: Sequence[float], start: float = 0.0, step: float = 1.0) -> List[PricePoint]:
    return [PricePoint(timestamp=start + i * step, price=p) for i, p in enumerate(prices)]


def flat_prices(count: int, price: float = 1.0) -> List[PricePoint]:
    return price_series([price] * count)


def zigzag_prices(count: int, base: float = 1.0, amplitude: float = 0.1) -> List[PricePoint]:
    """Alternating prices; relative changes swing by roughly +-2x amplitude."""
    return price_series([base * (1 + amplitude if i % 2 else 1 - amplitude) for i in range(count)])


@pytest.fixture
def empty_flow():
    """The defined flow for a window with no transactions."""
    return FlowWindowStats.empty()


@pytest.fixture
def bullish_flow():
    """Buyer-dominated flow with idle MEV and few large sells."""
    return make_flow(
        buy_sell_ratio=0.8,
        buy_volume=80_000,
        sell_volume=20_000,
        total_volume=100_000,
        buy_sell_ratio_5m=0.8,
        buy_sell_ratio_15m=0.8,
        buy_sell_ratio_1h=0.7,
        buy_sell_ratio_24h=0.6,
        large_buy_count=6,
        large_sell_count=1,
        mev_patterns=MevPatterns(detected=False, score=0),
        transaction_count=120,
        transactions_per_minute=2,
        average_transaction_size=800,
    )


@pytest.fixture
def sample_token():
    return make_token()


@pytest.fixture
def strong_holders():
    """Long-term holders that never sold."""
    return [
        make_holder(f"strong{i}", balance=1000.0 * (i + 1), percentage=0.5 * (i + 1),
                    average_hold_time=240, buy_transactions=trades_at([0]), sell_transactions=[])
        for i in range(5)
    ]


@pytest.fixture
def sniper_holder():
    """1% holder with a 3 minute average hold and 15 transactions."""
    return make_holder("sniper", balance=1000, percentage=1.0, average_hold_time=3,
                       transaction_count=15)
