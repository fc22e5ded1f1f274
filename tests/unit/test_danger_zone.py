"""Unit tests for the danger zone detector."""

import pytest

from dip_radar.models import MevPatterns
from dip_radar.services.danger_zone import detect_danger_zone
from dip_radar.services.wallet_quality import (
    WalletCategory,
    WalletQualityAnalysis,
    analyze_wallet_quality,
)
from tests.fixtures.common import make_flow, make_holder, make_token


def quality(**overrides) -> WalletQualityAnalysis:
    return WalletQualityAnalysis(**overrides)


@pytest.fixture
def healthy_quality():
    return quality(
        category_distribution={WalletCategory.STRONG_HANDS: 8, WalletCategory.UNKNOWN: 2},
        average_hold_time=180,
        high_quality_wallet_count=8,
    )


class TestDangerZone:
    """Test suite for detect_danger_zone."""

    def test_quiet_token_has_no_flags(self, empty_flow, healthy_quality, sample_token):
        signals = detect_danger_zone(empty_flow, healthy_quality, sample_token)

        assert signals.active_flags() == []
        assert signals.risk_score == 0
        assert signals.is_danger_zone is False

    def test_everything_wrong(self):
        wallet_quality = quality(
            category_distribution={WalletCategory.SNIPER: 4, WalletCategory.JEETER: 6},
            average_hold_time=3,
            jeeter_dominance=True,
            sniper_dominance=True,
        )
        signals = detect_danger_zone(
            make_flow(buy_sell_ratio=0.2), wallet_quality, make_token(liquidity=3_000)
        )

        assert signals.high_sell_to_buy_ratio is True
        assert signals.fast_holder_rotation is True
        assert signals.quick_dumps is True
        assert signals.snipers_entering_early is True
        assert signals.no_strong_wallet_accumulation is True
        assert signals.lp_too_thin is True
        assert signals.risk_score == 165
        assert signals.is_danger_zone is True

    def test_danger_boundary_is_inclusive(self, healthy_quality):
        signals = detect_danger_zone(
            make_flow(buy_sell_ratio=0.3), healthy_quality, make_token(liquidity=3_000)
        )

        assert signals.risk_score == 50
        assert signals.is_danger_zone is True

    def test_low_but_not_thin_pool(self, empty_flow, healthy_quality):
        signals = detect_danger_zone(empty_flow, healthy_quality, make_token(liquidity=8_000))

        assert signals.lp_too_thin is True
        assert signals.risk_score == 15

    def test_unknown_liquidity_is_not_flagged(self, empty_flow, healthy_quality):
        signals = detect_danger_zone(empty_flow, healthy_quality, make_token(liquidity=0))

        assert signals.lp_too_thin is False
        assert signals.risk_score == 0

    def test_missing_hold_time_counts_as_zero(self, empty_flow, sample_token):
        wallet_quality = quality(
            category_distribution={WalletCategory.UNKNOWN: 3},
            average_hold_time=0,
        )
        signals = detect_danger_zone(empty_flow, wallet_quality, sample_token)

        assert signals.fast_holder_rotation is True
        assert signals.quick_dumps is True
        assert signals.no_strong_wallet_accumulation is True
        assert signals.risk_score == 50
        assert signals.is_danger_zone is True

    def test_empty_wallet_set_is_a_danger_zone(self, empty_flow, sample_token):
        signals = detect_danger_zone(empty_flow, quality(), sample_token)

        assert signals.active_flags() == [
            "Fast holder rotation",
            "Quick dumps",
            "No strong wallet accumulation",
        ]
        assert signals.risk_score == 50
        assert signals.is_danger_zone is True

    def test_holders_without_hold_times(self, empty_flow, sample_token):
        holders = [make_holder(f"wallet{i}", balance=100.0 * (i + 1)) for i in range(5)]
        signals = detect_danger_zone(empty_flow, analyze_wallet_quality(holders), sample_token)

        assert signals.fast_holder_rotation is True
        assert signals.quick_dumps is True
        assert signals.no_strong_wallet_accumulation is True
        assert signals.is_danger_zone is True

    def test_rotation_without_dumps(self, empty_flow, sample_token):
        wallet_quality = quality(average_hold_time=7, high_quality_wallet_count=1)
        signals = detect_danger_zone(empty_flow, wallet_quality, sample_token)

        assert signals.fast_holder_rotation is True
        assert signals.quick_dumps is False
        assert signals.risk_score == 15

    @pytest.mark.parametrize("score,expected", [(60, True), (50, False)])
    def test_mev_spam(self, score, expected, healthy_quality, sample_token):
        flow = make_flow(mev_patterns=MevPatterns(detected=True, score=score))

        assert detect_danger_zone(flow, healthy_quality, sample_token).mev_spam is expected

    def test_swap_bots(self, empty_flow, sample_token):
        wallet_quality = quality(
            category_distribution={WalletCategory.MEV_BOT: 3, WalletCategory.STRONG_HANDS: 7},
            high_quality_wallet_count=7,
            average_hold_time=180,
        )
        signals = detect_danger_zone(empty_flow, wallet_quality, sample_token)

        assert signals.too_many_swap_bots is True
        assert signals.risk_score == 10

    def test_router_arbitrage_pump(self, healthy_quality, sample_token):
        busy_small = make_flow(transactions_per_minute=6, average_transaction_size=50)
        busy_large = make_flow(transactions_per_minute=6, average_transaction_size=500)

        assert detect_danger_zone(busy_small, healthy_quality, sample_token).router_arbitrage_pump is True
        assert detect_danger_zone(busy_large, healthy_quality, sample_token).router_arbitrage_pump is False

    def test_history_flags_are_never_set(self):
        wallet_quality = quality(average_hold_time=1, jeeter_dominance=True)
        signals = detect_danger_zone(
            make_flow(buy_sell_ratio=0), wallet_quality, make_token(liquidity=100)
        )

        assert signals.liquidity_drainage is False
        assert signals.creator_wallet_activity is False
        assert signals.suspicious_lp_behavior is False

    def test_to_dict(self, empty_flow, healthy_quality):
        data = detect_danger_zone(empty_flow, healthy_quality, make_token(liquidity=8_000)).to_dict()

        assert data["active_flags"] == ["LP too thin"]
        assert data["is_danger_zone"] is False
        assert len([key for key, value in data.items() if isinstance(value, bool)]) == 13
