"""Unit tests for the seller exhaustion detector."""

import pytest

from dip_radar.models import MevPatterns
from dip_radar.services.seller_exhaustion import detect_seller_exhaustion
from dip_radar.services.seller_exhaustion.helpers import price_volatility, volatility_trend
from tests.fixtures.common import flat_prices, make_flow, price_series, zigzag_prices

CHOPPY = [1, 2, 1, 1, 1, 3, 1, 1]


class TestSellerExhaustion:
    """Test suite for detect_seller_exhaustion."""

    def test_empty_inputs(self, empty_flow):
        signals = detect_seller_exhaustion(empty_flow, [])

        assert signals.mev_inactivity is True
        assert signals.tight_price_range is False
        assert signals.volatility_collapse is False
        assert signals.exhaustion_score == 10
        assert signals.is_bottom_signal is False

    def test_full_capitulation_is_a_bottom(self, bullish_flow):
        signals = detect_seller_exhaustion(bullish_flow, flat_prices(30))

        assert signals.decreasing_sell_volume is True
        assert signals.decreasing_sell_frequency is True
        assert signals.seller_dominance_collapse is True
        assert signals.final_large_seller_exit is True
        assert signals.mev_inactivity is True
        assert signals.tight_price_range is True
        assert signals.volatility_collapse is False
        assert signals.exhaustion_score == 90
        assert signals.is_bottom_signal is True

    def test_bottom_gate_requires_tight_range(self, bullish_flow):
        signals = detect_seller_exhaustion(bullish_flow, price_series(CHOPPY))

        assert signals.exhaustion_score == 80
        assert signals.tight_price_range is False
        assert signals.is_bottom_signal is False

    def test_bottom_gate_requires_idle_mev(self, bullish_flow):
        flow = bullish_flow.model_copy(
            update={"mev_patterns": MevPatterns(detected=True, score=60)}
        )
        signals = detect_seller_exhaustion(flow, flat_prices(30))

        assert signals.mev_inactivity is False
        assert signals.exhaustion_score == 80
        assert signals.is_bottom_signal is False

    def test_weak_mev_counts_as_inactive(self):
        flow = make_flow(mev_patterns=MevPatterns(detected=True, score=10))

        assert detect_seller_exhaustion(flow, []).mev_inactivity is True

    @pytest.mark.parametrize("large_sells,expected", [(0, False), (1, True), (2, True), (3, False)])
    def test_final_large_seller_exit(self, large_sells, expected):
        flow = make_flow(large_sell_count=large_sells)

        assert detect_seller_exhaustion(flow, []).final_large_seller_exit is expected

    def test_decreasing_sell_frequency(self):
        assert detect_seller_exhaustion(
            make_flow(large_buy_count=5, large_sell_count=2), []
        ).decreasing_sell_frequency is True
        assert detect_seller_exhaustion(
            make_flow(large_buy_count=4, large_sell_count=2), []
        ).decreasing_sell_frequency is False

    def test_volatility_collapse(self, empty_flow):
        prices = zigzag_prices(15) + flat_prices(15)
        signals = detect_seller_exhaustion(empty_flow, prices)

        assert signals.volatility_collapse is True
        assert signals.volatility_trend == pytest.approx(-1)

    def test_score_is_bounded(self, bullish_flow):
        prices = zigzag_prices(15) + flat_prices(15)
        signals = detect_seller_exhaustion(bullish_flow, prices)

        assert signals.exhaustion_score <= 100

    def test_active_signals(self, bullish_flow):
        signals = detect_seller_exhaustion(bullish_flow, flat_prices(30))

        assert "Seller dominance collapse" in signals.active_signals()
        assert "Volatility collapse" not in signals.active_signals()
        assert signals.to_dict()["is_bottom_signal"] is True


class TestVolatilityHelpers:
    """Test suite for the volatility helpers."""

    def test_single_sample_is_not_tight(self):
        assert price_volatility(flat_prices(1)) == 1.0

    def test_flat_series_has_zero_volatility(self):
        assert price_volatility(flat_prices(5)) == 0

    def test_trend_needs_ten_samples(self):
        assert volatility_trend(zigzag_prices(5) + flat_prices(4), 10) == 0

    def test_trend_zero_when_earlier_half_flat(self):
        assert volatility_trend(flat_prices(10) + price_series(CHOPPY), 10) == 0
