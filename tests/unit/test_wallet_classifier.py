"""Unit tests for the wallet classifier.

Each rule is tested in isolation and then for its precedence against
the rules that come after it.
"""

import pytest

from dip_radar.config import WalletThresholds
from dip_radar.services.wallet_quality import (
    CLASSIFICATION_RULES,
    WalletCategory,
    analyze_wallet_quality,
    classify_wallet,
)
from tests.fixtures.common import make_holder, trades_at


class TestClassificationRules:
    """Each rule on its own."""

    def test_sniper_by_hold_time_and_tx_count(self, sniper_holder):
        result = classify_wallet(sniper_holder)

        assert result.category == WalletCategory.SNIPER
        assert result.score == 20
        assert result.confidence == 70

    def test_sniper_needs_more_than_ten_transactions(self):
        holder = make_holder(average_hold_time=3, transaction_count=10)

        assert classify_wallet(holder).category != WalletCategory.SNIPER

    def test_sniper_by_fast_round_trips(self):
        holder = make_holder(
            buy_transactions=trades_at([0, 10, 20, 30]),
            sell_transactions=trades_at([60, 70, 80, 90]),
        )

        assert classify_wallet(holder).category == WalletCategory.SNIPER

    def test_three_round_trips_are_not_enough(self):
        holder = make_holder(
            buy_transactions=trades_at([0, 10, 20]),
            sell_transactions=trades_at([60, 70, 80]),
        )

        assert classify_wallet(holder).category == WalletCategory.UNKNOWN

    def test_jeeter_by_flag(self):
        result = classify_wallet(make_holder(is_jeeter=True))

        assert result.category == WalletCategory.JEETER
        assert (result.score, result.confidence) == (10, 80)

    def test_jeeter_by_score(self):
        assert classify_wallet(make_holder(jeeter_score=60)).category == WalletCategory.JEETER
        assert classify_wallet(make_holder(jeeter_score=50)).category == WalletCategory.UNKNOWN

    def test_mev_bot_by_transaction_count(self):
        result = classify_wallet(make_holder(transaction_count=51))

        assert result.category == WalletCategory.MEV_BOT
        assert (result.score, result.confidence) == (15, 60)

    def test_mev_bot_by_many_instant_buys(self):
        holder = make_holder(average_hold_time=0.5, buy_transactions=trades_at(range(21)))

        assert classify_wallet(holder).category == WalletCategory.MEV_BOT

    @pytest.mark.parametrize(
        "hold_time,expected_score",
        [(None, 70), (0, 70), (30, 70), (90, 85), (5, 40)],
    )
    def test_whale_score_by_hold_time(self, hold_time, expected_score):
        holder = make_holder(percentage=6, average_hold_time=hold_time)
        result = classify_wallet(holder)

        assert result.category == WalletCategory.WHALE
        assert result.score == expected_score
        assert result.confidence == 80

    def test_whale_needs_more_than_five_percent(self):
        assert classify_wallet(make_holder(percentage=5)).category == WalletCategory.UNKNOWN

    def test_strong_hands_low_sell_ratio(self):
        holder = make_holder(
            average_hold_time=150,
            buy_transactions=trades_at(range(0, 10_000, 1000)),
            sell_transactions=trades_at([20_000, 30_000]),
        )
        result = classify_wallet(holder)

        assert result.category == WalletCategory.STRONG_HANDS
        assert (result.score, result.confidence) == (80, 75)

    def test_strong_hands_never_sold(self):
        holder = make_holder(average_hold_time=90, buy_transactions=trades_at([0]),
                             sell_transactions=[])

        assert classify_wallet(holder).category == WalletCategory.STRONG_HANDS

    def test_weak_hands(self):
        holder = make_holder(
            average_hold_time=20,
            buy_transactions=trades_at([0, 1000]),
            sell_transactions=trades_at([5000, 6000]),
        )
        result = classify_wallet(holder)

        assert result.category == WalletCategory.WEAK_HANDS
        assert (result.score, result.confidence) == (30, 70)

    def test_unknown_means_insufficient_data(self):
        result = classify_wallet(make_holder())

        assert result.category == WalletCategory.UNKNOWN
        assert (result.score, result.confidence) == (50, 30)
        assert result.reasons == ("Insufficient data",)

    def test_router_arbitrage_bot_is_never_assigned(self):
        assert all(rule.category != WalletCategory.ROUTER_ARBITRAGE_BOT
                   for rule in CLASSIFICATION_RULES)


class TestRulePrecedence:
    """First matching rule wins."""

    def test_sniper_beats_whale(self):
        holder = make_holder(percentage=10, average_hold_time=2, transaction_count=20)

        assert classify_wallet(holder).category == WalletCategory.SNIPER

    def test_jeeter_beats_mev_bot(self):
        holder = make_holder(is_jeeter=True, transaction_count=60)

        assert classify_wallet(holder).category == WalletCategory.JEETER

    def test_mev_bot_beats_whale(self):
        holder = make_holder(percentage=8, transaction_count=60)

        assert classify_wallet(holder).category == WalletCategory.MEV_BOT

    def test_whale_beats_strong_hands(self):
        holder = make_holder(percentage=8, average_hold_time=200,
                             buy_transactions=trades_at([0]), sell_transactions=[])

        assert classify_wallet(holder).category == WalletCategory.WHALE

    def test_rule_order(self):
        assert [rule.category for rule in CLASSIFICATION_RULES] == [
            WalletCategory.SNIPER,
            WalletCategory.JEETER,
            WalletCategory.MEV_BOT,
            WalletCategory.WHALE,
            WalletCategory.STRONG_HANDS,
            WalletCategory.WEAK_HANDS,
        ]

    def test_custom_thresholds(self):
        holder = make_holder(percentage=3)
        lenient = WalletThresholds(whale_min_percentage=2)

        assert classify_wallet(holder).category == WalletCategory.UNKNOWN
        assert classify_wallet(holder, lenient).category == WalletCategory.WHALE


class TestWalletQualityAnalysis:
    """Aggregate view over a holder set."""

    def test_empty_set_scores_zero(self):
        analysis = analyze_wallet_quality([])

        assert analysis.overall_quality_score == 0
        assert analysis.total_wallets == 0
        assert set(analysis.category_distribution) == set(WalletCategory)
        assert all(count == 0 for count in analysis.category_distribution.values())
        assert analysis.jeeter_dominance is False
        assert analysis.sniper_dominance is False

    def test_mixed_holders(self, strong_holders, sniper_holder):
        analysis = analyze_wallet_quality(strong_holders + [sniper_holder])

        assert analysis.total_wallets == 6
        assert analysis.high_quality_wallet_count == 5
        assert analysis.count(WalletCategory.SNIPER) == 1
        assert analysis.overall_quality_score == pytest.approx(500 / 6 - 5)
        assert analysis.average_sell_buy_ratio == 0
        assert analysis.sniper_dominance is False
        assert analysis.wallet_scores["sniper"].category == WalletCategory.SNIPER

    def test_jeeter_dominance_clamps_score(self):
        holders = [make_holder(f"j{i}", is_jeeter=True) for i in range(3)]
        holders += [make_holder(f"u{i}") for i in range(2)]
        analysis = analyze_wallet_quality(holders)

        assert analysis.jeeter_dominance is True
        assert analysis.overall_quality_score == 0
        assert analysis.fraction(WalletCategory.JEETER) == pytest.approx(0.6)

    def test_sniper_dominance(self, sniper_holder):
        holders = [sniper_holder.model_copy(update={"address": f"s{i}"}) for i in range(2)]
        holders += [make_holder(f"u{i}") for i in range(3)]

        assert analyze_wallet_quality(holders).sniper_dominance is True

    def test_average_hold_time(self):
        holders = [make_holder("a", average_hold_time=10), make_holder("b", average_hold_time=30)]

        assert analyze_wallet_quality(holders).average_hold_time == pytest.approx(20)

    def test_to_dict_is_serializable(self, strong_holders):
        data = analyze_wallet_quality(strong_holders).to_dict()

        assert data["category_distribution"]["strong_hands"] == 5
        assert data["wallet_scores"]["strong0"]["category"] == "strong_hands"
