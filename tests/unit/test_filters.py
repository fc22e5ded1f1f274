"""Unit tests for the safety and market health filters."""

import pytest

from dip_radar.services.danger_zone import RedFlagSignals
from dip_radar.services.filters import run_market_health_filter, run_safety_filter
from dip_radar.services.jeeter_risk import HolderAnalysis
from dip_radar.services.liquidity_health import LiquidityHealthSignals
from dip_radar.services.wallet_quality import WalletCategory, WalletQualityAnalysis
from tests.fixtures.common import make_token


@pytest.fixture
def holder_analysis():
    return HolderAnalysis(
        total_holders=100,
        jeeter_count=10,
        jeeter_percentage=10,
        holder_concentration=20,
        jeeter_risk_score=10,
    )


@pytest.fixture
def healthy_lp():
    return LiquidityHealthSignals(
        liquidity_amount=50_000, lp_ratio=0.2, is_healthy=True, health_score=90
    )


class TestSafetyFilter:
    """Test suite for run_safety_filter."""

    def test_clean_token_passes(self, sample_token, holder_analysis, healthy_lp):
        result = run_safety_filter(sample_token, holder_analysis, healthy_lp, RedFlagSignals())

        assert result.passed is True
        assert result.failed_checks == ()
        assert result.details.safe_tokenomics is True
        assert result.details.renounced is None

    def test_unhealthy_pool(self, sample_token, holder_analysis):
        thin = LiquidityHealthSignals(
            liquidity_amount=3_000, lp_ratio=0.01, is_healthy=False, health_score=30
        )
        result = run_safety_filter(sample_token, holder_analysis, thin, RedFlagSignals())

        assert result.passed is False
        assert result.details.lp_locked is False
        assert result.details.lp_healthy is False
        assert len(result.failed_checks) == 2

    def test_healthy_pool_below_safety_bar(self, sample_token, holder_analysis):
        moderate = LiquidityHealthSignals(
            liquidity_amount=8_000, lp_ratio=0.08, is_healthy=True, health_score=65
        )
        result = run_safety_filter(sample_token, holder_analysis, moderate, RedFlagSignals())

        assert result.failed_checks == ("LP health score too low",)

    def test_jeeter_heavy_holders(self, sample_token, holder_analysis, healthy_lp):
        jeeter_heavy = HolderAnalysis(
            total_holders=100, jeeter_percentage=65, holder_concentration=20
        )
        result = run_safety_filter(sample_token, jeeter_heavy, healthy_lp, RedFlagSignals())

        assert result.details.honeypot is True
        assert result.details.safe_tokenomics is False
        assert len(result.failed_checks) == 2

    def test_mint_abuse(self, holder_analysis, healthy_lp):
        token = make_token(supply=2e12)
        result = run_safety_filter(token, holder_analysis, healthy_lp, RedFlagSignals())

        assert result.details.mint_abuse is True
        assert result.passed is False

    def test_scam_patterns(self, sample_token, holder_analysis, healthy_lp):
        danger = RedFlagSignals(risk_score=70, is_danger_zone=True)
        snipers = WalletQualityAnalysis(sniper_dominance=True)

        assert run_safety_filter(
            sample_token, holder_analysis, healthy_lp, danger
        ).details.scam_patterns is True
        assert run_safety_filter(
            sample_token, holder_analysis, healthy_lp, RedFlagSignals(), snipers
        ).details.scam_patterns is True

    def test_small_holder_base(self, sample_token, healthy_lp):
        result = run_safety_filter(
            sample_token, HolderAnalysis(total_holders=5), healthy_lp, RedFlagSignals()
        )

        assert result.details.safe_tokenomics is False

    def test_to_dict(self, sample_token, holder_analysis, healthy_lp):
        data = run_safety_filter(sample_token, holder_analysis, healthy_lp, RedFlagSignals()).to_dict()

        assert data["passed"] is True
        assert data["details"]["clean_contract"] is None


class TestMarketHealthFilter:
    """Test suite for run_market_health_filter."""

    def test_healthy_microcap(self, sample_token, holder_analysis, empty_flow):
        result = run_market_health_filter(
            sample_token, holder_analysis, empty_flow, WalletQualityAnalysis(), volume_24h=100_000
        )

        assert result.passed is True
        assert result.score == 100
        assert result.details.holder_growth is None

    def test_low_volume_only_lowers_score(self, sample_token, holder_analysis, empty_flow):
        result = run_market_health_filter(
            sample_token, holder_analysis, empty_flow, WalletQualityAnalysis()
        )

        assert result.passed is True
        assert result.score == 90
        assert result.details.min_volume is False

    def test_volume_estimated_from_flow(self, sample_token, holder_analysis, bullish_flow):
        result = run_market_health_filter(
            sample_token, holder_analysis, bullish_flow, WalletQualityAnalysis()
        )

        assert result.details.min_volume is True

    def test_market_cap_too_high(self, holder_analysis, empty_flow):
        token = make_token(market_cap=5_000_000)
        result = run_market_health_filter(
            token, holder_analysis, empty_flow, WalletQualityAnalysis(), volume_24h=100_000
        )

        assert result.passed is False
        assert result.score == 50
        assert result.failed_checks[0] == "Market cap too high ($5000K)"

    def test_bot_dominated(self, sample_token, holder_analysis, empty_flow):
        bots = WalletQualityAnalysis(
            category_distribution={WalletCategory.MEV_BOT: 60, WalletCategory.STRONG_HANDS: 40}
        )
        result = run_market_health_filter(
            sample_token, holder_analysis, empty_flow, bots, volume_24h=100_000
        )

        assert result.passed is False
        assert result.details.no_bot_only_volume is False
        assert result.score == 80

    def test_sniper_dominated(self, sample_token, holder_analysis, empty_flow):
        snipers = WalletQualityAnalysis(category_distribution={WalletCategory.SNIPER: 30})
        result = run_market_health_filter(
            sample_token, holder_analysis, empty_flow, snipers, volume_24h=100_000
        )

        assert result.details.no_sniper_dominance is False
        assert result.score == 85

    def test_too_few_holders(self, sample_token, empty_flow):
        result = run_market_health_filter(
            sample_token, HolderAnalysis(total_holders=10), empty_flow,
            WalletQualityAnalysis(), volume_24h=100_000,
        )

        assert result.passed is False
        assert result.details.min_holders is False
