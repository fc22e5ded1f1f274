"""Unit tests for threshold and server configuration."""

import pytest

from dip_radar.config import (
    DEFAULT_THRESHOLDS,
    AnalysisThresholds,
    get_thresholds,
    load_server_settings,
    load_thresholds_from_env,
)
from dip_radar.services.danger_zone import detect_danger_zone
from dip_radar.services.liquidity_health import score_liquidity
from dip_radar.services.wallet_quality import WalletQualityAnalysis
from dip_radar.utils.error_handling import ConfigurationError, DipRadarError, ErrorCode


class TestThresholds:
    """Test suite for analysis threshold loading."""

    def test_defaults_are_consistent(self):
        DEFAULT_THRESHOLDS.validate()

        assert load_thresholds_from_env() == AnalysisThresholds()

    def test_float_override(self, monkeypatch):
        monkeypatch.setenv("DIP_RADAR_LIQUIDITY_CRITICAL_USD", "7500")

        thresholds = load_thresholds_from_env()

        assert thresholds.liquidity.critical_usd == 7500.0
        assert thresholds.liquidity.low_usd == DEFAULT_THRESHOLDS.liquidity.low_usd

    def test_int_override(self, monkeypatch):
        monkeypatch.setenv("DIP_RADAR_BUNDLE_MIN_GROUP_SIZE", "4")

        thresholds = load_thresholds_from_env()

        assert thresholds.bundle.min_group_size == 4
        assert isinstance(thresholds.bundle.min_group_size, int)

    @pytest.mark.parametrize("key,value", [
        ("DIP_RADAR_LIQUIDITY_CRITICAL_USD", "lots"),
        ("DIP_RADAR_LIQUIDITY_CRITICAL_USD", "nan"),
        ("DIP_RADAR_BUNDLE_MIN_GROUP_SIZE", "2.5"),
        ("DIP_RADAR_OUTCOME_MICRO_WEIGHT", "0.5"),
        ("DIP_RADAR_LIQUIDITY_CRITICAL_USD", "20000"),
        ("DIP_RADAR_EXHAUSTION_VOLATILITY_WINDOW", "0"),
    ])
    def test_invalid_overrides(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)

        with pytest.raises(ConfigurationError):
            load_thresholds_from_env()

    def test_process_thresholds_are_cached(self, monkeypatch):
        get_thresholds.cache_clear()
        monkeypatch.setenv("DIP_RADAR_DANGER_ZONE_DANGER_SCORE", "40")
        try:
            first = get_thresholds()
            monkeypatch.setenv("DIP_RADAR_DANGER_ZONE_DANGER_SCORE", "60")

            assert get_thresholds() is first
            assert first.danger_zone.danger_score == 40
        finally:
            get_thresholds.cache_clear()

    def test_services_default_to_process_thresholds(self, monkeypatch, empty_flow, sample_token):
        get_thresholds.cache_clear()
        monkeypatch.setenv("DIP_RADAR_DANGER_ZONE_DANGER_SCORE", "200")
        monkeypatch.setenv("DIP_RADAR_LIQUIDITY_HEALTHY_SCORE", "101")
        try:
            danger = detect_danger_zone(empty_flow, WalletQualityAnalysis(), sample_token)
            liquidity = score_liquidity(sample_token)

            assert danger.risk_score == 50
            assert danger.is_danger_zone is False
            assert liquidity.health_score == 100
            assert liquidity.is_healthy is False
        finally:
            get_thresholds.cache_clear()


class TestServerSettings:
    """Test suite for server settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = load_server_settings()

        assert settings.PORT == 8000
        assert settings.LOG_LEVEL == "INFO"

    def test_log_level_is_normalised(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert load_server_settings().LOG_LEVEL == "DEBUG"

    @pytest.mark.parametrize("key,value", [("PORT", "70000"), ("PORT", "http"), ("LOG_LEVEL", "loud")])
    def test_invalid_settings(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)

        with pytest.raises(ConfigurationError):
            load_server_settings()


def test_error_to_dict():
    error = ConfigurationError("Bad threshold", details={"setting": "x"})

    assert isinstance(error, DipRadarError)
    assert error.to_dict() == {
        "error": "Bad threshold",
        "error_code": ErrorCode.CONFIGURATION_ERROR.value,
        "error_type": "CONFIGURATION_ERROR",
        "details": {"setting": "x"},
    }
    assert "[CONFIGURATION_ERROR]" in str(error)
