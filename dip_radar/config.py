"""Configuration module for dip_radar.

All heuristic thresholds used by the analyzers are grouped here as frozen
dataclasses. The defaults are the calibrated values; any of them can be
overridden with an environment variable named
``DIP_RADAR_<SECTION>_<FIELD>`` (for example
``DIP_RADAR_LIQUIDITY_CRITICAL_USD=7500``).
"""

# Standard library imports
import os
from dataclasses import dataclass, field, fields, replace
from functools import lru_cache
from typing import Any, Callable, Dict, Optional

# Third-party library imports
from dotenv import load_dotenv

# Internal imports
from dip_radar.logging_config import get_logger
from dip_radar.utils.error_handling import ConfigurationError

# Load environment variables from .env file
load_dotenv()

logger = get_logger(__name__)

ENV_PREFIX = "DIP_RADAR_"


def get_env_var(key: str, default: Any = None, required: bool = False,
                validator: Optional[Callable[[str], Any]] = None) -> Any:
    """Get and validate environment variable.

    Args:
        key: Environment variable name
        default: Default value if not present
        required: If True, raises ConfigurationError when not found
        validator: Optional validation function

    Returns:
        The environment variable value or default

    Raises:
        ConfigurationError: If required and not found, or fails validation
    """
    value = os.environ.get(key)

    if value is None:
        if required:
            raise ConfigurationError(
                f"Required environment variable '{key}' not found",
                details={"setting": key}
            )
        return default

    if validator:
        try:
            return validator(value)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value for environment variable '{key}': {str(e)}",
                details={"setting": key, "value": value}
            )

    return value


def float_validator(value: str) -> float:
    """Validate and convert string to a finite float.

    Raises:
        ValueError: If not a valid finite number
    """
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid number")
    if number != number or number in (float("inf"), float("-inf")):
        raise ValueError(f"'{value}' is not a finite number")
    return number


def int_validator(value: str) -> int:
    """Validate and convert string to integer.

    Raises:
        ValueError: If not a valid integer
    """
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid integer")


def log_level_validator(value: str) -> str:
    """Validate log level.

    Raises:
        ValueError: If not a valid log level
    """
    valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    upper_value = value.upper()
    if upper_value not in valid_levels:
        raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
    return upper_value


@dataclass(frozen=True)
class WalletThresholds:
    """Per-wallet classification thresholds (minutes unless noted)."""

    sniper_max_hold_minutes: float = 5
    sniper_min_tx_count: int = 10
    sniper_round_trip_seconds: float = 120
    sniper_min_round_trips: int = 3
    jeeter_score_threshold: float = 50
    mev_min_tx_count: int = 50
    mev_min_buy_count: int = 20
    mev_max_hold_minutes: float = 1
    whale_min_percentage: float = 5
    whale_long_hold_minutes: float = 60
    whale_fast_exit_minutes: float = 10
    strong_min_hold_minutes: float = 120
    strong_max_sell_buy_ratio: float = 0.3
    strong_no_sell_hold_minutes: float = 60
    weak_max_hold_minutes: float = 30
    weak_min_sell_buy_ratio: float = 0.7
    jeeter_dominance_fraction: float = 0.4
    sniper_dominance_fraction: float = 0.3


@dataclass(frozen=True)
class BundleThresholds:
    """Thresholds for coordinated-wallet grouping."""

    max_balance_difference: float = 0.05
    min_member_percentage: float = 0.1
    min_group_size: int = 3
    max_hold_time_spread_minutes: float = 10
    suspicious_combined_percentage: float = 5
    min_jeeter_members: int = 2


@dataclass(frozen=True)
class LiquidityThresholds:
    """Pool depth (USD) and pool-to-market-cap ratio thresholds."""

    critical_usd: float = 5_000
    low_usd: float = 10_000
    moderate_usd: float = 50_000
    ratio_critical: float = 0.05
    ratio_low: float = 0.1
    ratio_high: float = 0.5
    healthy_score: float = 60


@dataclass(frozen=True)
class ExhaustionThresholds:
    """Seller exhaustion signal thresholds."""

    fifteen_minute_volume_share: float = 0.25
    sell_volume_drop_ratio: float = 0.3
    large_sell_to_buy_ratio: float = 0.5
    max_large_sells: int = 3
    buy_ratio_collapse: float = 0.6
    final_exit_max_large_sells: int = 2
    mev_inactive_score: float = 20
    tight_range_volatility: float = 0.05
    volatility_collapse_trend: float = -0.2
    volatility_window: int = 30
    min_trend_samples: int = 10
    bottom_score: float = 60


@dataclass(frozen=True)
class DangerZoneThresholds:
    """Red-flag thresholds for the danger zone detector."""

    sell_ratio: float = 0.6
    fast_rotation_minutes: float = 10
    sniper_fraction: float = 0.3
    quick_dump_minutes: float = 5
    lp_low_usd: float = 10_000
    lp_thin_usd: float = 5_000
    mev_spam_score: float = 50
    swap_bot_fraction: float = 0.2
    router_tx_per_minute: float = 5
    router_max_average_size_usd: float = 100
    danger_score: float = 50


@dataclass(frozen=True)
class MicrostructureParams:
    """Windowing and scoring parameters for short-horizon signals."""

    volatility_window: int = 30
    momentum_limit: float = 10
    volatility_limit: float = 10
    bot_reference_tx_per_minute: float = 30
    bot_small_tx_usd: float = 100
    bot_mev_cap: float = 25
    volatility_compression_pct: float = -0.15
    volatility_collapse_std_dev: float = 0.03
    flow_delta_reason: float = 0.05


@dataclass(frozen=True)
class StructuralParams:
    """Weights of the structural health composite."""

    base_score: float = 50
    wallet_quality_weight: float = 0.3
    lp_health_weight: float = 0.3
    exhaustion_weight: float = 0.25
    danger_weight: float = 0.4


@dataclass(frozen=True)
class OutcomeParams:
    """Weights and decision thresholds of the outcome predictor."""

    micro_weight: float = 0.45
    structural_weight: float = 0.45
    volatility_weight: float = 0.10
    micro_good: float = 60
    structural_good: float = 55
    danger_risk_high: float = 50
    low_risk_combined: float = 70


@dataclass(frozen=True)
class AnalysisThresholds:
    """All tunable analysis constants."""

    wallet: WalletThresholds = field(default_factory=WalletThresholds)
    bundle: BundleThresholds = field(default_factory=BundleThresholds)
    liquidity: LiquidityThresholds = field(default_factory=LiquidityThresholds)
    exhaustion: ExhaustionThresholds = field(default_factory=ExhaustionThresholds)
    danger_zone: DangerZoneThresholds = field(default_factory=DangerZoneThresholds)
    microstructure: MicrostructureParams = field(default_factory=MicrostructureParams)
    structural: StructuralParams = field(default_factory=StructuralParams)
    outcome: OutcomeParams = field(default_factory=OutcomeParams)

    def validate(self) -> None:
        """Validate cross-field invariants.

        Raises:
            ConfigurationError: If settings are inconsistent
        """
        weights = self.outcome
        total = weights.micro_weight + weights.structural_weight + weights.volatility_weight
        if abs(total - 1.0) > 1e-6:
            raise ConfigurationError(
                "Outcome weights must sum to 1",
                details={"setting": "outcome", "value": total}
            )

        liquidity = self.liquidity
        if not liquidity.critical_usd <= liquidity.low_usd <= liquidity.moderate_usd:
            raise ConfigurationError(
                "Liquidity tiers must be ordered critical <= low <= moderate",
                details={"setting": "liquidity"}
            )

        for section in fields(self):
            for item in fields(getattr(self, section.name)):
                value = getattr(getattr(self, section.name), item.name)
                if item.name.endswith(("_window", "_size", "_count", "_samples")) and value <= 0:
                    raise ConfigurationError(
                        f"{section.name}.{item.name} must be positive",
                        details={"setting": f"{section.name}.{item.name}", "value": value}
                    )


def _load_section(section_name: str, section: Any) -> Any:
    overrides: Dict[str, Any] = {}
    for item in fields(section):
        key = f"{ENV_PREFIX}{section_name}_{item.name}".upper()
        validator = int_validator if item.type is int else float_validator
        value = get_env_var(key, validator=validator)
        if value is not None:
            overrides[item.name] = value
    return replace(section, **overrides) if overrides else section


def load_thresholds_from_env() -> AnalysisThresholds:
    """Load analysis thresholds, applying ``DIP_RADAR_*`` overrides.

    Returns:
        Validated AnalysisThresholds

    Raises:
        ConfigurationError: If an override is malformed or inconsistent
    """
    defaults = AnalysisThresholds()
    sections = {
        item.name: _load_section(item.name, getattr(defaults, item.name))
        for item in fields(defaults)
    }
    thresholds = AnalysisThresholds(**sections)
    thresholds.validate()

    if thresholds != defaults:
        logger.info("Loaded analysis threshold overrides from environment")

    return thresholds


@lru_cache(maxsize=1)
def get_thresholds() -> AnalysisThresholds:
    """Get the process-wide thresholds (loaded once)."""
    return load_thresholds_from_env()


DEFAULT_THRESHOLDS = AnalysisThresholds()


@dataclass(frozen=True)
class ServerSettings:
    """HTTP server settings."""

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    def validate(self) -> None:
        """Validate server settings.

        Raises:
            ConfigurationError: If settings are invalid
        """
        if self.PORT <= 0 or self.PORT > 65535:
            raise ConfigurationError(
                f"Invalid server port: {self.PORT}",
                details={"setting": "PORT", "value": self.PORT}
            )


def load_server_settings() -> ServerSettings:
    """Load server settings from environment variables."""
    settings = ServerSettings(
        HOST=get_env_var("HOST", "0.0.0.0"),
        PORT=get_env_var("PORT", 8000, validator=int_validator),
        LOG_LEVEL=get_env_var("LOG_LEVEL", "INFO", validator=log_level_validator),
    )
    settings.validate()
    return settings
