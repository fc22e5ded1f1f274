"""Data models for the safety and market health filters."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class SafetyChecks:
    """Outcome of each safety check; None means it cannot be verified yet."""

    lp_locked: bool = False
    lp_healthy: bool = False
    honeypot: bool = False
    mint_abuse: bool = False
    fee_abuse: bool = False
    scam_patterns: bool = False
    safe_tokenomics: bool = False
    renounced: Optional[bool] = None
    has_blacklist: Optional[bool] = None
    clean_contract: Optional[bool] = None


@dataclass(frozen=True)
class SafetyFilterResult:
    """Hard pass/fail safety screen."""

    passed: bool
    failed_checks: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    details: SafetyChecks = field(default_factory=SafetyChecks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "failed_checks": list(self.failed_checks),
            "warnings": list(self.warnings),
            "details": dict(vars(self.details)),
        }


@dataclass(frozen=True)
class MarketHealthChecks:
    market_cap_in_range: bool = False
    lp_mc_ratio_stable: bool = False
    min_holders: bool = False
    min_liquidity: bool = False
    min_volume: bool = False
    no_bot_only_volume: bool = False
    no_sniper_dominance: bool = False
    # Needs historical holder counts
    holder_growth: Optional[bool] = None


@dataclass(frozen=True)
class MarketHealthFilterResult:
    """Microcap quality screen with a 0-100 score."""

    passed: bool
    score: float
    failed_checks: Tuple[str, ...] = ()
    details: MarketHealthChecks = field(default_factory=MarketHealthChecks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "score": self.score,
            "failed_checks": list(self.failed_checks),
            "details": dict(vars(self.details)),
        }
