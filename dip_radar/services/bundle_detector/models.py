"""Data models for bundle (coordinated wallet) detection."""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class BundleGroup:
    """A cluster of holders with near-identical balances."""

    addresses: Tuple[str, ...]
    total_percentage: float
    average_balance: float
    is_suspicious: bool
    reasons: Tuple[str, ...] = ()

    @property
    def size(self) -> int:
        return len(self.addresses)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "addresses": list(self.addresses),
            "total_percentage": self.total_percentage,
            "average_balance": self.average_balance,
            "is_suspicious": self.is_suspicious,
            "reasons": list(self.reasons),
        }


@dataclass(frozen=True)
class CoordinatedActivity:
    """Summary of bundle detection over a holder set."""

    has_bundles: bool
    bundle_count: int
    suspicious_bundles: Tuple[BundleGroup, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "has_bundles": self.has_bundles,
            "bundle_count": self.bundle_count,
            "suspicious_bundles": [bundle.to_dict() for bundle in self.suspicious_bundles],
        }
