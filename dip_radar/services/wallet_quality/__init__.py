"""Wallet quality service for classifying holder behaviour."""

from dip_radar.services.wallet_quality.classifier import (
    CLASSIFICATION_RULES,
    ClassificationRule,
    classify_wallet,
    analyze_wallet_quality,
)
from dip_radar.services.wallet_quality.models import (
    WalletCategory,
    WalletClassification,
    WalletQualityAnalysis,
)

__all__ = [
    "CLASSIFICATION_RULES",
    "ClassificationRule",
    "classify_wallet",
    "analyze_wallet_quality",
    "WalletCategory",
    "WalletClassification",
    "WalletQualityAnalysis",
]
