"""API routes for dip analysis."""

# Standard library imports
from typing import Any, Dict, List, Optional

# Third-party library imports
from fastapi import APIRouter
from pydantic import BaseModel, Field

# Internal imports
from dip_radar.analysis import run_full_analysis
from dip_radar.api.error_handling import with_error_handling
from dip_radar.config import get_thresholds
from dip_radar.logging_config import get_logger, log_with_context
from dip_radar.models import (
    AnalysisSnapshot,
    FlowWindowStats,
    HolderRecord,
    TokenSnapshot,
    ensure_unique_addresses,
)
from dip_radar.services.bundle_detector import detect_bundles
from dip_radar.services.danger_zone import detect_danger_zone
from dip_radar.services.filters import run_market_health_filter, run_safety_filter
from dip_radar.services.jeeter_risk import (
    annotate_jeeters,
    build_holder_analysis,
    compute_overall_score,
    generate_recommendations,
)
from dip_radar.services.liquidity_health import score_liquidity
from dip_radar.services.microcap import analyze_microcap
from dip_radar.services.wallet_quality import analyze_wallet_quality

# Set up logging
logger = get_logger(__name__)

# Create router
router = APIRouter(
    prefix="/analysis",
    tags=["analysis"],
)


class HoldersRequest(BaseModel):
    holders: List[HolderRecord] = Field(default_factory=list)


class LiquidityRequest(BaseModel):
    token: TokenSnapshot


class HolderAnalysisRequest(HoldersRequest):
    flow: Optional[FlowWindowStats] = None
    volume_5m: Optional[float] = None
    volume_24h: Optional[float] = None


class ScreenRequest(AnalysisSnapshot):
    volume_24h: Optional[float] = None


@router.post("/full")
@with_error_handling
async def full_analysis(request: AnalysisSnapshot) -> Dict[str, Any]:
    """Run the three-layer analysis and return the outcome with its signals."""
    ensure_unique_addresses(request.holders)
    log_with_context(
        logger,
        "info",
        f"Full analysis requested for: {request.token.address}",
        holders=len(request.holders),
        prices=len(request.prices)
    )

    result = run_full_analysis(
        request.prices,
        request.resolve_flow(),
        request.holders,
        request.token,
        get_thresholds(),
    )
    return result.to_dict()


@router.post("/microcap")
@with_error_handling
async def microcap(request: AnalysisSnapshot) -> Dict[str, Any]:
    """Score a microcap dip with a risk level and entry recommendation."""
    ensure_unique_addresses(request.holders)
    result = analyze_microcap(
        request.holders,
        request.resolve_flow(),
        request.token,
        request.prices,
        get_thresholds(),
    )
    return result.to_dict()


@router.post("/wallets")
@with_error_handling
async def wallet_quality(request: HoldersRequest) -> Dict[str, Any]:
    """Classify holder wallets and summarise wallet quality."""
    ensure_unique_addresses(request.holders)
    analysis = analyze_wallet_quality(request.holders, get_thresholds().wallet)
    return analysis.to_dict()


@router.post("/bundles")
@with_error_handling
async def bundles(request: HoldersRequest) -> Dict[str, Any]:
    """Detect coordinated holder bundles."""
    ensure_unique_addresses(request.holders)
    groups = detect_bundles(request.holders, get_thresholds().bundle)
    return {
        "bundle_count": len(groups),
        "bundles": [group.to_dict() for group in groups],
    }


@router.post("/liquidity")
@with_error_handling
async def liquidity(request: LiquidityRequest) -> Dict[str, Any]:
    """Score liquidity pool health."""
    return score_liquidity(request.token, get_thresholds().liquidity).to_dict()


@router.post("/holders")
@with_error_handling
async def holders(request: HolderAnalysisRequest) -> Dict[str, Any]:
    """Holder distribution, jeeter risk, overall score and recommendations."""
    ensure_unique_addresses(request.holders)
    analysis = build_holder_analysis(
        request.holders,
        request.flow,
        volume_5m=request.volume_5m,
        volume_24h=request.volume_24h,
        bundle_thresholds=get_thresholds().bundle,
    )
    return {
        "holder_analysis": analysis.to_dict(),
        "overall_score": compute_overall_score(analysis),
        "recommendations": generate_recommendations(analysis),
    }


@router.post("/screen")
@with_error_handling
async def screen(request: ScreenRequest) -> Dict[str, Any]:
    """Run the safety and market health screens."""
    ensure_unique_addresses(request.holders)
    thresholds = get_thresholds()
    flow = request.resolve_flow()

    holders = annotate_jeeters(request.holders)
    holder_analysis = build_holder_analysis(holders, flow, bundle_thresholds=thresholds.bundle)
    wallets = analyze_wallet_quality(holders, thresholds.wallet)
    lp_health = score_liquidity(request.token, thresholds.liquidity)
    danger_zone = detect_danger_zone(flow, wallets, request.token, thresholds.danger_zone)

    safety = run_safety_filter(request.token, holder_analysis, lp_health, danger_zone, wallets)
    market = run_market_health_filter(
        request.token, holder_analysis, flow, wallets, volume_24h=request.volume_24h
    )
    return {"safety": safety.to_dict(), "market_health": market.to_dict()}
