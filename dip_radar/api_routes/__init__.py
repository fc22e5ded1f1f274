"""API routes package for dip_radar."""

# Import routers to make them available for inclusion
from dip_radar.api_routes.analysis import router as analysis_router

# List of available routers
__all__ = [
    "analysis_router",
]
