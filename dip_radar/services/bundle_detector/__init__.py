"""Bundle detector service for identifying coordinated holder clusters."""

from dip_radar.services.bundle_detector.detector import detect_bundles, detect_coordinated_activity
from dip_radar.services.bundle_detector.models import BundleGroup, CoordinatedActivity

__all__ = ["detect_bundles", "detect_coordinated_activity", "BundleGroup", "CoordinatedActivity"]
