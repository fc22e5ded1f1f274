"""
Analysis snapshot model.

Bundles everything one analysis run consumes. Flow may be supplied
directly or as parsed swaps to aggregate.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from dip_radar.models.flow import FlowWindowStats, SwapTransaction
from dip_radar.models.holder import HolderRecord
from dip_radar.models.token import PricePoint, TokenSnapshot
from dip_radar.utils.error_handling import ValidationError


class AnalysisSnapshot(BaseModel):
    """Point-in-time inputs for one token."""

    token: TokenSnapshot
    holders: List[HolderRecord] = Field(default_factory=list)
    prices: List[PricePoint] = Field(default_factory=list)
    flow: Optional[FlowWindowStats] = None
    swaps: Optional[List[SwapTransaction]] = Field(
        None, description="Parsed swaps; aggregated into flow when flow is omitted"
    )

    def resolve_flow(self) -> FlowWindowStats:
        """Supplied flow, else flow aggregated from swaps, else the empty flow."""
        if self.flow is not None:
            return self.flow
        if self.swaps:
            # The aggregator imports this package
            from dip_radar.services.flow_aggregator import aggregate_flow
            return aggregate_flow(self.swaps)
        return FlowWindowStats.empty()


def ensure_unique_addresses(holders: List[HolderRecord]) -> None:
    """Reject holder snapshots that list the same wallet twice.

    Raises:
        ValidationError: On a duplicate address
    """
    seen = set()
    for holder in holders:
        if holder.address in seen:
            raise ValidationError(
                f"Duplicate holder address: {holder.address}",
                details={"address": holder.address}
            )
        seen.add(holder.address)
