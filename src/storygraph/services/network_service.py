"""
Network view service.

Exposes the three named graph queries on top of an asset source. Every call
reads a fresh snapshot and rebuilds the graph from scratch.
"""

from functools import lru_cache

import structlog

from storygraph.models.asset import AssetRecord
from storygraph.models.graph import CommunityView, NetworkView, ViewMode
from storygraph.pipeline.budget import (
    FULL_POLICY,
    OPTIMIZED_POLICY,
    BudgetPolicy,
    NetworkBudgetBuilder,
)
from storygraph.pipeline.community import CommunityRollupBuilder
from storygraph.pipeline.grouping import group_assets
from storygraph.services.asset_source import AssetSource, get_asset_source

logger = structlog.get_logger(__name__)


class NetworkViewService:
    """
    Service for building network views.

    The asset source is passed in explicitly so the service holds no
    global client state and can run against in-memory fixtures.
    """

    def __init__(
        self,
        source: AssetSource,
        optimized_policy: BudgetPolicy = OPTIMIZED_POLICY,
        full_policy: BudgetPolicy = FULL_POLICY,
    ):
        self.source = source
        self.optimized_policy = optimized_policy
        self.full_policy = full_policy

    def load_assets(self) -> list[AssetRecord]:
        """Read the current asset snapshot. Source errors propagate."""
        return self.source.load()

    # =========================================================================
    # Graph Views
    # =========================================================================

    def get_community_view(self) -> CommunityView:
        """One node per qualifying collection, weighted cross-collection edges."""
        groups = group_assets(self.load_assets())
        return CommunityRollupBuilder().build(groups)

    def get_optimized_view(self) -> NetworkView:
        """Per-asset view with aggressive sampling and a small edge budget."""
        groups = group_assets(self.load_assets())
        return NetworkBudgetBuilder(self.optimized_policy).build(groups)

    def get_full_view(self) -> NetworkView:
        """Per-asset view with the larger cross-group edge budget."""
        groups = group_assets(self.load_assets())
        return NetworkBudgetBuilder(self.full_policy).build(groups)

    def get_view(self, mode: ViewMode) -> CommunityView | NetworkView:
        """Dispatch to the view named by ``mode``."""
        if mode is ViewMode.COMMUNITY:
            return self.get_community_view()
        if mode is ViewMode.OPTIMIZED:
            return self.get_optimized_view()
        return self.get_full_view()

    # =========================================================================
    # Asset Listing
    # =========================================================================

    def list_assets(self, limit: int = 100) -> list[AssetRecord]:
        """Most-derived assets first, then by direct children."""
        assets = self.load_assets()
        ranked = sorted(
            assets,
            key=lambda a: (a.descendant_count, a.children_count),
            reverse=True,
        )
        return ranked[:limit]


@lru_cache()
def get_network_service() -> NetworkViewService:
    """Get cached network view service instance."""
    return NetworkViewService(get_asset_source())
