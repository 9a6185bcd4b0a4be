"""
Graph-building pipeline.

Grouping is shared by every view; the community rollup and the budgeted
network builder are the two rendering modes on top of it.
"""

from storygraph.pipeline.tiers import SizeTier, classify, tier_breakdown
from storygraph.pipeline.grouping import AssetGroups, Group, group_assets
from storygraph.pipeline.stats import summarize
from storygraph.pipeline.community import CommunityRollupBuilder, build_community_view
from storygraph.pipeline.budget import (
    FULL_POLICY,
    OPTIMIZED_POLICY,
    BudgetPolicy,
    NetworkBudgetBuilder,
    build_network_view,
)

__all__ = [
    "SizeTier",
    "classify",
    "tier_breakdown",
    "AssetGroups",
    "Group",
    "group_assets",
    "summarize",
    "CommunityRollupBuilder",
    "build_community_view",
    "BudgetPolicy",
    "NetworkBudgetBuilder",
    "FULL_POLICY",
    "OPTIMIZED_POLICY",
    "build_network_view",
]
