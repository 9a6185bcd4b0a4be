"""Stats summarizer for graph views."""

from typing import Sequence

from storygraph.models.graph import GraphStats, VisualEdge
from storygraph.pipeline.grouping import AssetGroups, Group
from storygraph.pipeline.tiers import tier_breakdown


def summarize(
    groups: AssetGroups,
    qualifying: Sequence[Group],
    nodes: Sequence,
    edges: Sequence[VisualEdge],
) -> GraphStats:
    """Compute dataset-wide counts for one view.

    The tier breakdown and largest group are taken over all groups, not
    only the ones the view rendered.
    """
    sizes = groups.sizes
    return GraphStats(
        total_assets=sum(sizes),
        total_groups=len(sizes),
        visible_groups=len(qualifying),
        largest_group=max(sizes, default=0),
        tier_breakdown=tier_breakdown(sizes),
        node_count=len(nodes),
        edge_count=len(edges),
    )
