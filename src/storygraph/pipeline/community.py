"""Community rollup view.

Collapses every qualifying group into a single "community" node and
aggregates asset-level parent links between groups into weighted edges.
This is the cheapest view to render.
"""

import math

import structlog

from storygraph.models.asset import AssetRecord
from storygraph.models.graph import (
    CommunityNode,
    CommunityView,
    EdgeKind,
    TopMember,
    VisualEdge,
)
from storygraph.pipeline.grouping import AssetGroups, Group, group_assets
from storygraph.pipeline.presentation import collection_name, color_for
from storygraph.pipeline.stats import summarize

logger = structlog.get_logger(__name__)


MIN_COMMUNITY_SIZE = 5
TOP_MEMBER_COUNT = 5

MIN_NODE_SIZE = 30
MAX_NODE_SIZE = 120
MIN_BRIGHTNESS = 0.4
MAX_EDGE_WEIGHT = 10


def community_node_size(member_count: int) -> float:
    """Logarithmic radius bounded to [30, 120]."""
    return min(MAX_NODE_SIZE, MIN_NODE_SIZE + math.log(member_count) * 15)


def community_brightness(member_count: int, largest: int) -> float:
    """Relative prominence in [0.4, 1.0]."""
    return MIN_BRIGHTNESS + (member_count / largest) * (1 - MIN_BRIGHTNESS)


def community_edge_weight(connection_count: int) -> float:
    return min(MAX_EDGE_WEIGHT, 2 + math.log(connection_count) * 2)


def community_id(index: int) -> str:
    return f"community_{index}"


def top_members(group: Group, limit: int = TOP_MEMBER_COUNT) -> list[TopMember]:
    """Members with the most descendants; ties keep source order."""
    ranked = sorted(group.members, key=lambda m: m.descendant_count, reverse=True)
    return [
        TopMember(
            id=member.id,
            name=member.display_name or "Unnamed Asset",
            descendant_count=member.descendant_count,
        )
        for member in ranked[:limit]
    ]


class CommunityRollupBuilder:
    """Builds the community view from grouped assets."""

    def __init__(self, min_community_size: int = MIN_COMMUNITY_SIZE):
        self.min_community_size = min_community_size

    def qualifying(self, groups: AssetGroups) -> list[Group]:
        return [g for g in groups if g.size >= self.min_community_size]

    def build(self, groups: AssetGroups) -> CommunityView:
        """Build community nodes, cross-community edges and stats.

        Args:
            groups: Output of the grouping pass.

        Returns:
            CommunityView; empty nodes/edges when no group qualifies.
        """
        qualifying = self.qualifying(groups)
        index_of = {group.key: index for index, group in enumerate(qualifying)}

        nodes = self._build_nodes(qualifying)
        edges = self._build_edges(qualifying, groups, index_of)

        stats = summarize(groups, qualifying, nodes, edges)

        logger.info(
            "community_view_built",
            communities=len(nodes),
            connections=len(edges),
            total_groups=stats.total_groups,
        )
        return CommunityView(nodes=nodes, edges=edges, stats=stats)

    def _build_nodes(self, qualifying: list[Group]) -> list[CommunityNode]:
        if not qualifying:
            return []

        largest = max(group.size for group in qualifying)
        nodes = []

        for index, group in enumerate(qualifying):
            nodes.append(
                CommunityNode(
                    id=community_id(index),
                    label=collection_name(group.key),
                    size=community_node_size(group.size),
                    color=color_for(index),
                    group_key=group.key,
                    community_index=index,
                    member_count=group.size,
                    brightness=community_brightness(group.size, largest),
                    has_connections=group.has_connections,
                    avg_connections=group.internal_connection_count / group.size,
                    top_members=top_members(group),
                )
            )

        return nodes

    def _build_edges(
        self,
        qualifying: list[Group],
        groups: AssetGroups,
        index_of: dict[str, int],
    ) -> list[VisualEdge]:
        """Aggregate cross-community parent links per unordered index pair."""
        connection_counts: dict[tuple[int, int], int] = {}

        for group in qualifying:
            child_index = index_of[group.key]
            for member in group.members:
                for parent_id in member.parent_ids:
                    parent_key = groups.group_of.get(parent_id)
                    if parent_key is None:
                        continue
                    parent_index = index_of.get(parent_key)
                    if parent_index is None or parent_index == child_index:
                        continue

                    pair = (min(parent_index, child_index), max(parent_index, child_index))
                    connection_counts[pair] = connection_counts.get(pair, 0) + 1

        edges = []
        for (low, high), count in connection_counts.items():
            source, target = community_id(low), community_id(high)
            edges.append(
                VisualEdge(
                    id=f"{source}-{target}",
                    source=source,
                    target=target,
                    weight=community_edge_weight(count),
                    kind=EdgeKind.CROSS_COMMUNITY,
                    connection_count=count,
                )
            )

        return edges


def build_community_view(assets: list[AssetRecord]) -> CommunityView:
    """Group assets and build the community view in one call."""
    return CommunityRollupBuilder().build(group_assets(assets))
