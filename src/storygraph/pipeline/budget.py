"""Node/edge budget builder for the optimized and full network views.

Exposes individual assets as nodes while bounding the number of rendered
elements. Large groups collapse to one aggregate node, medium groups show
an important subset, small groups show their first few members. Cross-group
edges are added first-found until the policy's cap is reached.
"""

import math
from dataclasses import dataclass

import structlog

from storygraph.models.asset import AssetRecord
from storygraph.models.graph import EdgeKind, NetworkView, ViewMode, VisualEdge, VisualNode
from storygraph.pipeline.grouping import AssetGroups, Group, group_assets
from storygraph.pipeline.presentation import asset_label, collection_name, color_for
from storygraph.pipeline.stats import summarize
from storygraph.pipeline.tiers import MEDIUM_TIER_MIN, SizeTier

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BudgetPolicy:
    """Qualification and sampling parameters for one network view."""
    mode: ViewMode
    qualify_all_groups: bool = False
    min_group_size: int = 5
    min_viable_groups: int = 20
    medium_member_cap: int = 25
    medium_member_fraction: float = 0.3
    medium_fallback_count: int = 5
    small_member_cap: int = 15
    cross_edge_cap: int = 50
    cross_edge_node_fraction: float | None = None

    def cross_edge_budget(self, node_count: int) -> int:
        """Maximum cross-group edges for a view with ``node_count`` nodes."""
        if self.cross_edge_node_fraction is None:
            return self.cross_edge_cap
        return min(
            self.cross_edge_cap,
            math.floor(node_count * self.cross_edge_node_fraction),
        )

    def medium_member_budget(self, group_size: int) -> int:
        return min(
            self.medium_member_cap,
            math.ceil(group_size * self.medium_member_fraction),
        )


OPTIMIZED_POLICY = BudgetPolicy(
    mode=ViewMode.OPTIMIZED,
    cross_edge_cap=30,
    cross_edge_node_fraction=0.1,
)

# Every group is rendered and small/tiny groups show all their members
FULL_POLICY = BudgetPolicy(
    mode=ViewMode.FULL,
    qualify_all_groups=True,
    small_member_cap=MEDIUM_TIER_MIN,
    cross_edge_cap=50,
)


PARENT_CHILD_WEIGHTS = {
    SizeTier.MEDIUM: 2,
    SizeTier.SMALL: 1,
    SizeTier.TINY: 1,
}
CROSS_GROUP_WEIGHT = 3


def aggregate_node_id(group_key: str) -> str:
    return f"group_{group_key}"


def aggregate_node_size(member_count: int) -> float:
    return min(120, 50 + math.log(member_count) * 15)


def medium_node_size(descendant_count: int) -> float:
    return max(25, min(70, 25 + descendant_count * 3))


def small_node_size(descendant_count: int) -> float:
    return max(20, min(50, 20 + descendant_count * 4))


def is_important(asset: AssetRecord) -> bool:
    """Roots, well-derived assets and assets with parent links."""
    return (
        asset.is_root
        or asset.descendant_count > 2
        or asset.children_count > 1
        or len(asset.parent_ids) > 0
    )


class EdgeSet:
    """Edges keyed by unordered endpoint pair; the first writer wins."""

    def __init__(self):
        self.edges: list[VisualEdge] = []
        self._seen: set[frozenset[str]] = set()

    def __len__(self) -> int:
        return len(self.edges)

    def add(self, source: str, target: str, weight: float, kind: EdgeKind) -> bool:
        """Add an edge unless the pair is already linked. Returns True if added."""
        pair = frozenset((source, target))
        if pair in self._seen:
            return False
        self._seen.add(pair)
        self.edges.append(
            VisualEdge(
                id=f"{source}-{target}",
                source=source,
                target=target,
                weight=weight,
                kind=kind,
            )
        )
        return True


class NetworkBudgetBuilder:
    """Builds a per-asset network view under a BudgetPolicy."""

    def __init__(self, policy: BudgetPolicy = OPTIMIZED_POLICY):
        self.policy = policy

    # =========================================================================
    # Qualification
    # =========================================================================

    def qualify(self, groups: AssetGroups) -> list[Group]:
        """Decide which groups are rendered, in discovery order.

        Large and medium groups always qualify, small groups only when they
        have connections. When fewer than ``min_viable_groups`` qualify,
        further groups of at least ``min_group_size`` are added in discovery
        order. A policy with ``qualify_all_groups`` renders every group.
        """
        policy = self.policy
        if policy.qualify_all_groups:
            return list(groups)

        selected: set[str] = set()

        for group in groups:
            if group.tier in (SizeTier.LARGE, SizeTier.MEDIUM):
                selected.add(group.key)
            elif group.tier is SizeTier.SMALL and group.has_connections:
                selected.add(group.key)

        if len(selected) < policy.min_viable_groups:
            for group in groups:
                if len(selected) >= policy.min_viable_groups:
                    break
                if group.key not in selected and group.size >= policy.min_group_size:
                    selected.add(group.key)

        if not selected:
            selected = {g.key for g in groups if g.size >= policy.min_group_size}
            logger.debug("qualification_relaxed", mode=policy.mode.value, groups=len(selected))

        return [group for group in groups if group.key in selected]

    # =========================================================================
    # Node construction
    # =========================================================================

    def select_members(self, group: Group) -> list[AssetRecord]:
        """Members rendered individually for a non-large group."""
        if group.tier is SizeTier.MEDIUM:
            budget = self.policy.medium_member_budget(group.size)
            selected = [m for m in group.members if is_important(m)][:budget]
            if not selected:
                fallback = min(self.policy.medium_fallback_count, group.size)
                selected = group.members[:fallback]
            return selected

        return group.members[: min(self.policy.small_member_cap, group.size)]

    def _aggregate_node(self, group: Group) -> VisualNode:
        return VisualNode(
            id=aggregate_node_id(group.key),
            label=collection_name(group.key),
            size=aggregate_node_size(group.size),
            color=color_for(group.ordinal),
            group_key=group.key,
            community_index=group.ordinal,
            is_group_aggregate=True,
            member_count=group.size,
            descendant_total=sum(m.descendant_count for m in group.members),
            children_total=sum(m.children_count for m in group.members),
        )

    def _asset_node(self, asset: AssetRecord, group: Group) -> VisualNode:
        if group.tier is SizeTier.MEDIUM:
            label = asset_label(asset.display_name, asset.id, 25)
            size = medium_node_size(asset.descendant_count)
        else:
            label = asset_label(asset.display_name, asset.id, 20)
            size = small_node_size(asset.descendant_count)

        return VisualNode(
            id=asset.id,
            label=label,
            size=size,
            color=color_for(group.ordinal),
            group_key=group.key,
            community_index=group.ordinal,
            image_url=asset.image_url,
            descendant_count=asset.descendant_count,
            children_count=asset.children_count,
        )

    def _render_group(self, group: Group, edges: EdgeSet) -> list[VisualNode]:
        if group.tier is SizeTier.LARGE:
            return [self._aggregate_node(group)]

        members = self.select_members(group)
        member_ids = {m.id for m in members}
        weight = PARENT_CHILD_WEIGHTS[group.tier]

        for member in members:
            for parent_id in member.parent_ids:
                if parent_id != member.id and parent_id in member_ids:
                    edges.add(parent_id, member.id, weight, EdgeKind.PARENT_CHILD)

        return [self._asset_node(m, group) for m in members]

    # =========================================================================
    # Cross-group edges
    # =========================================================================

    def _link_groups(
        self,
        groups: AssetGroups,
        qualifying: list[Group],
        nodes: list[VisualNode],
        edges: EdgeSet,
    ) -> int:
        """Add first-found cross-group edges up to the policy's cap."""
        budget = self.policy.cross_edge_budget(len(nodes))
        node_ids = {node.id for node in nodes}
        qualifying_keys = {group.key for group in qualifying}
        added = 0

        for asset in groups.assets:
            if added >= budget:
                break
            if asset.group_key not in qualifying_keys:
                continue

            for parent_id in asset.parent_ids:
                if added >= budget:
                    break

                parent = groups.resolve(parent_id)
                if parent is None:
                    continue
                if parent.group_key == asset.group_key or parent.group_key not in qualifying_keys:
                    continue

                source = parent.id if parent.id in node_ids else aggregate_node_id(parent.group_key)
                target = asset.id if asset.id in node_ids else aggregate_node_id(asset.group_key)
                if source not in node_ids or target not in node_ids:
                    continue

                if edges.add(source, target, CROSS_GROUP_WEIGHT, EdgeKind.CROSS_GROUP):
                    added += 1

        return added

    # =========================================================================
    # Build
    # =========================================================================

    def build(self, groups: AssetGroups) -> NetworkView:
        """Build nodes, edges and stats for the policy's view.

        Args:
            groups: Output of the grouping pass.

        Returns:
            NetworkView; empty but well-formed for degenerate input.
        """
        qualifying = self.qualify(groups)

        nodes: list[VisualNode] = []
        edges = EdgeSet()
        for group in qualifying:
            nodes.extend(self._render_group(group, edges))

        cross_edges = self._link_groups(groups, qualifying, nodes, edges)

        stats = summarize(groups, qualifying, nodes, edges.edges).model_copy(
            update={
                "optimized_nodes": len(nodes),
                "optimized_edges": len(edges),
                "filtered_communities": len(qualifying),
            }
        )

        logger.info(
            "network_view_built",
            mode=self.policy.mode.value,
            nodes=len(nodes),
            edges=len(edges),
            cross_group_edges=cross_edges,
            qualifying_groups=len(qualifying),
        )
        return NetworkView(
            mode=self.policy.mode,
            nodes=nodes,
            edges=edges.edges,
            stats=stats,
        )


def build_network_view(
    assets: list[AssetRecord],
    policy: BudgetPolicy = OPTIMIZED_POLICY,
) -> NetworkView:
    """Group assets and build a budgeted network view in one call."""
    return NetworkBudgetBuilder(policy).build(group_assets(assets))
