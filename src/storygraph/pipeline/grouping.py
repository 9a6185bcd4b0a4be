"""Grouping engine.

Partitions assets by collection key and computes per-group aggregates.
Group order is the order in which keys were first seen, and is kept as
an explicit list so community indices and colors are stable.
"""

from dataclasses import dataclass, field

import structlog

from storygraph.models.asset import AssetRecord
from storygraph.pipeline.tiers import SizeTier, classify

logger = structlog.get_logger(__name__)


@dataclass
class Group:
    """Assets sharing one collection key."""
    key: str
    ordinal: int
    members: list[AssetRecord] = field(default_factory=list)
    internal_connection_count: int = 0

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def tier(self) -> SizeTier:
        return classify(self.size)

    @property
    def has_connections(self) -> bool:
        if self.internal_connection_count > 0:
            return True
        return any(
            m.children_count > 0 or m.descendant_count > 0 for m in self.members
        )


@dataclass
class AssetGroups:
    """Result of one grouping pass.

    ``asset_index`` maps asset id to record and ``group_of`` maps asset id to
    its group key, so parent links resolve without scanning the input.
    """
    assets: list[AssetRecord] = field(default_factory=list)
    order: list[str] = field(default_factory=list)
    groups: dict[str, Group] = field(default_factory=dict)
    asset_index: dict[str, AssetRecord] = field(default_factory=dict)
    group_of: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.order)

    def __iter__(self):
        for key in self.order:
            yield self.groups[key]

    @property
    def sizes(self) -> list[int]:
        return [group.size for group in self]

    def resolve(self, asset_id: str) -> AssetRecord | None:
        """Look up an asset by id; dangling ids resolve to None."""
        return self.asset_index.get(asset_id)

    def group_for(self, asset_id: str) -> Group | None:
        key = self.group_of.get(asset_id)
        return self.groups[key] if key is not None else None


def group_assets(assets: list[AssetRecord]) -> AssetGroups:
    """Assign every asset to exactly one group and compute group aggregates.

    Args:
        assets: Asset records in source order.

    Returns:
        AssetGroups with groups in first-seen key order.
    """
    result = AssetGroups()
    duplicates = 0

    for asset in assets:
        # First record wins on a duplicate id
        if asset.id in result.asset_index:
            duplicates += 1
            continue
        result.assets.append(asset)
        result.asset_index[asset.id] = asset
        result.group_of[asset.id] = asset.group_key

        group = result.groups.get(asset.group_key)
        if group is None:
            group = Group(key=asset.group_key, ordinal=len(result.order))
            result.groups[asset.group_key] = group
            result.order.append(asset.group_key)
        group.members.append(asset)

    for group in result.groups.values():
        group.internal_connection_count = _count_internal_links(group, result)

    if duplicates:
        logger.warning("duplicate_assets_dropped", count=duplicates)

    logger.debug(
        "assets_grouped",
        assets=len(result.assets),
        groups=len(result.order),
    )
    return result


def _count_internal_links(group: Group, groups: AssetGroups) -> int:
    """Count parent links whose both endpoints belong to this group."""
    count = 0
    for member in group.members:
        for parent_id in member.parent_ids:
            if parent_id == member.id:
                continue
            if groups.group_of.get(parent_id) == group.key:
                count += 1
    return count
