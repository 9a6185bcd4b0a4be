"""
Visual graph output models.

These are the node/edge/stat contracts consumed by the rendering layer.
All models serialize with camelCase keys.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EdgeKind(str, Enum):
    """Kinds of visual edges."""

    PARENT_CHILD = "parent-child"
    CROSS_GROUP = "cross-group"
    CROSS_COMMUNITY = "cross-community"


class ViewMode(str, Enum):
    """The three network views exposed to the dashboard."""

    COMMUNITY = "community"
    OPTIMIZED = "optimized"
    FULL = "full"


class VisualNode(_CamelModel):
    """
    A per-asset node, or a collapsed node standing in for a whole group.

    Individual nodes carry ``descendant_count``/``children_count``; aggregate
    nodes carry ``member_count`` and the summed totals instead.
    """

    id: str
    label: str
    size: float
    color: str
    group_key: str
    community_index: int
    is_group_aggregate: bool = False
    image_url: str | None = None

    # Individual asset nodes
    descendant_count: int | None = None
    children_count: int | None = None

    # Group aggregate nodes
    member_count: int | None = None
    descendant_total: int | None = None
    children_total: int | None = None


class TopMember(_CamelModel):
    """A highlighted member of a community."""

    id: str
    name: str
    descendant_count: int


class CommunityNode(_CamelModel):
    """One node per qualifying group in the community view."""

    id: str
    label: str
    size: float
    color: str
    group_key: str
    community_index: int
    member_count: int
    brightness: float = Field(..., ge=0.4, le=1.0)
    has_connections: bool
    avg_connections: float
    top_members: list[TopMember] = Field(default_factory=list)


class VisualEdge(_CamelModel):
    """An undirected-identity edge between two emitted nodes."""

    id: str
    source: str
    target: str
    weight: float
    kind: EdgeKind
    connection_count: int | None = None


class TierBreakdown(_CamelModel):
    """Group counts per size tier."""

    large: int = 0
    medium: int = 0
    small: int = 0
    tiny: int = 0


class GraphStats(_CamelModel):
    """Dataset-wide counts reported alongside every view."""

    total_assets: int = 0
    total_groups: int = 0
    visible_groups: int = 0
    largest_group: int = 0
    tier_breakdown: TierBreakdown = Field(default_factory=TierBreakdown)
    node_count: int = 0
    edge_count: int = 0

    # Optimized/full views only
    optimized_nodes: int | None = None
    optimized_edges: int | None = None
    filtered_communities: int | None = None


class CommunityView(_CamelModel):
    """Aggregated community rollup."""

    nodes: list[CommunityNode] = Field(default_factory=list)
    edges: list[VisualEdge] = Field(default_factory=list)
    stats: GraphStats = Field(default_factory=GraphStats)

    @property
    def is_empty(self) -> bool:
        return not self.nodes


class NetworkView(_CamelModel):
    """Per-asset network under a node/edge budget."""

    mode: ViewMode
    nodes: list[VisualNode] = Field(default_factory=list)
    edges: list[VisualEdge] = Field(default_factory=list)
    stats: GraphStats = Field(default_factory=GraphStats)

    @property
    def is_empty(self) -> bool:
        return not self.nodes
