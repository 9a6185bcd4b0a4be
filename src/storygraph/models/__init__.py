"""
Pydantic models for storygraph.

- Asset models for the indexed input records
- Graph models for the visual node/edge/stats output
- API models for HTTP response schemas
"""

from storygraph.models.asset import UNKNOWN_GROUP, AssetRecord
from storygraph.models.graph import (
    CommunityNode,
    CommunityView,
    EdgeKind,
    GraphStats,
    NetworkView,
    TierBreakdown,
    TopMember,
    ViewMode,
    VisualEdge,
    VisualNode,
)
from storygraph.models.api import AssetSummaryResponse, ErrorResponse, HealthResponse

__all__ = [
    # Asset models
    "UNKNOWN_GROUP",
    "AssetRecord",
    # Graph models
    "CommunityNode",
    "CommunityView",
    "EdgeKind",
    "GraphStats",
    "NetworkView",
    "TierBreakdown",
    "TopMember",
    "ViewMode",
    "VisualEdge",
    "VisualNode",
    # API models
    "AssetSummaryResponse",
    "ErrorResponse",
    "HealthResponse",
]
