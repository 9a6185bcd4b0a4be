"""
API request and response models.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storygraph.models.asset import AssetRecord


class AssetSummaryResponse(BaseModel):
    """Asset in API response format."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str | None = None
    group_key: str
    image_url: str | None = None
    parent_ids: list[str] = Field(default_factory=list)
    children_count: int
    descendant_count: int
    parent_count: int

    @classmethod
    def from_record(cls, record: AssetRecord) -> "AssetSummaryResponse":
        return cls(
            id=record.id,
            name=record.display_name,
            group_key=record.group_key,
            image_url=record.image_url,
            parent_ids=list(record.parent_ids),
            children_count=record.children_count,
            descendant_count=record.descendant_count,
            parent_count=record.parent_count,
        )


# =============================================================================
# Health Check Models
# =============================================================================


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = "healthy"
    version: str
    environment: str
    asset_source: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    detail: str | None = None
    code: str | None = None
