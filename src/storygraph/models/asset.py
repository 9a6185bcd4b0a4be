"""
IP asset record model.

The canonical per-asset shape consumed by every graph view.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNKNOWN_GROUP = "unknown"


class AssetRecord(BaseModel):
    """
    An indexed IP asset.

    Records are immutable. ``parent_ids`` may reference assets that are not
    part of the loaded snapshot; those links are ignored downstream.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(..., min_length=1, description="IP asset identifier")
    group_key: str = Field(
        default=UNKNOWN_GROUP, description="Collection (token contract) address"
    )
    display_name: str | None = None
    image_url: str | None = None
    parent_ids: tuple[str, ...] = Field(default_factory=tuple)
    children_count: int = Field(default=0, ge=0)
    descendant_count: int = Field(default=0, ge=0)
    parent_count: int = Field(default=0, ge=0)
    is_group_aggregate: bool = False

    @field_validator("group_key", mode="before")
    @classmethod
    def default_group_key(cls, v: Any) -> Any:
        """Missing or empty collection keys fall into the unknown group."""
        return v if v else UNKNOWN_GROUP

    @field_validator("display_name", "image_url", mode="before")
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        return v if v else None

    @field_validator("parent_ids", mode="before")
    @classmethod
    def default_parent_ids(cls, v: Any) -> Any:
        return () if v is None else v

    @field_validator("children_count", "descendant_count", "parent_count", mode="before")
    @classmethod
    def default_count(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("is_group_aggregate", mode="before")
    @classmethod
    def default_flag(cls, v: Any) -> Any:
        return False if v is None else v

    @property
    def is_root(self) -> bool:
        """True when the asset has no parent links and no recorded parents."""
        return not self.parent_ids and self.parent_count == 0

    @classmethod
    def from_indexer(cls, raw: dict[str, Any]) -> "AssetRecord":
        """
        Build a record from a raw indexer row.

        Indexer rows carry ``ipId``, ``rootIpIds``, ``isGroup`` and a nested
        ``nftMetadata`` object holding the token contract, name and image.
        """
        metadata = raw.get("nftMetadata") or {}
        if not isinstance(metadata, dict):
            raise ValueError("nftMetadata must be an object")
        return cls(
            id=raw.get("ipId") or raw.get("id"),
            group_key=metadata.get("tokenContract") or raw.get("tokenContract"),
            display_name=metadata.get("name") or raw.get("name"),
            image_url=metadata.get("imageUrl") or raw.get("imageUrl"),
            parent_ids=raw.get("rootIpIds"),
            children_count=raw.get("childrenCount"),
            descendant_count=raw.get("descendantCount"),
            parent_count=raw.get("parentCount"),
            is_group_aggregate=raw.get("isGroup"),
        )

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "AssetRecord":
        """Accept either an indexer row or an already canonical record."""
        if "ipId" in raw or "nftMetadata" in raw or "rootIpIds" in raw:
            return cls.from_indexer(raw)
        return cls.model_validate(raw)
